"""Allow running as ``python -m cmap2opml``."""

import sys

from cmap2opml.cli import main

sys.exit(main())
