"""
cmap2opml.config.defaults - Default configuration values.
"""

CONFIG_FILENAME = ".cmap2opml.toml"

ENV_PREFIX = "CMAP2OPML_"

DEFAULT_CONFIG = {
    "roots": {
        # Label substrings (case-insensitive) that mark a likely root concept
        "preferred_names": ["root", "main", "center"],
    },
    "output": {
        "indent": True,
        "extension": ".opml",
        "max_filename_length": 100,
        "default_title": "Concept Map",
    },
}
