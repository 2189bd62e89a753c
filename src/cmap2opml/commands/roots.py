"""
cmap2opml.commands.roots - List root candidates of a concept map.

Root detection is a heuristic; this command shows every candidate and
which one `convert` would pick, so the choice can be overridden with --root.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from cmap2opml.config import load_config
from cmap2opml.core.roots import find_root_candidates, select_root
from cmap2opml.parsers.cxl import load_cxl


def run(args: argparse.Namespace) -> int:
    """Run the roots command."""
    config = load_config(getattr(args, "config", None))
    cmap = load_cxl(Path(args.input))

    if cmap.is_empty():
        print(f"Error: {args.input} contains no concepts", file=sys.stderr)
        return 1

    candidates = find_root_candidates(cmap.concepts, cmap.connections)
    selected = select_root(
        cmap.concepts,
        cmap.connections,
        preferred_names=config["roots"]["preferred_names"],
    )

    if getattr(args, "json_output", False):
        data = {
            "selected": selected,
            "candidates": [{"id": c.id, "label": c.label} for c in candidates],
        }
        print(json.dumps(data, indent=2))
        return 0

    if not candidates:
        print("No root candidates (every concept is a connection target).")
        label = next(c.label for c in cmap.concepts if c.id == selected)
        print(f"Fallback root: {label} ({selected})")
        return 0

    print(f"Root candidates: {len(candidates)}")
    for concept in candidates:
        marker = "*" if concept.id == selected else " "
        print(f" {marker} {concept.label} ({concept.id})")
    return 0
