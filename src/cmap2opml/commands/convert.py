"""
cmap2opml.commands.convert - Convert a CXL concept map to OPML.

- `cmap2opml convert map.cxl` - one outline rooted at the detected root
- `cmap2opml convert map.cxl --root ID` - one outline rooted at ID
- `cmap2opml convert map.cxl --all` - one outline file per concept
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from cmap2opml.config import load_config, validate_config
from cmap2opml.core.converter import ConversionResult, convert_map
from cmap2opml.core.models import ConceptMap
from cmap2opml.generators.opml import write_opml
from cmap2opml.parsers.cxl import load_cxl
from cmap2opml.utilities.filenames import safe_filename, unique_path


def run(args: argparse.Namespace) -> int:
    """Run the convert command."""
    config = load_config(getattr(args, "config", None))
    errors = validate_config(config)
    if errors:
        for error in errors:
            print(f"Config error: {error}", file=sys.stderr)
        return 1

    input_path = Path(args.input)
    cmap = load_cxl(input_path)
    if cmap.is_empty():
        print(f"Error: {input_path} contains no concepts", file=sys.stderr)
        return 1

    all_concepts = getattr(args, "all", False)
    root_id = getattr(args, "root", None)
    if all_concepts and root_id:
        print("Warning: --root is ignored with --all", file=sys.stderr)
        root_id = None

    result = convert_map(
        cmap,
        root_id=root_id,
        all_concepts=all_concepts,
        preferred_names=config["roots"]["preferred_names"],
    )

    if all_concepts:
        return _write_all(result, cmap, input_path, config, args)
    return _write_single(result, cmap, input_path, config, args)


def _write_single(
    result: ConversionResult,
    cmap: ConceptMap,
    input_path: Path,
    config: dict[str, Any],
    args: argparse.Namespace,
) -> int:
    """Write the single-root outline to the requested or default path."""
    output_cfg = config["output"]
    outline = result.outlines[0]

    if result.used_fallback:
        print(
            f"Warning: root '{result.requested_root}' not found, "
            f"using '{outline.label}' ({result.root_id})",
            file=sys.stderr,
        )

    output = getattr(args, "output", None)
    output_path = Path(output) if output else input_path.with_suffix(output_cfg["extension"])

    write_opml(
        outline,
        output_path,
        cmap.metadata,
        title=getattr(args, "title", None),
        indent=output_cfg["indent"],
        default_title=output_cfg["default_title"],
    )

    if not getattr(args, "quiet", False):
        print(f"Root: {outline.label} ({result.root_id})")
        print(f"Wrote {output_path}")
    return 0


def _write_all(
    result: ConversionResult,
    cmap: ConceptMap,
    input_path: Path,
    config: dict[str, Any],
    args: argparse.Namespace,
) -> int:
    """Write one outline file per concept into the output directory."""
    output_cfg = config["output"]
    output_dir = getattr(args, "output_dir", None)
    if output_dir:
        output_dir = Path(output_dir)
    else:
        output_dir = input_path.parent / f"{input_path.stem}_concepts"

    used: set[str] = set()
    written = 0
    for outline in result.outlines:
        stem = safe_filename(
            outline.label or "",
            fallback=outline.concept_id or "concept",
            max_length=output_cfg["max_filename_length"],
        )
        path = unique_path(output_dir, stem, output_cfg["extension"], used)
        write_opml(
            outline,
            path,
            cmap.metadata,
            title=getattr(args, "title", None) or outline.label,
            indent=output_cfg["indent"],
            default_title=output_cfg["default_title"],
        )
        written += 1

    for concept_id in result.skipped:
        print(f"Skipped concept: {concept_id}", file=sys.stderr)

    if not getattr(args, "quiet", False):
        print(f"Wrote {written} file(s) to {output_dir}")
    return 1 if result.skipped else 0
