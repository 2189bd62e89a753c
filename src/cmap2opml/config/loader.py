"""
cmap2opml.config.loader - Configuration discovery, loading and merging.

Configuration comes from three layers, later ones winning:
DEFAULT_CONFIG, the ``.cmap2opml.toml`` file, and ``CMAP2OPML_*``
environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError as TOMLParseError

from cmap2opml.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Find ``.cmap2opml.toml`` in ``start_dir`` or any parent directory.

    Args:
        start_dir: Directory to start from (defaults to cwd)

    Returns:
        Path to the config file, or None if not found
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python dicts and lists."""
    return tomlkit.parse(content).unwrap()


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """
    Parse an environment variable value into a typed Python value.

    JSON arrays and objects become lists and dicts, ``true``/``false``
    become booleans, integers become ints. Anything else (including
    malformed JSON) is returned unchanged.
    """
    stripped = value.strip()
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply ``CMAP2OPML_<SECTION>_<KEY>`` environment variables to ``config``.

    ``CMAP2OPML_OUTPUT_MAX_FILENAME_LENGTH=80`` sets
    ``config["output"]["max_filename_length"] = 80``. Sections are created
    as needed. ``config`` is modified in place and returned.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration merged over the defaults.

    Args:
        config_path: Explicit config file. When None, the file is searched
            for from the current directory upwards; no file is not an error.

    Returns:
        The merged configuration dictionary

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist
        ValueError: If the file is not valid TOML
    """
    if config_path is None:
        config_path = find_config_file()
    elif not Path(config_path).is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    user_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            user_config = parse_toml(Path(config_path).read_text(encoding="utf-8"))
        except TOMLParseError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    config = merge_configs(DEFAULT_CONFIG, user_config)
    return _apply_env_overrides(config)


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Check configuration value types.

    Returns:
        List of error messages (empty when valid)
    """
    errors: list[str] = []

    roots = config.get("roots", {})
    names = roots.get("preferred_names", [])
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        errors.append("roots.preferred_names must be a list of strings")

    output = config.get("output", {})
    if not isinstance(output.get("indent", True), bool):
        errors.append("output.indent must be true or false")
    length = output.get("max_filename_length", 100)
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        errors.append("output.max_filename_length must be a positive integer")
    extension = output.get("extension", ".opml")
    if not isinstance(extension, str) or not extension.startswith("."):
        errors.append("output.extension must be a string starting with '.'")
    if not isinstance(output.get("default_title", ""), str):
        errors.append("output.default_title must be a string")

    return errors


def default_config_document() -> tomlkit.TOMLDocument:
    """Build a commented TOML document holding the default configuration."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("cmap2opml configuration"))
    doc.add(tomlkit.nl())

    roots = tomlkit.table()
    roots.add(tomlkit.comment("Label substrings (case-insensitive) that mark a likely root"))
    roots.add("preferred_names", list(DEFAULT_CONFIG["roots"]["preferred_names"]))
    doc.add("roots", roots)

    output = tomlkit.table()
    for key, value in DEFAULT_CONFIG["output"].items():
        output.add(key, value)
    doc.add("output", output)

    return doc
