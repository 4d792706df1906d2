# SPDX-License-Identifier: MIT
"""Drush make file encoding and writing.

Nested mappings are flattened into INI-style lines::

    core = 8.x
    projects[token][type] = module
    projects[drupal][patch][] = https://www.drupal.org/files/issues/fix.patch
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

from .assembler import Manifest
from .config import MakeConfig

logger = logging.getLogger(__name__)

# Values matching this are written bare; everything else is double-quoted.
BARE_VALUE = re.compile(r'^[^\s";=]+$')


def _format_key(keys: Sequence[str]) -> str:
    return keys[0] + "".join(f"[{key}]" for key in keys[1:])


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    if BARE_VALUE.match(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _encode_lines(value: Any, keys: list[str]) -> list[str]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        lines: list[str] = []
        for key, child in value.items():
            lines.extend(_encode_lines(child, keys + [str(key)]))
        return lines
    if isinstance(value, (list, tuple)):
        return [f"{_format_key(keys)}[] = {_format_value(item)}" for item in value]
    return [f"{_format_key(keys)} = {_format_value(value)}"]


def encode(data: Mapping[str, Any]) -> str:
    """Encode a nested mapping as a Drush make file.

    Top-level keys are separated by a blank line; None values and empty
    mappings produce no output.
    """
    blocks = []
    for key, value in data.items():
        lines = _encode_lines(value, [str(key)])
        if lines:
            blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n" if blocks else ""


def write_manifests(
    core: Optional[Manifest],
    main: Manifest,
    output_dir: str | Path,
    config: Optional[MakeConfig] = None,
) -> list[Path]:
    """Encode and write the make files.

    The core make file is only written when a core manifest exists.

    Returns:
        Paths of the files written, core make file first
    """
    config = config or MakeConfig()
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    targets = [(core, config.core_make_file), (main, config.make_file)]
    for manifest, filename in targets:
        if manifest is None:
            continue
        path = output_path / filename
        path.write_text(encode(manifest.to_dict()), encoding="utf-8")
        logger.info("Wrote %s", path)
        written.append(path)
    return written
