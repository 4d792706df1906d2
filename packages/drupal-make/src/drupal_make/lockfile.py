# SPDX-License-Identifier: MIT
"""Reading Composer lock data and root requirements.

The converter never resolves anything itself; it only reads what Composer
already wrote to composer.lock and composer.json.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator, ValidationError

from .errors import MakeError

logger = logging.getLogger(__name__)

# Only the parts of composer.lock the converter reads are constrained here.
LOCK_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["packages"],
    "properties": {
        "packages": {"type": "array", "items": {"$ref": "#/$defs/package"}},
        "packages-dev": {
            "type": ["array", "null"],
            "items": {"$ref": "#/$defs/package"},
        },
    },
    "$defs": {
        "package": {
            "type": "object",
            "required": ["name", "version"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "version": {"type": "string", "minLength": 1},
                "type": {"type": "string"},
                "source": {
                    "type": "object",
                    "properties": {
                        "url": {"type": "string"},
                        "reference": {"type": "string"},
                    },
                },
                "extra": {"type": "object"},
            },
        }
    },
}


class LockFileError(MakeError):
    """Raised when composer.lock or composer.json cannot be read.

    Attributes:
        errors: Structured schema violations, if any
    """

    def __init__(self, message: str, errors: Optional[list[ValidationErrorDetail]] = None):
        self.errors = errors or []
        if self.errors:
            message += f": {self.errors[0].field}: {self.errors[0].message}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Details about a single lock file validation error.

    Attributes:
        field: Path to the invalid field (e.g., "packages[3].name")
        message: Human-readable error message
    """

    field: str
    message: str


@dataclass(frozen=True)
class PackageSource:
    """VCS source recorded for a locked package."""

    url: Optional[str] = None
    reference: Optional[str] = None


@dataclass(frozen=True)
class LockedPackage:
    """One resolved dependency from composer.lock.

    Attributes:
        name: Full package name including vendor (e.g. "drupal/token")
        type: Composer package type
        version: Resolved version string
        source: VCS source, if the lock entry has one
        patches_applied: Ordered (label, url) pairs from extra.patches_applied
    """

    name: str
    type: str
    version: str
    source: Optional[PackageSource] = None
    patches_applied: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def bare_name(self) -> str:
        """Package name without its vendor prefix."""
        return self.name.split("/", 1)[-1]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LockedPackage":
        """Create a LockedPackage from one entry of a lock file packages array."""
        source = None
        raw_source = data.get("source")
        if isinstance(raw_source, dict):
            source = PackageSource(
                url=raw_source.get("url") or None,
                reference=raw_source.get("reference") or None,
            )

        patches = (data.get("extra") or {}).get("patches_applied") or {}
        if isinstance(patches, dict):
            patches_applied = tuple((str(label), url) for label, url in patches.items())
        else:
            patches_applied = tuple((str(i), url) for i, url in enumerate(patches))

        return cls(
            name=data["name"],
            type=data.get("type", "library"),
            version=data["version"],
            source=source,
            patches_applied=patches_applied,
        )


def _field_path(error: ValidationError) -> str:
    """Convert a jsonschema error path to a readable field path."""
    if not error.absolute_path:
        return "<root>"
    parts = []
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif parts:
            parts.append(f".{part}")
        else:
            parts.append(str(part))
    return "".join(parts)


def validate_lock_data(lock: Any) -> list[ValidationErrorDetail]:
    """Validate parsed lock data against LOCK_SCHEMA.

    Returns:
        Validation errors sorted by field path (empty if valid)
    """
    validator = Draft202012Validator(LOCK_SCHEMA)
    errors = [
        ValidationErrorDetail(field=_field_path(e), message=e.message)
        for e in validator.iter_errors(lock)
    ]
    return sorted(errors, key=lambda e: e.field)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"{path.name} not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise LockFileError(f"Invalid JSON in {path.name}: {e}") from e


def packages_from_lock_data(
    lock: dict[str, Any], include_dev: bool = False
) -> list[LockedPackage]:
    """Build the locked-package sequence from parsed composer.lock data.

    Raises:
        LockFileError: If the data does not match the lock file structure
    """
    errors = validate_lock_data(lock)
    if errors:
        raise LockFileError("Invalid lock data", errors)

    entries = list(lock["packages"])
    if include_dev:
        entries.extend(lock.get("packages-dev") or [])

    packages = [LockedPackage.from_dict(entry) for entry in entries]
    logger.debug("Read %d locked package(s)", len(packages))
    return packages


def load_lock(path: str | Path, include_dev: bool = False) -> list[LockedPackage]:
    """Read composer.lock and return its locked packages in file order.

    Raises:
        FileNotFoundError: If the lock file does not exist
        LockFileError: If the file is not valid JSON or not a lock file
    """
    return packages_from_lock_data(_read_json(Path(path)), include_dev=include_dev)


def load_composer(path: str | Path) -> dict[str, Any]:
    """Read composer.json."""
    composer = _read_json(Path(path))
    if not isinstance(composer, dict):
        raise LockFileError(f"{Path(path).name} must contain a JSON object")
    return composer


def direct_requirements(composer: dict[str, Any]) -> frozenset[str]:
    """Names the root project requires directly (require-dev excluded)."""
    require = composer.get("require") or {}
    if not isinstance(require, dict):
        raise LockFileError("composer.json 'require' must be an object")
    return frozenset(require)


def load_direct_requirements(path: str | Path) -> frozenset[str]:
    """Read composer.json and return its direct requirement names."""
    return direct_requirements(load_composer(path))
