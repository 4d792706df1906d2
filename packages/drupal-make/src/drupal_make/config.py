# SPDX-License-Identifier: MIT
"""Conversion settings for make file generation.

Settings are read from the ``extra.drupal-make`` section of composer.json or
from the ``[drupal-make]`` table of a TOML file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import MakeError

NAMESPACE = "drupal/"

# drupal.org's core repository; patches only apply against its history
CORE_URL = "https://git.drupal.org/project/drupal.git"

CORE_KEY = "core-package"

LIBRARY_TYPES = ("drupal-library", "bower-asset", "npm-asset")

API_VERSION = 2

CONFIG_SECTION = "drupal-make"


class MakeConfigError(MakeError):
    """Raised when make configuration is invalid."""

    pass


@dataclass(frozen=True)
class MakeConfig:
    """Configuration for lock file conversion.

    Attributes:
        namespace: Vendor prefix reserved for platform projects
        core_url: Repository URL forced onto the core project
        core_key: Manifest key of the core project
        library_types: Package types eligible for the libraries section
        api_version: Drush make API version
        projects_subdir: Default subdirectory for contributed projects
        core_make_file: File name of the core make file
        make_file: File name of the main make file
        include_dev: Whether packages-dev lock entries are converted too
    """

    namespace: str = NAMESPACE
    core_url: str = CORE_URL
    core_key: str = CORE_KEY
    library_types: tuple[str, ...] = LIBRARY_TYPES
    api_version: int = API_VERSION
    projects_subdir: str = "contrib"
    core_make_file: str = "drupal-org-core.make"
    make_file: str = "drupal-org.make"
    include_dev: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.namespace.endswith("/"):
            raise MakeConfigError(f"namespace must end with '/': {self.namespace!r}")
        if not self.core_key:
            raise MakeConfigError("core_key is required")
        if self.make_file == self.core_make_file:
            raise MakeConfigError("make_file and core_make_file must differ")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MakeConfig":
        """Create MakeConfig from a mapping of setting names to values.

        Raises:
            MakeConfigError: On unknown keys or badly typed values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise MakeConfigError(f"Unknown setting(s): {', '.join(unknown)}")

        values = dict(data)
        if "library_types" in values:
            library_types = values["library_types"]
            if not isinstance(library_types, list) or not all(
                isinstance(t, str) for t in library_types
            ):
                raise MakeConfigError("library_types must be a list of strings")
            values["library_types"] = tuple(library_types)
        if "api_version" in values and not isinstance(values["api_version"], int):
            raise MakeConfigError("api_version must be an integer")
        if "include_dev" in values and not isinstance(values["include_dev"], bool):
            raise MakeConfigError("include_dev must be a boolean")

        return cls(**values)

    @classmethod
    def from_composer_dict(cls, composer: dict[str, Any]) -> "MakeConfig":
        """Create MakeConfig from the extra section of a parsed composer.json."""
        section = composer.get("extra", {}).get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            raise MakeConfigError(f"extra.{CONFIG_SECTION} must be an object")
        return cls.from_dict(section)

    @classmethod
    def from_toml(cls, path: str | Path) -> "MakeConfig":
        """Create MakeConfig from the [drupal-make] table of a TOML file.

        Raises:
            MakeConfigError: If the file is not valid TOML
            FileNotFoundError: If the file does not exist
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise MakeConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_dict(data.get(CONFIG_SECTION, {}))

