# SPDX-License-Identifier: MIT
"""Classification of locked packages into make file roles."""

from __future__ import annotations

import logging
from collections.abc import Collection
from enum import Enum
from typing import Optional

from .config import MakeConfig
from .lockfile import LockedPackage

logger = logging.getLogger(__name__)


class ManifestRole(Enum):
    """Section of the make file a package belongs to.

    The value is the project type written to the make file.
    """

    CORE = "core"
    MODULE = "module"
    THEME = "theme"
    PROFILE = "profile"
    LIBRARY = "library"
    IGNORED = "ignored"


PROJECT_ROLES = {
    "drupal-core": ManifestRole.CORE,
    "drupal-module": ManifestRole.MODULE,
    "drupal-theme": ManifestRole.THEME,
    "drupal-profile": ManifestRole.PROFILE,
}

# Bucket order of the projects section
PROJECT_ORDER = (
    ManifestRole.CORE,
    ManifestRole.MODULE,
    ManifestRole.THEME,
    ManifestRole.PROFILE,
)


def classify(
    package: LockedPackage,
    requirements: Collection[str] = frozenset(),
    config: Optional[MakeConfig] = None,
) -> ManifestRole:
    """Decide which make file role a locked package has.

    Platform projects must carry both the reserved vendor prefix and one of
    the platform project types. Libraries are only kept when the root project
    requires them directly, by full or bare name; transitive libraries are
    ignored.

    Args:
        package: The locked package
        requirements: Names the root project requires directly
        config: Conversion settings

    Returns:
        The package's role, ManifestRole.IGNORED if it has none
    """
    config = config or MakeConfig()

    if package.name.startswith(config.namespace) and package.type in PROJECT_ROLES:
        return PROJECT_ROLES[package.type]

    if package.type in config.library_types and (
        package.name in requirements or package.bare_name in requirements
    ):
        return ManifestRole.LIBRARY

    logger.debug("Ignoring %s (%s)", package.name, package.type)
    return ManifestRole.IGNORED
