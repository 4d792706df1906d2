# SPDX-License-Identifier: MIT
"""Drush make file generation from Composer lock data.

This package converts the packages Composer resolved into the make files
drupal.org's packaging system builds distributions from:
- Classification of lock entries into core, module, theme, profile and library
- Git download descriptors with drupal.org style tags
- Assembly of the main and core make manifests
- Encoding of manifests in Drush make INI syntax

Example:
    >>> from drupal_make import assemble, encode, load_lock, load_direct_requirements
    >>>
    >>> packages = load_lock("composer.lock")
    >>> core, main = assemble(packages, load_direct_requirements("composer.json"))
    >>> core.core
    '8.x'
    >>> print(encode(main.to_dict()))
"""

__version__ = "0.1.0"

from .assembler import (
    LibraryEntry,
    Manifest,
    ProjectEntry,
    assemble,
    normalize,
)
from .classifier import ManifestRole, classify
from .config import MakeConfig, MakeConfigError
from .descriptor import DownloadDescriptor, synthesize
from .encoder import encode, write_manifests
from .errors import AmbiguousRoleCollision, MakeError, MalformedLockEntry
from .lockfile import (
    LockedPackage,
    LockFileError,
    PackageSource,
    direct_requirements,
    load_direct_requirements,
    load_lock,
    packages_from_lock_data,
)
from .versions import core_version_line, display_version, to_legacy_tag

__all__ = [
    # Lock data
    "LockedPackage",
    "PackageSource",
    "load_lock",
    "load_direct_requirements",
    "direct_requirements",
    "packages_from_lock_data",
    # Conversion
    "ManifestRole",
    "classify",
    "DownloadDescriptor",
    "synthesize",
    "ProjectEntry",
    "LibraryEntry",
    "Manifest",
    "assemble",
    "normalize",
    # Versions
    "to_legacy_tag",
    "display_version",
    "core_version_line",
    # Output
    "encode",
    "write_manifests",
    # Configuration
    "MakeConfig",
    # Errors
    "MakeError",
    "MakeConfigError",
    "MalformedLockEntry",
    "LockFileError",
    "AmbiguousRoleCollision",
]
