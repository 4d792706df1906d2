# SPDX-License-Identifier: MIT
"""Assembly of classified packages into core and main make manifests.

Composer lock entries are classified, given git download descriptors and
grouped into the nested structure Drush make expects. The core project is
split into its own manifest; the remaining contributed projects are reduced
to bare display versions.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Optional, TypeVar, Union

from .classifier import PROJECT_ORDER, ManifestRole, classify
from .config import MakeConfig
from .descriptor import DownloadDescriptor, synthesize
from .errors import AmbiguousRoleCollision
from .lockfile import LockedPackage
from .versions import core_version_line, display_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectEntry:
    """A core, module, theme or profile entry of the projects section.

    Attributes:
        role: Make file role (never LIBRARY or IGNORED)
        name: Key of the entry in the projects section
        descriptor: Git download, dropped once a display version is known
        display_version: Bare version used instead of the download
        package: Composer package the entry came from
    """

    role: ManifestRole
    name: str
    descriptor: Optional[DownloadDescriptor]
    display_version: Optional[str] = None
    package: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the make file representation of this project."""
        entry: dict[str, Any] = {"type": self.role.value}
        if self.role is ManifestRole.CORE and self.descriptor and self.descriptor.tag:
            entry["version"] = self.descriptor.tag
        elif self.display_version is not None:
            entry["version"] = self.display_version
        elif self.descriptor is not None:
            entry["download"] = self.descriptor.to_dict()
        if self.descriptor is not None and self.descriptor.patches:
            entry["patch"] = list(self.descriptor.patches)
        return entry


@dataclass(frozen=True)
class LibraryEntry:
    """An entry of the libraries section; always keeps its download."""

    name: str
    descriptor: DownloadDescriptor
    package: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the make file representation of this library."""
        entry: dict[str, Any] = {
            "type": ManifestRole.LIBRARY.value,
            "download": self.descriptor.to_dict(),
        }
        if self.descriptor.patches:
            entry["patch"] = list(self.descriptor.patches)
        return entry


@dataclass(frozen=True)
class Manifest:
    """One Drush make file.

    Attributes:
        core: Core compatibility line (e.g. "8.x"), None without a core package
        api: Drush make API version
        defaults: Default settings, None for the core manifest
        projects: Project entries keyed by name, in section order
        libraries: Library entries keyed by bare name
    """

    core: Optional[str]
    api: int
    projects: dict[str, ProjectEntry] = field(default_factory=dict)
    libraries: dict[str, LibraryEntry] = field(default_factory=dict)
    defaults: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the nested mapping handed to the make file encoder."""
        data: dict[str, Any] = {"core": self.core, "api": self.api}
        if self.defaults is not None:
            data["defaults"] = self.defaults
        data["projects"] = {key: entry.to_dict() for key, entry in self.projects.items()}
        if self.libraries:
            data["libraries"] = {key: entry.to_dict() for key, entry in self.libraries.items()}
        return {key: value for key, value in data.items() if value is not None}


Entry = TypeVar("Entry", bound=Union[ProjectEntry, LibraryEntry])


def _put(section: dict[str, Entry], key: str, entry: Entry) -> None:
    """Store an entry, logging when it replaces an earlier one."""
    previous = section.get(key)
    if previous is not None:
        logger.warning("%s", AmbiguousRoleCollision(key, previous.package, entry.package))
    section[key] = entry


def normalize(projects: dict[str, ProjectEntry]) -> dict[str, ProjectEntry]:
    """Replace tagged downloads of contributed projects with display versions.

    Dev branches and the core project keep their downloads. Patches of
    collapsed entries are dropped along with the download.
    """
    normalized: dict[str, ProjectEntry] = {}
    for key, entry in projects.items():
        descriptor = entry.descriptor
        if (
            entry.role is not ManifestRole.CORE
            and descriptor is not None
            and descriptor.type == "git"
            and descriptor.tag is not None
        ):
            entry = replace(entry, descriptor=None, display_version=display_version(descriptor.tag))
        normalized[key] = entry
    return normalized


def assemble(
    packages: Iterable[LockedPackage],
    requirements: Collection[str] = frozenset(),
    config: Optional[MakeConfig] = None,
) -> tuple[Optional[Manifest], Manifest]:
    """Convert locked packages into the core and main make manifests.

    Args:
        packages: Locked packages in lock file order
        requirements: Names the root project requires directly
        config: Conversion settings

    Returns:
        (core manifest or None if no core package is locked, main manifest)

    Raises:
        MalformedLockEntry: If an accepted package lacks source.url or
            source.reference; no manifest is produced in that case
    """
    config = config or MakeConfig()

    # Drush make creates a new group whenever the project type changes, so
    # projects are collected per role and concatenated in PROJECT_ORDER.
    buckets: dict[ManifestRole, dict[str, ProjectEntry]] = {role: {} for role in PROJECT_ORDER}
    libraries: dict[str, LibraryEntry] = {}
    core_line: Optional[str] = None

    for package in packages:
        role = classify(package, requirements, config)
        if role is ManifestRole.IGNORED:
            continue

        descriptor = synthesize(package, role)
        if role is ManifestRole.LIBRARY:
            key = package.bare_name
            _put(libraries, key, LibraryEntry(key, descriptor, package=package.name))
            continue

        if role is ManifestRole.CORE:
            key = config.core_key
            core_line = core_version_line(package.version)
        else:
            key = package.name[len(config.namespace):]
        _put(buckets[role], key, ProjectEntry(role, key, descriptor, package=package.name))

    # The core project never shares the projects section of the main manifest.
    projects: dict[str, ProjectEntry] = {}
    for role in PROJECT_ORDER:
        if role is ManifestRole.CORE:
            continue
        for key, entry in buckets[role].items():
            _put(projects, key, entry)

    core_manifest = None
    core_entry = buckets[ManifestRole.CORE].get(config.core_key)
    if core_entry is not None and core_entry.descriptor is not None:
        core_entry = replace(
            core_entry, descriptor=replace(core_entry.descriptor, url=config.core_url)
        )
        core_manifest = Manifest(
            core=core_line,
            api=config.api_version,
            projects={config.core_key: core_entry},
        )

    main_manifest = Manifest(
        core=core_line,
        api=config.api_version,
        defaults={"projects": {"subdir": config.projects_subdir}},
        projects=normalize(projects),
        libraries=libraries,
    )
    logger.debug(
        "Assembled %d project(s) and %d library(ies)",
        len(main_manifest.projects),
        len(main_manifest.libraries),
    )
    return core_manifest, main_manifest
