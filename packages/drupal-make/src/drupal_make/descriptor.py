# SPDX-License-Identifier: MIT
"""Download descriptors pointing make files at git sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .classifier import ManifestRole
from .errors import MalformedLockEntry
from .lockfile import LockedPackage
from .versions import to_legacy_tag

# Composer's branch-alias prefix, see https://getcomposer.org/doc/articles/aliases.md
BRANCH_PREFIX = "dev-"


@dataclass(frozen=True)
class DownloadDescriptor:
    """Git coordinates of one make file project or library.

    Exactly one of branch or tag is set. A branch is always paired with a
    revision.

    Attributes:
        url: Repository URL
        branch: Development branch to check out
        tag: Release tag to check out
        revision: Commit pinned on the branch
        patches: Patch URLs applied after download, in order
        type: Download type, always "git"
    """

    url: str
    branch: Optional[str] = None
    tag: Optional[str] = None
    revision: Optional[str] = None
    patches: tuple[str, ...] = field(default_factory=tuple)
    type: str = "git"

    def __post_init__(self) -> None:
        if (self.branch is None) == (self.tag is None):
            raise ValueError("Exactly one of branch or tag must be set")
        if self.branch is not None and self.revision is None:
            raise ValueError("A branch download requires a revision")

    @property
    def is_dev(self) -> bool:
        """Return True if this points at a development branch."""
        return self.branch is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the download section of a make file entry."""
        download: dict[str, Any] = {"type": self.type, "url": self.url}
        if self.branch is not None:
            download["branch"] = self.branch
        if self.tag is not None:
            download["tag"] = self.tag
        if self.revision is not None:
            download["revision"] = self.revision
        return download


def synthesize(package: LockedPackage, role: ManifestRole) -> DownloadDescriptor:
    """Build the git download descriptor for a classified package.

    Dev versions become branch + revision. Core keeps its version as the tag;
    every other release is rewritten to drupal.org tag form, so 8.1.0-alpha1
    becomes 8.x-1.0-alpha1.

    Raises:
        MalformedLockEntry: If the lock entry has no source URL or reference
    """
    source = package.source
    if source is None or not source.url:
        raise MalformedLockEntry(package.name, "source.url")
    if not source.reference:
        raise MalformedLockEntry(package.name, "source.reference")

    branch = tag = revision = None
    version = package.version
    if "dev" in version:
        # Versions without the prefix may already use a -dev suffix.
        branch = version[len(BRANCH_PREFIX):] if version.startswith(BRANCH_PREFIX) else version
        revision = source.reference
    elif role is ManifestRole.CORE:
        tag = version
    else:
        tag = to_legacy_tag(version)

    return DownloadDescriptor(
        url=source.url,
        branch=branch,
        tag=tag,
        revision=revision,
        patches=tuple(url for _, url in package.patches_applied),
    )
