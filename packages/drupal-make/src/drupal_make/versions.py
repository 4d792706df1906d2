# SPDX-License-Identifier: MIT
"""Conversion between semantic versions and drupal.org legacy tags.

drupal.org tags contributed projects as ``<core>.x-<major>.<minor>[-extra]``
(e.g. ``8.x-1.0-alpha1``) while Composer reports them as plain semantic
versions (``8.1.0-alpha1``). Make files want a shorter display version again
(``8.1``). Both directions work on parsed components.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

RELEASE_PATTERN = re.compile(r"^(?P<major>\d+)\.(?P<rest>.+)$")

LEGACY_TAG_PATTERN = re.compile(
    r"^(?P<core>\d+)\.x-(?P<major>\d+)\.(?P<patch>\d+)(?:-(?P<suffix>.+))?$"
)

PLAIN_VERSION_PATTERN = re.compile(r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


@dataclass(frozen=True, slots=True)
class Release:
    """A release version split after its leading major component.

    Attributes:
        major: Leading numeric component
        rest: Everything after the first dot, suffix included
    """

    major: str
    rest: str


@dataclass(frozen=True, slots=True)
class LegacyTag:
    """A parsed ``<core>.x-<major>.<patch>[-suffix]`` tag."""

    core: str
    major: str
    patch: str
    suffix: Optional[str] = None

    def __str__(self) -> str:
        tag = f"{self.core}.x-{self.major}.{self.patch}"
        if self.suffix:
            tag += f"-{self.suffix}"
        return tag


def parse_release(version: str) -> Optional[Release]:
    """Split a version string into its major component and the remainder.

    Examples:
        >>> parse_release("8.1.0-alpha1")
        Release(major='8', rest='1.0-alpha1')
        >>> parse_release("dev-main") is None
        True
    """
    match = RELEASE_PATTERN.match(version)
    if not match:
        return None
    return Release(major=match.group("major"), rest=match.group("rest"))


def parse_legacy_tag(tag: str) -> Optional[LegacyTag]:
    """Parse a drupal.org legacy tag, or return None if it is not one."""
    match = LEGACY_TAG_PATTERN.match(tag)
    if not match:
        return None
    return LegacyTag(
        core=match.group("core"),
        major=match.group("major"),
        patch=match.group("patch"),
        suffix=match.group("suffix"),
    )


def to_legacy_tag(version: str) -> str:
    """Rewrite a semantic version into drupal.org tag form.

    Examples:
        >>> to_legacy_tag("8.1.0-alpha1")
        '8.x-1.0-alpha1'
        >>> to_legacy_tag("10.2.3")
        '10.x-2.3'
    """
    release = parse_release(version)
    if release is None:
        return f"{version[:1]}.x-{version[2:]}"
    return f"{release.major}.x-{release.rest}"


def collapse_legacy_tag(tag: str) -> str:
    """Turn ``<core>.x-<major>.0`` into ``<core>.<major>.0``.

    Only fires when the patch component is exactly ``0`` and no suffix
    follows; every other string is returned unchanged. The whole tag is
    matched, so ``8.x-1.0-alpha1`` stays as is where a substring search
    for ``8.x-1.0`` would have produced ``8.1-alpha1``.
    """
    legacy = parse_legacy_tag(tag)
    if legacy is None or legacy.patch != "0" or legacy.suffix is not None:
        return tag
    return f"{legacy.core}.{legacy.major}.0"


def trim_zero_patch(version: str) -> str:
    """Turn ``X.Y.0`` into ``X.Y``; anything else is returned unchanged."""
    match = PLAIN_VERSION_PATTERN.match(version)
    if not match or match.group("patch") != "0":
        return version
    return f"{match.group('major')}.{match.group('minor')}"


def display_version(tag: str) -> str:
    """Derive the make file version of a contributed project from its tag.

    Examples:
        >>> display_version("8.x-1.0")
        '8.1'
        >>> display_version("8.x-2.3")
        '8.x-2.3'
        >>> display_version("8.x-1.0-alpha1")
        '8.x-1.0-alpha1'
    """
    return trim_zero_patch(collapse_legacy_tag(tag))


def core_version_line(version: str) -> str:
    """Return the ``<major>.x`` core compatibility line for a core version."""
    match = re.search(r"\d+", version)
    major = match.group(0) if match else version[:1]
    return f"{major}.x"
