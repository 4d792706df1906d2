# SPDX-License-Identifier: MIT
"""Exceptions raised while converting a lock file into make files."""

from __future__ import annotations


class MakeError(Exception):
    """Base exception for make file generation errors."""

    pass


class MalformedLockEntry(MakeError):
    """Raised when an accepted lock entry lacks a required source field.

    Attributes:
        package_name: Name of the offending lock entry
        field: Dotted path of the missing field (e.g. "source.url")
    """

    def __init__(self, package_name: str, field: str):
        self.package_name = package_name
        self.field = field
        super().__init__(f"Lock entry {package_name!r} is missing required field '{field}'")


class AmbiguousRoleCollision(UserWarning):
    """Two lock entries reduced to the same manifest key.

    Never raised; the assembler logs it and keeps the last entry seen.
    """

    def __init__(self, key: str, previous: str, replacement: str):
        self.key = key
        self.previous = previous
        self.replacement = replacement
        super().__init__(
            f"Manifest key {key!r} from {previous!r} is overwritten by {replacement!r}"
        )
