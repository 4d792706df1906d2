# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for drupal-make tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from click.testing import CliRunner

from drupal_make.lockfile import LockedPackage


def lock_entry(
    name: str,
    type: str,
    version: str,
    url: Optional[str] = "https://git.example.com/project.git",
    reference: Optional[str] = "0123456789abcdef",
    patches: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Build one composer.lock packages entry."""
    entry: dict[str, Any] = {"name": name, "type": type, "version": version}
    source = {}
    if url is not None:
        source["url"] = url
    if reference is not None:
        source["reference"] = reference
    if source:
        entry["source"] = {"type": "git", **source}
    if patches:
        entry["extra"] = {"patches_applied": patches}
    return entry


@pytest.fixture
def make_package() -> Callable[..., LockedPackage]:
    """Factory for LockedPackage instances built from lock entries."""

    def factory(name: str, type: str, version: str, **kwargs: Any) -> LockedPackage:
        return LockedPackage.from_dict(lock_entry(name, type, version, **kwargs))

    return factory


@pytest.fixture
def sample_lock() -> dict[str, Any]:
    """A composer.lock with core, contrib projects and libraries."""
    return {
        "_readme": ["This file locks the dependencies of your project to a known state"],
        "content-hash": "d41d8cd98f00b204e9800998ecf8427e",
        "packages": [
            lock_entry(
                "drupal/core",
                "drupal-core",
                "8.6.4",
                url="https://github.com/drupal/core.git",
                reference="aa11bb22",
                patches={"Fix block layout": "https://www.drupal.org/files/issues/core-1.patch"},
            ),
            lock_entry("drupal/token", "drupal-module", "8.1.0", reference="cc33"),
            lock_entry(
                "drupal/panels",
                "drupal-module",
                "8.4.3",
                reference="dd44",
                patches={"Fix IPE": "https://www.drupal.org/files/issues/panels-2.patch"},
            ),
            lock_entry("drupal/bootstrap", "drupal-theme", "8.3.0", reference="ee55"),
            lock_entry("drupal/lightning", "drupal-profile", "dev-8.x-3.x", reference="ff66"),
            lock_entry("drupal/ctools", "drupal-module", "8.3.0-beta2", reference="0077"),
            lock_entry("bower-asset/jquery", "bower-asset", "3.3.1", reference="1188"),
            lock_entry("npm-asset/left-pad", "npm-asset", "1.3.0", reference="2299"),
            lock_entry("symfony/yaml", "library", "v3.4.20", reference="33aa"),
        ],
        "packages-dev": [
            lock_entry("drupal/devel", "drupal-module", "8.1.2", reference="44bb"),
        ],
    }


@pytest.fixture
def sample_composer() -> dict[str, Any]:
    """A root composer.json requiring core, token and jquery directly."""
    return {
        "name": "acme/site",
        "type": "project",
        "require": {
            "drupal/core": "^8.6",
            "drupal/token": "^1.0",
            "bower-asset/jquery": "^3.3",
        },
        "require-dev": {"npm-asset/left-pad": "^1.3"},
    }


@pytest.fixture
def project_dir(tmp_path: Path, sample_lock: dict, sample_composer: dict) -> Path:
    """A directory containing composer.json and composer.lock."""
    (tmp_path / "composer.lock").write_text(json.dumps(sample_lock, indent=4))
    (tmp_path / "composer.json").write_text(json.dumps(sample_composer, indent=4))
    return tmp_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_entry() -> Callable[..., dict[str, Any]]:
    """Factory for raw composer.lock package entries."""
    return lock_entry
