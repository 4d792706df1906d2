# SPDX-License-Identifier: MIT
"""Tests for reading composer.lock and composer.json."""

import json

import pytest

from drupal_make.lockfile import (
    LockedPackage,
    LockFileError,
    PackageSource,
    direct_requirements,
    load_direct_requirements,
    load_lock,
    packages_from_lock_data,
    validate_lock_data,
)


class TestLockedPackage:
    """Tests for LockedPackage.from_dict."""

    def test_full_entry(self):
        package = LockedPackage.from_dict(
            {
                "name": "drupal/token",
                "type": "drupal-module",
                "version": "8.1.0",
                "source": {"type": "git", "url": "https://git.example.com/token.git", "reference": "abc"},
                "extra": {"patches_applied": {"Fix": "https://example.com/fix.patch"}},
            }
        )
        assert package.name == "drupal/token"
        assert package.bare_name == "token"
        assert package.source == PackageSource(url="https://git.example.com/token.git", reference="abc")
        assert package.patches_applied == (("Fix", "https://example.com/fix.patch"),)

    def test_type_defaults_to_library(self):
        package = LockedPackage.from_dict({"name": "acme/util", "version": "1.0.0"})
        assert package.type == "library"
        assert package.source is None
        assert package.patches_applied == ()

    def test_patch_list(self):
        package = LockedPackage.from_dict(
            {
                "name": "acme/util",
                "version": "1.0.0",
                "extra": {"patches_applied": ["https://example.com/a.patch"]},
            }
        )
        assert package.patches_applied == (("0", "https://example.com/a.patch"),)

    def test_name_without_vendor(self):
        package = LockedPackage.from_dict({"name": "standalone", "version": "1.0.0"})
        assert package.bare_name == "standalone"


class TestLockData:
    """Tests for packages_from_lock_data and schema validation."""

    def test_preserves_order(self, sample_lock):
        packages = packages_from_lock_data(sample_lock)
        assert [p.name for p in packages][:3] == ["drupal/core", "drupal/token", "drupal/panels"]
        assert "drupal/devel" not in [p.name for p in packages]

    def test_include_dev(self, sample_lock):
        packages = packages_from_lock_data(sample_lock, include_dev=True)
        assert packages[-1].name == "drupal/devel"

    def test_null_packages_dev(self):
        assert packages_from_lock_data({"packages": [], "packages-dev": None}, include_dev=True) == []

    def test_missing_packages(self):
        with pytest.raises(LockFileError) as exc_info:
            packages_from_lock_data({})
        assert exc_info.value.errors[0].field == "<root>"

    def test_entry_without_name(self):
        errors = validate_lock_data({"packages": [{"version": "1.0.0"}]})
        assert len(errors) == 1
        assert errors[0].field == "packages[0]"
        assert "name" in errors[0].message

    def test_bad_field_type(self):
        errors = validate_lock_data({"packages": [{"name": "a/b", "version": 1}]})
        assert errors[0].field == "packages[0].version"

    def test_valid_lock(self, sample_lock):
        assert validate_lock_data(sample_lock) == []


class TestFiles:
    """Tests for the file loaders."""

    def test_load_lock(self, project_dir):
        packages = load_lock(project_dir / "composer.lock")
        assert len(packages) == 9

    def test_load_lock_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_lock(tmp_path / "composer.lock")

    def test_load_lock_invalid_json(self, tmp_path):
        path = tmp_path / "composer.lock"
        path.write_text("{not json")
        with pytest.raises(LockFileError) as exc_info:
            load_lock(path)
        assert "Invalid JSON" in str(exc_info.value)

    def test_load_direct_requirements(self, project_dir):
        assert load_direct_requirements(project_dir / "composer.json") == frozenset(
            {"drupal/core", "drupal/token", "bower-asset/jquery"}
        )

    def test_require_must_be_object(self):
        with pytest.raises(LockFileError):
            direct_requirements({"require": ["drupal/core"]})

    def test_no_require(self):
        assert direct_requirements({"name": "acme/site"}) == frozenset()

    def test_composer_must_be_object(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text(json.dumps(["drupal/core"]))
        with pytest.raises(LockFileError):
            load_direct_requirements(path)
