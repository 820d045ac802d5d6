"""Unit tests for Config (bundle_creator.config).

Tests cover:
- Config defaults and derived paths
- package_root for a spec
- from_env, including overrides and strict token parsing
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from bundle_creator.config import DEFAULT_SKELETON_DIR, Config
from bundle_creator.models import BundleSpec


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = Config()
        assert cfg.project_dir == Path(".")
        assert cfg.vendor_dir == "vendor"
        assert cfg.tmp_dir == "system/tmp"
        assert cfg.skeleton_dir == DEFAULT_SKELETON_DIR
        assert cfg.strict_tokens is True
        assert cfg.verbose is False

    @pytest.mark.unit
    def test_packaged_skeleton_exists(self):
        assert (DEFAULT_SKELETON_DIR / "composer.tpl.json").is_file()
        assert (DEFAULT_SKELETON_DIR / "partials" / "phpdoc.tpl.txt").is_file()


class TestDerivedPaths:
    @pytest.mark.unit
    def test_vendor_and_tmp_paths(self, tmp_path):
        cfg = Config(project_dir=tmp_path)
        assert cfg.vendor_path == tmp_path / "vendor"
        assert cfg.tmp_path == tmp_path / "system" / "tmp"
        assert cfg.root_composer_path == tmp_path / "composer.json"

    @pytest.mark.unit
    def test_package_root(self, tmp_path):
        cfg = Config(project_dir=tmp_path)
        spec = BundleSpec(vendor_name="acme", repository_name="demo-bundle")
        assert cfg.package_root(spec) == tmp_path / "vendor" / "acme" / "demo-bundle"

    @pytest.mark.unit
    def test_custom_vendor_dir(self, tmp_path):
        cfg = Config(project_dir=tmp_path, vendor_dir="packages")
        spec = BundleSpec(vendor_name="acme", repository_name="demo-bundle")
        assert cfg.package_root(spec) == tmp_path / "packages" / "acme" / "demo-bundle"


class TestFromEnv:
    @pytest.mark.unit
    def test_reads_environment(self, tmp_path):
        env = {
            "BC_PROJECT_DIR": str(tmp_path),
            "BC_VENDOR_DIR": "packages",
            "BC_TMP_DIR": "var/tmp",
            "BC_STRICT_TOKENS": "no",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = Config.from_env()
        assert cfg.project_dir == tmp_path
        assert cfg.vendor_dir == "packages"
        assert cfg.tmp_dir == "var/tmp"
        assert cfg.strict_tokens is False

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy_strict_tokens(self, raw):
        with patch.dict(os.environ, {"BC_STRICT_TOKENS": raw}, clear=False):
            assert Config.from_env().strict_tokens is True

    @pytest.mark.unit
    def test_overrides_win(self, tmp_path):
        with patch.dict(os.environ, {"BC_PROJECT_DIR": "/somewhere/else"}, clear=False):
            cfg = Config.from_env(project_dir=tmp_path)
        assert cfg.project_dir == tmp_path

    @pytest.mark.unit
    def test_none_overrides_ignored(self, tmp_path):
        with patch.dict(os.environ, {"BC_PROJECT_DIR": str(tmp_path)}, clear=False):
            cfg = Config.from_env(project_dir=None, strict_tokens=None)
        assert cfg.project_dir == tmp_path
        assert cfg.strict_tokens is True
