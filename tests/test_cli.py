"""Unit tests for the command line entry point (bundle_creator.cli)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from bundle_creator.cli import build_parser, main, spec_from_args


class TestSpecFromArgs:
    @pytest.mark.unit
    def test_positional_identity(self):
        spec = spec_from_args(build_parser().parse_args(["acme", "demo-bundle"]))
        assert spec.package_name == "acme/demo-bundle"
        assert spec.add_custom_route is False

    @pytest.mark.unit
    def test_feature_flags(self):
        args = build_parser().parse_args(
            [
                "acme",
                "demo-bundle",
                "--backend-module",
                "--dcatable",
                "tl_demo",
                "--frontend-module",
                "my custom",
                "--content-element",
                "teaser",
                "--custom-route",
                "--ecs",
                "--overwrite",
                "--edit-root-composer",
                "vcs-github",
            ]
        )
        spec = spec_from_args(args)
        assert spec.has_backend_module
        assert spec.frontend_module_type == "my custom"
        assert spec.content_element_type == "teaser"
        assert spec.add_custom_route and spec.add_easy_coding_standard
        assert spec.overwrite_existing
        assert spec.edit_root_composer
        assert spec.root_composer_repositories_key == "vcs-github"

    @pytest.mark.unit
    def test_spec_file_merged_with_flags(self, tmp_path):
        path = tmp_path / "bundle.json"
        path.write_text(
            json.dumps({"vendor_name": "acme", "repository_name": "demo", "composer_license": "GPL-3.0"}),
            encoding="utf-8",
        )
        spec = spec_from_args(build_parser().parse_args(["--spec", str(path), "--custom-route"]))
        assert spec.package_name == "acme/demo"
        assert spec.composer_license == "GPL-3.0"
        assert spec.add_custom_route is True


class TestMain:
    @pytest.mark.unit
    def test_generates_bundle(self, tmp_project_dir):
        code = main(["acme", "demo-bundle", "--project-dir", str(tmp_project_dir)])
        assert code == 0
        assert (tmp_project_dir / "vendor" / "acme" / "demo-bundle" / "composer.json").is_file()
        assert (tmp_project_dir / "system" / "tmp" / "demo-bundle.zip").is_file()

    @pytest.mark.unit
    def test_existing_bundle_fails(self, tmp_project_dir):
        (tmp_project_dir / "vendor" / "acme" / "demo-bundle").mkdir(parents=True)
        assert main(["acme", "demo-bundle", "--project-dir", str(tmp_project_dir)]) == 1

    @pytest.mark.unit
    def test_invalid_vendor(self, tmp_project_dir):
        assert main(["acme_", "demo", "--project-dir", str(tmp_project_dir)]) == 1
        assert not (tmp_project_dir / "vendor").exists()

    @pytest.mark.unit
    def test_missing_identity_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_lenient_run_warns(self, tmp_project_dir):
        with patch("bundle_creator.cli.print_warning") as warn:
            assert main(["acme", "demo-bundle", "--project-dir", str(tmp_project_dir), "--lenient"]) == 0
        warn.assert_called_once()
        assert "unknown placeholders" in warn.call_args.args[0]

    @pytest.mark.unit
    def test_strict_run_does_not_warn(self, tmp_project_dir):
        with patch("bundle_creator.cli.print_warning") as warn:
            assert main(["acme", "demo-bundle", "--project-dir", str(tmp_project_dir)]) == 0
        warn.assert_not_called()

    @pytest.mark.unit
    def test_empty_module_name_rejected(self, tmp_project_dir):
        code = main(["acme", "demo-bundle", "--project-dir", str(tmp_project_dir), "--frontend-module", "module"])
        assert code == 1
        assert not (tmp_project_dir / "vendor").exists()
