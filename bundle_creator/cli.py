"""Command line entry point.

Usage::

    bundle-creator acme demo-bundle --project-dir /var/www/contao
    bundle-creator acme demo-bundle --frontend-module "my custom" --custom-route
    bundle-creator --spec bundle.yml --overwrite
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bundle_creator.config import Config
from bundle_creator.errors import BundleCreatorError
from bundle_creator.maker import BundleMaker
from bundle_creator.messages import MessageSink
from bundle_creator.models import BundleSpec
from bundle_creator.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    relative_to,
    setup_logging,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundle-creator",
        description="Contao bundle creator -- generate an extension skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bundle-creator acme demo-bundle\n"
            "  bundle-creator acme demo-bundle --backend-module --dca-table tl_demo\n"
            "  bundle-creator --spec bundle.yml --overwrite\n"
        ),
    )
    parser.add_argument("vendor", nargs="?", help="Composer vendor name")
    parser.add_argument("repository", nargs="?", help="Composer repository name")
    parser.add_argument("--spec", type=Path, help="Load the bundle spec from a JSON or YAML file")
    parser.add_argument("--project-dir", type=Path, default=None, help="Contao project root (default: .)")

    meta = parser.add_argument_group("composer.json")
    meta.add_argument("--bundle-name", default=None)
    meta.add_argument("--description", default=None)
    meta.add_argument("--license", default=None)
    meta.add_argument("--author-name", default=None)
    meta.add_argument("--author-email", default=None)
    meta.add_argument("--author-website", default=None)
    meta.add_argument("--package-version", default=None)

    features = parser.add_argument_group("features")
    features.add_argument("--backend-module", action="store_true", help="Add a backend module")
    features.add_argument("--dca-table", "--dcatable", dest="dca_table", default=None, help="DCA table of the backend module")
    features.add_argument("--backend-module-type", default=None)
    features.add_argument("--frontend-module", metavar="TYPE", default=None, help="Add a frontend module")
    features.add_argument("--content-element", metavar="TYPE", default=None, help="Add a content element")
    features.add_argument("--custom-route", action="store_true", help="Add a custom route")
    features.add_argument("--ecs", action="store_true", help="Add easy-coding-standard config")

    run = parser.add_argument_group("run")
    run.add_argument("--overwrite", action="store_true", help="Overwrite an existing bundle (backup first)")
    run.add_argument(
        "--edit-root-composer",
        choices=["require", "path", "vcs-github"],
        default=None,
        help="Register the bundle in the root composer.json",
    )
    run.add_argument("--lenient", action="store_true", help="Keep unknown placeholders instead of failing")
    run.add_argument("--verbose", "-v", action="store_true")
    return parser


def spec_from_args(args: argparse.Namespace) -> BundleSpec:
    """Merge the optional spec file with the command line flags."""
    data: dict[str, Any] = {}
    if args.spec is not None:
        data = BundleSpec.from_file(args.spec).model_dump()

    overrides: dict[str, Any] = {
        "vendor_name": args.vendor,
        "repository_name": args.repository,
        "bundle_name": args.bundle_name,
        "composer_description": args.description,
        "composer_license": args.license,
        "composer_author_name": args.author_name,
        "composer_author_email": args.author_email,
        "composer_author_website": args.author_website,
        "composer_package_version": args.package_version,
        "dca_table": args.dca_table,
        "backend_module_type": args.backend_module_type,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    if args.backend_module:
        data["add_backend_module"] = True
    if args.frontend_module:
        data["add_frontend_module"] = True
        data["frontend_module_type"] = args.frontend_module
    if args.content_element:
        data["add_content_element"] = True
        data["content_element_type"] = args.content_element
    if args.custom_route:
        data["add_custom_route"] = True
    if args.ecs:
        data["add_easy_coding_standard"] = True
    if args.overwrite:
        data["overwrite_existing"] = True
    if args.edit_root_composer:
        data["edit_root_composer"] = True
        if args.edit_root_composer != "require":
            data["root_composer_repositories_key"] = args.edit_root_composer

    return BundleSpec.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``bundle-creator``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.spec is None and not (args.vendor and args.repository):
        parser.error("either VENDOR and REPOSITORY or --spec is required")

    setup_logging(args.verbose)

    try:
        spec = spec_from_args(args)
    except (ValidationError, ValueError, OSError) as exc:
        print_error(f"Invalid bundle spec: {exc}")
        return 1

    config = Config.from_env(
        project_dir=args.project_dir,
        strict_tokens=False if args.lenient else None,
        verbose=args.verbose,
    )

    print_header(f"Contao bundle creator: {spec.package_name}")
    if not config.strict_tokens:
        print_warning("Lenient token policy: unknown placeholders are kept in the output.")
    maker = BundleMaker(config, sink=MessageSink(console=console))

    try:
        result = maker.run(spec)
    except BundleCreatorError as exc:
        print_error(f"Bundle generation failed: {exc}")
        return 1

    summary = {
        "Package": spec.package_name,
        "Location": relative_to(result.package_root, config.project_dir),
        "Files": str(len(result.written)),
        "Archive": relative_to(result.archive_path, config.project_dir) if result.archive_path else "-",
        "Duration": result.duration,
    }
    if result.backup_path:
        summary["Backup"] = relative_to(result.backup_path, config.project_dir)
    print_summary_table(summary, title="Bundle")
    print_success("Bundle generated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
