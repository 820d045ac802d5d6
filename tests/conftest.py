"""Shared pytest fixtures for the bundle creator test suite.

Provides reusable fixtures for:
- A temporary Contao project with a root composer.json
- Minimal and full-feature bundle specs
- A quiet message sink and a fixed clock
- A writable copy of the packaged skeleton
"""

from __future__ import annotations

import json
import shutil
from datetime import datetime
from pathlib import Path

import pytest

from bundle_creator.config import DEFAULT_SKELETON_DIR, Config
from bundle_creator.maker import BundleMaker, RunContext
from bundle_creator.maker.tags import compute_tags
from bundle_creator.messages import MessageSink
from bundle_creator.models import BundleSpec


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

ROOT_COMPOSER = {
    "name": "acme/contao-site",
    "type": "project",
    "require": {
        "contao/manager-bundle": "4.13.*",
    },
}


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary Contao project root containing a root composer.json."""
    project_dir = tmp_path / "contao"
    project_dir.mkdir()
    (project_dir / "composer.json").write_text(json.dumps(ROOT_COMPOSER, indent=4), encoding="utf-8")
    yield project_dir


@pytest.fixture
def skeleton_copy(tmp_path: Path) -> Path:
    """Writable copy of the packaged skeleton, for tests that break templates."""
    target = tmp_path / "skeleton"
    shutil.copytree(DEFAULT_SKELETON_DIR, target)
    return target


# ---------------------------------------------------------------------------
# Settings & Specs
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_project_dir: Path) -> Config:
    return Config(project_dir=tmp_project_dir)


@pytest.fixture
def minimal_spec() -> BundleSpec:
    return BundleSpec(vendor_name="acme", repository_name="demo-bundle")


@pytest.fixture
def full_spec() -> BundleSpec:
    """Every optional feature switched on."""
    return BundleSpec(
        vendor_name="acme",
        repository_name="demo-bundle",
        bundle_name="Demo Bundle",
        composer_description="A demo bundle",
        composer_license="LGPL-3.0-or-later",
        composer_author_name="Jane Doe",
        composer_author_email="jane@example.org",
        composer_author_website="https://example.org",
        add_backend_module=True,
        dca_table="tl_demo_table",
        backend_module_trans=["Demo", "Manage demo records"],
        add_frontend_module=True,
        frontend_module_type="my custom",
        frontend_module_trans=["My custom", "Shows something"],
        add_content_element=True,
        content_element_type="teaser",
        content_element_trans=["Teaser", "A teaser element"],
        add_custom_route=True,
        add_easy_coding_standard=True,
    )


# ---------------------------------------------------------------------------
# Runtime helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 14, 3, 59)


@pytest.fixture
def quiet_sink() -> MessageSink:
    """Collects messages without printing them."""
    return MessageSink(echo=False)


@pytest.fixture
def maker(config: Config, quiet_sink: MessageSink, fixed_now: datetime) -> BundleMaker:
    return BundleMaker(config, sink=quiet_sink, clock=lambda: fixed_now)


@pytest.fixture
def make_context(config: Config, quiet_sink: MessageSink, fixed_now: datetime):
    """Factory for a run context whose tag store is already computed."""

    def _make(spec: BundleSpec, cfg: Config | None = None) -> RunContext:
        cfg = cfg or config
        ctx = RunContext(config=cfg, spec=spec, sink=quiet_sink, now=fixed_now)
        ctx.tags = compute_tags(spec, cfg.skeleton_dir, now=fixed_now)
        ctx.tags.freeze()
        return ctx

    return _make
