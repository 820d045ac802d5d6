"""Bundle creator configuration.

Runtime settings that are independent of the bundle being generated: where
the host Contao project lives, where archives go and which skeleton to read
templates from.  Uses a Pydantic v2 model so settings are validated at
construction time and can be read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .models import BundleSpec

DEFAULT_SKELETON_DIR = Path(__file__).parent / "skeleton"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global bundle creator configuration.

    Instances are created once by the CLI (or by a web front-end) and passed
    to ``BundleMaker``.
    """

    project_dir: Path = Field(default=Path("."), description="Root of the host Contao project")
    vendor_dir: str = Field(default="vendor")
    tmp_dir: str = Field(default="system/tmp", description="Archives and backups, relative to project_dir")
    skeleton_dir: Path = Field(default=DEFAULT_SKELETON_DIR)
    strict_tokens: bool = Field(
        default=True, description="Fail on unknown placeholders instead of leaving them in place"
    )
    verbose: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def vendor_path(self) -> Path:
        return self.project_dir / self.vendor_dir

    @property
    def tmp_path(self) -> Path:
        """Directory receiving package archives and backups."""
        return self.project_dir / self.tmp_dir

    @property
    def root_composer_path(self) -> Path:
        """The host project's ``composer.json``."""
        return self.project_dir / "composer.json"

    def package_root(self, spec: BundleSpec) -> Path:
        """``<project>/vendor/<vendor>/<repository>``."""
        return self.vendor_path / spec.vendor_name / spec.repository_name

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BC_PROJECT_DIR, BC_VENDOR_DIR, BC_TMP_DIR, BC_SKELETON_DIR,
            BC_STRICT_TOKENS.

        Keyword *overrides* win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BC_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["BC_PROJECT_DIR"])
        if os.environ.get("BC_VENDOR_DIR"):
            kwargs["vendor_dir"] = os.environ["BC_VENDOR_DIR"]
        if os.environ.get("BC_TMP_DIR"):
            kwargs["tmp_dir"] = os.environ["BC_TMP_DIR"]
        if os.environ.get("BC_SKELETON_DIR"):
            kwargs["skeleton_dir"] = Path(os.environ["BC_SKELETON_DIR"])
        if os.environ.get("BC_STRICT_TOKENS"):
            kwargs["strict_tokens"] = os.environ["BC_STRICT_TOKENS"].strip().lower() in _TRUTHY

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
