"""Pydantic v2 model describing the bundle to generate.

``BundleSpec`` is the plain key/value record a user fills in (through the CLI
or a spec file).  ``FIELD_TAGS`` enumerates explicitly which fields are copied
verbatim into the tag store and under which tag name.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from . import naming

_PACKAGE_PART = r"^[A-Za-z0-9]([_.-]?[A-Za-z0-9]+)*$"

RepositoriesKey = Literal["", "path", "vcs-github"]


class BundleSpec(BaseModel):
    """User supplied parameters for one generator run."""

    # -- Identity ----------------------------------------------------------
    vendor_name: str = Field(..., pattern=_PACKAGE_PART, description="Composer vendor, e.g. 'acme'")
    repository_name: str = Field(
        ..., pattern=_PACKAGE_PART, description="Composer repository, e.g. 'demo-bundle'"
    )
    bundle_name: str = Field(default="", description="Human readable bundle name")
    overwrite_existing: bool = Field(
        default=False, description="Overwrite an existing package (a backup is made first)"
    )

    # -- composer.json -----------------------------------------------------
    composer_description: str = Field(default="")
    composer_license: str = Field(default="MIT")
    composer_author_name: str = Field(default="")
    composer_author_email: str = Field(default="")
    composer_author_website: str = Field(default="")
    composer_package_version: str = Field(default="", description="Optional explicit version")

    # -- Root composer.json augmentation -----------------------------------
    edit_root_composer: bool = Field(default=False)
    root_composer_repositories_key: RepositoriesKey = Field(
        default="", description="Repository type to add to the root composer.json"
    )

    # -- Backend module ----------------------------------------------------
    add_backend_module: bool = Field(default=False)
    dca_table: str = Field(default="")
    backend_module_type: str = Field(default="")
    backend_module_category: str = Field(default="system")
    backend_module_trans: list[str] = Field(default_factory=lambda: ["", ""])

    # -- Frontend module ---------------------------------------------------
    add_frontend_module: bool = Field(default=False)
    frontend_module_type: str = Field(default="")
    frontend_module_category: str = Field(default="miscellaneous")
    frontend_module_trans: list[str] = Field(default_factory=lambda: ["", ""])

    # -- Content element ---------------------------------------------------
    add_content_element: bool = Field(default=False)
    content_element_type: str = Field(default="")
    content_element_category: str = Field(default="texts")
    content_element_trans: list[str] = Field(default_factory=lambda: ["", ""])

    # -- Misc --------------------------------------------------------------
    add_custom_route: bool = Field(default=False)
    add_easy_coding_standard: bool = Field(default=False)

    @field_validator("backend_module_trans", "frontend_module_trans", "content_element_trans")
    @classmethod
    def _label_pair(cls, value: list[str]) -> list[str]:
        """Labels are a (title, description) pair; pad or reject accordingly."""
        if len(value) > 2:
            raise ValueError("expected at most two labels (title, description)")
        return list(value) + [""] * (2 - len(value))

    @model_validator(mode="after")
    def _types_for_enabled_features(self) -> "BundleSpec":
        if self.add_frontend_module:
            if not self.frontend_module_type.strip():
                raise ValueError("frontend_module_type is required when add_frontend_module is set")
            if not naming.frontend_module_stem(self.frontend_module_type):
                raise ValueError(
                    f'frontend_module_type "{self.frontend_module_type}" does not yield a module name'
                )
        if self.add_content_element:
            if not self.content_element_type.strip():
                raise ValueError("content_element_type is required when add_content_element is set")
            if not naming.content_element_stem(self.content_element_type):
                raise ValueError(
                    f'content_element_type "{self.content_element_type}" does not yield an element name'
                )
        if self.dca_table.strip() and not naming.dca_table_stem(self.dca_table):
            raise ValueError(f'dca_table "{self.dca_table}" does not yield a table name')
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def package_name(self) -> str:
        """Composer package name ``vendor/repository``."""
        return f"{self.vendor_name}/{self.repository_name}"

    @property
    def has_backend_module(self) -> bool:
        """The backend module is only generated together with a DCA table."""
        return self.add_backend_module and self.dca_table.strip() != ""

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: str | Path) -> "BundleSpec":
        """Load a spec from a ``.json`` or ``.yml``/``.yaml`` file."""
        file_path = Path(path)
        raw = file_path.read_text(encoding="utf-8")
        data: Any
        if file_path.suffix.lower() in (".yml", ".yaml"):
            data = yaml.safe_load(raw) or {}
        else:
            data = json.loads(raw)
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Field -> tag enumeration
# ---------------------------------------------------------------------------

# Tag name -> BundleSpec attribute.  Every entry is copied into the tag store
# verbatim (stringified) before the derived tags are computed.
FIELD_TAGS: dict[str, str] = {
    "vendorname": "vendor_name",
    "repositoryname": "repository_name",
    "bundlename": "bundle_name",
    "overwriteexisting": "overwrite_existing",
    "composerdescription": "composer_description",
    "composerlicense": "composer_license",
    "composerauthorname": "composer_author_name",
    "composerauthoremail": "composer_author_email",
    "composerauthorwebsite": "composer_author_website",
    "composerpackageversion": "composer_package_version",
    "editRootComposer": "edit_root_composer",
    "rootcomposerextendrepositorieskey": "root_composer_repositories_key",
    "addBackendModule": "add_backend_module",
    "dcatable": "dca_table",
    "backendmoduletype": "backend_module_type",
    "backendmodulecategory": "backend_module_category",
    "backendmoduletrans": "backend_module_trans",
    "addFrontendModule": "add_frontend_module",
    "frontendmoduletype": "frontend_module_type",
    "frontendmodulecategory": "frontend_module_category",
    "frontendmoduletrans": "frontend_module_trans",
    "addContentElement": "add_content_element",
    "contentelementtype": "content_element_type",
    "contentelementcategory": "content_element_category",
    "contentelementtrans": "content_element_trans",
    "addCustomRoute": "add_custom_route",
    "addEasyCodingStandard": "add_easy_coding_standard",
}

_unknown_fields = set(FIELD_TAGS.values()) - set(BundleSpec.model_fields)
if _unknown_fields:
    raise RuntimeError(f"FIELD_TAGS references unknown BundleSpec fields: {sorted(_unknown_fields)}")


def tag_value(value: Any) -> str:
    """Stringify a model value for the tag store.

    Booleans become ``"1"``/``"0"`` so templates can test them with
    ``{if flag=="1"}``; lists are joined with commas.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(tag_value(v) for v in value)
    return str(value)


def field_tags(spec: BundleSpec) -> dict[str, str]:
    """Return ``{tag: value}`` for every field listed in ``FIELD_TAGS``."""
    return {tag: tag_value(getattr(spec, attr)) for tag, attr in FIELD_TAGS.items()}
