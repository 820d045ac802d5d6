"""Tag store and tag computation.

The tag store maps placeholder names to their resolved string values.  It is
filled once per run by :func:`compute_tags` and frozen before any template is
resolved.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import naming
from ..errors import BundleCreatorError, MissingTagError, TemplateNotFoundError
from ..models import BundleSpec, field_tags
from . import tokens
from .staging import read_template_text

logger = logging.getLogger(__name__)

PHPDOC_PARTIAL = "phpdoc.tpl.txt"


class TagStore:
    """Case-sensitive ``tag -> value`` mapping; values are always text."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._tags: dict[str, str] = {}
        self._frozen = False
        for key, value in (initial or {}).items():
            self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite *key*."""
        if self._frozen:
            raise BundleCreatorError(f'Tag store is frozen; cannot set "{key}".')
        self._tags[str(key)] = "" if value is None else str(value)

    def get(self, key: str) -> str:
        try:
            return self._tags[key]
        except KeyError:
            raise MissingTagError(key) from None

    def has(self, key: str) -> bool:
        return key in self._tags

    def all(self) -> dict[str, str]:
        """Insertion-ordered snapshot of every tag."""
        return dict(self._tags)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<TagStore {len(self._tags)} tags, {state}>"


# ---------------------------------------------------------------------------
# Tag computation
# ---------------------------------------------------------------------------


def render_partial(skeleton_dir: Path, filename: str, tags: TagStore, strict: bool = True) -> str:
    """Read ``skeleton/partials/<filename>`` and resolve it against *tags*."""
    source = skeleton_dir / "partials" / filename
    if not source.is_file():
        raise TemplateNotFoundError(source, kind="Partial")
    content = read_template_text(source)
    return tokens.resolve(content, tags.all(), source=source, strict=strict)


def compute_tags(
    spec: BundleSpec,
    skeleton_dir: Path,
    now: datetime | None = None,
    strict: bool = True,
) -> TagStore:
    """Populate a fresh tag store from *spec*.

    Every field enumerated in ``FIELD_TAGS`` is copied first, then the derived
    tags (namespaces, class names, labels, year, phpdoc header, ...) are
    added.  Derivations sanitize their raw input before storing it.
    """
    now = now or datetime.now()
    store = TagStore(field_tags(spec))

    vendor = spec.vendor_name
    repository = spec.repository_name

    # Identity
    store.set("vendorname", vendor)
    store.set("repositoryname", repository)
    store.set(
        "dependencyinjectionextensionclassname",
        naming.as_dependency_injection_extension_class_name(vendor, repository),
    )

    # Namespaces
    store.set("toplevelnamespace", naming.as_class_name(vendor))
    store.set("sublevelnamespace", naming.as_class_name(repository))
    store.set("twignamespace", naming.as_twig_namespace(vendor, repository))

    # Composer
    store.set("composerdescription", spec.composer_description)
    store.set("composerlicense", spec.composer_license)
    store.set("composerauthorname", spec.composer_author_name)
    store.set("composerauthoremail", spec.composer_author_email)
    store.set("composerauthorwebsite", spec.composer_author_website)

    store.set("bundlename", spec.bundle_name.strip() or spec.package_name)
    store.set("year", now.strftime("%Y"))

    # Backend module and its DCA table; the module is skipped without a table.
    store.set("addBackendModule", "1" if spec.has_backend_module else "0")
    if spec.has_backend_module:
        dca_table = naming.as_dca_table(spec.dca_table)
        store.set("dcatable", dca_table)
        store.set("modelclassname", naming.as_model_class_name(dca_table))
        store.set("backendmoduletype", naming.as_snake_case(spec.backend_module_type or dca_table))
        store.set("backendmodulecategory", naming.as_snake_case(spec.backend_module_category))
        store.set("backendmoduletrans_0", spec.backend_module_trans[0])
        store.set("backendmoduletrans_1", spec.backend_module_trans[1])

    # Frontend module
    if spec.add_frontend_module:
        raw_type = spec.frontend_module_type
        store.set("frontendmoduletype", naming.as_frontend_module_type(raw_type))
        store.set("frontendmoduleclassname", naming.as_frontend_module_class_name(raw_type))
        store.set("frontendmoduletemplate", naming.as_frontend_module_template_name(raw_type))
        store.set("frontendmodulecategory", naming.as_snake_case(spec.frontend_module_category))
        store.set("frontendmoduletrans_0", spec.frontend_module_trans[0])
        store.set("frontendmoduletrans_1", spec.frontend_module_trans[1])

    # Content element
    if spec.add_content_element:
        raw_type = spec.content_element_type
        store.set("contentelementtype", naming.as_content_element_type(raw_type))
        store.set("contentelementclassname", naming.as_content_element_class_name(raw_type))
        store.set("contentelementtemplate", naming.as_content_element_template_name(raw_type))
        store.set("contentelementcategory", naming.as_snake_case(spec.content_element_category))
        store.set("contentelementtrans_0", spec.content_element_trans[0])
        store.set("contentelementtrans_1", spec.content_element_trans[1])

    # Custom route
    store.set("routeid", naming.as_route_id(vendor, repository))
    store.set("addCustomRoute", "1" if spec.add_custom_route else "0")

    # File header comments, built last: the partial uses the tags above.
    phpdoc = render_partial(skeleton_dir, PHPDOC_PARTIAL, store, strict=strict)
    store.set("phpdoc", naming.as_header_comment(phpdoc))
    store.set("ecsphpdoc", "\\n".join(line.rstrip() for line in phpdoc.strip("\n").splitlines()))

    logger.debug("Computed %d tags for %s", len(store), spec.package_name)
    return store
