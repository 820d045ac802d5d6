"""Derived-name rules for the generated bundle.

Pure string helpers used while computing tags: PSR-4 class names, snake-case
identifiers, Contao DCA table names, frontend module / content element type
names and the Twig namespace.  Each helper sanitizes its raw input first, so
callers may pass user input straight through.
"""

from __future__ import annotations

import re

DCA_TABLE_PREFIX = "tl_"
FRONTEND_MODULE_SUFFIX = "_module"
FRONTEND_MODULE_TEMPLATE_PREFIX = "mod_"
CONTENT_ELEMENT_SUFFIX = "_element"
CONTENT_ELEMENT_TEMPLATE_PREFIX = "ce_"


# ---------------------------------------------------------------------------
# Basic casing
# ---------------------------------------------------------------------------


def _segments(value: str) -> list[str]:
    """Split *value* into clean identifier segments.

    ``-`` and whitespace become ``_``, characters outside ``[A-Za-z0-9_]`` are
    dropped, and the result is split on (collapsed) underscores.
    """
    cleaned = re.sub(r"[-\s]+", "_", value.strip())
    cleaned = re.sub(r"[^A-Za-z0-9_]", "", cleaned)
    cleaned = re.sub(r"_+", "_", cleaned).strip("_")
    return [part for part in cleaned.split("_") if part]


def as_class_name(value: str) -> str:
    """Convert arbitrary input into a PSR-4 style class name.

    Examples::

        as_class_name("my_custom name-space") -> "MyCustomNameSpace"
        as_class_name("contao-bundle-creator-bundle") -> "ContaoBundleCreatorBundle"
    """
    return "".join(part.lower().capitalize() for part in _segments(value))


def as_snake_case(value: str) -> str:
    """Convert arbitrary input into a lower-case snake-case identifier.

    ``as_snake_case("My custom module") -> "my_custom_module"``
    """
    return "_".join(_segments(value)).lower()


def strip_suffix(value: str, suffix: str) -> str:
    if suffix and value.endswith(suffix):
        return value[: -len(suffix)]
    return value


# ---------------------------------------------------------------------------
# Contao specific names
# ---------------------------------------------------------------------------


def dca_table_stem(value: str) -> str:
    """Sanitized DCA table name without the ``tl_`` prefix (may be empty)."""
    table = value.strip().lower()
    table = re.sub(r"[-\s]+", "_", table)
    table = re.sub(r"[^a-z0-9_]", "", table)
    table = re.sub(r"_+", "_", table)
    if table.startswith(DCA_TABLE_PREFIX):
        table = table[len(DCA_TABLE_PREFIX):]
    return table.strip("_")


def as_dca_table(value: str) -> str:
    """Sanitize a DCA table name and force the ``tl_`` prefix.

    ``as_dca_table("My-Table__") -> "tl_my_table"``
    """
    return DCA_TABLE_PREFIX + dca_table_stem(value)


def as_model_class_name(dca_table: str) -> str:
    """``tl_sample_table`` -> ``SampleTableModel``."""
    return as_class_name(dca_table_stem(dca_table)) + "Model"


def _type_stem(value: str, boundary_tokens: tuple[str, ...]) -> str:
    """Snake-case *value* and strip boundary tokens at either end."""
    parts = as_snake_case(value).split("_")
    while parts and parts[0] in boundary_tokens:
        parts.pop(0)
    while parts and parts[-1] in boundary_tokens:
        parts.pop()
    return "_".join(p for p in parts if p)


def frontend_module_stem(value: str) -> str:
    """``"Module My Custom"`` -> ``"my_custom"``; empty when nothing is left."""
    return _type_stem(value, ("module", "mod"))


def as_frontend_module_type(value: str) -> str:
    """``"Module My Custom"`` -> ``"my_custom_module"``."""
    return frontend_module_stem(value) + FRONTEND_MODULE_SUFFIX


def as_frontend_module_class_name(value: str) -> str:
    """``"my custom"`` -> ``"MyCustomModuleController"``."""
    return as_class_name(as_frontend_module_type(value)) + "Controller"


def as_frontend_module_template_name(value: str) -> str:
    """``"my custom"`` -> ``"mod_my_custom"``."""
    return FRONTEND_MODULE_TEMPLATE_PREFIX + frontend_module_stem(value)


def content_element_stem(value: str) -> str:
    return _type_stem(value, ("element", "elem", "ce"))


def as_content_element_type(value: str) -> str:
    """``"Element Teaser"`` -> ``"teaser_element"``."""
    return content_element_stem(value) + CONTENT_ELEMENT_SUFFIX


def as_content_element_class_name(value: str) -> str:
    return as_class_name(as_content_element_type(value)) + "Controller"


def as_content_element_template_name(value: str) -> str:
    return CONTENT_ELEMENT_TEMPLATE_PREFIX + content_element_stem(value)


# ---------------------------------------------------------------------------
# Bundle level names
# ---------------------------------------------------------------------------


def as_bundle_base_name(vendor: str, repository: str) -> str:
    """Vendor + repository class name with a trailing ``Bundle`` removed."""
    return strip_suffix(as_class_name(vendor) + as_class_name(repository), "Bundle")


def as_dependency_injection_extension_class_name(vendor: str, repository: str) -> str:
    """``("acme", "demo-bundle")`` -> ``"AcmeDemoExtension"``."""
    return as_bundle_base_name(vendor, repository) + "Extension"


def as_twig_namespace(vendor: str, repository: str) -> str:
    """``("acme", "demo-bundle")`` -> ``"@AcmeDemo"``."""
    return "@" + as_bundle_base_name(vendor, repository)


def as_route_id(vendor: str, repository: str) -> str:
    """``("Acme", "demo-bundle")`` -> ``"acme_demo"``."""
    subject = f"{vendor.lower()}_{repository.lower()}"
    subject = re.sub(r"-bundle$", "", subject)
    return subject.replace("-", "_")


def as_header_comment(text: str) -> str:
    """Wrap *text* into a ``/* ... */`` file header comment block."""
    lines = text.strip("\n").splitlines()
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return f"/*\n{body}\n */"
