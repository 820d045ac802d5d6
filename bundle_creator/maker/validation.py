"""Structural validation of staged YAML configuration files.

Staged YAML still contains raw tokens, so each file is resolved on a copy
before it is parsed.  Config files with a known role must also carry their
required top-level key, e.g. ``services.yml`` needs ``services``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from ..errors import StructuredContentError
from . import tokens
from .staging import StagedFile, StagingStore

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")

# Target basename -> required top-level keys.
REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    "listener.yml": ("services",),
    "services.yml": ("services",),
    "parameters.yml": ("parameters",),
}


def is_structured(record: StagedFile) -> bool:
    return not record.is_binary and record.target.suffix.lower() in YAML_SUFFIXES


def validate_yaml(content: str, target: str | Path, required_keys: tuple[str, ...] = ()) -> object:
    """Parse *content* and check *required_keys*.

    Returns:
        The parsed document.

    Raises:
        StructuredContentError: The content does not parse, or a required
            key is missing.
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise StructuredContentError(target, str(exc)) from exc

    for key in required_keys:
        if not isinstance(document, dict) or key not in document:
            raise StructuredContentError(
                target, f'Key "{key}" not found. Please check the indents.'
            )
    return document


def validate_staged_yaml(
    store: StagingStore, tags: Mapping[str, str], strict: bool = True
) -> list[Path]:
    """Validate every staged YAML file.

    Returns:
        Targets that were validated, in staging order.
    """
    checked: list[Path] = []
    for record in store:
        if not is_structured(record):
            continue
        content = tokens.resolve(
            str(record.content), tags, source=record.source or record.target, strict=strict
        )
        validate_yaml(content, record.target, REQUIRED_KEYS.get(record.target.name, ()))
        checked.append(record.target)
        logger.debug("Validated %s", record.target)
    return checked
