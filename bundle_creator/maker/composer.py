"""composer.json handling.

Builds the generated bundle's own manifest from the skeleton template and,
when requested, registers the bundle in the host project's root
``composer.json``.
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

from ..config import Config
from ..errors import BundleIOError, StructuredContentError
from ..messages import MessageSink
from ..models import BundleSpec
from ..utils import (
    dump_json,
    ensure_dir,
    format_timestamp,
    load_json,
    relative_to,
    save_json,
    unique_path,
)
from .tags import TagStore

logger = logging.getLogger(__name__)

DEV_CONSTRAINT = "dev-main"


def _load_object(text: str, origin: str | Path) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructuredContentError(origin, str(exc), fmt="JSON") from exc
    if not isinstance(data, dict):
        raise StructuredContentError(origin, "Expected a JSON object at the top level.", fmt="JSON")
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``data[key]`` as a dict, replacing anything that is not one."""
    value = data.get(key)
    if not isinstance(value, dict):
        value = {}
        data[key] = value
    return value


# ---------------------------------------------------------------------------
# Bundle manifest
# ---------------------------------------------------------------------------


def build_composer_manifest(
    template_text: str,
    tags: TagStore,
    version: str = "",
    origin: str | Path = "composer.tpl.json",
) -> str:
    """Fill the skeleton ``composer.json`` with the bundle's identity.

    Args:
        template_text: Content of the skeleton manifest (valid JSON).
        tags: The run's tag store.
        version: Optional explicit package version.
        origin: Used in error messages.

    Returns:
        The pretty-printed manifest.  String values may still contain
        placeholders from the template; they are resolved with the rest of
        the staged files.
    """
    manifest = _load_object(template_text, origin)

    vendor = tags.get("vendorname")
    repository = tags.get("repositoryname")
    top = tags.get("toplevelnamespace")
    sub = tags.get("sublevelnamespace")

    manifest["name"] = f"{vendor}/{repository}"
    manifest["description"] = tags.get("composerdescription")
    manifest["license"] = tags.get("composerlicense")

    authors = manifest.get("authors")
    if not isinstance(authors, list):
        authors = []
        manifest["authors"] = authors
    authors.append(
        {
            "name": tags.get("composerauthorname"),
            "email": tags.get("composerauthoremail"),
            "homepage": tags.get("composerauthorwebsite"),
            "role": "Developer",
        }
    )

    support = _section(manifest, "support")
    support["issues"] = f"https://github.com/{vendor}/{repository}/issues"
    support["source"] = f"https://github.com/{vendor}/{repository}"

    if version:
        manifest["version"] = version

    psr4 = _section(_section(manifest, "autoload"), "psr-4")
    psr4[f"{top}\\{sub}\\"] = "src/"

    _section(manifest, "extra")["contao-manager-plugin"] = f"{top}\\{sub}\\ContaoManager\\Plugin"

    return dump_json(manifest)


# ---------------------------------------------------------------------------
# Root manifest augmentation
# ---------------------------------------------------------------------------


def repository_entry(spec: BundleSpec, config: Config) -> dict[str, str] | None:
    """The ``repositories`` entry requested by *spec*, if any."""
    if spec.root_composer_repositories_key == "path":
        return {
            "type": "path",
            "url": f"{config.vendor_dir}/{spec.vendor_name}/{spec.repository_name}",
        }
    if spec.root_composer_repositories_key == "vcs-github":
        return {
            "type": "vcs",
            "url": f"https://github.com/{spec.vendor_name}/{spec.repository_name}",
        }
    return None


def augment_root_manifest(
    config: Config,
    spec: BundleSpec,
    sink: MessageSink,
    now: datetime | None = None,
) -> Path | None:
    """Register the bundle in the host project's ``composer.json``.

    Adds the requested ``repositories`` entry (skipped when an identical entry
    already exists) and the ``require`` constraint.  The original file is
    copied to ``<tmp>/composer_backup_<timestamp>.json`` (``_<n>`` is appended
    when that name is taken) before it is rewritten.

    Returns:
        The backup path, or ``None`` when the manifest needed no change.
    """
    path = config.root_composer_path
    if not path.is_file():
        raise BundleIOError(f'Root composer.json "{path}" not found.')

    try:
        manifest = load_json(path)
    except ValueError as exc:
        raise StructuredContentError(path, str(exc), fmt="JSON") from exc
    modified = False

    entry = repository_entry(spec, config)
    if entry is not None:
        repositories = manifest.setdefault("repositories", [])
        if not isinstance(repositories, list):
            raise StructuredContentError(path, '"repositories" must be a list.', fmt="JSON")
        if entry not in repositories:
            repositories.append(entry)
            modified = True
            sink.add_info("Extended the repositories section in the root composer.json. Please check!")

    require = _section(manifest, "require")
    if require.get(spec.package_name) != DEV_CONSTRAINT:
        require[spec.package_name] = DEV_CONSTRAINT
        modified = True
        sink.add_info("Extended the require section in the root composer.json. Please check!")

    if not modified:
        logger.debug("Root composer.json already up to date")
        return None

    backup = unique_path(
        config.tmp_path / f"composer_backup_{format_timestamp(now or datetime.now())}.json"
    )
    try:
        ensure_dir(backup.parent)
        shutil.copyfile(path, backup)
        save_json(manifest, path)
    except OSError as exc:
        raise BundleIOError(f"Unable to update {path}: {exc}") from exc

    sink.add_info(f'Created backup of composer.json in "{relative_to(backup, config.project_dir)}"')
    return backup
