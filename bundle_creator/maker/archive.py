"""Zip archives of generated packages and their backups."""

from __future__ import annotations

import logging
import zipfile
from datetime import datetime
from pathlib import Path

from ..errors import BundleIOError
from ..utils import ensure_dir, format_timestamp, unique_path

logger = logging.getLogger(__name__)


def package_archive_path(tmp_dir: Path, repository: str) -> Path:
    """``<tmp>/<repository>.zip``"""
    return tmp_dir / f"{repository}.zip"


def backup_archive_path(tmp_dir: Path, repository: str, now: datetime) -> Path:
    """``<tmp>/<repository>_backup_<YYYY-mm-dd _HH-MM-SS>.zip``, suffixed ``_<n>`` if taken."""
    return unique_path(tmp_dir / f"{repository}_backup_{format_timestamp(now)}.zip")


def zip_directory(source_dir: Path, target_zip: Path) -> Path:
    """Recursively zip *source_dir* into *target_zip*.

    Entry names are relative to *source_dir* and written in sorted order so
    the same tree always yields the same member list.

    Raises:
        BundleIOError: The source is missing or the archive cannot be written.
    """
    if not source_dir.is_dir():
        raise BundleIOError(f'Cannot archive "{source_dir}": directory does not exist.')

    try:
        ensure_dir(target_zip.parent)
        with zipfile.ZipFile(target_zip, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path in sorted(source_dir.rglob("*")):
                if path.is_file():
                    archive.write(path, path.relative_to(source_dir).as_posix())
    except OSError as exc:
        raise BundleIOError(f'Unable to write archive "{target_zip}": {exc}') from exc

    logger.debug("Archived %s to %s", source_dir, target_zip)
    return target_zip
