"""In-memory staging store for the files of one generator run.

Records are keyed by target path.  The only ways to mutate the store are the
explicit create operations (``add_file``, ``add_content``, ``ensure_file``,
``add_files_from_folder``), ``append_content`` and ``replace_content``;
there is no implicit upsert.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..errors import (
    BundleCreatorError,
    DuplicateStagingError,
    StagedFileNotFoundError,
    TemplateEncodingError,
    TemplateNotFoundError,
)
from . import tokens

logger = logging.getLogger(__name__)

# Only files carrying this marker in their basename are text templates.
TEMPLATE_MARKER = ".tpl."


def is_template(path: Path) -> bool:
    return TEMPLATE_MARKER in path.name


def strip_template_marker(name: str) -> str:
    """``"services.tpl.yml"`` -> ``"services.yml"``."""
    return name.replace(TEMPLATE_MARKER, ".", 1)


def read_template_text(path: Path) -> str:
    """Read a text template, reporting undecodable content as a generator error."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TemplateEncodingError(path, exc.reason) from exc


@dataclass
class StagedFile:
    """One file awaiting resolution and materialization."""

    target: Path
    content: str | bytes
    source: Path | None = None
    is_binary: bool = False

    @property
    def from_template(self) -> bool:
        """``True`` when the content was read from a skeleton file."""
        return self.source is not None


class StagingStore:
    """Ordered, target-keyed collection of :class:`StagedFile` records."""

    def __init__(self) -> None:
        self._files: dict[Path, StagedFile] = {}

    # -- Create ------------------------------------------------------------

    def add_file(self, source: str | Path, target: str | Path) -> StagedFile:
        """Stage the content of template *source* under *target*.

        Files without the ``.tpl.`` marker are staged as opaque bytes and
        bypass the token engine.

        Raises:
            TemplateNotFoundError: *source* does not exist.
            DuplicateStagingError: *target* is already staged.
        """
        source_path = Path(source)
        target_path = Path(target)
        self._reject_duplicate(target_path)
        if not source_path.is_file():
            raise TemplateNotFoundError(source_path)

        if is_template(source_path):
            record = StagedFile(target_path, read_template_text(source_path), source_path)
        else:
            record = StagedFile(target_path, source_path.read_bytes(), source_path, is_binary=True)

        self._files[target_path] = record
        logger.debug("Staged %s from %s", target_path, source_path)
        return record

    def add_content(self, target: str | Path, content: str) -> StagedFile:
        """Stage synthesized *content* (no source template) under *target*."""
        target_path = Path(target)
        self._reject_duplicate(target_path)
        record = StagedFile(target_path, content)
        self._files[target_path] = record
        return record

    def ensure_file(self, source: str | Path, target: str | Path) -> StagedFile:
        """Stage *source* under *target* unless *target* is already staged.

        Used for registry files shared by several feature blocks.
        """
        target_path = Path(target)
        if target_path in self._files:
            return self._files[target_path]
        return self.add_file(source, target_path)

    def add_files_from_folder(
        self, source_dir: str | Path, target_dir: str | Path, recursive: bool = True
    ) -> list[StagedFile]:
        """Stage every file below *source_dir* under *target_dir*.

        Files are visited in sorted order; the ``.tpl.`` marker is removed
        from target names.
        """
        source_root = Path(source_dir)
        if not source_root.is_dir():
            raise TemplateNotFoundError(source_root, kind="Template folder")

        pattern = "**/*" if recursive else "*"
        staged: list[StagedFile] = []
        for source in sorted(p for p in source_root.glob(pattern) if p.is_file()):
            rel = source.relative_to(source_root)
            target = Path(target_dir) / rel.parent / strip_template_marker(rel.name)
            staged.append(self.add_file(source, target))
        return staged

    # -- Mutate ------------------------------------------------------------

    def append_content(self, target: str | Path, text: str) -> StagedFile:
        record = self._text_record(target)
        record.content = f"{record.content}{text}"
        return record

    def replace_content(self, target: str | Path, text: str) -> StagedFile:
        record = self._text_record(target)
        record.content = text
        return record

    # -- Read --------------------------------------------------------------

    def has_file(self, target: str | Path) -> bool:
        return Path(target) in self._files

    def get_file(self, target: str | Path) -> StagedFile:
        try:
            return self._files[Path(target)]
        except KeyError:
            raise StagedFileNotFoundError(target) from None

    def get_all(self) -> list[StagedFile]:
        """Every record, in staging order."""
        return list(self._files.values())

    def __iter__(self) -> Iterator[StagedFile]:
        return iter(self.get_all())

    def __len__(self) -> int:
        return len(self._files)

    # -- Resolve -----------------------------------------------------------

    def resolve_all(self, tags: Mapping[str, str], strict: bool = True) -> int:
        """Run the token engine over every text record.

        All records are resolved before any of them is updated, so a failure
        leaves the store untouched.

        Returns:
            The number of records that were resolved.
        """
        resolved: dict[Path, str] = {}
        for record in self._files.values():
            if record.is_binary:
                continue
            label = record.source or record.target
            resolved[record.target] = tokens.resolve(
                str(record.content), tags, source=label, strict=strict
            )

        for target, content in resolved.items():
            self._files[target].content = content
        return len(resolved)

    # -- Internal ----------------------------------------------------------

    def _reject_duplicate(self, target: Path) -> None:
        if target in self._files:
            raise DuplicateStagingError(target)

    def _text_record(self, target: str | Path) -> StagedFile:
        record = self.get_file(target)
        if record.is_binary:
            raise BundleCreatorError(f'Cannot edit binary file "{record.target}" as text.')
        return record
