"""Error taxonomy for the bundle creator.

Every failure that aborts a generator run derives from ``BundleCreatorError``
so callers (the CLI, a web front-end) can report it with a single ``except``
clause.  Where a standard exception type describes the same condition the
error also inherits from it, e.g. ``TemplateNotFoundError`` is a
``FileNotFoundError``.
"""

from __future__ import annotations

from pathlib import Path


class BundleCreatorError(Exception):
    """Base class for all generator errors."""


class PreconditionError(BundleCreatorError):
    """The destination package exists and overwriting was not requested."""

    def __init__(self, package_root: str | Path) -> None:
        self.package_root = Path(package_root)
        super().__init__(
            f'An extension with the same name already exists at "{self.package_root}". '
            'Please set the "overwrite existing" flag.'
        )


class TemplateNotFoundError(BundleCreatorError, FileNotFoundError):
    """A template file expected by the catalog does not exist."""

    def __init__(self, path: str | Path, kind: str = "Template") -> None:
        self.path = Path(path)
        super().__init__(f'{kind} file "{self.path}" not found.')

    def __str__(self) -> str:
        return self.args[0]


class StructuredContentError(BundleCreatorError):
    """A staged YAML file or a composer.json does not parse or lacks a required key."""

    def __init__(self, target: str | Path, detail: str, fmt: str = "YAML") -> None:
        self.target = Path(target)
        self.detail = detail
        self.fmt = fmt
        super().__init__(f"Unable to parse the {fmt} string in {self.target}: {detail}")


class TemplateEncodingError(BundleCreatorError):
    """A text template is not valid UTF-8."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f'Template file "{self.path}" is not valid UTF-8: {reason}.')


class UnresolvedReferenceError(BundleCreatorError):
    """A template references a tag that is not in the tag store."""

    def __init__(self, tag: str, source: str | Path | None = None) -> None:
        self.tag = tag
        self.source = str(source) if source is not None else None
        where = f' in "{self.source}"' if self.source else ""
        super().__init__(f'Undefined tag "{tag}"{where}.')


class MissingTagError(BundleCreatorError, KeyError):
    """Lookup of a tag that was never set."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f'Tag "{tag}" has not been set.')

    def __str__(self) -> str:
        return self.args[0]


class DuplicateStagingError(BundleCreatorError):
    """A target path was staged twice through a create operation."""

    def __init__(self, target: str | Path) -> None:
        self.target = Path(target)
        super().__init__(f'File "{self.target}" has already been staged.')


class StagedFileNotFoundError(BundleCreatorError):
    """Append/replace was requested for a target that was never staged."""

    def __init__(self, target: str | Path) -> None:
        self.target = Path(target)
        super().__init__(f'File "{self.target}" has not been staged.')


class BundleIOError(BundleCreatorError, OSError):
    """Writing, copying or archiving on the real filesystem failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
