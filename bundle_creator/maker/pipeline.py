"""Bundle assembly pipeline.

Turns a ``BundleSpec`` into a Contao bundle skeleton:

1. VALIDATING_PRECONDITIONS  -- refuse to touch an existing package unless
                                 overwriting was requested.
2. COMPUTING_TAGS            -- fill and freeze the tag store.
3. STAGING                   -- collect every file in memory.
4. VALIDATING_STRUCTURED_CONTENT -- parse staged YAML, check required keys.
5. BACKING_UP_EXISTING       -- zip the package that is about to be replaced.
6. RESOLVING_TOKENS          -- resolve all staged templates.
7. MATERIALIZING             -- write the staged files below the package root.
8. ARCHIVING                 -- zip the fresh package for download.
9. AUGMENTING_MANIFEST       -- optionally register it in the root composer.json.

Nothing below the package root is written before MATERIALIZING; a failure
up to that point leaves the filesystem as it was (apart from the backup
archive).  Runs are synchronous and keep all their state in a
:class:`RunContext`.

Usage::

    from bundle_creator import BundleMaker, BundleSpec, Config

    maker = BundleMaker(Config(project_dir=Path("/var/www/contao")))
    result = maker.run(BundleSpec(vendor_name="acme", repository_name="demo-bundle"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from ..config import Config
from ..errors import BundleCreatorError, BundleIOError, PreconditionError
from ..messages import Message, MessageSink
from ..models import BundleSpec
from ..utils import ensure_dir, format_duration, relative_to
from . import archive, catalog, composer, tags, validation
from .context import PipelineState, RunContext

logger = logging.getLogger(__name__)

SESSION_LAST_ZIP = "bundle_creator.last_zip"


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def validate_preconditions(ctx: RunContext) -> None:
    """Abort before anything is staged if the package exists and may not be replaced."""
    ctx.package_existed = ctx.package_root.is_dir()
    if ctx.package_existed and not ctx.spec.overwrite_existing:
        raise PreconditionError(ctx.package_root)


def compute_tags(ctx: RunContext) -> None:
    ctx.tags = tags.compute_tags(
        ctx.spec, ctx.config.skeleton_dir, now=ctx.now, strict=ctx.config.strict_tokens
    )
    ctx.tags.freeze()


def stage_files(ctx: RunContext) -> None:
    steps = catalog.stage_all(ctx)
    logger.info("Staged %d files (%s)", len(ctx.staging), ", ".join(steps))


def validate_structured_content(ctx: RunContext) -> None:
    validation.validate_staged_yaml(ctx.staging, ctx.tags.all(), strict=ctx.config.strict_tokens)


def backup_existing(ctx: RunContext) -> None:
    """Zip the package that is about to be overwritten."""
    if not ctx.package_existed:
        return
    target = archive.backup_archive_path(ctx.config.tmp_path, ctx.spec.repository_name, ctx.now)
    ctx.backup_path = archive.zip_directory(ctx.package_root, target)
    ctx.sink.add_info(
        f'Created a backup of the existing bundle in "{relative_to(target, ctx.config.project_dir)}".'
    )


def resolve_tokens(ctx: RunContext) -> None:
    count = ctx.staging.resolve_all(ctx.tags.all(), strict=ctx.config.strict_tokens)
    logger.debug("Resolved tokens in %d files", count)


def materialize(ctx: RunContext) -> None:
    """Write every staged record to its target, overwriting existing files."""
    for record in ctx.staging:
        try:
            ensure_dir(record.target.parent)
            if record.is_binary:
                record.target.write_bytes(bytes(record.content))
            else:
                record.target.write_text(str(record.content), encoding="utf-8")
        except OSError as exc:
            raise BundleIOError(f'Unable to write "{record.target}": {exc}') from exc

        ctx.written.append(record.target)
        ctx.sink.add_info(f'Created file "{relative_to(record.target, ctx.config.project_dir)}".')

    ctx.sink.add_info(
        "Added one or more files to the bundle. Please run at least \"composer install\" "
        "or even \"composer update\", if you have made changes to the root composer.json."
    )


def archive_package(ctx: RunContext, session: MutableMapping[str, Any]) -> None:
    target = archive.package_archive_path(ctx.config.tmp_path, ctx.spec.repository_name)
    ctx.archive_path = archive.zip_directory(ctx.package_root, target)
    session[SESSION_LAST_ZIP] = relative_to(target, ctx.config.project_dir)


def augment_manifest(ctx: RunContext) -> None:
    if not ctx.spec.edit_root_composer:
        return
    ctx.root_composer_backup = composer.augment_root_manifest(ctx.config, ctx.spec, ctx.sink, ctx.now)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


@dataclass
class RunResult:
    """What a successful run produced."""

    package_root: Path
    archive_path: Path | None
    backup_path: Path | None
    root_composer_backup: Path | None
    written: list[Path]
    history: list[PipelineState]
    messages: list[Message] = field(default_factory=list)
    duration: str = ""


class BundleMaker:
    """Runs the assembly pipeline for one bundle at a time.

    Attributes:
        config: Project level settings.
        sink: Receives user-facing progress messages.
        session: Mapping that receives the location of the last archive
            (``bundle_creator.last_zip``), e.g. a web session.
    """

    def __init__(
        self,
        config: Config,
        sink: MessageSink | None = None,
        session: MutableMapping[str, Any] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.sink = sink or MessageSink()
        self.session: MutableMapping[str, Any] = session if session is not None else {}
        self.clock = clock
        self.last_context: RunContext | None = None

    def _stages(self) -> list[tuple[PipelineState, Callable[[RunContext], None]]]:
        return [
            (PipelineState.VALIDATING_PRECONDITIONS, validate_preconditions),
            (PipelineState.COMPUTING_TAGS, compute_tags),
            (PipelineState.STAGING, stage_files),
            (PipelineState.VALIDATING_STRUCTURED_CONTENT, validate_structured_content),
            (PipelineState.BACKING_UP_EXISTING, backup_existing),
            (PipelineState.RESOLVING_TOKENS, resolve_tokens),
            (PipelineState.MATERIALIZING, materialize),
            (PipelineState.ARCHIVING, lambda ctx: archive_package(ctx, self.session)),
            (PipelineState.AUGMENTING_MANIFEST, augment_manifest),
        ]

    def new_context(self, spec: BundleSpec) -> RunContext:
        return RunContext(config=self.config, spec=spec, sink=self.sink, now=self.clock())

    def run(self, spec: BundleSpec) -> RunResult:
        """Generate the bundle described by *spec*.

        Raises:
            BundleCreatorError: Any failure; the run is left in the
                ``ABORTED`` state and the error is also reported to the sink.
        """
        ctx = self.new_context(spec)
        self.last_context = ctx
        started = time.monotonic()
        logger.debug(
            "Token policy: %s", "strict" if self.config.strict_tokens else "lenient (unknown placeholders kept)"
        )

        for state, stage in self._stages():
            ctx.enter(state)
            if state is PipelineState.COMPUTING_TAGS:
                self.sink.add_info(f'Started generating "{spec.package_name}" bundle.')
            try:
                stage(ctx)
            except BundleCreatorError as exc:
                self._abort(ctx, state, exc)
                raise
            except OSError as exc:
                error = BundleIOError(f"{state.value}: {exc}")
                self._abort(ctx, state, error)
                raise error from exc
            except Exception as exc:
                error = BundleCreatorError(f"{state.value}: {exc}")
                self._abort(ctx, state, error)
                raise error from exc

        ctx.enter(PipelineState.DONE)
        duration = format_duration(time.monotonic() - started)
        self.sink.add_confirmation(f'Bundle "{spec.package_name}" generated in {duration}.')

        return RunResult(
            package_root=ctx.package_root,
            archive_path=ctx.archive_path,
            backup_path=ctx.backup_path,
            root_composer_backup=ctx.root_composer_backup,
            written=list(ctx.written),
            history=list(ctx.history),
            messages=self.sink.messages,
            duration=duration,
        )

    def _abort(self, ctx: RunContext, state: PipelineState, exc: Exception) -> None:
        ctx.enter(PipelineState.ABORTED)
        logger.debug("Run aborted in state %s", state.value, exc_info=exc)
        self.sink.add_error(str(exc))
