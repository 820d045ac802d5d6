"""Run state threaded through the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from ..config import Config
from ..messages import MessageSink
from ..models import BundleSpec
from .staging import StagingStore
from .tags import TagStore


class PipelineState(str, Enum):
    """States of one generator run, in execution order."""

    IDLE = "idle"
    VALIDATING_PRECONDITIONS = "validating_preconditions"
    COMPUTING_TAGS = "computing_tags"
    STAGING = "staging"
    VALIDATING_STRUCTURED_CONTENT = "validating_structured_content"
    BACKING_UP_EXISTING = "backing_up_existing"
    RESOLVING_TOKENS = "resolving_tokens"
    MATERIALIZING = "materializing"
    ARCHIVING = "archiving"
    AUGMENTING_MANIFEST = "augmenting_manifest"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RunContext:
    """Everything one run reads and produces.

    A context is created per run and never shared; stage functions receive it
    explicitly instead of reading state from a long-lived object.
    """

    config: Config
    spec: BundleSpec
    sink: MessageSink
    now: datetime = field(default_factory=datetime.now)
    tags: TagStore = field(default_factory=TagStore)
    staging: StagingStore = field(default_factory=StagingStore)
    package_existed: bool = False
    backup_path: Path | None = None
    archive_path: Path | None = None
    root_composer_backup: Path | None = None
    written: list[Path] = field(default_factory=list)
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.IDLE])

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    def enter(self, state: PipelineState) -> None:
        self.history.append(state)

    @property
    def package_root(self) -> Path:
        return self.config.package_root(self.spec)

    def skeleton(self, *parts: str) -> Path:
        """Path of a file inside the skeleton directory."""
        return self.config.skeleton_dir.joinpath(*parts)

    def target(self, *parts: str) -> Path:
        """Path of a file inside the generated package."""
        return self.package_root.joinpath(*parts)
