"""Bundle maker -- tag store, token engine, staging store and assembly pipeline."""

from bundle_creator.maker.context import PipelineState, RunContext
from bundle_creator.maker.pipeline import BundleMaker, RunResult
from bundle_creator.maker.staging import StagedFile, StagingStore
from bundle_creator.maker.tags import TagStore

__all__ = [
    "BundleMaker",
    "PipelineState",
    "RunContext",
    "RunResult",
    "StagedFile",
    "StagingStore",
    "TagStore",
]
