"""Contao bundle creator -- generates extension skeletons from templates.

Quick usage::

    from pathlib import Path
    from bundle_creator import BundleMaker, BundleSpec, Config

    spec = BundleSpec(vendor_name="acme", repository_name="demo-bundle")
    result = BundleMaker(Config(project_dir=Path("/var/www/contao"))).run(spec)
    print(result.archive_path)
"""

from bundle_creator.config import Config
from bundle_creator.errors import (
    BundleCreatorError,
    BundleIOError,
    DuplicateStagingError,
    MissingTagError,
    PreconditionError,
    StagedFileNotFoundError,
    StructuredContentError,
    TemplateEncodingError,
    TemplateNotFoundError,
    UnresolvedReferenceError,
)
from bundle_creator.maker import BundleMaker, PipelineState, RunResult
from bundle_creator.messages import MessageSink
from bundle_creator.models import BundleSpec

__version__ = "1.0.0"

__all__ = [
    "BundleCreatorError",
    "BundleIOError",
    "BundleMaker",
    "BundleSpec",
    "Config",
    "DuplicateStagingError",
    "MessageSink",
    "MissingTagError",
    "PipelineState",
    "PreconditionError",
    "RunResult",
    "StagedFileNotFoundError",
    "StructuredContentError",
    "TemplateEncodingError",
    "TemplateNotFoundError",
    "UnresolvedReferenceError",
]
