"""Template catalog: which skeleton file goes where.

Each ``add_*`` function stages one group of files into the run's staging
store.  ``STAGING_STEPS`` lists them in execution order together with the
condition under which they run.  Registry files shared by several optional
blocks (``modules.php``, ``default.php``) are created by whichever block runs
first and then extended by appending that block's fragment.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import TemplateNotFoundError
from ..models import BundleSpec
from .composer import build_composer_manifest
from .context import RunContext
from .staging import read_template_text

logger = logging.getLogger(__name__)

LANGUAGE_DIR = ("src", "Resources", "contao", "languages", "en")
DCA_DIR = ("src", "Resources", "contao", "dca")
TEMPLATES_DIR = ("src", "Resources", "contao", "templates")
CONFIG_DIR = ("src", "Resources", "config")

CONFIG_FILES = ("listener.tpl.yml", "parameters.tpl.yml", "services.tpl.yml")


def read_partial(ctx: RunContext, filename: str) -> str:
    """Raw (unresolved) content of ``skeleton/partials/<filename>``."""
    path = ctx.skeleton("partials", filename)
    if not path.is_file():
        raise TemplateNotFoundError(path, kind="Partial")
    return read_template_text(path)


def _extend_registry(ctx: RunContext, filename: str, fragment: str | None = None) -> None:
    """Create ``languages/en/<filename>.php`` if needed and append *fragment*."""
    target = ctx.target(*LANGUAGE_DIR, f"{filename}.php")
    ctx.staging.ensure_file(ctx.skeleton(*LANGUAGE_DIR, f"{filename}.tpl.php"), target)
    if fragment:
        ctx.staging.append_content(target, read_partial(ctx, fragment))


# ---------------------------------------------------------------------------
# Core files
# ---------------------------------------------------------------------------


def add_composer_json(ctx: RunContext) -> None:
    source = ctx.skeleton("composer.tpl.json")
    record = ctx.staging.add_file(source, ctx.target("composer.json"))
    manifest = build_composer_manifest(
        str(record.content), ctx.tags, ctx.spec.composer_package_version, origin=source
    )
    ctx.staging.replace_content(record.target, manifest)


def add_bundle_class(ctx: RunContext) -> None:
    class_name = ctx.tags.get("toplevelnamespace") + ctx.tags.get("sublevelnamespace")
    ctx.staging.add_file(ctx.skeleton("src", "Class.tpl.php"), ctx.target("src", f"{class_name}.php"))


def add_dependency_injection_extension(ctx: RunContext) -> None:
    class_name = ctx.tags.get("dependencyinjectionextensionclassname")
    ctx.staging.add_file(
        ctx.skeleton("src", "DependencyInjection", "Extension.tpl.php"),
        ctx.target("src", "DependencyInjection", f"{class_name}.php"),
    )


def add_contao_manager_plugin(ctx: RunContext) -> None:
    ctx.staging.add_file(
        ctx.skeleton("src", "ContaoManager", "Plugin.tpl.php"),
        ctx.target("src", "ContaoManager", "Plugin.php"),
    )


def add_continuous_integration(ctx: RunContext) -> None:
    """phpunit config, plugin test, Travis and GitHub workflow files."""
    pairs = [
        (("phpunit.xml.tpl.dist",), ("phpunit.xml.dist",)),
        (("tests", "ContaoManager", "PluginTest.tpl.php"), ("tests", "ContaoManager", "PluginTest.php")),
        (("travis.tpl.yml",), (".travis.yml",)),
        (("github", "workflows", "ci.tpl.yml"), (".github", "workflows", "ci.yml")),
    ]
    for source, target in pairs:
        ctx.staging.add_file(ctx.skeleton(*source), ctx.target(*target))


def add_misc_files(ctx: RunContext) -> None:
    """YAML configs, contao config.php, public assets, README, .gitattributes."""
    config_files = list(CONFIG_FILES)
    if ctx.spec.add_custom_route:
        config_files.append("routes.tpl.yml")

    for name in config_files:
        ctx.staging.add_file(
            ctx.skeleton(*CONFIG_DIR, name),
            ctx.target(*CONFIG_DIR, name.replace("tpl.", "")),
        )

    ctx.staging.add_file(
        ctx.skeleton("src", "Resources", "contao", "config", "config.tpl.php"),
        ctx.target("src", "Resources", "contao", "config", "config.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton("src", "Resources", "public", "logo.png"),
        ctx.target("src", "Resources", "public", "logo.png"),
    )
    ctx.staging.add_file(ctx.skeleton("README.tpl.md"), ctx.target("README.md"))
    ctx.staging.add_file(ctx.skeleton("gitattributes.tpl.txt"), ctx.target(".gitattributes"))


# ---------------------------------------------------------------------------
# Optional feature blocks
# ---------------------------------------------------------------------------


def add_easy_coding_standard(ctx: RunContext) -> None:
    ctx.staging.add_files_from_folder(ctx.skeleton("ecs"), ctx.target(".ecs"), recursive=True)


def add_backend_module(ctx: RunContext) -> None:
    """DCA table, its language file, the model class and module labels."""
    dca_table = ctx.tags.get("dcatable")
    ctx.staging.add_file(
        ctx.skeleton(*DCA_DIR, "tl_sample_table.tpl.php"),
        ctx.target(*DCA_DIR, f"{dca_table}.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton(*LANGUAGE_DIR, "tl_sample_table.tpl.php"),
        ctx.target(*LANGUAGE_DIR, f"{dca_table}.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton("src", "Model", "Model.tpl.php"),
        ctx.target("src", "Model", f"{ctx.tags.get('modelclassname')}.php"),
    )
    _extend_registry(ctx, "modules", "modules_backend.tpl.txt")
    _extend_registry(ctx, "default")


def add_frontend_module(ctx: RunContext) -> None:
    """Controller, html5 template, tl_module palette and module labels."""
    ctx.staging.add_file(
        ctx.skeleton("src", "Controller", "FrontendModule", "FrontendModuleController.tpl.php"),
        ctx.target("src", "Controller", "FrontendModule", f"{ctx.tags.get('frontendmoduleclassname')}.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton(*TEMPLATES_DIR, "mod_sample_module.tpl.html5"),
        ctx.target(*TEMPLATES_DIR, f"{ctx.tags.get('frontendmoduletemplate')}.html5"),
    )
    ctx.staging.add_file(
        ctx.skeleton(*DCA_DIR, "tl_module.tpl.php"),
        ctx.target(*DCA_DIR, "tl_module.php"),
    )
    _extend_registry(ctx, "modules", "modules_frontend.tpl.txt")
    _extend_registry(ctx, "default")


def add_content_element(ctx: RunContext) -> None:
    """Controller, html5 template, tl_content palette and element labels."""
    ctx.staging.add_file(
        ctx.skeleton("src", "Controller", "ContentElement", "ContentElementController.tpl.php"),
        ctx.target("src", "Controller", "ContentElement", f"{ctx.tags.get('contentelementclassname')}.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton(*TEMPLATES_DIR, "ce_sample_element.tpl.html5"),
        ctx.target(*TEMPLATES_DIR, f"{ctx.tags.get('contentelementtemplate')}.html5"),
    )
    ctx.staging.add_file(
        ctx.skeleton(*DCA_DIR, "tl_content.tpl.php"),
        ctx.target(*DCA_DIR, "tl_content.php"),
    )
    _extend_registry(ctx, "default", "default_content_element.tpl.txt")


def add_custom_route(ctx: RunContext) -> None:
    ctx.staging.add_file(
        ctx.skeleton("src", "Controller", "Controller.tpl.php"),
        ctx.target("src", "Controller", "MyCustomController.php"),
    )
    ctx.staging.add_file(
        ctx.skeleton("src", "Resources", "views", "MyCustom", "my_custom.html.tpl.twig"),
        ctx.target("src", "Resources", "views", "MyCustom", "my_custom.html.twig"),
    )


# ---------------------------------------------------------------------------
# Step table
# ---------------------------------------------------------------------------


def _always(spec: BundleSpec) -> bool:
    return True


@dataclass(frozen=True)
class StagingStep:
    name: str
    run: Callable[[RunContext], None]
    enabled: Callable[[BundleSpec], bool] = _always


STAGING_STEPS: tuple[StagingStep, ...] = (
    StagingStep("composer.json", add_composer_json),
    StagingStep("bundle class", add_bundle_class),
    StagingStep("dependency injection extension", add_dependency_injection_extension),
    StagingStep("contao manager plugin", add_contao_manager_plugin),
    StagingStep("continuous integration", add_continuous_integration),
    StagingStep("misc files", add_misc_files),
    StagingStep("easy coding standard", add_easy_coding_standard, lambda s: s.add_easy_coding_standard),
    StagingStep("backend module", add_backend_module, lambda s: s.has_backend_module),
    StagingStep("frontend module", add_frontend_module, lambda s: s.add_frontend_module),
    StagingStep("content element", add_content_element, lambda s: s.add_content_element),
    StagingStep("custom route", add_custom_route, lambda s: s.add_custom_route),
)


def stage_all(ctx: RunContext) -> list[str]:
    """Run every enabled staging step; returns the names of the steps run."""
    executed: list[str] = []
    for step in STAGING_STEPS:
        if not step.enabled(ctx.spec):
            continue
        step.run(ctx)
        executed.append(step.name)
        logger.debug("Staging step '%s' done (%d files staged)", step.name, len(ctx.staging))
    return executed
