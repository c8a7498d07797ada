import dataclasses

from . import builder
from .cli_logger import logger
from .config import Settings
from .errors import ProbeError
from .utils import artifact_reporter, pkg_config
from .utils.artifact_reporter import LinkResult
from .utils.triple_translator import resolve_cross_target

FALLBACK_WARNING = (
    "Could not find alsa at least v{version} with pkg-config. Falling back on built-in version. "
    "If you wanted to link to the system alsa-lib, you might need to install pkg-config "
    "and alsa-lib-devel or libasound2-dev."
)


def _system_link_result(found):
    return LinkResult(search_paths=(found.link_dir,), libraries=found.libraries, source="system")


def select_and_build(host, target, context, settings=None, probe=None, runner=None) -> LinkResult:
    """Decide between the system alsa-lib and the vendored copy, building the latter if needed.

    On a native build (``host == target``) pkg-config is consulted first and
    a usable system library short-circuits everything else. A cross build
    always builds the vendored copy, passing the translated target triple to
    configure. Any failure raises; only pkg-config reporting the library as
    missing or too old falls through to the build.
    """
    if settings is None:
        settings = Settings()
    if probe is None:
        probe = pkg_config.probe

    if host == target:
        outcome = probe(settings.pkg_config_name, settings.min_version, prefer_static=True)
        if isinstance(outcome, pkg_config.Found):
            logger.success(f"Using system alsa-lib from {outcome.link_dir}")
            return _system_link_result(outcome)
        if not outcome.is_absent:
            raise ProbeError(outcome.message)
        warning = FALLBACK_WARNING.format(version=settings.min_version)
        logger.warning(warning)
        artifact_reporter.emit_warning(warning)
    else:
        logger.info(f"Cross compiling from {host} to {target}, skipping pkg-config.")

    context = dataclasses.replace(context, cross_target=resolve_cross_target(host, target))
    builder.run_pipeline(context, runner, jobs=settings.jobs)
    return artifact_reporter.report(context.install_dir)
