import click
from .. import config as config_module
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..errors import ProbeError
from ..utils import pkg_config

@click.command()
@click.pass_context
@click.option("--dynamic", is_flag=True, help="Ask pkg-config for shared linkage instead of static.")
@handle_exceptions
def probe(ctx, dynamic):
    """Check whether a usable system alsa-lib is available through pkg-config."""
    settings = config_module.get_settings(config_module.load_config(path=ctx.obj["path"] or "."))
    outcome = pkg_config.probe(settings.pkg_config_name, settings.min_version, prefer_static=not dynamic)

    if isinstance(outcome, pkg_config.Found):
        logger.success(f"Found {settings.pkg_config_name} {outcome.version} in {outcome.link_dir}")
        click.echo(f"link-search: {outcome.link_dir}")
        click.echo(f"link-libs: {' '.join(outcome.libraries)}")
    elif isinstance(outcome, pkg_config.VersionTooLow):
        logger.warning(
            f"{settings.pkg_config_name} {outcome.found_version} is older than the required {outcome.required_version}; "
            "the vendored copy would be built."
        )
    elif isinstance(outcome, pkg_config.NotFound):
        logger.warning(f"{settings.pkg_config_name} was not found by pkg-config; the vendored copy would be built.")
        if outcome.message:
            logger.info(outcome.message)
    else:
        raise ProbeError(outcome.message)
