import os
import sys
import shutil
import click
from .. import config as config_module
from ..builder import REGENERATE_COMMANDS
from ..cli_logger import logger
from ..decorators import handle_exceptions

REQUIRED_TOOLS = ["pkg-config"] + [program for program, _ in REGENERATE_COMMANDS] + ["sh", "make"]


def check_environment(path):
    """Check that the autotools chain is installed and the vendored tree is present."""
    all_ok = True
    for tool in REQUIRED_TOOLS:
        location = shutil.which(tool)
        if location:
            logger.step_info(f"  - {tool}: {location}")
        else:
            logger.warning(f"{tool} was not found on PATH.")
            all_ok = False

    settings = config_module.get_settings(config_module.load_config(path=path))
    source_dir = os.path.join(path, settings.source_dir)
    if not os.path.isfile(os.path.join(source_dir, "configure.ac")):
        logger.warning(f"No configure.ac found in {source_dir}. Is the alsa-lib submodule checked out?")
        all_ok = False
    else:
        logger.step_info(f"  - alsa-lib sources: {source_dir}")
    return all_ok


@click.command()
@click.pass_context
@handle_exceptions
def doctor(ctx):
    """Check if all tools needed to build the vendored alsa-lib are installed."""
    logger.info("Running environment check...")
    if check_environment(ctx.obj["path"] or "."):
        logger.success("Environment check completed successfully.")
    else:
        logger.error("Environment check found issues. Please review the warnings above.")
        sys.exit(1)
