import os
import shutil
import click
from .. import builder
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..errors import MissingEnvironmentError

@click.command()
@click.option("--out-dir", default=None, envvar="OUT_DIR", help="Scratch directory used by 'build' (defaults to $OUT_DIR).")
@handle_exceptions
def clean(out_dir):
    """Remove the build and staging trees left by previous builds."""
    if not out_dir:
        raise MissingEnvironmentError("OUT_DIR")

    items_removed = 0
    for subdir in (builder.BUILD_SUBDIR, builder.INSTALL_SUBDIR):
        path = os.path.join(out_dir, subdir)
        if not os.path.isdir(path):
            continue
        logger.info(f"Attempting to remove directory {path}...")
        try:
            shutil.rmtree(path)
            logger.success(f"Removed directory {path}")
            items_removed += 1
        except OSError as e:
            logger.error(f"Error removing directory {path}: {e}")

    if items_removed:
        logger.success(f"Cleaned {items_removed} director{'y' if items_removed == 1 else 'ies'}.")
    else:
        logger.info("Nothing to clean.")
