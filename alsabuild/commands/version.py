import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of alsabuild."""
    try:
        ver = importlib.metadata.version("alsabuild")
        logger.info(f"alsabuild version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of alsabuild. Is it installed correctly?")
