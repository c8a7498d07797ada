import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=None, envvar="CARGO_MANIFEST_DIR",
              help="Path to the package root holding the vendored alsa-lib (defaults to $CARGO_MANIFEST_DIR).")
@click.pass_context
def cli(ctx, path):
    """alsabuild: link alsa-lib from the system or build the vendored copy."""
    ctx.obj = {"path": path}

cli.add_command(build)
cli.add_command(probe)
cli.add_command(translate)
cli.add_command(doctor)
cli.add_command(clean)
cli.add_command(config)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    cli()
