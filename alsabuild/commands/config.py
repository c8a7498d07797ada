import click
import os
import sys
import json
from .. import config as config_module
from ..cli_logger import logger
from ..decorators import handle_exceptions


def _project_path(ctx):
    return ctx.obj["path"] or "."


@click.group()
@click.pass_context
def config(ctx):
    """View or edit the alsabuild.toml configuration file."""
    pass

@config.command()
@click.pass_context
@handle_exceptions
def view(ctx):
    """View the contents of the alsabuild.toml file."""
    config_file_path = os.path.join(_project_path(ctx), config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.error("Error: No alsabuild.toml found. Built-in defaults are in use.")
        return
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading alsabuild.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")

@config.command()
@click.pass_context
@handle_exceptions
def list(ctx):
    """List the effective settings, defaults included."""
    conf = config_module.load_config(path=_project_path(ctx))
    settings = config_module.get_settings(conf)
    click.echo(json.dumps({
        "alsa": {
            "source_dir": settings.source_dir,
            "pkg_config_name": settings.pkg_config_name,
            "min_version": settings.min_version,
        },
        "build": {"jobs": settings.jobs},
    }, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
@handle_exceptions
def get(ctx, key):
    """Get a value from the alsabuild.toml file."""
    conf = config_module.load_config(path=_project_path(ctx))

    keys = key.split('.')
    value = conf
    try:
        for k in keys:
            value = value[k]
        click.echo(value)
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in alsabuild.toml")

@config.command()
@click.argument('key')
@click.argument('value')
@click.pass_context
@handle_exceptions
def set(ctx, key, value):
    """Set a value in the alsabuild.toml file, creating it if needed."""
    conf = config_module.load_config(path=_project_path(ctx))

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = value

    config_module.get_settings(conf)
    if config_module.save_config(conf, path=_project_path(ctx)):
        logger.info(f"Set '{key}' to '{value}'")
    else:
        sys.exit(1)

@config.command()
@click.argument('key')
@click.pass_context
@handle_exceptions
def unset(ctx, key):
    """Remove a key from the alsabuild.toml file."""
    conf = config_module.load_config(path=_project_path(ctx))

    keys = key.split('.')
    d = conf
    try:
        for k in keys[:-1]:
            d = d[k]
        del d[keys[-1]]
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in alsabuild.toml")
        return
    if config_module.save_config(conf, path=_project_path(ctx)):
        logger.info(f"Unset '{key}'")
    else:
        sys.exit(1)
