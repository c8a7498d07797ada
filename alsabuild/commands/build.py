import os
import click
from .. import builder
from .. import config as config_module
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..resolver import select_and_build
from ..utils.artifact_reporter import emit_directives

@click.command()
@click.pass_context
@click.option("--host", default=None, help="Build host triple (defaults to $HOST).")
@click.option("--target", default=None, help="Build target triple (defaults to $TARGET).")
@click.option("--out-dir", default=None, help="Scratch directory for the build (defaults to $OUT_DIR).")
@handle_exceptions
def build(ctx, host, target, out_dir):
    """Resolve alsa-lib and print the cargo link directives."""
    env = config_module.read_build_environment(
        manifest_dir=ctx.obj["path"], out_dir=out_dir, host=host, target=target
    )
    settings = config_module.get_settings(config_module.load_config(path=env.manifest_dir))
    logger.info(f"Resolving alsa-lib for {env.target} (host {env.host})...")

    source_dir = os.path.join(env.manifest_dir, settings.source_dir)
    context = builder.prepare_build_context(source_dir, env.out_dir)

    result = select_and_build(env.host, env.target, context, settings=settings)
    emit_directives(result)
    logger.success(f"Linking alsa-lib from {', '.join(result.search_paths)} ({result.source}).")
