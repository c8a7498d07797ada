import os
import shlex
from dataclasses import dataclass

from .cli_logger import logger
from .errors import StageFailedError
from .utils.command_executor import SubprocessRunner, format_command

BUILD_SUBDIR = "build"
INSTALL_SUBDIR = "install"

# Bootstrap chain run in the source tree, in order.
REGENERATE_COMMANDS = (
    ("libtoolize", ["--force", "--copy", "--automake"]),
    ("aclocal", []),
    ("autoheader", []),
    ("automake", ["--foreign", "--copy", "--add-missing"]),
    ("autoconf", []),
)

STATIC_ONLY_FLAGS = ["--enable-shared=no", "--enable-static=yes"]


@dataclass(frozen=True)
class BuildContext:
    source_dir: str
    build_dir: str
    install_dir: str
    cross_target: str | None = None


def prepare_build_context(source_dir, out_dir, cross_target=None) -> BuildContext:
    """Create the scratch directories under ``out_dir``. Existing trees are reused as-is."""
    build_dir = os.path.join(out_dir, BUILD_SUBDIR)
    install_dir = os.path.join(out_dir, INSTALL_SUBDIR)
    os.makedirs(build_dir, exist_ok=True)
    os.makedirs(install_dir, exist_ok=True)
    return BuildContext(source_dir, build_dir, install_dir, cross_target)


def execute(runner, program, args, cwd, extra_env=None):
    """Echo and run one command; a non-zero exit aborts the build."""
    command = [program, *args]
    env_prefix = "".join(f"{key}={shlex.quote(str(value))} " for key, value in (extra_env or {}).items())
    logger.step_info(f"$ {env_prefix}{format_command(program, args)}    (in {cwd})")
    returncode = runner.run(program, args, cwd, extra_env)
    if returncode != 0:
        raise StageFailedError(command, cwd, returncode)


def regenerate(context, runner):
    logger.info("Regenerating the autotools build scripts...")
    for program, args in REGENERATE_COMMANDS:
        execute(runner, program, args, context.source_dir)


def configure_args(context):
    configure_script = os.path.join(context.source_dir, "configure")
    args = [configure_script, *STATIC_ONLY_FLAGS]
    if context.cross_target is not None:
        args.append(f"--host={context.cross_target}")
    return args


def configure(context, runner):
    if context.cross_target is not None:
        logger.info(f"Configuring for cross compilation to {context.cross_target}...")
    else:
        logger.info("Configuring for a native build...")
    execute(runner, "sh", configure_args(context), context.build_dir)


def compile_sources(context, runner, jobs=0):
    logger.info("Compiling...")
    args = [f"-j{jobs}"] if jobs else []
    execute(runner, "make", args, context.build_dir)


def install(context, runner):
    logger.info(f"Installing into {context.install_dir}...")
    execute(runner, "make", ["install"], context.build_dir, {"DESTDIR": context.install_dir})


def run_pipeline(context: BuildContext, runner=None, jobs=0):
    """Regenerate, configure, compile and install the vendored source tree.

    Stages run strictly in order and the first failure raises
    StageFailedError. Nothing created so far is removed.
    """
    if runner is None:
        runner = SubprocessRunner()
    regenerate(context, runner)
    configure(context, runner)
    compile_sources(context, runner, jobs)
    install(context, runner)
    logger.success(f"alsa-lib installed into {context.install_dir}")
