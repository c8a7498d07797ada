import os
import shlex
from dataclasses import dataclass, field
from packaging.version import parse as parse_version, InvalidVersion

from ..cli_logger import logger
from .command_executor import run_shell_command


@dataclass(frozen=True)
class Found:
    link_dir: str
    libraries: tuple = field(default_factory=tuple)
    version: str = ""

    is_absent = False


@dataclass(frozen=True)
class NotFound:
    message: str = ""

    is_absent = True


@dataclass(frozen=True)
class VersionTooLow:
    found_version: str
    required_version: str

    is_absent = True


@dataclass(frozen=True)
class ProbeFailed:
    message: str

    is_absent = False


def _pkg_config_program():
    return os.environ.get("PKG_CONFIG") or "pkg-config"


def _query(program, args, name):
    return run_shell_command([program, *args, name])


def _query_failed(program, args, name, stderr, returncode):
    """Map a failed query: pkg-config that could not run is fatal, any other exit means absent."""
    if returncode < 0:
        return ProbeFailed(f"Could not run {program}: {stderr.strip()}")
    return NotFound(f"`{program} {' '.join(args)} {name}` failed: {stderr.strip()}")


def _split_flags(output, flag):
    return [token[len(flag):] for token in shlex.split(output) if token.startswith(flag) and len(token) > len(flag)]


def probe(name: str, min_version: str, prefer_static: bool = True):
    """Ask pkg-config for ``name`` at ``min_version`` or newer.

    Returns one of Found, NotFound, VersionTooLow or ProbeFailed. Any non-zero
    pkg-config exit counts as absence. ProbeFailed is kept for pkg-config
    being unavailable or answering with output that cannot be used.
    """
    program = _pkg_config_program()
    logger.info(f"Probing {program} for {name} >= {min_version}")

    stdout, stderr, returncode = _query(program, ["--exists", "--print-errors"], name)
    if returncode < 0:
        return ProbeFailed(f"Could not run {program}: {stderr.strip()}")
    if returncode != 0:
        return NotFound(stderr.strip())

    stdout, stderr, returncode = _query(program, ["--modversion"], name)
    if returncode != 0:
        return _query_failed(program, ["--modversion"], name, stderr, returncode)
    found_version = stdout.strip()
    try:
        if parse_version(found_version) < parse_version(min_version):
            return VersionTooLow(found_version, min_version)
    except InvalidVersion as e:
        return ProbeFailed(f"Could not compare {name} version {found_version!r} with {min_version!r}: {e}")

    static_flag = ["--static"] if prefer_static else []
    stdout, stderr, returncode = _query(program, ["--libs-only-L", *static_flag], name)
    if returncode != 0:
        return _query_failed(program, ["--libs-only-L", *static_flag], name, stderr, returncode)
    link_dirs = _split_flags(stdout, "-L")

    if not link_dirs:
        # pkg-config strips system directories from -L output
        stdout, stderr, returncode = _query(program, ["--variable=libdir"], name)
        if returncode != 0:
            return _query_failed(program, ["--variable=libdir"], name, stderr, returncode)
        link_dirs = [stdout.strip()] if stdout.strip() else []
    if not link_dirs:
        return ProbeFailed(f"{program} did not report a library directory for {name}")

    stdout, stderr, returncode = _query(program, ["--libs-only-l", *static_flag], name)
    if returncode != 0:
        return _query_failed(program, ["--libs-only-l", *static_flag], name, stderr, returncode)

    return Found(link_dirs[0], tuple(_split_flags(stdout, "-l")), found_version)
