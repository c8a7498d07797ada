import os
from dataclasses import dataclass

import toml
from packaging.version import parse as parse_version, InvalidVersion

from .cli_logger import logger
from .errors import ConfigError, MissingEnvironmentError

CONFIG_FILE = "alsabuild.toml"

DEFAULT_SOURCE_DIR = "alsa-lib"
DEFAULT_PKG_CONFIG_NAME = "alsa"
DEFAULT_MIN_VERSION = "1.2"

# Environment variables set by Cargo for build scripts.
ENV_MANIFEST_DIR = "CARGO_MANIFEST_DIR"
ENV_OUT_DIR = "OUT_DIR"
ENV_HOST = "HOST"
ENV_TARGET = "TARGET"


@dataclass(frozen=True)
class BuildEnvironment:
    manifest_dir: str
    out_dir: str
    host: str
    target: str


@dataclass(frozen=True)
class Settings:
    source_dir: str = DEFAULT_SOURCE_DIR
    pkg_config_name: str = DEFAULT_PKG_CONFIG_NAME
    min_version: str = DEFAULT_MIN_VERSION
    jobs: int = 0


def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    if not os.path.exists(config_path):
        return {}
    logger.info(f"Loading configuration from {config_path}")
    try:
        with open(config_path, "r") as f:
            return toml.load(f)
    except toml.TomlDecodeError as e:
        logger.error(f"Error decoding TOML file at {config_path}: {e}")
        logger.info("Please check the file's format for syntax errors.")
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except IOError as e:
        logger.error(f"Error reading configuration file at {config_path}: {e}")
        logger.info("Please check file permissions.")
        raise ConfigError(f"Could not read {config_path}: {e}") from e

def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False
    return True


def get_settings(conf) -> Settings:
    """Validate the [alsa] and [build] tables of a loaded configuration."""
    alsa = conf.get("alsa", {})
    build = conf.get("build", {})

    min_version = str(alsa.get("min_version", DEFAULT_MIN_VERSION))
    try:
        parse_version(min_version)
    except InvalidVersion as e:
        raise ConfigError(f"alsa.min_version is not a valid version: {min_version!r}") from e

    jobs = build.get("jobs", 0)
    try:
        jobs = int(jobs)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"build.jobs must be an integer, got {jobs!r}") from e
    if jobs < 0:
        raise ConfigError(f"build.jobs must not be negative, got {jobs}")

    return Settings(
        source_dir=str(alsa.get("source_dir", DEFAULT_SOURCE_DIR)),
        pkg_config_name=str(alsa.get("pkg_config_name", DEFAULT_PKG_CONFIG_NAME)),
        min_version=min_version,
        jobs=jobs,
    )


def _required(environ, name, override=None):
    value = override if override else environ.get(name)
    if not value:
        raise MissingEnvironmentError(name)
    return value


def read_build_environment(environ=None, manifest_dir=None, out_dir=None, host=None, target=None):
    """Collect the build script inputs, letting explicit values win over the environment."""
    if environ is None:
        environ = os.environ
    return BuildEnvironment(
        manifest_dir=_required(environ, ENV_MANIFEST_DIR, manifest_dir),
        out_dir=_required(environ, ENV_OUT_DIR, out_dir),
        host=_required(environ, ENV_HOST, host),
        target=_required(environ, ENV_TARGET, target),
    )
