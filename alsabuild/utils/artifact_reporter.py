import os
from dataclasses import dataclass

import click

from ..errors import PathEncodingError

LINK_LIBRARIES = ("asound", "atopology")


@dataclass(frozen=True)
class LinkResult:
    search_paths: tuple
    libraries: tuple
    source: str = "vendored"


def _as_text(path):
    text = os.fspath(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise PathEncodingError(text) from None
    return text


def report(install_dir) -> LinkResult:
    """Describe the libraries staged by ``make install DESTDIR=<install_dir>``."""
    lib_dir = _as_text(os.path.join(install_dir, "usr", "lib"))
    return LinkResult(search_paths=(lib_dir,), libraries=LINK_LIBRARIES)


def emit_directives(result: LinkResult):
    for path in result.search_paths:
        click.echo(f"cargo:rustc-link-search={path}")
    for name in result.libraries:
        click.echo(f"cargo:rustc-link-lib={name}")


def emit_warning(message):
    click.echo(f"cargo:warning={message}")
