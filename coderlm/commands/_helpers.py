"""CLI helpers shared by the launch commands."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click

from coderlm.errors import LaunchError, ResourceError, UsageError


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@contextmanager
def translate_errors(ctx: click.Context) -> Iterator[None]:
    """Map launcher errors onto Click's exit-code conventions.

    Usage errors exit 2, resource errors exit 1, and launch failures exit
    with the code carried by the error.
    """
    try:
        yield
    except UsageError as e:
        raise click.UsageError(str(e), ctx=ctx) from e
    except ResourceError as e:
        raise click.ClickException(str(e)) from e
    except LaunchError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(e.exit_code)
