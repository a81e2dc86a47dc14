"""
Root Typer application for the rundeck-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from rundeck_spine import __version__

app = Typer(
    name="rundeck-spine",
    help="rundeck-spine: read job definitions from a scheduling service.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rundeck-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """rundeck-spine CLI: list and inspect scheduled jobs."""


from rundeck_spine.cli.jobs import app as jobs_app  # noqa: E402

app.add_typer(jobs_app, name="jobs", help="Job listing and definitions.")
