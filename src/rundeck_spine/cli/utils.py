"""
CLI utility helpers: client construction and output formatting.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rundeck_spine.client import JobsClient
from rundeck_spine.core.errors import ConfigError, RundeckSpineError, is_retryable
from rundeck_spine.core.logging import configure_logging, get_logger
from rundeck_spine.core.settings import RundeckSettings
from rundeck_spine.models.jobs import JobDetail
from rundeck_spine.transport import HttpJobFetcher

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


def load_settings() -> RundeckSettings:
    """Read ``RUNDECK_*`` settings, raising :class:`ConfigError` when invalid."""
    try:
        return RundeckSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"RUNDECK_{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"invalid settings: {problems}", cause=exc) from exc


def make_client() -> tuple[JobsClient, HttpJobFetcher]:
    """Load settings from the environment and build a client + fetcher pair.

    Invalid settings are reported through :func:`fail`.
    """
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        fail(exc)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    fetcher = HttpJobFetcher(settings)
    return JobsClient(fetcher), fetcher


def fail(error: RundeckSpineError) -> NoReturn:
    """Report a library error and exit with status 1."""
    logger.error("command_failed", **error.to_dict())
    err_console.print(
        f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}"
    )
    if is_retryable(error):
        err_console.print("[dim]This failure may be temporary; retrying may succeed.[/dim]")
    raise typer.Exit(code=1)


def _jsonable(item: Any) -> dict[str, Any]:
    payload = asdict(item)
    if isinstance(item, JobDetail):
        commands = payload["command_sequence"]["commands"]
        for entry, command in zip(commands, item.command_sequence.commands):
            entry["kind"] = type(command).__name__
    return payload


def output_json(data: Any) -> None:
    if isinstance(data, list):
        payload: Any = [_jsonable(item) for item in data]
    else:
        payload = _jsonable(data)
    console.print_json(json.dumps(payload, default=str))


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table. Cell values are not markup."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=escape(title) or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row.values()))
    console.print(table)


def print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {escape(str(v))}")
