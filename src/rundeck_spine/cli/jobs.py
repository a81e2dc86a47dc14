"""
CLI: ``rundeck-spine jobs``: job listing and definitions.
"""

from __future__ import annotations

import typer

from rundeck_spine.cli.utils import (
    console,
    fail,
    make_client,
    output_json,
    print_dict,
    print_table,
)
from rundeck_spine.core.errors import RundeckSpineError

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_jobs(
    project: str = typer.Argument(..., help="Project name"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List the jobs defined in a project."""
    client, fetcher = make_client()
    with fetcher:
        try:
            jobs = client.list_job_summaries(project)
        except RundeckSpineError as exc:
            fail(exc)

    if json_out:
        output_json(jobs)
        return
    print_table(
        [{"id": job.id, "group": job.group, "name": job.name} for job in jobs],
        title=f"Jobs: {project}",
    )


@app.command("show")
def show_job(
    job_id: str = typer.Argument(..., help="Job ID"),
    json_out: bool = typer.Option(False, "--json"),
    xml_out: bool = typer.Option(False, "--xml", help="Print the re-encoded definition."),
) -> None:
    """Show the full definition of one job."""
    from rundeck_spine.codec.documents import encode_job_details

    client, fetcher = make_client()
    with fetcher:
        try:
            job = client.get_job_detail(job_id)
        except RundeckSpineError as exc:
            fail(exc)

    if xml_out:
        typer.echo(encode_job_details([job]).decode("utf-8"))
        return
    if json_out:
        output_json(job)
        return
    print_dict(
        {
            "id": job.id,
            "name": job.name,
            "group": job.group,
            "project": job.project,
            "description": job.description,
            "options": len(job.options.options),
            "steps": len(job.command_sequence.commands),
            "node filter": job.node_filter.query,
        },
        title=f"Job: {job_id}",
    )
    for index, command in enumerate(job.command_sequence.commands, start=1):
        console.print(f"  [dim]{index}.[/dim] {type(command).__name__}")
