from __future__ import annotations

import logging
import os

import typer

from gsutil_task.adapters.endpoint.service_account import ServiceAccountEndpoint
from gsutil_task.adapters.errors import AdapterError
from gsutil_task.adapters.task_host.logging_handler import PipelineLogHandler
from gsutil_task.adapters.task_host.pipeline_host import PipelineTaskHost
from gsutil_task.adapters.tool_runner.subprocess_runner import (
    SubprocessToolRunner,
    find_gsutil,
)
from gsutil_task.application.run_gsutil import run_gsutil
from gsutil_task.application.task_inputs import (
    COMMAND,
    IGNORE_RETURN_CODE,
    INCLUDE_PROJECT_PARAM,
    OUTPUT_VARIABLE,
    SERVICE_ENDPOINT,
    load_run_options,
)
from gsutil_task.application.task_manifest import load_task_manifest
from gsutil_task.domain.task_result import TaskResult

app = typer.Typer(add_completion=False)

logger = logging.getLogger("gsutil_task")


def _configure_logging(debug: bool) -> None:
    if not debug:
        debug = os.environ.get("SYSTEM_DEBUG", "").lower() == "true"
    for handler in list(logger.handlers):
        if isinstance(handler, PipelineLogHandler):
            logger.removeHandler(handler)
    logger.addHandler(PipelineLogHandler())
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False


@app.command()
def run(
    command: str | None = typer.Option(None, "--command"),
    endpoint: str | None = typer.Option(None, "--endpoint"),
    include_project_param: bool | None = typer.Option(
        None, "--include-project-param/--no-include-project-param"
    ),
    ignore_return_code: bool | None = typer.Option(
        None, "--ignore-return-code/--no-ignore-return-code"
    ),
    output_variable: str | None = typer.Option(None, "--output-variable"),
    debug: bool = typer.Option(False, "--debug"),
):
    _configure_logging(debug)
    host = PipelineTaskHost()
    overrides = {
        SERVICE_ENDPOINT: endpoint,
        COMMAND: command,
        INCLUDE_PROJECT_PARAM: include_project_param,
        IGNORE_RETURN_CODE: ignore_return_code,
        OUTPUT_VARIABLE: output_variable,
    }
    try:
        manifest = load_task_manifest()
        options = load_run_options(
            host,
            manifest,
            endpoint_factory=ServiceAccountEndpoint,
            tool_factory=lambda: SubprocessToolRunner(find_gsutil()),
            overrides=overrides,
        )
    except AdapterError as e:
        logger.error(str(e))
        if e.hint:
            logger.info(e.hint)
        host.set_result(TaskResult.FAILED, str(e))
        raise typer.Exit(1)
    outcome = run_gsutil(options, host)
    raise typer.Exit(0 if outcome.succeeded else 1)


@app.command()
def manifest(json: bool = False):
    try:
        task = load_task_manifest()
    except AdapterError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(2)
    if json:
        import json as _json

        typer.echo(_json.dumps(task.raw, indent=2, sort_keys=True))
    else:
        typer.echo(f"{task.name} {task.version} ({task.id})")
        for item in task.inputs:
            flag = " (required)" if item.required else ""
            typer.echo(f"  {item.name}: {item.type}{flag}")
