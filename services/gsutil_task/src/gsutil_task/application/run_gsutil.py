from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from gsutil_task.domain.command_line import TOOL_NAME, strip_tool_name
from gsutil_task.domain.task_result import Outcome, OutcomeKind, TaskResult, classify
from gsutil_task.ports.endpoint import EndpointPort
from gsutil_task.ports.task_host import TaskHostPort
from gsutil_task.ports.tool_runner import ExecOptions, ToolRunnerPort

logger = logging.getLogger(__name__)


@dataclass
class RunGsutilOptions:
    command: str
    gsutil_tool: ToolRunnerPort
    endpoint: EndpointPort
    include_project_param: bool = False
    ignore_return_code: bool = False
    output_variable: str | None = None
    exec_options: ExecOptions | None = None


@contextmanager
def credentials(endpoint: EndpointPort) -> Iterator[EndpointPort]:
    try:
        endpoint.init_credentials()
        yield endpoint
    finally:
        endpoint.clear_credentials()


def _invoke(options: RunGsutilOptions) -> tuple[Outcome, str]:
    command = strip_tool_name(options.command, TOOL_NAME)
    logger.debug("running %s %s", TOOL_NAME, command)
    exec_result = (
        options.gsutil_tool.line(command)
        .arg(options.endpoint.credential_param)
        .arg_if(options.include_project_param, options.endpoint.project_param)
        .exec_sync(options.exec_options)
    )
    outcome = classify(exec_result, options.ignore_return_code, TOOL_NAME)
    if outcome.kind == OutcomeKind.NON_ZERO_EXIT and outcome.succeeded:
        logger.warning("ignoring %s", outcome.message)
    return outcome, exec_result.stdout


def run_gsutil(options: RunGsutilOptions, host: TaskHostPort) -> Outcome:
    """Run one gsutil command and report the outcome to ``host``.

    Credentials are held only for the duration of the process run. Every
    failure, including an exception raised while building or running the
    invocation, becomes a single Failed report rather than propagating.
    """
    stdout: str | None = None
    try:
        with credentials(options.endpoint):
            outcome, stdout = _invoke(options)
    except Exception as e:
        logger.debug("gsutil invocation raised", exc_info=True)
        outcome = Outcome(
            TaskResult.FAILED, str(e) or type(e).__name__, OutcomeKind.LAUNCH_ERROR
        )
    if options.output_variable and outcome.publishes_output and stdout is not None:
        host.set_variable(options.output_variable, stdout)
    host.set_result(outcome.result, outcome.message)
    return outcome
