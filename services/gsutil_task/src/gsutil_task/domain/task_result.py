from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gsutil_task.domain.command_line import TOOL_NAME
from gsutil_task.domain.exec_result import ExecResult


class TaskResult(str, Enum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class OutcomeKind(str, Enum):
    LAUNCH_ERROR = "launch_error"
    NON_ZERO_EXIT = "non_zero_exit"
    CLEAN_EXIT = "clean_exit"


@dataclass(frozen=True)
class Outcome:
    result: TaskResult
    message: str
    kind: OutcomeKind

    @property
    def succeeded(self) -> bool:
        return self.result == TaskResult.SUCCEEDED

    @property
    def publishes_output(self) -> bool:
        return self.kind != OutcomeKind.LAUNCH_ERROR


def returned_code_message(code: int, tool: str = TOOL_NAME) -> str:
    return f"{tool} returned code {code}"


def classify(
    exec_result: ExecResult, ignore_return_code: bool, tool: str = TOOL_NAME
) -> Outcome:
    if exec_result.error is not None:
        return Outcome(
            TaskResult.FAILED, exec_result.error.message, OutcomeKind.LAUNCH_ERROR
        )
    code = exec_result.code
    if code != 0:
        if ignore_return_code:
            return Outcome(
                TaskResult.SUCCEEDED,
                returned_code_message(code, tool),
                OutcomeKind.NON_ZERO_EXIT,
            )
        message = exec_result.stderr or returned_code_message(code, tool)
        return Outcome(TaskResult.FAILED, message, OutcomeKind.NON_ZERO_EXIT)
    return Outcome(
        TaskResult.SUCCEEDED, returned_code_message(code, tool), OutcomeKind.CLEAN_EXIT
    )
