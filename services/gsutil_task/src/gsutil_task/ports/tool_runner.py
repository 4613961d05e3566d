from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from gsutil_task.domain.exec_result import ExecResult


@dataclass
class ExecOptions:
    cwd: str | None = None
    env: dict[str, str] | None = None
    silent: bool = False


class ToolRunnerPort(Protocol):
    def line(self, text: str) -> "ToolRunnerPort": ...

    def arg(self, text: str) -> "ToolRunnerPort": ...

    def arg_if(self, condition: bool, text: str) -> "ToolRunnerPort": ...

    def exec_sync(self, options: ExecOptions | None = None) -> ExecResult: ...
