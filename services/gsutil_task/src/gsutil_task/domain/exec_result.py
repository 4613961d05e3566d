from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecError:
    """The process could not be started, or died outside a normal exit."""

    name: str
    message: str


@dataclass
class ExecResult:
    stdout: str
    stderr: str
    code: int
    error: ExecError | None = None
