from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from typing import TextIO

from gsutil_task.adapters.errors import ToolNotFound
from gsutil_task.domain.command_line import TOOL_NAME
from gsutil_task.domain.exec_result import ExecError, ExecResult
from gsutil_task.ports.tool_runner import ExecOptions

logger = logging.getLogger(__name__)

GSUTIL_PATH_ENV = "GSUTIL_PATH"


def find_gsutil(environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    configured = env.get(GSUTIL_PATH_ENV)
    if configured:
        return configured
    found = shutil.which(TOOL_NAME, path=env.get("PATH"))
    if found is None:
        raise ToolNotFound(
            f"{TOOL_NAME} was not found on PATH",
            hint=f"Install the Cloud SDK or set {GSUTIL_PATH_ENV}",
        )
    return found


class SubprocessToolRunner:
    def __init__(self, tool_path: str, out: TextIO | None = None) -> None:
        self.tool_path = tool_path
        self.args: list[str] = []
        self.out = out or sys.stdout

    def line(self, text: str) -> "SubprocessToolRunner":
        self.args.extend(shlex.split(text))
        return self

    def arg(self, text: str) -> "SubprocessToolRunner":
        self.args.append(text)
        return self

    def arg_if(self, condition: bool, text: str) -> "SubprocessToolRunner":
        if condition:
            self.args.append(text)
        return self

    def command_line(self) -> str:
        return shlex.join([self.tool_path, *self.args])

    def exec_sync(self, options: ExecOptions | None = None) -> ExecResult:
        opts = options or ExecOptions()
        env = None
        if opts.env is not None:
            env = {**os.environ, **opts.env}
        if not opts.silent:
            self.out.write(f"[command]{self.command_line()}\n")
        try:
            proc = subprocess.run(
                [self.tool_path, *self.args],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                cwd=opts.cwd,
                env=env,
            )
        except OSError as e:
            logger.debug("failed to launch %s", self.tool_path, exc_info=True)
            return ExecResult(
                stdout="",
                stderr="",
                code=-1,
                error=ExecError(name=type(e).__name__, message=str(e)),
            )
        if not opts.silent:
            if proc.stdout:
                self.out.write(proc.stdout)
            if proc.stderr:
                self.out.write(proc.stderr)
            self.out.flush()
        return ExecResult(stdout=proc.stdout, stderr=proc.stderr, code=proc.returncode)
