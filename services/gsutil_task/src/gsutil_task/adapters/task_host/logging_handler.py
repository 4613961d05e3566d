import logging
import sys
from typing import TextIO

from gsutil_task.adapters.task_host.pipeline_host import logging_command


class PipelineLogHandler(logging.Handler):
    """Render log records as agent logging commands."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def format_record(self, record: logging.LogRecord) -> str:
        message = self.format(record)
        if record.levelno >= logging.ERROR:
            return logging_command("task.logissue", {"type": "error"}, message)
        if record.levelno >= logging.WARNING:
            return logging_command("task.logissue", {"type": "warning"}, message)
        if record.levelno >= logging.INFO:
            return message
        return logging_command("task.debug", {}, message)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.stream.write(self.format_record(record) + "\n")
            self.stream.flush()
        except Exception:
            self.handleError(record)
