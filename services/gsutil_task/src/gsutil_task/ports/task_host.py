from typing import Protocol

from gsutil_task.domain.task_result import TaskResult
from gsutil_task.ports.endpoint import EndpointAuthorization


class TaskHostPort(Protocol):
    def get_input(self, name: str, required: bool = False) -> str | None: ...

    def get_bool_input(self, name: str, default: bool = False) -> bool: ...

    def get_endpoint_authorization(self, endpoint_id: str) -> EndpointAuthorization: ...

    def set_result(self, result: TaskResult, message: str) -> None: ...

    def set_variable(self, name: str, value: str) -> None: ...
