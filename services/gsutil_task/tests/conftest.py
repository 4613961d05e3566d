from __future__ import annotations

import json
import logging

import pytest

from gsutil_task.domain.exec_result import ExecResult
from gsutil_task.domain.task_result import TaskResult
from gsutil_task.ports.endpoint import EndpointAuthorization
from gsutil_task.ports.tool_runner import ExecOptions

CREDENTIAL_PARAM = "-oCredentials:gs_service_key_file=/tmp/key.json"
PROJECT_PARAM = "-oGSUtil:default_project_id=projectId"


class FakeToolRunner:
    def __init__(self, result: ExecResult | None = None) -> None:
        self.result = result or ExecResult(stdout="stdout", stderr="stderr", code=0)
        self.calls: list[tuple] = []
        self.exec_options: list[ExecOptions | None] = []
        self.raise_on_exec: Exception | None = None

    def line(self, text: str) -> "FakeToolRunner":
        self.calls.append(("line", text))
        return self

    def arg(self, text: str) -> "FakeToolRunner":
        self.calls.append(("arg", text))
        return self

    def arg_if(self, condition: bool, text: str) -> "FakeToolRunner":
        self.calls.append(("arg_if", condition, text))
        return self

    def exec_sync(self, options: ExecOptions | None = None) -> ExecResult:
        self.calls.append(("exec_sync",))
        self.exec_options.append(options)
        if self.raise_on_exec is not None:
            raise self.raise_on_exec
        return self.result

    def named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


class FakeEndpoint:
    def __init__(self, events: list[str] | None = None) -> None:
        self.events = events if events is not None else []
        self.init_calls = 0
        self.clear_calls = 0
        self.fail_init: Exception | None = None

    @property
    def credential_param(self) -> str:
        return CREDENTIAL_PARAM

    @property
    def project_param(self) -> str:
        return PROJECT_PARAM

    def init_credentials(self) -> None:
        self.init_calls += 1
        self.events.append("init")
        if self.fail_init is not None:
            raise self.fail_init

    def clear_credentials(self) -> None:
        self.clear_calls += 1
        self.events.append("clear")


class FakeTaskHost:
    def __init__(
        self,
        inputs: dict[str, str] | None = None,
        endpoints: dict[str, EndpointAuthorization] | None = None,
        events: list[str] | None = None,
    ) -> None:
        self.inputs = inputs or {}
        self.endpoints = endpoints or {}
        self.events = events if events is not None else []
        self.results: list[tuple[TaskResult, str]] = []
        self.variables: list[tuple[str, str]] = []

    def get_input(self, name: str, required: bool = False) -> str | None:
        value = self.inputs.get(name) or None
        if value is None and required:
            raise KeyError(name)
        return value

    def get_bool_input(self, name: str, default: bool = False) -> bool:
        value = self.inputs.get(name)
        if not value:
            return default
        return value.lower() == "true"

    def get_endpoint_authorization(self, endpoint_id: str) -> EndpointAuthorization:
        return self.endpoints[endpoint_id]

    def set_result(self, result: TaskResult, message: str) -> None:
        self.events.append("result")
        self.results.append((result, message))

    def set_variable(self, name: str, value: str) -> None:
        self.events.append("variable")
        self.variables.append((name, value))


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def tool() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture
def endpoint(events) -> FakeEndpoint:
    return FakeEndpoint(events)


@pytest.fixture
def host(events) -> FakeTaskHost:
    return FakeTaskHost(events=events)


@pytest.fixture
def service_account_key() -> dict[str, str]:
    return {
        "type": "service_account",
        "project_id": "projectId",
        "private_key_id": "abc123",
        "client_email": "builder@projectId.iam.gserviceaccount.com",
    }


@pytest.fixture
def authorization(service_account_key) -> EndpointAuthorization:
    return EndpointAuthorization(
        parameters={"certificate": json.dumps(service_account_key)}, scheme=""
    )


@pytest.fixture
def make_host(events):
    def _make(
        inputs: dict[str, str] | None = None,
        endpoints: dict[str, EndpointAuthorization] | None = None,
    ) -> FakeTaskHost:
        return FakeTaskHost(inputs=inputs, endpoints=endpoints, events=events)

    return _make


@pytest.fixture(autouse=True)
def _reset_task_logger():
    yield
    task_logger = logging.getLogger("gsutil_task")
    for handler in list(task_logger.handlers):
        task_logger.removeHandler(handler)
    task_logger.propagate = True
    task_logger.setLevel(logging.NOTSET)
