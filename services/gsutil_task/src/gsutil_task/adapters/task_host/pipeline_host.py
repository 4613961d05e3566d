from __future__ import annotations

import json
import os
import sys
from collections.abc import Mapping
from typing import TextIO

from gsutil_task.adapters.errors import (
    EndpointCredentialsError,
    EndpointNotFound,
    TaskInputMissing,
)
from gsutil_task.application.input_values import parse_bool
from gsutil_task.domain.task_result import TaskResult
from gsutil_task.ports.endpoint import EndpointAuthorization


def escape_data(value: str) -> str:
    return value.replace("%", "%AZP25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace("]", "%5D").replace(";", "%3B")


def logging_command(area: str, properties: Mapping[str, str], message: str) -> str:
    props = "".join(f"{k}={escape_property(v)};" for k, v in properties.items())
    prefix = f"##vso[{area} {props}]" if props else f"##vso[{area}]"
    return prefix + escape_data(message)


def env_key(prefix: str, name: str) -> str:
    return prefix + name.replace(" ", "_").replace(".", "_").upper()


class PipelineTaskHost:
    """Task host talking to an Azure Pipelines agent.

    Inputs and endpoint authorizations arrive as environment variables;
    results and variables leave as ``##vso[...]`` logging commands on stdout.
    """

    def __init__(
        self, environ: Mapping[str, str] | None = None, out: TextIO | None = None
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.out = out or sys.stdout

    def _emit(self, area: str, properties: Mapping[str, str], message: str) -> None:
        self.out.write(logging_command(area, properties, message) + "\n")
        self.out.flush()

    def get_input(self, name: str, required: bool = False) -> str | None:
        value = self.environ.get(env_key("INPUT_", name), "").strip()
        if not value:
            if required:
                raise TaskInputMissing(
                    f"Input required: {name}", details={"input": name}
                )
            return None
        return value

    def get_bool_input(self, name: str, default: bool = False) -> bool:
        raw = self.get_input(name)
        if raw is None:
            return default
        return parse_bool(raw, name)

    def get_endpoint_authorization(self, endpoint_id: str) -> EndpointAuthorization:
        raw = self.environ.get(env_key("ENDPOINT_AUTH_", endpoint_id))
        if not raw:
            raise EndpointNotFound(
                f"Endpoint auth data not present: {endpoint_id}",
                details={"endpoint": endpoint_id},
            )
        try:
            data: object = json.loads(raw)
        except json.JSONDecodeError as e:
            raise EndpointCredentialsError(
                f"Endpoint auth data is not valid JSON: {endpoint_id}", cause=e
            )
        if not isinstance(data, dict):
            raise EndpointCredentialsError(
                f"Endpoint auth data is not an object: {endpoint_id}"
            )
        params = data.get("parameters")
        parameters = (
            {str(k): str(v) for k, v in params.items()} if isinstance(params, dict) else {}
        )
        return EndpointAuthorization(
            parameters=parameters, scheme=str(data.get("scheme") or "")
        )

    def set_result(self, result: TaskResult, message: str) -> None:
        self._emit("task.complete", {"result": result.value}, message)

    def set_variable(self, name: str, value: str) -> None:
        self._emit("task.setvariable", {"variable": name}, value)
