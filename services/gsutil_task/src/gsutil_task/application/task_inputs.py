from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from gsutil_task.adapters.errors import TaskInputInvalid, TaskInputMissing
from gsutil_task.application.input_values import parse_bool
from gsutil_task.application.run_gsutil import RunGsutilOptions
from gsutil_task.application.task_manifest import TaskInput, TaskManifest
from gsutil_task.ports.endpoint import EndpointAuthorization, EndpointPort
from gsutil_task.ports.task_host import TaskHostPort
from gsutil_task.ports.tool_runner import ToolRunnerPort

SERVICE_ENDPOINT = "serviceEndpoint"
COMMAND = "command"
INCLUDE_PROJECT_PARAM = "includeProjectParam"
IGNORE_RETURN_CODE = "ignoreReturnCode"
OUTPUT_VARIABLE = "outputVariable"

EndpointFactory = Callable[[EndpointAuthorization], EndpointPort]
ToolFactory = Callable[[], ToolRunnerPort]


def _resolve(
    host: TaskHostPort, declared: TaskInput, overrides: Mapping[str, Any]
) -> str | bool | None:
    override = overrides.get(declared.name)
    if override is not None:
        value: str | bool | None = override
    elif declared.type == "boolean":
        default = declared.default
        if isinstance(default, str):
            default = parse_bool(default, declared.name)
        value = host.get_bool_input(declared.name, bool(default))
    else:
        value = host.get_input(declared.name)
        if value is None and declared.default is not None:
            value = str(declared.default)
    if declared.required and (value is None or value == ""):
        raise TaskInputMissing(
            f"Input required: {declared.name}",
            details={"input": declared.name},
            hint=declared.help or None,
        )
    return value


def resolve_inputs(
    host: TaskHostPort,
    manifest: TaskManifest,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, str | bool | None]:
    given = {k: v for k, v in (overrides or {}).items() if v is not None}
    unknown = sorted(set(given) - {declared.name for declared in manifest.inputs})
    if unknown:
        raise TaskInputInvalid(
            "Unknown task inputs", details={"inputs": unknown}
        )
    return {declared.name: _resolve(host, declared, given) for declared in manifest.inputs}


def load_run_options(
    host: TaskHostPort,
    manifest: TaskManifest,
    *,
    endpoint_factory: EndpointFactory,
    tool_factory: ToolFactory,
    overrides: Mapping[str, Any] | None = None,
) -> RunGsutilOptions:
    inputs = resolve_inputs(host, manifest, overrides)
    endpoint_id = str(inputs[SERVICE_ENDPOINT])
    authorization = host.get_endpoint_authorization(endpoint_id)
    output_variable = inputs.get(OUTPUT_VARIABLE)
    return RunGsutilOptions(
        command=str(inputs[COMMAND]),
        gsutil_tool=tool_factory(),
        endpoint=endpoint_factory(authorization),
        include_project_param=bool(inputs.get(INCLUDE_PROJECT_PARAM)),
        ignore_return_code=bool(inputs.get(IGNORE_RETURN_CODE)),
        output_variable=str(output_variable) if output_variable else None,
    )
