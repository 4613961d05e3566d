from dataclasses import dataclass
from typing import Any


@dataclass
class AdapterError(Exception):
    message: str
    details: dict[str, Any] | None = None
    hint: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


class EndpointNotFound(AdapterError):
    pass


class EndpointCredentialsError(AdapterError):
    pass


class TaskInputMissing(AdapterError):
    pass


class TaskInputInvalid(AdapterError):
    pass


class ManifestParseError(AdapterError):
    pass


class ManifestInvalid(AdapterError):
    pass


class ToolNotFound(AdapterError):
    pass
