from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class EndpointAuthorization:
    parameters: dict[str, str] = field(default_factory=dict)
    scheme: str = ""


class EndpointPort(Protocol):
    @property
    def credential_param(self) -> str: ...

    @property
    def project_param(self) -> str: ...

    def init_credentials(self) -> None: ...

    def clear_credentials(self) -> None: ...
