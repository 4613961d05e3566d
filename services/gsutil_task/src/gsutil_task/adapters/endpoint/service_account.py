from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from gsutil_task.adapters.errors import EndpointCredentialsError
from gsutil_task.ports.endpoint import EndpointAuthorization

logger = logging.getLogger(__name__)

CERTIFICATE_PARAM = "certificate"


def parse_service_account_key(certificate: str | None) -> dict[str, Any]:
    if not certificate:
        raise EndpointCredentialsError(
            "Service endpoint has no certificate",
            hint="Paste the service account JSON key into the endpoint",
        )
    try:
        raw: object = json.loads(certificate)
    except json.JSONDecodeError as e:
        raise EndpointCredentialsError(
            "Service endpoint certificate is not valid JSON", cause=e
        )
    if not isinstance(raw, dict):
        raise EndpointCredentialsError("Service endpoint certificate is not an object")
    project_id = raw.get("project_id")
    if not isinstance(project_id, str) or not project_id:
        raise EndpointCredentialsError(
            "Service endpoint certificate has no project_id",
            details={"keys": sorted(str(k) for k in raw)},
        )
    return raw


class ServiceAccountEndpoint:
    """Google Cloud endpoint backed by a service account JSON key.

    The key only touches disk between ``init_credentials`` and
    ``clear_credentials``; gsutil reads it through a boto config override.
    """

    def __init__(
        self, authorization: EndpointAuthorization, key_dir: Path | None = None
    ) -> None:
        self._key = parse_service_account_key(
            authorization.parameters.get(CERTIFICATE_PARAM)
        )
        self.project_id: str = self._key["project_id"]
        self.key_dir = key_dir
        self.key_path: Path | None = None

    @property
    def credential_param(self) -> str:
        if self.key_path is None:
            raise EndpointCredentialsError("Credentials have not been initialized")
        return f"-oCredentials:gs_service_key_file={self.key_path}"

    @property
    def project_param(self) -> str:
        return f"-oGSUtil:default_project_id={self.project_id}"

    def init_credentials(self) -> None:
        if self.key_path is not None:
            return
        fd, name = tempfile.mkstemp(
            prefix="gsutil-task-key-",
            suffix=".json",
            dir=str(self.key_dir) if self.key_dir else None,
        )
        # mkstemp already creates the file with mode 0600
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(self._key, handle)
        self.key_path = Path(name)
        logger.debug("wrote credentials for project %s", self.project_id)

    def clear_credentials(self) -> None:
        if self.key_path is None:
            return
        self.key_path.unlink(missing_ok=True)
        self.key_path = None
        logger.debug("cleared credentials for project %s", self.project_id)
