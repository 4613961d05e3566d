import json
import stat

import pytest

from gsutil_task.adapters.endpoint.service_account import ServiceAccountEndpoint
from gsutil_task.adapters.errors import EndpointCredentialsError
from gsutil_task.ports.endpoint import EndpointAuthorization


def test_project_param_comes_from_key(authorization, tmp_path):
    ep = ServiceAccountEndpoint(authorization, key_dir=tmp_path)
    assert ep.project_id == "projectId"
    assert ep.project_param == "-oGSUtil:default_project_id=projectId"


def test_key_file_lives_between_init_and_clear(
    authorization, service_account_key, tmp_path
):
    ep = ServiceAccountEndpoint(authorization, key_dir=tmp_path)
    ep.init_credentials()
    key_path = ep.key_path
    assert key_path is not None and key_path.parent == tmp_path
    assert json.loads(key_path.read_text()) == service_account_key
    assert stat.S_IMODE(key_path.stat().st_mode) == 0o600
    assert ep.credential_param == f"-oCredentials:gs_service_key_file={key_path}"

    ep.clear_credentials()
    assert not key_path.exists()
    assert list(tmp_path.iterdir()) == []
    ep.clear_credentials()


def test_credential_param_requires_init(authorization, tmp_path):
    ep = ServiceAccountEndpoint(authorization, key_dir=tmp_path)
    with pytest.raises(EndpointCredentialsError):
        ep.credential_param


@pytest.mark.parametrize(
    "certificate",
    [None, "", "not json", "[1, 2]", '{"type": "service_account"}'],
)
def test_malformed_certificate_fails_loudly(certificate):
    params = {} if certificate is None else {"certificate": certificate}
    with pytest.raises(EndpointCredentialsError):
        ServiceAccountEndpoint(EndpointAuthorization(parameters=params))
