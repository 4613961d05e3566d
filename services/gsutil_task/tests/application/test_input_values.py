import pytest

from gsutil_task.adapters.errors import TaskInputInvalid
from gsutil_task.application.input_values import parse_bool


@pytest.mark.parametrize("raw", ["true", " TRUE ", "1", "yes", "On"])
def test_parse_bool_true(raw):
    assert parse_bool(raw, "flag") is True


@pytest.mark.parametrize("raw", ["false", "0", "No", "off"])
def test_parse_bool_false(raw):
    assert parse_bool(raw, "flag") is False


def test_parse_bool_rejects_garbage():
    with pytest.raises(TaskInputInvalid) as excinfo:
        parse_bool("maybe", "flag")
    assert excinfo.value.details == {"input": "flag", "value": "maybe"}
