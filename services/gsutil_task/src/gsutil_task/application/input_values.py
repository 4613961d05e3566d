from gsutil_task.adapters.errors import TaskInputInvalid

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise TaskInputInvalid(
        f"Input '{name}' is not a boolean: {raw!r}",
        details={"input": name, "value": raw},
    )
