from __future__ import annotations

TOOL_NAME = "gsutil"


def strip_tool_name(command: str, tool: str = TOOL_NAME) -> str:
    """Drop a leading (or, failing that, trailing) ``tool`` token from ``command``.

    Users often paste a full ``gsutil ...`` line into the task. The runner is
    already bound to the executable, so the token would be passed twice.
    Only whole tokens are matched and interior occurrences are kept.
    """
    text = command.strip()
    if not text:
        return ""
    lowered = tool.lower()
    parts = text.split(None, 1)
    if parts[0].lower() == lowered:
        return parts[1].strip() if len(parts) > 1 else ""
    parts = text.rsplit(None, 1)
    if len(parts) > 1 and parts[1].lower() == lowered:
        return parts[0].strip()
    return text
