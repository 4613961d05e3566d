from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from gsutil_task.adapters.errors import ManifestInvalid, ManifestParseError

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
MANIFEST_PATH = PACKAGE_ROOT / "task.yaml"
SCHEMA_PATH = PACKAGE_ROOT / "schemas" / "task.schema.v1.json"


@dataclass(frozen=True)
class TaskInput:
    name: str
    type: str
    label: str = ""
    required: bool = False
    default: str | bool | None = None
    help: str = ""


@dataclass(frozen=True)
class TaskManifest:
    id: str
    name: str
    version: str
    friendly_name: str = ""
    description: str = ""
    inputs: tuple[TaskInput, ...] = field(default_factory=tuple)
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    def input(self, name: str) -> TaskInput:
        for item in self.inputs:
            if item.name == name:
                return item
        raise KeyError(name)


def load_schema(path: Path | None = None) -> dict[str, Any]:
    raw: object = json.loads((path or SCHEMA_PATH).read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def parse_task_manifest(raw: dict[str, Any]) -> TaskManifest:
    try:
        jsonschema.validate(raw, load_schema())
    except jsonschema.ValidationError as e:
        raise ManifestInvalid(
            f"Task manifest is invalid: {e.message}",
            details={"path": [str(p) for p in e.absolute_path]},
            cause=e,
        )
    names = [item["name"] for item in raw["inputs"]]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ManifestInvalid(
            "Task manifest declares duplicate inputs",
            details={"inputs": duplicates},
        )
    inputs = tuple(
        TaskInput(
            name=item["name"],
            type=item["type"],
            label=item.get("label", ""),
            required=bool(item.get("required", False)),
            default=item.get("default"),
            help=item.get("help", ""),
        )
        for item in raw["inputs"]
    )
    return TaskManifest(
        id=raw["id"],
        name=raw["name"],
        version=raw["version"],
        friendly_name=raw.get("friendly_name", ""),
        description=raw.get("description", ""),
        inputs=inputs,
        raw=raw,
    )


def load_task_manifest(path: Path | None = None) -> TaskManifest:
    manifest_path = path or MANIFEST_PATH
    try:
        raw: object = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ManifestParseError(
            f"Could not read task manifest: {manifest_path}",
            details={"path": str(manifest_path)},
            cause=e,
        )
    if not isinstance(raw, dict):
        raise ManifestInvalid(
            "Task manifest must be a mapping", details={"path": str(manifest_path)}
        )
    return parse_task_manifest(raw)
