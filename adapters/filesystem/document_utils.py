from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson
import yaml

from domain.errors import InvalidConfiguration, SceneNotFoundError

YAML_SUFFIXES = {".yaml", ".yml"}
SCENE_SUFFIXES = {".json", *YAML_SUFFIXES}


def load_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        msg = f"Scene file not found: {path}"
        raise SceneNotFoundError(msg)
    if path.suffix.lower() in YAML_SUFFIXES:
        data = _load_yaml(path)
    else:
        data = _load_json(path)
    if not isinstance(data, dict):
        msg = f"Expected a mapping at the top of {path}"
        raise InvalidConfiguration(msg)
    return data


def _load_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise InvalidConfiguration(msg) from exc


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise InvalidConfiguration(msg) from exc


def dump_json_bytes(payload: Any) -> bytes:
    try:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    except TypeError:
        return json.dumps(payload, ensure_ascii=True, indent=2).encode("utf-8")


def write_json_atomic(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_bytes(dump_json_bytes(payload))
    tmp_path.replace(path)
