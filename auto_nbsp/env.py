from __future__ import annotations

import json
import os

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


def env_str(name: str, default: str = "") -> str:
    return str(os.getenv(name, "") or "").strip() or default


def env_truthy(name: str) -> bool:
    return env_str(name).lower() in _TRUTHY


def env_bool(name: str, default: bool) -> bool:
    v = env_str(name).lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def env_json_object(name: str) -> dict | None:
    raw = env_str(name)
    if not raw:
        return None
    obj = json.loads(raw)
    if not isinstance(obj, dict):
        raise ValueError(f"{name} must be a JSON object")
    return obj
