# turbonav/settings.py
import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULTS = {
    "start_url": "http://localhost:3000/",
    "runtime": {"engine": None, "script": None, "message_handler": "turbolinks"},  # engine None => qt
    "network": {"timeout_ms": None},
    "logging": {"level": "INFO"},
}


def _config_path(config_dir: Optional[Path] = None) -> Path:
    base = Path(config_dir) if config_dir else Path.home() / ".config" / "turbonav"
    base.mkdir(parents=True, exist_ok=True)
    return base / "config.json"


def _merge(defaults: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    p = _config_path(config_dir)
    if not p.exists():
        p.write_text(json.dumps(DEFAULTS, indent=2))
        return copy.deepcopy(DEFAULTS)
    return _merge(DEFAULTS, json.loads(p.read_text()))


def save_settings(data: Dict[str, Any], config_dir: Optional[Path] = None) -> None:
    p = _config_path(config_dir)
    p.write_text(json.dumps(data, indent=2))
