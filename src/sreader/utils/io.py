from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict


DATA_DIR = Path("data")
SETTINGS_FILE = "settings.json"
STATE_FILE = "state.json"


def ensure_dirs(data_dir: Path = DATA_DIR) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def read_json(path: Path) -> Dict[str, Any]:
    """Read a JSON object from ``path``; missing or corrupt files read as empty."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        logging.warning("Unable to read %s: %s", path, e)
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logging.warning("Ignoring corrupt JSON in %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logging.warning("Ignoring %s: expected a JSON object, got %s", path, type(data).__name__)
        return {}
    return data


def write_json(path: Path, data: Dict[str, Any]) -> None:
    """Replace ``path`` atomically with ``data`` serialized as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
