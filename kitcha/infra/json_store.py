"""JSON document helpers shared by the file repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_document(path: Path, default: Any) -> Any:
    """Read a JSON document; missing or corrupt files give ``default``."""
    if not path.exists():
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        return default
    if not isinstance(data, type(default)):
        logger.error("Unexpected document shape in %s (expected %s)", path, type(default).__name__)
        return default
    return data


def save_document(path: Path, data: Any) -> None:
    """Write a JSON document atomically (temp file + move)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
