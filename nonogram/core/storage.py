"""JSON file persistence shared by the user-state stores."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def load_json(file_path: Path) -> Dict[str, Any]:
    """Return the JSON object stored at *file_path*, or ``{}`` if missing or unreadable."""
    if not file_path.exists():
        return {}
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load %s: %s", file_path, e)
        return {}
    if not isinstance(payload, dict):
        logger.warning("Ignoring %s: expected a JSON object", file_path)
        return {}
    return payload


def save_json(file_path: Path, payload: Dict[str, Any]) -> bool:
    """Write *payload* to *file_path*. Failures are logged and reported as False."""
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("Could not save %s: %s", file_path, e)
        return False
    return True
