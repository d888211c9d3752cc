"""Read record collections from a browser local-storage export."""

import json
import logging
from pathlib import Path
from typing import Any

from .collector import COLLECTION_NAMES, STORAGE_PREFIX

logger = logging.getLogger(__name__)


def _decode(key: str, value: Any) -> list:
    # Local storage keeps every value as a string, exports may keep it that way.
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring malformed JSON under {key}: {e}")
            return []
    if not isinstance(value, list):
        logger.warning(f"Ignoring non-array payload under {key}")
        return []
    return value


def parse_collections(data: Any) -> dict[str, list]:
    """Pick the known collections out of an exported key/value mapping."""
    collections: dict[str, list] = {name: [] for name in COLLECTION_NAMES}
    if not isinstance(data, dict):
        logger.warning("Local storage export is not an object, no collections loaded")
        return collections

    for name in COLLECTION_NAMES:
        for key in (STORAGE_PREFIX + name, name):
            if key in data:
                collections[name] = _decode(key, data[key])
                break
    return collections


def load_collections(path: Path) -> dict[str, list]:
    """Load the record collections from a JSON export file."""
    if not path.exists():
        raise FileNotFoundError(
            f"Local storage export not found: {path}. "
            "Export the job-tracker:* keys from the browser to this file."
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Could not parse {path}: {e}")
        data = {}

    collections = parse_collections(data)
    counts = ", ".join(f"{name}={len(items)}" for name, items in collections.items())
    logger.info(f"Loaded collections from {path}: {counts}")
    return collections
