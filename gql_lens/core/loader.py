"""Reading and writing introspection snapshots on disk.

Snapshots are stored as ``schema-<UTC timestamp>.json`` so that the newest
one sorts last; ``load_latest_schema`` relies on that ordering.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import GqlLensError, InvalidSchemaError

logger = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "schema"


class SchemaNotFoundError(GqlLensError):
    """No schema snapshot exists where one was expected."""


def parse_schema(text: str) -> dict[str, Any]:
    """Parse schema JSON into an introspection envelope or compressed document.

    A raw GraphQL response (``{"data": {"__schema": ...}}``) is unwrapped, and
    a bare ``{"types": [...]}`` body is wrapped as ``{"__schema": ...}``.
    Compressed documents pass through unchanged.

    Raises:
        InvalidSchemaError: If the text is not a JSON object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidSchemaError(f"Invalid schema: not valid JSON ({e})") from e
    if not isinstance(document, dict):
        raise InvalidSchemaError("Invalid schema: expected a JSON object")

    if isinstance(document.get("data"), dict) and "__schema" in document["data"]:
        document = document["data"]
    if "__schema" not in document and isinstance(document.get("types"), list):
        document = {"__schema": document}
    return document


def load_schema(path: str | Path) -> dict[str, Any]:
    """Read one schema file."""
    path = Path(path)
    logger.debug("Loading schema from %s", path)
    return parse_schema(path.read_text(encoding="utf-8"))


def find_latest_schema(directory: str | Path, prefix: str = SNAPSHOT_PREFIX) -> Path:
    """Path of the newest ``<prefix>-*.json`` snapshot in a directory.

    Raises:
        SchemaNotFoundError: If the directory holds no snapshot.
    """
    directory = Path(directory)
    snapshots = sorted(directory.glob(f"{prefix}-*.json")) if directory.is_dir() else []
    if not snapshots:
        raise SchemaNotFoundError(f"No {prefix}-*.json snapshot found in {directory}")
    return snapshots[-1]


def load_latest_schema(directory: str | Path, prefix: str = SNAPSHOT_PREFIX) -> dict[str, Any]:
    """Load the newest snapshot from a directory."""
    path = find_latest_schema(directory, prefix)
    logger.info("Using schema snapshot %s", path.name)
    return load_schema(path)


def save_snapshot(
    document: dict[str, Any],
    directory: str | Path,
    prefix: str = SNAPSHOT_PREFIX,
    now: datetime | None = None,
) -> Path:
    """Write a document as a timestamped snapshot and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    path = directory / f"{prefix}-{timestamp}.json"
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    logger.info("Saved schema snapshot to %s", path)
    return path
