"""
Snapshot file adapter - read pNode network snapshots exported as JSON.
File IO allowed here, but minimal business logic.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Union

# Set up logger
logger = logging.getLogger(__name__)


class SnapshotAdapterError(Exception):
    """Raised when a snapshot file cannot be read."""
    pass


def load_snapshot(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read raw pNode records from a snapshot file.
    Returns raw data in provider format - no normalization.

    The file holds either a list of records or an object with a
    'pnodes' list.

    Args:
        path: Snapshot JSON file

    Returns:
        List of raw pNode dictionaries

    Raises:
        SnapshotAdapterError: If the file is missing, unreadable, malformed, or has no record list
    """
    snapshot_file = Path(path)
    if not snapshot_file.exists():
        raise SnapshotAdapterError(f"Snapshot file not found: {snapshot_file}")

    try:
        with open(snapshot_file, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotAdapterError(f"Invalid JSON in {snapshot_file}: {e}")
    except (UnicodeDecodeError, OSError) as e:
        raise SnapshotAdapterError(f"Cannot read snapshot file {snapshot_file}: {e}")

    records = _extract_records(payload)

    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise SnapshotAdapterError(
                f"Snapshot record {i} must be an object, got {type(record).__name__}"
            )

    logger.info(f"Loaded {len(records)} pNode records from {snapshot_file}")
    return records


def _extract_records(payload: Any) -> List[Any]:
    """Record list from either supported snapshot shape."""
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict) and isinstance(payload.get('pnodes'), list):
        return payload['pnodes']

    raise SnapshotAdapterError(
        "Snapshot must be a list of pNode records or an object with a 'pnodes' list"
    )
