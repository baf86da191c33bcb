"""
Network snapshot loader - composes Provider → Transform → Validate.
Returns canonical node rows ready for analysis.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Union

from ingestion.providers.snapshot_file_adapter import load_snapshot
from ingestion.transforms.normalizers import normalize_nodes
from ingestion.transforms.validators import ValidationError, validate_node_row

# Set up logger
logger = logging.getLogger(__name__)


def load_network(path: Union[str, Path], strict: bool = False) -> List[Dict[str, Any]]:
    """
    Load, normalize and validate a network snapshot.

    Args:
        path: Snapshot JSON file
        strict: Raise on the first invalid row instead of skipping it

    Returns:
        List of valid canonical node rows

    Raises:
        SnapshotAdapterError: If the file cannot be read
        NormalizationError: If a record has no id
        ValidationError: If strict and a row is invalid
    """
    raw_rows = load_snapshot(path)
    nodes = normalize_nodes(raw_rows)

    valid = []
    for node in nodes:
        try:
            validate_node_row(node)
        except ValidationError as e:
            if strict:
                raise ValidationError(f"Node {node['id']}: {e}")
            logger.warning(f"Skipping invalid node {node['id']}: {e}")
            continue
        valid.append(node)

    logger.info(
        f"Loaded {len(valid)} valid nodes from {path} "
        f"({len(raw_rows)} records, {len(nodes) - len(valid)} skipped)"
    )
    return valid
