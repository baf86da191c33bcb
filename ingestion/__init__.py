"""
Data Ingestion Module

Loads pNode network snapshots and turns them into canonical node rows:
- snapshot files (JSON) exported by the indexer
- normalization of provider camelCase records
- row validation before analysis
"""

__version__ = "0.1.0"
