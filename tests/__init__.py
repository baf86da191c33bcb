"""
Test Suite for the pNode Quant Analytics Engine

Includes:
- Unit tests for statistical calculations
- Aggregation tests over a fixture network snapshot
- Ingestion tests for snapshot normalization and validation
- CLI tests for network and node commands
"""
