#!/usr/bin/env python3
"""
Main CLI for the pNode quant analytics engine.
Usage:
  python cli.py network {summary,correlations,risk,regression} --snapshot PATH
  python cli.py node NODE_ID {all,risk,benchmark,forecast} --snapshot PATH
"""

import os
import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analytics.analysis_job import (
    AnalysisJobError,
    NETWORK_ANALYSIS_TYPES,
    NODE_ANALYSIS_TYPES,
    analyze_node,
    require_success,
    run_network_analysis
)
from analytics.config import ConfigError, load_quant_config
from ingestion.network_loader import load_network
from ingestion.providers.snapshot_file_adapter import SnapshotAdapterError
from ingestion.transforms.normalizers import NormalizationError
from ingestion.transforms.validators import ValidationError
from reports.formatters import FormatterError, render_network_summary, render_node_summary

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT = './data/network_snapshot.json'


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for both subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--snapshot',
                        default=os.getenv('QUANT_SNAPSHOT_PATH', DEFAULT_SNAPSHOT),
                        help=f'Network snapshot JSON (default: {DEFAULT_SNAPSHOT})')
    common.add_argument('--config',
                        help='Quant config YAML (default: QUANT_CONFIG_PATH)')
    common.add_argument('--format',
                        choices=['json', 'summary'],
                        default='json',
                        help='Output format (default: json)')
    common.add_argument('--output',
                        help='Write output to this file instead of stdout')
    common.add_argument('--strict',
                        action='store_true',
                        help='Fail on the first invalid node instead of skipping it')
    common.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Debug logging')

    parser = argparse.ArgumentParser(
        description='Quantitative analytics for a pNode network snapshot',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py network summary --snapshot data/network_snapshot.json
  python cli.py network regression --dependent uptime --independent latency
  python cli.py node pnode-001 risk --format summary
        """
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    network = subparsers.add_parser('network', parents=[common], help='Network-wide analysis')
    network.add_argument('analysis_type',
                         nargs='?',
                         default='summary',
                         choices=NETWORK_ANALYSIS_TYPES)
    network.add_argument('--dependent', default='performance',
                         help='Regression dependent metric (default: performance)')
    network.add_argument('--independent', default='storage_utilization',
                         help='Regression independent metric (default: storage_utilization)')

    node = subparsers.add_parser('node', parents=[common], help='Per-node analysis')
    node.add_argument('node_id', help='pNode id')
    node.add_argument('analysis_type',
                      nargs='?',
                      default='all',
                      choices=NODE_ANALYSIS_TYPES)

    return parser


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv('QUANT_LOG_LEVEL', 'WARNING').upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        stream=sys.stderr
    )


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Execute the parsed command.

    Returns:
        Successful analysis envelope

    Raises:
        AnalysisJobError: If the analysis reports a failure
    """
    config = load_quant_config(args.config)
    nodes = load_network(args.snapshot, strict=args.strict)

    if args.command == 'network':
        envelope = run_network_analysis(
            nodes,
            args.analysis_type,
            config=config,
            dependent=args.dependent,
            independent=args.independent
        )
    else:
        envelope = analyze_node(args.node_id, nodes, args.analysis_type, config=config)

    return require_success(envelope)


def render(args: argparse.Namespace, envelope: Dict[str, Any]) -> str:
    """Render an envelope in the requested output format."""
    if args.format == 'json':
        return json.dumps(envelope, indent=2, default=str)

    if args.command == 'network':
        return render_network_summary(envelope['type'], envelope['data'])
    return render_node_summary(envelope['node_id'], envelope['data'])


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    try:
        envelope = run(args)
        text = render(args, envelope)
    except (AnalysisJobError, ConfigError, SnapshotAdapterError,
            NormalizationError, ValidationError, FormatterError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding='utf-8')
        logger.info(f"Results saved to {output_path}")
    else:
        print(text)

    return 0


if __name__ == '__main__':
    sys.exit(main())
