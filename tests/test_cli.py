"""
End-to-end tests for the CLI against the sample network snapshot.
"""

import json
import pytest
from pathlib import Path

from cli import build_parser, main


FIXTURE = str(Path(__file__).parent / 'fixtures' / 'network_snapshot.json')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate from QUANT_* settings in the developer environment."""
    for name in ('QUANT_CONFIG_PATH', 'QUANT_SNAPSHOT_PATH', 'QUANT_FORECAST_DAYS',
                 'QUANT_CONFIDENCE_LEVEL', 'QUANT_MIN_NETWORK_SIZE', 'QUANT_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(['network'])

        assert args.command == 'network'
        assert args.analysis_type == 'summary'
        assert args.format == 'json'
        assert args.dependent == 'performance'

    def test_node_defaults(self):
        args = build_parser().parse_args(['node', 'pnode-alpha', '--format', 'summary'])

        assert args.node_id == 'pnode-alpha'
        assert args.analysis_type == 'all'
        assert args.format == 'summary'

    def test_invalid_choice(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['network', 'sentiment'])


class TestNetworkCommand:
    """Tests for the network subcommand."""

    def test_summary_json(self, capsys):
        assert main(['network', 'summary', '--snapshot', FIXTURE]) == 0

        envelope = json.loads(capsys.readouterr().out)
        assert envelope['success'] is True
        assert envelope['type'] == 'summary'
        assert envelope['meta']['node_count'] == 6
        assert envelope['data']['top_performers']

    def test_regression_text(self, capsys):
        code = main(['network', 'regression', '--snapshot', FIXTURE,
                     '--dependent', 'uptime', '--independent', 'latency', '--format', 'summary'])

        assert code == 0
        assert capsys.readouterr().out.startswith('Regression: uptime = ')

    @pytest.mark.parametrize("analysis_type", ['correlations', 'risk'])
    def test_text_formats(self, capsys, analysis_type):
        assert main(['network', analysis_type, '--snapshot', FIXTURE, '--format', 'summary']) == 0
        assert capsys.readouterr().out.strip()

    def test_output_file(self, tmp_path):
        output = tmp_path / 'out' / 'risk.json'
        assert main(['network', 'risk', '--snapshot', FIXTURE, '--output', str(output)]) == 0

        envelope = json.loads(output.read_text())
        assert sum(b['count'] for b in envelope['data']['distribution']) == 6

    def test_config_file(self, tmp_path, capsys):
        """min_network_size from YAML blocks a small network."""
        config = tmp_path / 'quant.yml'
        config.write_text('quant:\n  min_network_size: 10\n')

        assert main(['network', '--snapshot', FIXTURE, '--config', str(config)]) == 1
        assert 'need at least 10' in capsys.readouterr().err


class TestNodeCommand:
    """Tests for the node subcommand."""

    def test_all_json(self, capsys):
        assert main(['node', 'pnode-alpha', '--snapshot', FIXTURE]) == 0

        envelope = json.loads(capsys.readouterr().out)
        assert envelope['node_id'] == 'pnode-alpha'
        assert set(envelope['data']) == {'risk_profile', 'benchmark', 'correlations', 'forecast'}
        assert len(envelope['data']['forecast']['predictions']) == 7

    def test_all_text(self, capsys):
        assert main(['node', 'pnode-delta', 'all', '--snapshot', FIXTURE, '--format', 'summary']) == 0

        text = capsys.readouterr().out
        assert text.startswith('Node pnode-delta')
        assert 'Benchmark:' in text
        assert 'Forecast:' in text

    def test_short_history_forecast(self, capsys):
        assert main(['node', 'pnode-zeta', 'forecast', '--snapshot', FIXTURE]) == 0
        assert json.loads(capsys.readouterr().out)['data']['forecast'] is None


class TestErrors:
    """Failures print to stderr and exit 1."""

    def test_unknown_node(self, capsys):
        assert main(['node', 'ghost', '--snapshot', FIXTURE]) == 1
        assert 'Error: Node not found: ghost' in capsys.readouterr().err

    def test_missing_snapshot(self, tmp_path, capsys):
        assert main(['network', '--snapshot', str(tmp_path / 'absent.json')]) == 1
        assert 'Snapshot file not found' in capsys.readouterr().err

    def test_config_section_not_mapping(self, tmp_path, capsys):
        config = tmp_path / 'quant.yml'
        config.write_text('quant: 5\n')

        assert main(['network', '--snapshot', FIXTURE, '--config', str(config)]) == 1
        assert 'Error: Quant config' in capsys.readouterr().err

    def test_snapshot_is_directory(self, tmp_path, capsys):
        assert main(['network', '--snapshot', str(tmp_path)]) == 1
        assert 'Error: Cannot read snapshot file' in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        assert main(['network', '--snapshot', FIXTURE, '--config', str(tmp_path / 'nope.yml')]) == 1
        assert 'Quant config file not found' in capsys.readouterr().err
