"""Tests for CLI interface."""

import pytest
import tempfile
import json
import shutil
from pathlib import Path
from unittest.mock import patch

from omegaconf import OmegaConf

from alchemy_solver.cli.main import main_cli, create_parser
from alchemy_solver.cli.utils import (
    save_results, format_duration, format_recipe_step, create_timing_summary,
    print_search_result
)
from alchemy_solver.cli.commands import AlchemySolver, parse_value
from alchemy_solver.config.config_manager import CONFIG_DIR_ENV
from alchemy_solver.core.exceptions import ElementNotFound
from alchemy_solver.search.bfs import BreadthFirstEngine

CHAIN = [
    {"tierNum": 0, "elements": [{"name": "A", "recipes": []}, {"name": "B", "recipes": []}]},
    {"tierNum": 1, "elements": [{"name": "C", "recipes": [["A", "B"]]}]},
    {"tierNum": 2, "elements": [{"name": "D", "recipes": [["A", "C"]]}]},
]


@pytest.fixture
def workspace(monkeypatch):
    """Temporary catalog plus a configuration directory pointing at it."""
    temp_dir = Path(tempfile.mkdtemp())
    catalog_file = temp_dir / "elements.json"
    with open(catalog_file, 'w') as f:
        json.dump(CHAIN, f)

    config_dir = temp_dir / "conf"
    config_dir.mkdir()
    OmegaConf.save(OmegaConf.create({
        'catalog': {'path': str(catalog_file)},
        'search': {
            'algorithm': 'bfs',
            'dfs': {'depth_multiplier': 2},
            'multipath': {'max_workers': 4, 'variant_factor': 2, 'stop_when_satisfied': True},
        },
        'logging': {'level': 'WARNING'},
    }), config_dir / "config.yaml")

    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    yield temp_dir

    shutil.rmtree(temp_dir)


class TestCLIParser:
    """Test CLI argument parsing."""

    def test_create_parser(self):
        """Test parser creation."""
        parser = create_parser()
        assert parser.prog == 'alchemy-solver'

    def test_solve_command_parsing(self):
        """Test solve command parsing."""
        parser = create_parser()

        args = parser.parse_args(['solve', 'Brick'])
        assert args.command == 'solve'
        assert args.target == 'Brick'
        assert args.algorithm is None
        assert args.count == 1

        args = parser.parse_args(['solve', 'Brick', '--algorithm', 'bidi', '--count', '3'])
        assert args.algorithm == 'bidi'
        assert args.count == 3

        args = parser.parse_args(['solve', 'Brick', '-a', 'dfs', '-n', '2'])
        assert args.algorithm == 'dfs'
        assert args.count == 2

    def test_unknown_algorithm_rejected(self):
        parser = create_parser()

        with pytest.raises(SystemExit):
            parser.parse_args(['solve', 'Brick', '--algorithm', 'astar'])

    def test_catalog_and_benchmark_parsing(self):
        parser = create_parser()

        args = parser.parse_args(['catalog'])
        assert args.command == 'catalog'
        assert args.sample == 0

        args = parser.parse_args(['catalog', '--sample', '5'])
        assert args.sample == 5

        args = parser.parse_args(['benchmark'])
        assert args.targets is None
        assert args.max_targets is None

        args = parser.parse_args(['benchmark', '--targets', 'Mud', 'Brick', '--max-targets', '1'])
        assert args.targets == ['Mud', 'Brick']
        assert args.max_targets == 1

    def test_config_command_parsing(self):
        """Test config command parsing."""
        parser = create_parser()

        args = parser.parse_args(['config', 'show'])
        assert args.command == 'config'
        assert args.config_action == 'show'

        args = parser.parse_args(['config', 'validate'])
        assert args.config_action == 'validate'

        args = parser.parse_args(['config', 'set', 'search.dfs.depth_multiplier', '3'])
        assert args.config_action == 'set'
        assert args.key == 'search.dfs.depth_multiplier'
        assert args.value == '3'

    def test_global_options(self):
        """Test global options parsing."""
        parser = create_parser()

        args = parser.parse_args(['-v', 'solve', 'Mud'])
        assert args.verbose == 1

        args = parser.parse_args(['-vv', 'solve', 'Mud'])
        assert args.verbose == 2

        args = parser.parse_args(['--quiet', 'solve', 'Mud'])
        assert args.quiet is True

        args = parser.parse_args([
            '--config', 'search.algorithm=dfs',
            '-c', 'search.multipath.max_workers=2',
            '--catalog', 'elements.json',
            '--output', 'results.json',
            'solve', 'Mud'
        ])
        assert args.config == ['search.algorithm=dfs', 'search.multipath.max_workers=2']
        assert args.catalog == 'elements.json'
        assert args.output == 'results.json'


class TestCLIUtils:
    """Test CLI utility functions."""

    @pytest.fixture
    def temp_dir(self):
        """Create temporary directory."""
        temp_dir = tempfile.mkdtemp()
        yield temp_dir
        shutil.rmtree(temp_dir)

    def test_save_results(self, temp_dir, chain_catalog):
        """Test saving results to JSON file."""
        result = BreadthFirstEngine(chain_catalog).find_shortest_path("D")
        output_file = Path(temp_dir) / "nested" / "results.json"

        save_results({'success': True, 'results': [result]}, output_file)

        with open(output_file, 'r') as f:
            loaded = json.load(f)

        assert loaded['success'] is True
        assert loaded['results'][0]['signature'] == "C:A+B|D:A+C"
        assert loaded['results'][0]['path'][1] == {'ingredients': ['A', 'C'], 'result': 'D'}

    def test_format_duration(self):
        """Test duration formatting."""
        assert format_duration(0.0005) == "500.0µs"
        assert format_duration(0.5) == "500.0ms"
        assert format_duration(1.5) == "1.50s"
        assert format_duration(65.5) == "1m 5.5s"

    def test_format_recipe_step(self, chain_catalog):
        recipe = chain_catalog.recipes_for_result("D")[0]
        assert format_recipe_step(2, recipe, chain_catalog) == "2: A (T0) + C (T1) → D (T2)"

    def test_print_search_result(self, chain_catalog, capsys):
        result = BreadthFirstEngine(chain_catalog).find_shortest_path("D")
        print_search_result(result, chain_catalog)

        output = capsys.readouterr().out
        assert "BFS path to D" in output
        assert "1: A (T0) + B (T0) → C (T1)" in output
        assert "Steps: 2 | Visited: 4" in output

    def test_create_timing_summary(self):
        summary = create_timing_summary([0.1, 0.2, 0.3, 0.4])

        assert summary['count'] == 4
        assert summary['total_time'] == pytest.approx(1.0)
        assert summary['average_time'] == pytest.approx(0.25)
        assert summary['median_time'] == pytest.approx(0.25)
        assert summary['max_time'] == pytest.approx(0.4)

        assert create_timing_summary([])['count'] == 0

    def test_parse_value(self):
        assert parse_value("3") == 3
        assert parse_value("0.5") == 0.5
        assert parse_value("TRUE") is True
        assert parse_value("false") is False
        assert parse_value("bfs") == "bfs"


class TestAlchemySolver:
    """Test the solver wrapper used by the commands."""

    def test_initialization(self, workspace):
        solver = AlchemySolver()

        assert len(solver.catalog) == 4
        assert solver.default_algorithm == 'bfs'
        assert solver.search_config.max_workers == 4

    def test_overrides(self, workspace):
        solver = AlchemySolver(['search.algorithm=bidirectional', 'search.dfs.depth_multiplier=3'])

        assert solver.default_algorithm == 'bidirectional'
        assert solver.search_config.depth_multiplier == 3

    def test_solve_single(self, workspace):
        outcome = AlchemySolver().solve("D")

        assert outcome['success'] is True
        assert outcome['algorithm'] == 'bfs'
        assert outcome['found'] == 1
        assert outcome['shortfall'] == 0
        assert outcome['results'][0].visited_nodes == 4

    def test_solve_multiple(self, workspace):
        outcome = AlchemySolver().solve("D", algorithm="dfs", count=3)

        assert outcome['algorithm'] == 'dfs'
        assert outcome['found'] == 1
        assert outcome['shortfall'] == 2
        assert outcome['variants_attempted'] == 6

    def test_solve_unknown(self, workspace):
        with pytest.raises(ElementNotFound):
            AlchemySolver().solve("Nope")


class TestCLICommands:
    """Test end-to-end command handling."""

    def test_no_command(self):
        assert main_cli([]) == 1

    def test_solve(self, workspace, capsys):
        assert main_cli(['solve', 'D']) == 0

        output = capsys.readouterr().out
        assert "1: A (T0) + B (T0) → C (T1)" in output
        assert "2: A (T0) + C (T1) → D (T2)" in output

    def test_solve_with_output(self, workspace):
        output_file = workspace / "out.json"

        assert main_cli(['-q', '-o', str(output_file), 'solve', 'D', '-a', 'bid', '-n', '3']) == 0

        with open(output_file) as f:
            data = json.load(f)
        assert data['algorithm'] == 'bidirectional'
        assert data['found'] == 1
        assert data['shortfall'] == 2
        assert data['results'][0]['meeting_point'] in ('C', 'D')

    def test_solve_basic_target(self, workspace, capsys):
        assert main_cli(['solve', 'A']) == 0
        assert "basic element" in capsys.readouterr().out

    def test_solve_failure(self, workspace):
        output_file = workspace / "error.json"

        assert main_cli(['-o', str(output_file), 'solve', 'Nope']) == 1

        with open(output_file) as f:
            data = json.load(f)
        assert data['success'] is False
        assert data['error_type'] == 'ElementNotFound'

    def test_missing_catalog(self, workspace):
        assert main_cli(['--catalog', str(workspace / "missing.json"), 'solve', 'D']) == 1

    def test_catalog(self, workspace, capsys):
        assert main_cli(['catalog', '--sample', '2']) == 0

        output = capsys.readouterr().out
        assert "Elements:           4" in output
        assert "Basic elements:     A, B" in output
        assert "- A (Tier 0)" in output
        assert "... and 2 more elements" in output

    def test_catalog_from_file(self, workspace):
        output_file = workspace / "summary.json"

        assert main_cli(['--catalog', str(workspace / "elements.json"), '-o', str(output_file), 'catalog']) == 0

        with open(output_file) as f:
            summary = json.load(f)
        assert summary['recipes'] == 2
        assert summary['tiers'] == {'0': 2, '1': 1, '2': 1}

    def test_benchmark(self, workspace, capsys):
        output_file = workspace / "bench.json"

        assert main_cli(['-o', str(output_file), 'benchmark']) == 0

        assert "BENCHMARK SUMMARY" in capsys.readouterr().out
        with open(output_file) as f:
            data = json.load(f)
        assert data['targets'] == ['C', 'D']
        assert [row['algorithm'] for row in data['engines']] == ['bfs', 'dfs', 'bidirectional']
        assert all(row['solved'] == 2 for row in data['engines'])

    def test_benchmark_selected_targets(self, workspace, capsys):
        assert main_cli(['benchmark', '--targets', 'D', 'C', '--max-targets', '1']) == 0
        assert "on 1 targets" in capsys.readouterr().out

    def test_config_show_and_validate(self, workspace, capsys):
        assert main_cli(['config', 'show']) == 0
        assert "depth_multiplier: 2" in capsys.readouterr().out

        assert main_cli(['config', 'validate']) == 0
        assert main_cli(['-c', 'search.algorithm=astar', 'config', 'validate']) == 1

    def test_config_set(self, workspace, capsys):
        assert main_cli(['config', 'set', 'search.dfs.depth_multiplier', '3']) == 0
        assert "search.dfs.depth_multiplier = 3 (was 2)" in capsys.readouterr().out

        saved = OmegaConf.load(workspace / "conf" / "config.yaml")
        assert saved.search.dfs.depth_multiplier == 3

    def test_config_set_rejects_invalid_value(self, workspace):
        assert main_cli(['config', 'set', 'search.multipath.max_workers', '0']) == 1

        saved = OmegaConf.load(workspace / "conf" / "config.yaml")
        assert saved.search.multipath.max_workers == 4

    def test_keyboard_interrupt(self, workspace):
        with patch('alchemy_solver.cli.commands.solve_command', side_effect=KeyboardInterrupt):
            assert main_cli(['solve', 'D']) == 130
