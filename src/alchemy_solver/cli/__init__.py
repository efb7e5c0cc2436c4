"""Command-line interface for the alchemy solver.

Subcommands answer path queries, summarize catalogs, benchmark the engines
and manage configuration.
"""

from .main import main_cli
from .commands import solve_command, catalog_command, benchmark_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'catalog_command',
    'benchmark_command',
    'config_command',
    'setup_logging',
    'save_results'
]
