# Path: ppo_index/loaders/__init__.py
"""
ppo_index Loaders Package

Readers for everything the extractor takes in.

Data Sources:
    - index_stream: the (optionally gzipped) index document
    - heuristic_tables: PPO plan and region code tables (YAML)
"""

from .heuristic_tables import (
    DEFAULT_HEURISTICS_PATH,
    HeuristicTables,
    HeuristicTablesLoader,
    load_heuristic_tables,
)
from .index_stream import is_gzip_file, open_index_stream

__all__ = [
    'DEFAULT_HEURISTICS_PATH',
    'HeuristicTables',
    'HeuristicTablesLoader',
    'load_heuristic_tables',
    'is_gzip_file',
    'open_index_stream',
]
