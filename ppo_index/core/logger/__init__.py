# Path: ppo_index/core/logger/__init__.py
"""
ppo_index Logger Package

IPO-aware logging for the index extractor.

Provides separate log streams for:
- INPUT layer (index stream, heuristic tables, CLI)
- PROCESS layer (walker, correlator, classifiers, service calls)
- OUTPUT layer (record writer)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
