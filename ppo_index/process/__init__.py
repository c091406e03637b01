# Path: ppo_index/process/__init__.py
"""
Process Layer for ppo_index

The PROCESS layer turns an index stream into results:
- walker        - streaming recursive-descent traversal (ijson tokens)
- correlator    - EINs of the current reporting record
- plan_code     - region/plan code from a location URL
- classifiers/  - one classifier per classification mode
- session       - run-scoped accumulators and match sink
- extractor     - orchestration of a single run

All components follow the IPO pattern:
- Read from INPUT layer (loaders)
- Process data (traversal, classification)
- Hand results to OUTPUT layer (record writer)
"""

from .modes import ClassificationMode, DEFAULT_MODE, get_mode_config, list_modes
from .models import (
    FileReference,
    PlanIdentifier,
    RecordContext,
    MatchResult,
    OutcomeStatus,
    ClassificationOutcome,
)
from .plan_code import extract_plan_code
from .correlator import RecordCorrelator
from .session import ExtractionSession
from .classifiers import create_classifier
from .walker import DocumentWalker, WalkStatistics
from .extractor import ExtractionSummary, IndexExtractor

__all__ = [
    'ClassificationMode',
    'DEFAULT_MODE',
    'get_mode_config',
    'list_modes',
    'FileReference',
    'PlanIdentifier',
    'RecordContext',
    'MatchResult',
    'OutcomeStatus',
    'ClassificationOutcome',
    'extract_plan_code',
    'RecordCorrelator',
    'ExtractionSession',
    'create_classifier',
    'DocumentWalker',
    'WalkStatistics',
    'ExtractionSummary',
    'IndexExtractor',
]
