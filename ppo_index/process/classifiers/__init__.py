# Path: ppo_index/process/classifiers/__init__.py
"""
Classifiers

One classifier per classification mode. The active classifier is
resolved once, before traversal starts, and the walker only sees the
BaseClassifier interface.

Classifiers:
- UniquePlanClassifier: unique plan descriptions
- HeuristicClassifier: PPO plan table AND region code table
- AssistedClassifier: naive hints OR region code OR service verdict
"""

from typing import Optional

from ...loaders.heuristic_tables import HeuristicTables
from ...services.llm_client import ClassificationService
from ..modes import ClassificationMode
from ..session import ExtractionSession
from .base_classifier import BaseClassifier
from .unique_plans import UniquePlanClassifier
from .heuristic import HeuristicClassifier
from .assisted import AssistedClassifier, naive_match


def create_classifier(
    mode: ClassificationMode,
    tables: HeuristicTables,
    session: ExtractionSession,
    service: Optional[ClassificationService] = None
) -> BaseClassifier:
    """
    Create the classifier for a mode.

    Args:
        mode: Classification mode for the run
        tables: Heuristic tables
        session: Run-scoped session
        service: Classification service (analysis mode only)

    Returns:
        BaseClassifier implementation

    Raises:
        ValueError: For an unknown mode
    """
    if mode == ClassificationMode.UNIQUE_PLANS:
        return UniquePlanClassifier(tables, session)
    if mode == ClassificationMode.HEURISTICS:
        return HeuristicClassifier(tables, session)
    if mode == ClassificationMode.ANALYSIS:
        return AssistedClassifier(tables, session, service)
    raise ValueError(f"Unknown classification mode: {mode}")


__all__ = [
    'BaseClassifier',
    'UniquePlanClassifier',
    'HeuristicClassifier',
    'AssistedClassifier',
    'naive_match',
    'create_classifier',
]
