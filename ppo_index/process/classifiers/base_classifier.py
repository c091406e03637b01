# Path: ppo_index/process/classifiers/base_classifier.py
"""
Base Classifier

Abstract base class for the classification modes.
The walker only talks to this interface, so it never needs to know
which mode is active.
"""

from abc import ABC, abstractmethod

from ...core.logger import get_process_logger
from ...loaders.heuristic_tables import HeuristicTables
from ...errors import PlanCodeError
from ..modes import ClassificationMode, ModeConfiguration, get_mode_config
from ..models import ClassificationOutcome, FileReference, RecordContext
from ..plan_code import extract_plan_code
from ..session import ExtractionSession


class BaseClassifier(ABC):
    """
    Abstract base class for classifiers.

    One classifier exists per mode:
    - UniquePlanClassifier: collect distinct plan descriptions
    - HeuristicClassifier: plan table AND region table
    - AssistedClassifier: naive hints OR region table OR service verdict

    Subclasses must implement mode and classify().

    Example:
        classifier = HeuristicClassifier(tables, session)
        outcome = classifier.classify(context, file_reference)
        if outcome.status == OutcomeStatus.COLLECTED:
            ...
    """

    def __init__(self, tables: HeuristicTables, session: ExtractionSession):
        """
        Initialize classifier.

        Args:
            tables: Heuristic tables, loaded once for the run
            session: Run-scoped accumulators and match sink
        """
        self.tables = tables
        self.session = session
        self.logger = get_process_logger(f'classifiers.{self.mode.value}')

    @property
    @abstractmethod
    def mode(self) -> ClassificationMode:
        """Return the mode this classifier implements."""
        pass

    @property
    def mode_config(self) -> ModeConfiguration:
        return get_mode_config(self.mode)

    @property
    def uses_plan_identifiers(self) -> bool:
        """Whether the walker should decode reporting_plans for this mode."""
        return self.mode_config.uses_plan_identifiers

    @abstractmethod
    def classify(
        self,
        context: RecordContext,
        file_reference: FileReference
    ) -> ClassificationOutcome:
        """
        Classify one file reference.

        Args:
            context: EINs correlated with the enclosing record so far
            file_reference: Decoded file reference

        Returns:
            ClassificationOutcome
        """
        pass

    def finish(self) -> list[str]:
        """
        Drain accumulated results at the end of the run.

        Returns:
            Accumulated strings, empty for streaming modes
        """
        return []

    def _region_code_match(self, location: str) -> bool:
        """
        Check whether the plan code of a location is a known region code.

        Extraction failures count as no match.
        """
        try:
            plan_code = extract_plan_code(location)
        except PlanCodeError as e:
            self.session.counters.plan_code_failures += 1
            self.logger.debug(f"No plan code ({e.kind}): {e.message}")
            return False
        return self.tables.is_region_code(plan_code)


__all__ = ['BaseClassifier']
