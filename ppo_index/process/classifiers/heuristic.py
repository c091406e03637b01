# Path: ppo_index/process/classifiers/heuristic.py
"""
Heuristic Classifier

Table-driven matching with no external service:
a file is a New York PPO file when its description is in the PPO plan
table AND its plan code is in the region code table.
"""

from ..modes import ClassificationMode
from ..models import ClassificationOutcome, FileReference, OutcomeStatus, RecordContext
from .base_classifier import BaseClassifier


class HeuristicClassifier(BaseClassifier):
    """
    Accumulates unique locations passing both table lookups.

    The plan table is a hard gate: the region check is not attempted for
    descriptions outside it.
    """

    @property
    def mode(self) -> ClassificationMode:
        return ClassificationMode.HEURISTICS

    def classify(
        self,
        context: RecordContext,
        file_reference: FileReference
    ) -> ClassificationOutcome:
        if not self.tables.is_ppo_plan(file_reference.description):
            self.session.counters.skipped += 1
            return ClassificationOutcome(OutcomeStatus.SKIPPED)

        if not self._region_code_match(file_reference.location):
            self.session.counters.not_matched += 1
            return ClassificationOutcome(OutcomeStatus.NO_MATCH)

        self.session.unique_matched_locations.add(file_reference.location)
        self.session.counters.collected += 1
        return ClassificationOutcome(OutcomeStatus.COLLECTED)

    def finish(self) -> list[str]:
        return self.session.drain_matched_locations()


__all__ = ['HeuristicClassifier']
