# Path: ppo_index/process/classifiers/unique_plans.py
"""
Unique Plan Classifier

Collects every distinct (lower-cased) plan description in the index.
Used to discover candidate entries for the PPO plan table.
"""

from ...constants import PLACEHOLDER_DESCRIPTION
from ..modes import ClassificationMode
from ..models import ClassificationOutcome, FileReference, OutcomeStatus, RecordContext
from .base_classifier import BaseClassifier


PLACEHOLDER_KEY = PLACEHOLDER_DESCRIPTION.lower()


class UniquePlanClassifier(BaseClassifier):
    """Accumulates unique plan descriptions, skipping the placeholder."""

    @property
    def mode(self) -> ClassificationMode:
        return ClassificationMode.UNIQUE_PLANS

    def classify(
        self,
        context: RecordContext,
        file_reference: FileReference
    ) -> ClassificationOutcome:
        description = file_reference.description.lower()

        if description == PLACEHOLDER_KEY:
            self.session.counters.skipped += 1
            return ClassificationOutcome(OutcomeStatus.SKIPPED)

        self.session.unique_plan_descriptions.add(description)
        self.session.counters.collected += 1
        return ClassificationOutcome(OutcomeStatus.COLLECTED)

    def finish(self) -> list[str]:
        return self.session.drain_plan_descriptions()


__all__ = ['UniquePlanClassifier']
