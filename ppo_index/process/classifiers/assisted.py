# Path: ppo_index/process/classifiers/assisted.py
"""
Assisted Classifier

Combines three independent signals per file reference:

    naive:       description mentions New York AND a PPO-ish plan type
    region code: plan code of the location is a known region code
    ai:          classification service says New York, then says PPO

Any signal is enough to emit a MatchResult. The result carries each
signal separately so consumers can see which one fired.
"""

from typing import Optional

from ...constants import (
    IS_NEW_YORK_PROMPT,
    IS_PPO_PROMPT,
    PLAN_TYPE_HINTS,
    REGION_HINTS,
)
from ...errors import ClassificationServiceError
from ...loaders.heuristic_tables import HeuristicTables
from ...services.llm_client import ClassificationService
from ..modes import ClassificationMode
from ..models import (
    ClassificationOutcome,
    FileReference,
    MatchResult,
    OutcomeStatus,
    RecordContext,
)
from ..session import ExtractionSession
from .base_classifier import BaseClassifier


def naive_match(description: str) -> bool:
    """Substring hints: a region hint and a plan-type hint both present."""
    lowered = description.lower()
    return (
        any(hint in lowered for hint in REGION_HINTS)
        and any(hint in lowered for hint in PLAN_TYPE_HINTS)
    )


class AssistedClassifier(BaseClassifier):
    """
    Streams a MatchResult for every file reference any signal accepts.

    Service errors count as a "no" for the question asked, so with the
    service down the classifier degrades to the two table/hint signals.
    """

    def __init__(
        self,
        tables: HeuristicTables,
        session: ExtractionSession,
        service: Optional[ClassificationService] = None
    ):
        """
        Initialize classifier.

        Args:
            tables: Heuristic tables
            session: Run-scoped session; matches go to its sink
            service: Classification service, None to skip the ai signal
        """
        super().__init__(tables, session)
        self.service = service

    @property
    def mode(self) -> ClassificationMode:
        return ClassificationMode.ANALYSIS

    def classify(
        self,
        context: RecordContext,
        file_reference: FileReference
    ) -> ClassificationOutcome:
        heuristic = naive_match(file_reference.description)
        region_code = self._region_code_match(file_reference.location)
        ai = self._ai_match(file_reference.description)

        if not (heuristic or region_code or ai):
            self.session.counters.not_matched += 1
            return ClassificationOutcome(OutcomeStatus.NO_MATCH)

        match = MatchResult(
            description=file_reference.description,
            location=file_reference.location,
            eins=context.eins,
            ai_match=ai,
            heuristic_match=heuristic,
            region_code_match=region_code,
        )
        self.session.emit(match)
        return ClassificationOutcome(OutcomeStatus.MATCHED, match)

    def _ai_match(self, description: str) -> bool:
        """Ask the New York question, then the PPO question only on a yes."""
        if self.service is None:
            return False
        if not self._ask(IS_NEW_YORK_PROMPT, description):
            return False
        return self._ask(IS_PPO_PROMPT, description)

    def _ask(self, instruction: str, text: str) -> bool:
        try:
            return self.service.ask(instruction, text)
        except ClassificationServiceError as e:
            self.session.counters.service_errors += 1
            self.logger.debug(f"Classification service error, treating as no: {e}")
            return False


__all__ = ['naive_match', 'AssistedClassifier']
