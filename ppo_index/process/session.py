# Path: ppo_index/process/session.py
"""
Extraction Session

Run-scoped state shared by the classifiers: the two deduplicating
accumulators, the sink for streamed matches, and counters.

Lifecycle: created at run start, written only by the classification
pipeline, drained once at run end.
"""

from typing import Callable, Optional
from dataclasses import dataclass, field

from .models import MatchResult


MatchSink = Callable[[MatchResult], None]


@dataclass
class SessionCounters:
    """Counters collected while classifying."""
    collected: int = 0
    skipped: int = 0
    matched: int = 0
    not_matched: int = 0
    plan_code_failures: int = 0
    service_errors: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            'collected': self.collected,
            'skipped': self.skipped,
            'matched': self.matched,
            'not_matched': self.not_matched,
            'plan_code_failures': self.plan_code_failures,
            'service_errors': self.service_errors,
        }


class ExtractionSession:
    """
    Accumulators and match sink for one extraction run.

    Example:
        emitted = []
        session = ExtractionSession(match_sink=emitted.append)
        session.unique_matched_locations.add('https://...')
        session.drain_matched_locations()  # ['https://...']
    """

    def __init__(self, match_sink: Optional[MatchSink] = None):
        """
        Initialize session.

        Args:
            match_sink: Called once per MatchResult, as soon as it is made
        """
        self.unique_plan_descriptions: set[str] = set()
        self.unique_matched_locations: set[str] = set()
        self.counters = SessionCounters()
        self._match_sink = match_sink

    def emit(self, match: MatchResult) -> None:
        """Hand a match to the sink without retaining it."""
        self.counters.matched += 1
        if self._match_sink is not None:
            self._match_sink(match)

    def drain_plan_descriptions(self) -> list[str]:
        """Return the unique plan descriptions (sorted) and clear the set."""
        result = sorted(self.unique_plan_descriptions)
        self.unique_plan_descriptions.clear()
        return result

    def drain_matched_locations(self) -> list[str]:
        """Return the unique matched locations (sorted) and clear the set."""
        result = sorted(self.unique_matched_locations)
        self.unique_matched_locations.clear()
        return result


__all__ = ['MatchSink', 'SessionCounters', 'ExtractionSession']
