# Path: ppo_index/process/models.py
"""
Extraction Models

Value types passed between the walker, the correlator and the
classifiers. None of them outlive the reporting record they came from
except MatchResult, which is handed to the output sink immediately.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileReference:
    """
    One entry of a reporting record's in_network_files list.

    Attributes:
        description: Free-text plan name
        location: URL of the downstream rate file
    """
    description: str = ''
    location: str = ''


@dataclass(frozen=True)
class PlanIdentifier:
    """One entry of a reporting record's reporting_plans list."""
    id_type: str = ''
    id: str = ''


@dataclass(frozen=True)
class RecordContext:
    """
    Snapshot of what is known about the current reporting record.

    Attributes:
        record_index: Zero-based position in reporting_structure
        eins: EIN plan identifiers seen so far in this record
    """
    record_index: int
    eins: frozenset = field(default_factory=frozenset)


@dataclass(frozen=True)
class MatchResult:
    """
    Assisted-match verdict for a single file reference.

    Attributes:
        description: Plan description as found in the index
        location: File location URL
        eins: EINs correlated with the record when the file was seen
        ai_match: Classification service said New York AND PPO
        heuristic_match: Naive substring hints matched
        region_code_match: Plan code is a known region code
    """
    description: str
    location: str
    eins: frozenset
    ai_match: bool
    heuristic_match: bool
    region_code_match: bool

    def to_dict(self) -> dict:
        """Convert to the output record shape."""
        return {
            'description': self.description,
            'location': self.location,
            'eins': sorted(self.eins),
            'aiMatch': self.ai_match,
            'heuristicMatch': self.heuristic_match,
            'regionCodeMatch': self.region_code_match,
        }


class OutcomeStatus(str, Enum):
    """What a classifier did with a file reference."""
    COLLECTED = "collected"
    SKIPPED = "skipped"
    MATCHED = "matched"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class ClassificationOutcome:
    """Result of classifying one file reference."""
    status: OutcomeStatus
    match: Optional[MatchResult] = None


__all__ = [
    'FileReference',
    'PlanIdentifier',
    'RecordContext',
    'MatchResult',
    'OutcomeStatus',
    'ClassificationOutcome',
]
