# Path: ppo_index/process/correlator.py
"""
Record Correlator

Associates EIN plan identifiers with the file references of the same
reporting record.

Correlation is positional: file references only see the identifiers
that appeared earlier in the byte stream. A record that lists
in_network_files before reporting_plans gets an empty EIN set for those
files. Nothing is buffered ahead.
"""

from ..constants import EIN_ID_TYPE
from .models import PlanIdentifier, RecordContext


class RecordCorrelator:
    """
    Per-record EIN accumulator.

    Example:
        correlator = RecordCorrelator(record_index=0)
        correlator.add_identifier(PlanIdentifier(id_type='EIN', id='123'))
        correlator.context().eins  # frozenset({'123'})
    """

    def __init__(self, record_index: int):
        self.record_index = record_index
        self._eins: set[str] = set()
        self._file_references_seen = False
        self.late_identifiers = False

    def add_identifier(self, identifier: PlanIdentifier) -> bool:
        """
        Record a plan identifier if it is an EIN.

        Args:
            identifier: Decoded reporting_plans entry

        Returns:
            True if the identifier was kept
        """
        if identifier.id_type.lower() != EIN_ID_TYPE:
            return False

        if self._file_references_seen:
            self.late_identifiers = True

        self._eins.add(identifier.id)
        return True

    def mark_file_references_seen(self) -> None:
        """Note that file references of this record were already classified."""
        self._file_references_seen = True

    def context(self) -> RecordContext:
        """Snapshot of the EINs discovered so far."""
        return RecordContext(record_index=self.record_index, eins=frozenset(self._eins))

    @property
    def ein_count(self) -> int:
        return len(self._eins)


__all__ = ['RecordCorrelator']
