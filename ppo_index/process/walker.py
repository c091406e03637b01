# Path: ppo_index/process/walker.py
"""
Streaming Index Walker

Recursive-descent reader over the JSON token stream of a price
transparency index:

    { ...,
      "reporting_structure": [
        { "reporting_plans":  [ {"plan_id_type": "EIN", "plan_id": "..."}, ... ],
          "in_network_files": [ {"description": "...", "location": "..."}, ... ],
          ... },
        ...
      ],
      ... }

Tokens come from ijson.basic_parse, so nothing larger than a single
scalar is decoded unless the walker asks for it. Every key the walker
does not care about is skipped token by token with balanced delimiters.
Inside a reporting record, keys are handled in the order they appear in
the file.

Memory use is bounded by one file reference (or plan identifier) at a
time plus the EIN set of the current record.
"""

import gzip
import zlib
from typing import Any, BinaryIO, Optional
from dataclasses import dataclass

import ijson

from ..constants import (
    REPORTING_RECORDS_KEY,
    PLAN_IDENTIFIERS_KEY,
    FILE_REFERENCES_KEY,
    PLAN_ID_TYPE_KEY,
    PLAN_ID_KEY,
    DESCRIPTION_KEY,
    LOCATION_KEY,
)
from ..core.logger import get_process_logger
from ..errors import ErrorCategory, IndexStructureError
from .classifiers.base_classifier import BaseClassifier
from .correlator import RecordCorrelator
from .memory_manager import MemoryManager
from .models import FileReference, PlanIdentifier


START_MAP = 'start_map'
END_MAP = 'end_map'
START_ARRAY = 'start_array'
END_ARRAY = 'end_array'
MAP_KEY = 'map_key'
STRING = 'string'
NULL = 'null'

CONTAINER_STARTS = (START_MAP, START_ARRAY)
CONTAINER_ENDS = (END_MAP, END_ARRAY)

FILE_REFERENCE_FIELDS = frozenset((DESCRIPTION_KEY, LOCATION_KEY))
PLAN_IDENTIFIER_FIELDS = frozenset((PLAN_ID_TYPE_KEY, PLAN_ID_KEY))

# Decoder messages that mean the input ended early. The yajl backends
# raise IncompleteJSONError for lexical errors as well.
TRUNCATION_MARKERS = ('incomplete', 'premature eof')


def is_truncation(error: Exception) -> bool:
    """True when a decoder error reports early end of input."""
    message = str(error).lower()
    return any(marker in message for marker in TRUNCATION_MARKERS)


class TokenReader:
    """
    ijson event stream with one token of lookahead.

    Attributes:
        position: Number of tokens consumed so far
    """

    def __init__(self, stream: BinaryIO):
        self._events = ijson.basic_parse(stream, use_float=True)
        self._peeked: Optional[tuple[str, Any]] = None
        self.position = 0

    def peek(self) -> tuple[str, Any]:
        if self._peeked is None:
            self._peeked = self._pull()
        return self._peeked

    def next(self) -> tuple[str, Any]:
        token = self.peek()
        self._peeked = None
        self.position += 1
        return token

    def _pull(self) -> tuple[str, Any]:
        try:
            return next(self._events)
        except StopIteration:
            raise IndexStructureError(
                "unexpected end of document",
                position=self.position,
                category=ErrorCategory.UNEXPECTED_EOF
            ) from None
        except ijson.IncompleteJSONError as e:
            if is_truncation(e):
                raise IndexStructureError(
                    f"truncated JSON: {e}",
                    position=self.position,
                    category=ErrorCategory.UNEXPECTED_EOF
                ) from e
            raise IndexStructureError(
                f"malformed JSON: {e}",
                position=self.position,
                category=ErrorCategory.JSON_MALFORMED
            ) from e
        except UnicodeDecodeError as e:
            raise IndexStructureError(
                f"invalid UTF-8 in document: {e}",
                position=self.position,
                category=ErrorCategory.JSON_MALFORMED
            ) from e
        except ijson.JSONError as e:
            raise IndexStructureError(
                f"malformed JSON: {e}",
                position=self.position,
                category=ErrorCategory.JSON_MALFORMED
            ) from e
        except EOFError as e:
            raise IndexStructureError(
                f"truncated compressed stream: {e}",
                position=self.position,
                category=ErrorCategory.UNEXPECTED_EOF
            ) from e
        except (gzip.BadGzipFile, zlib.error) as e:
            raise IndexStructureError(
                f"corrupt compressed stream: {e}",
                position=self.position,
                category=ErrorCategory.JSON_MALFORMED
            ) from e


@dataclass
class WalkStatistics:
    """
    Traversal statistics.

    Attributes:
        records: Reporting records visited
        file_references: File references handed to the classifier
        plan_identifiers: Plan identifiers decoded
        late_identifier_records: Records whose EINs arrived after their files
        skipped_root_keys: Root keys discarded unread
        tokens: Tokens consumed
    """
    records: int = 0
    file_references: int = 0
    plan_identifiers: int = 0
    late_identifier_records: int = 0
    skipped_root_keys: int = 0
    tokens: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            'records': self.records,
            'file_references': self.file_references,
            'plan_identifiers': self.plan_identifiers,
            'late_identifier_records': self.late_identifier_records,
            'skipped_root_keys': self.skipped_root_keys,
            'tokens': self.tokens,
        }


class DocumentWalker:
    """
    Streaming walker that feeds file references to a classifier.

    Example:
        walker = DocumentWalker(classifier)
        with open_index_stream('index.json.gz') as stream:
            stats = walker.walk(stream)
        print(f"{stats.records} records, {stats.file_references} files")
    """

    def __init__(
        self,
        classifier: BaseClassifier,
        memory_manager: Optional[MemoryManager] = None,
        memory_check_interval: int = 1000
    ):
        """
        Initialize walker.

        Args:
            classifier: Active classifier, resolved before traversal
            memory_manager: Optional memory monitor
            memory_check_interval: Records between memory samples
        """
        self.classifier = classifier
        self.memory_manager = memory_manager
        self.memory_check_interval = max(1, memory_check_interval)
        self.logger = get_process_logger('walker')

        self._reader: Optional[TokenReader] = None
        self._field: Optional[str] = None
        self._record_index: Optional[int] = None
        self.statistics = WalkStatistics()

    def walk(self, stream: BinaryIO) -> WalkStatistics:
        """
        Walk one index document.

        Args:
            stream: Binary stream positioned at the start of the JSON text

        Returns:
            WalkStatistics for the traversal

        Raises:
            IndexStructureError: On any structural or JSON error
        """
        self._reader = TokenReader(stream)
        self._field = None
        self._record_index = None
        self.statistics = WalkStatistics()

        try:
            self._walk_root()
        except IndexStructureError as e:
            if e.field is None:
                e.field = self._field
            if e.record_index is None:
                e.record_index = self._record_index
            self.logger.error(str(e))
            raise
        finally:
            self.statistics.tokens = self._reader.position

        self.logger.info(
            f"Walk complete: {self.statistics.records} records, "
            f"{self.statistics.file_references} file references"
        )
        return self.statistics

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def _walk_root(self) -> None:
        event, _ = self._reader.next()
        if event != START_MAP:
            raise self._error("expected root object")

        while True:
            event, key = self._reader.next()
            if event == END_MAP:
                return
            self._expect_key(event)

            self._field = key
            if key == REPORTING_RECORDS_KEY:
                self._walk_records()
            else:
                self.logger.debug(f"Skipping root field {key!r}")
                self.statistics.skipped_root_keys += 1
                self._skip_value()
            self._field = None

    def _walk_records(self) -> None:
        event, _ = self._reader.next()
        if event != START_ARRAY:
            raise self._error(f"{REPORTING_RECORDS_KEY} is not an array")

        record_index = 0
        while True:
            event, _ = self._reader.next()
            if event == END_ARRAY:
                self._record_index = None
                return
            self._record_index = record_index
            if event != START_MAP:
                raise self._error(f"expected object in {REPORTING_RECORDS_KEY} array")

            self._scan_record(record_index)
            record_index += 1

    def _scan_record(self, record_index: int) -> None:
        correlator = RecordCorrelator(record_index)

        while True:
            event, key = self._reader.next()
            if event == END_MAP:
                break
            self._expect_key(event)

            self._field = key
            if key == FILE_REFERENCES_KEY:
                self._walk_file_references(correlator)
            elif key == PLAN_IDENTIFIERS_KEY and self.classifier.uses_plan_identifiers:
                self._walk_plan_identifiers(correlator)
            else:
                self._skip_value()
        self._field = REPORTING_RECORDS_KEY

        if correlator.late_identifiers:
            self.statistics.late_identifier_records += 1
            self.logger.warning(
                f"Record {record_index}: {PLAN_IDENTIFIERS_KEY} appeared after "
                f"{FILE_REFERENCES_KEY}; earlier file references carry no EINs"
            )

        self.statistics.records += 1
        if self.statistics.records % self.memory_check_interval == 0:
            self.logger.info(
                f"Processed {self.statistics.records} records, "
                f"{self.statistics.file_references} file references"
            )
            if self.memory_manager is not None:
                self.memory_manager.check_memory()

    def _walk_file_references(self, correlator: RecordCorrelator) -> None:
        event, _ = self._reader.next()
        if event != START_ARRAY:
            raise self._error(f"{FILE_REFERENCES_KEY} is not an array")

        context = correlator.context()
        while self._reader.peek()[0] != END_ARRAY:
            values = self._decode_element(FILE_REFERENCE_FIELDS)
            file_reference = FileReference(
                description=values.get(DESCRIPTION_KEY, ''),
                location=values.get(LOCATION_KEY, ''),
            )
            self.classifier.classify(context, file_reference)
            self.statistics.file_references += 1
            correlator.mark_file_references_seen()
        self._reader.next()

    def _walk_plan_identifiers(self, correlator: RecordCorrelator) -> None:
        event, _ = self._reader.next()
        if event != START_ARRAY:
            raise self._error(f"{PLAN_IDENTIFIERS_KEY} is not an array")

        while self._reader.peek()[0] != END_ARRAY:
            values = self._decode_element(PLAN_IDENTIFIER_FIELDS)
            correlator.add_identifier(PlanIdentifier(
                id_type=values.get(PLAN_ID_TYPE_KEY, ''),
                id=values.get(PLAN_ID_KEY, ''),
            ))
            self.statistics.plan_identifiers += 1
        self._reader.next()

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _decode_element(self, wanted: frozenset) -> dict[str, str]:
        """
        Decode the string fields named in wanted from one array element.

        Other keys of the element are skipped. A JSON null element or
        field decodes as empty.
        """
        event, _ = self._reader.next()
        if event == NULL:
            return {}
        if event != START_MAP:
            raise self._error(
                f"cannot decode {self._field} element: expected object, got {event}",
                ErrorCategory.ELEMENT_INVALID
            )

        values: dict[str, str] = {}
        while True:
            event, key = self._reader.next()
            if event == END_MAP:
                return values
            self._expect_key(event)

            if key not in wanted:
                self._skip_value()
                continue

            event, value = self._reader.next()
            if event == STRING:
                values[key] = value
            elif event == NULL:
                values[key] = ''
            else:
                raise self._error(
                    f"cannot decode {self._field} element: {key!r} must be a string, got {event}",
                    ErrorCategory.ELEMENT_INVALID
                )

    def _skip_value(self) -> None:
        """Consume one complete value without building it."""
        event, _ = self._reader.next()
        if event not in CONTAINER_STARTS:
            if event in CONTAINER_ENDS or event == MAP_KEY:
                raise self._error(f"expected a value, got {event}")
            return

        depth = 1
        while depth:
            event, _ = self._reader.next()
            if event in CONTAINER_STARTS:
                depth += 1
            elif event in CONTAINER_ENDS:
                depth -= 1

    def _expect_key(self, event: str) -> None:
        if event != MAP_KEY:
            raise self._error(f"expected object key, got {event}")

    def _error(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.STRUCTURE_INVALID
    ) -> IndexStructureError:
        return IndexStructureError(
            message,
            field=self._field,
            record_index=self._record_index,
            position=self._reader.position,
            category=category
        )


__all__ = ['TokenReader', 'WalkStatistics', 'DocumentWalker']
