# Path: ppo_index/output/record_writer.py
"""
Record Writer

Writes extraction output as JSON Lines: one independently parseable
JSON value per line, flushed immediately so matches show up while the
walk is still running.

Record shapes:
    {"starttime": "..."} / {"endtime": "..."} / {"duration": "..."}
    {"audit": "..."} / {"warning": "..."}
    {"description": ..., "location": ..., "eins": [...], "aiMatch": ...,
     "heuristicMatch": ..., "regionCodeMatch": ...}
    "bare string"   (unique plan description or matched location)
"""

import json
import sys
from typing import Any, Iterable, Optional, TextIO

from ..core.logger import get_output_logger
from ..process.models import MatchResult


class RecordWriter:
    """
    JSON Lines writer for extraction records.

    Example:
        writer = RecordWriter()
        writer.write_marker('starttime', '2026-10-16 09:00:00')
        writer.write_match(match)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize writer.

        Args:
            stream: Text stream to write to, defaults to stdout
        """
        self.stream = stream if stream is not None else sys.stdout
        self.logger = get_output_logger('record_writer')
        self.records_written = 0

    def write(self, value: Any) -> None:
        """Write one JSON value as a line."""
        self.stream.write(json.dumps(value, ensure_ascii=False))
        self.stream.write('\n')
        self.stream.flush()
        self.records_written += 1

    def write_marker(self, key: str, value: Any) -> None:
        """Write a single-key record such as {"starttime": "..."}."""
        self.write({key: value})

    def write_match(self, match: MatchResult) -> None:
        self.write(match.to_dict())

    def write_results(self, results: Iterable[str]) -> int:
        """
        Write accumulated results as bare strings.

        Returns:
            Number of results written
        """
        count = 0
        for result in results:
            self.write(result)
            count += 1
        self.logger.info(f"Wrote {count} results")
        return count


__all__ = ['RecordWriter']
