# Path: ppo_index/process/extractor.py
"""
Index Extractor

Runs one extraction: builds the session and the active classifier,
walks the index stream, then drains the accumulators.

Data Flow:
    INPUT:   index stream (loaders.index_stream), heuristic tables
    PROCESS: walker -> correlator -> classifier
    OUTPUT:  streamed MatchResults (analysis) or drained results
"""

import time
from pathlib import Path
from typing import BinaryIO, Optional, Union
from dataclasses import dataclass, field

from ..config_loader import ConfigLoader
from ..core.logger import get_process_logger
from ..loaders.heuristic_tables import HeuristicTables
from ..loaders.index_stream import open_index_stream
from ..services.llm_client import ClassificationService
from .classifiers import create_classifier
from .memory_manager import MemoryManager, MemoryThresholds
from .modes import ClassificationMode, get_mode_config
from .session import ExtractionSession, MatchSink, SessionCounters
from .walker import DocumentWalker, WalkStatistics


@dataclass
class ExtractionSummary:
    """
    Outcome of one extraction run.

    Attributes:
        mode: Classification mode used
        results: Drained accumulator contents (empty in analysis mode)
        statistics: Walker statistics
        counters: Classification counters
        memory: Memory statistics, empty when monitoring is off
        elapsed_seconds: Wall time of the walk
    """
    mode: ClassificationMode
    results: list[str] = field(default_factory=list)
    statistics: WalkStatistics = field(default_factory=WalkStatistics)
    counters: SessionCounters = field(default_factory=SessionCounters)
    memory: dict[str, float] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            'mode': self.mode.value,
            'results': len(self.results),
            'statistics': self.statistics.to_dict(),
            'counters': self.counters.to_dict(),
            'memory': self.memory,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }


class IndexExtractor:
    """
    Main extraction orchestrator.

    Example:
        tables = load_heuristic_tables()
        extractor = IndexExtractor(ClassificationMode.HEURISTICS, tables)
        summary = extractor.run_file('2026-01-01_index.json.gz')
        for location in summary.results:
            print(location)
    """

    def __init__(
        self,
        mode: ClassificationMode,
        tables: HeuristicTables,
        service: Optional[ClassificationService] = None,
        match_sink: Optional[MatchSink] = None,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize extractor.

        Args:
            mode: Classification mode, fixed for the run
            tables: Heuristic tables
            service: Classification service for analysis mode
            match_sink: Receives each MatchResult as it is produced
            config: Configuration, defaults to ConfigLoader()
        """
        self.mode = mode
        self.mode_config = get_mode_config(mode)
        self.tables = tables
        self.service = service
        self.match_sink = match_sink
        self.config = config if config else ConfigLoader()
        self.logger = get_process_logger('extractor')

    def run(self, stream: BinaryIO) -> ExtractionSummary:
        """
        Extract from an open binary stream.

        Args:
            stream: Uncompressed JSON index stream

        Returns:
            ExtractionSummary

        Raises:
            IndexStructureError: If the document is malformed
        """
        self.logger.info(f"Starting extraction in {self.mode.value} mode")

        session = ExtractionSession(match_sink=self.match_sink)
        service = self.service if self.mode_config.uses_classification_service else None
        classifier = create_classifier(self.mode, self.tables, session, service)

        interval = self.config.get('memory_check_interval', 0)
        memory_manager = None
        if interval > 0:
            memory_manager = MemoryManager(
                MemoryThresholds.from_warning(self.config.get('memory_warning_mb', 512.0))
            )

        walker = DocumentWalker(
            classifier,
            memory_manager=memory_manager,
            memory_check_interval=interval if interval > 0 else 1000
        )

        start = time.time()
        statistics = walker.walk(stream)
        elapsed = time.time() - start

        summary = ExtractionSummary(
            mode=self.mode,
            results=classifier.finish(),
            statistics=statistics,
            counters=session.counters,
            memory=memory_manager.get_statistics() if memory_manager else {},
            elapsed_seconds=elapsed,
        )

        self.logger.info(
            f"Extraction complete in {elapsed:.2f}s: "
            f"{statistics.records} records, {statistics.file_references} files, "
            f"{session.counters.matched} streamed matches, {len(summary.results)} results"
        )
        return summary

    def run_file(self, file_path: Union[str, Path]) -> ExtractionSummary:
        """
        Extract from an index file (.json or .json.gz).

        Raises:
            FileNotFoundError: If the file doesn't exist
            IndexStructureError: If the document is malformed
        """
        with open_index_stream(file_path) as stream:
            return self.run(stream)


__all__ = ['ExtractionSummary', 'IndexExtractor']
