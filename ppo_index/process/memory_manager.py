# Path: ppo_index/process/memory_manager.py
"""
Memory Monitoring for Streaming

Samples process memory while the walker runs so a regression in the
constant-memory contract shows up in the logs instead of as an OOM kill.

Only the initial, current and peak snapshots are kept; the sample
history is not retained because a run may take millions of samples.
"""

import gc
from typing import Optional
from dataclasses import dataclass
from datetime import datetime

import psutil

from ..core.logger import get_process_logger


BYTES_PER_MB = 1024 * 1024


@dataclass
class MemorySnapshot:
    """
    Memory usage snapshot.

    Attributes:
        timestamp: When snapshot was taken
        rss_mb: Resident set size in megabytes
        percent: System memory usage percentage
        available_mb: Available system memory in MB
    """
    timestamp: datetime
    rss_mb: float
    percent: float
    available_mb: float

    def __str__(self) -> str:
        return (
            f"Memory: {self.rss_mb:.1f}MB RSS, "
            f"{self.percent:.1f}% used, "
            f"{self.available_mb:.1f}MB available"
        )


@dataclass
class MemoryThresholds:
    """
    Memory threshold configuration.

    Attributes:
        warning_mb: Warn when RSS exceeds this (MB)
        critical_mb: Log an error when RSS exceeds this (MB)
        max_percent: Maximum system memory percentage (0-100)
    """
    warning_mb: float = 512.0
    critical_mb: float = 1024.0
    max_percent: float = 90.0

    @classmethod
    def from_warning(cls, warning_mb: float) -> 'MemoryThresholds':
        return cls(warning_mb=warning_mb, critical_mb=warning_mb * 2)


class MemoryManager:
    """
    Memory monitor for the document walker.

    Example:
        manager = MemoryManager(MemoryThresholds(warning_mb=256))
        status = manager.check_memory()
        if status['critical']:
            ...
    """

    def __init__(self, thresholds: Optional[MemoryThresholds] = None):
        self.thresholds = thresholds or MemoryThresholds()
        self.logger = get_process_logger('memory')

        self.warning_count = 0
        self.critical_count = 0
        self.samples_taken = 0

        self.initial_snapshot = self.take_snapshot()
        self.peak_snapshot = self.initial_snapshot
        self.current_snapshot = self.initial_snapshot

    def take_snapshot(self) -> MemorySnapshot:
        """Take current memory snapshot."""
        memory_info = psutil.Process().memory_info()
        virtual_memory = psutil.virtual_memory()

        snapshot = MemorySnapshot(
            timestamp=datetime.now(),
            rss_mb=memory_info.rss / BYTES_PER_MB,
            percent=virtual_memory.percent,
            available_mb=virtual_memory.available / BYTES_PER_MB
        )
        self.samples_taken += 1
        return snapshot

    def check_memory(self) -> dict[str, bool]:
        """
        Sample memory and compare against thresholds.

        Returns:
            Dictionary with 'warning' and 'critical' flags
        """
        snapshot = self.take_snapshot()
        self.current_snapshot = snapshot
        if snapshot.rss_mb > self.peak_snapshot.rss_mb:
            self.peak_snapshot = snapshot

        status = {'warning': False, 'critical': False}

        if (snapshot.rss_mb > self.thresholds.critical_mb or
                snapshot.percent > self.thresholds.max_percent):
            status['critical'] = True
            self.critical_count += 1
            self.logger.error(f"Memory critical: {snapshot}")
            gc.collect()
        elif snapshot.rss_mb > self.thresholds.warning_mb:
            status['warning'] = True
            self.warning_count += 1
            self.logger.warning(f"Memory warning: {snapshot}")

        return status

    def get_statistics(self) -> dict[str, float]:
        """Get memory usage statistics."""
        return {
            'initial_mb': self.initial_snapshot.rss_mb,
            'current_mb': self.current_snapshot.rss_mb,
            'peak_mb': self.peak_snapshot.rss_mb,
            'delta_mb': self.current_snapshot.rss_mb - self.initial_snapshot.rss_mb,
            'warning_count': self.warning_count,
            'critical_count': self.critical_count,
            'samples_taken': self.samples_taken,
        }

    def __str__(self) -> str:
        return (
            f"MemoryManager("
            f"current={self.current_snapshot.rss_mb:.1f}MB, "
            f"peak={self.peak_snapshot.rss_mb:.1f}MB)"
        )


__all__ = [
    'MemorySnapshot',
    'MemoryThresholds',
    'MemoryManager',
]
