# Path: ppo_index/errors.py
"""
Error Handling System

Error classification for index extraction.

This module defines:
- Error severity levels (CRITICAL, ERROR, WARNING, INFO)
- Error categories
- Plan code failure kinds
- Exception classes with rich context

Severity decides the blast radius:
    CRITICAL errors (malformed index structure, unloadable heuristic
    tables) abort the run. Plan code and classification service errors
    are scoped to a single file reference and never leave the pipeline.
"""

from enum import Enum
from typing import Optional


# ==============================================================================
# ERROR SEVERITY LEVELS
# ==============================================================================

class ErrorSeverity(Enum):
    """
    Error severity classification.

    Levels:
        CRITICAL: Cannot continue (e.g., root is not an object)
        ERROR: Operation failed, caller decides (e.g., service unreachable)
        WARNING: Unusual pattern worth reviewing (e.g., late plan identifiers)
        INFO: Informational
    """
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# ERROR CATEGORIES
# ==============================================================================

class ErrorCategory(Enum):
    """Error category classification for grouping related errors."""
    # Index structure
    JSON_MALFORMED = "JSON_MALFORMED"
    STRUCTURE_INVALID = "STRUCTURE_INVALID"
    ELEMENT_INVALID = "ELEMENT_INVALID"
    UNEXPECTED_EOF = "UNEXPECTED_EOF"

    # Derived values
    PLAN_CODE_UNAVAILABLE = "PLAN_CODE_UNAVAILABLE"

    # Classification service
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    SERVICE_RESPONSE_INVALID = "SERVICE_RESPONSE_INVALID"

    # Configuration
    HEURISTICS_LOAD_FAILED = "HEURISTICS_LOAD_FAILED"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# PLAN CODE FAILURE KINDS
# ==============================================================================

class PlanCodeFailure(Enum):
    """Reasons a plan code cannot be extracted from a location URL."""
    INVALID_URL = "InvalidUrl"
    NO_FILENAME = "NoFilename"
    INSUFFICIENT_SEPARATORS = "InsufficientSeparators"
    INVALID_SEPARATOR_SPACING = "InvalidSeparatorSpacing"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# EXCEPTION CLASSES
# ==============================================================================

class ExtractionError(Exception):
    """Base class for all ppo_index errors."""

    severity: ErrorSeverity = ErrorSeverity.ERROR
    category: Optional[ErrorCategory] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Optional[str]]:
        """Convert to dictionary for serialization."""
        return {
            'severity': self.severity.value,
            'category': self.category.value if self.category else None,
            'message': self.message,
        }


class IndexStructureError(ExtractionError):
    """
    Fatal structural error in the index document.

    Attributes:
        field: JSON key being processed when the error was detected
        record_index: Zero-based index of the reporting record, if inside one
        position: Number of tokens consumed when the error was detected
    """

    severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        record_index: Optional[int] = None,
        position: Optional[int] = None,
        category: ErrorCategory = ErrorCategory.STRUCTURE_INVALID
    ):
        super().__init__(message)
        self.field = field
        self.record_index = record_index
        self.position = position
        self.category = category

    def __str__(self) -> str:
        """String representation for logging and stderr."""
        parts = [f"[{self.severity.value}] {self.category.value}: {self.message}"]
        if self.field is not None:
            parts.append(f"Field: {self.field}")
        if self.record_index is not None:
            parts.append(f"Record: {self.record_index}")
        if self.position is not None:
            parts.append(f"Token: {self.position}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Optional[str]]:
        data = super().to_dict()
        data.update({
            'field': self.field,
            'record_index': self.record_index,
            'position': self.position,
        })
        return data


class PlanCodeError(ExtractionError):
    """Plan code could not be extracted from a location URL."""

    severity = ErrorSeverity.INFO
    category = ErrorCategory.PLAN_CODE_UNAVAILABLE

    def __init__(self, kind: PlanCodeFailure, url: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.url = url


class ClassificationServiceError(ExtractionError):
    """The external classification service failed to give a verdict."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SERVICE_UNAVAILABLE
    ):
        super().__init__(message)
        self.category = category


class HeuristicsLoadError(ExtractionError):
    """Heuristic tables could not be loaded."""

    severity = ErrorSeverity.CRITICAL
    category = ErrorCategory.HEURISTICS_LOAD_FAILED


__all__ = [
    'ErrorSeverity',
    'ErrorCategory',
    'PlanCodeFailure',
    'ExtractionError',
    'IndexStructureError',
    'PlanCodeError',
    'ClassificationServiceError',
    'HeuristicsLoadError',
]
