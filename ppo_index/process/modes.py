# Path: ppo_index/process/modes.py
"""
Classification Mode Configurations

The three mutually exclusive classification modes and what each one
needs from the rest of the pipeline.
"""

from enum import Enum
from dataclasses import dataclass


class ClassificationMode(Enum):
    """Classification mode selection."""
    UNIQUE_PLANS = "uniquePlans"
    HEURISTICS = "heuristics"
    ANALYSIS = "analysis"


@dataclass(frozen=True)
class ModeConfiguration:
    """Configuration for classification mode."""
    mode: ClassificationMode
    uses_plan_identifiers: bool = False
    uses_classification_service: bool = False
    streams_results: bool = False
    description: str = ""


MODE_CONFIGURATIONS = {
    ClassificationMode.UNIQUE_PLANS: ModeConfiguration(
        mode=ClassificationMode.UNIQUE_PLANS,
        uses_plan_identifiers=False,
        uses_classification_service=False,
        streams_results=False,
        description="Extract all unique plan names"
    ),

    ClassificationMode.HEURISTICS: ModeConfiguration(
        mode=ClassificationMode.HEURISTICS,
        uses_plan_identifiers=False,
        uses_classification_service=False,
        streams_results=False,
        description="Extract PPO price URLs based on heuristic tables"
    ),

    ClassificationMode.ANALYSIS: ModeConfiguration(
        mode=ClassificationMode.ANALYSIS,
        uses_plan_identifiers=True,
        uses_classification_service=True,
        streams_results=True,
        description="Emit per-file match analysis using heuristics and the LLM"
    ),
}

DEFAULT_MODE = ClassificationMode.HEURISTICS


def get_mode_config(mode: ClassificationMode) -> ModeConfiguration:
    """Get configuration for mode."""
    return MODE_CONFIGURATIONS[mode]


def list_modes() -> list:
    """List available modes with descriptions."""
    return [
        f"{mode.value}: {config.description}"
        for mode, config in MODE_CONFIGURATIONS.items()
    ]


__all__ = [
    'ClassificationMode',
    'ModeConfiguration',
    'DEFAULT_MODE',
    'get_mode_config',
    'list_modes',
]
