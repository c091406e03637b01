# Path: ppo_index/loaders/heuristic_tables.py
"""
Heuristic Tables Loader

Loads the static lookup tables used by the classifiers from a YAML
file in the dictionary directory:

    ppo_plans:     plan descriptions known to denote PPO networks
    region_codes:  plan codes of New York rate files

Tables are lower-cased at load time and frozen afterwards.
"""

from pathlib import Path
from typing import Optional
from dataclasses import dataclass

import yaml

from ..core.logger import get_input_logger
from ..errors import HeuristicsLoadError


DEFAULT_HEURISTICS_PATH = Path(__file__).parent.parent / 'dictionary' / 'heuristics.yaml'

PPO_PLANS_SECTION = 'ppo_plans'
REGION_CODES_SECTION = 'region_codes'


@dataclass(frozen=True)
class HeuristicTables:
    """
    Immutable, case-normalized lookup tables.

    Attributes:
        ppo_plans: Lower-cased PPO plan descriptions
        region_codes: Lower-cased region plan codes
    """
    ppo_plans: frozenset = frozenset()
    region_codes: frozenset = frozenset()

    @classmethod
    def from_lists(cls, ppo_plans, region_codes) -> 'HeuristicTables':
        """Build tables from raw string lists, normalizing case."""
        return cls(
            ppo_plans=_normalize(ppo_plans),
            region_codes=_normalize(region_codes),
        )

    def is_ppo_plan(self, description: str) -> bool:
        """Check plan table membership, case-insensitively."""
        return description.lower() in self.ppo_plans

    def is_region_code(self, plan_code: str) -> bool:
        """Check region table membership, case-insensitively."""
        return plan_code.lower() in self.region_codes


def _normalize(values) -> frozenset:
    return frozenset(
        str(value).strip().lower()
        for value in values
        if value is not None and str(value).strip()
    )


class HeuristicTablesLoader:
    """
    Loads heuristic tables from YAML.

    Example:
        loader = HeuristicTablesLoader()
        tables = loader.load()
        tables.is_ppo_plan('Excellus BCBS : BluePPO')  # True
    """

    def __init__(self, heuristics_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            heuristics_path: YAML file to read. Defaults to the packaged
                dictionary/heuristics.yaml
        """
        self.logger = get_input_logger('heuristic_tables')
        self.heuristics_path = Path(heuristics_path) if heuristics_path else DEFAULT_HEURISTICS_PATH

    def load(self) -> HeuristicTables:
        """
        Load and normalize the tables.

        Returns:
            HeuristicTables

        Raises:
            HeuristicsLoadError: If the file is missing, is not valid YAML
                or does not have the expected shape
        """
        if not self.heuristics_path.exists():
            raise HeuristicsLoadError(f"Heuristics file not found: {self.heuristics_path}")

        try:
            with open(self.heuristics_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise HeuristicsLoadError(
                f"YAML parse error in {self.heuristics_path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise HeuristicsLoadError(
                f"Heuristics file {self.heuristics_path} must contain a mapping"
            )

        ppo_plans = self._read_section(data, PPO_PLANS_SECTION)
        region_codes = self._read_section(data, REGION_CODES_SECTION)

        tables = HeuristicTables.from_lists(ppo_plans, region_codes)
        self.logger.info(
            f"Loaded {len(tables.ppo_plans)} PPO plans and "
            f"{len(tables.region_codes)} region codes from {self.heuristics_path}"
        )
        return tables

    def _read_section(self, data: dict, section: str) -> list:
        values = data.get(section)
        if values is None:
            self.logger.warning(f"Section '{section}' missing in {self.heuristics_path}")
            return []
        if not isinstance(values, list):
            raise HeuristicsLoadError(
                f"Section '{section}' in {self.heuristics_path} must be a list"
            )
        return values


def load_heuristic_tables(heuristics_path: Optional[Path] = None) -> HeuristicTables:
    """Convenience wrapper around HeuristicTablesLoader."""
    return HeuristicTablesLoader(heuristics_path).load()


__all__ = [
    'DEFAULT_HEURISTICS_PATH',
    'HeuristicTables',
    'HeuristicTablesLoader',
    'load_heuristic_tables',
]
