# Path: ppo_index/config_loader.py
"""
Configuration Loader for ppo_index

Loads configuration from a .env file and the process environment.
Singleton pattern ensures consistent configuration across all components.

All tunables come from environment variables prefixed with PPO_INDEX_.
Nothing here is required: every key has a default so the extractor runs
on a bare machine.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from .constants import DEFAULT_LLM_BASE_URL, DEFAULT_LLM_MODEL


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'WARNING'

# Classification Service Defaults
DEFAULT_LLM_UNAVAILABLE_GRACE_SECONDS: float = 5.0

# Streaming Defaults
DEFAULT_MEMORY_CHECK_INTERVAL: int = 1000
DEFAULT_MEMORY_WARNING_MB: float = 512.0


class ConfigLoader:
    """
    Singleton configuration loader for ppo_index.

    Loads configuration from environment variables with type conversion
    and defaults.

    Example:
        config = ConfigLoader()
        model = config.get('llm_model')  # Returns str
        log_dir = config.get('log_dir')  # Returns Path or None
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env from the
        working directory first, then from the project root.
        """
        if ConfigLoader._initialized:
            return

        # ppo_index/config_loader.py -> project root is one level up
        project_root = Path(__file__).resolve().parent.parent
        for env_path in (Path.cwd() / '.env', project_root / '.env'):
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)
                break

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'debug': self._get_bool('PPO_INDEX_DEBUG', False),
            'log_dir': self._get_path('PPO_INDEX_LOG_DIR'),
            'log_level': self._get_env('PPO_INDEX_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('PPO_INDEX_LOG_CONSOLE', True),

            # ================================================================
            # HEURISTIC TABLES
            # ================================================================
            'heuristics_path': self._get_path('PPO_INDEX_HEURISTICS_PATH'),

            # ================================================================
            # CLASSIFICATION SERVICE
            # ================================================================
            'llm_base_url': self._get_env('PPO_INDEX_LLM_BASE_URL', DEFAULT_LLM_BASE_URL),
            'llm_model': self._get_env('PPO_INDEX_LLM_MODEL', DEFAULT_LLM_MODEL),
            'llm_timeout': self._get_optional_float('PPO_INDEX_LLM_TIMEOUT'),
            'llm_unavailable_grace_seconds': self._get_float(
                'PPO_INDEX_LLM_UNAVAILABLE_GRACE_SECONDS',
                DEFAULT_LLM_UNAVAILABLE_GRACE_SECONDS
            ),

            # ================================================================
            # STREAMING / MEMORY
            # ================================================================
            'memory_check_interval': self._get_int(
                'PPO_INDEX_MEMORY_CHECK_INTERVAL', DEFAULT_MEMORY_CHECK_INTERVAL
            ),
            'memory_warning_mb': self._get_float(
                'PPO_INDEX_MEMORY_WARNING_MB', DEFAULT_MEMORY_WARNING_MB
            ),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found or unset

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value

    def _get_path(self, key: str) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name

        Returns:
            Path object or None when unset or empty
        """
        value = os.getenv(key)
        if not value:
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value).expanduser()

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_optional_float(self, key: str) -> Optional[float]:
        """Get float environment variable, None when unset or invalid."""
        value = os.getenv(key)
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            return None

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing the key settings."""
        return (
            f"ConfigLoader("
            f"debug={self._config.get('debug')}, "
            f"llm_model={self._config.get('llm_model')})"
        )


__all__ = ['ConfigLoader']
