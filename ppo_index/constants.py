# Path: ppo_index/constants.py
"""
System-Wide Constants for ppo_index

Central repository for constant values used across the extractor.
Field names of the index format, classification hints, prompts for
the assisted classifier and output record keys all live here.

Constants are organized by category:
- Index Document Keys
- Plan Identifier Types
- Placeholder Values
- Classification Hints
- Plan Code Extraction
- Classification Service
- Output Record Keys
- Exit Codes
"""

from typing import Final


# ==============================================================================
# INDEX DOCUMENT KEYS
# ==============================================================================

REPORTING_RECORDS_KEY: Final[str] = 'reporting_structure'
PLAN_IDENTIFIERS_KEY: Final[str] = 'reporting_plans'
FILE_REFERENCES_KEY: Final[str] = 'in_network_files'

PLAN_ID_TYPE_KEY: Final[str] = 'plan_id_type'
PLAN_ID_KEY: Final[str] = 'plan_id'

DESCRIPTION_KEY: Final[str] = 'description'
LOCATION_KEY: Final[str] = 'location'


# ==============================================================================
# PLAN IDENTIFIER TYPES
# ==============================================================================

EIN_ID_TYPE: Final[str] = 'ein'


# ==============================================================================
# PLACEHOLDER VALUES
# ==============================================================================

# Description the index format uses when a file carries no plan information
PLACEHOLDER_DESCRIPTION: Final[str] = 'In-Network Negotiated Rates Files'


# ==============================================================================
# CLASSIFICATION HINTS
# ==============================================================================

REGION_HINTS: Final[tuple[str, ...]] = ('ny', 'new york')
PLAN_TYPE_HINTS: Final[tuple[str, ...]] = ('ppo', 'preferred')


# ==============================================================================
# PLAN CODE EXTRACTION
# ==============================================================================

PLAN_CODE_SEPARATOR: Final[str] = '_'
PATH_ROOT_MARKER: Final[str] = '/'


# ==============================================================================
# CLASSIFICATION SERVICE
# ==============================================================================

DEFAULT_LLM_BASE_URL: Final[str] = 'http://localhost:11434'
DEFAULT_LLM_MODEL: Final[str] = 'llama3'
LLM_CHAT_ENDPOINT: Final[str] = '/api/chat'
LLM_TRUE_VERDICT: Final[str] = 'true'

IS_NEW_YORK_PROMPT: Final[str] = (
    "Does the given insurance plan descriptive name operate in New York? "
    "Your answer should be true for yes, false for no."
)

IS_PPO_PROMPT: Final[str] = (
    "Should the given insurance plan descriptive name be considered a PPO plan? "
    "Your answer should be true for yes, false for no."
)

GREETING_PROMPT: Final[str] = (
    "Say hello, indicating you are an ollama LLM and any other relevant "
    "niceities, and assert that you are working correctly and want to help "
    "out finding relevant new york ppo price information."
)

SERVICE_UNAVAILABLE_WARNING: Final[str] = (
    "Ollama llm is not working. Install ollama and run ollama pull llama3 "
    "if you'd like the help of llm analysis. This analysis will continue "
    "without ollama."
)


# ==============================================================================
# OUTPUT RECORD KEYS
# ==============================================================================

RECORD_START_TIME: Final[str] = 'starttime'
RECORD_END_TIME: Final[str] = 'endtime'
RECORD_DURATION: Final[str] = 'duration'
RECORD_AUDIT: Final[str] = 'audit'
RECORD_WARNING: Final[str] = 'warning'
RECORD_ERROR: Final[str] = 'error'

TIMESTAMP_FORMAT: Final[str] = '%Y-%m-%d %H:%M:%S'


# ==============================================================================
# EXIT CODES
# ==============================================================================

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_INTERRUPTED: Final[int] = 130


__all__ = [
    'REPORTING_RECORDS_KEY',
    'PLAN_IDENTIFIERS_KEY',
    'FILE_REFERENCES_KEY',
    'PLAN_ID_TYPE_KEY',
    'PLAN_ID_KEY',
    'DESCRIPTION_KEY',
    'LOCATION_KEY',
    'EIN_ID_TYPE',
    'PLACEHOLDER_DESCRIPTION',
    'REGION_HINTS',
    'PLAN_TYPE_HINTS',
    'PLAN_CODE_SEPARATOR',
    'PATH_ROOT_MARKER',
    'DEFAULT_LLM_BASE_URL',
    'DEFAULT_LLM_MODEL',
    'LLM_CHAT_ENDPOINT',
    'LLM_TRUE_VERDICT',
    'IS_NEW_YORK_PROMPT',
    'IS_PPO_PROMPT',
    'GREETING_PROMPT',
    'SERVICE_UNAVAILABLE_WARNING',
    'RECORD_START_TIME',
    'RECORD_END_TIME',
    'RECORD_DURATION',
    'RECORD_AUDIT',
    'RECORD_WARNING',
    'RECORD_ERROR',
    'TIMESTAMP_FORMAT',
    'EXIT_OK',
    'EXIT_FAILURE',
    'EXIT_INTERRUPTED',
]
