# Path: tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for ppo_index

Provides common test fixtures used across all test modules.
"""

import gzip
import io
import json
import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ppo_index.errors import ClassificationServiceError, ErrorCategory
from ppo_index.loaders.heuristic_tables import HeuristicTables
from ppo_index.process.session import ExtractionSession
from ppo_index.services.llm_client import ClassificationService


# ==============================================================================
# SAMPLE VALUES
# ==============================================================================

NY_PPO_DESCRIPTION = 'Excellus BCBS : BluePPO'
OTHER_PPO_DESCRIPTION = 'BCBS Michigan : PAR Providers'
HMO_DESCRIPTION = 'Empire HMO Essential'

REGION_LOCATION = 'https://mrf.example.com/2026-10_302_42B0_in-network-rates_1_of_2.json.gz'
OTHER_REGION_LOCATION = 'https://mrf.example.com/2026-10_999_00X0_in-network-rates.json.gz'
NO_CODE_LOCATION = 'https://mrf.example.com/rates.json.gz'


def make_record(plans=None, files=None, plans_first=True, **extra):
    """Build a reporting_structure record with keys in a chosen order."""
    record = {}
    record.update(extra)
    if plans_first:
        if plans is not None:
            record['reporting_plans'] = plans
        if files is not None:
            record['in_network_files'] = files
    else:
        if files is not None:
            record['in_network_files'] = files
        if plans is not None:
            record['reporting_plans'] = plans
    return record


def ein(value):
    return {'plan_name': 'Employer Plan', 'plan_id_type': 'EIN', 'plan_id': value}


def file_ref(description, location):
    return {'description': description, 'location': location}


class FakeClassificationService(ClassificationService):
    """
    Scripted classification service.

    answers maps each instruction to the verdict returned for it; when
    fail is set every question raises ClassificationServiceError.
    """

    def __init__(self, answers=None, fail=False):
        self.answers = answers or {}
        self.fail = fail
        self.questions = []

    def ask(self, instruction, text):
        self.questions.append((instruction, text))
        if self.fail:
            raise ClassificationServiceError(
                "connection refused", ErrorCategory.SERVICE_UNAVAILABLE
            )
        return self.answers.get(instruction, False)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars(temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'PPO_INDEX_DEBUG': 'true',

        # Logging
        'PPO_INDEX_LOG_DIR': str(temp_dir / 'logs'),
        'PPO_INDEX_LOG_LEVEL': 'DEBUG',
        'PPO_INDEX_LOG_CONSOLE': 'false',

        # Classification service
        'PPO_INDEX_LLM_BASE_URL': 'http://ollama.test:11434',
        'PPO_INDEX_LLM_MODEL': 'llama3-test',
        'PPO_INDEX_LLM_TIMEOUT': '2.5',
        'PPO_INDEX_LLM_UNAVAILABLE_GRACE_SECONDS': '0',

        # Streaming
        'PPO_INDEX_MEMORY_CHECK_INTERVAL': '50',
        'PPO_INDEX_MEMORY_WARNING_MB': '256',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reset_singletons():
    """Reset singleton instances between tests."""
    from ppo_index.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False


# ==============================================================================
# INDEX DOCUMENT FIXTURES
# ==============================================================================

@pytest.fixture
def json_stream():
    """Factory turning a document (dict, raw text or bytes) into a binary stream."""
    def _make(document):
        if isinstance(document, bytes):
            return io.BytesIO(document)
        if isinstance(document, (dict, list)):
            document = json.dumps(document)
        return io.BytesIO(document.encode('utf-8'))
    return _make


@pytest.fixture
def write_index(temp_dir):
    """Factory writing an index document to disk, gzipped by default."""
    def _write(document, name='index.json.gz', compress=True):
        text = document if isinstance(document, str) else json.dumps(document)
        path = temp_dir / name
        if compress:
            with gzip.open(path, 'wb') as f:
                f.write(text.encode('utf-8'))
        else:
            path.write_text(text, encoding='utf-8')
        return path
    return _write


@pytest.fixture
def sample_index():
    """A small index with EINs, a placeholder entry and mixed plans."""
    return {
        'reporting_entity_name': 'Example Health',
        'reporting_entity_type': 'health insurance issuer',
        'reporting_structure': [
            make_record(
                plans=[ein('11-1111111'), ein('22-2222222')],
                files=[
                    file_ref(NY_PPO_DESCRIPTION, REGION_LOCATION),
                    file_ref('In-Network Negotiated Rates Files', NO_CODE_LOCATION),
                ],
            ),
            make_record(
                plans=[ein('33-3333333')],
                files=[
                    file_ref(HMO_DESCRIPTION, OTHER_REGION_LOCATION),
                    file_ref(OTHER_PPO_DESCRIPTION, OTHER_REGION_LOCATION),
                ],
            ),
        ],
        'version': '1.0.0',
    }


# ==============================================================================
# DOMAIN FIXTURES
# ==============================================================================

@pytest.fixture
def tables():
    """Small heuristic tables; casing differs from the sample values on purpose."""
    return HeuristicTables.from_lists(
        ['excellus bcbs : blueppo', 'BCBS MICHIGAN : PAR PROVIDERS'],
        ['302_42b0', '301_71A0'],
    )


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def session(emitted):
    return ExtractionSession(match_sink=emitted.append)


@pytest.fixture
def fake_service():
    return FakeClassificationService()


@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader for testing."""
    values = {
        'memory_check_interval': 0,
        'memory_warning_mb': 512.0,
        'llm_unavailable_grace_seconds': 0,
    }
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: values.get(key, default)
    config.values = values
    return config
