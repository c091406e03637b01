# Path: ppo_index/services/llm_client.py
"""
Classification Service Client

Yes/no classification of short texts by an external LLM.

The pipeline only depends on ClassificationService.ask(); the Ollama
implementation talks to a local Ollama server over its chat API.

Features:
- Connection pooling (one requests.Session per client)
- Optional timeout (unset means a slow model stalls the caller)
- Call statistics tracking

There is no retry and no batching: one request per question.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests
from requests import Session

from ..constants import (
    DEFAULT_LLM_BASE_URL,
    DEFAULT_LLM_MODEL,
    GREETING_PROMPT,
    LLM_CHAT_ENDPOINT,
    LLM_TRUE_VERDICT,
)
from ..core.logger import get_process_logger
from ..errors import ClassificationServiceError, ErrorCategory


class ClassificationService(ABC):
    """Capability interface for the external yes/no oracle."""

    @abstractmethod
    def ask(self, instruction: str, text: str) -> bool:
        """
        Ask a yes/no question about a text.

        Args:
            instruction: The question, phrased as a system instruction
            text: Text the question is about

        Returns:
            The verdict

        Raises:
            ClassificationServiceError: If no verdict could be obtained
        """
        pass


class OllamaClassificationService(ClassificationService):
    """
    Ollama chat API client.

    Example:
        service = OllamaClassificationService(model='llama3')
        service.ask(IS_PPO_PROMPT, 'Excellus BCBS : BluePPO')
    """

    def __init__(
        self,
        base_url: str = DEFAULT_LLM_BASE_URL,
        model: str = DEFAULT_LLM_MODEL,
        timeout: Optional[float] = None,
        session: Optional[Session] = None
    ):
        """
        Initialize client.

        Args:
            base_url: Ollama server root URL
            model: Model name, e.g. 'llama3'
            timeout: Request timeout in seconds, None to wait indefinitely
            session: Optional pre-built requests session
        """
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.session = session if session else self._create_session()
        self.logger = get_process_logger('llm_client')

        self.calls = 0
        self.failures = 0

    @classmethod
    def from_config(cls, config) -> 'OllamaClassificationService':
        """Build a client from ConfigLoader settings."""
        return cls(
            base_url=config.get('llm_base_url', DEFAULT_LLM_BASE_URL),
            model=config.get('llm_model', DEFAULT_LLM_MODEL),
            timeout=config.get('llm_timeout'),
        )

    def _create_session(self) -> Session:
        session = Session()
        session.headers.update({
            'User-Agent': 'ppo-index/1.0',
            'Accept': 'application/json',
        })
        return session

    def ask(self, instruction: str, text: str) -> bool:
        content = self._chat([
            {'role': 'system', 'content': instruction},
            {'role': 'user', 'content': text},
        ])
        return content.strip().lower() == LLM_TRUE_VERDICT

    def greet(self) -> str:
        """
        Ask the model to introduce itself.

        Returns:
            The model's reply

        Raises:
            ClassificationServiceError: If the service is unavailable
        """
        return self._chat([{'role': 'system', 'content': GREETING_PROMPT}])

    def _chat(self, messages: list[dict[str, str]]) -> str:
        url = f"{self.base_url}{LLM_CHAT_ENDPOINT}"
        payload = {
            'model': self.model,
            'messages': messages,
            'stream': False,
        }
        self.calls += 1

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.failures += 1
            self.logger.debug(f"Request to {url} failed: {e}")
            raise ClassificationServiceError(
                f"classification service request failed: {e}",
                ErrorCategory.SERVICE_UNAVAILABLE
            ) from e

        try:
            content = response.json()['message']['content']
        except (ValueError, KeyError, TypeError) as e:
            self.failures += 1
            raise ClassificationServiceError(
                f"malformed classification service response: {e}",
                ErrorCategory.SERVICE_RESPONSE_INVALID
            ) from e

        if not isinstance(content, str):
            self.failures += 1
            raise ClassificationServiceError(
                "classification service returned non-text content",
                ErrorCategory.SERVICE_RESPONSE_INVALID
            )

        return content

    def get_stats(self) -> dict:
        """Get call statistics."""
        return {
            'calls': self.calls,
            'failures': self.failures,
            'success_rate': (self.calls - self.failures) / self.calls if self.calls > 0 else 0
        }


__all__ = ['ClassificationService', 'OllamaClassificationService']
