# Path: ppo_index/services/__init__.py
"""
External Services

Clients for collaborators outside the process.

Services:
    - llm_client: yes/no classification via an Ollama-hosted LLM
"""

from .llm_client import ClassificationService, OllamaClassificationService

__all__ = ['ClassificationService', 'OllamaClassificationService']
