"""
LLM module - Language model integration.

This module handles all model interactions:
- Prompt construction from aggregated files
- HTTP calls to Ollama and Together AI
- Normalization of every outcome into ModelResponse
"""
from filecontext.llm.gateway import LLMError, ProviderError, ProviderGateway

__all__ = [
    "LLMError",
    "ProviderError",
    "ProviderGateway",
]
