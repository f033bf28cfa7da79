"""
LLM backends that turn a natural language request into a shell command.

Each backend is a ``Provider`` subclass registered in ``PROVIDERS`` under the
value ``LLM_PROVIDER`` selects it with.
"""
from typing import Dict, Type

from ..errors import ConfigurationError
from .base import Endpoint, Provider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

PROVIDERS: Dict[str, Type[Provider]] = {
    OpenAIProvider.name: OpenAIProvider,
    GeminiProvider.name: GeminiProvider,
}


def get_provider(config) -> Provider:
    """
    Build the provider ``config.provider`` names and check its credential and timeout.

    Raises:
        ConfigurationError: for an unknown provider, a missing API key or a timeout <= 0
    """
    provider_cls = PROVIDERS.get(config.provider)
    if provider_cls is None:
        raise ConfigurationError(f"Unsupported LLM provider: {config.provider}")

    provider = provider_cls(config)
    provider.validate()
    return provider


__all__ = ["Endpoint", "GeminiProvider", "OpenAIProvider", "Provider", "PROVIDERS", "get_provider"]
