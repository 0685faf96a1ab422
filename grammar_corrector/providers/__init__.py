from .types import Provider, ProviderRequest, ProviderResponse
from .openai import OpenAIProvider
from .gemini import GeminiProvider
from .registry import ProviderRegistry, Selection, select_provider

__all__ = [
    "Provider",
    "ProviderRequest",
    "ProviderResponse",
    "OpenAIProvider",
    "GeminiProvider",
    "ProviderRegistry",
    "Selection",
    "select_provider",
]
