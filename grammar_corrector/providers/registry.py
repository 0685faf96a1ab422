from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..errors import ConfigurationError
from ..settings import CorrectorOptions
from .gemini import GeminiProvider
from .openai import OpenAIProvider
from .types import Provider

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE = "Please configure either OpenAI or Gemini API key"


@dataclass(frozen=True)
class Selection:
    provider: Provider
    notice: Optional[str] = None


def _has_key(options: CorrectorOptions, provider: Provider) -> bool:
    key = options.openai_apikey if provider is Provider.OPENAI else options.gemini_apikey
    return bool(key and key.strip())


def select_provider(options: CorrectorOptions) -> Selection:
    """Pick the provider for this invocation, falling back once if the default has no key.

    Raises ConfigurationError when neither provider has a key.
    """
    chosen = Provider.parse(options.default_provider, Provider.OPENAI)
    if _has_key(options, chosen):
        return Selection(chosen)
    other = chosen.other
    if _has_key(options, other):
        logger.info("%s key missing, falling back to %s", chosen.value, other.value)
        return Selection(other, f"{chosen.value} API key not found, using {other.value} instead")
    raise ConfigurationError(NO_KEY_MESSAGE)


class ProviderRegistry:
    def __init__(self, options: CorrectorOptions, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.options = options
        self._openai = OpenAIProvider(
            options.openai_apikey,
            base_url=options.openai_base_url,
            timeout_s=options.timeout_s,
            transport=transport,
        )
        self._gemini = GeminiProvider(
            options.gemini_apikey,
            base_url=options.gemini_base_url,
            timeout_s=options.timeout_s,
            transport=transport,
        )

    @property
    def openai_enabled(self) -> bool:
        return self._openai.enabled

    @property
    def gemini_enabled(self) -> bool:
        return self._gemini.enabled

    def get(self, provider: "Provider | str"):
        p = Provider.parse(provider, None)
        if p is Provider.OPENAI:
            return self._openai
        if p is Provider.GEMINI:
            return self._gemini
        raise KeyError(f"Unknown provider: {provider}")

    def model_for(self, provider: Provider) -> str:
        if provider is Provider.OPENAI:
            return self.options.openai_model
        return self.options.gemini_model
