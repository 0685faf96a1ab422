from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import CorrectorError


class Provider(str, Enum):
    OPENAI = "OpenAI"
    GEMINI = "Gemini"

    @property
    def other(self) -> "Provider":
        return Provider.GEMINI if self is Provider.OPENAI else Provider.OPENAI

    @classmethod
    def parse(cls, value: "str | Provider | None", default: "Provider") -> "Provider":
        if isinstance(value, Provider):
            return value
        v = (value or "").strip().lower()
        for p in cls:
            if p.value.lower() == v:
                return p
        return default


@dataclass(frozen=True)
class ProviderRequest:
    model: str
    prompt: str
    text: str
    max_tokens: int = 20000
    temperature: float = 0.3


@dataclass
class ProviderResponse:
    ok: bool
    content: str
    latency_ms: int
    provider_meta: Dict[str, Any]
    error: Optional[CorrectorError] = None
