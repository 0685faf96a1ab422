from __future__ import annotations
import logging
import time
from typing import Dict, Any
import httpx

from ..errors import InvalidResponse, TransportError
from .types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)

OPENAI_API = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider:
    name = "OpenAI"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = OPENAI_API,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def chat(self, req: ProviderRequest) -> ProviderResponse:
        t0 = time.perf_counter()
        url = f"{self.base_url}/chat/completions"
        payload: Dict[str, Any] = {
            "model": req.model or DEFAULT_MODEL,
            "messages": [
                {"role": "system", "content": req.prompt},
                {"role": "user", "content": req.text},
            ],
            "max_tokens": req.max_tokens,
            "temperature": req.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("POST %s model=%s", url, payload["model"])
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            try:
                r = await client.post(url, json=payload, headers=headers)
            except httpx.HTTPError as e:
                latency_ms = int((time.perf_counter() - t0) * 1000)
                logger.warning("OpenAI request failed: %s", e)
                return ProviderResponse(False, "", latency_ms, {}, error=TransportError.from_exception(self.name, e))
        latency_ms = int((time.perf_counter() - t0) * 1000)
        if not r.is_success:
            logger.warning("OpenAI returned HTTP %s", r.status_code)
            return ProviderResponse(False, "", latency_ms, {"status": r.status_code},
                                    error=TransportError.from_status(self.name, r.status_code))
        try:
            data = r.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            content = None
        if not content or not isinstance(content, str):
            return ProviderResponse(False, "", latency_ms, {"status": r.status_code},
                                    error=InvalidResponse("OpenAI API Error: Invalid response from OpenAI API"))
        meta = {
            "model": data.get("model"),
            "usage": data.get("usage"),
        }
        return ProviderResponse(True, content.strip(), latency_ms, meta)
