from __future__ import annotations
import logging
import time
from typing import Any, Dict
import httpx

from ..errors import FinishReasonError, InvalidResponse, TransportError
from .types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)

GEMINI_API = "https://generativelanguage.googleapis.com"
GEMINI_PATH = "/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-2.5-pro"
NORMAL_FINISH = "STOP"


def _fail(detail: str) -> InvalidResponse:
    return InvalidResponse(f"Gemini API Error: {detail}")


def extract_text(data: Any) -> str:
    """Pull the first candidate's first text part out of a generateContent body.

    Raises InvalidResponse (or FinishReasonError) naming the first check that
    does not hold. Wrong JSON shapes fail the same check as missing ones.
    """
    if not data:
        raise _fail("Empty response from Gemini API")
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not candidates or not isinstance(candidates, list):
        raise _fail("No candidates in Gemini API response")
    candidate = candidates[0]
    if not candidate or not isinstance(candidate, dict):
        raise _fail("Invalid candidate in Gemini API response")
    reason = candidate.get("finishReason")
    if reason and reason != NORMAL_FINISH:
        raise FinishReasonError("Gemini", str(reason))
    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not parts or not isinstance(parts, list):
        raise _fail("No content parts in Gemini API response")
    part = parts[0]
    text = part.get("text") if isinstance(part, dict) else None
    if not text or not isinstance(text, str):
        raise _fail("No valid text in Gemini API response")
    return text.strip()


class GeminiProvider:
    name = "Gemini"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = GEMINI_API,
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
        model = req.model or DEFAULT_MODEL
        url = self.base_url + GEMINI_PATH.format(model=model)
        # no system/user split: the prompt leads the single content block
        payload: Dict[str, Any] = {
            "contents": [
                {"parts": [{"text": f"{req.prompt}\n\n{req.text}"}]}
            ],
            "generationConfig": {
                "temperature": req.temperature,
                "maxOutputTokens": req.max_tokens,
            },
        }
        logger.debug("POST %s?key=***", url)
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            try:
                r = await client.post(url, json=payload, params={"key": self.api_key or ""})
            except httpx.HTTPError as e:
                latency_ms = int((time.perf_counter() - t0) * 1000)
                logger.warning("Gemini request failed: %s", e.__class__.__name__)
                return ProviderResponse(False, "", latency_ms, {}, error=TransportError.from_exception(self.name, e))
        latency_ms = int((time.perf_counter() - t0) * 1000)
        if not r.is_success:
            logger.warning("Gemini returned HTTP %s", r.status_code)
            return ProviderResponse(False, "", latency_ms, {"status": r.status_code},
                                    error=TransportError.from_status(self.name, r.status_code))
        try:
            data = r.json() if r.content else None
        except ValueError:
            data = None
        try:
            text = extract_text(data)
        except InvalidResponse as e:
            logger.warning("Gemini response rejected: %s", e)
            return ProviderResponse(False, "", latency_ms, {"status": r.status_code}, error=e)
        meta = {
            "candidates": len(data.get("candidates", [])),
            "usage": data.get("usageMetadata"),
        }
        return ProviderResponse(True, text, latency_ms, meta)
