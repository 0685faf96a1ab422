from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import CorrectorError, EmptyResponse, InvalidResponse, normalize_error
from .host import Host, deliver
from .prompts import Action, resolve_prompt
from .providers.registry import ProviderRegistry, select_provider
from .providers.types import Provider, ProviderRequest
from .settings import CorrectorOptions

logger = logging.getLogger(__name__)

NO_SELECTION = "No text selected"


@dataclass
class Outcome:
    delivered: bool
    text: Optional[str] = None
    action: Optional[str] = None  # "paste" | "copy"
    provider: Optional[Provider] = None
    error: Optional[str] = None


async def correct(
    prompt: str,
    text: str,
    provider: Provider,
    registry: ProviderRegistry,
) -> str:
    """One call to the chosen provider; returns the trimmed result or raises."""
    opts = registry.options
    req = ProviderRequest(
        model=registry.model_for(provider),
        prompt=prompt,
        text=text,
        max_tokens=opts.max_tokens,
        temperature=opts.temperature,
    )
    resp = await registry.get(provider).chat(req)
    logger.info("%s responded ok=%s in %dms", provider.value, resp.ok, resp.latency_ms)
    if not resp.ok:
        raise resp.error or InvalidResponse(f"{provider.value} API Error: request failed")
    content = (resp.content or "").strip()
    if not content:
        raise EmptyResponse()
    return content


async def process_text(
    host: Host,
    text: Optional[str],
    action: "Action | str | None",
    options: CorrectorOptions,
    *,
    copy: bool = False,
    registry: Optional[ProviderRegistry] = None,
) -> Outcome:
    """Run one correction and hand the result (or a single error notice) to the host."""
    if not text or not text.strip():
        host.show_text(NO_SELECTION)
        return Outcome(False, error=NO_SELECTION)

    prompt = resolve_prompt(action, options)
    provider: Optional[Provider] = None
    try:
        selection = select_provider(options)
        provider = selection.provider
        if selection.notice:
            host.show_text(selection.notice)
        reg = registry or ProviderRegistry(options)
        result = await correct(prompt, text, provider, reg)
        # a failing copy (direct or as the paste fallback) ends like any other error
        mode, _ = deliver(host, result, copy=copy)
    except CorrectorError as e:
        message = normalize_error(e)
        logger.warning("correction failed (%s): %s", e.__class__.__name__, e.message)
        host.show_text(message)
        return Outcome(False, provider=provider, error=message)
    except Exception as e:
        # unexpected failures still end in exactly one notice
        logger.exception("unexpected error during correction")
        message = normalize_error(e)
        host.show_text(message)
        return Outcome(False, provider=provider, error=message)

    return Outcome(True, text=result, action=mode, provider=provider)
