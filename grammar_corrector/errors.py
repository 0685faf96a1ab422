from __future__ import annotations
from typing import Optional

import httpx


GENERIC_FAILURE = "AI processing failed"
EMPTY_RESPONSE = "Empty response from AI"
NETWORK_FAILURE = "Network connection failed"

STATUS_MESSAGES = {
    401: "Invalid API key",
    429: "Rate limit exceeded",
    404: "API endpoint not found - check model name and API key",
}

# errno names that mean the host could not be reached at all
_UNREACHABLE_MARKERS = ("ENOTFOUND", "ECONNREFUSED", "Name or service not known",
                        "nodename nor servname", "getaddrinfo failed", "Connection refused")


class CorrectorError(Exception):
    """Base class for every failure the corrector reports to the user."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CorrectorError):
    pass


class TransportError(CorrectorError):
    """HTTP status, timeout or network failure while talking to a provider."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        unreachable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.unreachable = unreachable

    @classmethod
    def from_exception(cls, provider: str, exc: Exception) -> "TransportError":
        reason = str(exc) or exc.__class__.__name__
        if isinstance(exc, httpx.TimeoutException):
            reason = "request timed out"
        unreachable = isinstance(exc, httpx.ConnectError) and not isinstance(exc, httpx.TimeoutException)
        if any(m in str(exc) for m in _UNREACHABLE_MARKERS):
            unreachable = True
        return cls(f"{provider} API Error: {reason}", reason=reason, unreachable=unreachable)

    @classmethod
    def from_status(cls, provider: str, status_code: int) -> "TransportError":
        return cls(f"{provider} API Error: {status_code}", status_code=status_code)


class InvalidResponse(CorrectorError):
    pass


class EmptyResponse(InvalidResponse):
    def __init__(self, message: str = EMPTY_RESPONSE) -> None:
        super().__init__(message)


class FinishReasonError(InvalidResponse):
    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider} API Error: {provider} API finished with reason: {reason}")
        self.reason = reason


class HostActionError(CorrectorError):
    """The host refused to paste; always recovered by copying instead."""


def normalize_error(exc: BaseException) -> str:
    """Map any failure to the one short string shown to the user.

    Status codes win over everything else, then unreachable-network failures,
    then the empty-result case. Anything else is shown verbatim, falling back
    to a generic message when the error carries no text at all.
    """
    status = getattr(exc, "status_code", None)
    if status in STATUS_MESSAGES:
        return STATUS_MESSAGES[status]
    if getattr(exc, "unreachable", False):
        return NETWORK_FAILURE
    if isinstance(exc, EmptyResponse):
        return EMPTY_RESPONSE
    message = exc.message if isinstance(exc, CorrectorError) else str(exc)
    return message or GENERIC_FAILURE
