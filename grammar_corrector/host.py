from __future__ import annotations
import logging
from typing import List, Optional, Protocol, Tuple

from .errors import HostActionError

logger = logging.getLogger(__name__)

COPIED_NOTICE = "Response copied to clipboard"
PASTE_FALLBACK_NOTICE = "Paste failed - response copied to clipboard instead"


class Host(Protocol):
    """What the core needs from the application it runs inside."""

    def show_text(self, message: str) -> None: ...

    def paste_text(self, text: str) -> None: ...

    def copy_text(self, text: str) -> None: ...


class RecordingHost:
    """Host that keeps everything in memory; used by the HTTP surface and tests."""

    def __init__(self, paste_error: Optional[Exception] = None) -> None:
        self.notices: List[str] = []
        self.pasted: List[str] = []
        self.copied: List[str] = []
        self.paste_error = paste_error

    def show_text(self, message: str) -> None:
        self.notices.append(message)

    def paste_text(self, text: str) -> None:
        if self.paste_error is not None:
            raise self.paste_error
        self.pasted.append(text)

    def copy_text(self, text: str) -> None:
        self.copied.append(text)

    @property
    def clipboard(self) -> Optional[str]:
        return self.copied[-1] if self.copied else None


def deliver(host: Host, text: str, copy: bool = False) -> Tuple[str, Optional[HostActionError]]:
    """Paste or copy the corrected text; copy is the fallback when paste fails.

    Returns the terminal action ("paste" or "copy") and the recovered paste
    error, if any.
    """
    if copy:
        host.copy_text(text)
        host.show_text(COPIED_NOTICE)
        return "copy", None
    try:
        host.paste_text(text)
        return "paste", None
    except Exception as e:
        err = HostActionError(str(e) or e.__class__.__name__)
        logger.warning("paste failed, copying instead: %s", err.message)
    host.copy_text(text)
    host.show_text(PASTE_FALLBACK_NOTICE)
    return "copy", err
