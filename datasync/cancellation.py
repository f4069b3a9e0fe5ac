"""
Cancellation tokens for in-flight sync requests

A cancelled token does not abort the request or its retries; it only tells
the collection to drop the eventual response instead of reconciling it.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CancellationToken:
    """Per-request cancellation flag"""

    def __init__(self, label: Optional[str] = None):
        self.label = label
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self._cancelled:
            logger.debug(f"Cancelled request {self.label or id(self)}")
        self._cancelled = True

    def __repr__(self) -> str:
        return f"CancellationToken(label={self.label!r}, cancelled={self._cancelled})"


__all__ = ["CancellationToken"]
