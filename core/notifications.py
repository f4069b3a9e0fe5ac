"""
Progress Notifications

Transient messages surfaced while a request is being retried. The console
shows them as toasts; the default notifier writes them to the log.
"""

import logging
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class NotificationVariant(str, Enum):
    """Notification severity"""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@runtime_checkable
class Notifier(Protocol):
    """Anything that can display a short title/description notification"""

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes notifications to the log"""

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        if variant == NotificationVariant.DESTRUCTIVE:
            logger.error(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")


__all__ = ["NotificationVariant", "Notifier", "LoggingNotifier"]
