"""User-facing feedback surface (the client's toast)."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from inventory_client.models.enums import NoticeLevel

logger = logging.getLogger(__name__)

NoticeListener = Callable[["Notice"], None]


@dataclass
class Notice:
    """A message shown to the user."""

    level: NoticeLevel
    message: str
    created_at: datetime = field(default_factory=datetime.now)


class NoticeBoard:
    """Collect notices and fan them out to subscribers synchronously."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []
        self._once_keys: set[str] = set()
        self._listeners: list[NoticeListener] = []

    def subscribe(self, listener: NoticeListener) -> None:
        self._listeners.append(listener)

    def post(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> Notice:
        notice = Notice(level=level, message=message)
        self.notices.append(notice)
        logger.debug("Notice [%s]: %s", level.value, message)
        for listener in list(self._listeners):
            listener(notice)
        return notice

    def info(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.INFO)

    def success(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.SUCCESS)

    def warning(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.WARNING)

    def error(self, message: str) -> Notice:
        return self.post(message, NoticeLevel.ERROR)

    def post_once(self, key: str, message: str, level: NoticeLevel = NoticeLevel.WARNING) -> Notice | None:
        """Post an advisory only the first time ``key`` is seen."""
        if key in self._once_keys:
            return None
        self._once_keys.add(key)
        return self.post(message, level)

    @property
    def latest(self) -> Notice | None:
        return self.notices[-1] if self.notices else None
