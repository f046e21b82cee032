"""Content helpers shared by the shell and its hosts."""
from __future__ import annotations

from typing import Callable

from models.account import Account
from models.page import PageContent

from .events import Notification

NotificationSink = Callable[[Notification], None]
ContentFactory = Callable[[], PageContent]
AccountPageFactory = Callable[[Account, NotificationSink], PageContent]


class NullPageContent:
    """Content with no body; used when a host does not provide one."""

    def __init__(self) -> None:
        self.active = False
        self.released = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def release(self) -> None:
        self.released = True


__all__ = ["AccountPageFactory", "ContentFactory", "NotificationSink", "NullPageContent"]
