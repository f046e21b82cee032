from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from models.account import Account


class PageKind(Enum):
    """Tag describing which subsystem a page belongs to."""

    ACTIVITY = "activity"
    GENERAL = "general"
    NETWORK = "network"
    ACCOUNT = "account"


class PagePosition(Enum):
    """Where :meth:`PageRegistry.insert` places a page."""

    FRONT = "front"
    BACK = "back"
    ACCOUNT_BOUNDARY = "account_boundary"


class PageContent(Protocol):
    """Capability implemented by every renderable page body."""

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...

    def release(self) -> None: ...


@runtime_checkable
class AccountAwareContent(Protocol):
    """Content that tracks per-account data, such as the activity feed."""

    def account_added(self, account: Account) -> None: ...

    def account_removed(self, account_id: str) -> None: ...


@dataclass(frozen=True)
class ContentDescriptor:
    kind: PageKind
    content: PageContent


@dataclass(frozen=True)
class Page:
    """A navigable entry of the settings shell.

    The shell never looks inside ``content``; it only calls the lifecycle
    hooks of :class:`PageContent`.
    """

    page_id: str
    label: str
    short_label: str
    icon_source: str
    content: ContentDescriptor
    account_id: Optional[str] = None
    removable: bool = False
    tooltip: str = ""

    @property
    def kind(self) -> PageKind:
        return self.content.kind

    @property
    def is_account_page(self) -> bool:
        return self.account_id is not None


__all__ = [
    "AccountAwareContent",
    "ContentDescriptor",
    "Page",
    "PageContent",
    "PageKind",
    "PagePosition",
]
