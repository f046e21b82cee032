"""Events consumed and notifications emitted by the settings shell."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from PyQt6.QtGui import QImage

from ui.theme import ColorScheme


@dataclass(frozen=True)
class AccountAdded:
    account_id: str
    display_name: str
    icon_hint: Optional[str] = None


@dataclass(frozen=True)
class AccountRemoved:
    account_id: str


@dataclass(frozen=True)
class ColorSchemeChanged:
    scheme: ColorScheme

    @property
    def background(self):
        return self.scheme.background


@dataclass(frozen=True)
class PageActivated:
    page_id: str


ShellEvent = Union[AccountAdded, AccountRemoved, ColorSchemeChanged, PageActivated]


@dataclass(frozen=True)
class CurrentPageChanged:
    page_id: Optional[str]


@dataclass(frozen=True)
class PagesChanged:
    """The registry changed; carries the page ids in toolbar order."""

    page_ids: Tuple[str, ...]


@dataclass(frozen=True)
class IconsThemed:
    """Themed icon per page id, produced after a color scheme change."""

    icons: Dict[str, QImage] = field(default_factory=dict)


@dataclass(frozen=True)
class AccountFoldersChanged:
    account_id: str


@dataclass(frozen=True)
class AccountFolderOpenRequested:
    account_id: str
    alias: str


Notification = Union[
    CurrentPageChanged,
    PagesChanged,
    IconsThemed,
    AccountFoldersChanged,
    AccountFolderOpenRequested,
]


__all__ = [
    "AccountAdded",
    "AccountFolderOpenRequested",
    "AccountFoldersChanged",
    "AccountRemoved",
    "ColorSchemeChanged",
    "CurrentPageChanged",
    "IconsThemed",
    "Notification",
    "PageActivated",
    "PagesChanged",
    "ShellEvent",
]
