"""Navigation core of the settings dialog: pages, selection and icon theming."""
from __future__ import annotations

from .accounts import AccountLifecycleBridge
from .content import NullPageContent
from .events import (
    AccountAdded,
    AccountFolderOpenRequested,
    AccountFoldersChanged,
    AccountRemoved,
    ColorSchemeChanged,
    CurrentPageChanged,
    IconsThemed,
    PageActivated,
    PagesChanged,
)
from .icon_theme import IconThemer, perceived_luminance, should_invert
from .registry import PageRegistry
from .selection import SelectionController
from .shell import ACTIVITY_PAGE_ID, GENERAL_PAGE_ID, NETWORK_PAGE_ID, SettingsShell

__all__ = [
    "ACTIVITY_PAGE_ID",
    "AccountAdded",
    "AccountFolderOpenRequested",
    "AccountFoldersChanged",
    "AccountLifecycleBridge",
    "AccountRemoved",
    "ColorSchemeChanged",
    "CurrentPageChanged",
    "GENERAL_PAGE_ID",
    "IconThemer",
    "IconsThemed",
    "NETWORK_PAGE_ID",
    "NullPageContent",
    "PageActivated",
    "PageRegistry",
    "PagesChanged",
    "SelectionController",
    "SettingsShell",
    "perceived_luminance",
    "should_invert",
]
