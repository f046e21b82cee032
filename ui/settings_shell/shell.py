"""Event dispatcher tying the registry, selection and icon theming together."""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Mapping, Optional

from PyQt6.QtGui import QImage

from models.account import Account
from models.page import (
    AccountAwareContent,
    ContentDescriptor,
    Page,
    PageContent,
    PageKind,
    PagePosition,
)
from utils.exceptions import DuplicateAccount, DuplicateIdentity, UnknownPage
from utils.shell_config import ShellConfig, load_config
from utils.text_elide import TextMeasure

from ui.theme import ColorScheme

from .accounts import AccountLifecycleBridge, WidthBudget
from .content import AccountPageFactory, ContentFactory, NullPageContent
from .events import (
    AccountAdded,
    AccountFolderOpenRequested,
    AccountFoldersChanged,
    AccountRemoved,
    ColorSchemeChanged,
    CurrentPageChanged,
    IconsThemed,
    Notification,
    PageActivated,
    PagesChanged,
    ShellEvent,
)
from .icon_theme import IconThemer
from .registry import PageRegistry
from .selection import SelectionController

logger = logging.getLogger(__name__)

ACTIVITY_PAGE_ID = "activity"
GENERAL_PAGE_ID = "general"
NETWORK_PAGE_ID = "network"

# (page id, kind, label, icon file) in toolbar order
FIXED_PAGES = (
    (ACTIVITY_PAGE_ID, PageKind.ACTIVITY, "Activity", "activity.svg"),
    (GENERAL_PAGE_ID, PageKind.GENERAL, "General", "settings.svg"),
    (NETWORK_PAGE_ID, PageKind.NETWORK, "Network", "network.svg"),
)
ACCOUNT_ICON = "account.svg"

NotificationListener = Callable[[Notification], None]


def _null_account_page(account: Account, notify) -> PageContent:
    return NullPageContent()


class SettingsShell:
    """Owns the settings pages and the current selection.

    External events go through :meth:`dispatch`. Events that arrive while
    another one is being handled (for example from a listener) are queued
    and handled afterwards, in arrival order. Rejected events are logged and
    never reach the host as errors.
    """

    def __init__(
        self,
        *,
        page_factories: Optional[Mapping[PageKind, ContentFactory]] = None,
        account_page_factory: Optional[AccountPageFactory] = None,
        config: Optional[ShellConfig] = None,
        themer: Optional[IconThemer] = None,
        width_budget: Optional[WidthBudget] = None,
        measure: TextMeasure = len,
        scheme: Optional[ColorScheme] = None,
    ) -> None:
        self.config = config or load_config()
        self.themer = themer or IconThemer()
        self.registry = PageRegistry()
        self.selection = SelectionController(self.registry)
        self._account_page_factory = account_page_factory or _null_account_page
        self.bridge = AccountLifecycleBridge(
            self.registry,
            self.selection,
            self._create_account_content,
            account_icon=self.config.icon_path(ACCOUNT_ICON),
            width_budget=width_budget,
            measure=measure,
        )

        self._listeners: list[NotificationListener] = []
        self._queue: Deque[ShellEvent] = deque()
        self._dispatching = False
        self._started = False
        self._closed = False
        self._scheme = scheme
        self._icons: Dict[str, QImage] = {}
        self._active_page_id: Optional[str] = None

        self.selection.add_listener(self._on_selection_changed)

        factories = page_factories or {}
        for page_id, kind, label, icon in FIXED_PAGES:
            factory = factories.get(kind, NullPageContent)
            page = Page(
                page_id=page_id,
                label=label,
                short_label=label,
                icon_source=self.config.icon_path(icon),
                content=ContentDescriptor(kind, factory()),
                tooltip=label,
            )
            self.registry.insert(page, PagePosition.BACK)
            self._theme_page(page)

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------
    def add_listener(self, callback: NotificationListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: NotificationListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def finish_startup(self) -> None:
        """Select the first page once every startup page is registered."""

        if self._started:
            return
        self._started = True
        self.bridge.end_startup()
        if self.selection.current() is None:
            self.selection.select_first()

    def current(self) -> Optional[str]:
        return self.selection.current()

    def current_page(self) -> Optional[Page]:
        current = self.selection.current()
        return self.registry.find(current) if current is not None else None

    def pages(self):
        return self.registry.pages()

    def themed_icon(self, page_id: str) -> Optional[QImage]:
        return self._icons.get(page_id)

    @property
    def color_scheme(self) -> Optional[ColorScheme]:
        return self._scheme

    def show_activity_page(self) -> None:
        if ACTIVITY_PAGE_ID in self.registry:
            self.dispatch(PageActivated(ACTIVITY_PAGE_ID))

    def forward(self, notification: Notification) -> None:
        """Pass account page notifications through to the host untouched."""

        if isinstance(notification, (AccountFoldersChanged, AccountFolderOpenRequested)):
            self._emit(notification)
        else:
            logger.debug("Dropping unexpected notification %r", notification)

    def dispatch(self, event: ShellEvent) -> None:
        if self._closed:
            logger.debug("Shell closed, ignoring %r", event)
            return
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._handle(self._queue.popleft())
        finally:
            self._dispatching = False

    def close(self) -> None:
        """Release every page content; the shell accepts no events afterwards."""

        if self._closed:
            return
        self._closed = True
        self._queue.clear()
        self.selection.remove_listener(self._on_selection_changed)
        for page in self.registry.pages():
            self.registry.remove(page.page_id)
            page.content.content.release()
        self._icons.clear()
        self._active_page_id = None

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------
    def _handle(self, event: ShellEvent) -> None:
        try:
            if isinstance(event, AccountAdded):
                self._on_account_added(event)
            elif isinstance(event, AccountRemoved):
                self._on_account_removed(event)
            elif isinstance(event, ColorSchemeChanged):
                self._on_color_scheme_changed(event)
            elif isinstance(event, PageActivated):
                self.selection.select(event.page_id)
            else:
                logger.warning("Unsupported shell event %r", event)
        except DuplicateAccount as exc:
            logger.warning("Ignoring duplicate account %s", exc.account_id)
        except UnknownPage as exc:
            logger.warning("Ignoring activation of unknown page %s", exc.page_id)
        except DuplicateIdentity as exc:
            logger.error("Page id %s registered twice", exc.page_id)
        except Exception:
            logger.exception("Handling %r failed", event)

    def _on_account_added(self, event: AccountAdded) -> None:
        page = self.bridge.on_account_added(
            event.account_id, event.display_name, event.icon_hint
        )
        self._theme_page(page)
        self._emit(PagesChanged(self.registry.page_ids()))

        account = Account(event.account_id, event.display_name, event.icon_hint)
        for content in self._account_aware_contents():
            content.account_added(account)

    def _on_account_removed(self, event: AccountRemoved) -> None:
        page = self.bridge.on_account_removed(event.account_id)
        if page is not None:
            self._icons.pop(page.page_id, None)
            self._emit(PagesChanged(self.registry.page_ids()))
        for content in self._account_aware_contents():
            content.account_removed(event.account_id)

    def _on_color_scheme_changed(self, event: ColorSchemeChanged) -> None:
        self._scheme = event.scheme
        for page in self.registry.pages():
            self._theme_page(page)
        self._emit(IconsThemed(dict(self._icons)))

    def _on_selection_changed(self, page_id: Optional[str]) -> None:
        previous = self.registry.find(self._active_page_id) if self._active_page_id else None
        if previous is not None:
            try:
                previous.content.content.deactivate()
            except Exception:
                logger.exception("Deactivating page %s failed", previous.page_id)
        self._active_page_id = page_id
        page = self.registry.find(page_id) if page_id is not None else None
        if page is not None:
            try:
                page.content.content.activate()
            except Exception:
                logger.exception("Activating page %s failed", page_id)
        self._emit(CurrentPageChanged(page_id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _create_account_content(self, account: Account) -> PageContent:
        return self._account_page_factory(account, self.forward)

    def _account_aware_contents(self):
        for page in self.registry.pages():
            content = page.content.content
            if not page.is_account_page and isinstance(content, AccountAwareContent):
                yield content

    def _theme_page(self, page: Page) -> None:
        if self._scheme is None:
            return
        self._icons[page.page_id] = self.themer.recolor(page.icon_source, self._scheme.background)

    def _emit(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("Shell listener failed on %r", notification)


__all__ = [
    "ACCOUNT_ICON",
    "ACTIVITY_PAGE_ID",
    "FIXED_PAGES",
    "GENERAL_PAGE_ID",
    "NETWORK_PAGE_ID",
    "SettingsShell",
]
