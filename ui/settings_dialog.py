"""Settings dialog hosting the navigation shell in a toolbar and page stack."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, Optional

from PyQt6.QtCore import QEvent, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QActionGroup, QIcon, QImage, QPixmap
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QStackedWidget,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from models.account import Account
from models.page import Page, PageKind
from services.account_manager import AccountManager
from utils.shell_config import ShellConfig, load_config

from .components import AccountPage, NavToolButton, PlaceholderPage, WidgetPageContent
from .settings_shell import (
    AccountAdded,
    AccountFolderOpenRequested,
    AccountFoldersChanged,
    AccountRemoved,
    ColorSchemeChanged,
    CurrentPageChanged,
    IconsThemed,
    PageActivated,
    PagesChanged,
    SettingsShell,
)
from .settings_shell.content import NotificationSink
from .theme import ColorScheme, toolbar_stylesheet

logger = logging.getLogger(__name__)

WidgetFactory = Callable[[], QWidget]
AccountWidgetFactory = Callable[[Account], QWidget]

# ThemeChange only exists on newer Qt builds
_THEME_EVENTS = tuple(
    event_type
    for event_type in (
        getattr(QEvent.Type, name, None)
        for name in ("StyleChange", "PaletteChange", "ThemeChange", "ApplicationPaletteChange")
    )
    if event_type is not None
)


class SettingsDialog(QDialog):
    """Toolbar-driven settings window.

    Page bodies come from the optional widget factories; without them simple
    placeholders are shown. Folder notifications from account pages are
    re-emitted unchanged through :attr:`foldersChanged` and
    :attr:`openFolderRequested`.
    """

    foldersChanged = pyqtSignal(str)
    openFolderRequested = pyqtSignal(str)

    def __init__(
        self,
        account_manager: AccountManager,
        *,
        config: Optional[ShellConfig] = None,
        page_widgets: Optional[Mapping[PageKind, WidgetFactory]] = None,
        account_widget: Optional[AccountWidgetFactory] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("Settings")
        self.setWindowTitle("Settings")
        self._config = config or load_config()
        self._account_manager = account_manager
        self._account_widget = account_widget
        self._actions: Dict[str, QAction] = {}
        self._toolbar_slots: Dict[str, QAction] = {}
        self._widgets: Dict[str, QWidget] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._toolbar = QToolBar()
        self._toolbar.setIconSize(QSize(self._config.icon_size, self._config.icon_size))
        self._toolbar.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
        layout.setMenuBar(self._toolbar)

        self._stack = QStackedWidget()
        self._stack.setObjectName("SettingsStack")
        layout.addWidget(self._stack)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.button(QDialogButtonBox.StandardButton.Close).clicked.connect(self.accept)
        layout.addWidget(buttons)

        self._action_group = QActionGroup(self)
        self._action_group.setExclusive(True)
        self._action_group.triggered.connect(self._on_action_triggered)

        widgets = dict(page_widgets or {})
        factories = {
            kind: self._fixed_factory(kind, widgets.get(kind))
            for kind in (PageKind.ACTIVITY, PageKind.GENERAL, PageKind.NETWORK)
        }
        self.shell = SettingsShell(
            page_factories=factories,
            account_page_factory=self._create_account_content,
            config=self._config,
            width_budget=self._account_width_budget,
            measure=self.fontMetrics().horizontalAdvance,
            scheme=ColorScheme.from_palette(self.palette()),
        )
        self.shell.add_listener(self._on_shell_notification)
        self._sync_pages()

        account_manager.on_added(self._on_account_added)
        account_manager.on_removed(self._on_account_removed)
        for account in account_manager.accounts():
            self._on_account_added(account)

        self.shell.finish_startup()
        self._customize_style()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def current_page_id(self) -> Optional[str]:
        return self.shell.current()

    def show_activity_page(self) -> None:
        self.shell.show_activity_page()

    def toolbar_labels(self) -> list[str]:
        return [self._actions[p.page_id].iconText() for p in self.shell.pages()]

    def shutdown(self) -> None:
        """Detach from the account manager and release all page content."""

        self._account_manager.disconnect(self._on_account_added)
        self._account_manager.disconnect(self._on_account_removed)
        self.shell.remove_listener(self._on_shell_notification)
        for widget in self._widgets.values():
            self._stack.removeWidget(widget)
        self._widgets.clear()
        self.shell.close()

    # ------------------------------------------------------------------
    # Qt overrides
    # ------------------------------------------------------------------
    def changeEvent(self, event: QEvent) -> None:
        if event.type() in _THEME_EVENTS and getattr(self, "shell", None) is not None:
            self._customize_style()
        super().changeEvent(event)

    # ------------------------------------------------------------------
    # Page content
    # ------------------------------------------------------------------
    def _fixed_factory(self, kind: PageKind, factory: Optional[WidgetFactory]):
        def _build() -> WidgetPageContent:
            widget = factory() if factory is not None else PlaceholderPage(kind.value.title())
            return WidgetPageContent(widget)

        return _build

    def _create_account_content(self, account: Account, notify: NotificationSink) -> WidgetPageContent:
        if self._account_widget is not None:
            widget = self._account_widget(account)
        else:
            widget = AccountPage(account.account_id, account.display_name)

        folders_changed = getattr(widget, "foldersChanged", None)
        if folders_changed is not None:
            folders_changed.connect(lambda *_: notify(AccountFoldersChanged(account.account_id)))
        open_requested = getattr(widget, "openFolderRequested", None)
        if open_requested is not None:
            open_requested.connect(
                lambda alias: notify(AccountFolderOpenRequested(account.account_id, alias))
            )
        return WidgetPageContent(widget)

    def _account_width_budget(self) -> int:
        return int(self._toolbar.sizeHint().height() * self._config.button_ratio)

    # ------------------------------------------------------------------
    # Account manager -> shell
    # ------------------------------------------------------------------
    def _on_account_added(self, account: Account) -> None:
        self.shell.dispatch(
            AccountAdded(account.account_id, account.display_name, account.icon_hint)
        )

    def _on_account_removed(self, account: Account) -> None:
        self.shell.dispatch(AccountRemoved(account.account_id))

    def _on_action_triggered(self, action: QAction) -> None:
        page_id = action.data()
        if page_id:
            self.shell.dispatch(PageActivated(page_id))

    # ------------------------------------------------------------------
    # Shell -> widgets
    # ------------------------------------------------------------------
    def _on_shell_notification(self, notification) -> None:
        if isinstance(notification, CurrentPageChanged):
            self._show_page(notification.page_id)
        elif isinstance(notification, PagesChanged):
            self._sync_pages()
        elif isinstance(notification, IconsThemed):
            for page_id, image in notification.icons.items():
                self._set_icon(page_id, image)
        elif isinstance(notification, AccountFoldersChanged):
            self.foldersChanged.emit(notification.account_id)
        elif isinstance(notification, AccountFolderOpenRequested):
            self.openFolderRequested.emit(notification.alias)

    def _show_page(self, page_id: Optional[str]) -> None:
        action = self._actions.get(page_id) if page_id else None
        if action is not None and not action.isChecked():
            action.setChecked(True)
        widget = self._widgets.get(page_id) if page_id else None
        if widget is not None:
            self._stack.setCurrentWidget(widget)

    def _sync_pages(self) -> None:
        pages = self.shell.pages()
        live = {p.page_id for p in pages}

        for page_id in [pid for pid in self._actions if pid not in live]:
            action = self._actions.pop(page_id)
            self._action_group.removeAction(action)
            action.deleteLater()
            slot = self._toolbar_slots.pop(page_id, None)
            if slot is not None:
                self._toolbar.removeAction(slot)
                slot.deleteLater()
            widget = self._widgets.pop(page_id, None)
            if widget is not None:
                self._stack.removeWidget(widget)

        min_width = int(self._toolbar.sizeHint().height() * 1.3)
        successor: Optional[QAction] = None
        # walk backwards so each new button can be placed before its successor
        for page in reversed(pages):
            if page.page_id not in self._actions:
                self._actions[page.page_id] = self._create_action(page)
            if page.page_id not in self._toolbar_slots:
                button = NavToolButton(self._actions[page.page_id], min_width)
                if successor is None:
                    slot = self._toolbar.addWidget(button)
                else:
                    slot = self._toolbar.insertWidget(successor, button)
                self._toolbar_slots[page.page_id] = slot
            successor = self._toolbar_slots[page.page_id]

            content = page.content.content
            if page.page_id not in self._widgets and isinstance(content, WidgetPageContent):
                self._widgets[page.page_id] = content.widget
                self._stack.addWidget(content.widget)

        self._show_page(self.shell.current())

    def _create_action(self, page: Page) -> QAction:
        action = QAction(page.label, self)
        action.setIconText(page.short_label)
        action.setToolTip(page.tooltip or page.label)
        action.setCheckable(True)
        action.setData(page.page_id)
        self._action_group.addAction(action)
        icon = self.shell.themed_icon(page.page_id)
        if icon is not None:
            action.setIcon(QIcon(QPixmap.fromImage(icon)))
        return action

    def _set_icon(self, page_id: str, image: QImage) -> None:
        action = self._actions.get(page_id)
        if action is not None:
            action.setIcon(QIcon(QPixmap.fromImage(image)))

    def _customize_style(self) -> None:
        scheme = ColorScheme.from_palette(self.palette())
        self._toolbar.setStyleSheet(toolbar_stylesheet(scheme))
        if scheme != self.shell.color_scheme:
            self.shell.dispatch(ColorSchemeChanged(scheme))


__all__ = ["SettingsDialog"]
