"""Reusable widgets for the settings dialog toolbar and pages."""

from typing import Any, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QLabel,
    QPushButton,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)


def _call_if_exists(obj: Any, method: str, *args: Any, **kwargs: Any) -> None:
    """Invoke ``method`` on ``obj`` when available."""

    func = getattr(obj, method, None)
    if callable(func):
        func(*args, **kwargs)


class NavToolButton(QToolButton):
    """Toolbar button showing a page icon with its label underneath."""

    def __init__(self, action: QAction, min_width: int = 0, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("NavButton")
        self.setDefaultAction(action)
        self.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)
        if min_width > 0:
            self.setMinimumWidth(min_width)


class WidgetPageContent:
    """Adapts a page widget to the shell's activate/deactivate/release hooks.

    ``activate`` forwards to the widget's optional ``refresh`` and
    ``deactivate`` to its optional ``on_leave``.
    """

    def __init__(self, widget: QWidget) -> None:
        self.widget = widget
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def activate(self) -> None:
        if not self._released:
            _call_if_exists(self.widget, "refresh")

    def deactivate(self) -> None:
        if not self._released:
            _call_if_exists(self.widget, "on_leave")

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self.widget.deleteLater()


class PlaceholderPage(QWidget):
    """Minimal page body used when the host supplies no real content."""

    def __init__(self, title: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        heading = QLabel(title)
        heading.setObjectName("SectionTitle")
        layout.addWidget(heading)
        layout.addStretch()


class AccountPage(PlaceholderPage):
    """Placeholder account page exposing the folder notifications.

    It lists a single sync folder, the account root, whose alias is sent
    with ``openFolderRequested``.
    """

    ROOT_FOLDER_ALIAS = "/"

    foldersChanged = pyqtSignal()
    openFolderRequested = pyqtSignal(str)

    def __init__(
        self,
        account_id: str,
        display_name: str,
        folder_alias: str = ROOT_FOLDER_ALIAS,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(display_name, parent)
        self.account_id = account_id
        self.folder_alias = folder_alias
        self.open_button = QPushButton("Open folder")
        self.open_button.clicked.connect(lambda: self.openFolderRequested.emit(self.folder_alias))
        self.layout().insertWidget(1, self.open_button)


__all__ = ["AccountPage", "NavToolButton", "PlaceholderPage", "WidgetPageContent"]
