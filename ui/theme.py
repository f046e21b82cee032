from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor, QPalette

TOOLBAR_QSS = """
QToolBar {{
    background: {background};
    margin: 0;
    padding: 0;
    border: none;
    border-bottom: 1px solid {border};
    spacing: 0;
}}
QToolBar QToolButton {{
    background: {background};
    border: none;
    border-bottom: 1px solid {border};
    margin: 0;
    padding: 5px;
}}
QToolBar QToolBarExtension {{ padding: 0; }}
QToolBar QToolButton:checked {{
    background: {highlight};
    color: {alternate};
}}
"""


@dataclass(frozen=True)
class ColorScheme:
    """The palette colors the settings toolbar is drawn with."""

    background: QColor
    border: QColor
    highlight: QColor
    alternate_background: QColor

    @classmethod
    def from_palette(cls, palette: QPalette) -> "ColorScheme":
        role = QPalette.ColorRole
        return cls(
            background=QColor(palette.color(role.Base)),
            border=QColor(palette.color(role.Dark)),
            highlight=QColor(palette.color(role.Highlight)),
            alternate_background=QColor(palette.color(role.AlternateBase)),
        )


def toolbar_stylesheet(scheme: ColorScheme) -> str:
    """Render the navigation toolbar style sheet for ``scheme``."""
    return TOOLBAR_QSS.format(
        background=scheme.background.name(),
        border=scheme.border.name(),
        highlight=scheme.highlight.name(),
        alternate=scheme.alternate_background.name(),
    )


__all__ = ["ColorScheme", "TOOLBAR_QSS", "toolbar_stylesheet"]
