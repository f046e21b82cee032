"""Palette-aware recoloring of navigation toolbar icons."""
from __future__ import annotations

import logging
from typing import Dict

from PyQt6.QtGui import QColor, QImage

logger = logging.getLogger(__name__)

# Icon assets are drawn for light backgrounds.
INVERT_THRESHOLD = 0.5


def perceived_luminance(color: QColor) -> float:
    """Weighted luminance in ``[0, 1]``; the eye is most sensitive to green."""

    return (0.299 * color.red() + 0.587 * color.green() + 0.114 * color.blue()) / 255.0


def threshold_inverts(threshold: float) -> bool:
    return threshold > INVERT_THRESHOLD


def should_invert(background: QColor) -> bool:
    return threshold_inverts(1.0 - perceived_luminance(background))


class IconThemer:
    """Derives themed icon images from their sources and a background color.

    Source images are loaded once per ``icon_source`` and never modified;
    every call returns a fresh image.
    """

    def __init__(self) -> None:
        self._sources: Dict[str, QImage] = {}

    def load(self, icon_source: str) -> QImage:
        image = self._sources.get(icon_source)
        if image is None:
            image = QImage(icon_source)
            if image.isNull():
                logger.warning("Icon source %s could not be loaded", icon_source)
            self._sources[icon_source] = image
        return image

    def recolor(self, icon_source: str, background: QColor) -> QImage:
        return self.recolor_image(self.load(icon_source), background)

    def recolor_image(self, image: QImage, background: QColor) -> QImage:
        themed = image.copy()
        if not themed.isNull() and should_invert(background):
            themed.invertPixels(QImage.InvertMode.InvertRgb)
        return themed


__all__ = [
    "INVERT_THRESHOLD",
    "IconThemer",
    "perceived_luminance",
    "should_invert",
    "threshold_inverts",
]
