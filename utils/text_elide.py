from __future__ import annotations

"""Width-aware text elision used for compact navigation labels."""

from typing import Callable

ELLIPSIS = "…"

TextMeasure = Callable[[str], int]

ELIDE_RIGHT = "right"
ELIDE_MIDDLE = "middle"


def elide(
    text: str,
    max_width: int,
    *,
    mode: str = ELIDE_RIGHT,
    measure: TextMeasure = len,
) -> str:
    """Return ``text`` shortened with an ellipsis so it fits ``max_width``.

    ``measure`` maps a string to its rendered width. The default counts
    characters; the Qt host passes ``QFontMetrics.horizontalAdvance`` so the
    budget is expressed in pixels. A non-positive ``max_width`` disables
    elision entirely.
    """

    if max_width <= 0 or measure(text) <= max_width:
        return text
    if mode not in (ELIDE_RIGHT, ELIDE_MIDDLE):
        raise ValueError(f"Unsupported elide mode '{mode}'")

    for keep in range(len(text) - 1, 0, -1):
        if mode == ELIDE_RIGHT:
            candidate = text[:keep] + ELLIPSIS
        else:
            head = text[: keep - keep // 2]
            tail = text[len(text) - keep // 2 :] if keep // 2 else ""
            candidate = head + ELLIPSIS + tail
        if measure(candidate) <= max_width:
            return candidate

    return ELLIPSIS if measure(ELLIPSIS) <= max_width else ""


__all__ = ["ELLIPSIS", "ELIDE_MIDDLE", "ELIDE_RIGHT", "TextMeasure", "elide"]
