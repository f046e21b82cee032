from __future__ import annotations

from pathlib import Path
import sys


def get_base_dir() -> Path:
    """Return the project root, or the bundle directory when frozen."""
    return Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent.parent))


def resolve_path(path: str | Path) -> Path:
    """Anchor a relative ``path`` at the project root."""
    p = Path(path)
    if not p.is_absolute():
        p = get_base_dir() / p
    return p
