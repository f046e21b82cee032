"""Ordered page collection backing the settings navigation toolbar."""
from __future__ import annotations

from typing import Iterator, List, Optional, Set, Tuple

from models.page import Page, PagePosition
from utils.exceptions import DuplicateIdentity


class PageRegistry:
    """Ordered pages keyed by a stable id.

    Account pages always sit in front of the fixed subsystem pages. Ids are
    never handed out twice, even after the page that used them is removed.
    """

    def __init__(self) -> None:
        self._pages: List[Page] = []
        self._used_ids: Set[str] = set()

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(tuple(self._pages))

    def __contains__(self, page_id: object) -> bool:
        return any(p.page_id == page_id for p in self._pages)

    def _account_count(self) -> int:
        return sum(1 for p in self._pages if p.is_account_page)

    def insert(self, page: Page, position: PagePosition = PagePosition.BACK) -> int:
        """Insert ``page`` and return the index it landed on."""

        if page.page_id in self._used_ids:
            raise DuplicateIdentity(page.page_id)

        boundary = self._account_count()
        if position is PagePosition.FRONT:
            index = 0
        elif position is PagePosition.ACCOUNT_BOUNDARY:
            index = boundary
        else:
            index = len(self._pages)

        # account pages stay inside [0, boundary], fixed pages inside [boundary, len]
        if page.is_account_page:
            index = min(index, boundary)
        else:
            index = max(index, boundary)

        self._pages.insert(index, page)
        self._used_ids.add(page.page_id)
        return index

    def remove(self, page_id: str) -> Optional[Page]:
        """Drop the page with ``page_id``; absent ids are ignored."""

        for idx, page in enumerate(self._pages):
            if page.page_id == page_id:
                del self._pages[idx]
                return page
        return None

    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    def page_ids(self) -> Tuple[str, ...]:
        return tuple(p.page_id for p in self._pages)

    def find(self, page_id: str) -> Optional[Page]:
        for page in self._pages:
            if page.page_id == page_id:
                return page
        return None

    def find_by_account(self, account_id: str) -> Optional[Page]:
        # account counts stay small, a scan is enough
        for page in self._pages:
            if page.account_id == account_id:
                return page
        return None

    def first(self) -> Optional[Page]:
        return self._pages[0] if self._pages else None

    def index_of(self, page_id: str) -> int:
        for idx, page in enumerate(self._pages):
            if page.page_id == page_id:
                return idx
        return -1


__all__ = ["PageRegistry"]
