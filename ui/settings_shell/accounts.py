"""Keeps account-scoped pages in step with account manager notifications."""
from __future__ import annotations

import itertools
import logging
from typing import Callable, Optional

from models.account import Account
from models.page import ContentDescriptor, Page, PageContent, PageKind, PagePosition
from utils.exceptions import DuplicateAccount
from utils.text_elide import TextMeasure

from .registry import PageRegistry
from .selection import SelectionController

logger = logging.getLogger(__name__)

AccountContentFactory = Callable[[Account], PageContent]
WidthBudget = Callable[[], int]


class AccountLifecycleBridge:
    """Inserts and removes one settings page per attached account.

    New account pages go to the front of the toolbar. While the host is still
    registering its startup pages no selection is made here; the shell runs
    the initial selection once startup is over.
    """

    def __init__(
        self,
        registry: PageRegistry,
        selection: SelectionController,
        content_factory: AccountContentFactory,
        *,
        account_icon: str,
        width_budget: Optional[WidthBudget] = None,
        measure: TextMeasure = len,
    ) -> None:
        self._registry = registry
        self._selection = selection
        self._content_factory = content_factory
        self._account_icon = account_icon
        self._width_budget = width_budget or (lambda: 0)
        self._measure = measure
        self._serial = itertools.count(1)
        self._startup_pending = True

    def end_startup(self) -> None:
        self._startup_pending = False

    def _next_page_id(self, account_id: str) -> str:
        return f"account:{account_id}:{next(self._serial)}"

    def on_account_added(
        self,
        account_id: str,
        display_name: str,
        icon_hint: Optional[str] = None,
        width_budget: Optional[int] = None,
    ) -> Page:
        if self._registry.find_by_account(account_id) is not None:
            raise DuplicateAccount(account_id)

        account = Account(account_id=account_id, display_name=display_name, icon_hint=icon_hint)
        width = self._width_budget() if width_budget is None else width_budget
        was_empty = len(self._registry) == 0

        content = self._content_factory(account)
        page = Page(
            page_id=self._next_page_id(account_id),
            label=display_name,
            short_label=account.short_display_name(width, self._measure),
            icon_source=self._account_icon,
            content=ContentDescriptor(PageKind.ACCOUNT, content),
            account_id=account_id,
            removable=True,
            tooltip=display_name,
        )
        try:
            self._registry.insert(page, PagePosition.FRONT)
        except Exception:
            content.release()
            raise
        logger.debug("Added page %s for account %s", page.page_id, account_id)

        if was_empty and not self._startup_pending:
            self._selection.select_first()
        return page

    def on_account_removed(self, account_id: str) -> Optional[Page]:
        page = self._registry.find_by_account(account_id)
        if page is None:
            logger.debug("No settings page for removed account %s", account_id)
            return None

        self._registry.remove(page.page_id)
        page.content.content.release()
        logger.debug("Removed page %s for account %s", page.page_id, account_id)
        self._selection.on_page_removed(page.page_id)
        return page


__all__ = ["AccountContentFactory", "AccountLifecycleBridge", "WidthBudget"]
