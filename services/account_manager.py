from __future__ import annotations

"""In-process account registry that announces account additions and removals."""

import logging
from collections import OrderedDict
from typing import Callable, Dict, Iterable, List, Optional

from models.account import Account
from utils.exceptions import DuplicateAccount

logger = logging.getLogger(__name__)

AccountListener = Callable[[Account], None]


class AccountManager:
    """Ordered collection of attached accounts.

    Listeners registered with :meth:`on_added` / :meth:`on_removed` are
    called synchronously after the collection changed.
    """

    def __init__(self, accounts: Iterable[Account] = ()) -> None:
        self._accounts: Dict[str, Account] = OrderedDict()
        self._added: List[AccountListener] = []
        self._removed: List[AccountListener] = []
        for account in accounts:
            self._accounts[account.account_id] = account

    def accounts(self) -> List[Account]:
        return list(self._accounts.values())

    def get(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def on_added(self, callback: AccountListener) -> None:
        if callback not in self._added:
            self._added.append(callback)

    def on_removed(self, callback: AccountListener) -> None:
        if callback not in self._removed:
            self._removed.append(callback)

    def disconnect(self, callback: AccountListener) -> None:
        for listeners in (self._added, self._removed):
            if callback in listeners:
                listeners.remove(callback)

    def add_account(
        self, account_id: str, display_name: str, icon_hint: Optional[str] = None
    ) -> Account:
        if account_id in self._accounts:
            raise DuplicateAccount(account_id)
        account = Account(account_id=account_id, display_name=display_name, icon_hint=icon_hint)
        self._accounts[account_id] = account
        logger.info("Account %s (%s) added", account_id, display_name)
        self._notify(self._added, account)
        return account

    def remove_account(self, account_id: str) -> Optional[Account]:
        account = self._accounts.pop(account_id, None)
        if account is None:
            logger.debug("Account %s already removed", account_id)
            return None
        logger.info("Account %s removed", account_id)
        self._notify(self._removed, account)
        return account

    def _notify(self, listeners: List[AccountListener], account: Account) -> None:
        for callback in list(listeners):
            try:
                callback(account)
            except Exception:
                logger.exception("Account listener failed for %s", account.account_id)


def accounts_from_names(names: Iterable[str]) -> List[Account]:
    """Build accounts with sequential ids from plain display names."""

    return [
        Account(account_id=str(idx), display_name=name)
        for idx, name in enumerate(names, start=1)
    ]


__all__ = ["AccountListener", "AccountManager", "accounts_from_names"]
