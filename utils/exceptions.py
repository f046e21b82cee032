from __future__ import annotations

"""Shared exception types for the settings navigation shell."""


class SettingsShellError(RuntimeError):
    """Base class for errors raised by the navigation shell components."""


class DuplicateIdentity(SettingsShellError):
    """Raised when a page id is inserted twice or reused after removal."""

    def __init__(self, page_id: str):
        self.page_id = page_id
        super().__init__(f"Page '{page_id}' is already registered")


class DuplicateAccount(SettingsShellError):
    """Raised when an account that already has a live page is added again."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account '{account_id}' already has a settings page")


class UnknownPage(SettingsShellError):
    """Raised when selecting a page id that is not in the registry."""

    def __init__(self, page_id: str):
        self.page_id = page_id
        super().__init__(f"Unknown page '{page_id}'")


__all__ = [
    "SettingsShellError",
    "DuplicateIdentity",
    "DuplicateAccount",
    "UnknownPage",
]
