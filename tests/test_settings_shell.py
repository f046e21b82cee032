import logging

import pytest

pytest.importorskip("PyQt6.QtGui")
from PyQt6.QtGui import QColor, QImage

from ui.settings_shell import (
    AccountAdded,
    AccountFolderOpenRequested,
    AccountFoldersChanged,
    AccountRemoved,
    ColorSchemeChanged,
    CurrentPageChanged,
    IconsThemed,
    PageActivated,
    PagesChanged,
)
from ui.settings_shell.icon_theme import IconThemer
from ui.theme import ColorScheme


def _labels(shell):
    return [p.label for p in shell.pages()]


def _current_label(shell):
    page = shell.current_page()
    return page.label if page else None


def _scheme(background):
    return ColorScheme(
        background=QColor(background),
        border=QColor("#808080"),
        highlight=QColor("#3daee9"),
        alternate_background=QColor("#eff0f1"),
    )


def _assert_page_order_and_selection(shell):
    pages = shell.pages()
    if pages:
        assert shell.current() in [p.page_id for p in pages]
    flags = [p.is_account_page for p in pages]
    assert flags == sorted(flags, reverse=True)


def test_fixed_pages_wait_for_startup(shell):
    assert _labels(shell) == ["Activity", "General", "Network"]
    assert shell.current() is None
    shell.finish_startup()
    assert _current_label(shell) == "Activity"
    shell.finish_startup()
    assert _current_label(shell) == "Activity"


def test_account_added_keeps_current_page(shell):
    shell.finish_startup()
    shell.dispatch(PageActivated("network"))
    shell.dispatch(AccountAdded("1", "Alice"))
    assert _labels(shell) == ["Alice", "Activity", "General", "Network"]
    assert _current_label(shell) == "Network"
    _assert_page_order_and_selection(shell)


def test_removing_current_account_selects_first(shell):
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.finish_startup()
    assert _current_label(shell) == "Alice"
    shell.dispatch(AccountRemoved("1"))
    assert _labels(shell) == ["Activity", "General", "Network"]
    assert _current_label(shell) == "Activity"
    _assert_page_order_and_selection(shell)


def test_duplicate_account_adds_one_page(shell, caplog):
    shell.finish_startup()
    before = len(shell.pages())
    with caplog.at_level(logging.WARNING):
        shell.dispatch(AccountAdded("1", "Alice"))
        shell.dispatch(AccountAdded("1", "Alice"))
    assert len(shell.pages()) == before + 1
    assert "duplicate account 1" in caplog.text


def test_unknown_page_activation_is_logged_not_raised(shell, caplog):
    shell.finish_startup()
    with caplog.at_level(logging.WARNING):
        shell.dispatch(PageActivated("nope"))
    assert _current_label(shell) == "Activity"
    assert "unknown page nope" in caplog.text


def test_repeated_removal_is_idempotent(shell, account_contents):
    shell.finish_startup()
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.dispatch(AccountRemoved("1"))
    snapshot = (shell.registry.page_ids(), shell.current())
    shell.dispatch(AccountRemoved("1"))
    assert (shell.registry.page_ids(), shell.current()) == snapshot
    assert account_contents["1"][0].release_count == 1


def test_selection_change_drives_content_hooks(shell, activity_content):
    shell.finish_startup()
    general = shell.registry.find("general").content.content
    shell.dispatch(PageActivated("general"))
    assert activity_content.calls == ["activate", "deactivate"]
    assert general.calls == ["activate"]


def test_removed_current_content_is_released_not_deactivated(shell, account_contents):
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.finish_startup()
    shell.dispatch(AccountRemoved("1"))
    assert account_contents["1"][0].calls == ["activate", "release"]


def test_notifications_for_page_and_selection_changes(shell, notifications):
    shell.finish_startup()
    shell.dispatch(AccountAdded("1", "Alice"))
    page_id = shell.registry.find_by_account("1").page_id
    shell.dispatch(PageActivated(page_id))
    shell.dispatch(AccountRemoved("1"))

    kinds = [type(n) for n in notifications]
    assert kinds == [
        CurrentPageChanged,
        PagesChanged,
        CurrentPageChanged,
        CurrentPageChanged,
        PagesChanged,
    ]
    assert notifications[0].page_id == "activity"
    assert notifications[1].page_ids[0] == page_id
    assert notifications[3].page_id == "activity"


def test_activity_feed_follows_accounts(shell, activity_content):
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.dispatch(AccountAdded("2", "Bob"))
    shell.dispatch(AccountRemoved("1"))
    assert activity_content.accounts == ["2"]


def test_folder_notifications_are_forwarded(shell, notifications, account_contents):
    shell.dispatch(AccountAdded("1", "Alice"))
    notify = account_contents["1"][0].notify
    notify(AccountFoldersChanged("1"))
    notify(AccountFolderOpenRequested("1", "Documents"))
    notify(PagesChanged(("bogus",)))
    forwarded = [n for n in notifications if isinstance(n, (AccountFoldersChanged, AccountFolderOpenRequested))]
    assert forwarded == [AccountFoldersChanged("1"), AccountFolderOpenRequested("1", "Documents")]
    assert PagesChanged(("bogus",)) not in notifications


def test_events_raised_by_listeners_run_after_current_event(shell):
    shell.finish_startup()
    order = []

    def on_notification(notification):
        if isinstance(notification, PagesChanged):
            order.append(notification.page_ids)
            if len(order) == 1:
                # removal queued while the addition is still being handled
                shell.dispatch(AccountRemoved("1"))
                order.append("queued")

    shell.add_listener(on_notification)
    shell.dispatch(AccountAdded("1", "Alice"))
    assert order[1] == "queued"
    assert order[2] == ("activity", "general", "network")
    assert shell.registry.find_by_account("1") is None


class _SolidThemer(IconThemer):
    """Themer whose every icon source is a black square."""

    def load(self, icon_source):
        image = QImage(2, 2, QImage.Format.Format_ARGB32)
        image.fill(QColor(0, 0, 0, 255))
        return image


def test_color_scheme_change_rethemes_every_page(make_shell, notifications):
    shell = make_shell(themer=_SolidThemer())
    shell.add_listener(notifications.append)
    shell.dispatch(AccountAdded("1", "Alice"))
    before = shell.pages()
    assert shell.themed_icon("general") is None

    shell.dispatch(ColorSchemeChanged(_scheme("#202020")))
    themed = notifications[-1]
    assert isinstance(themed, IconsThemed)
    assert set(themed.icons) == {p.page_id for p in shell.pages()}
    assert all(img.pixelColor(0, 0).red() == 255 for img in themed.icons.values())
    assert shell.pages() == before

    shell.dispatch(ColorSchemeChanged(_scheme("#fafafa")))
    assert shell.themed_icon("general").pixelColor(0, 0).red() == 0


def test_show_activity_page(shell):
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.finish_startup()
    shell.show_activity_page()
    assert shell.current() == "activity"


def test_close_releases_everything_once(shell, account_contents, activity_content):
    shell.dispatch(AccountAdded("1", "Alice"))
    shell.finish_startup()
    shell.close()
    shell.close()
    shell.dispatch(AccountAdded("2", "Bob"))
    assert shell.pages() == ()
    assert activity_content.release_count == 1
    assert account_contents["1"][0].release_count == 1
    assert "2" not in account_contents


class _FailingContent:
    def activate(self):
        raise RuntimeError("page refresh failed")

    def deactivate(self):
        raise RuntimeError("page leave failed")

    def release(self):
        pass


def test_failing_content_hooks_still_notify_host(make_shell, notifications, caplog):
    from models.page import PageKind

    shell = make_shell(
        page_factories={
            PageKind.ACTIVITY: _FailingContent,
            PageKind.GENERAL: _FailingContent,
        }
    )
    shell.add_listener(notifications.append)
    with caplog.at_level(logging.ERROR):
        shell.finish_startup()
        shell.dispatch(PageActivated("general"))
    changes = [n.page_id for n in notifications if isinstance(n, CurrentPageChanged)]
    assert changes == ["activity", "general"]
    assert shell.current() == "general"
    assert "Activating page general failed" in caplog.text
    assert "Deactivating page activity failed" in caplog.text


def test_unexpected_handler_error_does_not_stall_queue(make_shell, account_contents, caplog):
    from tests.util.page_content import RecordingContent

    def account_page(account, notify):
        if account.account_id == "bad":
            raise RuntimeError("account page could not be built")
        content = RecordingContent(account.display_name)
        account_contents.setdefault(account.account_id, []).append(content)
        return content

    shell = make_shell(account_page_factory=account_page)
    shell.finish_startup()
    queued = []

    def on_notification(notification):
        if isinstance(notification, PagesChanged) and not queued:
            queued.append(True)
            shell.dispatch(AccountAdded("bad", "Broken"))
            shell.dispatch(AccountRemoved("1"))

    shell.add_listener(on_notification)
    with caplog.at_level(logging.ERROR):
        shell.dispatch(AccountAdded("1", "Alice"))

    assert shell.registry.find_by_account("1") is None
    assert shell.registry.find_by_account("bad") is None
    assert account_contents["1"][0].release_count == 1
    assert "account page could not be built" in caplog.text


def test_color_scheme_is_remembered(shell):
    assert shell.color_scheme is None
    scheme = _scheme("#202020")
    shell.dispatch(ColorSchemeChanged(scheme))
    assert shell.color_scheme == scheme
