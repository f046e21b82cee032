import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tests.util.page_content import ActivityContent, RecordingContent  # noqa: E402


@pytest.fixture
def shell_config(tmp_path):
    from utils.shell_config import ShellConfig

    return ShellConfig(icon_dir=tmp_path)


@pytest.fixture
def account_contents():
    """Account page contents created by the shell, keyed by account id."""

    return {}


@pytest.fixture
def activity_content():
    return ActivityContent()


@pytest.fixture
def make_shell(shell_config, account_contents, activity_content):
    from models.page import PageKind
    from ui.settings_shell import SettingsShell

    def _make(**kwargs):
        def _account_page(account, notify):
            content = RecordingContent(account.display_name)
            content.notify = notify
            account_contents.setdefault(account.account_id, []).append(content)
            return content

        kwargs.setdefault("config", shell_config)
        kwargs.setdefault(
            "page_factories",
            {
                PageKind.ACTIVITY: lambda: activity_content,
                PageKind.GENERAL: lambda: RecordingContent("general"),
                PageKind.NETWORK: lambda: RecordingContent("network"),
            },
        )
        kwargs.setdefault("account_page_factory", _account_page)
        return SettingsShell(**kwargs)

    return _make


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def shell(make_shell, notifications):
    s = make_shell()
    s.add_listener(notifications.append)
    return s



