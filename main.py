import logging
import sys

from PyQt6.QtWidgets import QApplication

from services.account_manager import AccountManager, accounts_from_names
from ui.settings_dialog import SettingsDialog
from utils.shell_config import load_config


def main():
    config = load_config()
    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    app = QApplication(sys.argv)
    manager = AccountManager(accounts_from_names(config.seed_accounts))
    dialog = SettingsDialog(manager, config=config)
    dialog.openFolderRequested.connect(
        lambda alias: logging.getLogger(__name__).info("Open folder requested: %s", alias)
    )
    dialog.show()
    code = app.exec()
    dialog.shutdown()
    sys.exit(code)


if __name__ == "__main__":
    main()
