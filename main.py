"""LocaleDesk — Entry Point."""
import logging
import sys

from localedesk.application import create_application
from localedesk.constants import SETTINGS_DIR, SETTINGS_FILENAME
from localedesk.core.catalog_controller import CatalogController
from localedesk.core.settings_store import SettingsStore
from localedesk.main_window import MainWindow

logger = logging.getLogger("localedesk")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    store = SettingsStore(SETTINGS_DIR / SETTINGS_FILENAME)
    store.load()

    app = create_application(sys.argv)
    controller = CatalogController(store)
    window = MainWindow(controller)
    window.show()

    try:
        controller.start_server_if_enabled()
    except OSError as e:
        logger.error("Could not auto-start key-intake server: %s", e)
        window.statusBar().showMessage(f"Key-intake server not started: {e}", 10000)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
