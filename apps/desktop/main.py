import signal
import sys
from PySide6.QtWidgets import QApplication, QMenu

from packages.shared.paths import ensure_app_dirs
from packages.shared.store import ConfigStore
from packages.core.logging_ import setup_logging
from packages.core.horn.scheduler import PollScheduler
from packages.core.target.devtools import (
    DevToolsClient,
    DevToolsStatusRequester,
    DevToolsTargetLocator,
    DevToolsVisualAlert,
)
from .ui.tray import QtSoundPlayer, TrayBadge
from .ui.window import SettingsWindow


def main() -> None:
    ensure_app_dirs()
    store = ConfigStore()
    cfg = store.load()
    setup_logging(debug=cfg.debug_logging)

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    client = DevToolsClient(base_url=cfg.devtools_url)
    badge = TrayBadge(app)
    sound = QtSoundPlayer(app)
    scheduler = PollScheduler(
        config_provider=store.load,
        locator=DevToolsTargetLocator(client),
        requester=DevToolsStatusRequester(client),
        badge_sink=badge,
        sound=sound,
        notifier=badge,
        visual=DevToolsVisualAlert(client),
    )

    win = SettingsWindow(store, scheduler)

    def show_window() -> None:
        win.show()
        win.raise_()

    menu = QMenu()
    menu.addAction("Settings", show_window)
    menu.addAction("Quit", app.quit)
    badge.tray.setContextMenu(menu)
    badge.tray.activated.connect(lambda _reason: show_window())
    badge.tray.show()
    win.show()

    def shutdown() -> None:
        scheduler.stop()
        client.close()

    app.aboutToQuit.connect(shutdown)

    # Ctrl+C quits; the window close button only hides to the tray
    def signal_handler(sig, frame):
        print("\nReceived interrupt signal (Ctrl+C), shutting down...")
        app.quit()

    if hasattr(signal, 'SIGINT'):
        signal.signal(signal.SIGINT, signal_handler)

    scheduler.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
