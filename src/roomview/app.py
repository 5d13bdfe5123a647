"""The room viewer application: main window, settings dock and command line."""

import argparse
import json
import logging
import signal
import sys

from qtpy.QtCore import Qt, QTimer
from qtpy.QtGui import QKeySequence
from qtpy.QtWidgets import QApplication, QDockWidget, QMainWindow

from roomview.callbacks import SubscriptionScope
from roomview.camera import CameraMode
from roomview.navigation import NavigationConfig
from roomview.scene import RoomScene
from roomview.settingspanel import SettingsPanel, SettingsPanelWidget
from roomview.viewwidget import RoomViewWidget

logger = logging.getLogger(__name__)


class RoomViewerWindow(QMainWindow):
    """Main window with the room view in the center and the settings in a dock."""

    def __init__(self, mode=CameraMode.Perspective, config=None, scene=None, window_title="Room Viewer", targetFps=60):
        super().__init__()
        self.setWindowTitle(window_title)
        self.setGeometry(100, 100, 1024, 720)

        self.view = RoomViewWidget(self, mode=mode, config=config, targetFps=targetFps)
        self.setCentralWidget(self.view)

        self.scene = scene if scene is not None else RoomScene()
        self.view.setScene(self.scene)

        self.settingsPanel = SettingsPanel(cameraMode=mode)
        self._setup_settings_dock()
        self._setup_menu_bar()

        self._subscriptions = SubscriptionScope()
        self._connectSettings()

    def _setup_settings_dock(self):
        dock = QDockWidget("Settings", self)
        dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.settingsWidget = SettingsPanelWidget(self.settingsPanel)
        dock.setWidget(self.settingsWidget)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)
        self._settings_dock = dock

    def _setup_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        quit_action = file_menu.addAction("Quit")
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.quit_application)

        view_menu = menubar.addMenu("View")
        reset_action = view_menu.addAction("Reset View")
        reset_action.setShortcut(QKeySequence("R"))
        reset_action.triggered.connect(self.view.dualCamera.resetView)
        view_menu.addAction(self._settings_dock.toggleViewAction())

    def _connectSettings(self):
        panel = self.settingsPanel
        dualCamera = self.view.dualCamera
        add = self._subscriptions.add

        add(panel.connectCameraModeChanged(dualCamera.switchTo))
        add(dualCamera.connectModeChanged(panel.setCameraMode))
        add(panel.connectClockModeChanged(self._onClockModeChanged))
        add(panel.connectClockChanged(self._onClockChanged))
        add(panel.connectNeutralChanged(self.scene.setNeutral))
        add(panel.connectReset(dualCamera.resetView))

    def _onClockModeChanged(self, mode):
        clock = self.scene.clock
        if mode == "current":
            clock.syncWithUserTime()
        else:
            # start editing from the time the clock shows
            self.settingsPanel.setTime(clock.hours, clock.minutes)
            clock.stopUserTimeSync()

    def _onClockChanged(self, hours, minutes):
        clock = self.scene.clock
        if not clock.synced:
            clock.setTime(hours, minutes)

    def start(self):
        self.view.start()

    def quit_application(self):
        QApplication.instance().quit()

    def closeEvent(self, event):
        self._subscriptions.releaseAll()
        self.settingsWidget.dispose()
        self.view.close()
        super().closeEvent(event)


def _setup_signal_handlers(app):
    """Quit the Qt application on Ctrl+C."""

    def signal_handler(signum, frame):
        logger.info("Caught interrupt signal, quitting application...")
        QTimer.singleShot(0, app.quit)

    signal.signal(signal.SIGINT, signal_handler)


def loadConfig(path):
    """Read a NavigationConfig from a JSON file; None gives the defaults."""
    if path is None:
        return NavigationConfig()
    with open(path) as f:
        return NavigationConfig.fromDict(json.load(f))


def positiveInt(text):
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer, got %s" % text)
    return value


def makeParser():
    parser = argparse.ArgumentParser(prog="roomview", description="Interactive 3D room viewer.")
    parser.add_argument(
        "--orthographic", action="store_true", help="start with the orthographic camera instead of the perspective one"
    )
    parser.add_argument("--config", type=str, metavar="filename", help="JSON file with navigation options")
    parser.add_argument("--fps", type=positiveInt, default=60, help="target frame rate (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument(
        "--auto-quit", action="store_true", help="quit shortly after starting, used for testing"
    )
    return parser


def main(argv=None):
    args = makeParser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = loadConfig(args.config)
    mode = CameraMode.Orthographic if args.orthographic else CameraMode.Perspective

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Room Viewer")
    _setup_signal_handlers(app)

    window = RoomViewerWindow(mode=mode, config=config, targetFps=args.fps)
    window.show()
    window.start()

    if args.auto_quit:
        QTimer.singleShot(500, app.quit)

    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
