# turbonav/app.py
import sys

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtWidgets import QApplication

from .logging_config import configure_logging, get_logger
from .main_window import MainWindow
from .settings import load_settings

logger = get_logger(__name__)


class TurbonavApp(QApplication):
    def __init__(self, argv):
        super().__init__(argv)
        self.setApplicationName("Turbonav")


def main():
    settings = load_settings()
    configure_logging(settings["logging"]["level"])
    # QtWebEngine is created after the application, it needs shared GL contexts
    QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)
    app = TurbonavApp(sys.argv)
    args = app.arguments()[1:]
    start_url = args[0] if args else settings["start_url"]
    logger.info("Starting at %s", start_url)
    win = MainWindow(settings=settings)
    win.open(start_url)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
