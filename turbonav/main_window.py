# turbonav/main_window.py
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QLineEdit, QMainWindow, QToolBar

from .address_bar import AddressBarController
from .models.location import Location
from .navigation_stack import NavigationStack
from .runtime.factory import get_runtime_surface
from .transport.qt_transport import QtTransport


class MainWindow(QMainWindow):
    def __init__(self, settings: dict, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Turbonav")
        self.resize(1024, 768)

        runtime = settings["runtime"]
        # one surface for the whole process, handed from unit to unit
        self.surface = get_runtime_surface(
            runtime["engine"],
            message_handler=runtime["message_handler"],
            script_path=runtime["script"],
        )
        self.transport = QtTransport(timeout_ms=settings["network"]["timeout_ms"], parent=self)
        self.stack = NavigationStack(self.surface, self.transport)

        self.back_action = QAction("Back", self)
        self.back_action.setShortcut(QKeySequence.StandardKey.Back)
        self.back_action.setEnabled(False)
        self.back_action.triggered.connect(self.stack.pop)
        self.stack.depth_changed.connect(lambda depth: self.back_action.setEnabled(depth > 1))

        self.address_bar = QLineEdit()
        self.address_controller = AddressBarController(self.stack)
        self.address_controller.bind(self.address_bar)

        toolbar = QToolBar()
        toolbar.setMovable(False)
        toolbar.addAction(self.back_action)
        toolbar.addWidget(self.address_bar)
        self.addToolBar(toolbar)

        self.setCentralWidget(self.stack)

    def open(self, url: str) -> None:
        self.stack.present_unit(Location.from_user_text(url))
