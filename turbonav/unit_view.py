# turbonav/unit_view.py
from PySide6.QtCore import QPropertyAnimation, Qt, Signal
from PySide6.QtWidgets import (
    QGraphicsOpacityEffect, QLabel, QProgressBar, QPushButton, QStackedLayout, QVBoxLayout, QWidget
)

from .bridge.navigation import NavigationBridge

FADE_MS = 200


class UnitView(QWidget):
    """Screen for one navigable unit. Borrows the shared web view while current."""

    retry_requested = Signal()

    def __init__(self, bridge: NavigationBridge, parent=None):
        super().__init__(parent)
        self.bridge = bridge
        self._fade = None

        self._layers = QStackedLayout(self)
        self._layers.setStackingMode(QStackedLayout.StackingMode.StackAll)

        self._content = QWidget()
        self._content_layout = QVBoxLayout(self._content)
        self._content_layout.setContentsMargins(0, 0, 0, 0)
        self._layers.addWidget(self._content)

        self.loading_indicator = QProgressBar()
        self.loading_indicator.setRange(0, 0)  # busy
        self.loading_indicator.setTextVisible(False)
        self.loading_indicator.setMaximumWidth(160)
        self._loading_panel = self._centered(self.loading_indicator)
        self._loading_opacity = QGraphicsOpacityEffect(self._loading_panel)
        self._loading_panel.setGraphicsEffect(self._loading_opacity)
        self._layers.addWidget(self._loading_panel)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setAlignment(Qt.AlignCenter)
        retry_btn = QPushButton("Retry")
        retry_btn.clicked.connect(self.retry_requested.emit)
        self._error_panel = self._centered(self.error_label, retry_btn)
        self._layers.addWidget(self._error_panel)

        self._loading_panel.hide()
        self._error_panel.hide()

    def _centered(self, *widgets: QWidget) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.addStretch()
        for w in widgets:
            layout.addWidget(w, 0, Qt.AlignCenter)
        layout.addStretch()
        return panel

    # viewWillAppear
    def showEvent(self, event):
        super().showEvent(event)
        if event.spontaneous():
            return  # window restored, not a navigation
        self.insert_web_view()
        self.bridge.present()

    def insert_web_view(self) -> None:
        web_view = self.bridge.surface.widget
        if web_view.parent() is not self._content:
            self._content_layout.addWidget(web_view)
        web_view.show()

    def show_loading(self) -> None:
        if self._fade is not None:
            self._fade.stop()
        self._error_panel.hide()
        self._loading_opacity.setOpacity(1.0)
        self._loading_panel.show()
        self._loading_panel.raise_()
        self._content.hide()

    def hide_loading(self) -> None:
        self._error_panel.hide()
        self._content.show()
        if not self._loading_panel.isVisible():
            return
        self._fade = QPropertyAnimation(self._loading_opacity, b"opacity", self)
        self._fade.setDuration(FADE_MS)
        self._fade.setStartValue(1.0)
        self._fade.setEndValue(0.0)
        self._fade.finished.connect(self._loading_panel.hide)
        self._fade.start()

    def show_error(self, reason: str) -> None:
        self._loading_panel.hide()
        self._content.hide()
        self.error_label.setText(f"Could not load {self.bridge.unit.location}\n{reason}")
        self._error_panel.show()
        self._error_panel.raise_()
