# turbonav/address_bar.py
from PySide6.QtWidgets import QLineEdit

from .errors import InvalidLocation
from .logging_config import get_logger
from .models.location import Location
from .navigation_stack import NavigationStack

logger = get_logger(__name__)


class AddressBarController:
    def __init__(self, stack: NavigationStack):
        self.stack = stack
        self.line_edit: QLineEdit | None = None

    def bind(self, line_edit: QLineEdit) -> None:
        self.line_edit = line_edit
        self.line_edit.returnPressed.connect(self._on_submit)
        self.stack.location_changed.connect(self.set_location)

    def set_location(self, url: str) -> None:
        if self.line_edit:
            self.line_edit.setText(url)

    def _on_submit(self) -> None:
        if not self.line_edit:
            return
        text = self.line_edit.text()
        try:
            location = Location.from_user_text(text)
        except InvalidLocation as e:
            logger.info("Address bar: %s", e)
            current = self.stack.current_view
            if current is not None:
                self.set_location(current.bridge.unit.location.url)
            return
        self.stack.present_unit(location)
