# turbonav/bridge/router.py
from typing import Any, Optional, Protocol

from ..errors import InvalidLocation, MalformedMessage
from ..logging_config import get_logger
from ..models.location import Location
from ..models.message import InboundMessage, KNOWN_MESSAGES, VISIT_LOCATION

logger = get_logger(__name__)


class NavigationListener(Protocol):
    def on_visit_location(self, location: Location) -> None: ...

    def on_location_changed(self, location: Location) -> None: ...


class MessageRouter:
    """
    Routes messages posted by the page runtime to a single listener.
    Whoever owns the runtime surface is the listener; attach() replaces the
    previous one. Nothing is buffered while the slot is empty.
    """

    def __init__(self) -> None:
        self._listener: Optional[NavigationListener] = None

    @property
    def listener(self) -> Optional[NavigationListener]:
        return self._listener

    def attach(self, listener: NavigationListener) -> None:
        self._listener = listener

    def detach(self, listener: NavigationListener | None = None) -> None:
        """Empty the slot (only if it still holds ``listener``, when given)."""
        if listener is None or self._listener is listener:
            self._listener = None

    def handle_body(self, body: Any) -> None:
        try:
            message = InboundMessage.from_body(body)
        except MalformedMessage as e:
            logger.warning("Dropping malformed runtime message: %s", e)
            return
        self.handle_message(message.name, message.data)

    def handle_message(self, name: str, payload: str) -> None:
        if name not in KNOWN_MESSAGES:
            logger.info("Unhandled message: %s: %s", name, payload)
            return
        try:
            location = Location.parse(payload)
        except InvalidLocation as e:
            logger.warning("Ignoring %s message: %s", name, e)
            return

        listener = self._listener
        if listener is None:
            logger.debug("No listener attached, dropping %s %s", name, location)
            return
        if name == VISIT_LOCATION:
            listener.on_visit_location(location)
        else:
            listener.on_location_changed(location)
