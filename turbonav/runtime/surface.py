# turbonav/runtime/surface.py
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

from ..bridge.router import MessageRouter, NavigationListener
from ..logging_config import get_logger
from ..models.location import Location

logger = get_logger(__name__)


class SurfaceOwner(NavigationListener, Protocol):
    def on_navigation_finished(self) -> None: ...

    def deactivate(self) -> None: ...


class RuntimeSurface(ABC):
    """
    The embedded web surface shared by every navigable unit.
    Exactly one owner at a time: transfer_to() moves the router's listener
    slot and engine events to the new owner and deactivates the old one.
    """

    def __init__(self) -> None:
        self.router = MessageRouter()
        self._owner: Optional[SurfaceOwner] = None
        # a page (engine load or runtime response) is on screen
        self.has_content = False

    @property
    def owner(self) -> Optional[SurfaceOwner]:
        return self._owner

    def owned_by(self, owner: object) -> bool:
        return owner is not None and self._owner is owner

    def transfer_to(self, owner: SurfaceOwner) -> Optional[SurfaceOwner]:
        previous = self._owner
        self._owner = owner
        self.router.attach(owner)
        if previous is not None and previous is not owner:
            logger.debug("Runtime surface moves from %s to %s", previous, owner)
            previous.deactivate()
        return previous

    def release(self, owner: SurfaceOwner) -> None:
        if self._owner is owner:
            self._owner = None
            self.router.detach(owner)

    # engine -> owner

    def receive_message(self, body: Any) -> None:
        self.router.handle_body(body)

    def content_loaded(self) -> None:
        self.has_content = True

    def navigation_finished(self) -> None:
        self.content_loaded()
        if self._owner is None:
            logger.debug("Navigation finished with no owner attached")
            return
        self._owner.on_navigation_finished()

    # engine operations

    @property
    @abstractmethod
    def widget(self) -> Any:
        """The view widget hosts reparent into the presented screen."""
        raise NotImplementedError

    @abstractmethod
    def current_location(self) -> Optional[Location]:
        """Location the engine has loaded, or None before the first load."""
        raise NotImplementedError

    @abstractmethod
    def load_location(self, location: Location) -> None:
        """Real engine navigation, bypassing the page runtime."""
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, script: str) -> None:
        raise NotImplementedError
