# turbonav/bridge/fetch.py
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..logging_config import get_logger
from ..models.location import Location
from ..transport.base import FetchHandle, Transport

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    body: str


@dataclass(frozen=True)
class FetchFailure:
    reason: str
    status: Optional[int] = None


FetchResult = Union[FetchSuccess, FetchFailure]
CompletionCallback = Callable[[FetchResult], None]


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


class PendingFetch:
    """One issued fetch. Delivers at most once, and never once canceled."""

    def __init__(self, location: Location, on_complete: CompletionCallback):
        self.location = location
        self.on_complete = on_complete
        self.handle: Optional[FetchHandle] = None
        self.canceled = False
        self.done = False

    def cancel(self) -> None:
        if self.canceled or self.done:
            return
        self.canceled = True
        if self.handle is not None:
            self.handle.cancel()


class FetchCoordinator:
    """
    Owns at most one in-flight navigation fetch.
    load() cancels whatever was outstanding before issuing the new request,
    and a superseded fetch never reaches its completion callback even if the
    transport still answers for it.
    """

    def __init__(self, transport: Transport):
        self.transport = transport
        self._active: Optional[PendingFetch] = None

    @property
    def in_flight(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> Optional[PendingFetch]:
        return self._active

    def load(self, location: Location, on_complete: CompletionCallback) -> PendingFetch:
        self.cancel()
        pending = PendingFetch(location, on_complete)
        self._active = pending
        logger.debug("GET %s", location)
        handle = self.transport.get(
            str(location),
            lambda status, body: self._on_response(pending, status, body),
            lambda reason: self._on_error(pending, reason),
        )
        # the transport may answer synchronously, or the callback may supersede us
        if pending.canceled:
            handle.cancel()
        elif not pending.done:
            pending.handle = handle
        return pending

    def cancel(self) -> None:
        pending, self._active = self._active, None
        if pending is not None:
            logger.debug("Canceling fetch for %s", pending.location)
            pending.cancel()

    def _on_response(self, pending: PendingFetch, status: int, body: bytes) -> None:
        if not is_success_status(status):
            self._deliver(pending, FetchFailure(f"HTTP {status}", status))
            return
        try:
            text = bytes(body).decode("utf-8")
        except UnicodeDecodeError as e:
            self._deliver(pending, FetchFailure(f"undecodable body: {e}", status))
            return
        self._deliver(pending, FetchSuccess(text))

    def _on_error(self, pending: PendingFetch, reason: str) -> None:
        self._deliver(pending, FetchFailure(reason))

    def _deliver(self, pending: PendingFetch, result: FetchResult) -> None:
        if pending.canceled or pending.done or pending is not self._active:
            logger.debug("Dropping stale completion for %s", pending.location)
            return
        pending.done = True
        self._active = None
        if isinstance(result, FetchFailure):
            logger.warning("Fetch for %s failed: %s", pending.location, result.reason)
        pending.on_complete(result)
