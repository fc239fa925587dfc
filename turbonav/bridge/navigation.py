# turbonav/bridge/navigation.py
from typing import Protocol

from ..logging_config import get_logger
from ..models.location import Location
from ..models.unit import NavigableUnit, UnitState
from ..runtime.surface import RuntimeSurface
from ..transport.base import Transport
from .commands import RuntimeCommandEmitter
from .fetch import FetchCoordinator, FetchFailure, FetchResult

logger = get_logger(__name__)


class Host(Protocol):
    """What the bridge needs from the application presenting units."""

    def present_unit(self, location: Location) -> None: ...

    def show_loading(self, unit: NavigableUnit) -> None: ...

    def hide_loading(self, unit: NavigableUnit) -> None: ...

    def show_error(self, unit: NavigableUnit, reason: str) -> None: ...

    def unit_location_changed(self, unit: NavigableUnit, location: Location) -> None: ...


class NavigationBridge:
    """
    Drives one navigable unit against the shared runtime surface.

    present() is the "about to appear" entry point. When no page has ever
    loaded in the surface the unit gets a real engine navigation (fresh load);
    otherwise the runtime is replayed: history.push first, then the fetched
    response is handed to loadResponse. Only the surface owner emits commands.
    """

    def __init__(self, unit: NavigableUnit, host: Host, transport: Transport):
        self.unit = unit
        self.host = host
        self.fetcher = FetchCoordinator(transport)
        self.commands = RuntimeCommandEmitter(self._evaluate)

    def __repr__(self) -> str:
        return f"NavigationBridge({self.unit})"

    @property
    def surface(self) -> RuntimeSurface:
        return self.unit.surface

    @property
    def state(self) -> UnitState:
        return self.unit.state

    @property
    def active(self) -> bool:
        return self.surface.owned_by(self)

    # ---------- lifecycle ----------
    def present(self) -> None:
        self.activate()
        unit = self.unit
        unit.state = UnitState.PRESENTING
        unit.failure = None
        self.host.show_loading(unit)

        if not self.surface.has_content:
            logger.info("Fresh load of %s", unit.location)
            unit.state = UnitState.FRESH_LOAD
            self.surface.load_location(unit.location)
        else:
            logger.info("Replaying %s (runtime at %s)", unit.location, self.surface.current_location())
            unit.state = UnitState.REPLAYING
            self.commands.emit_push_history(unit.location.url)
        self.fetcher.load(unit.location, self._on_fetch_complete)

    def retry(self) -> None:
        logger.info("Retrying %s", self.unit.location)
        self.present()

    def activate(self) -> None:
        """Take the surface (and its router slot) before anything is emitted."""
        self.surface.transfer_to(self)

    def deactivate(self) -> None:
        if self.fetcher.in_flight:
            logger.debug("%s lost the surface, canceling its fetch", self.unit)
        self.fetcher.cancel()

    def dispose(self) -> None:
        self.deactivate()
        self.surface.release(self)

    def mark_loaded(self) -> None:
        unit = self.unit
        if unit.state is UnitState.LOADED:
            return
        if unit.state is UnitState.LOAD_FAILED:
            logger.warning("%s finished loading in the engine, clearing failed fetch: %s", unit, unit.failure)
        unit.state = UnitState.LOADED
        unit.failure = None
        self.host.hide_loading(unit)

    # ---------- fetch ----------
    def _on_fetch_complete(self, result: FetchResult) -> None:
        if not self.active:
            logger.debug("%s is no longer active, ignoring fetch result", self.unit)
            return
        if isinstance(result, FetchFailure):
            self._load_failed(result.reason)
            return
        self.commands.emit_load_response(result.body)
        self.surface.content_loaded()
        self.mark_loaded()

    def _load_failed(self, reason: str) -> None:
        unit = self.unit
        if unit.state is UnitState.LOADED:
            logger.warning("%s already displayed, ignoring failed fetch: %s", unit, reason)
            return
        unit.state = UnitState.LOAD_FAILED
        unit.failure = reason
        self.host.show_error(unit, reason)

    def _evaluate(self, script: str) -> None:
        if not self.active:
            logger.warning("%s does not own the runtime surface, command dropped", self.unit)
            return
        self.surface.evaluate(script)

    # ---------- surface owner callbacks ----------
    def on_navigation_finished(self) -> None:
        self.mark_loaded()

    def on_visit_location(self, location: Location) -> None:
        logger.info("Visit %s from %s", location, self.unit.location)
        self.host.present_unit(location)

    def on_location_changed(self, location: Location) -> None:
        self.host.unit_location_changed(self.unit, location)
