# turbonav/navigation_stack.py
from typing import Dict, List, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QStackedWidget

from .bridge.navigation import NavigationBridge
from .logging_config import get_logger
from .models.location import Location
from .models.unit import NavigableUnit
from .runtime.surface import RuntimeSurface
from .transport.base import Transport
from .unit_view import UnitView

logger = get_logger(__name__)


class NavigationStack(QStackedWidget):
    """
    Push/pop stack of unit views sharing one runtime surface.
    Acts as the bridges' host: new visits are pushed, and popping back
    re-presents the revealed unit, which replays it into the runtime.
    """

    location_changed = Signal(str)
    depth_changed = Signal(int)

    def __init__(self, surface: RuntimeSurface, transport: Transport, parent=None):
        super().__init__(parent)
        self.surface = surface
        self.transport = transport
        self._views: List[UnitView] = []
        self._by_unit: Dict[int, UnitView] = {}

    @property
    def depth(self) -> int:
        return len(self._views)

    @property
    def current_view(self) -> Optional[UnitView]:
        return self._views[-1] if self._views else None

    # ---------- push / pop ----------
    def present_unit(self, location: Location) -> UnitView:
        unit = NavigableUnit(location=location, surface=self.surface)
        bridge = NavigationBridge(unit, host=self, transport=self.transport)
        view = UnitView(bridge)
        view.retry_requested.connect(bridge.retry)

        self._views.append(view)
        self._by_unit[id(unit)] = view
        self.addWidget(view)
        self.setCurrentWidget(view)
        self.location_changed.emit(location.url)
        self.depth_changed.emit(self.depth)
        return view

    def pop(self) -> None:
        if len(self._views) < 2:
            return
        popped = self._views.pop()
        revealed = self._views[-1]
        # revealed view takes the web view (and the surface) before the old one goes away
        self.setCurrentWidget(revealed)
        self._destroy(popped)
        self.location_changed.emit(revealed.bridge.unit.location.url)
        self.depth_changed.emit(self.depth)

    def _destroy(self, view: UnitView) -> None:
        view.bridge.dispose()
        self._by_unit.pop(id(view.bridge.unit), None)
        web_view = self.surface.widget
        if web_view.parent() is not None and view.isAncestorOf(web_view):
            web_view.setParent(None)
        self.removeWidget(view)
        view.deleteLater()

    def _view_for(self, unit: NavigableUnit) -> Optional[UnitView]:
        view = self._by_unit.get(id(unit))
        if view is None:
            logger.debug("No view for %s", unit)
        return view

    # ---------- bridge host hooks ----------
    def show_loading(self, unit: NavigableUnit) -> None:
        view = self._view_for(unit)
        if view:
            view.show_loading()

    def hide_loading(self, unit: NavigableUnit) -> None:
        view = self._view_for(unit)
        if view:
            view.hide_loading()

    def show_error(self, unit: NavigableUnit, reason: str) -> None:
        view = self._view_for(unit)
        if view:
            view.show_error(reason)

    def unit_location_changed(self, unit: NavigableUnit, location: Location) -> None:
        if self.current_view and self.current_view.bridge.unit is unit:
            self.location_changed.emit(location.url)
