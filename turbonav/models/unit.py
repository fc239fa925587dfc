# turbonav/models/unit.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .location import Location

if TYPE_CHECKING:
    from ..runtime.surface import RuntimeSurface


class UnitState(Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    FRESH_LOAD = "fresh_load"
    REPLAYING = "replaying"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"

    @property
    def loading(self) -> bool:
        return self in (UnitState.PRESENTING, UnitState.FRESH_LOAD, UnitState.REPLAYING)


@dataclass(eq=False)
class NavigableUnit:
    """One screen backed by the shared runtime surface."""
    location: Location
    surface: "RuntimeSurface" = field(repr=False)
    state: UnitState = UnitState.IDLE
    failure: Optional[str] = None

    def __str__(self) -> str:
        return f"unit<{self.location}>"
