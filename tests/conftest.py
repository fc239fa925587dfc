import pytest
from typing import Optional

from turbonav.bridge.navigation import NavigationBridge
from turbonav.models.location import Location
from turbonav.models.unit import NavigableUnit
from turbonav.runtime.surface import RuntimeSurface
from turbonav.transport.base import FetchHandle, Transport


class FakeRequest(FetchHandle):
    """A request whose answer the test delivers, in whatever order it likes."""

    def __init__(self, url, on_response, on_error):
        self.url = url
        self._on_response = on_response
        self._on_error = on_error
        self.canceled = False

    def cancel(self) -> None:
        self.canceled = True

    # deliberately ignores `canceled`: simulates a late answer racing the cancel
    def respond(self, status: int = 200, body: bytes | str = b"") -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._on_response(status, body)

    def fail(self, reason: str = "connection refused") -> None:
        self._on_error(reason)


class FakeTransport(Transport):
    def __init__(self) -> None:
        self.requests: list[FakeRequest] = []

    def get(self, url, on_response, on_error) -> FakeRequest:
        request = FakeRequest(url, on_response, on_error)
        self.requests.append(request)
        return request

    @property
    def last(self) -> FakeRequest:
        return self.requests[-1]


class FakeSurface(RuntimeSurface):
    def __init__(self, location: Optional[str] = None) -> None:
        super().__init__()
        self._location = Location(location) if location else None
        self.has_content = location is not None
        self.scripts: list[str] = []
        self.loaded: list[Location] = []
        # (script, listener in the router slot when it was evaluated)
        self.evaluated_by: list[tuple[str, object]] = []

    @property
    def widget(self):
        return None

    def current_location(self) -> Optional[Location]:
        return self._location

    def load_location(self, location: Location) -> None:
        self.loaded.append(location)
        self._location = location

    def evaluate(self, script: str) -> None:
        self.scripts.append(script)
        self.evaluated_by.append((script, self.router.listener))


class FakeHost:
    def __init__(self) -> None:
        self.presented: list[Location] = []
        self.loading_shown: list[NavigableUnit] = []
        self.loading_hidden: list[NavigableUnit] = []
        self.errors: list[tuple[NavigableUnit, str]] = []
        self.location_changes: list[tuple[NavigableUnit, Location]] = []

    def present_unit(self, location: Location) -> None:
        self.presented.append(location)

    def show_loading(self, unit: NavigableUnit) -> None:
        self.loading_shown.append(unit)

    def hide_loading(self, unit: NavigableUnit) -> None:
        self.loading_hidden.append(unit)

    def show_error(self, unit: NavigableUnit, reason: str) -> None:
        self.errors.append((unit, reason))

    def unit_location_changed(self, unit: NavigableUnit, location: Location) -> None:
        self.location_changes.append((unit, location))


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def make_bridge(surface, host, transport):
    """Return a factory building a bridge for a URL on the shared fakes.

    Usage:
        bridge = make_bridge("https://site/1")
    """

    def _factory(url: str) -> NavigationBridge:
        unit = NavigableUnit(location=Location(url), surface=surface)
        return NavigationBridge(unit, host=host, transport=transport)

    return _factory
