from typing import Optional

import pytest

from turbonav.models.location import Location
from turbonav.runtime.surface import RuntimeSurface

from conftest import FakeSurface


class HeadlessSurface(RuntimeSurface):
    """Implements everything except the widget hosts reparent."""

    def current_location(self) -> Optional[Location]:
        return None

    def load_location(self, location: Location) -> None:
        pass

    def evaluate(self, script: str) -> None:
        pass


def test_surface_must_provide_a_widget():
    with pytest.raises(TypeError):
        HeadlessSurface()


def test_content_flag_follows_finished_engine_loads():
    surface = FakeSurface()
    assert not surface.has_content

    surface.load_location(Location("https://site/1"))
    assert not surface.has_content
    assert surface.current_location() == Location("https://site/1")

    surface.navigation_finished()
    assert surface.has_content


def test_content_loaded_marks_runtime_response():
    surface = FakeSurface()
    surface.content_loaded()
    assert surface.has_content
