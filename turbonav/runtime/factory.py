# turbonav/runtime/factory.py
from typing import Optional

from ..errors import UnknownEngine
from .surface import RuntimeSurface

DEFAULT_ENGINE = "qt"


def get_runtime_surface(
    engine: Optional[str] = None,
    message_handler: str = "turbolinks",
    script_path: Optional[str] = None,
) -> RuntimeSurface:
    if engine is None:
        engine = DEFAULT_ENGINE
    engine = engine.lower()
    # QtWebEngine is the only engine wired up
    if engine == "qt":
        from .qt_surface import QtRuntimeSurface
        return QtRuntimeSurface(message_handler=message_handler, script_path=script_path)
    raise UnknownEngine(f"Unknown runtime engine: {engine}")
