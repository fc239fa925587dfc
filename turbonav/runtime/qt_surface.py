# turbonav/runtime/qt_surface.py
import json
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QFile, QIODevice, QObject, QUrl, Slot
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineCore import QWebEngineScript
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QWidget

from ..logging_config import get_logger
from ..models.location import Location
from .surface import RuntimeSurface

logger = get_logger(__name__)

QWEBCHANNEL_JS = ":/qtwebchannel/qwebchannel.js"

# Exposes window.webkit.messageHandlers[<name>].postMessage(body) on top of
# QWebChannel. Bodies posted before the channel is up are queued.
MESSAGE_SHIM_JS = """
(function() {
  var name = __HANDLER__;
  var queue = [];
  var handler = null;
  function post(body) {
    if (handler) { handler.postMessage(JSON.stringify(body)); } else { queue.push(body); }
  }
  window.webkit = window.webkit || {};
  window.webkit.messageHandlers = window.webkit.messageHandlers || {};
  window.webkit.messageHandlers[name] = { postMessage: post };
  new QWebChannel(qt.webChannelTransport, function(channel) {
    handler = channel.objects[name];
    queue.splice(0).forEach(post);
  });
})();
"""


class ScriptMessageHandler(QObject):
    """QWebChannel object the page posts its messages to."""

    def __init__(self, surface: "QtRuntimeSurface", parent=None):
        super().__init__(parent)
        self._surface = surface

    @Slot(str)
    def postMessage(self, payload: str) -> None:
        try:
            body = json.loads(payload)
        except ValueError:
            logger.warning("Dropping runtime message that is not JSON: %r", payload[:200])
            return
        self._surface.receive_message(body)


def _read_resource(path: str) -> str:
    f = QFile(path)
    if not f.open(QIODevice.OpenModeFlag.ReadOnly):
        raise FileNotFoundError(path)
    try:
        return bytes(f.readAll().data()).decode("utf-8")
    finally:
        f.close()


def _make_script(name: str, source: str, point: QWebEngineScript.InjectionPoint) -> QWebEngineScript:
    script = QWebEngineScript()
    script.setName(name)
    script.setSourceCode(source)
    script.setInjectionPoint(point)
    script.setWorldId(QWebEngineScript.ScriptWorldId.MainWorld)
    script.setRunsOnSubFrames(False)
    return script


class QtRuntimeSurface(RuntimeSurface):
    def __init__(self, message_handler: str = "turbolinks", script_path: Optional[str] = None):
        super().__init__()
        self.view = QWebEngineView()
        self.message_handler = message_handler

        self._handler = ScriptMessageHandler(self, self.view)
        self._channel = QWebChannel(self.view.page())
        self._channel.registerObject(message_handler, self._handler)
        self.view.page().setWebChannel(self._channel)

        self._install_scripts(script_path)
        self.view.loadFinished.connect(self._on_load_finished)

    def _install_scripts(self, script_path: Optional[str]) -> None:
        scripts = self.view.page().scripts()
        shim = _read_resource(QWEBCHANNEL_JS) + MESSAGE_SHIM_JS.replace(
            "__HANDLER__", json.dumps(self.message_handler)
        )
        scripts.insert(_make_script("turbonav-channel", shim, QWebEngineScript.InjectionPoint.DocumentCreation))
        if script_path:
            source = Path(script_path).expanduser().read_text(encoding="utf-8")
            scripts.insert(_make_script("turbonav-app", source, QWebEngineScript.InjectionPoint.DocumentReady))
            logger.info("Injecting runtime script %s", script_path)
        else:
            logger.warning("No runtime script configured; pages must bundle Turbolinks themselves")

    @property
    def widget(self) -> QWidget:
        return self.view

    def current_location(self) -> Optional[Location]:
        url = self.view.url()
        if url.isEmpty():
            return None
        return Location(url.toString())

    def load_location(self, location: Location) -> None:
        logger.debug("Engine load %s", location)
        self.view.setUrl(QUrl(str(location)))

    def evaluate(self, script: str) -> None:
        self.view.page().runJavaScript(script)

    def _on_load_finished(self, ok: bool) -> None:
        if not ok:
            logger.warning("Engine navigation to %s did not finish", self.view.url().toString())
            return
        self.navigation_finished()
