# turbonav/transport/qt_transport.py
from typing import Optional

from PySide6.QtCore import QObject, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from ..logging_config import get_logger
from .base import ErrorCallback, FetchHandle, ResponseCallback, Transport

logger = get_logger(__name__)


class QtFetchHandle(FetchHandle):
    def __init__(self, reply: QNetworkReply, on_response: ResponseCallback, on_error: ErrorCallback):
        self.reply = reply
        self._on_response = on_response
        self._on_error = on_error
        self._finished = False
        reply.finished.connect(self._on_finished)

    def cancel(self) -> None:
        if self._finished:
            return
        self._finished = True
        # abort() emits finished, disconnect first
        self.reply.finished.disconnect(self._on_finished)
        self.reply.abort()
        self.reply.deleteLater()

    def _on_finished(self) -> None:
        if self._finished:
            return
        self._finished = True
        reply = self.reply
        try:
            status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
            if status is None:
                self._on_error(reply.errorString())
                return
            self._on_response(int(status), bytes(reply.readAll().data()))
        finally:
            reply.deleteLater()


class QtTransport(Transport):
    """
    QNetworkAccessManager backed GET. Replies finish on the thread owning the
    manager, so create this on the GUI thread.
    """

    def __init__(self, timeout_ms: Optional[int] = None, parent: Optional[QObject] = None):
        self.manager = QNetworkAccessManager(parent)
        self.timeout_ms = timeout_ms

    def get(self, url: str, on_response: ResponseCallback, on_error: ErrorCallback) -> FetchHandle:
        request = QNetworkRequest(QUrl(url))
        request.setAttribute(
            QNetworkRequest.Attribute.RedirectPolicyAttribute,
            QNetworkRequest.RedirectPolicy.NoLessSafeRedirectPolicy,
        )
        if self.timeout_ms:
            request.setTransferTimeout(self.timeout_ms)
        reply = self.manager.get(request)
        return QtFetchHandle(reply, on_response, on_error)
