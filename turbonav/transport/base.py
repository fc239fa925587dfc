# turbonav/transport/base.py
from abc import ABC, abstractmethod
from typing import Callable

ResponseCallback = Callable[[int, bytes], None]  # (status code, body)
ErrorCallback = Callable[[str], None]


class FetchHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Stop the request. No callback may fire afterwards."""
        raise NotImplementedError


class Transport(ABC):
    """
    Single-shot, cancelable, asynchronous GET.
    Implementations must invoke the callbacks on the thread that owns the UI
    and runtime surface, exactly once, and never after cancel().
    """

    @abstractmethod
    def get(self, url: str, on_response: ResponseCallback, on_error: ErrorCallback) -> FetchHandle:
        raise NotImplementedError
