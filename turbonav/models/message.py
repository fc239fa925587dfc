# turbonav/models/message.py
from dataclasses import dataclass
from typing import Any

from ..errors import MalformedMessage

VISIT_LOCATION = "visitLocation"
LOCATION_CHANGED = "locationChanged"
KNOWN_MESSAGES = frozenset({VISIT_LOCATION, LOCATION_CHANGED})


@dataclass(frozen=True)
class InboundMessage:
    name: str
    data: str

    @classmethod
    def from_body(cls, body: Any) -> "InboundMessage":
        """Decode a ``{"name": ..., "data": ...}`` body posted by the page."""
        if not isinstance(body, dict):
            raise MalformedMessage(f"message body is not an object: {body!r}")
        name = body.get("name")
        data = body.get("data")
        if not isinstance(name, str) or not isinstance(data, str):
            raise MalformedMessage(f"message body needs string name and data: {body!r}")
        return cls(name=name, data=data)
