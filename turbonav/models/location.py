# turbonav/models/location.py
import os
import urllib.parse
from dataclasses import dataclass

from ..errors import InvalidLocation


@dataclass(frozen=True)
class Location:
    url: str  # absolute URL, as received

    def __str__(self) -> str:
        return self.url

    @property
    def scheme(self) -> str:
        return urllib.parse.urlsplit(self.url).scheme

    @property
    def host(self) -> str:
        return urllib.parse.urlsplit(self.url).hostname or ""

    @classmethod
    def parse(cls, text: str) -> "Location":
        """Strict parse used for URLs coming from the page runtime.

        Raises InvalidLocation for anything that is not an absolute URL.
        """
        if not isinstance(text, str) or not text:
            raise InvalidLocation(f"empty location: {text!r}")
        if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
            raise InvalidLocation(f"location contains whitespace or control characters: {text!r}")
        try:
            parts = urllib.parse.urlsplit(text)
            # port is validated lazily by urllib
            parts.port
        except ValueError as e:
            raise InvalidLocation(f"unparseable location {text!r}: {e}") from e
        if not parts.scheme:
            raise InvalidLocation(f"location has no scheme: {text!r}")
        if parts.scheme in ("http", "https") and not parts.netloc:
            raise InvalidLocation(f"location has no host: {text!r}")
        return cls(url=text)

    @classmethod
    def from_user_text(cls, text: str) -> "Location":
        """Lenient parse for typed addresses: bare domains become http://."""
        text = text.strip()
        if text.startswith("http://") or text.startswith("https://"):
            return cls.parse(text)
        if text.startswith("file://"):
            return cls.parse(text)
        if " " not in text and "." in text and not os.path.exists(text):
            return cls.parse("http://" + text)
        if text.startswith("localhost"):
            return cls.parse("http://" + text)
        raise InvalidLocation(f"not a web address: {text!r}")
