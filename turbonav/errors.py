# turbonav/errors.py


class TurbonavError(Exception):
    """Base class for errors raised inside turbonav."""


class InvalidLocation(TurbonavError, ValueError):
    pass


class MalformedMessage(TurbonavError, ValueError):
    """An inbound runtime message without a usable name/data pair."""


class UnknownEngine(TurbonavError, ValueError):
    pass
