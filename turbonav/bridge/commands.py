# turbonav/bridge/commands.py
import json
from dataclasses import dataclass
from typing import Any, Callable

from ..logging_config import get_logger

logger = get_logger(__name__)

LOAD_RESPONSE = "loadResponse"
PUSH_HISTORY = "history.push"

_TEMPLATES = {
    LOAD_RESPONSE: "Turbolinks.controller.loadResponse({})",
    PUSH_HISTORY: "Turbolinks.controller.history.push({})",
}


def json_stringify(value: Any) -> str:
    """Encode a single value as a JSON literal safe to splice into a script.

    Falls back to ``null`` when the value cannot be encoded.
    """
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error("Could not encode runtime command argument: %s", e)
        return "null"


@dataclass(frozen=True)
class RuntimeCommand:
    kind: str
    argument: str  # already JSON encoded
    script: str

    @classmethod
    def build(cls, kind: str, value: Any) -> "RuntimeCommand":
        argument = json_stringify(value)
        return cls(kind=kind, argument=argument, script=_TEMPLATES[kind].format(argument))


class RuntimeCommandEmitter:
    """Builds Turbolinks controller calls and hands them to ``evaluate``."""

    def __init__(self, evaluate: Callable[[str], None]):
        self.evaluate = evaluate

    def emit_load_response(self, body: str) -> RuntimeCommand:
        return self._emit(RuntimeCommand.build(LOAD_RESPONSE, body))

    def emit_push_history(self, url: str) -> RuntimeCommand:
        return self._emit(RuntimeCommand.build(PUSH_HISTORY, str(url)))

    def _emit(self, command: RuntimeCommand) -> RuntimeCommand:
        logger.debug("Runtime command %s (%d chars)", command.kind, len(command.argument))
        self.evaluate(command.script)
        return command
