import json

import pytest

from turbonav.bridge.commands import (
    LOAD_RESPONSE, PUSH_HISTORY, RuntimeCommand, RuntimeCommandEmitter, json_stringify
)


def _argument(script: str, prefix: str) -> str:
    assert script.startswith(prefix + "(") and script.endswith(")")
    return script[len(prefix) + 1:-1]


@pytest.fixture
def evaluated():
    return []


@pytest.fixture
def emitter(evaluated):
    return RuntimeCommandEmitter(evaluated.append)


def test_load_response_escapes_quotes(emitter, evaluated):
    emitter.emit_load_response('a"b')

    assert evaluated == ['Turbolinks.controller.loadResponse("a\\"b")']
    arg = _argument(evaluated[0], "Turbolinks.controller.loadResponse")
    assert json.loads(arg) == 'a"b'


def test_push_history_command(emitter, evaluated):
    command = emitter.emit_push_history("https://site/2")

    assert command.kind == PUSH_HISTORY
    assert evaluated == ['Turbolinks.controller.history.push("https://site/2")']


@pytest.mark.parametrize(
    "body",
    [
        "<html>\n<body onload='x()'>\t</body></html>",
        "line\u2028separator\u2029paragraph",
        "back\\slash and ); alert(1); (\"",
        "nul\x00 and bell\x07",
        "café \U0001F600",
    ],
)
def test_bodies_stay_a_single_string_literal(emitter, evaluated, body):
    emitter.emit_load_response(body)

    arg = _argument(evaluated[0], "Turbolinks.controller.loadResponse")
    assert json.loads(arg) == body
    assert "\n" not in arg and "\u2028" not in arg and "\x00" not in arg


def test_unencodable_value_falls_back_to_null():
    assert json_stringify(object()) == "null"
    assert json_stringify(float("nan")) == "null"

    command = RuntimeCommand.build(LOAD_RESPONSE, object())
    assert command.script == "Turbolinks.controller.loadResponse(null)"


def test_json_stringify_of_plain_string():
    assert json_stringify("https://x/y") == '"https://x/y"'
