import json

import anthropic
import httpx
import pytest

from canvaspilot.config import Settings
from canvaspilot.errors import ErrorKind, PipelineError
from canvaspilot.interpreter import COLOR_POLICY_MESSAGE
from canvaspilot.service import parse_ai_command

GRID = {
    "category": "creation",
    "action": "create-multiple",
    "parameters": {"shapeType": "rectangle", "gridRows": 3, "gridCols": 3},
}


def _run(client, settings, data=None, auth_uid="user-1"):
    data = data if data is not None else {"userInput": "create a 3x3 grid of squares"}
    return parse_ai_command(data, auth_uid=auth_uid, client=client, settings=settings)


def _error(client, settings, **kwargs) -> PipelineError:
    with pytest.raises(PipelineError) as exc_info:
        _run(client, settings, **kwargs)
    return exc_info.value


def test_grid_command_end_to_end(fake_client, settings):
    client = fake_client(text=json.dumps(GRID))
    result = _run(client, settings)

    assert result == {"success": True, "command": GRID}
    assert len(client.calls) == 1
    prompt = client.calls[0]["messages"][0]["content"]
    assert "User command: create a 3x3 grid of squares" in prompt
    assert client.calls[0]["model"] == "test-model"


def test_fenced_response_with_context(fake_client, settings):
    client = fake_client(text='```json\n{"category": "manipulation", "action": "resize", "parameters": {"sizeMultiplier": 2}}\n```')
    data = {
        "userInput": "make it twice as big",
        "canvasContext": {"selectedShapeIds": ["s1"], "viewportCenter": {"x": 100, "y": 200}},
    }
    result = _run(client, settings, data=data)

    assert result["command"]["parameters"] == {"sizeMultiplier": 2.0}
    prompt = client.calls[0]["messages"][0]["content"]
    assert 'Selected shapes: ["s1"]' in prompt
    assert '{"x": 100.0, "y": 200.0}' in prompt


def test_extra_parameters_are_kept(fake_client, settings):
    payload = {"category": "layout", "action": "arrange", "parameters": {"arrangement": "grid", "columns": 4}}
    result = _run(fake_client(text=json.dumps(payload)), settings)
    assert result["command"]["parameters"] == {"arrangement": "grid", "columns": 4}


def test_template_is_attached(fake_client, settings):
    payload = {"category": "complex", "action": "create-template", "parameters": {"template": "navigationBar", "itemCount": 5}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]

    data = command["parameters"]["templateData"]
    assert data["name"] == "navigationBar"
    assert len([s for s in data["shapes"] if s["type"] == "text"]) == 5
    assert command["parameters"]["itemCount"] == 5


def test_unknown_template_still_succeeds(fake_client, settings):
    payload = {"category": "complex", "action": "create-template", "parameters": {"template": "rocket"}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert "templateData" not in command["parameters"]


def test_model_refusal_is_passed_through(fake_client, settings):
    payload = {"category": "utility", "action": "error", "parameters": {"message": "I cannot fulfill that request right now."}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command == payload


def test_unauthenticated_caller_is_rejected(fake_client, settings):
    client = fake_client(text=json.dumps(GRID))
    err = _error(client, settings, auth_uid=None)
    assert err.kind is ErrorKind.UNAUTHENTICATED
    assert client.calls == []


@pytest.mark.parametrize("data", [{}, {"userInput": ""}, {"userInput": 42}, "create a square"])
def test_bad_user_input_is_rejected(fake_client, settings, data):
    client = fake_client(text=json.dumps(GRID))
    err = _error(client, settings, data=data)
    assert err.kind is ErrorKind.INVALID_ARGUMENT
    assert client.calls == []


def test_oversized_input_rejected_before_network(fake_client, settings):
    client = fake_client(text=json.dumps(GRID))
    err = _error(client, settings, data={"userInput": "a" * 501})
    assert err.kind is ErrorKind.INVALID_ARGUMENT
    assert err.message == "Command too long (max 500 characters)"
    assert client.calls == []


def test_input_at_limit_is_accepted(fake_client, settings):
    assert _run(fake_client(text=json.dumps(GRID)), settings, data={"userInput": "a" * 500})["success"]


def test_malformed_context_rejected(fake_client, settings):
    client = fake_client(text=json.dumps(GRID))
    err = _error(client, settings, data={"userInput": "x", "canvasContext": {"viewportCenter": {"x": "left"}}})
    assert err.kind is ErrorKind.INVALID_ARGUMENT
    assert client.calls == []


def test_invalid_json_is_internal(fake_client, settings):
    err = _error(fake_client(text="Sure! I'd draw a grid."), settings)
    assert err.kind is ErrorKind.INTERNAL
    assert err.message == "AI returned invalid response format"
    assert "Sure!" not in err.message


def test_missing_fields_is_internal(fake_client, settings):
    err = _error(fake_client(text='{"parameters": {}}'), settings)
    assert err.kind is ErrorKind.INTERNAL
    assert err.message == "AI response missing required fields"


def test_colored_fill_is_rejected(fake_client, settings):
    payload = {"category": "style", "action": "recolor", "parameters": {"property": "fill", "fill": "#ff0000"}}
    err = _error(fake_client(text=json.dumps(payload)), settings)
    assert err.kind is ErrorKind.INVALID_ARGUMENT
    assert err.message == COLOR_POLICY_MESSAGE
    assert "#ff0000" not in err.message


def test_fabricated_template_colors_are_rejected(fake_client, settings):
    payload = {
        "category": "complex",
        "action": "create-template",
        "parameters": {"template": "loginForm", "templateData": {"shapes": [{"fill": "#00ff00"}]}},
    }
    err = _error(fake_client(text=json.dumps(payload)), settings)
    assert err.kind is ErrorKind.INVALID_ARGUMENT


def test_malformed_color_passes(fake_client, settings):
    payload = {"category": "creation", "action": "create", "parameters": {"shapeType": "circle", "color": "red"}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command["parameters"]["color"] == "red"


def test_api_key_failure_is_failed_precondition(fake_client, settings):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    error = anthropic.AuthenticationError("invalid x-api-key", response=httpx.Response(401, request=request), body=None)
    err = _error(fake_client(error=error), settings)
    assert err.kind is ErrorKind.FAILED_PRECONDITION
    assert err.message == "AI service configuration error"


def test_missing_credential_is_failed_precondition():
    err = _error(None, Settings(api_key=None))
    assert err.kind is ErrorKind.FAILED_PRECONDITION


def test_timeout_is_deadline_exceeded(fake_client, settings):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    err = _error(fake_client(error=anthropic.APITimeoutError(request=request)), settings)
    assert err.kind is ErrorKind.DEADLINE_EXCEEDED


def test_unexpected_failure_is_generic_internal(fake_client, settings):
    err = _error(fake_client(error=KeyError("choices")), settings)
    assert err.kind is ErrorKind.INTERNAL
    assert err.message == "Failed to parse command. Please try rephrasing."


def test_empty_output_is_generic_internal(fake_client, settings):
    err = _error(fake_client(text=""), settings)
    assert err.kind is ErrorKind.INTERNAL
    assert err.message == "Failed to parse command. Please try rephrasing."


@pytest.mark.parametrize(
    "payload",
    [
        {"category": "creation", "action": "create", "parameters": {"shapeType": "text", "text": 42}},
        {"category": "creation", "action": "create", "parameters": {"shapeType": "rectangle", "width": "50%"}},
        {"category": "creation", "action": "create-multiple", "parameters": {"shapeType": "text", "texts": ["A", 1]}},
        {"category": "deletion", "action": "delete", "parameters": {"target": ["s1", "s2"]}},
        {"category": "manipulation", "action": "resize", "parameters": {"sizeMultiplier": "double"}},
        {"category": "utility", "action": "undo", "parameters": []},
        {"category": "utility", "action": "undo", "parameters": None},
    ],
)
def test_parameters_pass_through_unchanged(fake_client, settings, payload):
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command == payload


def test_integer_sizes_stay_integers(fake_client, settings):
    payload = {"category": "creation", "action": "create-multiple", "parameters": {"count": 7, "width": 299, "height": 453}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command["parameters"]["width"] == 299
    assert type(command["parameters"]["width"]) is int


def test_non_numeric_item_count_uses_static_bar(fake_client, settings):
    payload = {"category": "complex", "action": "create-template", "parameters": {"template": "navigationBar", "itemCount": "lots"}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command["parameters"]["templateData"]["description"] == "Navigation bar with Home, About, Contact links"
    assert command["parameters"]["itemCount"] == "lots"


def test_non_string_template_is_soft_failure(fake_client, settings):
    payload = {"category": "complex", "action": "create-template", "parameters": {"template": ["loginForm"]}}
    command = _run(fake_client(text=json.dumps(payload)), settings)["command"]
    assert command == payload


@pytest.mark.parametrize("field", ["color", "fill", "stroke"])
def test_each_scanned_color_field_is_enforced(fake_client, settings, field):
    payload = {"category": "creation", "action": "create", "parameters": {"shapeType": "circle", field: "#12ab34"}}
    err = _error(fake_client(text=json.dumps(payload)), settings)
    assert err.kind is ErrorKind.INVALID_ARGUMENT
