"""Request-handler entry point for command interpretation.

Every failure leaves this module as a classified `PipelineError`; raw model
output and internal exception text never reach the caller.
"""

import logging
from typing import Any

from pydantic import ValidationError

from .config import Settings
from .errors import ErrorKind, PipelineError, classify_error
from .interpreter import interpret_command
from .models import MAX_INPUT_LENGTH, CommandRequest, command_to_dict

logger = logging.getLogger(__name__)


def build_request(data: Any) -> CommandRequest:
    if not isinstance(data, dict):
        raise PipelineError(ErrorKind.INVALID_ARGUMENT, "Request data must be an object")

    user_input = data.get("userInput")
    if not user_input or not isinstance(user_input, str):
        raise PipelineError(ErrorKind.INVALID_ARGUMENT, "userInput must be a string")
    if len(user_input) > MAX_INPUT_LENGTH:
        raise PipelineError(
            ErrorKind.INVALID_ARGUMENT,
            f"Command too long (max {MAX_INPUT_LENGTH} characters)",
        )

    try:
        return CommandRequest.model_validate(
            {"userInput": user_input, "canvasContext": data.get("canvasContext") or {}}
        )
    except ValidationError:
        raise PipelineError(ErrorKind.INVALID_ARGUMENT, "canvasContext is malformed") from None


def parse_ai_command(
    data: Any,
    *,
    auth_uid: str | None,
    client: Any | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    if not auth_uid:
        raise PipelineError(
            ErrorKind.UNAUTHENTICATED,
            "User must be authenticated to use AI commands",
        )

    request = build_request(data)

    try:
        command = interpret_command(request, client=client, settings=settings)
    except PipelineError as e:
        logger.warning("Command rejected (%s): %s", e.kind.value, e.message)
        raise
    except Exception as e:
        logger.exception("Error parsing AI command")
        raise classify_error(e) from None

    return {"success": True, "command": command_to_dict(command)}
