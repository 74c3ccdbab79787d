import logging
from typing import Any

from .colors import validate_grayscale_colors
from .config import Settings
from .errors import ErrorKind, PipelineError
from .llm import invoke_model, resolve_client
from .models import CommandRequest, command_to_dict
from .parsing import extract_json_payload, validate_command
from .prompts import build_prompt
from .templates import resolve_template

logger = logging.getLogger(__name__)

COLOR_POLICY_MESSAGE = (
    "Be more goth! Only black, white, and shades of grey are allowed on this "
    "canvas. Choose a grayscale color instead."
)


def enforce_color_policy(command: Any) -> None:
    parameters = command_to_dict(command).get("parameters")
    validation = validate_grayscale_colors(parameters)
    if not validation.is_valid:
        logger.info("Rejected non-grayscale colors: %s", validation.invalid_colors)
        raise PipelineError(ErrorKind.INVALID_ARGUMENT, COLOR_POLICY_MESSAGE)


def interpret_command(
    request: CommandRequest,
    *,
    client: Any | None = None,
    settings: Settings | None = None,
) -> Any:
    settings = settings or Settings()
    resolved_client = resolve_client(client=client, api_key=settings.api_key, timeout=settings.timeout)

    prompt = build_prompt(request)
    raw = invoke_model(
        prompt,
        client=resolved_client,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )

    command = validate_command(extract_json_payload(raw), raw=raw)
    enforce_color_policy(command)
    resolve_template(command)

    logger.debug("Parsed command: %s - %s", command.category, command.action)
    return command
