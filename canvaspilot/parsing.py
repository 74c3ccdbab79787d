import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from .errors import ErrorKind, PipelineError
from .models import PARSED_COMMAND

logger = logging.getLogger(__name__)

INVALID_FORMAT = "AI returned invalid response format"
MISSING_FIELDS = "AI response missing required fields"

_JSON_FENCE_RE = re.compile(r"```json\n(.*?)\n```", re.DOTALL)
_ANY_FENCE_RE = re.compile(r"```[^\n]*\n(.*?)\n```", re.DOTALL)


def extract_json_payload(raw: str) -> str:
    """Isolate the JSON payload from a raw completion.

    A ```json fence wins over any other fence; with no fence the whole
    text is used. The result is not checked for JSON-ness here.
    """
    content = raw
    if "```json" in content:
        match = _JSON_FENCE_RE.search(content)
        if match:
            content = match.group(1)
    elif "```" in content:
        match = _ANY_FENCE_RE.search(content)
        if match:
            content = match.group(1)
    return content.strip()


def validate_command(payload: str, raw: str | None = None) -> Any:
    raw = payload if raw is None else raw

    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.error("Failed to parse AI response: %s", raw)
        raise PipelineError(ErrorKind.INTERNAL, INVALID_FORMAT) from None

    if not isinstance(data, dict) or not data.get("category") or not data.get("action"):
        raise PipelineError(ErrorKind.INTERNAL, MISSING_FIELDS)

    try:
        return PARSED_COMMAND.validate_python(data)
    except ValidationError as e:
        logger.error("AI response did not match command schema: %s\n%s", e, raw)
        raise PipelineError(ErrorKind.INTERNAL, INVALID_FORMAT) from None
