from typing import Any

import anthropic
from anthropic import Anthropic

from .prompts import SYSTEM_PROMPT


class ModelServiceError(RuntimeError):
    """The model service call failed; the message is safe to classify on."""


class EmptyModelOutput(ValueError):
    def __init__(self):
        super().__init__("No text content found in model response")


def resolve_client(
    client: Any | None = None,
    api_key: str | None = None,
    timeout: float = 60.0,
) -> Any:
    if client is not None:
        return client
    if not api_key:
        raise ModelServiceError("API key is required when client is not provided")
    # a failed call is surfaced, never retried
    return Anthropic(api_key=api_key, timeout=timeout, max_retries=0)


def extract_text(resp) -> str:
    parts = []
    for block in resp.content:
        if hasattr(block, "text") and block.text:
            parts.append(block.text)
    raw_text = "".join(parts)
    if not raw_text.strip():
        raise EmptyModelOutput()
    return raw_text.strip()


def invoke_model(
    prompt: str,
    *,
    client: Any,
    model: str,
    max_tokens: int = 1000,
    temperature: float = 0.1,
) -> str:
    try:
        resp = client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
    except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
        raise ModelServiceError(f"Model service rejected the API key: {e}") from e
    except anthropic.APITimeoutError as e:
        raise ModelServiceError(f"Model service timeout: {e}") from e
    except anthropic.APIError as e:
        raise ModelServiceError(f"Model service request failed: {e}") from e

    return extract_text(resp)
