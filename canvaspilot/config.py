import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "claude-opus-4-6"


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    max_tokens: int = 1000
    temperature: float = 0.1
    timeout: float = 60.0


def _env_number(name: str, default: float, cast: type) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got '{value}'") from exc


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()
    return Settings(
        api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        model=os.getenv("CANVASPILOT_MODEL") or DEFAULT_MODEL,
        max_tokens=int(_env_number("CANVASPILOT_MAX_TOKENS", 1000, int)),
        temperature=float(_env_number("CANVASPILOT_TEMPERATURE", 0.1, float)),
        timeout=float(_env_number("CANVASPILOT_TIMEOUT", 60.0, float)),
    )
