import re
from dataclasses import dataclass, field
from typing import Any

COLOR_FIELDS = ("color", "fill", "stroke")
SHAPE_COLOR_FIELDS = ("fill", "stroke")

_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")


@dataclass(frozen=True)
class ColorValidation:
    is_valid: bool
    invalid_colors: list[str] = field(default_factory=list)


def is_grayscale_color(color: Any) -> bool:
    """True when a 6-digit hex colour has equal R, G and B channels.

    Anything that is not a well-formed 6-digit hex string (with an optional
    leading '#') is let through; format errors are not this check's concern.
    """
    if not color or not isinstance(color, str):
        return True

    hex_value = color.removeprefix("#")
    if not _HEX6.fullmatch(hex_value):
        return True

    r = int(hex_value[0:2], 16)
    g = int(hex_value[2:4], 16)
    b = int(hex_value[4:6], 16)
    return r == g == b


def _collect(values: dict[str, Any], keys: tuple[str, ...], out: list[str]) -> None:
    for key in keys:
        value = values.get(key)
        if value and not is_grayscale_color(value):
            out.append(value)


def validate_grayscale_colors(parameters: dict[str, Any] | None) -> ColorValidation:
    invalid_colors: list[str] = []
    if not isinstance(parameters, dict):
        return ColorValidation(is_valid=True)

    _collect(parameters, COLOR_FIELDS, invalid_colors)

    # templateData comes straight from the model and may be fabricated
    template_data = parameters.get("templateData")
    shapes = template_data.get("shapes") if isinstance(template_data, dict) else None
    if isinstance(shapes, list):
        for shape in shapes:
            if isinstance(shape, dict):
                _collect(shape, SHAPE_COLOR_FIELDS, invalid_colors)

    return ColorValidation(is_valid=not invalid_colors, invalid_colors=invalid_colors)
