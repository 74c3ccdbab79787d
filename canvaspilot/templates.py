import logging
import math
from types import MappingProxyType
from typing import Any, Mapping

from .models import ComplexCommand, ComplexParameters, TemplateData

logger = logging.getLogger(__name__)

NAVIGATION_BAR = "navigationBar"
NAV_BAR_WIDTH = 800
MIN_NAV_ITEMS = 1
MAX_NAV_ITEMS = 10
NAV_ITEM_LABELS = (
    "Home",
    "About",
    "Services",
    "Contact",
    "Blog",
    "Shop",
    "Team",
    "Portfolio",
    "Careers",
    "Support",
)

_LABEL = {"fontFamily": "Arial", "fontStyle": "normal", "align": "left"}
_INPUT = {"type": "rectangle", "fill": "#ffffff", "stroke": "#cccccc", "strokeWidth": 1}
_CARD = {"type": "rectangle", "fill": "#ffffff", "stroke": "#e0e0e0", "strokeWidth": 1}

_RAW_TEMPLATES: dict[str, dict[str, Any]] = {
    "loginForm": {
        "description": "Login form with username, password fields, and button",
        "shapes": [
            {"type": "text", "text": "Username", "offsetX": 0, "offsetY": 0, "fontSize": 14, "fill": "#333333", **_LABEL},
            {**_INPUT, "width": 200, "height": 36, "offsetX": 0, "offsetY": 24},
            {"type": "text", "text": "Password", "offsetX": 0, "offsetY": 76, "fontSize": 14, "fill": "#333333", **_LABEL},
            {**_INPUT, "width": 200, "height": 36, "offsetX": 0, "offsetY": 100},
            {"type": "rectangle", "width": 200, "height": 40, "offsetX": 0, "offsetY": 152, "fill": "#000000"},
            {
                "type": "text",
                "text": "Login",
                "offsetX": 80,
                "offsetY": 162,
                "fontSize": 16,
                "fill": "#ffffff",
                "fontFamily": "Arial",
                "fontStyle": "bold",
                "align": "center",
            },
        ],
    },
    "trafficLight": {
        "description": "Traffic light with three lights in different shades of grey",
        "shapes": [
            {"type": "rectangle", "width": 80, "height": 220, "offsetX": 0, "offsetY": 0, "fill": "#555555"},
            {"type": "circle", "radius": 28, "offsetX": 40, "offsetY": 40, "fill": "#3d3d3d"},
            {"type": "circle", "radius": 28, "offsetX": 40, "offsetY": 110, "fill": "#7d7d7d"},
            {"type": "circle", "radius": 28, "offsetX": 40, "offsetY": 180, "fill": "#c0c0c0"},
        ],
    },
    NAVIGATION_BAR: {
        "description": "Navigation bar with Home, About, Contact links",
        "shapes": [
            {"type": "rectangle", "width": NAV_BAR_WIDTH, "height": 60, "offsetX": 0, "offsetY": 0, "fill": "#222222"},
            {"type": "text", "text": "Home", "offsetX": 20, "offsetY": 22, "fontSize": 16, "fill": "#ffffff", **_LABEL},
            {"type": "text", "text": "About", "offsetX": 380, "offsetY": 22, "fontSize": 16, "fill": "#ffffff", **_LABEL},
            {"type": "text", "text": "Contact", "offsetX": 720, "offsetY": 22, "fontSize": 16, "fill": "#ffffff", **_LABEL},
        ],
    },
    "signupForm": {
        "description": "Signup form with email, password, and confirm password",
        "shapes": [
            {"type": "text", "text": "Email", "offsetX": 0, "offsetY": 0, "fontSize": 14, "fill": "#333333"},
            {**_INPUT, "width": 250, "height": 36, "offsetX": 0, "offsetY": 24},
            {"type": "text", "text": "Password", "offsetX": 0, "offsetY": 76, "fontSize": 14, "fill": "#333333"},
            {**_INPUT, "width": 250, "height": 36, "offsetX": 0, "offsetY": 100},
            {"type": "text", "text": "Confirm Password", "offsetX": 0, "offsetY": 152, "fontSize": 14, "fill": "#333333"},
            {**_INPUT, "width": 250, "height": 36, "offsetX": 0, "offsetY": 176},
            {"type": "rectangle", "width": 250, "height": 44, "offsetX": 0, "offsetY": 228, "fill": "#000000"},
            {
                "type": "text",
                "text": "Sign Up",
                "offsetX": 95,
                "offsetY": 240,
                "fontSize": 16,
                "fill": "#ffffff",
                "fontStyle": "bold",
            },
        ],
    },
    "dashboard": {
        "description": "Dashboard with title and stat cards",
        "shapes": [
            {"type": "text", "text": "Dashboard", "offsetX": 0, "offsetY": 0, "fontSize": 24, "fill": "#1a1a1a", "fontStyle": "bold"},
            {**_CARD, "width": 180, "height": 100, "offsetX": 0, "offsetY": 50},
            {"type": "text", "text": "Users", "offsetX": 60, "offsetY": 70, "fontSize": 14, "fill": "#808080"},
            {"type": "text", "text": "1,234", "offsetX": 50, "offsetY": 100, "fontSize": 28, "fill": "#333333", "fontStyle": "bold"},
            {**_CARD, "width": 180, "height": 100, "offsetX": 200, "offsetY": 50},
            {"type": "text", "text": "Revenue", "offsetX": 250, "offsetY": 70, "fontSize": 14, "fill": "#808080"},
            {"type": "text", "text": "$12.5K", "offsetX": 235, "offsetY": 100, "fontSize": 28, "fill": "#333333", "fontStyle": "bold"},
            {**_CARD, "width": 180, "height": 100, "offsetX": 400, "offsetY": 50},
            {"type": "text", "text": "Growth", "offsetX": 455, "offsetY": 70, "fontSize": 14, "fill": "#808080"},
            {"type": "text", "text": "+23%", "offsetX": 455, "offsetY": 100, "fontSize": 28, "fill": "#333333", "fontStyle": "bold"},
        ],
    },
    "cardLayout": {
        "description": "Card with title, image placeholder, and description",
        "shapes": [
            # container, then image placeholder on top
            {"type": "rectangle", "width": 300, "height": 420, "offsetX": 0, "offsetY": 0, "fill": "#ffffff", "stroke": "#d0d0d0", "strokeWidth": 1},
            {"type": "rectangle", "width": 300, "height": 200, "offsetX": 0, "offsetY": 0, "fill": "#f5f5f5", "stroke": "#d0d0d0", "strokeWidth": 1},
            {
                "type": "text",
                "text": "IMAGE",
                "offsetX": 125,
                "offsetY": 90,
                "fontSize": 14,
                "fill": "#a0a0a0",
                "fontFamily": "Arial",
                "fontStyle": "normal",
                "align": "center",
            },
            {
                "type": "text",
                "text": "Card Title",
                "offsetX": 20,
                "offsetY": 220,
                "fontSize": 20,
                "fill": "#1a1a1a",
                "fontFamily": "Arial",
                "fontStyle": "bold",
                "align": "left",
            },
            {
                "type": "text",
                "text": "This is a card description that provides",
                "offsetX": 20,
                "offsetY": 260,
                "fontSize": 14,
                "fill": "#666666",
                **_LABEL,
            },
            {
                "type": "text",
                "text": "more details about the card content.",
                "offsetX": 20,
                "offsetY": 280,
                "fontSize": 14,
                "fill": "#666666",
                **_LABEL,
            },
            {"type": "rectangle", "width": 260, "height": 40, "offsetX": 20, "offsetY": 360, "fill": "#000000"},
            {
                "type": "text",
                "text": "Learn More",
                "offsetX": 115,
                "offsetY": 372,
                "fontSize": 14,
                "fill": "#ffffff",
                "fontFamily": "Arial",
                "fontStyle": "bold",
                "align": "center",
            },
        ],
    },
}


def _load_templates() -> Mapping[str, TemplateData]:
    table = {
        name: TemplateData.model_validate({"name": name, **raw})
        for name, raw in _RAW_TEMPLATES.items()
    }
    return MappingProxyType(table)


TEMPLATES: Mapping[str, TemplateData] = _load_templates()


def clamp_item_count(item_count: float) -> float:
    return min(max(MIN_NAV_ITEMS, item_count), MAX_NAV_ITEMS)


def generate_navigation_bar(item_count: float = 4) -> TemplateData:
    """Build a navigation bar with one text entry per menu item.

    The count is clamped to [1, 10]. Items sit on a single background bar,
    spaced evenly left to right.
    """
    count = math.ceil(clamp_item_count(item_count))
    spacing = NAV_BAR_WIDTH / (count + 1)

    shapes: list[dict[str, Any]] = [
        {"type": "rectangle", "width": NAV_BAR_WIDTH, "height": 60, "offsetX": 0, "offsetY": 0, "fill": "#222222"},
    ]
    for i in range(count):
        label = NAV_ITEM_LABELS[i] if i < len(NAV_ITEM_LABELS) else f"Item {i + 1}"
        shapes.append(
            {
                "type": "text",
                "text": label,
                "offsetX": spacing * (i + 1) - 25,
                "offsetY": 22,
                "fontSize": 16,
                "fill": "#ffffff",
                **_LABEL,
            }
        )

    return TemplateData.model_validate(
        {
            "name": NAVIGATION_BAR,
            "description": f"Navigation bar with {count} menu items",
            "shapes": shapes,
        }
    )


def lookup_template(name: str, item_count: float | None = None) -> TemplateData | None:
    if name == NAVIGATION_BAR and item_count is not None:
        return generate_navigation_bar(item_count)
    return TEMPLATES.get(name)


def _numeric(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def resolve_template(command: Any) -> bool:
    """Attach concrete template data to a complex command, in place.

    Returns True when data was attached. An unknown template name is not an
    error: it is logged and the command goes out without template data.
    """
    if not isinstance(command, ComplexCommand):
        return False

    params = command.parameters
    if not isinstance(params, ComplexParameters) or not params.template:
        return False

    template = None
    if isinstance(params.template, str):
        template = lookup_template(params.template, _numeric(params.item_count))
    if template is None:
        logger.warning("Template not found: %s", params.template)
        return False

    params.template_data = template.to_parameters()
    logger.debug("Using template %s with %d shapes", template.name, len(template.shapes))
    return True
