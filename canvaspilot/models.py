from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

MAX_INPUT_LENGTH = 500


class ViewportCenter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float
    y: float


DEFAULT_VIEWPORT_CENTER = ViewportCenter(x=500, y=500)


class CanvasContext(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    selected_shape_ids: List[Union[str, int]] = Field(default_factory=list)
    viewport_center: Optional[ViewportCenter] = None


class CommandRequest(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    user_input: str = Field(..., min_length=1, max_length=MAX_INPUT_LENGTH)
    canvas_context: CanvasContext = Field(default_factory=CanvasContext)


class CommandParameters(BaseModel):
    """Parameters shared by every category.

    Fields are named for the documented conventions but stay untyped: only
    `category` and `action` are checked here, the canvas decides the rest.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    color: Any = None
    fill: Any = None
    stroke: Any = None


class CreationParameters(CommandParameters):
    shape_type: Any = None
    x: Any = None
    y: Any = None
    width: Any = None
    height: Any = None
    radius: Any = None
    text: Any = None
    texts: Any = None
    count: Any = None
    grid_rows: Any = None
    grid_cols: Any = None


class ManipulationParameters(CommandParameters):
    property_name: Any = Field(None, alias="property")
    value: Any = None
    delta: Any = None
    move_to: Any = None
    size_multiplier: Any = None
    size_percent: Any = None


class LayoutParameters(CommandParameters):
    arrangement: Any = None
    spacing: Any = None


class ComplexParameters(CommandParameters):
    template: Any = None
    item_count: Any = None
    template_data: Any = None


class SelectionParameters(CommandParameters):
    criteria: Any = None
    shape_type: Any = None


class DeletionParameters(CommandParameters):
    target: Any = None


class StyleParameters(CommandParameters):
    property_name: Any = Field(None, alias="property")
    value: Any = None
    filter: Any = None


class UtilityParameters(CommandParameters):
    message: Any = None


def _parameters(record: type[CommandParameters]) -> Any:
    # a non-object `parameters` value is passed through as-is
    return Annotated[Union[record, Any], Field(union_mode="left_to_right")]


class _Command(BaseModel):
    model_config = ConfigDict(extra="allow")

    action: str = Field(..., min_length=1)


class CreationCommand(_Command):
    category: Literal["creation"]
    parameters: _parameters(CreationParameters) = Field(default_factory=CreationParameters)


class ManipulationCommand(_Command):
    category: Literal["manipulation"]
    parameters: _parameters(ManipulationParameters) = Field(default_factory=ManipulationParameters)


class LayoutCommand(_Command):
    category: Literal["layout"]
    parameters: _parameters(LayoutParameters) = Field(default_factory=LayoutParameters)


class ComplexCommand(_Command):
    category: Literal["complex"]
    parameters: _parameters(ComplexParameters) = Field(default_factory=ComplexParameters)


class SelectionCommand(_Command):
    category: Literal["selection"]
    parameters: _parameters(SelectionParameters) = Field(default_factory=SelectionParameters)


class DeletionCommand(_Command):
    category: Literal["deletion"]
    parameters: _parameters(DeletionParameters) = Field(default_factory=DeletionParameters)


class StyleCommand(_Command):
    category: Literal["style"]
    parameters: _parameters(StyleParameters) = Field(default_factory=StyleParameters)


class UtilityCommand(_Command):
    category: Literal["utility"]
    parameters: _parameters(UtilityParameters) = Field(default_factory=UtilityParameters)


ParsedCommand = Annotated[
    Union[
        CreationCommand,
        ManipulationCommand,
        LayoutCommand,
        ComplexCommand,
        SelectionCommand,
        DeletionCommand,
        StyleCommand,
        UtilityCommand,
    ],
    Field(discriminator="category"),
]

PARSED_COMMAND = TypeAdapter(ParsedCommand)

Category = Literal[
    "creation",
    "manipulation",
    "layout",
    "complex",
    "selection",
    "deletion",
    "style",
    "utility",
]


def command_to_dict(command: _Command) -> dict[str, Any]:
    return command.model_dump(mode="json", by_alias=True, exclude_unset=True)


class TemplateShape(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: Literal["rectangle", "circle", "line", "text"]
    offset_x: float
    offset_y: float
    text: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    radius: Optional[float] = None
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    font_style: Optional[str] = None
    align: Optional[str] = None


class TemplateData(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    shapes: tuple[TemplateShape, ...]

    def to_parameters(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
