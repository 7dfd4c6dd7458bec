"""Intermediate data models for the parse, resolve and render pipeline"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class ParsedNote:
    """Front matter mapping plus the remaining body text; built once per input."""
    frontmatter: dict[str, Any]
    body: str


class _Block(BaseModel):
    model_config = ConfigDict(frozen=True)


class Heading(_Block):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    text: str


class UnorderedItem(_Block):
    kind: Literal["unordered_item"] = "unordered_item"
    text: str


class OrderedItem(_Block):
    kind: Literal["ordered_item"] = "ordered_item"
    text: str


class Image(_Block):
    kind: Literal["image"] = "image"
    target: str


class Paragraph(_Block):
    kind: Literal["paragraph"] = "paragraph"
    text: str


Block = Annotated[
    Union[Heading, UnorderedItem, OrderedItem, Image, Paragraph],
    Field(discriminator="kind"),
]


class ListGroup(BaseModel):
    """A run of consecutive same-kind list items rendered as one container."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["unordered", "ordered"]
    items: tuple[str, ...]


class StylingCss(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    main:        Optional[str] = None
    tokens:      Optional[str] = None
    theme_light: Optional[str] = Field(default=None, alias="themeLight")
    theme_dark:  Optional[str] = Field(default=None, alias="themeDark")


class Styling(BaseModel):
    css: Optional[StylingCss] = None

    @field_validator("css", mode="before")
    @classmethod
    def ignore_non_object(cls, value):
        return value if isinstance(value, (dict, BaseModel)) else None


class Schema(BaseModel):
    """The subset of a note schema document consumed by the reader."""
    model_config = ConfigDict(populate_by_name=True)
    frontmatter_schema: Any = Field(default=None, alias="frontmatterSchema")
    styling: Optional[Styling] = None

    @field_validator("styling", mode="before")
    @classmethod
    def ignore_non_object(cls, value):
        return value if isinstance(value, (dict, BaseModel)) else None


class ResolvedStyleSet(BaseModel):
    """Absolute stylesheet URLs derived from a schema's styling block."""
    main:        Optional[str] = None
    tokens:      Optional[str] = None
    theme_light: Optional[str] = None
    theme_dark:  Optional[str] = None

    def selected(self, prefers_dark: bool) -> list[tuple[str, str]]:
        """Return (element_id, url) pairs for main, tokens and the theme matching prefers_dark."""
        theme = self.theme_dark if prefers_dark else self.theme_light
        pairs = [
            ("pensieve-main-style", self.main),
            ("pensieve-tokens", self.tokens),
            ("pensieve-theme", theme),
        ]
        return [(element_id, url) for element_id, url in pairs if url]


class Stylesheet(BaseModel):
    id: str
    url: str
    css: str


@dataclass
class RenderedNote:
    """Output handed to the host: parsed data, resolved styles and the HTML fragment."""
    mode:        Literal["note", "markdown", "error"]
    html:        str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    body:        str = ""
    blocks:      list = field(default_factory=list)
    styles:      Optional[ResolvedStyleSet] = None
    stylesheets: list[Stylesheet] = field(default_factory=list)
    error:       Optional[str] = None
