"""
Renderer configuration and the adjustments that build it.

A renderer is configured by applying an ordered list of adjustments to a
``RendererBuilder``; each adjustment sets one field and later ones win:

    new_renderer(style("friendly"), embed_css(), formatter_options(noclasses=False))

``RendererBuilder.build()`` freezes the result into a ``RendererConfig``.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pygments.style import Style
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from mdpygments.html import HTMLRenderer, Renderer

logger = logging.getLogger("mdpygments.config")

DEFAULT_STYLE = "monokai"


def resolve_style(name: str) -> Type[Style]:
    """Registry lookup; unknown names degrade to the default style."""
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        logger.warning(f"Unknown style '{name}', using '{DEFAULT_STYLE}'")
        return get_style_by_name(DEFAULT_STYLE)


class RendererConfig(BaseModel):
    """
    Frozen settings of a code block renderer.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    style: Type[Style] = Field(..., description="Pygments style used by the formatter and the CSS export")
    autodetect: bool = Field(default=True, description="Guess the language from content when the info string gives none")
    embed_css: bool = Field(default=False, description="Write a <style> block at the start of the document")
    formatter_options: Dict[str, Any] = Field(default_factory=dict, description="Keyword options for HtmlFormatter, e.g. noclasses, classprefix, full")
    base: Renderer = Field(..., description="Renderer that handles every node the code block renderer does not")


class RendererBuilder:
    """In-progress configuration that adjustments mutate before ``build()``."""

    def __init__(self):
        self.style: Type[Style] = get_style_by_name(DEFAULT_STYLE)
        self.autodetect = True
        self.embed_css = False
        self.formatter_options: Dict[str, Any] = {}
        self.base: Optional[Renderer] = None

    def apply(self, *options: "Option") -> "RendererBuilder":
        for option in options:
            option(self)
        return self

    def build(self) -> RendererConfig:
        return RendererConfig(
            style=self.style,
            autodetect=self.autodetect,
            embed_css=self.embed_css,
            formatter_options=dict(self.formatter_options),
            base=self.base if self.base is not None else HTMLRenderer(),
        )


Option = Callable[[RendererBuilder], None]


def style(name: str) -> Option:
    """Use the registered style called ``name``. Default: monokai."""
    def option(builder: RendererBuilder) -> None:
        builder.style = resolve_style(name)
    return option


def pygments_style(style_cls: Type[Style]) -> Option:
    """Use a ``Style`` subclass directly instead of a registry name."""
    def option(builder: RendererBuilder) -> None:
        builder.style = style_cls
    return option


def without_autodetect() -> Option:
    """
    Do not guess the language of blocks without a usable info string; they
    are highlighted with the plain-text lexer instead.
    """
    def option(builder: RendererBuilder) -> None:
        builder.autodetect = False
    return option


def embed_css() -> Option:
    """Write the CSS needed by class-based output at the start of the document."""
    def option(builder: RendererBuilder) -> None:
        builder.embed_css = True
    return option


def formatter_options(**options: Any) -> Option:
    """
    Replace the ``HtmlFormatter`` options, e.g. ``noclasses=True`` for inline
    styles, ``classprefix="hl-"`` or ``full=True`` for standalone output.
    """
    def option(builder: RendererBuilder) -> None:
        builder.formatter_options = dict(options)
    return option


def extend(base: Renderer) -> Option:
    """Wrap ``base`` instead of the default HTML renderer."""
    def option(builder: RendererBuilder) -> None:
        builder.base = base
    return option
