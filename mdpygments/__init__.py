from mdpygments.ast import Node, WalkStatus, new_parser, parse, walk
from mdpygments.config import (
    RendererBuilder,
    RendererConfig,
    embed_css,
    extend,
    formatter_options,
    pygments_style,
    style,
    without_autodetect,
)
from mdpygments.errors import FormatError, HighlightError, TokenizeError
from mdpygments.html import HTMLRenderer, Renderer
from mdpygments.markdown_renderer import render, render_markdown, to_html
from mdpygments.renderer import CodeBlockRenderer, new_renderer

__all__ = [
    "CodeBlockRenderer",
    "FormatError",
    "HTMLRenderer",
    "HighlightError",
    "Node",
    "Renderer",
    "RendererBuilder",
    "RendererConfig",
    "TokenizeError",
    "WalkStatus",
    "embed_css",
    "extend",
    "formatter_options",
    "new_parser",
    "new_renderer",
    "parse",
    "pygments_style",
    "render",
    "render_markdown",
    "style",
    "to_html",
    "walk",
    "without_autodetect",
]
