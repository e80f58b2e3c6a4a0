"""
Markdown renderer that highlights code blocks with Pygments.

``CodeBlockRenderer`` wraps a base renderer and only takes over code blocks
(and the optional CSS block at the top of the document). Everything else, and
any code block that fails to highlight, is rendered by the base renderer.
"""

import logging
from typing import TextIO

from pygments.formatters import HtmlFormatter

from mdpygments.ast import Node, WalkStatus
from mdpygments.config import Option, RendererBuilder, RendererConfig
from mdpygments.errors import FormatError
from mdpygments.highlight import HighlightResult, highlight_block, write_css
from mdpygments.html import Renderer

logger = logging.getLogger("mdpygments.renderer")


class CodeBlockRenderer:
    """Renderer decorator that highlights code blocks and delegates the rest to ``config.base``."""

    def __init__(self, config: RendererConfig):
        self.config = config
        # the configured style wins over a "style" key in the formatter options
        self.formatter = HtmlFormatter(**{**config.formatter_options, "style": config.style})

    @property
    def base(self) -> Renderer:
        return self.config.base

    @property
    def style(self):
        return self.config.style

    def highlight(self, text: str, info: str = "") -> HighlightResult:
        return highlight_block(text, self.formatter, info, self.config.autodetect)

    def render_with_pygments(self, w: TextIO, text: str, info: str = "") -> HighlightResult:
        """
        Highlight ``text`` and write it to ``w``.

        Nothing is written when highlighting fails; the failure is returned in
        the result.
        """
        result = self.highlight(text, info)
        if result.ok:
            w.write(result.output)
        return result

    def render_node(self, w: TextIO, node: Node, entering: bool) -> WalkStatus:
        if node.is_document:
            if entering and self.config.embed_css:
                self._embed_css(w)
            return self.base.render_node(w, node, entering)

        if node.is_code_block:
            result = self.render_with_pygments(w, node.literal, node.info)
            if not result.ok:
                logger.warning(f"Code block (info={node.info!r}) rendered without highlighting: {result.error}")
                return self.base.render_node(w, node, entering)
            return WalkStatus.SKIP_CHILDREN

        return self.base.render_node(w, node, entering)

    def _embed_css(self, w: TextIO) -> None:
        try:
            css = self.css()
        except FormatError as e:
            logger.warning(f"Skipping embedded CSS: {e}")
            return
        w.write("<style>")
        w.write(css)
        w.write("</style>")

    def render_header(self, w: TextIO, node: Node) -> None:
        self.base.render_header(w, node)

    def render_footer(self, w: TextIO, node: Node) -> None:
        self.base.render_footer(w, node)

    def css(self) -> str:
        """CSS rules for the configured style. Raises FormatError."""
        return write_css(self.formatter)

    def write_css(self, w: TextIO) -> None:
        w.write(self.css())


def new_renderer(*options: Option) -> CodeBlockRenderer:
    """
    Build a code block renderer from adjustments applied in order.

    Example:
        >>> from mdpygments.config import style, without_autodetect
        >>> r = new_renderer(style("friendly"), without_autodetect())
        >>> r.config.autodetect
        False
    """
    return CodeBlockRenderer(RendererBuilder().apply(*options).build())
