from typing import Optional, Protocol, TextIO, runtime_checkable

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from mdpygments.ast import Node, WalkStatus, new_parser


@runtime_checkable
class Renderer(Protocol):
    """
    Rendering capability driven by the document walker.

    ``render_node`` is called once per visit with ``entering`` telling whether
    the walker is descending into or leaving the node. Header and footer hooks
    run once per document, before and after the walk.
    """

    def render_node(self, w: TextIO, node: Node, entering: bool) -> WalkStatus:
        ...

    def render_header(self, w: TextIO, node: Node) -> None:
        ...

    def render_footer(self, w: TextIO, node: Node) -> None:
        ...


class HTMLRenderer:
    """
    Plain HTML renderer backed by markdown-it's ``RendererHTML`` rules.

    Each node is rendered by the same rule markdown-it would apply to its token
    in a flat render, so walking a tree with this renderer yields exactly
    ``parser.render(text)``.
    """

    def __init__(
        self,
        parser: Optional[MarkdownIt] = None,
        complete_page: bool = False,
        title: str = "",
        xhtml: bool = False,
    ):
        self.parser = parser or new_parser(xhtml=xhtml)
        self.complete_page = complete_page
        self.title = title

    def _render_token(self, node: Node, idx: int) -> str:
        renderer = self.parser.renderer
        options = self.parser.options
        token = node.tokens[idx]
        if token.type == "inline":
            return renderer.renderInline(token.children or [], options, {})
        if token.type in renderer.rules:
            return renderer.rules[token.type](node.tokens, idx, options, {})
        return renderer.renderToken(node.tokens, idx, options, {})

    def render_node(self, w: TextIO, node: Node, entering: bool) -> WalkStatus:
        if node.is_document:
            return WalkStatus.GO_TO_NEXT
        idx = node.start if entering else node.end
        if idx is None:
            return WalkStatus.GO_TO_NEXT
        w.write(self._render_token(node, idx))
        return WalkStatus.GO_TO_NEXT

    def render_header(self, w: TextIO, node: Node) -> None:
        if not self.complete_page:
            return
        w.write("<!DOCTYPE html>\n<html>\n<head>\n")
        w.write(f"  <title>{escapeHtml(self.title)}</title>\n")
        w.write('  <meta charset="utf-8">\n')
        w.write("</head>\n<body>\n\n")

    def render_footer(self, w: TextIO, node: Node) -> None:
        if not self.complete_page:
            return
        w.write("\n</body>\n</html>\n")
