"""
Markdown to HTML rendering with syntax highlighting.

This module drives a renderer over a parsed document and provides the
convenience entry points used by the HTTP service.
"""

from io import StringIO
from typing import Optional

from markdown_it import MarkdownIt

from mdpygments.ast import Node, parse, walk
from mdpygments.html import Renderer
from mdpygments.renderer import new_renderer


def render(doc: Node, renderer: Renderer) -> str:
    """
    Render a parsed document: header hook, one visit per node, footer hook.

    Args:
        doc: Document root returned by ``parse``
        renderer: Any renderer, e.g. ``HTMLRenderer`` or ``CodeBlockRenderer``

    Returns:
        The rendered HTML
    """
    buf = StringIO()
    renderer.render_header(buf, doc)
    walk(doc, lambda node, entering: renderer.render_node(buf, node, entering))
    renderer.render_footer(buf, doc)
    return buf.getvalue()


def to_html(text: str, renderer: Optional[Renderer] = None, parser: Optional[MarkdownIt] = None) -> str:
    """Parse ``text`` and render it, highlighting code blocks by default."""
    if renderer is None:
        renderer = new_renderer()
    return render(parse(text, parser), renderer)


def render_markdown(content: str, renderer: Optional[Renderer] = None) -> str:
    """
    Convert markdown content to HTML with syntax highlighting.

    Args:
        content: Markdown text to convert
        renderer: Renderer to use; a default ``CodeBlockRenderer`` if omitted

    Returns:
        HTML string with syntax-highlighted code blocks

    Example:
        >>> md = "# Hello\\n\\n```python\\nprint('hi')\\n```"
        >>> html = render_markdown(md)
        >>> "<h1>Hello</h1>" in html
        True
    """
    if not content:
        return ""
    return to_html(content, renderer)


def render_section_html(section_content: str, renderer: Optional[Renderer] = None) -> str:
    """
    Render a document section as HTML.

    Wrapper around render_markdown for section-specific rendering.
    """
    return render_markdown(section_content, renderer)


def render_document_html(document_content: str, renderer: Optional[Renderer] = None) -> str:
    """
    Render a full document as HTML.

    Wrapper around render_markdown for document-level rendering.
    """
    return render_markdown(document_content, renderer)
