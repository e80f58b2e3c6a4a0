import pytest

from mdpygments.ast import DOCUMENT, WalkStatus, new_parser, parse, walk
from mdpygments.html import HTMLRenderer
from mdpygments.markdown_renderer import render

SAMPLE = """# Title

Some *emphasis* and a [link](https://example.com).

- one
- two

> quoted
> text

```go
fmt.Println(1)
```

| a | b |
|---|---|
| 1 | 2 |

    indented
"""


class TestBuildTree:

    def test_document_root(self):
        doc = parse(SAMPLE)
        assert doc.type == DOCUMENT
        assert doc.is_document
        assert doc.is_container
        assert doc.token is None

    def test_top_level_types(self):
        doc = parse(SAMPLE)
        types = [child.type for child in doc.children]
        assert types == ["heading", "paragraph", "bullet_list", "blockquote", "fence", "table", "code_block"]

    def test_fence_leaf(self):
        doc = parse("```python {linenos}\nx = 1\n```\n")
        fence = doc.children[0]
        assert fence.is_code_block
        assert not fence.is_container
        assert fence.literal == "x = 1\n"
        assert fence.info == "python {linenos}"
        assert fence.parent is doc

    def test_container_indices(self):
        doc = parse("> quote\n")
        quote = doc.children[0]
        assert quote.token.type == "blockquote_open"
        assert quote.closing.type == "blockquote_close"
        assert quote.children[0].type == "paragraph"


class TestWalk:

    def test_visit_order(self):
        doc = parse("> quote\n")
        visits = []

        def visitor(node, entering):
            visits.append((node.type, entering))
            return WalkStatus.GO_TO_NEXT

        assert walk(doc, visitor) is WalkStatus.GO_TO_NEXT
        assert visits == [
            (DOCUMENT, True),
            ("blockquote", True),
            ("paragraph", True),
            ("inline", True),
            ("paragraph", False),
            ("blockquote", False),
            (DOCUMENT, False),
        ]

    def test_skip_children_still_exits(self):
        doc = parse("> quote\n")
        visits = []

        def visitor(node, entering):
            visits.append((node.type, entering))
            if node.type == "blockquote":
                return WalkStatus.SKIP_CHILDREN
            return WalkStatus.GO_TO_NEXT

        walk(doc, visitor)
        assert ("paragraph", True) not in visits
        assert ("blockquote", False) in visits

    def test_terminate_stops_walk(self):
        doc = parse("first\n\nsecond\n")
        visits = []

        def visitor(node, entering):
            visits.append((node.type, entering))
            if node.type == "inline":
                return WalkStatus.TERMINATE
            return WalkStatus.GO_TO_NEXT

        assert walk(doc, visitor) is WalkStatus.TERMINATE
        assert visits.count(("inline", True)) == 1
        assert (DOCUMENT, False) not in visits


class TestHTMLRenderer:

    def test_matches_flat_render(self):
        parser = new_parser()
        assert render(parse(SAMPLE, parser), HTMLRenderer(parser)) == parser.render(SAMPLE)

    def test_plain_code_block_markup(self):
        html = render(parse("```go\nfmt.Println(1)\n```"), HTMLRenderer())
        assert html == '<pre><code class="language-go">fmt.Println(1)\n</code></pre>\n'

    def test_header_footer_noop_by_default(self):
        html = render(parse("text"), HTMLRenderer())
        assert html == "<p>text</p>\n"

    def test_complete_page(self):
        html = render(parse("text"), HTMLRenderer(complete_page=True, title="A & B"))
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>A &amp; B</title>" in html
        assert "<p>text</p>" in html
        assert html.endswith("</html>\n")

    def test_xhtml(self):
        parser = new_parser(xhtml=True)
        html = render(parse("a\n\n---\n", parser), HTMLRenderer(parser))
        assert "<hr />" in html


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
