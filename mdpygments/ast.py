"""
Block-level document tree over the markdown-it token stream.

markdown-it produces a flat token list where block containers are expressed as
``*_open`` / ``*_close`` pairs. The renderer contract works on nodes that are
visited on entry and on exit, so this module folds the flat list into a tree:

    document
    ├── heading          (heading_open ... heading_close)
    │   └── inline       (leaf, inline children rendered as one run)
    ├── fence            (leaf, carries literal + info string)
    └── bullet_list
        └── list_item
            └── paragraph
                └── inline

Nodes keep a reference to the full token list plus their own indices, so a base
renderer can hand them back to markdown-it's rules unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

DOCUMENT = "document"
CODE_BLOCK_TYPES = frozenset({"fence", "code_block"})


class WalkStatus(Enum):
    """Traversal control returned by every node visit."""
    GO_TO_NEXT = "continue"
    SKIP_CHILDREN = "skip-children"
    TERMINATE = "terminate"


@dataclass(eq=False)
class Node:
    type: str
    tokens: Sequence[Token] = field(repr=False)
    start: int = -1
    end: Optional[int] = None
    children: List["Node"] = field(default_factory=list, repr=False)
    parent: Optional["Node"] = field(default=None, repr=False)

    @property
    def token(self) -> Optional[Token]:
        """Opening token for containers, the only token for leaves."""
        if self.start < 0:
            return None
        return self.tokens[self.start]

    @property
    def closing(self) -> Optional[Token]:
        if self.end is None:
            return None
        return self.tokens[self.end]

    @property
    def is_document(self) -> bool:
        return self.type == DOCUMENT

    @property
    def is_container(self) -> bool:
        return self.is_document or (self.token is not None and self.token.nesting == 1)

    @property
    def is_code_block(self) -> bool:
        return self.type in CODE_BLOCK_TYPES

    @property
    def literal(self) -> str:
        token = self.token
        return token.content if token is not None else ""

    @property
    def info(self) -> str:
        token = self.token
        return token.info.strip() if token is not None else ""


def new_parser(xhtml: bool = False) -> MarkdownIt:
    """
    Create the default CommonMark parser.

    Raw HTML is escaped, GFM tables and strikethrough are enabled.
    """
    return MarkdownIt("commonmark", {"html": False, "xhtmlOut": xhtml}).enable(
        ["table", "strikethrough"]
    )


def build_tree(tokens: Sequence[Token]) -> Node:
    """Fold a flat token list into a document tree."""
    root = Node(DOCUMENT, tokens)
    stack = [root]
    for idx, token in enumerate(tokens):
        if token.nesting == 1:
            node = Node(token.type.removesuffix("_open"), tokens, start=idx, parent=stack[-1])
            stack[-1].children.append(node)
            stack.append(node)
        elif token.nesting == -1:
            stack.pop().end = idx
        else:
            stack[-1].children.append(Node(token.type, tokens, start=idx, parent=stack[-1]))
    return root


def parse(text: str, parser: Optional[MarkdownIt] = None) -> Node:
    parser = parser or new_parser()
    return build_tree(parser.parse(text))


def walk(node: Node, visitor: Callable[[Node, bool], WalkStatus]) -> WalkStatus:
    """
    Depth-first traversal calling ``visitor(node, entering)``.

    Containers are visited on entry and exit, leaves on entry only. A container
    whose entry visit returns ``TERMINATE`` still receives its exit visit.
    """
    status = visitor(node, True)
    if status is WalkStatus.TERMINATE:
        if node.is_container:
            visitor(node, False)
        return status

    if node.is_container and status is not WalkStatus.SKIP_CHILDREN:
        for child in node.children:
            status = walk(child, visitor)
            if status is WalkStatus.TERMINATE:
                return status

    if node.is_container:
        status = visitor(node, False)
        if status is WalkStatus.TERMINATE:
            return status
    return WalkStatus.GO_TO_NEXT
