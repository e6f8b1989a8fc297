"""An HTML document tree with traversal helpers, plus link and outline commands."""

from __future__ import annotations

import sys
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from enum import Enum
from html.parser import HTMLParser
from typing import IO, Callable, Iterator, Optional, Union

Visitor = Callable[["Node"], None]


class NodeType(Enum):
    """Kinds of node in a parsed HTML document."""

    ERROR = 0
    TEXT = 1
    DOCUMENT = 2
    ELEMENT = 3
    COMMENT = 4
    DOCTYPE = 5


@dataclass(eq=False)
class Node:
    """One node of a parsed HTML document."""

    type: NodeType
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    @property
    def first_child(self) -> Optional[Node]:
        return self.children[0] if self.children else None


_VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Node(NodeType.DOCUMENT)
        self._open = [self.document]

    @property
    def _current(self) -> Node:
        return self._open[-1]

    @staticmethod
    def _element(tag: str, attrs: list[tuple[str, Optional[str]]]) -> Node:
        return Node(NodeType.ELEMENT, tag, [(key, value or "") for key, value in attrs])

    def handle_starttag(self, tag, attrs):
        node = self._element(tag, attrs)
        self._current.children.append(node)
        if tag not in _VOID_ELEMENTS:
            self._open.append(node)

    def handle_startendtag(self, tag, attrs):
        self._current.children.append(self._element(tag, attrs))

    def handle_endtag(self, tag):
        for depth, node in reversed(list(enumerate(self._open))):
            if depth and node.data == tag:
                del self._open[depth:]
                return

    def handle_data(self, data):
        siblings = self._current.children
        if siblings and siblings[-1].type is NodeType.TEXT:
            siblings[-1].data += data
        else:
            siblings.append(Node(NodeType.TEXT, data))

    def handle_comment(self, data):
        self._current.children.append(Node(NodeType.COMMENT, data))

    def handle_decl(self, decl):
        if decl.lower().startswith("doctype"):
            name = decl[len("doctype"):].strip()
            self._current.children.append(Node(NodeType.DOCTYPE, name))


def parse(source: Union[str, bytes, IO]) -> Node:
    """Parse HTML text, bytes or a readable file into a document node."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        source = source.decode("utf-8", errors="replace")
    builder = _TreeBuilder()
    builder.feed(source)
    builder.close()
    return builder.document


def for_each_node(node: Node, pre: Optional[Visitor] = None, post: Optional[Visitor] = None) -> None:
    """Call pre before and post after the children of every node in the tree."""
    if pre is not None:
        pre(node)
    for child in node.children:
        for_each_node(child, pre, post)
    if post is not None:
        post(node)


def visit(node: Node) -> list[str]:
    """Return the href of every anchor element in the tree, in document order."""
    links: list[str] = []

    def collect(n: Node) -> None:
        if n.type is NodeType.ELEMENT and n.data == "a":
            links.extend(value for key, value in n.attrs if key == "href")

    for_each_node(node, collect)
    return links


def outline(node: Node) -> Iterator[list[str]]:
    """Yield the stack of enclosing element names at each element."""
    yield from _outline(node, [])


def _outline(node: Node, stack: list[str]) -> Iterator[list[str]]:
    if node.type is NodeType.ELEMENT:
        stack = [*stack, node.data]
        yield stack
    for child in node.children:
        yield from _outline(child, stack)


def indented_outline(node: Node) -> list[str]:
    """Return start and end tags of every element, indented by depth."""
    lines: list[str] = []
    depth = 0

    def start(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            lines.append(f"{'  ' * depth}<{n.data}>")
            depth += 1

    def end(n: Node) -> None:
        nonlocal depth
        if n.type is NodeType.ELEMENT:
            depth -= 1
            lines.append(f"{'  ' * depth}</{n.data}>")

    for_each_node(node, start, end)
    return lines


def _fetch_document(url: str) -> Node:
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as err:
        response = err
    with response:
        return parse(response.read())


def main(argv=None) -> int:
    """Print the links of an HTML document read from standard input."""
    try:
        doc = parse(sys.stdin)
    except (ValueError, UnicodeDecodeError) as err:
        print(f"findlinks: {err}", file=sys.stderr)
        return 1
    for link in visit(doc):
        print(link)
    return 0


def outline_main(argv=None) -> int:
    """Outline each URL given, or the document on standard input if none."""
    urls = sys.argv[1:] if argv is None else list(argv)
    if not urls:
        try:
            doc = parse(sys.stdin)
        except (ValueError, UnicodeDecodeError) as err:
            print(f"outline: {err}", file=sys.stderr)
            return 1
        for stack in outline(doc):
            print(f"[{' '.join(stack)}]")
        return 0
    status = 0
    for url in urls:
        try:
            doc = _fetch_document(url)
        except (OSError, ValueError) as err:
            print(f"outline: {err}", file=sys.stderr)
            status = 1
            continue
        for line in indented_outline(doc):
            print(line)
    return status