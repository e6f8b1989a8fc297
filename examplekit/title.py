"""Print the title of HTML documents fetched by URL."""

from __future__ import annotations

import sys
import urllib.error
import urllib.request

from .htmltree import Node, NodeType, for_each_node, parse


class TitleError(Exception):
    """Raised when a page's title cannot be determined."""


def _is_title(n: Node) -> bool:
    return n.type is NodeType.ELEMENT and n.data == "title" and n.first_child is not None


def titles(doc: Node) -> list[str]:
    """Return the text of every non-empty title element, in document order."""
    found: list[str] = []

    def visit_node(n: Node) -> None:
        if _is_title(n):
            found.append(n.first_child.data)

    for_each_node(doc, visit_node, None)
    return found


def sole_title(doc: Node) -> str:
    """Return the text of the only non-empty title element in doc."""
    found = ""

    def visit_node(n: Node) -> None:
        nonlocal found
        if _is_title(n):
            if found:
                raise TitleError("multiple title elements")
            found = n.first_child.data

    for_each_node(doc, visit_node, None)
    if not found:
        raise TitleError("no title element")
    return found


def title(url: str) -> str:
    """Fetch url, check it is HTML and return its sole title."""
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as err:
        response = err
    except (OSError, ValueError) as err:
        raise TitleError(f"getting {url}: {err}") from err
    with response:
        content_type = response.headers.get("Content-Type", "")
        if content_type != "text/html" and not content_type.startswith("text/html;"):
            raise TitleError(f"{url} has type {content_type}, not text/html")
        try:
            body = response.read()
        except OSError as err:
            raise TitleError(f"getting {url}: {err}") from err
    try:
        doc = parse(body)
    except ValueError as err:
        raise TitleError(f"parsing {url} as HTML: {err}") from err
    return sole_title(doc)


def main(argv=None) -> int:
    """Print the title of each URL given on the command line."""
    urls = sys.argv[1:] if argv is None else list(argv)
    status = 0
    for url in urls:
        try:
            print(title(url))
        except TitleError as err:
            print(f"title: {err}", file=sys.stderr)
            status = 1
    return status