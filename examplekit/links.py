"""Link extraction from web pages and a breadth-first crawler."""

from __future__ import annotations

import argparse
import logging
import sys
import urllib.error
import urllib.request
from http import HTTPStatus
from typing import Callable, Iterable
from urllib.parse import urljoin

from .htmltree import Node, NodeType, for_each_node, parse, visit

log = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page cannot be fetched or parsed."""


def _get_document(url: str) -> tuple[Node, str]:
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as err:
        err.close()
        raise FetchError(f"getting {url}: {err.code} {err.reason}") from err
    except (OSError, ValueError) as err:
        raise FetchError(f"getting {url}: {err}") from err
    with response:
        if response.status != HTTPStatus.OK:
            raise FetchError(f"getting {url}: {response.status} {response.reason}")
        try:
            body = response.read()
        except OSError as err:
            raise FetchError(f"getting {url}: {err}") from err
        final_url = response.geturl()
    try:
        doc = parse(body)
    except ValueError as err:
        raise FetchError(f"parsing {url} as HTML: {err}") from err
    return doc, final_url


def extract(url: str) -> list[str]:
    """Fetch url, parse it as HTML and return its links as absolute URLs."""
    doc, base = _get_document(url)
    links: list[str] = []

    def visit_node(n: Node) -> None:
        if n.type is NodeType.ELEMENT and n.data == "a":
            for key, value in n.attrs:
                if key != "href":
                    continue
                try:
                    links.append(urljoin(base, value))
                except ValueError:
                    continue  # ignore bad URLs

    for_each_node(doc, visit_node, None)
    return links


def find_links(url: str) -> list[str]:
    """Fetch url, parse it as HTML and return its hrefs as written."""
    doc, _ = _get_document(url)
    return visit(doc)


def breadth_first(f: Callable[[str], Iterable[str]], worklist: Iterable[str]) -> None:
    """Call f once for each item, adding the items f returns to the worklist."""
    seen: set[str] = set()
    pending = list(worklist)
    while pending:
        items, pending = pending, []
        for item in items:
            if item not in seen:
                seen.add(item)
                pending.extend(f(item))


def crawl(url: str) -> list[str]:
    """Print url and return its links, logging any failure."""
    print(url)
    try:
        return extract(url)
    except FetchError as err:
        log.error("%s", err)
        return []


def main(argv=None) -> int:
    """Print the links of each URL, or crawl breadth-first with --crawl."""
    parser = argparse.ArgumentParser(prog="findlinks", description="Print or crawl the links of web pages.")
    parser.add_argument("--crawl", action="store_true", help="crawl the web breadth-first")
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    if args.crawl:
        logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
        breadth_first(crawl, args.urls)
        return 0
    status = 0
    for url in args.urls:
        try:
            links = find_links(url)
        except FetchError as err:
            print(f"findlinks: {err}", file=sys.stderr)
            status = 1
            continue
        for link in links:
            print(link)
    return status