"""A concurrent web crawler with a limit on parallel requests."""

from __future__ import annotations

import argparse
import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Iterable, Optional

from .links import crawl

FetchLinks = Callable[[str], Optional[Iterable[str]]]


def crawl_concurrently(
    urls: Iterable[str],
    fetch_links: Optional[FetchLinks] = None,
    limit: int = 20,
) -> list[str]:
    """Crawl from urls with at most limit fetches at once; return URLs in the order queued.

    Each URL is fetched once; the crawl ends when no fetch is outstanding.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    fetch = fetch_links or crawl
    seen: set[str] = set()
    order: list[str] = []
    pending: set[Future] = set()

    with ThreadPoolExecutor(max_workers=limit) as pool:

        def schedule(links: Iterable[str]) -> None:
            for link in links:
                if link not in seen:
                    seen.add(link)
                    order.append(link)
                    pending.add(pool.submit(fetch, link))

        schedule(urls)
        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                pending.discard(future)
                schedule(future.result() or ())
    return order


def main(argv=None) -> int:
    """Crawl the web concurrently, starting from the URLs given."""
    parser = argparse.ArgumentParser(prog="crawl", description="Crawl web links concurrently.")
    parser.add_argument("--limit", type=int, default=20, help="maximum concurrent requests")
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    crawl_concurrently(args.urls, crawl, args.limit)
    return 0