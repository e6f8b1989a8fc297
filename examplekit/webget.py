"""Save web pages to local files and wait for servers to come up."""

from __future__ import annotations

import logging
import sys
import time
import urllib.error
import urllib.request
from typing import BinaryIO
from urllib.parse import urlsplit

log = logging.getLogger(__name__)

_CHUNK = 64 * 1024


def _base(path: str) -> str:
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def _copy(src: BinaryIO, dst: BinaryIO) -> int:
    total = 0
    for chunk in iter(lambda: src.read(_CHUNK), b""):
        dst.write(chunk)
        total += len(chunk)
    return total


def fetch(url: str) -> tuple[str, int]:
    """Download url into the current directory; return the file name and size."""
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as err:
        response = err
    with response:
        local = _base(urlsplit(response.geturl()).path)
        if local == "/":
            local = "index.html"
        with open(local, "wb") as out:
            size = _copy(response, out)
    return local, size


def wait_for_server(url: str, timeout: float = 60.0) -> None:
    """Contact url until it responds, backing off exponentially, up to timeout seconds."""
    deadline = time.monotonic() + timeout
    tries = 0
    while time.monotonic() < deadline:
        request = urllib.request.Request(url, method="HEAD")
        try:
            with urllib.request.urlopen(request):
                return
        except urllib.error.HTTPError as err:
            err.close()
            return  # the server answered
        except (OSError, ValueError) as err:
            log.warning("server not responding (%s); retrying...", err)
        time.sleep(1 << tries)
        tries += 1
    raise TimeoutError(f"server {url} failed to respond after {timeout:g}s")


def _configure_logging() -> None:
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")


def main(argv=None) -> int:
    """Fetch each URL on the command line into a local file."""
    urls = sys.argv[1:] if argv is None else list(argv)
    for url in urls:
        try:
            local, size = fetch(url)
        except (OSError, ValueError) as err:
            print(f"fetch {url}: {err}", file=sys.stderr)
            continue
        print(f"{url} => {local} ({size} bytes).", file=sys.stderr)
    return 0


def wait_main(argv=None) -> int:
    """Wait for the server of the single URL argument to respond."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: wait url", file=sys.stderr)
        return 1
    _configure_logging()
    try:
        wait_for_server(args[0])
    except TimeoutError as err:
        print(f"Site is down: {err}", file=sys.stderr)
        return 1
    return 0