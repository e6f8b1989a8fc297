"""Thumbnail-size images from larger ones, written as JPEG."""

from __future__ import annotations

import logging
import os
import re
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, Iterable

from PIL import Image

log = logging.getLogger(__name__)

_SIZE = 128
_SEPARATORS = re.compile("|".join(re.escape(sep) for sep in {os.sep, os.altsep or os.sep}))


def image(src: Image.Image) -> Image.Image:
    """Return a thumbnail-size version of src, preserving its aspect ratio."""
    xs, ys = src.size
    width, height = _SIZE, _SIZE
    aspect = xs / ys
    if aspect < 1.0:
        width = int(_SIZE * aspect)  # portrait
    else:
        height = int(_SIZE / aspect)  # landscape
    xscale = xs / width if width else 0.0
    yscale = ys / height if height else 0.0

    pixels = src.convert("RGBA").load()
    dst = Image.new("RGBA", (width, height))
    # a very crude scaling algorithm
    dst.putdata(
        [
            pixels[int(x * xscale), int(y * yscale)]
            for y in range(height)
            for x in range(width)
        ]
    )
    return dst


def image_stream(w: BinaryIO, r: BinaryIO) -> None:
    """Read an image from r and write a JPEG thumbnail of it to w."""
    with Image.open(r) as src:
        dst = image(src)
    dst.convert("RGB").save(w, format="JPEG")


def image_file2(outfile: str, infile: str) -> None:
    """Read an image from infile and write a thumbnail of it to outfile."""
    with open(infile, "rb") as src, open(outfile, "wb") as out:
        try:
            image_stream(out, src)
        except (OSError, ValueError) as err:
            raise OSError(f"scaling {infile} to {outfile}: {err}") from err


def _ext(path: str) -> str:
    tail = _SEPARATORS.split(path)[-1]
    dot = tail.rfind(".")
    return tail[dot:] if dot >= 0 else ""


def image_file(infile: str) -> str:
    """Write a thumbnail of infile beside it; return its name, e.g. "foo.thumb.jpeg"."""
    ext = _ext(infile)
    outfile = infile[: len(infile) - len(ext)] + ".thumb" + ext
    image_file2(outfile, infile)
    return outfile


def make_thumbnails(filenames: Iterable[str]) -> list[str]:
    """Make thumbnails of the files in parallel; return the names generated.

    Raises the first error met if any thumbnail could not be made.
    """
    names = list(filenames)
    if not names:
        return []
    with ThreadPoolExecutor() as pool:
        return list(pool.map(image_file, names))


def main(argv=None) -> int:
    """Make a thumbnail of each file named on a line of standard input."""
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    for line in sys.stdin:
        name = line.rstrip("\n").removesuffix("\r")
        try:
            thumb = image_file(name)
        except OSError as err:
            log.error("%s", err)
            continue
        print(thumb)
    return 0