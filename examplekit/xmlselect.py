"""Print the text of selected elements of an XML document."""

from __future__ import annotations

import sys
from typing import IO, Iterable, Iterator, Union
from xml.parsers import expat

_CHUNK = 64 * 1024

Source = Union[str, bytes, IO]


def contains_all(x: Iterable[str], y: Iterable[str]) -> bool:
    """Report whether x contains the elements of y, in order."""
    remaining = iter(x)
    return all(any(item == wanted for item in remaining) for wanted in y)


def _local(name: str) -> str:
    return name.rsplit(" ", 1)[-1]


def _chunks(source: Source) -> Iterator[tuple[Union[str, bytes], bool]]:
    if hasattr(source, "read"):
        for chunk in iter(lambda: source.read(_CHUNK), source.read(0)):
            yield chunk, False
        yield b"", True
    else:
        yield source, True


def select(source: Source, names: Iterable[str]) -> Iterator[str]:
    """Yield "stack: text" for each run of text whose element stack contains names in order."""
    wanted = list(names)
    parser = expat.ParserCreate(namespace_separator=" ")
    stack: list[str] = []
    pending: list[str] = []
    found: list[str] = []

    def flush(*_ignored) -> None:
        if pending:
            data = "".join(pending)
            pending.clear()
            if contains_all(stack, wanted):
                found.append(f"{' '.join(stack)}: {data}")

    def start(name, attrs) -> None:
        flush()
        stack.append(_local(name))

    def end(name) -> None:
        flush()
        stack.pop()

    parser.StartElementHandler = start
    parser.EndElementHandler = end
    parser.CharacterDataHandler = pending.append
    parser.CommentHandler = flush
    parser.ProcessingInstructionHandler = flush

    for chunk, final in _chunks(source):
        parser.Parse(chunk, final)
        if final:
            flush()
        yield from found
        found.clear()


def main(argv=None) -> int:
    """Select elements named on the command line from XML on standard input."""
    names = sys.argv[1:] if argv is None else list(argv)
    try:
        for line in select(sys.stdin.buffer, names):
            print(line)
    except expat.ExpatError as err:
        print(f"xmlselect: {err}", file=sys.stderr)
        return 1
    return 0