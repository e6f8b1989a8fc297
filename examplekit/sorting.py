"""Sort a music playlist into several orders and print it as a table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .durations import format_duration, parse_duration


@dataclass
class Track:
    """One track of a playlist; length is in seconds."""

    title: str
    artist: str
    album: str
    year: int
    length: float


TRACKS = [
    Track("Go", "Delilah", "From the Roots Up", 2012, parse_duration("3m38s")),
    Track("Go", "Moby", "Moby", 1992, parse_duration("3m37s")),
    Track("Go Ahead", "Alicia Keys", "As I Am", 2007, parse_duration("4m36s")),
    Track("Ready 2 Go", "Martin Solveig", "Smash", 2011, parse_duration("4m24s")),
]

_HEADER = ("Title", "Artist", "Album", "Year", "Length")
_RULE = ("-----", "------", "-----", "----", "------")
_PADDING = 2


def by_artist(track: Track) -> str:
    """Sort key: the artist."""
    return track.artist


def by_year(track: Track) -> int:
    """Sort key: the year."""
    return track.year


def custom_key(track: Track) -> tuple[str, int, float]:
    """Sort key: title, then year, then length."""
    return track.title, track.year, track.length


def format_tracks(tracks: Iterable[Track]) -> str:
    """Return the tracks as a table with aligned columns."""
    rows = [
        _HEADER,
        _RULE,
        *((t.title, t.artist, t.album, str(t.year), format_duration(t.length)) for t in tracks),
    ]
    widths = [max(len(cell) for cell in column) + _PADDING for column in zip(*rows)]
    return "".join("".join(cell.ljust(w) for cell, w in zip(row, widths)) + "\n" for row in rows)


def _show_ints() -> None:
    values = [3, 1, 4, 1]

    def report_sorted() -> None:
        print(str(values == sorted(values)).lower())

    def show() -> None:
        print(f"[{' '.join(map(str, values))}]")

    report_sorted()
    values.sort()
    show()
    report_sorted()
    values.sort(reverse=True)
    show()
    report_sorted()


def main(argv=None) -> int:
    """Print the playlist sorted in several orders."""
    _show_ints()
    tracks = list(TRACKS)

    print("byArtist:")
    tracks.sort(key=by_artist)
    print(format_tracks(tracks), end="")

    print("\nReverse(byArtist):")
    tracks.sort(key=by_artist, reverse=True)
    print(format_tracks(tracks), end="")

    print("\nbyYear:")
    tracks.sort(key=by_year)
    print(format_tracks(tracks), end="")

    print("\nCustom:")
    tracks.sort(key=custom_key)
    print(format_tracks(tracks), end="")
    return 0