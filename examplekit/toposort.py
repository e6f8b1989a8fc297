"""Topological ordering of a prerequisite graph."""

from __future__ import annotations

from typing import Iterable, Mapping

PREREQS: dict[str, list[str]] = {
    "algorithms": ["data structures"],
    "calculus": ["linear algebra"],
    "compilers": [
        "data structures",
        "formal languages",
        "computer organization",
    ],
    "data structures": ["discrete math"],
    "databases": ["data structures"],
    "discrete math": ["intro to programming"],
    "formal languages": ["discrete math"],
    "networks": ["operating systems"],
    "operating systems": ["data structures", "computer organization"],
    "programming languages": ["data structures", "computer organization"],
}


def topo_sort(prereqs: Mapping[str, Iterable[str]]) -> list[str]:
    """Return every item so that each comes after its prerequisites."""
    order: list[str] = []
    seen: set[str] = set()

    def visit_all(items: Iterable[str]) -> None:
        for item in items:
            if item not in seen:
                seen.add(item)
                visit_all(prereqs.get(item, ()))
                order.append(item)

    visit_all(sorted(prereqs))
    return order


def main(argv=None) -> int:
    """Print the courses in an order that respects their prerequisites."""
    for number, course in enumerate(topo_sort(PREREQS), start=1):
        print(f"{number}:\t{course}")
    return 0