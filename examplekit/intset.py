"""A set of small non-negative integers stored as a bit vector."""

from __future__ import annotations

from typing import Iterable, Iterator

_WORD = 64


class IntSet:
    """A set of small non-negative integers; empty when created without values."""

    __slots__ = ("_words",)

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._words: list[int] = []
        for value in values:
            self.add(value)

    @property
    def words(self) -> tuple[int, ...]:
        """The 64-bit words backing the set."""
        return tuple(self._words)

    def has(self, x: int) -> bool:
        """Report whether the set contains x."""
        if x < 0:
            return False
        word, bit = divmod(x, _WORD)
        return word < len(self._words) and bool(self._words[word] >> bit & 1)

    __contains__ = has

    def add(self, x: int) -> None:
        """Add the non-negative value x to the set."""
        if x < 0:
            raise ValueError(f"IntSet holds non-negative values only, got {x}")
        word, bit = divmod(x, _WORD)
        if word >= len(self._words):
            self._words.extend([0] * (word + 1 - len(self._words)))
        self._words[word] |= 1 << bit

    def union_with(self, other: IntSet) -> None:
        """Set this set to the union of itself and other."""
        for i, word in enumerate(other._words):
            if i < len(self._words):
                self._words[i] |= word
            else:
                self._words.append(word)

    def __iter__(self) -> Iterator[int]:
        for i, word in enumerate(self._words):
            if word:
                yield from (_WORD * i + j for j in range(_WORD) if word >> j & 1)

    def __len__(self) -> int:
        return sum(word.bit_count() for word in self._words)

    def __str__(self) -> str:
        return "{" + " ".join(map(str, self)) + "}"

    def __repr__(self) -> str:
        return f"IntSet({list(self)})"