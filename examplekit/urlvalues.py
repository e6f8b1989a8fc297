"""A map from string keys to lists of string values."""

from __future__ import annotations


class Values(dict):
    """Maps a string key to a list of values."""

    def first(self, key: str) -> str:
        """Return the first value for key, or "" if there is none."""
        values = self.get(key)
        return values[0] if values else ""

    def add(self, key: str, value: str) -> None:
        """Append value to the values of key."""
        self.setdefault(key, []).append(value)