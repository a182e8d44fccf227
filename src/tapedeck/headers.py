"""Header and payload value types shared by messages and tapes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

# Payload of a request or response. A Path points at a file holding the body.
Body = str | bytes | Path | None


class Headers:
    """Immutable, ordered HTTP header list.

    Stores (name, value) pairs in capture order, so a header sent twice
    keeps both values. Name lookups are case-insensitive; where distinct
    names are reported, the first-seen spelling wins.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            (str(name), str(value)) for name, value in pairs
        )

    @classmethod
    def of(cls, mapping: Mapping[str, str | Iterable[str]]) -> Headers:
        """Build headers from a name -> value (or list of values) mapping."""
        pairs: list[tuple[str, str]] = []
        for name, values in mapping.items():
            if isinstance(values, (str, bytes)):
                values = [values]
            for value in values:
                pairs.append((name, value))
        return cls(pairs)

    @classmethod
    def coerce(cls, value: Any) -> Headers:
        """Accept Headers, a mapping, an iterable of pairs, or None."""
        if value is None:
            return cls()
        if isinstance(value, Headers):
            return value
        if isinstance(value, Mapping):
            return cls.of(value)
        return cls(value)

    def get(self, name: str) -> str | None:
        """Return the first value for name, or None if absent."""
        wanted = name.lower()
        for key, value in self._pairs:
            if key.lower() == wanted:
                return value
        return None

    def get_all(self, name: str) -> list[str]:
        wanted = name.lower()
        return [value for key, value in self._pairs if key.lower() == wanted]

    def names(self) -> list[str]:
        """Distinct header names in capture order."""
        return list(self.to_multimap())

    def to_multimap(self) -> dict[str, list[str]]:
        """Group values by name, preserving capture order of names and values."""
        spelled: dict[str, str] = {}
        grouped: dict[str, list[str]] = {}
        for key, value in self._pairs:
            name = spelled.setdefault(key.lower(), key)
            grouped.setdefault(name, []).append(value)
        return grouped

    def without(self, *names: str) -> Headers:
        """Return a copy with every value of the given names removed."""
        dropped = {name.lower() for name in names}
        return Headers(pair for pair in self._pairs if pair[0].lower() not in dropped)

    def replacing(self, name: str, value: str) -> Headers:
        """Return a copy where name carries exactly one value.

        The replacement takes the position of the first existing value, or
        is appended when the header was not present.
        """
        wanted = name.lower()
        pairs: list[tuple[str, str]] = []
        placed = False
        for key, existing in self._pairs:
            if key.lower() != wanted:
                pairs.append((key, existing))
            elif not placed:
                pairs.append((key, value))
                placed = True
        if not placed:
            pairs.append((name, value))
        return Headers(pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._pairs == other._pairs

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        return f"Headers({list(self._pairs)!r})"
