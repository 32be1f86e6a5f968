"""
HTTP Header

Multi-valued, case-insensitive header mapping. Keys are stored in canonical
form ("x-req-id" -> "X-Req-Id") and map to an ordered list of values.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional


def canonical_key(key: str) -> str:
    """
    Canonicalize a header name.

    The first letter and any letter following a hyphen are upper-cased, the
    rest lower-cased. Names containing spaces or other non-token characters
    are returned unchanged.
    """
    if not key or any(c in key for c in " \t\r\n:"):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


class Header:
    """
    Ordered multi-valued header mapping.

    Usage:
        header = Header()
        header.add("Accept", "application/json")
        header.add("accept", "text/xml")
        header.get("ACCEPT")       # "application/json"
        header.get_all("Accept")   # ["application/json", "text/xml"]
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._values: dict[str, list[str]] = {}
        if initial:
            for key, value in initial.items():
                if isinstance(value, (list, tuple)):
                    for item in value:
                        self.add(key, item)
                else:
                    self.add(key, value)

    def get(self, key: str) -> str:
        """Return the first value for key, or "" when absent."""
        values = self._values.get(canonical_key(key))
        return values[0] if values else ""

    def get_all(self, key: str) -> list[str]:
        """Return a copy of all values for key."""
        return list(self._values.get(canonical_key(key), []))

    def set(self, key: str, value: Any) -> None:
        """Replace any existing values for key."""
        self._values[canonical_key(key)] = [str(value)]

    def add(self, key: str, value: Any) -> None:
        """Append a value for key."""
        self._values.setdefault(canonical_key(key), []).append(str(value))

    def delete(self, key: str) -> None:
        self._values.pop(canonical_key(key), None)

    def keys(self) -> list[str]:
        return list(self._values)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(key, list(values)) for key, values in self._values.items()]

    def copy(self) -> "Header":
        clone = Header()
        clone._values = {key: list(values) for key, values in self._values.items()}
        return clone

    def to_dict(self) -> dict[str, str]:
        """Flatten to single-valued form, joining repeated values with ", "."""
        return {key: ", ".join(values) for key, values in self._values.items() if values}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> "Header":
        header = cls()
        for key, value in pairs:
            header.add(key, value)
        return header

    @classmethod
    def from_response(cls, response: Any) -> "Header":
        """
        Build a Header from a requests.Response.

        Repeated header fields are kept separate when the underlying urllib3
        response exposes them; otherwise the folded requests headers are used.
        """
        raw_headers = getattr(getattr(response, "raw", None), "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "getlist"):
            header = cls()
            for key in raw_headers.keys():
                for value in raw_headers.getlist(key):
                    header.add(key, value)
            return header
        return cls.from_pairs((response.headers or {}).items())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Header({self._values!r})"
