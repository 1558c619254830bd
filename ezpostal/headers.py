"""Ordered, case-insensitive, multi-valued header mapping.

Header names are matched without regard to case, but the spelling used the
first time a name is added is the one emitted. Names are emitted in the order
they were first added and values in the order they were added under a name.
"""

from typing import Iterable, Iterator, Mapping


class MIMEHeader:
    """A multimap from header name to an ordered list of values.

    Example:
        header = MIMEHeader()
        header.set("Content-Type", "text/plain")
        header.add("X-Tag", "a")
        header.add("x-tag", "b")
        header.get_all("X-TAG")  # ["a", "b"]
    """

    def __init__(self, headers: "Mapping[str, Iterable[str]] | MIMEHeader | None" = None):
        # lowercased name -> (first-seen spelling, values)
        self._entries: dict[str, tuple[str, list[str]]] = {}
        if headers:
            self.update(headers)

    def add(self, name: str, value: str) -> None:
        """Appends `value` to the values of `name`, keeping existing ones."""
        key = name.lower()
        if key in self._entries:
            self._entries[key][1].append(value)
        else:
            self._entries[key] = (name, [value])

    def set(self, name: str, value: str) -> None:
        """Replaces every value of `name` with the single `value`.

        The position and spelling of an existing name are kept.
        """
        key = name.lower()
        if key in self._entries:
            self._entries[key] = (self._entries[key][0], [value])
        else:
            self._entries[key] = (name, [value])

    def get(self, name: str, default: str | None = None) -> str | None:
        """Returns the first value of `name`, or `default` if it is absent."""
        entry = self._entries.get(name.lower())
        return entry[1][0] if entry else default

    def get_all(self, name: str) -> list[str]:
        """Returns a copy of every value of `name` (empty if absent)."""
        entry = self._entries.get(name.lower())
        return list(entry[1]) if entry else []

    def update(self, headers: "Mapping[str, Iterable[str]] | MIMEHeader") -> None:
        """Adds every value of `headers`. A plain string value counts as one value."""
        pairs = headers.lists() if isinstance(headers, MIMEHeader) else headers.items()
        for name, values in pairs:
            if isinstance(values, str):
                values = [values]
            for value in values:
                self.add(name, value)

    def keys(self) -> list[str]:
        return [name for name, _ in self._entries.values()]

    def lists(self) -> Iterator[tuple[str, list[str]]]:
        """Yields `(name, values)` per header name."""
        for name, values in self._entries.values():
            yield name, list(values)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yields one `(name, value)` pair per value, in emission order."""
        for name, values in self._entries.values():
            for value in values:
                yield name, value

    def copy(self) -> "MIMEHeader":
        return MIMEHeader(self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __delitem__(self, name: str) -> None:
        del self._entries[name.lower()]

    def __getitem__(self, name: str) -> list[str]:
        entry = self._entries.get(name.lower())
        if entry is None:
            raise KeyError(name)
        return list(entry[1])

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MIMEHeader):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"MIMEHeader({dict(self.lists())!r})"
