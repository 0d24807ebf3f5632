r"""
Enumoption value maps: textual representations → enum members.

Overview
- ValueMap[_E]: ordered, read-only Mapping[str, _E] whose keys are compared
  through a comparer (a key function over the representation text).
  • Several representations may resolve to the same member ("def" and "ghi" → B).
  • No two representations may be equal under the comparer; adding one raises
    DuplicateRepresentationError instead of overwriting.
  • Iteration yields representations exactly as registered, in registration order.

- Comparers
  • ignore_case(text): case-insensitive ordinal comparison (str.lower). The default.
  • ordinal(text): exact, case-sensitive comparison.
  Any callable returning a hashable key can be used, e.g. ``lambda text: text.replace("_", "-")``.

Quick example:
    >>> values = ValueMap([("abc", Letter.A), ("def", Letter.B)])
    >>> values["ABC"]
    <Letter.A: 1>
    >>> list(values)
    ['abc', 'def']
"""
from collections.abc import Mapping
from enum import Enum

from .faults import DuplicateRepresentationError


def ordinal(text, /):
    """
    Case-sensitive comparer: representations match only when identical.
    """
    return text


def ignore_case(text, /):
    """
    Case-insensitive comparer: "ABC", "abc" and "AbC" are the same representation.
    """
    return text.lower()


class ValueMap[_E: Enum](Mapping[str, _E]):
    """
    Ordered, read-only mapping from textual representation to enum member.

    Parameters
    - pairs: Mapping[str, _E] | Iterable[tuple[str, _E]]
      Initial entries, validated and added in order.
    - comparer: Callable[[str], Hashable]
      Key function applied to representations on insertion and lookup.

    Raises
    - TypeError: when the comparer is not callable, a representation is not a
      string, or a value is not an enum member.
    - ValueError: when a representation is empty after trimming.
    - DuplicateRepresentationError: when two representations compare equal.

    Notes
    - There is no public mutation API. The configuration builder is the only
      writer; it hands a fresh copy to the configuration it builds.
    """
    __slots__ = ("_comparer", "_entries", "_index")

    def __init__(self, pairs=(), /, comparer=ignore_case):
        if not callable(comparer):
            raise TypeError("value-map 'comparer' must be callable")
        self._comparer = comparer
        self._entries = {}  # representation (as registered) → member
        self._index = {}  # comparer key → representation (as registered)
        for representation, value in (pairs.items() if isinstance(pairs, Mapping) else pairs):
            self._add(representation, value)

    @property
    def comparer(self):
        return self._comparer

    def _add(self, representation, value, /):
        if not isinstance(representation, str):
            raise TypeError("value-map representations must be strings")
        elif not representation.strip():
            raise ValueError("value-map representations cannot be empty")
        if not isinstance(value, Enum):
            raise TypeError("value-map values must be enum members")

        if (key := self._comparer(representation)) in self._index:
            existing = self._index[key]
            raise DuplicateRepresentationError(
                "representation %r is already in use for %s (registered as %r)" % (
                    representation, self._entries[existing], existing
                ),
                representation=representation,
                value=value,
                existing=self._entries[existing],
                hint="pick another spelling for %s or drop one of the registrations" % value,
            )

        self._index[key] = representation
        self._entries[representation] = value

    def copy(self):
        """
        Return an independent map with the same entries and comparer.
        """
        return type(self)(self._entries.items(), comparer=self._comparer)

    def __getitem__(self, representation, /):
        if not isinstance(representation, str):
            raise KeyError(representation)
        try:
            return self._entries[self._index[self._comparer(representation)]]
        except KeyError:
            raise KeyError(representation) from None

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "value-map(%r, comparer=%s)" % (
            self._entries, getattr(self._comparer, "__name__", repr(self._comparer))
        )

    def __rich_repr__(self):
        yield dict(self._entries)
        yield "comparer", getattr(self._comparer, "__name__", self._comparer)


__all__ = (
    "ValueMap",
    "ordinal",
    "ignore_case",
)
