import json
import math
from collections.abc import (
    Callable,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
    Set,
)
from datetime import date
from enum import Enum
from typing import Any, Self, override

__all__ = (
    "CanonMap",
    "Canonizer",
    "JsonCanonMap",
    "SelfCanonMap",
    "canonize_by_pick",
    "json_canonize",
    "naive_canonize",
)

type Canonizer[K] = Callable[[K], Hashable]


def naive_canonize(lookup: Any, max_depth: int = 2) -> Hashable:
    """
    Fallible canonizer mapping objects to hashable primitives so they compare by
    value. Strings are prefixed with `String: ` to avoid colliding with the
    stringification of other objects, booleans with `Boolean: ` because `True == 1`.
    Containers are stringified down to `max_depth` levels, below which every container
    of the same type canonizes to the same value.
    """

    match lookup:
        case str():
            return f"String: {lookup}"

        case bool():
            return f"Boolean: {lookup}"

        case float() if math.isnan(lookup):
            return "Number: NaN"

        case None | int() | float() | complex() | bytes() | Enum():
            return lookup

        case date():
            return f"Date: {lookup.isoformat()}"

    if max_depth <= 0:
        return f"<{type(lookup).__name__}>"

    def canonize(value: Any) -> str:
        return str(naive_canonize(value, max_depth - 1))

    match lookup:
        case Mapping():
            items = sorted(
                (str(key), canonize(value)) for key, value in lookup.items()
            )
            return "{" + ", ".join(f"{key}: {value}" for key, value in items) + "}"

        case list():
            return "[" + ", ".join(map(canonize, lookup)) + "]"

        case tuple():
            return "(" + ", ".join(map(canonize, lookup)) + ")"

        case Set():
            return "{" + ", ".join(sorted(map(canonize, lookup))) + "}"

        case object(__dict__=attributes):
            return f"{type(lookup).__name__}{naive_canonize(attributes, max_depth)}"

    return lookup  # type: ignore[no-any-return]


def json_canonize(lookup: Any) -> str:
    """
    Canonize with `json.dumps`. Better than `naive_canonize` on deeply nested
    structures, but subject to JSON's limits: tuples and lists conflate, non-string
    keys are stringified and unserializable objects raise `TypeError`.
    """

    return json.dumps(lookup, sort_keys=True)


def canonize_by_pick(pick: Iterable[str]) -> Canonizer[Any]:
    """
    Only suitable for picked values with a distinct string representation.
    """

    keys = tuple(pick)

    def canonizer(lookup: Any) -> str:
        if isinstance(lookup, Mapping):
            values = (lookup[key] for key in keys)
        else:
            values = (getattr(lookup, key) for key in keys)

        return "|".join(f"{key}:{value}" for key, value in zip(keys, values))

    return canonizer


class CanonMap[K, V](MutableMapping[K, V]):
    __slots__ = ("__canonizer", "__entries")

    __canonizer: Canonizer[K]
    __entries: dict[Hashable, tuple[K, V]]

    def __init__(
        self,
        entries: Iterable[tuple[K, V]] | Mapping[K, V] | None = None,
        canonizer: Canonizer[K] | int = naive_canonize,
    ) -> None:
        if isinstance(canonizer, int):
            depth = canonizer
            canonizer = lambda lookup: naive_canonize(lookup, depth)  # noqa: E731

        self.__canonizer = canonizer
        self.__entries = {}

        if isinstance(entries, Mapping):
            entries = entries.items()

        for key, value in entries or ():
            self[key] = value

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.__entries.values())!r})"

    @override
    def __getitem__(self, key: K, /) -> V:
        try:
            _, value = self.__entries[self.__canonizer(key)]
        except KeyError as exc:
            raise KeyError(key) from exc

        return value

    @override
    def __setitem__(self, key: K, value: V, /) -> None:
        self.__entries[self.__canonizer(key)] = (key, value)

    @override
    def __delitem__(self, key: K, /) -> None:
        try:
            del self.__entries[self.__canonizer(key)]
        except KeyError as exc:
            raise KeyError(key) from exc

    @override
    def __iter__(self) -> Iterator[K]:
        for key, _ in tuple(self.__entries.values()):
            yield key

    @override
    def __len__(self) -> int:
        return len(self.__entries)

    @override
    def __contains__(self, key: object, /) -> bool:
        return self.__canonizer(key) in self.__entries  # type: ignore[arg-type]

    @override
    def clear(self) -> None:
        self.__entries.clear()

    @property
    def canonizer(self) -> Canonizer[K]:
        return self.__canonizer


class JsonCanonMap[K, V](CanonMap[K, V]):
    __slots__ = ()

    def __init__(
        self,
        entries: Iterable[tuple[K, V]] | Mapping[K, V] | None = None,
    ) -> None:
        super().__init__(entries, json_canonize)


class SelfCanonMap[V](CanonMap[Any, V]):
    """
    CanonMap indexing values by some of their own attributes.

    Example:
        ducks = SelfCanonMap(("name",), [Duck("Rodney", 13217), Duck("Ellis", 11992)])
        ducks[{"name": "Ellis"}]  # Duck("Ellis", 11992)
    """

    __slots__ = ()

    def __init__(self, pick: Iterable[str], values: Iterable[V] = ()) -> None:
        super().__init__(canonizer=canonize_by_pick(pick))
        self.fill(values)

    def add(self, value: V) -> Self:
        self[value] = value
        return self

    def fill(self, values: Iterable[V]) -> Self:
        for value in values:
            self.add(value)

        return self
