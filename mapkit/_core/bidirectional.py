from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, override

__all__ = ("BiMap", "ReversedBiMap")


class BiMap[K, V](MutableMapping[K, V]):
    __slots__ = ("__forward", "__reverse", "__reversed")

    __forward: dict[K, V]
    __reverse: dict[V, K]
    __reversed: ReversedBiMap[V, K]

    def __init__(
        self,
        entries: Iterable[tuple[K, V]] | Mapping[K, V] | None = None,
    ) -> None:
        self.__forward = {}
        self.__reverse = {}
        self.__reversed = ReversedBiMap(self, self.__reverse)

        if isinstance(entries, Mapping):
            entries = entries.items()

        for key, value in entries or ():
            self[key] = value

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__forward!r})"

    @override
    def __getitem__(self, key: K, /) -> V:
        return self.__forward[key]

    @override
    def __setitem__(self, key: K, value: V, /) -> None:
        if value in self.__reverse:
            del self[self.__reverse[value]]

        if key in self.__forward:
            del self.__reverse[self.__forward[key]]

        self.__forward[key] = value
        self.__reverse[value] = key

    @override
    def __delitem__(self, key: K, /) -> None:
        value = self.__forward.pop(key)
        del self.__reverse[value]

    @override
    def __iter__(self) -> Iterator[K]:
        return iter(self.__forward)

    @override
    def __len__(self) -> int:
        return len(self.__forward)

    @override
    def __contains__(self, key: object, /) -> bool:
        return key in self.__forward

    @override
    def clear(self) -> None:
        self.__forward.clear()
        self.__reverse.clear()

    @property
    def reversed(self) -> ReversedBiMap[V, K]:
        return self.__reversed

    def get_key(self, value: V, default: Any = None) -> K | Any:
        return self.__reverse.get(value, default)

    def has_value(self, value: V) -> bool:
        return value in self.__reverse

    def delete_value(self, value: V) -> bool:
        try:
            key = self.__reverse[value]
        except KeyError:
            return False

        del self[key]
        return True


@dataclass(repr=False, eq=False, frozen=True, slots=True)
class ReversedBiMap[V, K](MutableMapping[V, K]):
    owner: BiMap[K, V]
    __reverse: dict[V, K] = field(repr=False)

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__reverse!r})"

    @override
    def __getitem__(self, value: V, /) -> K:
        return self.__reverse[value]

    @override
    def __setitem__(self, value: V, key: K, /) -> None:
        self.owner[key] = value

    @override
    def __delitem__(self, value: V, /) -> None:
        if not self.owner.delete_value(value):
            raise KeyError(value)

    @override
    def __iter__(self) -> Iterator[V]:
        return iter(self.__reverse)

    @override
    def __len__(self) -> int:
        return len(self.__reverse)

    @override
    def __contains__(self, value: object, /) -> bool:
        return value in self.__reverse

    @override
    def clear(self) -> None:
        self.owner.clear()

    @property
    def reversed(self) -> BiMap[K, V]:
        return self.owner

    def get_key(self, key: K, default: Any = None) -> V | Any:
        return self.owner.get(key, default)

    def has_value(self, key: K) -> bool:
        return key in self.owner

    def delete_value(self, key: K) -> bool:
        try:
            del self.owner[key]
        except KeyError:
            return False

        return True
