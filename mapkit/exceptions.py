from collections.abc import Sequence
from typing import Any, override

__all__ = (
    "BumpLimitError",
    "DeepLookupError",
    "MapkitError",
    "NoEntry",
    "ResolverCaptureError",
)


class MapkitError(Exception): ...


class NoEntry[K](KeyError, MapkitError):
    __slots__ = ("__key",)

    __key: K

    def __init__(self, key: K | Any, message: str | None = None) -> None:
        if message is None:
            message = f'Map has no entry "{key}"'

        super().__init__(message)
        self.__key = key

    @override
    def __str__(self) -> str:
        return str(self.args[0])

    @property
    def key(self) -> K:
        return self.__key


class DeepLookupError[K](NoEntry[Sequence[K]]):
    __slots__ = ("__matched",)

    __matched: tuple[K, ...]

    def __init__(
        self,
        lookup: Sequence[K],
        matched: Sequence[K],
        message: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Deep lookup failed on keys [{", ".join(map(str, lookup))}], "
                f"keys matched were [{", ".join(map(str, matched))}]"
            )

        super().__init__(tuple(lookup), message)
        self.__matched = tuple(matched)

    @property
    def lookup(self) -> tuple[K, ...]:
        return self.key  # type: ignore[return-value]

    @property
    def matched(self) -> tuple[K, ...]:
        return self.__matched


class ResolverCaptureError(MapkitError): ...


class BumpLimitError(MapkitError): ...
