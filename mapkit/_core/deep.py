from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
    Sequence,
)
from typing import Any

from mapkit._core.collect import make_entries
from mapkit._core.common.option import Option, Some, absent, fold_option
from mapkit._core.reconcile import Reconciler
from mapkit.exceptions import DeepLookupError

__all__ = (
    "DeepErrorSpec",
    "DeepMap",
    "deep_accumulate",
    "deep_accumulate_into",
    "deep_collect",
    "deep_collect_into",
    "deep_folding_get",
    "deep_get",
    "deep_get_or_else",
    "deep_get_or_fail",
    "deep_get_or_val",
    "deep_has",
    "deep_map_stream",
    "deep_map_to_dictionary",
    "squeeze_deep_map",
)

type DeepMap[K, V] = MutableMapping[K, V | DeepMap[K, V]]
type DeepErrorSpec[K] = (
    str
    | Exception
    | Callable[[tuple[K, ...], tuple[K, ...]], str | Exception]
    | None
)


"""
Collecting
"""


def deep_collect_into[K, T, V](
    entries: Iterable[tuple[Sequence[K], T]],
    seed: DeepMap[K, V],
    reconciler: Reconciler[tuple[K, ...], T, V] | None = None,
) -> DeepMap[K, V]:
    for keys, incoming in entries:
        if not keys:
            continue

        *path, last = keys
        deepest = seed

        for depth, key in enumerate(path):
            if key not in deepest:
                deepest[key] = {}

            nested = deepest[key]

            if not isinstance(nested, MutableMapping):
                raise TypeError(
                    f"Can't collect into `{list(keys)}`: the value at "
                    f"`{list(keys[: depth + 1])}` isn't a mapping."
                )

            deepest = nested

        if reconciler is None:
            deepest[last] = incoming  # type: ignore[assignment]
            continue

        colliding = deepest[last] if last in deepest else absent
        value = reconciler(colliding, incoming, tuple(keys))  # type: ignore[arg-type]

        if value is absent:
            deepest.pop(last, None)
        else:
            deepest[last] = value  # type: ignore[assignment]

    return seed


def deep_collect[K, T, V](
    entries: Iterable[tuple[Sequence[K], T]],
    reconciler: Reconciler[tuple[K, ...], T, V] | None = None,
) -> dict[K, Any]:
    seed: dict[K, Any] = {}
    deep_collect_into(entries, seed, reconciler)
    return seed


def deep_accumulate_into[T, K, V](
    values: Iterable[T],
    seed: DeepMap[K, V],
    key_function: Callable[[T], Sequence[K] | None],
    reconciler: Reconciler[tuple[K, ...], T, V] | None = None,
) -> DeepMap[K, V]:
    return deep_collect_into(make_entries(values, key_function), seed, reconciler)


def deep_accumulate[T, K, V](
    values: Iterable[T],
    key_function: Callable[[T], Sequence[K] | None],
    reconciler: Reconciler[tuple[K, ...], T, V] | None = None,
) -> dict[K, Any]:
    seed: dict[K, Any] = {}
    deep_accumulate_into(values, seed, key_function, reconciler)
    return seed


"""
Lookups
"""


def _deep_lookup[K](
    mapping: Mapping[K, Any],
    lookup: Sequence[K],
) -> tuple[Option[Any], tuple[K, ...]]:
    matched: list[K] = []
    current: Any = mapping

    for key in lookup:
        if not isinstance(current, Mapping) or key not in current:
            return absent, tuple(matched)

        matched.append(key)
        current = current[key]

    if not matched:
        return absent, ()

    return Some(current), tuple(matched)


def deep_folding_get[K, R](
    mapping: Mapping[K, Any],
    lookup: Sequence[K],
    if_present: Callable[[Any, tuple[K, ...]], R],
    if_absent: Callable[[tuple[K, ...], tuple[K, ...]], R],
) -> R:
    option, matched = _deep_lookup(mapping, lookup)
    keys = tuple(lookup)
    return fold_option(
        option,
        lambda value: if_present(value, keys),
        lambda: if_absent(keys, matched),
    )


def deep_get[K](mapping: Mapping[K, Any], lookup: Sequence[K]) -> Any:
    return deep_get_or_val(mapping, lookup, None)


def deep_get_or_val[K, V](
    mapping: Mapping[K, Any],
    lookup: Sequence[K],
    substitute: V,
) -> Any | V:
    return deep_folding_get(
        mapping,
        lookup,
        lambda value, _: value,
        lambda *_: substitute,
    )


def deep_get_or_else[K, V](
    mapping: Mapping[K, Any],
    lookup: Sequence[K],
    substitute: Callable[[tuple[K, ...], tuple[K, ...]], V],
) -> Any | V:
    return deep_folding_get(mapping, lookup, lambda value, _: value, substitute)


def deep_get_or_fail[K](
    mapping: Mapping[K, Any],
    lookup: Sequence[K],
    error: DeepErrorSpec[K] = None,
) -> Any:
    def fail(keys: tuple[K, ...], matched: tuple[K, ...]) -> Any:
        nonlocal error

        if callable(error):
            error = error(keys, matched)

        if isinstance(error, Exception):
            raise error

        raise DeepLookupError(keys, matched, error)

    return deep_get_or_else(mapping, lookup, fail)


def deep_has[K](mapping: Mapping[K, Any], lookup: Sequence[K]) -> bool:
    option, _ = _deep_lookup(mapping, lookup)
    return option is not absent


"""
Flattening
"""


def deep_map_stream[K, V](
    deep_map: Mapping[K, Any],
) -> Iterator[tuple[tuple[K, ...], V]]:
    for key, value in deep_map.items():
        if isinstance(value, Mapping):
            for keys, inner in deep_map_stream(value):
                yield (key, *keys), inner
        else:
            yield (key,), value


def squeeze_deep_map[V](deep_map: Mapping[Any, Any]) -> Iterator[V]:
    for _, value in deep_map_stream(deep_map):
        yield value


def deep_map_to_dictionary[K](
    deep_map: Mapping[K, Any],
    stringifier: Callable[[K, int], str] = lambda key, depth: str(key),
) -> dict[str, Any]:
    def convert(mapping: Mapping[K, Any], depth: int) -> dict[str, Any]:
        return {
            stringifier(key, depth): (
                convert(value, depth + 1) if isinstance(value, Mapping) else value
            )
            for key, value in mapping.items()
        }

    return convert(deep_map, 0)
