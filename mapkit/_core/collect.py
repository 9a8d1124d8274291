from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from mapkit._core.bidirectional import BiMap
from mapkit._core.common.option import Option, Some, absent
from mapkit._core.reconcile import Reconciler, reconcile_append
from mapkit.exceptions import BumpLimitError, NoEntry

__all__ = (
    "Bumper",
    "Entries",
    "ErrorSpec",
    "accumulate",
    "accumulate_into",
    "collect",
    "collect_bimap",
    "collect_bumping",
    "collect_entry",
    "collect_into",
    "flat_make_entries",
    "folding_get",
    "get_or_else",
    "get_or_fail",
    "get_or_val",
    "insert_bumping",
    "invert_bin_map",
    "iter_entries",
    "keys_of",
    "make_entries",
    "make_no_entry",
    "map_to_dictionary",
    "map_values",
    "reverse_map",
    "select_map",
    "uniform_map",
    "values_of",
)

type Entries[K, V] = Iterable[tuple[K, V]] | Mapping[K, V]
type Bumper[K, V] = Callable[[K, int, K, V, V], K | None]
type ErrorSpec[K] = str | Exception | Callable[[K], str | Exception] | None


def iter_entries[K, V](entries: Entries[K, V]) -> Iterator[tuple[K, V]]:
    if isinstance(entries, Mapping):
        return iter(entries.items())

    return iter(entries)


"""
Collecting
"""


def collect_into[K, T, V](
    entries: Entries[K, T],
    seed: MutableMapping[K, V],
    reconciler: Reconciler[K, T, V] | None = None,
) -> MutableMapping[K, V]:
    if reconciler is None:
        for key, value in iter_entries(entries):
            seed[key] = value  # type: ignore[assignment]

        return seed

    for key, incoming in iter_entries(entries):
        collect_entry(seed, key, incoming, reconciler)

    return seed


def collect_entry[K, T, V](
    seed: MutableMapping[K, V],
    key: K,
    incoming: T,
    reconciler: Reconciler[K, T, V] | None = None,
) -> Option[V]:
    """
    Returns the value now stored under the key, or `absent` if the reconciler removed it.
    """

    if reconciler is None:
        seed[key] = incoming  # type: ignore[assignment]
        return Some(incoming)  # type: ignore[arg-type]

    colliding = seed[key] if key in seed else absent
    value = reconciler(colliding, incoming, key)

    if value is absent:
        seed.pop(key, None)
        return absent

    seed[key] = value  # type: ignore[assignment]
    return Some(value)  # type: ignore[arg-type]


def collect[K, T, V](
    entries: Entries[K, T],
    reconciler: Reconciler[K, T, V] | None = None,
) -> dict[K, Any]:
    seed: dict[K, Any] = {}
    collect_into(entries, seed, reconciler)
    return seed


def collect_bimap[K, T, V](
    entries: Entries[K, T],
    reconciler: Reconciler[K, T, V] | None = None,
) -> BiMap[K, Any]:
    seed: BiMap[K, Any] = BiMap()
    collect_into(entries, seed, reconciler)
    return seed


def insert_bumping[K, V](
    seed: MutableMapping[K, V],
    key: K,
    incoming: V,
    bumper: Bumper[K, V],
    *,
    max_attempts: int | None = None,
) -> K | None:
    """
    Returns the key the value was written under, or `None` if the bumper gave up.
    """

    if key not in seed:
        seed[key] = incoming
        return key

    colliding = seed[key]
    candidate = key
    attempts = 0

    while True:
        if max_attempts is not None and attempts >= max_attempts:
            raise BumpLimitError(
                f"Couldn't find a free key for `{key}` after {attempts} attempts."
            )

        attempts += 1
        bumped = bumper(candidate, attempts, key, colliding, incoming)

        if bumped is None:
            return None

        if bumped not in seed:
            seed[bumped] = incoming
            return bumped

        candidate = bumped


def collect_bumping[K, V](
    entries: Entries[K, V],
    bumper: Bumper[K, V],
    seed: MutableMapping[K, V] | None = None,
    *,
    max_attempts: int | None = None,
) -> MutableMapping[K, V]:
    if seed is None:
        seed = {}

    for key, value in iter_entries(entries):
        insert_bumping(seed, key, value, bumper, max_attempts=max_attempts)

    return seed


"""
Entries
"""


def make_entries[T, K, V](
    values: Iterable[T],
    key_function: Callable[[T], K | None],
    mapper: Callable[[T, K], V] | None = None,
) -> Iterator[tuple[K, Any]]:
    for value in values:
        key = key_function(value)

        if key is None:
            continue

        yield key, value if mapper is None else mapper(value, key)


def flat_make_entries[T, K, V](
    values: Iterable[T],
    expand: Callable[[T], Iterable[tuple[K, V]]],
) -> Iterator[tuple[K, V]]:
    for value in values:
        yield from expand(value)


def accumulate_into[T, K, V](
    values: Iterable[T],
    seed: MutableMapping[K, V],
    key_function: Callable[[T], K | None],
    reconciler: Reconciler[K, T, V] | None = None,
) -> MutableMapping[K, V]:
    return collect_into(make_entries(values, key_function), seed, reconciler)


def accumulate[T, K, V](
    values: Iterable[T],
    key_function: Callable[[T], K | None],
    reconciler: Reconciler[K, T, V] | None = None,
) -> dict[K, Any]:
    seed: dict[K, Any] = {}
    accumulate_into(values, seed, key_function, reconciler)
    return seed


def reverse_map[K, V](entries: Entries[K, V]) -> Iterator[tuple[V, K]]:
    for key, value in iter_entries(entries):
        yield value, key


def map_values[K, T, V](
    entries: Entries[K, T],
    function: Callable[[T, K], V],
) -> Iterator[tuple[K, V]]:
    for key, value in iter_entries(entries):
        yield key, function(value, key)


def keys_of[K](entries: Entries[K, Any]) -> Iterator[K]:
    for key, _ in iter_entries(entries):
        yield key


def values_of[V](entries: Entries[Any, V]) -> Iterator[V]:
    for _, value in iter_entries(entries):
        yield value


def uniform_map[K, V](keys: Iterable[K], of: V) -> Iterator[tuple[K, V]]:
    for key in keys:
        yield key, of


def select_map[K, V](
    entries: Entries[K, V],
    predicate: Callable[[V, K], bool],
) -> Iterator[tuple[K, V]]:
    for key, value in iter_entries(entries):
        if predicate(value, key):
            yield key, value


def invert_bin_map[K, T](entries: Entries[K, Iterable[T]]) -> dict[T, list[K]]:
    inverted = flat_make_entries(
        iter_entries(entries),
        lambda entry: ((value, entry[0]) for value in entry[1]),
    )
    return collect(inverted, reconcile_append())


def map_to_dictionary[K, V](
    entries: Entries[K, V],
    stringifier: Callable[[K], str] = str,
) -> dict[str, V]:
    return {stringifier(key): value for key, value in iter_entries(entries)}


"""
Lookups
"""


def folding_get[K, V, R](
    mapping: Mapping[K, V],
    key: K,
    if_present: Callable[[V, K], R],
    if_absent: Callable[[K], R] = lambda key: None,  # type: ignore[assignment]
) -> R:
    if key in mapping:
        return if_present(mapping[key], key)

    return if_absent(key)


def get_or_val[K, V](mapping: Mapping[K, V], key: K, substitute: V) -> V:
    if key in mapping:
        return mapping[key]

    return substitute


def get_or_else[K, V](
    mapping: Mapping[K, V],
    key: K,
    substitute: Callable[[K], V],
) -> V:
    if key in mapping:
        return mapping[key]

    return substitute(key)


def make_no_entry[K](key: K, error: ErrorSpec[K] = None) -> Exception:
    if callable(error):
        error = error(key)

    if isinstance(error, Exception):
        return error

    return NoEntry(key, error)


def get_or_fail[K, V](
    mapping: Mapping[K, V],
    key: K,
    error: ErrorSpec[K] = None,
) -> V:
    if key in mapping:
        return mapping[key]

    raise make_no_entry(key, error)
