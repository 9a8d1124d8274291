import itertools
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableSequence

__all__ = (
    "combine",
    "entries",
    "extend_into",
    "filtered",
    "flat_mapped",
    "for_each",
    "mapped",
    "repeat",
    "series",
    "sliced",
    "take",
    "to_list",
)


def mapped[T, R](iterable: Iterable[T], function: Callable[[T], R]) -> Iterator[R]:
    for value in iterable:
        yield function(value)


def filtered[T](iterable: Iterable[T], predicate: Callable[[T], bool]) -> Iterator[T]:
    for value in iterable:
        if predicate(value):
            yield value


def flat_mapped[T, R](
    iterable: Iterable[T],
    function: Callable[[T], Iterable[R]],
) -> Iterator[R]:
    for value in iterable:
        yield from function(value)


def for_each[T](iterable: Iterable[T], function: Callable[[T], object]) -> None:
    for value in iterable:
        function(value)


def combine[T](*iterables: Iterable[T]) -> Iterator[T]:
    return itertools.chain(*iterables)


def entries[V](mapping: Mapping[str, V]) -> Iterator[tuple[str, V]]:
    yield from mapping.items()


def series(start: int = 0, step: int = 1) -> Iterator[int]:
    """
    Infinite arithmetic progression.
    """

    return itertools.count(start, step)


def take[T](iterable: Iterable[T], count: int = 1) -> Iterator[T]:
    return itertools.islice(iterable, max(count, 0))


def repeat[T](iterable: Iterable[T]) -> Iterator[T]:
    """
    Cycle through the iterable forever. Values are cached on the first pass, so
    single-pass iterators can be repeated too. An empty iterable stops immediately.
    """

    return itertools.cycle(iterable)


def sliced[T](
    iterable: Iterable[T],
    start: int = 0,
    stop: int | None = None,
) -> Iterator[T]:
    return itertools.islice(iterable, max(start, 0), stop)


def to_list[T](iterable: Iterable[T]) -> list[T]:
    return list(iterable)


def extend_into[T](
    iterable: Iterable[T],
    into: MutableSequence[T],
) -> MutableSequence[T]:
    into.extend(iterable)
    return into
