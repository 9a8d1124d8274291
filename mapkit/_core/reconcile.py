from collections.abc import Callable, Iterable

from mapkit._core.common.option import Absent, absent

__all__ = (
    "Reconciler",
    "reconcile_add",
    "reconcile_append",
    "reconcile_concat",
    "reconcile_count",
    "reconcile_default",
    "reconcile_first",
    "reconcile_fold",
)

type Reconciler[K, T, V] = Callable[[V | Absent, T, K], V | Absent]


def reconcile_append[K, T, V](
    mapper: Callable[[T], V] | None = None,
) -> Reconciler[K, T, list[V]]:
    def reconciler(colliding: list[V] | Absent, incoming: T, key: K) -> list[V]:
        value = incoming if mapper is None else mapper(incoming)

        if colliding is absent:
            return [value]  # type: ignore[list-item]

        colliding.append(value)  # type: ignore[union-attr, arg-type]
        return colliding  # type: ignore[return-value]

    return reconciler


def reconcile_add[K, T](
    mapper: Callable[[T], float] | None = None,
) -> Reconciler[K, T, float]:
    def reconciler(colliding: float | Absent, incoming: T, key: K) -> float:
        value = incoming if mapper is None else mapper(incoming)

        if colliding is absent:
            return value  # type: ignore[return-value]

        return colliding + value  # type: ignore[operator]

    return reconciler


def reconcile_count[K, T]() -> Reconciler[K, T, int]:
    def reconciler(colliding: int | Absent, incoming: T, key: K) -> int:
        if colliding is absent:
            return 1

        return colliding + 1  # type: ignore[operator]

    return reconciler


def reconcile_concat[K, T, V](
    mapper: Callable[[T], Iterable[V]] | None = None,
) -> Reconciler[K, T, list[V]]:
    def reconciler(colliding: list[V] | Absent, incoming: T, key: K) -> list[V]:
        values = incoming if mapper is None else mapper(incoming)

        if colliding is absent:
            return list(values)  # type: ignore[call-overload]

        return [*colliding, *values]  # type: ignore[misc]

    return reconciler


def reconcile_fold[K, T, V](
    mapper: Callable[[T], V],
    reducer: Callable[[V, T], V],
) -> Reconciler[K, T, V]:
    """
    The reducer is called whenever the slot is occupied, even by `None` or another
    falsy value.
    """

    def reconciler(colliding: V | Absent, incoming: T, key: K) -> V:
        if colliding is absent:
            return mapper(incoming)

        return reducer(colliding, incoming)  # type: ignore[arg-type]

    return reconciler


def reconcile_default[K, T]() -> Reconciler[K, T, T]:
    def reconciler(colliding: T | Absent, incoming: T, key: K) -> T:
        return incoming

    return reconciler


def reconcile_first[K, T]() -> Reconciler[K, T, T]:
    def reconciler(colliding: T | Absent, incoming: T, key: K) -> T:
        if colliding is absent:
            return incoming

        return colliding  # type: ignore[return-value]

    return reconciler
