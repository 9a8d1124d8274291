from __future__ import annotations

import asyncio
from abc import ABC
from collections.abc import (
    AsyncIterable,
    Awaitable,
    Callable,
    Iterator,
    MutableMapping,
)
from contextlib import contextmanager
from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import Any, Self, override

from mapkit._core.collect import (
    Bumper,
    ErrorSpec,
    collect_entry,
    insert_bumping,
    make_no_entry,
)
from mapkit._core.common.event import Event, EventChannel, EventListener
from mapkit._core.common.option import Option, Some, absent, fold_option
from mapkit._core.reconcile import Reconciler
from mapkit.exceptions import ResolverCaptureError

__all__ = (
    "EntryAdded",
    "EntryBumped",
    "EntryDropped",
    "EntryReconciled",
    "EntryRemoved",
    "EventualMap",
    "EventualMapEvent",
    "MapFinalized",
    "stream_collect",
    "stream_collect_into",
)

"""
Events
"""


@dataclass(frozen=True, slots=True)
class EventualMapEvent(Event, ABC):
    eventual_map: EventualMap[Any, Any] = field(repr=False)


@dataclass(frozen=True, slots=True)
class EntryAdded[K, V](EventualMapEvent):
    key: K
    value: V

    @override
    def __str__(self) -> str:
        return f"Entry `{self.key!r}` has been added."


@dataclass(frozen=True, slots=True)
class EntryBumped[K, V](EventualMapEvent):
    key: K
    bumped_key: K
    value: V

    @override
    def __str__(self) -> str:
        return (
            f"Entry `{self.key!r}` was already taken, "
            f"it has been added under `{self.bumped_key!r}`."
        )


@dataclass(frozen=True, slots=True)
class EntryDropped[K, V](EventualMapEvent):
    key: K
    value: V
    bumped: bool

    @override
    def __str__(self) -> str:
        reason = "no free key was found" if self.bumped else "key already taken"
        return f"Entry `{self.key!r}` has been dropped: {reason}."


@dataclass(frozen=True, slots=True)
class EntryReconciled[K, V](EventualMapEvent):
    key: K
    value: V

    @override
    def __str__(self) -> str:
        return f"Entry `{self.key!r}` has been reconciled."


@dataclass(frozen=True, slots=True)
class EntryRemoved[K, T](EventualMapEvent):
    key: K
    incoming: T

    @override
    def __str__(self) -> str:
        return f"Entry `{self.key!r}` has been removed by the reconciler."


@dataclass(frozen=True, slots=True)
class MapFinalized(EventualMapEvent):
    size: int
    unresolved: int
    error: BaseException | None = None

    @override
    def __str__(self) -> str:
        message = (
            f"Map has been finalized with {self.size} "
            f"entr{"ies" if self.size != 1 else "y"}, "
            f"{self.unresolved} pending quer{"ies" if self.unresolved != 1 else "y"} "
            f"resolved as absent"
        )

        if self.error is not None:
            message += f" after the source failed: {self.error!r}"

        return f"{message}."


"""
EventualMap
"""


class EventualMap[K, V]:
    __slots__ = (
        "_underlying_map",
        "__bumper",
        "__channel",
        "__final_map",
        "__finalized",
        "__loggers",
        "__loop",
        "__max_bump_attempts",
        "__reconciler",
        "__switchboard",
        "__task",
    )

    _underlying_map: MutableMapping[K, V]
    __bumper: Bumper[K, V] | None
    __channel: EventChannel
    __final_map: asyncio.Future[MutableMapping[K, V]]
    __finalized: bool
    __loggers: list[Logger]
    __loop: asyncio.AbstractEventLoop
    __max_bump_attempts: int | None
    __reconciler: Reconciler[K, Any, V] | None
    __switchboard: dict[K, asyncio.Future[Option[V]]]
    __task: asyncio.Task[None]

    def __init__(
        self,
        source: AsyncIterable[tuple[K, Any]],
        *,
        bumper: Bumper[K, V] | None = None,
        reconciler: Reconciler[K, Any, V] | None = None,
        seed: MutableMapping[K, V] | None = None,
        max_bump_attempts: int | None = None,
    ) -> None:
        if bumper is not None and reconciler is not None:
            raise ValueError(
                "`bumper` and `reconciler` can't be combined: a reconciled key "
                "never collides."
            )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise ResolverCaptureError(
                f"`{type(self).__name__}` must be created inside a running event "
                "loop, no future could be bound to it."
            ) from exc

        self._underlying_map = {} if seed is None else seed
        self.__bumper = bumper
        self.__channel = EventChannel()
        self.__final_map = loop.create_future()
        self.__finalized = False
        self.__loggers = [getLogger("python-mapkit")]
        self.__loop = loop
        self.__max_bump_attempts = max_bump_attempts
        self.__reconciler = reconciler
        self.__switchboard = {}
        # Source failures are reported through `MapFinalized.error`.
        self.__final_map.add_done_callback(_mark_retrieved)
        self.__task = loop.create_task(self.__ingest(source))
        self.__task.add_done_callback(self.__on_ingestion_done)

    @override
    def __repr__(self) -> str:
        state = "finalized" if self.__finalized else "active"
        return f"<{type(self).__name__} ({state}) {self._underlying_map!r}>"

    @property
    def finalized(self) -> bool:
        return self.__finalized

    @property
    def pending_keys(self) -> frozenset[K]:
        return frozenset(self.__switchboard)

    @property
    def final_map(self) -> Awaitable[MutableMapping[K, V]]:
        return asyncio.shield(self.__final_map)

    async def folding_get[R](
        self,
        key: K,
        on_found: Callable[[V], R],
        on_absent: Callable[[], R],
    ) -> R:
        option = await self.__query(key)
        return fold_option(option, on_found, on_absent)

    async def get(self, key: K, default: Any = None) -> V | Any:
        return await self.folding_get(key, lambda value: value, lambda: default)

    async def has(self, key: K) -> bool:
        return await self.folding_get(key, lambda _: True, lambda: False)

    async def get_or_else(self, key: K, substitute: Callable[[K], V]) -> V:
        return await self.folding_get(key, lambda value: value, lambda: substitute(key))

    async def get_or_val(self, key: K, fallback: V) -> V:
        return await self.folding_get(key, lambda value: value, lambda: fallback)

    async def get_or_fail(self, key: K, error: ErrorSpec[K] = None) -> V:
        option = await self.__query(key)

        if isinstance(option, Some):
            return option.value

        raise make_no_entry(key, error)

    def get_now(self, key: K, default: Any = None) -> V | Any:
        return self._underlying_map.get(key, default)

    def has_now(self, key: K) -> bool:
        return key in self._underlying_map

    def add_logger(self, logger: Logger) -> Self:
        self.__loggers.append(logger)
        return self

    def add_listener(self, listener: EventListener) -> Self:
        self.__channel.add_listener(listener)
        return self

    def remove_listener(self, listener: EventListener) -> Self:
        self.__channel.remove_listener(listener)
        return self

    def cancel(self) -> bool:
        return self.__task.cancel()

    async def __query(self, key: K) -> Option[V]:
        if self.__finalized or key in self._underlying_map:
            return self.__lookup_now(key)

        try:
            future = self.__switchboard[key]
        except KeyError:
            future = self.__loop.create_future()
            self.__switchboard[key] = future

        # Cancelling one waiter mustn't cancel the future shared with the others.
        return await asyncio.shield(future)

    def __lookup_now(self, key: K) -> Option[V]:
        if key in self._underlying_map:
            return Some(self._underlying_map[key])

        return absent

    async def __ingest(self, source: AsyncIterable[tuple[K, Any]]) -> None:
        try:
            async for key, value in source:
                self.__receive(key, value)

        except Exception as exc:
            self.__finalize(exc)
            self.__final_map.set_exception(exc)

        else:
            self.__finalize()
            self.__final_map.set_result(self._underlying_map)

    def __on_ingestion_done(self, task: asyncio.Task[None]) -> None:
        final_map = self.__final_map

        if task.cancelled():
            final_map.cancel()

            if not self.__finalized:
                self.__finalize()

            return

        # Raised by a listener while finalizing.
        exception = task.exception()

        if exception is not None and not final_map.done():
            final_map.set_exception(exception)

    def __receive(self, key: K, incoming: Any) -> None:
        if self.__reconciler is None:
            event, written = self.__insert(key, incoming)
        else:
            event, written = self.__reconcile(key, incoming)

        with self.__dispatch(event):
            if written is not None:
                self.__resolve(written)

    def __insert(self, key: K, value: V) -> tuple[Event, K | None]:
        underlying_map = self._underlying_map

        if key not in underlying_map:
            underlying_map[key] = value
            return EntryAdded(self, key, value), key

        if self.__bumper is None:
            return EntryDropped(self, key, value, bumped=False), None

        written = insert_bumping(
            underlying_map,
            key,
            value,
            self.__bumper,
            max_attempts=self.__max_bump_attempts,
        )

        if written is None:
            return EntryDropped(self, key, value, bumped=True), None

        return EntryBumped(self, key, written, value), written

    def __reconcile(self, key: K, incoming: Any) -> tuple[Event, K | None]:
        existed = key in self._underlying_map
        option = collect_entry(self._underlying_map, key, incoming, self.__reconciler)

        match option:
            case Some(value) if existed:
                return EntryReconciled(self, key, value), key
            case Some(value):
                return EntryAdded(self, key, value), key

        return EntryRemoved(self, key, incoming), None

    def __resolve(self, key: K) -> None:
        future = self.__switchboard.pop(key, None)

        if future is not None and not future.done():
            future.set_result(self.__lookup_now(key))

    def __finalize(self, error: BaseException | None = None) -> None:
        self.__finalized = True
        switchboard, self.__switchboard = self.__switchboard, {}
        event = MapFinalized(self, len(self._underlying_map), len(switchboard), error)

        try:
            with self.__dispatch(event):
                self.__release(switchboard)
        finally:
            # No-op unless a listener failed before the release.
            self.__release(switchboard)

    def __release(self, switchboard: dict[K, asyncio.Future[Option[V]]]) -> None:
        for key, future in switchboard.items():
            if not future.done():
                future.set_result(self.__lookup_now(key))

    @contextmanager
    def __dispatch(self, event: Event) -> Iterator[None]:
        with self.__channel.dispatch(event):
            yield
            message = str(event)
            self.__debug(message)

    def __debug(self, message: object) -> None:
        for logger in tuple(self.__loggers):
            logger.debug(message)


def _mark_retrieved(future: asyncio.Future[Any]) -> None:
    if not future.cancelled():
        future.exception()


"""
Stream collecting
"""


async def stream_collect_into[K, T, V](
    source: AsyncIterable[tuple[K, T]],
    seed: MutableMapping[K, V],
    reconciler: Reconciler[K, T, V] | None = None,
) -> MutableMapping[K, V]:
    async for key, value in source:
        collect_entry(seed, key, value, reconciler)

    return seed


async def stream_collect[K, T, V](
    source: AsyncIterable[tuple[K, T]],
    reconciler: Reconciler[K, T, V] | None = None,
) -> dict[K, Any]:
    seed: dict[K, Any] = {}
    await stream_collect_into(source, seed, reconciler)
    return seed
