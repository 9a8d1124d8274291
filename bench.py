import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from decimal import Decimal
from statistics import mean
from timeit import timeit
from typing import Annotated, Any, ClassVar, Self

from tabulate import tabulate
from typer import Option, Typer

from mapkit import BiMap, CanonMap, collect, collect_bimap, reconcile_append

ENTRIES = tuple((f"key-{index % 250}", index) for index in range(1000))


@dataclass(frozen=True, slots=True)
class Benchmark:
    x: Decimal
    y: Decimal

    @property
    def difference_rate(self) -> Decimal:
        return ((self.y - self.x) / self.x) * 100

    @classmethod
    def compare(
        cls,
        x: Callable[..., Any],
        y: Callable[..., Any],
        number: int = 1,
    ) -> Self:
        x = mean(cls._time_in_ns(x, number))
        y = mean(cls._time_in_ns(y, number))
        return cls(x, y)

    @staticmethod
    def _time_in_ns(callable_: Callable[..., Any], number: int) -> Iterator[Decimal]:
        for _ in range(number):
            delta = timeit(callable_, number=1)
            yield Decimal(delta) * (10**6)


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    title: str
    benchmark: Benchmark

    @property
    def row(self) -> tuple[str, str, str, str]:
        rate = self.benchmark.difference_rate
        return (
            self.title,
            f"{self.benchmark.x:.2f}μs",
            f"{self.benchmark.y:.2f}μs",
            f"{rate:.2f}% slower" if rate >= 0 else f"{abs(rate):.2f}% faster",
        )


@dataclass(frozen=True, slots=True)
class CollectBenchmark:
    pairs: ClassVar[dict[str, tuple[Callable[[], Any], Callable[[], Any]]]] = {}

    def start(self, number: int = 1) -> Iterator[BenchmarkResult]:
        for title, (reference, subject) in self.pairs.items():
            yield BenchmarkResult(title, Benchmark.compare(reference, subject, number))

    @classmethod
    def register(cls, reference: Callable[[], Any], /, *, title: str):
        def decorator(wp):
            cls.pairs[title] = (reference, wp)
            return wp

        return decorator


def dict_loop():
    mapping = {}

    for key, value in ENTRIES:
        mapping[key] = value

    return mapping


def dict_append_loop():
    mapping = {}

    for key, value in ENTRIES:
        mapping.setdefault(key, []).append(value)

    return mapping


@CollectBenchmark.register(dict_loop, title="collect")
def collect_without_reconciler():
    return collect(ENTRIES)


@CollectBenchmark.register(dict_append_loop, title="collect (append)")
def collect_with_append():
    return collect(ENTRIES, reconcile_append())


@CollectBenchmark.register(dict_loop, title="collect_bimap")
def collect_into_bimap():
    return collect_bimap(ENTRIES)


@CollectBenchmark.register(dict_loop, title="BiMap")
def fill_bimap():
    return BiMap(ENTRIES)


@CollectBenchmark.register(dict_loop, title="CanonMap")
def fill_canon_map():
    return CanonMap(ENTRIES)


cli = Typer()


@cli.command()
def main(number: Annotated[int, Option("--number", "-n", min=0)] = 1000):
    results = CollectBenchmark().start(number)
    headers = ("", "dict Time (μs)", "mapkit Time (μs)", "Difference Rate (%)")
    data = (result.row for result in itertools.chain(results))
    table = tabulate(data, headers=headers)
    print(table)


if __name__ == "__main__":
    cli()
