from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, final, override

__all__ = ("Absent", "Option", "Some", "absent", "fold_option")


@final
class Absent:
    __slots__ = ()

    __instance: "Absent | None" = None

    def __new__(cls) -> "Absent":
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)

        return cls.__instance

    def __bool__(self) -> bool:
        return False

    @override
    def __repr__(self) -> str:
        return "absent"

    def __reduce__(self) -> str:
        return "absent"


absent: Final[Absent] = Absent()


@dataclass(frozen=True, slots=True)
class Some[T]:
    value: T


type Option[T] = Some[T] | Absent


def fold_option[T, R](
    option: Option[T],
    on_found: Callable[[T], R],
    on_absent: Callable[[], R],
) -> R:
    if isinstance(option, Some):
        return on_found(option.value)

    return on_absent()
