# defects.py
"""Soft failures: typed defect records and the finders that produce them."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, List, Sequence, Tuple


class MachineError(RuntimeError):
    """The machine cannot perform the requested operation."""


class DefectKind(Enum):
    OUT_OF_RANGE = "out-of-range"
    DUPLICATE = "duplicate"
    SELF_PAIR = "self-pair"
    SIZE_MISMATCH = "size-mismatch"
    MISSING = "missing"
    INSTALL = "install"


@dataclass(frozen=True, slots=True)
class Defect:
    """One problem found in a configuration.

    ``wheel`` is the wheel's index in the machine when the defect came
    from a wheel, ``index``/``value`` the offending table slot.
    """

    component: str
    kind: DefectKind
    message: str
    index: int | None = None
    value: Any = None
    wheel: int | None = None

    def tagged(self, prefix: str, **changes: Any) -> "Defect":
        """Copy with *prefix* prepended to the message."""
        return replace(self, message=f"{prefix}: {self.message}", **changes)

    def __str__(self) -> str:
        return self.message


# ── finders ───────────────────────────────────────────────────────


def find_out_of_ranges(values: Sequence[int], size: int) -> List[Tuple[int, int]]:
    """``(position, value)`` for every value outside ``[0, size)``."""
    return [(i, v) for i, v in enumerate(values) if not 0 <= v < size]


def find_duplicates(values: Sequence[Any]) -> List[Tuple[int, Any]]:
    """``(position, value)`` for every repeat; first occurrences are skipped."""
    seen: set = set()
    dups: List[Tuple[int, Any]] = []
    for i, v in enumerate(values):
        if v in seen:
            dups.append((i, v))
        else:
            seen.add(v)
    return dups


def find_tuple_duplicates(
    pairs: Iterable[Tuple[Any, Any]],
) -> List[Tuple[int, Any]]:
    """Like :func:`find_duplicates` across every member of every pair.

    The position reported is the index of the pair holding the repeat.
    A pair repeating its own member is a self pair, not reported here.
    """
    seen: set = set()
    dups: List[Tuple[int, Any]] = []
    for i, pair in enumerate(pairs):
        for v in dict.fromkeys(pair):
            if v in seen:
                dups.append((i, v))
            else:
                seen.add(v)
    return dups
