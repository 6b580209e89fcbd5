# permutation.py
"""The one wired-table abstraction shared by the entry wiring, wheels and
reflectors, plus the bounded rotation value the moving parts carry."""
from __future__ import annotations

from typing import List, Sequence

from alphabet import DEFAULT_FALLBACK, circular, derive_permutation
from defects import Defect, DefectKind, find_duplicates, find_out_of_ranges


class Permutation:
    """Fixed index map ``0..N-1 → 0..N-1``.

    The wiring is not checked here; a permutation may hold a broken table
    until :meth:`validate` is asked about it.
    """

    def __init__(self, label: str, size: int, wiring: Sequence[int]) -> None:
        if not label:
            raise ValueError("Permutation label must not be empty")
        if size <= 0:
            raise ValueError(f"Permutation size must be positive, got {size}")
        if wiring is None or len(wiring) != size:
            got = None if wiring is None else len(wiring)
            raise ValueError(f"Wiring length {got} does not match size {size}")

        self.label = label
        self.size = size
        self.wiring: tuple[int, ...] = tuple(wiring)
        self._rev: List[int] | None = None

    @classmethod
    def from_alphabets(
        cls,
        label: str,
        source: str,
        target: str,
        fallback: str = DEFAULT_FALLBACK,
    ) -> "Permutation":
        """Wire every symbol of *target* to its position in *source*."""
        return cls(label, len(source), derive_permutation(source, target, fallback))

    @classmethod
    def identity(cls, label: str, size: int) -> "Permutation":
        return cls(label, size, range(size))

    # ── signal paths ---------------------------------------------
    def encode(self, index: int) -> int:
        return self.wiring[circular(index, self.size)]

    def decode(self, index: int) -> int:
        """Inverse lookup; only defined for a valid bijection."""
        return self.inverse_table()[circular(index, self.size)]

    def inverse_table(self) -> List[int]:
        if self._rev is None:
            if self.validate():
                raise ValueError(
                    f"{self.label!r} wiring is not a bijection, no inverse exists"
                )
            rev = [0] * self.size
            for i, v in enumerate(self.wiring):
                rev[v] = i
            self._rev = rev
        return self._rev

    # ── checks ----------------------------------------------------
    def is_involution(self) -> bool:
        """True if encoding twice gives back every index."""
        if self.validate():
            return False
        return all(self.wiring[v] == i for i, v in enumerate(self.wiring))

    def validate(self, component: str = "permutation") -> List[Defect]:
        oor = [
            Defect(
                component,
                DefectKind.OUT_OF_RANGE,
                f"{component} {self.label!r} wiring[{i}] value {v} is out of "
                f"range for {self.size} characters",
                index=i,
                value=v,
            )
            for i, v in find_out_of_ranges(self.wiring, self.size)
        ]
        dups = [
            Defect(
                component,
                DefectKind.DUPLICATE,
                f"{component} {self.label!r} wiring[{i}] is a duplicate value {v}",
                index=i,
                value=v,
            )
            for i, v in find_duplicates(self.wiring)
        ]
        return oor + dups

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<Permutation {self.label!r} size={self.size}>"


class Rotation:
    """Current offset of a moving part, always kept in ``[0, size)``."""

    __slots__ = ("size", "_position")

    def __init__(self, size: int, position: int = 0) -> None:
        if size <= 0:
            raise ValueError(f"Rotation size must be positive, got {size}")
        self.size = size
        self._position = circular(position, size)

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        self._position = circular(value, self.size)

    def advance(self, steps: int = 1) -> int:
        self._position = circular(self._position + steps, self.size)
        return self._position

    def __repr__(self) -> str:
        return f"<Rotation {self._position}/{self.size}>"
