# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Tuple

from alphabet import DEFAULT_FALLBACK, check_alphabet, circular, index_of, normalise, symbol_of
from debug import Debug
from defects import Defect, DefectKind, find_tuple_duplicates

debug = Debug()

PlugWire = Tuple[int, int]


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    """Symbol ⇄ index mapping for one machine, with a fallback symbol."""

    def __init__(self, alphabet: str, fallback: str = DEFAULT_FALLBACK) -> None:
        # input symbols are upper-cased, so the keys are too
        self.alphabet: str = check_alphabet(alphabet.upper())
        self.fallback = fallback.upper()
        if self.fallback not in self.alphabet:
            raise ValueError(
                f"Fallback symbol {fallback!r} is not in the alphabet {alphabet!r}"
            )

    # letter → integer signal
    def forward(self, letter: str, fallback: str | None = None) -> int:
        sub = (fallback or self.fallback).upper()
        signal = index_of(letter, self.alphabet, sub)
        if debug.active("keyboard") and normalise(letter) not in self.alphabet:
            debug.log("keyboard", f"{letter!r} not on the keyboard, sent as {sub!r}")
        return signal

    # integer signal → letter
    def backward(self, signal: int, fallback: str | None = None) -> str:
        return symbol_of(signal, self.alphabet, (fallback or self.fallback).upper())

    def __len__(self) -> int:
        return len(self.alphabet)


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Steckerbrett: disjoint pair swaps applied on the way in and out.

    Bad pairs passed to the constructor are kept as given so that
    :meth:`validate` can report them; :meth:`add_plug` refuses them.
    """

    def __init__(
        self,
        label: str,
        size: int,
        plugs: Iterable[PlugWire] | None = None,
    ) -> None:
        if not label:
            raise ValueError("Plugboard label must not be empty")
        if size <= 0:
            raise ValueError(f"Plugboard size must be positive, got {size}")
        self.label = label
        self.size = size
        self.plugs: List[PlugWire] = [tuple(p) for p in (plugs or [])]

    @classmethod
    def from_letters(
        cls,
        label: str,
        alphabet: str,
        pairs: str | Sequence[str | tuple[str, str]],
    ) -> "Plugboard":
        """Build from letter pairs: ``"AB CD"``, ``["AB", "CD"]`` or tuples."""
        alphabet = alphabet.upper()
        if isinstance(pairs, str):
            pairs = pairs.split()

        plugs: List[PlugWire] = []
        for raw in pairs:
            if isinstance(raw, str):
                if len(raw) != 2:
                    raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
                a, b = raw
            else:
                a, b = raw
            missing = [ch for ch in (a, b) if ch.upper() not in alphabet]
            if missing:
                raise ValueError(f"Symbol {missing[0]!r} not in alphabet")
            plugs.append((alphabet.index(a.upper()), alphabet.index(b.upper())))
        return cls(label, len(alphabet), plugs)

    def reset(self) -> None:
        self.plugs = []

    def encode(self, index: int) -> int:
        inp = circular(index, self.size)
        for a, b in self.plugs:
            if a == inp:
                return b
            if b == inp:
                return a
        return index

    forward = encode        # alias: signal in
    backward = encode       # alias: signal out

    def add_plug(self, a: int, b: int) -> Defect | None:
        for name, val in (("first", a), ("second", b)):
            if not 0 <= val < self.size:
                return Defect(
                    "plugboard",
                    DefectKind.OUT_OF_RANGE,
                    f"Plugboard {self.label!r} {name} point {val} is out of range",
                    value=val,
                )
        if a == b:
            return Defect(
                "plugboard",
                DefectKind.SELF_PAIR,
                f"Plugboard {self.label!r} cannot wire {a} to itself",
                value=a,
            )
        for i, (x, y) in enumerate(self.plugs):
            if {a, b} & {x, y}:
                return Defect(
                    "plugboard",
                    DefectKind.DUPLICATE,
                    f"Plugboard {self.label!r} plug ({a}, {b}) conflicts with plug[{i}] ({x}, {y})",
                    index=i,
                    value=(a, b),
                )
        self.plugs.append((a, b))
        debug.log("plugboard", f"{self.label} + ({a}, {b})")
        return None

    def remove_plug(self, point: int) -> bool:
        """Pull the cable plugged into *point*; False if there was none."""
        for i, pair in enumerate(self.plugs):
            if point in pair:
                del self.plugs[i]
                return True
        return False

    def validate(self) -> List[Defect]:
        errs: List[Defect] = []
        for i, (a, b) in enumerate(self.plugs):
            if not (0 <= a < self.size and 0 <= b < self.size):
                errs.append(Defect(
                    "plugboard",
                    DefectKind.OUT_OF_RANGE,
                    f"Plugboard {self.label!r} plug[{i}] has a value out of range",
                    index=i,
                    value=(a, b),
                ))
            if a == b:
                errs.append(Defect(
                    "plugboard",
                    DefectKind.SELF_PAIR,
                    f"Plugboard {self.label!r} plug[{i}] has the same value at both ends",
                    index=i,
                    value=a,
                ))

        # a symbol may only appear once across every pair
        errs.extend(
            Defect(
                "plugboard",
                DefectKind.DUPLICATE,
                f"Plugboard {self.label!r} plug[{i}] has a duplicate value {v}",
                index=i,
                value=v,
            )
            for i, v in find_tuple_duplicates(self.plugs)
        )
        return errs

    def clone(self) -> "Plugboard":
        return Plugboard(self.label, self.size, list(self.plugs))

    def __repr__(self) -> str:
        swaps = [f"{a}-{b}" for a, b in self.plugs]
        return f"<Plugboard {' '.join(swaps)}>"
