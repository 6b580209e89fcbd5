# rotor_and_reflector.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, List, Sequence, Tuple

from alphabet import DEFAULT_FALLBACK, DISPLAY_LATIN, circular, index_of
from debug import Debug
from defects import Defect, DefectKind
from permutation import Permutation, Rotation

if TYPE_CHECKING:  # pragma: no cover
    from models import ReflectorSpec, WheelSpec

debug = Debug()


# ── templates (immutable, shared between machines) ────────────────


@dataclass(frozen=True)
class WheelTemplate:
    """What a wheel *is*: its wiring, notches and ring engraving."""

    label: str
    permutation: Permutation
    notches: FrozenSet[int] = frozenset()
    display: Tuple[str, ...] = DISPLAY_LATIN
    thin: bool = False

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Wheel label must not be empty")
        if len(self.display) != self.size:
            raise ValueError(
                f"Wheel {self.label!r} display has {len(self.display)} symbols, "
                f"expected {self.size}"
            )

    @property
    def size(self) -> int:
        return self.permutation.size

    @classmethod
    def build(
        cls,
        label: str,
        size: int,
        wiring: Sequence[int],
        notches: Sequence[int] = (),
        display: Sequence[str] | None = None,
        thin: bool = False,
    ) -> "WheelTemplate":
        disp = tuple(display) if display is not None else DISPLAY_LATIN
        return cls(label, Permutation(label, size, wiring), frozenset(notches), disp, thin)

    @classmethod
    def from_spec(
        cls,
        spec: "WheelSpec",
        wiring_alphabet: str,
        display: Sequence[str] | None = None,
        fallback: str = DEFAULT_FALLBACK,
    ) -> "WheelTemplate":
        """Turn a catalog record into integer tables against *wiring_alphabet*."""
        perm = Permutation.from_alphabets(spec.label, wiring_alphabet, spec.wiring, fallback)
        notches = frozenset(index_of(n, wiring_alphabet, fallback) for n in spec.notches)
        disp = tuple(display) if display is not None else tuple(wiring_alphabet)
        return cls(spec.label, perm, notches, disp, spec.thin)


@dataclass(frozen=True)
class ReflectorTemplate:
    label: str
    permutation: Permutation
    moving: bool = False
    positionable: bool = False
    rewirable: bool = False
    notches: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Reflector label must not be empty")

    @property
    def size(self) -> int:
        return self.permutation.size

    @classmethod
    def build(
        cls,
        label: str,
        size: int,
        wiring: Sequence[int],
        moving: bool = False,
        **flags: bool,
    ) -> "ReflectorTemplate":
        return cls(label, Permutation(label, size, wiring), moving, **flags)

    @classmethod
    def from_spec(
        cls,
        spec: "ReflectorSpec",
        wiring_alphabet: str,
        fallback: str = DEFAULT_FALLBACK,
    ) -> "ReflectorTemplate":
        perm = Permutation.from_alphabets(spec.label, wiring_alphabet, spec.wiring, fallback)
        notches = frozenset(index_of(n, wiring_alphabet, fallback) for n in spec.notches)
        return cls(
            spec.label,
            perm,
            moving=spec.rotating,
            positionable=spec.positionable or spec.rotating,
            rewirable=spec.rewirable,
            notches=notches,
        )


# ── Wheel ─────────────────────────────────────────────────────────


class Wheel:
    """A wheel installed in one machine.

    The template is shared and never mutated; ring setting, starting
    position and the current position belong to this instance only.
    """

    def __init__(self, template: WheelTemplate) -> None:
        self.template = template
        self.size = template.size
        self._ring_setting = 0
        self._starting_position = 0
        self._rotation = Rotation(self.size)
        self._init = False

    # ── read-only views of the template ──────────────────────────
    @property
    def label(self) -> str:
        return self.template.label

    @property
    def wiring(self) -> tuple[int, ...]:
        return self.template.permutation.wiring

    @property
    def notches(self) -> FrozenSet[int]:
        return self.template.notches

    @property
    def thin(self) -> bool:
        return self.template.thin

    # ── install-time state ───────────────────────────────────────
    @property
    def ring_setting(self) -> int:
        return self._ring_setting

    @property
    def starting_position(self) -> int:
        return self._starting_position

    @property
    def is_setup(self) -> bool:
        return self._init

    @property
    def position(self) -> int:
        return self._rotation.position

    @position.setter
    def position(self, value: int) -> None:
        self._rotation.position = value

    @property
    def at_notch(self) -> bool:
        return self.position in self.template.notches

    @property
    def visible_character(self) -> str:
        # the engraving sits one step ahead of the internal index
        return self.template.display[circular(self.position + 1, self.size)]

    def setup(self, ring_setting: int = 0, starting_position: int = 0) -> "Wheel":
        """Fix Ringstellung and Grundstellung; both are 0-based."""
        self._ring_setting = circular(ring_setting, self.size)
        self._starting_position = circular(starting_position, self.size)
        self._rotation.position = self._starting_position
        self._init = True
        debug.log(
            "wheel",
            f"{self.label} setup ring={self._ring_setting} start={self._starting_position}",
        )
        return self

    def rewind(self) -> None:
        self._rotation.position = self._starting_position

    # ── stepping --------------------------------------------------
    def advance(self, steps: int = 1) -> int:
        return self._rotation.advance(steps)

    # ── signal paths ---------------------------------------------
    def encode(self, index: int) -> int:
        shift = index + self.position + self._ring_setting
        return self.template.permutation.encode(shift)

    def decode(self, index: int) -> int:
        """Exact inverse of :meth:`encode` at the current position."""
        mapped = self.template.permutation.decode(index)
        return circular(mapped - self.position - self._ring_setting, self.size)

    def validate(self) -> List[Defect]:
        return self.template.permutation.validate("wheel")

    def clone(self) -> "Wheel":
        """Same template and settings, independent rotation."""
        other = Wheel(self.template)
        other._ring_setting = self._ring_setting
        other._starting_position = self._starting_position
        other._rotation.position = self.position
        other._init = self._init
        return other

    def __repr__(self) -> str:
        return f"<Wheel {self.label} pos={self.position} ring={self._ring_setting}>"


# ── Reflector ─────────────────────────────────────────────────────


class Reflector:
    def __init__(self, template: ReflectorTemplate) -> None:
        self.template = template
        self.size = template.size
        self._permutation = template.permutation
        self._starting_position = 0
        self._rotation = Rotation(self.size)
        self._init = False

    @property
    def label(self) -> str:
        return self.template.label

    @property
    def moving(self) -> bool:
        return self.template.moving

    @property
    def wiring(self) -> tuple[int, ...]:
        return self._permutation.wiring

    @property
    def starting_position(self) -> int:
        return self._starting_position

    @property
    def position(self) -> int:
        return self._rotation.position

    @position.setter
    def position(self, value: int) -> None:
        self._rotation.position = value

    @property
    def is_setup(self) -> bool:
        return self._init

    @property
    def at_notch(self) -> bool:
        return self.position in self.template.notches

    def setup(self, start_position: int = 0) -> "Reflector":
        self._starting_position = circular(start_position, self.size)
        self._rotation.position = self._starting_position
        self._init = True
        debug.log("reflector", f"{self.label} setup start={self._starting_position}")
        return self

    def rewind(self) -> None:
        self._rotation.position = self._starting_position

    def rewire(self, wiring: Sequence[int]) -> Defect | None:
        """Plug a new table into a field-rewirable reflector (UKW-D)."""
        if not self.template.rewirable:
            return Defect(
                "reflector",
                DefectKind.INSTALL,
                f"Reflector {self.label!r} cannot be rewired",
            )
        if len(wiring) != self.size:
            return Defect(
                "reflector",
                DefectKind.SIZE_MISMATCH,
                f"Reflector {self.label!r} needs {self.size} wiring entries, got {len(wiring)}",
            )
        self._permutation = Permutation(self.label, self.size, wiring)
        return None

    # ── stepping --------------------------------------------------
    def advance(self, steps: int = 1) -> int:
        if self.template.moving:
            self._rotation.advance(steps)
        return self.position

    # ── signal paths ---------------------------------------------
    def encode(self, index: int) -> int:
        return self._permutation.encode(index + self.position)

    def validate(self) -> List[Defect]:
        return self._permutation.validate("reflector")

    def clone(self) -> "Reflector":
        other = Reflector(self.template)
        other._permutation = self._permutation
        other._starting_position = self._starting_position
        other._rotation.position = self.position
        other._init = self._init
        return other

    def __repr__(self) -> str:
        return f"<Reflector {self.label} pos={self.position}>"
