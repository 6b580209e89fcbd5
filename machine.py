# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence, Tuple

from alphabet import DEFAULT_FALLBACK
from debug import Debug
from defects import Defect, DefectKind, MachineError
from keyboard_and_plugboard import Keyboard, PlugWire, Plugboard
from permutation import Permutation
from rotor_and_reflector import Reflector, ReflectorTemplate, Wheel, WheelTemplate
from stepping import StepPolicy, resolve_policy
from tracing import Observer, TraceStep

if TYPE_CHECKING:  # pragma: no cover
    from models import Model

debug = Debug()

RETURN_PATHS = ("mirror", "inverse")


class Machine:
    """The mechanism: keyboard, entry wiring, wheel chain, reflector, plugs.

    A machine starts empty. Wheels and the reflector are installed by label
    from the kit of templates it was built with; each install clones the
    template so machines never share rotor state.
    """

    def __init__(
        self,
        label: str,
        alphabet: str,
        stator: Permutation | None = None,
        *,
        wheel_count: int = 3,
        wheels: Iterable[WheelTemplate] = (),
        reflectors: Iterable[ReflectorTemplate] = (),
        plugboard_available: bool = False,
        cog_drive: bool = False,
        stepping: str | StepPolicy | None = None,
        return_path: str = "mirror",
        fallback: str = DEFAULT_FALLBACK,
    ) -> None:
        if not label:
            raise ValueError("Machine label must not be empty")
        if wheel_count <= 0:
            raise ValueError(f"wheel_count must be positive, got {wheel_count}")
        if return_path not in RETURN_PATHS:
            raise ValueError(
                f"Unknown return path {return_path!r}. Expected one of {list(RETURN_PATHS)}"
            )

        self.label = label
        self.keyboard = Keyboard(alphabet, fallback)
        self.alphabet = self.keyboard.alphabet
        self.size = len(self.alphabet)
        self.entry_wheel = stator or Permutation.identity(f"{label} ETW", self.size)

        self.wheel_count = wheel_count
        self.wheel_templates: Dict[str, WheelTemplate] = {t.label: t for t in wheels}
        self.reflector_templates: Dict[str, ReflectorTemplate] = {
            t.label: t for t in reflectors
        }
        self.plugboard_available = plugboard_available
        self.cog_drive = cog_drive
        if stepping is None and cog_drive:
            stepping = "cog"
        self.policy: StepPolicy = resolve_policy(stepping)
        self.return_path = return_path

        self.wheels: List[Wheel] = []
        self.reflector: Reflector | None = None
        self.plugboard: Plugboard | None = None

    @classmethod
    def from_model(
        cls,
        model: "Model",
        *,
        stepping: str | StepPolicy | None = None,
        return_path: str = "mirror",
        fallback: str | None = None,
    ) -> "Machine":
        """Build an empty machine whose kit is the model's wheels and reflectors."""
        contacts = model.wiring_alphabet
        stator = model.stator or model.alphabet
        sub = fallback or model.fallback
        return cls(
            model.label,
            model.alphabet,
            Permutation.from_alphabets(f"{model.label} ETW", stator, model.alphabet, sub),
            wheel_count=model.wheel_count,
            wheels=[WheelTemplate.from_spec(w, contacts, model.display, sub) for w in model.wheels],
            reflectors=[ReflectorTemplate.from_spec(r, contacts, sub) for r in model.reflectors],
            plugboard_available=model.plugboard,
            cog_drive=model.cog_drive,
            stepping=stepping,
            return_path=return_path,
            fallback=sub,
        )

    # ── composition ─────────────────────────────────────────────

    def install_wheel(
        self,
        label: str,
        ring_setting: int = 0,
        starting_position: int = 0,
    ) -> Defect | None:
        """Push the wheel *label* onto the left end of the chain."""
        if len(self.wheels) >= self.wheel_count:
            return Defect(
                "machine",
                DefectKind.INSTALL,
                f"Machine {self.label!r} already holds the maximum of "
                f"{self.wheel_count} wheels",
            )
        template = self.wheel_templates.get(label)
        if template is None:
            return Defect(
                "machine",
                DefectKind.INSTALL,
                f"Machine {self.label!r} has no wheel labeled {label!r}",
                value=label,
            )
        wheel = Wheel(template).setup(ring_setting, starting_position)
        self.wheels.append(wheel)
        debug.log("machine", f"installed wheel[{len(self.wheels) - 1}] {wheel!r}")
        return None

    def install_reflector(self, label: str, starting_position: int = 0) -> Defect | None:
        template = self.reflector_templates.get(label)
        if template is None:
            return Defect(
                "machine",
                DefectKind.INSTALL,
                f"Machine {self.label!r} has no reflector labeled {label!r}",
                value=label,
            )
        if starting_position and not template.positionable:
            return Defect(
                "machine",
                DefectKind.INSTALL,
                f"Reflector {label!r} cannot be set to a starting position",
                value=starting_position,
            )
        self.reflector = Reflector(template).setup(starting_position)
        debug.log("machine", f"installed reflector {self.reflector!r}")
        return None

    def install_plugboard(self, plugs: Iterable[PlugWire] = ()) -> Plugboard:
        """Fit a plugboard, whether or not the model came with one."""
        self.plugboard_available = True
        self.plugboard = Plugboard(self.label, self.size, plugs)
        return self.plugboard

    def reset(self) -> None:
        """Remove every installed part; the kit and entry wiring stay."""
        self.wheels = []
        self.reflector = None
        self.plugboard = None

    def rewind(self) -> None:
        """Return wheels and reflector to their starting positions."""
        for wheel in self.wheels:
            wheel.rewind()
        if self.reflector is not None:
            self.reflector.rewind()

    # ── state views ─────────────────────────────────────────────

    @property
    def positions(self) -> Tuple[int, ...]:
        return tuple(w.position for w in self.wheels)

    @property
    def window(self) -> str:
        """Ring symbols an operator reads, leftmost wheel first."""
        return "".join(w.visible_character for w in reversed(self.wheels))

    def clone(self) -> "Machine":
        """Independent machine with the same kit, settings and positions."""
        other = object.__new__(Machine)          # bypass __init__
        other.__dict__.update(self.__dict__)
        other.wheels = [w.clone() for w in self.wheels]
        other.reflector = self.reflector.clone() if self.reflector else None
        other.plugboard = self.plugboard.clone() if self.plugboard else None
        return other

    def schedule(self, length: int) -> List[Tuple[Tuple[int, ...], int | None]]:
        """Positions the next *length* key presses will encode at.

        Stepping never depends on the text, so this is computed on a clone
        without touching this machine.
        """
        ghost = self.clone()
        out: List[Tuple[Tuple[int, ...], int | None]] = []
        for _ in range(length):
            ghost.step()
            refl = ghost.reflector.advance() if ghost.reflector else None
            out.append((ghost.positions, refl))
        return out

    # ── stepping  ───────────────────────────────────────────────

    def step(self) -> List[bool]:
        """Advance the wheel chain for one key press."""
        moves = self.policy(self.wheels)
        for wheel, move in zip(self.wheels, moves):
            if move:
                wheel.advance()
        if debug.active("stepping"):
            debug.log("stepping", f"moved={moves} positions={list(self.positions)}")
        return moves

    # ── encipher  ───────────────────────────────────────────────

    def process_character(
        self,
        char: str,
        fallback: str | None = None,
        observer: Observer | None = None,
    ) -> str:
        if self.reflector is None:
            raise MachineError(f"Machine {self.label!r} does not have a reflector installed")
        if not char:
            raise ValueError("process_character() needs exactly one symbol")

        emit = observer or _silent
        index = self.keyboard.forward(char, fallback)
        emit(TraceStep("input", "keyboard", output=index, message=char))

        if self.plugboard is not None:
            index = _stage(emit, "plugboard", index, self.plugboard.encode(index))
        index = _stage(emit, "stator", index, self.entry_wheel.encode(index))

        moves = self.step()
        emit(TraceStep("step", "wheels", message=f"moved={moves} positions={list(self.positions)}"))

        for i, wheel in enumerate(self.wheels):
            index = _stage(emit, f"wheel[{i}]", index, wheel.encode(index))

        self.reflector.advance()
        index = _stage(emit, "reflector", index, self.reflector.encode(index))

        inverse = self.return_path == "inverse"
        for i in range(len(self.wheels) - 1, -1, -1):
            wheel = self.wheels[i]
            out = wheel.decode(index) if inverse else wheel.encode(index)
            index = _stage(emit, f"wheel[{i}]", index, out)

        out = self.entry_wheel.decode(index) if inverse else self.entry_wheel.encode(index)
        index = _stage(emit, "stator", index, out)

        if self.plugboard is not None:
            index = _stage(emit, "plugboard", index, self.plugboard.encode(index))

        result = self.keyboard.backward(index, fallback)
        emit(TraceStep("output", "keyboard", input=index, message=result))
        debug.log("machine", f"{char!r} -> {result!r}")
        return result

    def process_message(
        self,
        msg: str,
        fallback: str | None = None,
        observer: Observer | None = None,
    ) -> str:
        """Encode or decode *msg*; the operation is the same both ways."""
        return "".join(self.process_character(ch, fallback, observer) for ch in msg)

    # ── validation ──────────────────────────────────────────────

    def validate(self) -> List[Defect]:
        errs: List[Defect] = []
        name = f"Machine {self.label!r}"

        if self.entry_wheel.size != self.size:
            errs.append(_size_defect("stator", f"{name} has an invalid entry wheel (ETW)"))
        errs.extend(d.tagged(f"{name} entry wheel") for d in self.entry_wheel.validate("stator"))

        for ind, wheel in enumerate(self.wheels):
            if wheel.size != self.size:
                errs.append(_size_defect("wheel", f"{name} has an invalid wheel[{ind}]", ind))
            errs.extend(
                d.tagged(f"{name} wheel[{ind}]", wheel=ind) for d in wheel.validate()
            )

        if self.reflector is not None:
            if self.reflector.size != self.size:
                errs.append(_size_defect("reflector", f"{name} has an invalid reflector (UKW)"))
            errs.extend(d.tagged(f"{name} reflector") for d in self.reflector.validate())
        else:
            errs.append(Defect(
                "reflector",
                DefectKind.MISSING,
                f"{name} does not have a reflector installed",
            ))

        if self.plugboard is not None:
            if self.plugboard.size != self.size:
                errs.append(_size_defect("plugboard", f"{name} has an invalid plugboard"))
            errs.extend(d.tagged(f"{name} plugboard") for d in self.plugboard.validate())

        return errs

    def __repr__(self) -> str:
        labels = [w.label for w in self.wheels]
        refl = self.reflector.label if self.reflector else None
        return f"<Machine {self.label!r} wheels={labels} reflector={refl}>"


# ── helpers ───────────────────────────────────────────────────────


def _silent(step: TraceStep) -> None:
    return None


def _stage(emit: Observer, component: str, inp: int, out: int) -> int:
    emit(TraceStep("encode", component, inp, out))
    debug.log(component.split("[", 1)[0], f"{component}: {inp} -> {out}")
    return out


def _size_defect(component: str, prefix: str, wheel: int | None = None) -> Defect:
    return Defect(
        component,
        DefectKind.SIZE_MISMATCH,
        f"{prefix}, the number of characters does not match",
        wheel=wheel,
    )


def build_machine(
    model: "Model",
    wheels: Sequence[str],
    reflector: str,
    rings: Sequence[int] = (),
    positions: Sequence[int] = (),
    plugs: Sequence[PlugWire] | None = None,
    reflector_position: int = 0,
    **options,
) -> Tuple[Machine, List[Defect]]:
    """Machine from a model plus settings; wheels are given rightmost first.

    Install problems are returned next to the machine rather than raised.
    """
    machine = Machine.from_model(model, **options)
    problems: List[Defect] = []
    for i, label in enumerate(wheels):
        ring = rings[i] if i < len(rings) else 0
        pos = positions[i] if i < len(positions) else 0
        err = machine.install_wheel(label, ring, pos)
        if err:
            problems.append(err)
    err = machine.install_reflector(reflector, reflector_position)
    if err:
        problems.append(err)
    if plugs is not None:
        machine.install_plugboard(plugs)
    return machine, problems
