# tracing.py
"""Collects what the machine reports at each stage of a key press.

The machine only calls an observer with :class:`TraceStep` records; the
:class:`Tracer` here groups them into one :class:`Trace` per character.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from alphabet import indices_to_symbols


@dataclass(slots=True)
class TraceStep:
    op: str
    component: str = ""
    input: Optional[int] = None
    output: Optional[int] = None
    message: str = ""


Observer = Callable[[TraceStep], None]


@dataclass(slots=True)
class Trace:
    input_raw: str = ""
    input_index: Optional[int] = None
    steps: List[TraceStep] = field(default_factory=list)
    output_index: Optional[int] = None
    output_char: str = ""

    def path(self) -> List[int]:
        """Signal value after every stage, keyboard first."""
        out = [] if self.input_index is None else [self.input_index]
        out.extend(s.output for s in self.steps if s.output is not None and s.op == "encode")
        return out


class Tracer:
    """Observer that builds a list of per-character traces."""

    def __init__(self) -> None:
        self.traces: List[Trace] = []
        self._current: Trace | None = None

    def __call__(self, step: TraceStep) -> None:
        if step.op == "input":
            self._current = Trace(input_raw=step.message, input_index=step.output)
            self.traces.append(self._current)
            return
        if self._current is None:
            return
        if step.op == "output":
            self._current.output_index = step.input
            self._current.output_char = step.message
            self._current = None
            return
        self._current.steps.append(step)

    def clear(self) -> None:
        self.traces.clear()
        self._current = None

    def format(self, alphabet: str | None = None) -> str:
        """One line per character; stage values as symbols of *alphabet* if given."""
        lines = []
        for t in self.traces:
            encodes = [s for s in t.steps if s.op == "encode"]
            if alphabet:
                shown = indices_to_symbols([s.output for s in encodes], alphabet)
            else:
                shown = [str(s.output) for s in encodes]
            stages = " > ".join(f"{s.component}:{v}" for s, v in zip(encodes, shown))
            lines.append(f"{t.input_raw!r} [{t.input_index}] > {stages} > {t.output_char!r}")
        return "\n".join(lines)
