# stepping.py
"""Which wheels move on a key press.

Every policy looks at the notch state *before* anything moves and returns
one flag per wheel (index 0 = rightmost). The machine applies the flags
afterwards, so a policy never sees a half-stepped chain.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Protocol, Sequence


class Steppable(Protocol):
    @property
    def at_notch(self) -> bool: ...

    @property
    def thin(self) -> bool: ...


StepPolicy = Callable[[Sequence[Steppable]], List[bool]]


def notch_stepping(wheels: Sequence[Steppable]) -> List[bool]:
    """Wheel 0 always steps; any other wheel steps while *it* sits on a notch."""
    return [i == 0 or w.at_notch for i, w in enumerate(wheels)]


def lever_stepping(wheels: Sequence[Steppable]) -> List[bool]:
    """Pawl and ratchet drive with the double-step.

    Pawl ``i`` rests on wheel ``i-1``; when that wheel shows its notch the
    pawl pushes both wheels. Thin wheels have no pawl and stay put.
    """
    driven = [i for i, w in enumerate(wheels) if not w.thin]
    steps = [False] * len(wheels)
    if not driven:
        return steps

    steps[driven[0]] = True
    for prev, cur in zip(driven, driven[1:]):
        if wheels[prev].at_notch:
            steps[prev] = True
            steps[cur] = True
    return steps


def cog_stepping(wheels: Sequence[Steppable]) -> List[bool]:
    """Odometer-style cog drive: a carry only passes a wheel that moves."""
    driven = [i for i, w in enumerate(wheels) if not w.thin]
    steps = [False] * len(wheels)
    carry = True
    for i in driven:
        if not carry:
            break
        steps[i] = True
        carry = wheels[i].at_notch
    return steps


POLICIES: Dict[str, StepPolicy] = {
    "notch": notch_stepping,
    "lever": lever_stepping,
    "cog": cog_stepping,
}

DEFAULT_POLICY = "notch"


def resolve_policy(policy: str | StepPolicy | None) -> StepPolicy:
    if policy is None:
        return POLICIES[DEFAULT_POLICY]
    if callable(policy):
        return policy
    try:
        return POLICIES[policy]
    except KeyError:
        raise ValueError(
            f"Unknown stepping policy {policy!r}. Expected one of {list(POLICIES)}"
        ) from None
