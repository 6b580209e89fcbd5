# alphabet.py
"""Alphabets and the symbol ⇄ index conversions every component relies on."""
from __future__ import annotations

import math
import string
from typing import List

# ── alphabets ─────────────────────────────────────────────────────
ALPHA_ABC = string.ascii_uppercase
ALPHA_QWERTZ = "QWERTZUIOASDFGHJKPYXCVBNML"
ALPHA_TIRPITZ = "KZROUQHYAIGBLWVSTDXFPNMCJE"
ALPHA_28 = "ABCDEFGHIJKLMNOPQRSTUVXYZÅÄÖ"
ALPHA_Z = "1234567890"

# ── ring displays ─────────────────────────────────────────────────
DISPLAY_LATIN = tuple(ALPHA_ABC)
DISPLAY_NUMERIC = tuple(f"{n:02d}" for n in range(1, 27))
DISPLAY_DIGITS = tuple("0123456789")

DEFAULT_FALLBACK = "X"


def circular(value: int, size: int) -> int:
    """Wrap *value* into ``[0, size)``; negatives wrap backward."""
    if not math.isfinite(size) or size <= 0:
        raise ValueError(
            f"circular() needs a positive, finite size, got {size!r}"
        )
    # Python's modulo already takes the sign of the divisor
    return value % size


def normalise(symbol: str) -> str:
    """Upper-case, trim and keep only the first symbol of *symbol*."""
    return symbol.upper().strip()[:1]


def index_of(symbol: str, alphabet: str, fallback: str = DEFAULT_FALLBACK) -> int:
    """Position of *symbol* in *alphabet*, or of *fallback* when unknown."""
    ch = normalise(symbol)
    ind = alphabet.find(ch) if ch else -1
    if ind != -1:
        return ind

    sub = alphabet.find(fallback) if fallback else -1
    if sub == -1:
        raise ValueError(
            f"Neither {symbol!r} nor the fallback {fallback!r} "
            f"is in the alphabet {alphabet!r}"
        )
    return sub


def symbol_of(index: int, alphabet: str, fallback: str = DEFAULT_FALLBACK) -> str:
    """Symbol at *index*; out-of-range indices yield *fallback*."""
    if not 0 <= index < len(alphabet):
        return fallback
    return alphabet[index]


def derive_permutation(
    source: str,
    target: str,
    fallback: str = DEFAULT_FALLBACK,
) -> List[int]:
    """Map every symbol of *target* to its index in *source*.

    ``derive_permutation(ALPHA_ABC, "EKMF...")`` turns a wiring string into
    the integer table the components work with.
    """
    if len(source) != len(target):
        raise ValueError(
            f"Alphabet lengths differ: {len(source)} vs {len(target)}"
        )
    return [index_of(ch, source, fallback) for ch in target]


def indices_to_symbols(indices: List[int], alphabet: str = ALPHA_ABC) -> str:
    return "".join(symbol_of(i, alphabet, "?") for i in indices)


def check_alphabet(alphabet: str) -> str:
    """Validate a machine alphabet: non-empty and free of repeats."""
    if not alphabet:
        raise ValueError("Alphabet must not be empty")
    seen: set[str] = set()
    for ch in alphabet:
        if ch in seen:
            raise ValueError(f"Alphabet repeats the symbol {ch!r}")
        seen.add(ch)
    return alphabet
