# formatting.py
"""Message formatting around the machine: substitutions in, blocks out.

None of this is cipher relevant; it only turns prose into the flat symbol
stream the machine expects and back again.
"""
from __future__ import annotations

import re
from typing import List, Sequence, Tuple

FormatSubstitutions = Sequence[Tuple[str, str]]

# the usual German procedure; details varied between services and years
FORMATTING_STANDARD: FormatSubstitutions = (
    (" ", "X"),
    ("\t", "X"),
    ("\n", ""),
    (":", "XX"),
    (",", "Y"),
    ("-", "YY"),
    ("/", "YY"),
    ("(", "KK"),
    (")", "KK"),
    ("[", "KK"),
    ("]", "KK"),
    ("'", "J"),
    ('"', "J"),
    ("?", "UD"),
)

_ws_re = re.compile(r"\s+")


def pre_format_encoding(msg: str, subs: FormatSubstitutions = FORMATTING_STANDARD) -> str:
    """Upper-case, trim and substitute punctuation before encoding."""
    table = dict(subs)
    text = msg.upper().strip()
    return "".join(table.get(ch, ch) for ch in text)


def post_format_encoding(cipher: str, block: int = 4) -> str:
    """Break cipher text into space separated blocks."""
    if block <= 0:
        raise ValueError(f"block size must be positive, got {block}")
    blocks: List[str] = [cipher[i : i + block] for i in range(0, len(cipher), block)]
    return " ".join(blocks)


def pre_format_decoding(cipher: str) -> str:
    """Drop the block spacing before decoding."""
    return _ws_re.sub("", cipher)


def post_format_decoding(msg: str, subs: FormatSubstitutions = FORMATTING_STANDARD) -> str:
    """Undo the substitutions, longest replacement first.

    Lossy: an X that was a real X in the plaintext comes back as a space.
    """
    text = msg
    for orig, sub in sorted(subs, key=lambda s: len(s[1]), reverse=True):
        if sub:
            text = text.replace(sub, orig)
    return text


def preprocess_message(msg: str, alpha: str, subs: FormatSubstitutions = FORMATTING_STANDARD) -> str:
    """Formatted text reduced to symbols the machine actually has."""
    return "".join(ch for ch in pre_format_encoding(msg, subs) if ch in alpha)
