# main.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

from alphabet import circular
from debug import COMPONENTS, Debug
from defects import Defect, MachineError
from formatting import (
    post_format_decoding,
    post_format_encoding,
    pre_format_decoding,
    preprocess_message,
)
from keyboard_and_plugboard import Plugboard
from machine import RETURN_PATHS, Machine
from models import MODELS, find_model
from stepping import DEFAULT_POLICY, POLICIES
from tracing import Tracer

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches that influence the crypto pipeline."""

    fallback: str | None = None         # model default when None
    stepping: str | None = None         # notch | lever | cog; model default when None
    return_path: str = "inverse"        # mirror | inverse
    do_format: bool = True              # substitutions + block grouping
    block: int = 4                      # display block size
    trace: bool = False                 # print the signal path per character


REQUIRED_KEYS = {"model", "wheels", "reflector"}


# ────────────────────────────────────────────────────────────────────────
#  1. Settings loading helpers
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    missing = REQUIRED_KEYS - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    return data


def _key_positions(
    key: str,
    alphabet: str,
    count: int,
    display: Sequence[str] = (),
) -> List[int]:
    """Window letters, leftmost first → 0-based positions, rightmost first.

    A wheel shows the symbol one step ahead of its position, so each key
    symbol lands one position back. Symbols engraved on the ring are read
    off *display*; anything else is looked up in *alphabet*.
    """
    if not key:
        return [0] * count
    if len(key) != count:
        raise ValueError(f"key {key!r} must have one symbol per wheel ({count})")
    out = []
    for ch in key.upper():
        if ch in display:
            ind = list(display).index(ch)
        else:
            ind = alphabet.find(ch)
        if ind == -1:
            raise ValueError(f"key symbol {ch!r} not in alphabet {alphabet!r}")
        out.append(circular(ind - 1, len(alphabet)))
    return out[::-1]


# ────────────────────────────────────────────────────────────────────────
#  2. MachineContext – wraps a configured Machine & rewind logic
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """A configured machine plus the settings it was built from.

    Settings list wheels, ring settings and key leftmost first, the way an
    operator reads them off the key sheet; ring settings are 1-based.
    """

    def __init__(self, settings: Dict, cfg: Config | None = None) -> None:
        cfg = cfg or Config()
        self.settings = settings
        self.model = find_model(settings["model"])
        self.alphabet = self.model.alphabet

        labels: List[str] = list(settings["wheels"])
        rings = [int(r) - 1 for r in settings.get("ring_set", [1] * len(labels))]
        if len(rings) != len(labels):
            raise ValueError("ring_set length mismatch")
        positions = _key_positions(
            settings.get("key", ""),
            self.model.wiring_alphabet,
            len(labels),
            self.model.display or (),
        )

        self.machine = Machine.from_model(
            self.model,
            stepping=cfg.stepping,
            return_path=cfg.return_path,
            fallback=cfg.fallback,
        )

        self.problems: List[Defect] = []
        for label, ring, pos in zip(reversed(labels), reversed(rings), positions):
            self._note(self.machine.install_wheel(label, ring, pos))
        self._note(self.machine.install_reflector(
            settings["reflector"], int(settings.get("reflector_position", 0))
        ))

        plugs = settings.get("plugs", [])
        if plugs:
            wanted = Plugboard.from_letters(self.model.label, self.alphabet, plugs)
            board = self.machine.install_plugboard()
            for a, b in wanted.plugs:
                self._note(board.add_plug(a, b))

        self.problems.extend(self.machine.validate())

    def _note(self, err: Defect | None) -> None:
        if err is not None:
            self.problems.append(err)

    # ––– helpers ––––––––––––––––––––––––––––––––––––––––––––––––

    def rewind(self) -> None:
        """Reset the machine to the key from the settings."""
        self.machine.rewind()

    def encipher_block(self, text: str, observer=None) -> str:
        """Encipher *text* once from the settings' key."""
        self.rewind()
        return self.machine.process_message(text, observer=observer)


# ────────────────────────────────────────────────────────────────────────
#  3. CipherPipeline – the high‑level encrypt/decrypt API
# ────────────────────────────────────────────────────────────────────────


class CipherPipeline:
    """Encrypt / decrypt using the configured pipeline."""

    def __init__(self, ctx: MachineContext, cfg: Config) -> None:
        if ctx.problems:
            raise ValueError(
                "machine is not usable:\n  " + "\n  ".join(map(str, ctx.problems))
            )
        self.ctx = ctx
        self.cfg = cfg
        self.tracer = Tracer() if cfg.trace else None

    # ––– public API ––––––––––––––––––––––––––––––––––––––––––––

    def encrypt(self, msg: str) -> str:
        if self.cfg.do_format:
            clean = preprocess_message(msg, self.ctx.alphabet)
        else:
            clean = msg
        cipher = self.ctx.encipher_block(clean, self.tracer)
        if self.cfg.do_format:
            return post_format_encoding(cipher, self.cfg.block)
        return cipher

    def decrypt(self, cipher: str) -> str:
        if self.cfg.do_format:
            cipher = pre_format_decoding(cipher)
        plain = self.ctx.encipher_block(cipher, self.tracer)
        if self.cfg.do_format:
            return post_format_decoding(plain)
        return plain


# ────────────────────────────────────────────────────────────────────────
#  4. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("-t", "--text", metavar="TEXT", help="Message to process. If omitted, an interactive loop starts.")
    p.add_argument("-d", "--decrypt", action="store_true", help="Treat the text as cipher text (undo block grouping and substitutions).")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON instead of the flags below.")
    p.add_argument("-m", "--model", default="I", help=f"Catalog model. One of {list(MODELS)}. Default: I")
    p.add_argument("-w", "--wheels", nargs="+", metavar="LABEL", default=["I", "II", "III"], help="Wheel labels, leftmost first.")
    p.add_argument("-r", "--reflector", default="UKW-B", help="Reflector label. Default: UKW-B")
    p.add_argument("--reflector-position", type=int, default=0, help="Starting position of a positionable reflector.")
    p.add_argument("--rings", nargs="+", type=int, metavar="N", help="Ring settings 1-N, leftmost first. Default: all 1")
    p.add_argument("-k", "--key", default="", help="Starting window letters, leftmost first.")
    p.add_argument("-p", "--plugs", nargs="*", default=[], metavar="PAIR", help="Plug pairs, e.g. AB CD EF")
    p.add_argument("--stepping", choices=list(POLICIES), help=f"Wheel stepping policy. Default: {DEFAULT_POLICY}, cog for cog-drive models")
    p.add_argument("--return-path", dest="return_path", choices=list(RETURN_PATHS), default="inverse", help="How the signal crosses the wheels on its way back. Default: inverse")
    p.add_argument("--format", dest="format", choices=["on", "off"], default="on", help="Punctuation substitution and block grouping. Default: on")
    p.add_argument("--block", type=int, default=4, help="Cipher block size. Default: 4")
    p.add_argument("--fallback", help="Symbol sent for keys the machine does not have.")
    p.add_argument("--trace", action="store_true", help="Print the signal path of every character.")
    p.add_argument("--debug", nargs="+", choices=list(COMPONENTS), metavar="COMPONENT", help=f"Log internals of {', '.join(COMPONENTS)}.")
    p.add_argument("--check", action="store_true", help="Only validate the configuration and report defects.")
    p.add_argument("--list-models", action="store_true", help="List the catalog and exit.")
    return p.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Dict:
    if args.config:
        return load_config(args.config)
    settings: Dict = {
        "model": args.model,
        "wheels": args.wheels,
        "reflector": args.reflector,
        "reflector_position": args.reflector_position,
        "key": args.key,
        "plugs": args.plugs,
    }
    if args.rings:
        settings["ring_set"] = args.rings
    return settings


def list_models() -> str:
    lines = []
    for key, model in MODELS.items():
        wheels = " ".join(w.label for w in model.wheels)
        refl = ", ".join(r.label for r in model.reflectors)
        lines.append(f"{key:<10} {model.label:<28} wheels: {wheels}  reflectors: {refl}")
    return "\n".join(lines)


# ────────────────────────────────────────────────────────────────────────
#  5. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)

    if args.list_models:
        print(list_models())
        return 0
    if args.debug:
        debug.enable(*args.debug)

    cfg = Config(
        fallback=args.fallback,
        stepping=args.stepping,
        return_path=args.return_path,
        do_format=(args.format == "on"),
        block=args.block,
        trace=args.trace,
    )

    try:
        ctx = MachineContext(settings_from_args(args), cfg)
    except (ValueError, KeyError, OSError) as exc:
        raise SystemExit(f"❌  {exc}")

    if args.check:
        for problem in ctx.problems:
            print(f"❌  {problem}")
        if not ctx.problems:
            print(f"✅  {ctx.machine.label}: configuration is valid")
        return 1 if ctx.problems else 0

    try:
        crypto = CipherPipeline(ctx, cfg)
    except ValueError as exc:
        raise SystemExit(f"❌  {exc}")

    run = crypto.decrypt if args.decrypt else crypto.encrypt
    label = "Decrypted" if args.decrypt else "Encrypted"

    # one‑shot mode ------------------------------------------------------
    if args.text is not None:
        try:
            print(f"{label}:", run(args.text))
        except MachineError as exc:
            raise SystemExit(f"❌  {exc}")
        if crypto.tracer:
            print(crypto.tracer.format(ctx.model.wiring_alphabet))
        return 0

    # interactive loop ---------------------------------------------------
    print(f"\nLoaded model '{ctx.machine.label}' with alphabet length {ctx.machine.size}.")
    print("Type blank line to quit.\n")
    while True:
        txt = input("\nMessage: ")
        if not txt.strip():
            break
        print(f"\n{label}:", run(txt))
        if crypto.tracer:
            print(crypto.tracer.format(ctx.model.wiring_alphabet))
            crypto.tracer.clear()
    return 0


if __name__ == "__main__":
    sys.exit(main())
