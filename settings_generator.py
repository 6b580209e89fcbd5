# settings_generator.py
"""Random daily settings for a catalog model, written as JSON for main.py."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List

from models import MODELS, Model, find_model

MAX_PAIRS = 10


# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(alpha) // 2)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def choose_wheels(model: Model, rng: Random | SystemRandom) -> List[str]:
    """Wheel labels leftmost first; thin wheels only go in the extra slot."""
    regular = [w.label for w in model.wheels if not w.thin]
    thin = [w.label for w in model.wheels if w.thin]
    if thin and model.wheel_count > 3:
        picks = rng.sample(regular, model.wheel_count - 1)
        return [rng.choice(thin)] + picks
    return rng.sample(regular, min(model.wheel_count, len(regular)))


def generate_settings(
    model_key: str,
    rng: Random | SystemRandom,
    max_pairs: int = MAX_PAIRS,
) -> Dict:
    model = find_model(model_key)
    α = model.alphabet

    wheels = choose_wheels(model, rng)
    reflector = rng.choice(model.reflectors)
    cfg: Dict = {
        "model": model_key,
        "wheels": wheels,
        "reflector": reflector.label,
        "ring_set": [rng.randint(1, len(α)) for _ in wheels],
        "key": "".join(rng.choices(α, k=len(wheels))),
        "plugs": choose_pairs(α, max_pairs, rng) if model.plugboard else [],
    }
    if reflector.positionable:
        cfg["reflector_position"] = rng.randrange(len(α))
    return cfg


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate daily machine settings")
    p.add_argument("--model", default="I", help=f"Catalog model, one of {list(MODELS)}")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=MAX_PAIRS, help="Plug pairs to draw")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("rotorsim_config.json"),
        help="Destination JSON file (default: rotorsim_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_cli(argv)
    try:
        cfg = generate_settings(args.model, build_rng(args.seed), args.pairs)
    except ValueError as exc:
        sys.exit(f"❌  {exc}")

    args.outfile.write_text(json.dumps(cfg, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
        f"   model       : {cfg['model']}\n"
        f"   wheels      : {cfg['wheels']}\n"
        f"   reflector   : {cfg['reflector']}\n"
        f"   key         : {cfg['key']}\n"
        f"   plug pairs  : {len(cfg['plugs'])}")


if __name__ == "__main__":
    main()
