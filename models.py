# models.py
"""Catalog of historical machine models.

Pure data: wiring strings list the output contact for each input contact,
in the order of ``wiring_alphabet``. ``stator`` is the entry wiring, read
as which key sits on each contact; no stator means key ``k`` feeds contact
``k``. Notch symbols name *wired* positions, not ring markings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from alphabet import (
    ALPHA_28,
    ALPHA_ABC,
    ALPHA_QWERTZ,
    ALPHA_TIRPITZ,
    ALPHA_Z,
    DISPLAY_DIGITS,
    DISPLAY_NUMERIC,
)


@dataclass(frozen=True)
class WheelSpec:
    label: str
    wiring: str
    notches: Tuple[str, ...] = ()
    thin: bool = False


@dataclass(frozen=True)
class ReflectorSpec:
    label: str
    wiring: str
    rewirable: bool = False
    positionable: bool = False
    rotating: bool = False
    notches: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Model:
    label: str
    alphabet: str
    wheels: Tuple[WheelSpec, ...]
    reflectors: Tuple[ReflectorSpec, ...]
    wheel_count: int = 3
    stator: Optional[str] = None
    wiring_alphabet: str = ALPHA_ABC
    plugboard: bool = False
    cog_drive: bool = False
    display: Optional[Tuple[str, ...]] = None
    fallback: str = "X"

    def wheel(self, label: str) -> WheelSpec | None:
        return next((w for w in self.wheels if w.label == label), None)

    def reflector(self, label: str) -> ReflectorSpec | None:
        return next((r for r in self.reflectors if r.label == label), None)


# ── shared wheel sets ─────────────────────────────────────────────

_SERVICE_WHEELS = (
    WheelSpec("I", "EKMFLGDQVZNTOWYHXUSPAIBRCJ", ("Y",)),
    WheelSpec("II", "AJDKSIRUXBLHWTMCQGZNPYFVOE", ("M",)),
    WheelSpec("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", ("D",)),
    WheelSpec("IV", "ESOVPZJAYQUIRHXLNFTGKDCMWB", ("R",)),
    WheelSpec("V", "VZBRGITYUPSDNHLXAWMJQOFECK", ("H",)),
)

_NAVY_WHEELS = _SERVICE_WHEELS + (
    WheelSpec("VI", "JPGVOUMFYQBENHZRDKASXLICTW", ("H", "U")),
    WheelSpec("VII", "NZJHGRCXMYSWBOUFAIVLPEKQDT", ("H", "U")),
    WheelSpec("VIII", "FKQHTLXOCBJSPDZRAMEWNIUYGV", ("H", "U")),
)

_COMMERCIAL_WHEELS = (
    WheelSpec("I", "LPGSZMHAEOQKVXRFYBUTNICJDW", ("G",)),
    WheelSpec("II", "SLVGBTFXJQOHEWIRZYAMKPCNDU", ("M",)),
    WheelSpec("III", "CJGDPSHKTURAWZXFMYNQOBVLIE", ("V",)),
)

_COMMERCIAL_UKW = "IMETCGFRAYSQBZXWLHKDVUPOJN"

# notch rings of the Abwehr counting machines
_G_NOTCHES_I = tuple("ACDEHIJKMNOQSTWXY")
_G_NOTCHES_II = tuple("ABDGHIKLNOPSUVY")
_G_NOTCHES_III = tuple("CEFIMNPSUVZ")

_KD_NOTCHES = tuple("ACGIMPTVY")

# ── models ────────────────────────────────────────────────────────

MODEL_I = Model(
    label="I (Wehrmacht/Luftwaffe)",
    alphabet=ALPHA_ABC,
    wheels=_SERVICE_WHEELS,
    reflectors=(
        ReflectorSpec("UKW-A", "EJMZALYXVBWFCRQUONTSPIKHGD"),
        ReflectorSpec("UKW-B", "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
        ReflectorSpec("UKW-C", "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    ),
    plugboard=True,
    display=DISPLAY_NUMERIC,
)

NORWAY = Model(
    label="Norway (Model I)",
    alphabet=ALPHA_ABC,
    wheels=(
        WheelSpec("I", "WTOKASUYVRBXJHQCPZEFMDINLG", ("Y",)),
        WheelSpec("II", "GJLPUBSWEMCTQVHXAOFZDRKYNI", ("M",)),
        WheelSpec("III", "JWFMHNBPUSDYTIXVZGRQLAOEKC", ("D",)),
        WheelSpec("IV", "FGZJMVXEPBWSHQTLIUDYKCNRAO", ("R",)),
        WheelSpec("V", "HEJXQOTZBVFDASCILWPGYNMURK", ("H",)),
    ),
    reflectors=(ReflectorSpec("UKW", "MOWJYPUXNDSRAIBFVLKZGQCHET"),),
    plugboard=True,
)

SONDER = Model(
    label="Sondermaschine (Model I)",
    alphabet=ALPHA_ABC,
    wheels=(
        WheelSpec("I", "VEOSIRZUJDQCKGWYPNXAFLTHMB", ("Y",)),
        WheelSpec("II", "UEMOATQLSHPKCYFWJZBGVXINDR", ("M",)),
        WheelSpec("III", "TZHXMBSIPNURJFDKEQVCWGLAOY", ("D",)),
    ),
    reflectors=(ReflectorSpec("UKW", "CIAGSNDRBYTPZFULVHEKOQXWJM"),),
    plugboard=True,
)

MODEL_M3 = Model(
    label="M3",
    alphabet=ALPHA_ABC,
    wheels=_NAVY_WHEELS,
    reflectors=(
        ReflectorSpec("UKW-B", "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
        ReflectorSpec("UKW-C", "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    ),
    plugboard=True,
)

MODEL_M4 = Model(
    label="M4 (Kriegsmarine U-Boat)",
    alphabet=ALPHA_ABC,
    wheel_count=4,
    wheels=_NAVY_WHEELS + (
        WheelSpec("Beta", "LEYJVCNIXWPBQMDRTAKZGFUHOS", thin=True),
        WheelSpec("Gamma", "FSOKANUERHMBTIYCWLQPZXVGJD", thin=True),
    ),
    reflectors=(
        ReflectorSpec("UKW-B", "ENKQAUYWJICOPBLMDXZVFTHRGS"),
        ReflectorSpec("UKW-C", "RDOBJNTKVEHMLFCWZAXGYIPSUQ"),
    ),
    plugboard=True,
)

MODEL_D = Model(
    label="D (Commercial A26)",
    alphabet=ALPHA_QWERTZ,
    wheels=_COMMERCIAL_WHEELS,
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
)

MODEL_K = Model(
    label="K (Commercial A27)",
    alphabet=ALPHA_QWERTZ,
    wheels=_COMMERCIAL_WHEELS,
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
)

MODEL_K_SWISS = Model(
    label="Swiss-K",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "PEZUOHXSCVFMTBGLRINQJWAYDK", ("G",)),
        WheelSpec("II", "ZOUESYDKFWPCIQXHMVBLGNJRAT", ("M",)),
        WheelSpec("III", "EHRVXGAOBQUSIMZFLYNWKTPDJC", ("V",)),
    ),
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
)

MODEL_KD = Model(
    label="KD (Mil Amt)",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "VEZIOJCXKYDUNTWAPLQGBHSFMR", _KD_NOTCHES),
        WheelSpec("II", "HGRBSJZETDLVPMQYCXAOKINFUW", _KD_NOTCHES),
        WheelSpec("III", "NWLHXGRBYOJSAZDVTPKFQMEUIC", _KD_NOTCHES),
    ),
    reflectors=(ReflectorSpec("UKW-D", _COMMERCIAL_UKW, rewirable=True),),
)

MODEL_K_RAILWAY = Model(
    label="K (Reichsbahn)",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "EVLPKUDJHTGSZFRABWYICOXNMQ", ("G",)),
        WheelSpec("II", "HXMQKGJTSCZFLBERNAWYIDOVPU", ("M",)),
        WheelSpec("III", "JHDBSKYPZNMVXURECLIGQOAWTF", ("V",)),
    ),
    reflectors=(ReflectorSpec("UKW", "MRZIPHOFDWQVAUGEKBYXNLJTSC", positionable=True),),
)

MODEL_T = Model(
    label="T (Tirpitz)",
    alphabet=ALPHA_QWERTZ,
    stator=ALPHA_TIRPITZ,
    wheels=(
        WheelSpec("I", "KPTYUELOCVGRFQDANJMBSWHZXI", tuple("EHMSY")),
        WheelSpec("II", "UPHZLWEQMTDJXCAKSOIGVBYFNR", tuple("EHNTZ")),
        WheelSpec("III", "QUDLYRFEKONVZAXWHMGPJBSICT", tuple("EHMSY")),
        WheelSpec("IV", "CIWTBKXNRESPFLYDAGVHQUOJZM", tuple("EHNTZ")),
        WheelSpec("V", "UAXGISNJBVERDYLFZWTPCKOHMQ", tuple("GKNSZ")),
        WheelSpec("VI", "XFUZGALVHCNYSEWQTDMRBKPIOJ", tuple("FMQUY")),
        WheelSpec("VII", "BJVFTXPLNAYOZIKWGDQERUCHSM", tuple("GKNSZ")),
        WheelSpec("VIII", "YMTPNZHWKODAJXELUQVGCBISFR", tuple("FMQUY")),
    ),
    reflectors=(ReflectorSpec("UKW", "GEKPBTAUMOCNILJDXZYFHWVQSR", positionable=True),),
)

MODEL_Z = Model(
    label="Z30 (Numerical)",
    alphabet=ALPHA_Z,
    wiring_alphabet=ALPHA_Z,
    wheels=(
        WheelSpec("I", "6418270359", ("2",)),
        WheelSpec("II", "5841097632", ("2",)),
        WheelSpec("III", "3581620794", ("2",)),
    ),
    reflectors=(
        ReflectorSpec(
            "UKW (Moving)",
            "5079183642",
            positionable=True,
            rotating=True,
            notches=("2",),
        ),
    ),
    display=DISPLAY_DIGITS,
    fallback="0",
)

MODEL_A133 = Model(
    label="B (A-133)",
    alphabet=ALPHA_28,
    wiring_alphabet=ALPHA_28,
    wheels=(
        WheelSpec("I", "PSBGÖXQJDHOÄUCFRTEZVÅINLYMKA", ("G",)),
        WheelSpec("II", "CHNSYÖADMOTRZXBÄIGÅEKQUPFLVJ", ("G",)),
        WheelSpec("III", "ÅVQIAÄXRJBÖZSPCFYUNTHDOMEKGL", ("G",)),
    ),
    reflectors=(ReflectorSpec("UKW", "LDGBÄNCPSKJAVFZHXUIÅRMQÖOTEY"),),
)

MODEL_A28 = Model(
    label="Zählwerk A-28",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "LPGSZMHAEOQKVXRFYBUTNICJDW", _G_NOTCHES_I),
        WheelSpec("II", "SLVGBTFXJQOHEWIRZYAMKPCNDU", _G_NOTCHES_II),
        WheelSpec("III", "CJGDPSHKTURAWZXFMYNQOBVLIE", _G_NOTCHES_III),
    ),
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
    cog_drive=True,
)

MODEL_G312 = Model(
    label="G-312 (G31 Abwehr)",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "DMTWSILRUYQNKFEJCAZBPGXOHV", _G_NOTCHES_I),
        WheelSpec("II", "HQZGPJTMOBLNCIFDYAWVEUSRKX", _G_NOTCHES_II),
        WheelSpec("III", "UQNTLSZFMREHDPXKIBVYGJCWOA", _G_NOTCHES_III),
    ),
    reflectors=(ReflectorSpec("UKW", "RULQMZJSYGOCETKWDAHNBXPVIF", positionable=True),),
    cog_drive=True,
)

MODEL_G260 = Model(
    label="G-260 (G31 Abwehr)",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "RCSPBLKQAUMHWYTIFZVGOJNEXD", _G_NOTCHES_I),
        WheelSpec("II", "WCMIBVPJXAROSGNDLZKEYHUFQT", _G_NOTCHES_II),
        WheelSpec("III", "FVDHZELSQMAXOKYIWPGCBUJTNR", _G_NOTCHES_III),
    ),
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
    cog_drive=True,
)

MODEL_G111 = Model(
    label="G-111 (G32 Hungarian)",
    alphabet=ALPHA_QWERTZ,
    wheels=(
        WheelSpec("I", "WLRHBQUNDKJCZSEXOTMAGYFPVI", _G_NOTCHES_I),
        WheelSpec("II", "TFJQAZWMHLCUIXRDYGOEVBNSKP", _G_NOTCHES_II),
        WheelSpec("III", "QTPIXWVDFRMUSLJOHCANEZKYBG", tuple("AEHNPUY")),
    ),
    reflectors=(ReflectorSpec("UKW", _COMMERCIAL_UKW, positionable=True),),
    cog_drive=True,
)

MODELS: Dict[str, Model] = {
    "I": MODEL_I,
    "Norway": NORWAY,
    "Sonder": SONDER,
    "M3": MODEL_M3,
    "M4": MODEL_M4,
    "D": MODEL_D,
    "K": MODEL_K,
    "K-Swiss": MODEL_K_SWISS,
    "KD": MODEL_KD,
    "K-Railway": MODEL_K_RAILWAY,
    "T": MODEL_T,
    "Z": MODEL_Z,
    "A133": MODEL_A133,
    "A28": MODEL_A28,
    "G312": MODEL_G312,
    "G260": MODEL_G260,
    "G111": MODEL_G111,
}


def find_model(name: str) -> Model:
    """Look a model up by key, case-insensitively."""
    for key, model in MODELS.items():
        if key.upper() == name.upper():
            return model
    raise ValueError(f"Unknown model {name!r}. Expected one of {list(MODELS)}")
