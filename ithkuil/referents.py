"""
Referent consonants, as used by referential words and referential roots.
"""
from dataclasses import dataclass
from typing import Tuple

from ithkuil.categories import Perspective, ReferentEffect, ReferentTarget

T = ReferentTarget
E = ReferentEffect

REFERENT_FORMS = {
    (T.M1, E.NEU): "l",
    (T.M1, E.BEN): "r",
    (T.M1, E.DET): "ř",
    (T.OBV, E.NEU): "ll",
    (T.OBV, E.BEN): "rr",
    (T.OBV, E.DET): "řř",
    (T.M2, E.NEU): "s",
    (T.M2, E.BEN): "š",
    (T.M2, E.DET): "ž",
    (T.P2, E.NEU): "n",
    (T.P2, E.BEN): "t",
    (T.P2, E.DET): "d",
    (T.MA, E.NEU): "m",
    (T.MA, E.BEN): "p",
    (T.MA, E.DET): "b",
    (T.PA, E.NEU): "ň",
    (T.PA, E.BEN): "k",
    (T.PA, E.DET): "g",
    (T.MI, E.NEU): "z",
    (T.MI, E.BEN): "ţ",
    (T.MI, E.DET): "ḑ",
    (T.PI, E.NEU): "ẓ",
    (T.PI, E.BEN): "f",
    (T.PI, E.DET): "v",
    (T.MX, E.NEU): "c",
    (T.MX, E.BEN): "č",
    (T.MX, E.DET): "j",
    (T.PVS, E.NEU): "mm",
    (T.PVS, E.BEN): "nn",
    (T.PVS, E.DET): "ňň",
    (T.RDP, E.NEU): "th",
    (T.RDP, E.BEN): "ph",
    (T.RDP, E.DET): "kh",
}
REFERENT_LOOKUP = {text: key for key, text in REFERENT_FORMS.items()}

# Checked in this order, first as a prefix and then as a suffix.
_PERSPECTIVE_MARKERS = (
    ("tļ", Perspective.G),
    ("ļ", Perspective.G),
    ("ç", Perspective.N),
    ("x", Perspective.N),
    ("w", Perspective.A),
    ("y", Perspective.A),
)

# (text, written before the referents)
_PERSPECTIVE_SPELLING = {
    Perspective.M: ("", True),
    Perspective.G: ("tļ", True),
    Perspective.N: ("ç", True),
    Perspective.A: ("w", False),
}


def _split_perspective(text: str) -> Tuple[str, Perspective]:
    for marker, perspective in _PERSPECTIVE_MARKERS:
        if text.startswith(marker):
            return text[len(marker):], perspective
        if text.endswith(marker):
            return text[:-len(marker)], perspective
    return text, Perspective.M


def _read_referents(body: str, text: str) -> Tuple["Referent", ...]:
    """Reads referents left to right, two-letter forms first."""
    referents = []
    index = 0
    while index < len(body):
        pair = body[index:index + 2]
        if len(pair) == 2 and pair in REFERENT_LOOKUP:
            key = REFERENT_LOOKUP[pair]
            index += 2
        elif body[index] in REFERENT_LOOKUP:
            key = REFERENT_LOOKUP[body[index]]
            index += 1
        else:
            raise ValueError(f"{body[index]!r} in {text!r} is not a referent")
        referents.append(Referent(*key))
    return tuple(referents)


@dataclass(frozen=True)
class Referent:
    target: ReferentTarget
    effect: ReferentEffect = ReferentEffect.NEU

    @property
    def text(self) -> str:
        return REFERENT_FORMS[(self.target, self.effect)]

    def label(self, long: bool = False, show_defaults: bool = False) -> str:
        output = self.target.label(long)
        if show_defaults or not self.effect.is_default:
            output += "." + self.effect.label(long)
        return output


@dataclass(frozen=True)
class ReferentList:
    """
    Referents plus a perspective. Only lists whose spelling reads back as
    the same list can be built: adjacent referents such as ``ma`` + ``ma``
    ("mm", which reads as PVS) are rejected.
    """
    referents: Tuple[Referent, ...]
    perspective: Perspective = Perspective.M

    def __post_init__(self):
        if not self.referents:
            raise ValueError("A referent list needs at least one referent")
        object.__setattr__(self, "referents", tuple(self.referents))

        for first, second in zip(self.referents, self.referents[1:]):
            text = first.text + second.text
            if _read_referents(text, text) != (first, second):
                raise ValueError(
                    f"Referents {first.label()} and {second.label()} cannot stand next to each other:"
                    f" {text!r} reads differently"
                )
        text = self.render()
        body, perspective = _split_perspective(text)
        if perspective is not self.perspective or _read_referents(body, text) != self.referents:
            raise ValueError(f"{self.label()} is spelled {text!r}, which reads as a different referent list")

    @classmethod
    def of(cls, *targets, perspective: Perspective = Perspective.M) -> "ReferentList":
        """Shorthand: ``ReferentList.of("1m", "2p")`` or with Referent instances."""
        referents = tuple(
            target if isinstance(target, Referent) else Referent(ReferentTarget.from_label(target))
            for target in targets
        )
        return cls(referents, perspective)

    @classmethod
    def parse(cls, text: str) -> "ReferentList":
        """Reads a referent cluster. Raises ValueError when any part is not a referent."""
        body, perspective = _split_perspective(text)
        if not body:
            raise ValueError(f"{text!r} holds no referent")
        return cls(_read_referents(body, text), perspective)

    def render(self) -> str:
        body = "".join(referent.text for referent in self.referents)
        marker, before = _PERSPECTIVE_SPELLING[self.perspective]
        return marker + body if before else body + marker

    def label(self, long: bool = False, show_defaults: bool = False) -> str:
        parts = [referent.label(long, show_defaults) for referent in self.referents]
        if show_defaults or not self.perspective.is_default:
            parts.append(self.perspective.label(long))
        return "[" + "+".join(parts) + "]"

    def __str__(self):
        return self.label()
