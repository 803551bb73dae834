"""
Affix value types and their VxCs codec.

An affix is written as a vowel (Vx) plus a consonant cluster (Cs). Most
affixes are plain: Cs names the affix and Vx carries its degree and type.
A few Cs forms are reserved and turn the vowel into something else: a stacked
case (lw/ly), a case accessor (sw, zw, ... and their y-forms), or, with the
vowel üö, a whole stacked Ca complex written as the consonant. The remaining
series-4 vowels mark a referential affix whose Cs is a referent cluster, and
a Cs written in digits is a numeric affix.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ithkuil.ca import Ca, is_geminate
from ithkuil.categories import AffixType, Case, CaseAccessorMode
from ithkuil.forms import case_from_index, case_from_vowel, case_index, case_vowel, is_high_case
from ithkuil.phonology import CONSONANTS, VowelForm
from ithkuil.referents import ReferentList

CA_STACKING_VOWEL = VowelForm(4, 0)
REFERENTIAL_AFFIX_SERIES = 4

_AFFIX_TYPES = tuple(AffixType)

_CASE_STACKING_FORMS = {False: "lw", True: "ly"}

_CASE_ACCESSOR_FORMS = {
    (CaseAccessorMode.NORMAL, AffixType.T1): "s",
    (CaseAccessorMode.NORMAL, AffixType.T2): "z",
    (CaseAccessorMode.NORMAL, AffixType.T3): "č",
    (CaseAccessorMode.INVERSE, AffixType.T1): "š",
    (CaseAccessorMode.INVERSE, AffixType.T2): "ž",
    (CaseAccessorMode.INVERSE, AffixType.T3): "j",
}
_CASE_ACCESSOR_LOOKUP = {
    stem + glide: (key, glide == "y")
    for key, stem in _CASE_ACCESSOR_FORMS.items()
    for glide in ("w", "y")
}

# h, w and y open Cc, Cn and second-case forms.
_RESERVED_INITIALS = frozenset("hwy")


def check_consonant_cluster(text: str, what: str = "consonant cluster") -> str:
    """Raises ValueError unless ``text`` is consonants only and opens with none of h, w, y."""
    if not isinstance(text, str) or not text or any(letter not in CONSONANTS for letter in text):
        raise ValueError(f"{text!r} is not a {what}")
    if text[0] in _RESERVED_INITIALS:
        raise ValueError(f"{text!r} cannot be a {what}: h, w and y start other slots")
    return text


def check_cs(cs: str) -> str:
    """Raises ValueError unless ``cs`` can stand as the Cs of a plain affix."""
    check_consonant_cluster(cs, "affix consonant")
    if cs in _CASE_STACKING_FORMS.values() or cs in _CASE_ACCESSOR_LOOKUP:
        raise ValueError(f"{cs!r} is reserved for case-stacking and case-accessor affixes")
    # A doubled Cs would read as a geminated Ca.
    if is_geminate(cs):
        raise ValueError(f"{cs!r} is geminate and would read as a Ca")
    return cs


def _check_degree(degree: int):
    if not isinstance(degree, int) or not 0 <= degree <= 9:
        raise ValueError(f"Affix degree must be 0-9, got {degree!r}")


@dataclass(frozen=True)
class PlainAffix:
    cs: str
    degree: int
    type: AffixType = AffixType.T1
    gloss: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        _check_degree(self.degree)
        check_cs(self.cs)


@dataclass(frozen=True)
class CaStackingAffix:
    ca: Ca


@dataclass(frozen=True)
class CaseStackingAffix:
    case: Case


@dataclass(frozen=True)
class CaseAccessorAffix:
    case: Case
    type: AffixType = AffixType.T1
    mode: CaseAccessorMode = CaseAccessorMode.NORMAL


@dataclass(frozen=True)
class ReferentialAffix:
    """A referent cluster in Cs, with one of the first nine cases in Vx."""
    referents: ReferentList
    case: Case = Case.THM

    def __post_init__(self):
        if case_index(self.case) >= 9:
            raise ValueError(f"Referential affixes take THM through IND, not {self.case.abbreviation}")
        check_cs(self.referents.render())


@dataclass(frozen=True)
class NumericAffix:
    number: int
    degree: int
    type: AffixType = AffixType.T1

    def __post_init__(self):
        if not isinstance(self.number, int) or self.number < 0:
            raise ValueError(f"Numeric affixes need a whole number >= 0, got {self.number!r}")
        _check_degree(self.degree)


Affix = Union[PlainAffix, CaStackingAffix, CaseStackingAffix, CaseAccessorAffix, ReferentialAffix, NumericAffix]


def decode_affix(vx: VowelForm, cs: str) -> Affix:
    """
    Reads one VxCs pair. A glottal stop on ``vx`` is ignored here; it
    belongs to the word, not to the affix.

    Raises ValueError when the pair is not a valid affix.
    """
    vowel = vx.with_glottal_stop(False)

    if vowel == CA_STACKING_VOWEL:
        ca = Ca.from_ungeminated_string(cs)
        if ca is None:
            raise ValueError(f"{cs!r} is not a Ca form for a Ca-stacking affix")
        return CaStackingAffix(ca)

    if cs in ("lw", "ly"):
        return CaseStackingAffix(case_from_vowel(vowel, high=cs == "ly"))

    accessor = _CASE_ACCESSOR_LOOKUP.get(cs)
    if accessor is not None:
        (mode, affix_type), high = accessor
        return CaseAccessorAffix(case_from_vowel(vowel, high=high), affix_type, mode)

    if cs.isdigit():
        if vowel.series == REFERENTIAL_AFFIX_SERIES:
            raise ValueError(f"{vowel} is not a numeric affix vowel")
        return NumericAffix(int(cs), vowel.degree, _AFFIX_TYPES[vowel.series - 1])

    if vowel.series == REFERENTIAL_AFFIX_SERIES:
        return ReferentialAffix(ReferentList.parse(cs), case_from_index(vowel.degree - 1))
    return PlainAffix(cs, vowel.degree, _AFFIX_TYPES[vowel.series - 1])


def encode_affix(affix: Affix) -> Tuple[VowelForm, str]:
    """Returns the (Vx, Cs) pair that writes ``affix``."""
    if isinstance(affix, PlainAffix):
        return VowelForm(_AFFIX_TYPES.index(affix.type) + 1, affix.degree), affix.cs

    if isinstance(affix, NumericAffix):
        return VowelForm(_AFFIX_TYPES.index(affix.type) + 1, affix.degree), str(affix.number)

    if isinstance(affix, CaStackingAffix):
        return CA_STACKING_VOWEL, affix.ca.to_ungeminated_string()

    if isinstance(affix, ReferentialAffix):
        return VowelForm(REFERENTIAL_AFFIX_SERIES, case_index(affix.case) + 1), affix.referents.render()

    high = is_high_case(affix.case)
    vowel = case_vowel(affix.case, glottal=False)
    if isinstance(affix, CaseStackingAffix):
        return vowel, _CASE_STACKING_FORMS[high]

    stem = _CASE_ACCESSOR_FORMS[(affix.mode, affix.type)]
    return vowel, stem + ("y" if high else "w")
