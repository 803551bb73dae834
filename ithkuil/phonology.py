"""
Phonological building blocks shared by the tokenizer and the generator.

Vowel forms are addressed by (series, degree) exactly as the morphology
tables lay them out: four series of ten degrees each, where degree 0 is the
"special" column (ae, ea, üo, üö). Any vowel form can additionally carry a
glottal stop, written inside the form (a'a, a'i).
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ithkuil.errors import InvalidStress

CONSONANTS = frozenset("bcçčdḑfghjklļmnňprřsštţvwxyzẓž")
VOWELS = frozenset("aäeëioöuü")
GLOTTAL_STOP = "'"
SCHWA = "ë"

STRESSED_VOWELS = {
    "á": "a",
    "â": "ä",
    "é": "e",
    "ê": "ë",
    "í": "i",
    "ó": "o",
    "ô": "ö",
    "ú": "u",
    "û": "ü",
}
ACCENTED_VOWELS = {plain: stressed for stressed, plain in STRESSED_VOWELS.items()}

# i and u glide onto a directly preceding vowel from these sets
_DIPHTHONG_LEADS = {"i": frozenset("aeëou"), "u": frozenset("aeëoi")}


class Stress(Enum):
    ULTIMATE = "ultimate"
    PENULTIMATE = "penultimate"
    ANTEPENULTIMATE = "antepenultimate"
    MONOSYLLABIC = "monosyllabic"

    @property
    def is_final(self) -> bool:
        """Ultimate and monosyllabic stress read the same way grammatically."""
        return self in (Stress.ULTIMATE, Stress.MONOSYLLABIC)


# -----------------------------------------------------------------
# --- Vowel forms
# -----------------------------------------------------------------

# Degree 0..9 per series. "x|y" lists a form and the alternate spelling used
# after a glide (y before i-initial forms, w before u-initial forms).
_VOWEL_TABLE = (
    ("ae", "a", "ä", "e", "i", "ëi", "ö", "o", "ü", "u"),
    ("ea", "ai", "au", "ei", "eu", "ëu", "ou", "oi", "iu", "ui"),
    ("üo", "ia|uä", "ie|uë", "io|üä", "iö|üë", "eë", "uö|öë", "uo|öä", "ue|ië", "ua|iä"),
    ("üö", "ao", "aö", "eo", "eö", "oë", "öe", "oe", "öa", "oa"),
)

_DOUBLED_ALLOMORPHS = {
    "aa": "a",
    "ää": "ä",
    "ee": "e",
    "ii": "i",
    "öö": "ö",
    "oo": "o",
    "üü": "ü",
    "uu": "u",
}


def _build_vowel_lookup() -> Dict[str, Tuple[int, int]]:
    lookup = {}
    for series_index, row in enumerate(_VOWEL_TABLE):
        for degree, cell in enumerate(row):
            for spelling in cell.split("|"):
                lookup[spelling] = (series_index + 1, degree)
    for doubled, single in _DOUBLED_ALLOMORPHS.items():
        lookup[doubled] = lookup[single]
    return lookup


VOWEL_LOOKUP = _build_vowel_lookup()


@dataclass(frozen=True)
class VowelForm:
    """A vowel form: series 1-4, degree 0-9, optionally glottalized."""
    series: int
    degree: int
    glottal_stop: bool = False

    def __post_init__(self):
        if self.series not in (1, 2, 3, 4) or not 0 <= self.degree <= 9:
            raise ValueError(f"No vowel form for series {self.series}, degree {self.degree}")

    @classmethod
    def parse(cls, text: str) -> "VowelForm":
        """Reads a vowel run. Any glottal stop inside it marks the form as glottalized."""
        glottal_stop = GLOTTAL_STOP in text
        bare = text.replace(GLOTTAL_STOP, "")
        try:
            series, degree = VOWEL_LOOKUP[bare]
        except KeyError:
            raise ValueError(f"{text!r} is not a vowel form") from None
        return cls(series, degree, glottal_stop)

    @property
    def is_default(self) -> bool:
        return self.series == 1 and self.degree == 1 and not self.glottal_stop

    def with_glottal_stop(self, glottal_stop: bool = True) -> "VowelForm":
        return replace(self, glottal_stop=glottal_stop)

    def render(self, previous: str = "") -> str:
        """
        Spells the form. ``previous`` is the text written so far; a trailing
        glide there selects the alternate series-3 spelling.
        """
        cell = _VOWEL_TABLE[self.series - 1][self.degree].split("|")
        text = cell[0]
        if len(cell) > 1:
            glide = previous[-1:] if previous else ""
            if (glide == "y" and text.startswith("i")) or (glide == "w" and text.startswith("u")):
                text = cell[1]

        if self.glottal_stop:
            if len(text) == 1:
                text = text + GLOTTAL_STOP + text
            else:
                text = text[0] + GLOTTAL_STOP + text[1:]
        return text

    def __str__(self):
        return self.render()


DEFAULT_VOWEL = VowelForm(1, 1)


# -----------------------------------------------------------------
# --- H-forms
# -----------------------------------------------------------------

class HSeries(Enum):
    S0 = "h"
    SW = "w"
    SY = "y"


_H_TABLE = {
    HSeries.S0: ("h", "hl", "hr", "hm", "hn", "hň"),
    HSeries.SW: ("w", "hw", "hrw", "hmw", "hnw", "hňw"),
    HSeries.SY: ("y",),
}


@dataclass(frozen=True)
class HForm:
    series: HSeries
    degree: int

    def __post_init__(self):
        if not 1 <= self.degree <= len(_H_TABLE[self.series]):
            raise ValueError(f"No h-form for {self.series.name}, degree {self.degree}")

    @classmethod
    def parse(cls, text: str) -> "HForm":
        try:
            return H_LOOKUP[text]
        except KeyError:
            raise ValueError(f"{text!r} is not an h-form") from None

    @property
    def text(self) -> str:
        return _H_TABLE[self.series][self.degree - 1]

    def __str__(self):
        return self.text


H_LOOKUP = {
    spelling: HForm(series, index + 1)
    for series, row in _H_TABLE.items()
    for index, spelling in enumerate(row)
}


# -----------------------------------------------------------------
# --- Syllables and stress
# -----------------------------------------------------------------

def unstress_vowels(word: str) -> str:
    return "".join(STRESSED_VOWELS.get(char, char) for char in word)


def vowel_nuclei(word: str) -> List[Tuple[int, int]]:
    """
    Returns the (start, end) spans of every syllable nucleus in an unstressed
    word, in reading order. Scanning runs from the end of the word so that
    an i or u glides onto the vowel before it.
    """
    spans = []
    index = len(word) - 1
    while index >= 0:
        char = word[index]
        if char in VOWELS:
            start = index
            leads = _DIPHTHONG_LEADS.get(char)
            if leads and index > 0 and word[index - 1] in leads:
                start = index - 1
            spans.append((start, index + 1))
            index = start - 1
        else:
            index -= 1
    spans.reverse()
    return spans


def syllable_count(word: str) -> int:
    return len(vowel_nuclei(unstress_vowels(word)))


def detect_stress(word: str) -> Stress:
    """
    Reads the stress marked on a normalized word.

    Unmarked polysyllables take penultimate stress; unmarked single-nucleus
    words are monosyllabic. Raises InvalidStress if two nuclei are marked or
    the mark sits further back than the antepenult.
    """
    plain = unstress_vowels(word)
    spans = vowel_nuclei(plain)
    stressed = [index for index, char in enumerate(word) if char in STRESSED_VOWELS]

    if not stressed:
        return Stress.MONOSYLLABIC if len(spans) == 1 else Stress.PENULTIMATE

    if len(stressed) > 1:
        raise InvalidStress(word, "more than one stressed vowel")

    position = next(
        (len(spans) - number for number, (start, end) in enumerate(spans) if start <= stressed[0] < end),
        None,
    )
    if position == 1:
        return Stress.ULTIMATE
    if position == 2:
        return Stress.PENULTIMATE
    if position == 3:
        return Stress.ANTEPENULTIMATE
    raise InvalidStress(word, "stress falls before the antepenultimate syllable")


def add_stress(word: str, stress: Stress) -> Optional[str]:
    """
    Marks ``stress`` on an unstressed word, or returns None when the word has
    too few syllables to carry it. Penultimate stress is never written.
    """
    spans = vowel_nuclei(word)
    count = len(spans)

    if stress is Stress.MONOSYLLABIC:
        return word if count == 1 else None
    if stress is Stress.PENULTIMATE:
        return word if count >= 2 else None
    if stress is Stress.ULTIMATE:
        if count == 0:
            return None
        if count == 1:
            return word
        target = spans[-1][0]
    else:
        if count < 3:
            return None
        target = spans[-3][0]

    return word[:target] + ACCENTED_VOWELS[word[target]] + word[target + 1:]
