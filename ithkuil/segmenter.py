"""
The slot segmenter.

Walks a token run and assigns every token to a positional slot of the word
template. Formatives come in four structures:

    normal        (Cc)(Vv) Cr Vr Ca (VxCs...) (VnCn) (Vc)
    slot V        (Cc)(Vv) Cr Vr (CsVx...) CCa (VxCs...) (VnCn) (Vc)
    Ca shortcut   Cc Vv Cr (VxCs...') (VxCs...) (VnCn) (Vc)
    Cn shortcut   (Cc)(Vv) Cr Vr Cn (VxCs...) (Vc)

The other word types are

    referential   (ë) C1 Vc1 (w|y Vc2 (C2))      C1 may be a suppletive Cp
    combination   (ë) C1 Vc1 Cz (VxCs...) (Vc2)  Cz is x, xt, xp or xx
    affixual      Vx Cs (Vs)
    multi-affix   (ë) Cs Vx Cz (VxCs...) (Vz)    Cz is h, hw, hl or hr
    suppletive    Cp Vc                          Cp is hl, hm, hn or hň
    modular       (w|y) Vn  or  (w|y) Vn Cn (Vn n|ň) Vn|Vh
    register      h Vm
    MCS           hr Vm
    parsing       V'
    bias          Cb
    numeric       digits

Slots only group tokens; turning them into category values is the
resolver's job. A slot that stands in for a shortcut is tagged
``shortcut=True``, and glottal stops that a normal formative displaces
onto Vr, Vx or Vn are recorded on the case slot.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ithkuil.ca import is_geminate
from ithkuil.categories import Relation, RootKind, WordType
from ithkuil.errors import UnrecognizedStructure
from ithkuil.forms import (
    AFFIXUAL_VV_DEGREE,
    COMBINATION_SPECIFICATIONS,
    CZ_FORMS,
    MCS_CONSONANT,
    MODULAR_MODE_FORMS,
    REFERENTIAL_VV_DEGREE,
    REGISTER_CONSONANT,
    SCHWA_CZ_FORMS,
    SECOND_CASE_GLIDES,
    SUPPLETIVE_FORMS,
    is_aspectual_cn,
    is_bias_form,
    is_cn_shortcut_form,
    read_cc,
    relation_for,
)
from ithkuil.phonology import DEFAULT_VOWEL, GLOTTAL_STOP, HSeries, Stress
from ithkuil.romanize import Token, TokenKind

logger = logging.getLogger(__name__)


class SlotKind(Enum):
    ROOT = "root"
    STEM = "stem"
    VERSION = "version"
    AFFIX_SHORTCUT = "affix_shortcut"
    FUNCTION = "function"
    SPECIFICATION = "specification"
    CONTEXT = "context"
    SLOT_V_AFFIXES = "slot_v_affixes"
    CA = "ca"
    SLOT_VII_AFFIXES = "slot_vii_affixes"
    VN = "vn"
    CN = "cn"
    RELATION = "relation"
    CASE = "case"
    ILLOCUTION = "illocution"
    VALIDATION = "validation"
    SECOND_CASE = "second_case"
    SECOND_REFERENT = "second_referent"
    COMBINATION_SPECIFICATION = "combination_specification"
    COMBINATION_AFFIXES = "combination_affixes"
    ESSENCE = "essence"
    SCOPE = "scope"
    OTHER_AFFIXES = "other_affixes"
    OTHER_SCOPE = "other_scope"
    MODE = "mode"
    BIAS = "bias"
    REGISTER = "register"
    PARSING_STRESS = "parsing_stress"
    MODULAR_MODE = "modular_mode"
    SECOND_VN = "second_vn"
    FINAL_VN = "final_vn"
    MODULAR_SCOPE = "modular_scope"


@dataclass(frozen=True)
class Slot:
    """
    Tokens assigned to one grammatical position.

    ``variant`` tells the resolver how to read the tokens where one slot kind
    has several readings: the root kind for ROOT ("adjunct" for an affixual
    adjunct's VxCs and "multiple" for the CsVx opening a multiple-affix
    adjunct), "mood" or "case_scope" for CN ("mcs" for an MCS adjunct's
    vowel), "aspect" for an aspectual VN or SECOND_VN, the shortcut mode ("w"
    or "y") for a shortcut CA, "geminated" for a geminated CA, "cs_vx" for
    affixes written consonant first, "cz" for a multiple-affix adjunct's
    SCOPE, "combination" for a combination referential's SECOND_CASE, and the
    stress for RELATION, ESSENCE and MODE.
    """
    kind: SlotKind
    tokens: Tuple[Token, ...] = ()
    variant: Optional[str] = None
    shortcut: bool = False
    glottal_stop: bool = False

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def position(self) -> Optional[int]:
        """Position of the slot's first token, if it has any."""
        return self.tokens[0].position if self.tokens else None


@dataclass(frozen=True)
class Segmentation:
    word_type: WordType
    slots: Tuple[Slot, ...]
    stress: Stress

    def get(self, kind: SlotKind) -> Optional[Slot]:
        return next((slot for slot in self.slots if slot.kind is kind), None)


def _describe(tokens: Iterable[Token]) -> str:
    return "".join(token.text for token in tokens)


def _split_stress(tokens: Sequence[Token]) -> Tuple[List[Token], Stress]:
    tokens = list(tokens)
    if not tokens or tokens[-1].kind is not TokenKind.STRESS:
        raise UnrecognizedStructure("token run does not end with a stress token")
    stress = Stress(tokens.pop().text)

    # A word-final glottal stop belongs to the vowel before it.
    if tokens and tokens[-1].kind is TokenKind.GLOTTAL_STOP:
        glottal = tokens.pop()
        if not tokens or tokens[-1].kind is not TokenKind.VOWEL:
            raise UnrecognizedStructure("word-final glottal stop without a vowel", glottal.position)
        vowel = tokens.pop()
        tokens.append(Token(TokenKind.VOWEL, vowel.text + GLOTTAL_STOP, vowel.position))

    return tokens, stress


_GLIDES = tuple(SECOND_CASE_GLIDES)
_SUPPLETIVE_TEXTS = frozenset(SUPPLETIVE_FORMS.values())
_COMBINATION_TEXTS = frozenset(COMBINATION_SPECIFICATIONS.values())
_CZ_TEXTS = frozenset(text for text, _ in CZ_FORMS.values())
_MODULAR_PREFIXES = frozenset(text for text in MODULAR_MODE_FORMS.values() if text)


def _is_multiple_affixual(body: Sequence[Token], kinds: List[TokenKind]) -> bool:
    """(ë) Cs Vx Cz Vx Cs ...; hl and hr need the schwa."""
    schwa = kinds[:1] == [TokenKind.SCHWA]
    start = 1 if schwa else 0
    shape = kinds[start:start + 5]
    if shape != [TokenKind.CONSONANT, TokenKind.VOWEL, TokenKind.H_FORM, TokenKind.VOWEL, TokenKind.CONSONANT]:
        return False
    cz = body[start + 2].text
    return cz in _CZ_TEXTS and (schwa or cz not in SCHWA_CZ_FORMS)


def _is_combination(body: Sequence[Token], kinds: List[TokenKind], start: int) -> bool:
    if kinds[start:start + 3] != [TokenKind.CONSONANT, TokenKind.VOWEL, TokenKind.CONSONANT]:
        return False
    if body[start + 2].text not in _COMBINATION_TEXTS:
        return False
    # A geminate later on marks a slot-V formative instead.
    return not any(
        token.kind is TokenKind.CONSONANT and is_geminate(token.text) for token in body[start + 3:]
    )


def _is_referential_tail(body: Sequence[Token], kinds: List[TokenKind], start: int) -> bool:
    """C1 Vc1 (w|y Vc2 (C2)) from ``start``, where C1 is a referent or a suppletive Cp."""
    rest = kinds[start + 2:]
    if len(rest) == 0:
        return True
    if len(rest) not in (2, 3) or body[start + 2].text not in _GLIDES or rest[1] is not TokenKind.VOWEL:
        return False
    return len(rest) == 2 or rest[2] is TokenKind.CONSONANT


def infer_word_type(body: Sequence[Token]) -> WordType:
    """Guesses the word type from the shape of a token run (stress excluded)."""
    kinds = [token.kind for token in body]
    first = body[0]

    if len(body) == 1:
        if first.kind is TokenKind.NUMERAL:
            return WordType.NUMERIC
        if first.kind is TokenKind.VOWEL:
            return WordType.PARSING if GLOTTAL_STOP in first.text else WordType.MODULAR
        if first.kind is TokenKind.CONSONANT and is_bias_form(first.text):
            return WordType.BIAS

    if _is_multiple_affixual(body, kinds):
        return WordType.AFFIXUAL
    if first.kind is TokenKind.SCHWA:
        return WordType.REFERENTIAL

    if first.kind is TokenKind.H_FORM:
        text = first.text
        if len(body) == 2 and kinds[1] is TokenKind.VOWEL:
            if text == REGISTER_CONSONANT:
                return WordType.REGISTER
            if text == MCS_CONSONANT:
                return WordType.MCS
            if text in _SUPPLETIVE_TEXTS:
                return WordType.SUPPLETIVE
            if text in _MODULAR_PREFIXES:
                return WordType.MODULAR
        if text in _SUPPLETIVE_TEXTS and kinds[1:2] == [TokenKind.VOWEL] and len(body) > 2:
            if _is_referential_tail(body, kinds, 0):
                return WordType.REFERENTIAL
        if text in _MODULAR_PREFIXES and kinds[1:3] == [TokenKind.VOWEL, TokenKind.H_FORM]:
            return WordType.MODULAR
        return WordType.FORMATIVE

    if kinds[:2] == [TokenKind.VOWEL, TokenKind.H_FORM]:
        return WordType.MODULAR

    if kinds[:2] == [TokenKind.CONSONANT, TokenKind.VOWEL]:
        if _is_referential_tail(body, kinds, 0) or _is_combination(body, kinds, 0):
            return WordType.REFERENTIAL

    if kinds[:2] == [TokenKind.VOWEL, TokenKind.CONSONANT]:
        if len(kinds) == 2 or (len(kinds) == 3 and kinds[2] is TokenKind.VOWEL):
            return WordType.AFFIXUAL

    return WordType.FORMATIVE


_SEGMENTERS = {}


def segment(tokens: Sequence[Token], word_type_hint: Optional[WordType] = None) -> Segmentation:
    """
    Splits a token run (as returned by ``tokenize``) into slots.

    Raises UnrecognizedStructure if the tokens fit no template.
    """
    body, stress = _split_stress(tokens)
    word = _describe(body)
    if not body:
        raise UnrecognizedStructure("empty word")

    word_type = word_type_hint or infer_word_type(body)
    if word_type is WordType.FORMATIVE:
        slots = _FormativeSegmenter(body, stress, word).run()
    else:
        slots = _SEGMENTERS[word_type](body, stress, word)

    logger.debug(
        "Segmented %r as %s: %s",
        word,
        word_type.value,
        ", ".join(f"{slot.kind.name}={slot.text or '-'}" for slot in slots),
    )
    return Segmentation(word_type, tuple(slots), stress)


# -----------------------------------------------------------------
# --- Shared helpers
# -----------------------------------------------------------------

def _expect(tokens: List[Token], index: int, kind: TokenKind, what: str, word: str) -> Token:
    if index >= len(tokens) or tokens[index].kind is not kind:
        position = tokens[index].position if index < len(tokens) else None
        raise UnrecognizedStructure(f"expected {what}", position, word)
    return tokens[index]


def _affix_pairs(tokens: Sequence[Token], word: str, consonant_first: bool = False) -> List[Tuple[Token, Token]]:
    """Splits tokens into (Vx, Cs) pairs, reading CsVx order when asked."""
    if len(tokens) % 2:
        raise UnrecognizedStructure("affixes must come in vowel and consonant pairs", tokens[-1].position, word)

    pairs = []
    for index in range(0, len(tokens), 2):
        first, second = tokens[index], tokens[index + 1]
        cs, vx = (first, second) if consonant_first else (second, first)
        if vx.kind is not TokenKind.VOWEL:
            raise UnrecognizedStructure(f"expected an affix vowel, found {vx.text!r}", vx.position, word)
        if cs.kind not in (TokenKind.CONSONANT, TokenKind.NUMERAL):
            raise UnrecognizedStructure(f"expected an affix consonant, found {cs.text!r}", cs.position, word)
        pairs.append((vx, cs))
    return pairs


def _flatten(pairs, consonant_first: bool = False) -> Tuple[Token, ...]:
    output = []
    for vx, cs in pairs:
        output.extend((cs, vx) if consonant_first else (vx, cs))
    return tuple(output)


def _no_antepenultimate(stress: Stress, what: str, word: str):
    if stress is Stress.ANTEPENULTIMATE:
        raise UnrecognizedStructure(f"{what} cannot take antepenultimate stress", word=word)


def _exactly(body: List[Token], count: int, what: str, word: str):
    if len(body) != count:
        position = body[count].position if len(body) > count else None
        raise UnrecognizedStructure(f"{what} takes exactly {count} token(s)", position, word)


# -----------------------------------------------------------------
# --- Referentials
# -----------------------------------------------------------------

def _segment_referential(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _no_antepenultimate(stress, "referentials", word)

    index = 1 if body[0].kind is TokenKind.SCHWA else 0
    if index < len(body) and body[index].kind is TokenKind.H_FORM and body[index].text in _SUPPLETIVE_TEXTS:
        head = body[index]
        root = Slot(SlotKind.ROOT, (head,), RootKind.SUPPLETIVE.value)
    else:
        head = _expect(body, index, TokenKind.CONSONANT, "a referent cluster", word)
        root = Slot(SlotKind.ROOT, (head,), RootKind.REFERENTIAL.value)
    case = _expect(body, index + 1, TokenKind.VOWEL, "a case vowel", word)
    slots = [root, Slot(SlotKind.CASE, (case,))]

    rest = body[index + 2:]
    if rest and rest[0].kind is TokenKind.CONSONANT and rest[0].text in _COMBINATION_TEXTS:
        slots.append(Slot(SlotKind.COMBINATION_SPECIFICATION, (rest[0],)))
        rest = rest[1:]
        final = rest[-1:] if len(rest) % 2 else []
        pairs = _affix_pairs(rest[:len(rest) - len(final)], word)
        if pairs:
            slots.append(Slot(SlotKind.COMBINATION_AFFIXES, _flatten(pairs)))
        if final:
            _expect(final, 0, TokenKind.VOWEL, "a second case vowel", word)
            slots.append(Slot(SlotKind.SECOND_CASE, tuple(final), "combination"))
    elif rest:
        if len(rest) not in (2, 3) or rest[0].text not in _GLIDES or rest[1].kind is not TokenKind.VOWEL:
            raise UnrecognizedStructure("expected w or y and a second case vowel", rest[0].position, word)
        slots.append(Slot(SlotKind.SECOND_CASE, tuple(rest[:2])))
        if len(rest) == 3:
            second = _expect(rest, 2, TokenKind.CONSONANT, "a second referent cluster", word)
            slots.append(Slot(SlotKind.SECOND_REFERENT, (second,)))

    slots.append(Slot(SlotKind.ESSENCE, variant=stress.value))
    return slots


def _segment_suppletive(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 2, "a suppletive adjunct", word)
    head = _expect(body, 0, TokenKind.H_FORM, "a suppletive consonant", word)
    case = _expect(body, 1, TokenKind.VOWEL, "a case vowel", word)
    return [Slot(SlotKind.ROOT, (head,), RootKind.SUPPLETIVE.value), Slot(SlotKind.CASE, (case,))]


# -----------------------------------------------------------------
# --- Affixual adjuncts
# -----------------------------------------------------------------

def _segment_affixual(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    if _is_multiple_affixual(body, [token.kind for token in body]):
        return _segment_multiple_affixual(body, stress, word)
    _no_antepenultimate(stress, "affixual adjuncts", word)

    vx = _expect(body, 0, TokenKind.VOWEL, "an affix vowel", word)
    cs = _expect(body, 1, TokenKind.CONSONANT, "an affix consonant", word)
    if GLOTTAL_STOP in vx.text:
        raise UnrecognizedStructure("affixual adjuncts take no glottal stop in Vx", vx.position, word)

    slots = [Slot(SlotKind.ROOT, (vx, cs), "adjunct")]
    if len(body) > 2:
        vs = _expect(body, 2, TokenKind.VOWEL, "a scope vowel", word)
        if len(body) > 3:
            raise UnrecognizedStructure("too many tokens for an affixual adjunct", body[3].position, word)
        slots.append(Slot(SlotKind.SCOPE, (vs,)))

    slots.append(Slot(SlotKind.MODE, variant=stress.value))
    return slots


def _segment_multiple_affixual(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _no_antepenultimate(stress, "affixual adjuncts", word)
    index = 1 if body[0].kind is TokenKind.SCHWA else 0
    cs, vx, cz = body[index:index + 3]

    rest = body[index + 3:]
    final = rest[-1:] if len(rest) % 2 else []
    pairs = _affix_pairs(rest[:len(rest) - len(final)], word)
    if not pairs:
        raise UnrecognizedStructure("a multiple-affix adjunct needs affixes after Cz", cz.position, word)
    for other_vx, _ in pairs:
        if GLOTTAL_STOP in other_vx.text:
            raise UnrecognizedStructure("only the first affix vowel may carry a glottal stop", other_vx.position, word)

    slots = [
        Slot(SlotKind.ROOT, (cs, vx), "multiple"),
        Slot(SlotKind.SCOPE, (vx, cz), "cz"),
        Slot(SlotKind.OTHER_AFFIXES, _flatten(pairs)),
    ]
    if final:
        vz = _expect(final, 0, TokenKind.VOWEL, "a scope vowel", word)
        slots.append(Slot(SlotKind.OTHER_SCOPE, (vz,)))
    slots.append(Slot(SlotKind.MODE, variant=stress.value))
    return slots


# -----------------------------------------------------------------
# --- Single-slot adjuncts
# -----------------------------------------------------------------

def _segment_bias(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 1, "a bias adjunct", word)
    return [Slot(SlotKind.BIAS, (_expect(body, 0, TokenKind.CONSONANT, "a bias consonant cluster", word),))]


def _segment_register(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 2, "a register adjunct", word)
    if body[0].text != REGISTER_CONSONANT:
        raise UnrecognizedStructure("register adjuncts start with h", body[0].position, word)
    return [Slot(SlotKind.REGISTER, (_expect(body, 1, TokenKind.VOWEL, "a register vowel", word),))]


def _segment_mcs(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 2, "a mood/case-scope adjunct", word)
    if body[0].text != MCS_CONSONANT:
        raise UnrecognizedStructure("mood/case-scope adjuncts start with hr", body[0].position, word)
    return [Slot(SlotKind.CN, (_expect(body, 1, TokenKind.VOWEL, "a mood or case scope vowel", word),), "mcs")]


def _segment_parsing(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 1, "a parsing adjunct", word)
    vowel = _expect(body, 0, TokenKind.VOWEL, "a parsing vowel", word)
    if GLOTTAL_STOP not in vowel.text:
        raise UnrecognizedStructure("parsing adjuncts end in a glottal stop", vowel.position, word)
    return [Slot(SlotKind.PARSING_STRESS, (vowel,))]


def _segment_numeric(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _exactly(body, 1, "a numeric adjunct", word)
    number = _expect(body, 0, TokenKind.NUMERAL, "a number", word)
    return [Slot(SlotKind.ROOT, (number,), RootKind.NUMERIC.value)]


# -----------------------------------------------------------------
# --- Modular adjuncts
# -----------------------------------------------------------------

def _segment_modular(body: List[Token], stress: Stress, word: str) -> List[Slot]:
    _no_antepenultimate(stress, "modular adjuncts", word)

    prefix = ()
    if body[0].kind is TokenKind.H_FORM and body[0].text in _MODULAR_PREFIXES:
        prefix = (body[0],)
    slots = [Slot(SlotKind.MODULAR_MODE, prefix)]
    rest = body[len(prefix):]

    if len(rest) == 1:
        vn = _expect(rest, 0, TokenKind.VOWEL, "an aspect vowel", word)
        slots.append(Slot(SlotKind.VN, (vn,), "aspect"))
        return slots

    if len(rest) not in (3, 5):
        raise UnrecognizedStructure("a modular adjunct is Vn Cn (Vn Cm) and a final vowel", word=word)
    vn = _expect(rest, 0, TokenKind.VOWEL, "a Vn vowel", word)
    cn = _expect(rest, 1, TokenKind.H_FORM, "a Cn h-form", word)
    if GLOTTAL_STOP in vn.text:
        raise UnrecognizedStructure("modular adjuncts take no glottal stop", vn.position, word)
    slots.append(Slot(SlotKind.VN, (vn,), "aspect" if is_aspectual_cn(cn.h_form) else None))
    slots.append(Slot(SlotKind.CN, (cn,), "mood"))

    if len(rest) == 5:
        second = _expect(rest, 2, TokenKind.VOWEL, "a second Vn vowel", word)
        cm = _expect(rest, 3, TokenKind.CONSONANT, "n or ň", word)
        slots.append(Slot(SlotKind.SECOND_VN, (second, cm)))

    final = _expect(rest, len(rest) - 1, TokenKind.VOWEL, "a final vowel", word)
    if stress.is_final:
        slots.append(Slot(SlotKind.MODULAR_SCOPE, (final,)))
    else:
        slots.append(Slot(SlotKind.FINAL_VN, (final,)))
    return slots


_SEGMENTERS.update({
    WordType.REFERENTIAL: _segment_referential,
    WordType.AFFIXUAL: _segment_affixual,
    WordType.SUPPLETIVE: _segment_suppletive,
    WordType.MODULAR: _segment_modular,
    WordType.MCS: _segment_mcs,
    WordType.REGISTER: _segment_register,
    WordType.PARSING: _segment_parsing,
    WordType.BIAS: _segment_bias,
    WordType.NUMERIC: _segment_numeric,
})


# -----------------------------------------------------------------
# --- Formatives
# -----------------------------------------------------------------

class _FormativeSegmenter:
    """One-shot segmentation of a formative's token run."""

    def __init__(self, body: List[Token], stress: Stress, word: str):
        self.tokens = list(body)
        self.stress = stress
        self.word = word
        self.glottal_sources: List[Token] = []

    def fail(self, reason: str, token: Optional[Token] = None):
        raise UnrecognizedStructure(reason, token.position if token else None, self.word)

    def pop_front(self, kinds) -> Optional[Token]:
        if self.tokens and self.tokens[0].kind in kinds:
            return self.tokens.pop(0)
        return None

    def note_glottal(self, token: Optional[Token]):
        if token is not None and GLOTTAL_STOP in token.text:
            self.glottal_sources.append(token)

    def pairs(self, tokens: List[Token], consonant_first: bool = False) -> List[Tuple[Token, Token]]:
        return _affix_pairs(tokens, self.word, consonant_first)

    flatten = staticmethod(_flatten)

    def check_cn_shortcut(self, cn: Token):
        form = cn.h_form
        if form.series is not HSeries.S0:
            self.fail("Cn shortcuts cannot be aspectual", cn)
        if not is_cn_shortcut_form(form):
            self.fail("Cn shortcuts cannot use the default Cn", cn)

    def run(self) -> List[Slot]:
        tokens = self.tokens

        final = tokens.pop() if tokens and tokens[-1].kind is TokenKind.VOWEL else None

        cc = self.pop_front((TokenKind.H_FORM,))
        mode, concatenation = None, None
        if cc is not None:
            try:
                mode, concatenation = read_cc(cc.text)
            except ValueError as e:
                self.fail(str(e), cc)

        vv = self.pop_front((TokenKind.VOWEL,))
        if cc is not None and vv is None:
            self.fail("a Cc must be followed by Vv", cc)
        vv_form = vv.vowel if vv is not None else DEFAULT_VOWEL

        cr = self.pop_front((TokenKind.CONSONANT, TokenKind.NUMERAL))
        if cr is None:
            self.fail("expected a root", tokens[0] if tokens else None)

        if vv_form.degree == AFFIXUAL_VV_DEGREE:
            root_kind = RootKind.AFFIXUAL
        elif vv_form.degree == REFERENTIAL_VV_DEGREE:
            root_kind = RootKind.REFERENTIAL
        else:
            root_kind = RootKind.NORMAL
        if cr.kind is TokenKind.NUMERAL:
            if root_kind is not RootKind.NORMAL:
                self.fail("only normal roots can be numerals", cr)
            root_kind = RootKind.NUMERIC
        if mode is not None and root_kind is RootKind.AFFIXUAL:
            self.fail("affixual roots cannot take a Ca shortcut", cc)

        vr = None
        if mode is None:
            vr = self.pop_front((TokenKind.VOWEL,))
            if vr is None:
                self.fail("expected Vr after the root", cr)

        try:
            relation, high = relation_for(concatenation, self.stress)
        except ValueError as e:
            self.fail(str(e))

        # VnCn, or a lone Cn standing in for the whole Ca
        vn = cn = just_cn = None
        if tokens and tokens[-1].kind is TokenKind.H_FORM:
            if len(tokens) == 1:
                just_cn = tokens.pop()
            elif tokens[-2].kind is TokenKind.VOWEL:
                cn = tokens.pop()
                vn = tokens.pop()
            else:
                self.fail("Cn must follow a Vn vowel", tokens[-1])

        slots = [Slot(SlotKind.ROOT, (cr, vr) if root_kind is RootKind.AFFIXUAL else (cr,), root_kind.value)]
        if vv is not None:
            if root_kind in (RootKind.NORMAL, RootKind.NUMERIC):
                slots.append(Slot(SlotKind.STEM, (vv,)))
            slots.append(Slot(SlotKind.VERSION, (vv,)))
            if root_kind is RootKind.AFFIXUAL:
                slots.append(Slot(SlotKind.FUNCTION, (vv,), "affixual"))

        if vr is not None:
            self.note_glottal(vr)
            if root_kind is RootKind.AFFIXUAL:
                slots.append(Slot(SlotKind.CONTEXT, (vr,), "affixual"))
            else:
                slots.append(Slot(SlotKind.FUNCTION, (vr,)))
                slots.append(Slot(SlotKind.SPECIFICATION, (vr,)))
                slots.append(Slot(SlotKind.CONTEXT, (vr,)))

        if mode is not None:
            slots.extend(self.ca_shortcut_slots(cc, vv, mode, just_cn))
        else:
            if vv is not None and root_kind in (RootKind.NORMAL, RootKind.NUMERIC):
                slots.append(Slot(SlotKind.AFFIX_SHORTCUT, (vv,)))
            slots.extend(self.normal_slots(just_cn, vn is not None, relation))

        slot_v = next((slot for slot in slots if slot.kind is SlotKind.SLOT_V_AFFIXES), None)
        slot_v_count = len(slot_v.tokens) // 2 if slot_v else 0
        vv_glottal = vv is not None and GLOTTAL_STOP in vv.text
        if vv_glottal and slot_v_count < 2:
            self.fail("a glottal stop in Vv needs at least two slot V affixes", vv)
        if not vv_glottal and slot_v_count >= 2:
            self.fail("two or more slot V affixes need a glottal stop in Vv", vv)

        if vn is not None:
            self.note_glottal(vn)
            aspectual = is_aspectual_cn(cn.h_form)
            slots.append(Slot(SlotKind.VN, (vn,), "aspect" if aspectual else None))
            slots.append(Slot(SlotKind.CN, (cn,), "mood" if relation.is_verbal else "case_scope"))

        slots.append(Slot(SlotKind.RELATION, (cc,) if cc is not None else (), self.stress.value))
        slots.extend(self.final_slots(final, relation, high))
        return slots

    def ca_shortcut_slots(self, cc: Token, vv: Token, mode: str, just_cn: Optional[Token]) -> List[Slot]:
        if just_cn is not None:
            self.fail("Ca-shortcut formatives cannot use a Cn shortcut", just_cn)

        slot_v, slot_vii = [], []
        end_of_slot_v = None
        for vx, cs in self.pairs(self.tokens):
            if cs.kind is TokenKind.CONSONANT and is_geminate(cs.text):
                self.fail("geminated affix consonant in a Ca-shortcut formative", cs)
            if GLOTTAL_STOP in vx.text:
                if end_of_slot_v is not None:
                    self.fail("more than one end-of-slot-V marker", vx)
                end_of_slot_v = vx
                slot_v = slot_vii + [(vx, cs)]
                slot_vii = []
            else:
                slot_vii.append((vx, cs))

        slots = [Slot(SlotKind.CA, (cc, vv), mode, shortcut=True)]
        if slot_v:
            slots.insert(0, Slot(SlotKind.SLOT_V_AFFIXES, self.flatten(slot_v)))
        if slot_vii:
            slots.append(Slot(SlotKind.SLOT_VII_AFFIXES, self.flatten(slot_vii)))
        return slots

    def normal_slots(self, just_cn: Optional[Token], has_vn: bool, relation: Relation) -> List[Slot]:
        tokens = self.tokens
        cn_variant = "mood" if relation.is_verbal else "case_scope"

        if just_cn is not None:
            self.check_cn_shortcut(just_cn)
            return [Slot(SlotKind.CN, (just_cn,), cn_variant, shortcut=True)]

        if tokens and tokens[0].kind is TokenKind.H_FORM:
            cn = tokens.pop(0)
            self.check_cn_shortcut(cn)
            if has_vn:
                self.fail("a Cn shortcut cannot be followed by VnCn", cn)
            slot_vii = self.pairs(tokens)
            for vx, _ in slot_vii:
                self.note_glottal(vx)
            slots = [Slot(SlotKind.CN, (cn,), cn_variant, shortcut=True)]
            if slot_vii:
                slots.append(Slot(SlotKind.SLOT_VII_AFFIXES, self.flatten(slot_vii)))
            return slots

        if not tokens:
            self.fail("expected a Ca cluster")

        ca_index = next(
            (
                index
                for index, token in enumerate(tokens)
                if token.kind is TokenKind.CONSONANT and is_geminate(token.text)
            ),
            None,
        )
        slots = []
        if ca_index is not None:
            slot_v = self.pairs(tokens[:ca_index], consonant_first=True)
            for vx, _ in slot_v:
                self.note_glottal(vx)
            if slot_v:
                slots.append(Slot(SlotKind.SLOT_V_AFFIXES, self.flatten(slot_v, True), "cs_vx"))
            ca = tokens[ca_index]
            slots.append(Slot(SlotKind.CA, (ca,), "geminated"))
            rest = tokens[ca_index + 1:]
        else:
            ca = tokens[0]
            if ca.kind is not TokenKind.CONSONANT:
                self.fail(f"expected a Ca cluster, found {ca.text!r}", ca)
            slots.append(Slot(SlotKind.CA, (ca,)))
            rest = tokens[1:]

        slot_vii = self.pairs(rest)
        for vx, _ in slot_vii:
            self.note_glottal(vx)
        if slot_vii:
            slots.append(Slot(SlotKind.SLOT_VII_AFFIXES, self.flatten(slot_vii)))
        return slots

    def final_slots(self, final: Optional[Token], relation: Relation, high: bool) -> List[Slot]:
        self.note_glottal(final)
        if len(self.glottal_sources) > 1:
            self.fail("more than one glottal stop marks the case", self.glottal_sources[1])
        glottal = bool(self.glottal_sources)
        # The glottal stop of Vc itself is part of its vowel form.
        displaced = glottal and (final is None or GLOTTAL_STOP not in final.text)
        tokens = (final,) if final is not None else ()

        if relation.is_verbal:
            if final is None and not glottal:
                return []
            vk = final.vowel if final is not None else DEFAULT_VOWEL
            slots = [Slot(SlotKind.ILLOCUTION, tokens, glottal_stop=glottal)]
            if vk.series == 1:
                slots.append(Slot(SlotKind.VALIDATION, tokens, glottal_stop=glottal))
            return slots

        if relation.is_concatenated:
            variant = "high" if high else "concatenated"
        else:
            variant = None
        if final is None and not glottal and variant != "high":
            return []
        return [Slot(SlotKind.CASE, tokens, variant, glottal_stop=displaced)]
