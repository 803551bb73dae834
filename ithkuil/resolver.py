"""
The category resolver: one slot in, one category value out.

Every lookup goes through ``ithkuil.forms`` (or the Ca, referent and affix
codecs), so allomorphs such as ``aa``/``a`` or ``ll``/``pļ`` resolve to the
same value. Shortcut slots resolve to marker values (``CaShortcut``,
``CnShortcut``) that the assembler checks and then expands.
"""
import logging
from typing import Any, List, Tuple

from ithkuil.affixes import PlainAffix, decode_affix
from ithkuil.ca import Ca
from ithkuil.categories import AffixualMode, Essence, RootKind
from ithkuil.errors import UnknownForm
from ithkuil.formative import CnShortcut, Root
from ithkuil import forms
from ithkuil.phonology import DEFAULT_VOWEL, Stress, VowelForm
from ithkuil.referents import ReferentList
from ithkuil.segmenter import Segmentation, Slot, SlotKind

logger = logging.getLogger(__name__)


def _vowel(slot: Slot, index: int = 0) -> VowelForm:
    if len(slot.tokens) <= index:
        return DEFAULT_VOWEL
    return VowelForm.parse(slot.tokens[index].text)


def _affix_pairs(slot: Slot) -> List[Tuple[VowelForm, str]]:
    tokens = slot.tokens
    pairs = []
    for index in range(0, len(tokens), 2):
        first, second = tokens[index].text, tokens[index + 1].text
        if slot.variant == "cs_vx":
            first, second = second, first
        pairs.append((VowelForm.parse(first), second))
    return pairs


def _resolve_root(slot: Slot) -> Root:
    if slot.variant in ("adjunct", "multiple"):
        vx, cs = slot.tokens if slot.variant == "adjunct" else reversed(slot.tokens)
        # A glottal stop on the first Vx of a multiple-affix adjunct belongs to Cz.
        affix = decode_affix(VowelForm.parse(vx.text).with_glottal_stop(False), cs.text)
        if not isinstance(affix, PlainAffix):
            raise ValueError("affixual adjuncts carry plain affixes only")
        return Root.affixual(affix.cs, affix.degree, affix.type)

    kind = RootKind(slot.variant or RootKind.NORMAL.value)
    text = slot.tokens[0].text
    if kind is RootKind.NUMERIC:
        return Root.numeric(int(text))
    if kind is RootKind.REFERENTIAL:
        return Root.referential(ReferentList.parse(text))
    if kind is RootKind.SUPPLETIVE:
        return Root.suppletive(forms.read_suppletive(text))
    if kind is RootKind.AFFIXUAL:
        degree, _ = forms.read_affixual_vr(_vowel(slot, 1))
        return Root.affixual(text, degree)
    return Root.normal(text)


def _resolve_ca(slot: Slot):
    if slot.shortcut:
        return forms.ca_shortcut_from(slot.variant, _vowel(slot, 1).series)

    text = slot.text
    if slot.variant == "geminated":
        ca = Ca.from_geminated_string(text)
    else:
        ca = Ca.from_ungeminated_string(text)
    if ca is None:
        raise ValueError(f"{text!r} is not a Ca form")
    return ca


def _resolve_cn(slot: Slot):
    if slot.variant == "mcs":
        return forms.read_mcs(_vowel(slot))
    value = forms.read_cn(slot.tokens[0].h_form, verbal=slot.variant == "mood")
    return CnShortcut(value) if slot.shortcut else value


def _resolve_relation(slot: Slot):
    concatenation = forms.read_cc(slot.text)[1] if slot.tokens else None
    relation, _ = forms.relation_for(concatenation, Stress(slot.variant))
    return relation


def _resolve_case(slot: Slot):
    vowel = _vowel(slot)
    glottal = vowel.glottal_stop or slot.glottal_stop
    if slot.variant in ("high", "concatenated") and glottal:
        raise ValueError("concatenated formatives mark high cases with stress, not a glottal stop")
    return forms.case_from_vowel(vowel.with_glottal_stop(glottal), high=slot.variant == "high")


def _resolve_vk(slot: Slot):
    if slot.glottal_stop:
        raise ValueError("Vk takes no glottal stop")
    return forms.read_vk(_vowel(slot))


def _resolve_second_case(slot: Slot):
    if slot.variant == "combination":
        return forms.case_from_vowel(_vowel(slot))
    return forms.read_second_case(slot.tokens[0].text, _vowel(slot, 1))


def _resolve_scope(slot: Slot):
    if slot.variant == "cz":
        return forms.read_cz(slot.tokens[1].text, _vowel(slot).glottal_stop)
    return forms.read_vs(_vowel(slot))


def _resolve_affixes(slot: Slot):
    return tuple(decode_affix(vx, cs) for vx, cs in _affix_pairs(slot))


_RESOLVERS = {
    SlotKind.ROOT: _resolve_root,
    SlotKind.STEM: lambda slot: forms.read_vv(_vowel(slot)).stem,
    SlotKind.VERSION: lambda slot: forms.read_vv(_vowel(slot)).version,
    SlotKind.AFFIX_SHORTCUT: lambda slot: forms.affix_shortcut_from(_vowel(slot).series),
    SlotKind.FUNCTION: lambda slot: (
        forms.read_vv(_vowel(slot)).function if slot.variant == "affixual" else forms.read_vr(_vowel(slot))[0]
    ),
    SlotKind.SPECIFICATION: lambda slot: forms.read_vr(_vowel(slot))[1],
    SlotKind.CONTEXT: lambda slot: (
        forms.read_affixual_vr(_vowel(slot))[1] if slot.variant == "affixual" else forms.read_vr(_vowel(slot))[2]
    ),
    SlotKind.SLOT_V_AFFIXES: _resolve_affixes,
    SlotKind.SLOT_VII_AFFIXES: _resolve_affixes,
    SlotKind.CA: _resolve_ca,
    SlotKind.VN: lambda slot: forms.read_vn(_vowel(slot), aspectual=slot.variant == "aspect"),
    SlotKind.CN: _resolve_cn,
    SlotKind.RELATION: _resolve_relation,
    SlotKind.CASE: _resolve_case,
    SlotKind.ILLOCUTION: lambda slot: _resolve_vk(slot)[0],
    SlotKind.VALIDATION: lambda slot: _resolve_vk(slot)[1],
    SlotKind.SECOND_CASE: _resolve_second_case,
    SlotKind.ESSENCE: lambda slot: Essence.RPV if Stress(slot.variant) is Stress.ULTIMATE else Essence.NRM,
    SlotKind.SECOND_REFERENT: lambda slot: ReferentList.parse(slot.text),
    SlotKind.COMBINATION_SPECIFICATION: lambda slot: forms.read_combination_specification(slot.text),
    SlotKind.COMBINATION_AFFIXES: _resolve_affixes,
    SlotKind.SCOPE: _resolve_scope,
    SlotKind.OTHER_AFFIXES: _resolve_affixes,
    SlotKind.OTHER_SCOPE: lambda slot: forms.read_vs(_vowel(slot)),
    SlotKind.MODE: lambda slot: (
        AffixualMode.CONCATENATED if Stress(slot.variant) is Stress.ULTIMATE else AffixualMode.FULL
    ),
    SlotKind.BIAS: lambda slot: forms.read_bias(slot.text),
    SlotKind.REGISTER: lambda slot: forms.read_register(_vowel(slot)),
    SlotKind.PARSING_STRESS: lambda slot: forms.read_parsing_stress(_vowel(slot)),
    SlotKind.MODULAR_MODE: lambda slot: forms.read_modular_mode(slot.text),
    SlotKind.SECOND_VN: lambda slot: forms.read_vn(_vowel(slot), aspectual=forms.read_modular_cm(slot.tokens[1].text)),
    SlotKind.FINAL_VN: lambda slot: forms.read_vn(_vowel(slot), aspectual=False),
    SlotKind.MODULAR_SCOPE: lambda slot: forms.read_modular_scope(_vowel(slot)),
}


def resolve(slot: Slot) -> Any:
    """
    Maps a slot to its category value.

    Raises UnknownForm (naming the slot kind and its text) when the tokens
    have no meaning in that slot.
    """
    try:
        value = _RESOLVERS[slot.kind](slot)
    except (ValueError, KeyError, IndexError) as e:
        raise UnknownForm(slot.kind, slot.text, str(e), slot.position) from None
    logger.debug("Resolved %s %r as %r", slot.kind.name, slot.text, value)
    return value


def resolve_all(segmentation: Segmentation) -> List[Tuple[SlotKind, Any]]:
    """Resolves every slot of a segmentation, in order."""
    return [(slot.kind, resolve(slot)) for slot in segmentation.slots]
