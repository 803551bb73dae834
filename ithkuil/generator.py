"""
The text generator: Formative in, canonical romanized word out.

Generation is the exact inverse of parsing and always picks one spelling:
a Ca shortcut whenever the formative qualifies for one, else a Cn shortcut,
else the long form. Default vowels at the edges of the word (Vv and the
final Vc/Vk/Vs) are left out unless the stress the word needs cannot be
written without them.
"""
import logging

from ithkuil.affixes import PlainAffix, encode_affix
from ithkuil.categories import (
    AffixShortcut,
    AffixualMode,
    AffixualScope,
    Aspect,
    Context,
    Essence,
    Function,
    RootKind,
    Specification,
    Valence,
    WordType,
    is_aspect,
)
from ithkuil.formative import Formative
from ithkuil import forms
from ithkuil.phonology import DEFAULT_VOWEL, GLOTTAL_STOP, SCHWA, Stress, VowelForm, add_stress, syllable_count

logger = logging.getLogger(__name__)


class _Writer:
    """Accumulates word parts; vowels are spelled against what precedes them."""

    def __init__(self):
        self.text = ""

    def consonant(self, text: str) -> "_Writer":
        self.text += text
        return self

    def vowel(self, vowel: VowelForm) -> "_Writer":
        self.text += vowel.render(self.text)
        return self


def uses_ca_shortcut(formative: Formative) -> bool:
    return (
        forms.ca_shortcut_for(formative.ca) is not None
        and formative.root.kind in (RootKind.NORMAL, RootKind.NUMERIC)
        and formative.function is Function.STA
        and formative.specification is Specification.BSC
        and formative.context is Context.EXS
        and formative.affix_shortcut is AffixShortcut.NONE
    )


def uses_cn_shortcut(formative: Formative) -> bool:
    return (
        formative.ca.is_default
        and formative.vn is Valence.MNO
        and not formative.slot_v_affixes
        and not formative.cn.is_default
    )


def _final_vowel(formative: Formative) -> VowelForm:
    if formative.relation.is_verbal:
        return forms.vk_vowel(formative.illocution, formative.validation)
    return forms.case_vowel(formative.case, glottal=not formative.relation.is_concatenated)


def _stress(formative: Formative) -> Stress:
    high = formative.relation.is_concatenated and forms.is_high_case(formative.case)
    return forms.stress_for(formative.relation, high)


def _cr(formative: Formative) -> str:
    root = formative.root
    if root.kind is RootKind.NUMERIC:
        return str(root.number)
    if root.kind is RootKind.REFERENTIAL:
        return root.referents.render()
    return root.cr


def _vv(formative: Formative, ca_shortcut: bool) -> VowelForm:
    glottal = len(formative.slot_v_affixes) >= 2
    kind = formative.root.kind
    if ca_shortcut:
        _, series = forms.CA_SHORTCUT_FORMS[forms.ca_shortcut_for(formative.ca)]
        vowel = forms.vv_vowel(formative.stem, formative.version, series)
    elif kind is RootKind.REFERENTIAL:
        vowel = forms.referential_vv_vowel(formative.version)
    elif kind is RootKind.AFFIXUAL:
        vowel = forms.affixual_vv_vowel(formative.version, formative.function)
    else:
        series = forms.AFFIX_SHORTCUT_SERIES[formative.affix_shortcut]
        vowel = forms.vv_vowel(formative.stem, formative.version, series)
    return vowel.with_glottal_stop(glottal)


def _vr(formative: Formative) -> VowelForm:
    if formative.root.kind is RootKind.AFFIXUAL:
        return forms.affixual_vr_vowel(formative.root.degree, formative.context)
    return forms.vr_vowel(formative.function, formative.specification, formative.context)


def _write_vn_cn(writer: _Writer, formative: Formative):
    if formative.vn is Valence.MNO and formative.cn.is_default:
        return
    writer.vowel(forms.vn_vowel(formative.vn))
    writer.consonant(forms.cn_form(formative.cn, isinstance(formative.vn, Aspect)).text)


def _write_affixes(writer: _Writer, affixes, consonant_first: bool = False, marker: bool = False):
    """Writes VxCs pairs (CsVx when ``consonant_first``); ``marker`` glottalizes the last Vx."""
    for index, affix in enumerate(affixes):
        vx, cs = encode_affix(affix)
        if marker and index == len(affixes) - 1:
            vx = vx.with_glottal_stop()
        if consonant_first:
            writer.consonant(cs).vowel(vx)
        else:
            writer.vowel(vx).consonant(cs)


def _formative_text(formative: Formative, shape: str, with_vv: bool, with_final: bool) -> str:
    """
    Spells a formative in one ``shape`` ("ca", "cn" or "long"), with or
    without the optional Vv and final vowel. Stress is not marked.
    """
    writer = _Writer()
    concatenation = formative.relation if formative.relation.is_concatenated else None

    mode = None
    if shape == "ca":
        mode, _ = forms.CA_SHORTCUT_FORMS[forms.ca_shortcut_for(formative.ca)]
    cc = forms.cc_form(mode, concatenation)
    if cc:
        writer.consonant(cc)

    vv = _vv(formative, shape == "ca")
    if with_vv or cc or vv != DEFAULT_VOWEL:
        writer.vowel(vv)
    writer.consonant(_cr(formative))

    if shape == "ca":
        _write_affixes(writer, formative.slot_v_affixes, marker=True)
        _write_affixes(writer, formative.slot_vii_affixes)
        _write_vn_cn(writer, formative)
    elif shape == "cn":
        writer.vowel(_vr(formative))
        writer.consonant(forms.cn_form(formative.cn, False).text)
        _write_affixes(writer, formative.slot_vii_affixes)
    else:
        writer.vowel(_vr(formative))
        _write_affixes(writer, formative.slot_v_affixes, consonant_first=True)
        writer.consonant(formative.ca.render(geminated=bool(formative.slot_v_affixes)))
        _write_affixes(writer, formative.slot_vii_affixes)
        _write_vn_cn(writer, formative)

    final = _final_vowel(formative)
    if with_final or final != DEFAULT_VOWEL:
        writer.vowel(final)
    return writer.text


def _generate_formative(formative: Formative) -> str:
    stress = _stress(formative)
    shapes = []
    if uses_ca_shortcut(formative):
        shapes.append("ca")
    elif uses_cn_shortcut(formative):
        shapes.append("cn")
    shapes.append("long")

    for shape in shapes:
        for with_vv, with_final in ((False, False), (False, True), (True, True)):
            word = add_stress(_formative_text(formative, shape, with_vv, with_final), stress)
            if word is not None:
                return word
        logger.debug("No %s spelling carries %s stress, trying the next shape", shape, stress.value)

    # The long form with every vowel written has at least two nuclei.
    raise AssertionError(f"no spelling found for {formative!r}")


def _generate_referential(formative: Formative) -> str:
    root = formative.root
    writer = _Writer()
    if root.kind is RootKind.SUPPLETIVE:
        writer.consonant(forms.SUPPLETIVE_FORMS[root.mode])
    else:
        writer.consonant(root.referents.render())
    writer.vowel(forms.case_vowel(formative.case))

    if formative.combination_specification is not None:
        writer.consonant(forms.COMBINATION_SPECIFICATIONS[formative.combination_specification])
        _write_affixes(writer, formative.combination_affixes)
        if formative.second_case is not None:
            writer.vowel(forms.case_vowel(formative.second_case))
    elif formative.second_case is not None:
        writer.consonant(forms.second_case_glide(formative.second_case))
        writer.vowel(forms.case_vowel(formative.second_case, glottal=False))
        if formative.second_referents is not None:
            writer.consonant(formative.second_referents.render())

    text = writer.text
    if formative.essence is Essence.RPV:
        if syllable_count(text) == 1:
            text = SCHWA + text
        return add_stress(text, Stress.ULTIMATE)
    return text


def _generate_affixual(formative: Formative) -> str:
    if formative.other_affixes:
        return _generate_multiple_affixual(formative)

    root = formative.root
    vx, cs = encode_affix(PlainAffix(root.cr, root.degree, root.affix_type))
    writer = _Writer().vowel(vx).consonant(cs)
    if formative.scope is not AffixualScope.VDOM:
        writer.vowel(forms.VS_FORMS[formative.scope])

    text = writer.text
    if formative.mode is AffixualMode.CONCATENATED:
        if syllable_count(text) == 1:
            text = writer.vowel(forms.VS_FORMS[AffixualScope.VDOM]).text
        return add_stress(text, Stress.ULTIMATE)
    return text


def _generate_multiple_affixual(formative: Formative) -> str:
    root = formative.root
    cz, glottal = forms.CZ_FORMS[formative.scope]
    vx, cs = encode_affix(PlainAffix(root.cr, root.degree, root.affix_type))

    writer = _Writer()
    if cz in forms.SCHWA_CZ_FORMS:
        writer.consonant(SCHWA)
    writer.consonant(cs).vowel(vx.with_glottal_stop(glottal)).consonant(cz)
    _write_affixes(writer, formative.other_affixes)
    if formative.other_scope is not None:
        writer.vowel(forms.VS_FORMS[formative.other_scope])

    if formative.mode is AffixualMode.CONCATENATED:
        return add_stress(writer.text, Stress.ULTIMATE)
    return writer.text


def _generate_modular(formative: Formative) -> str:
    writer = _Writer().consonant(forms.MODULAR_MODE_FORMS[formative.modular_mode])
    writer.vowel(forms.vn_vowel(formative.vn))
    if formative.cn is None:
        return writer.text

    writer.consonant(forms.cn_form(formative.cn, is_aspect(formative.vn)).text)
    if formative.second_vn is not None:
        writer.vowel(forms.vn_vowel(formative.second_vn))
        writer.consonant(forms.MODULAR_CM_FORMS[is_aspect(formative.second_vn)])

    if formative.modular_scope is not None:
        writer.vowel(forms.MODULAR_SCOPE_FORMS[formative.modular_scope])
        return add_stress(writer.text, Stress.ULTIMATE)
    writer.vowel(forms.vn_vowel(formative.final_vn))
    return writer.text


def _generate_parsing(formative: Formative) -> str:
    # The glottal stop closes the word instead of splitting the vowel.
    vowel = forms.PARSING_FORMS[formative.parsing_stress]
    return vowel.with_glottal_stop(False).render() + GLOTTAL_STOP


_GENERATORS = {
    WordType.FORMATIVE: _generate_formative,
    WordType.REFERENTIAL: _generate_referential,
    WordType.AFFIXUAL: _generate_affixual,
    WordType.MODULAR: _generate_modular,
    WordType.PARSING: _generate_parsing,
    WordType.SUPPLETIVE: lambda formative: (
        _Writer()
        .consonant(forms.SUPPLETIVE_FORMS[formative.root.mode])
        .vowel(forms.case_vowel(formative.case))
        .text
    ),
    WordType.MCS: lambda formative: _Writer().consonant(forms.MCS_CONSONANT).vowel(forms.MCS_FORMS[formative.cn]).text,
    WordType.REGISTER: lambda formative: (
        _Writer().consonant(forms.REGISTER_CONSONANT).vowel(forms.REGISTER_FORMS[formative.register]).text
    ),
    WordType.BIAS: lambda formative: forms.BIAS_FORMS[formative.bias],
    WordType.NUMERIC: lambda formative: str(formative.root.number),
}


def generate(formative: Formative) -> str:
    """Returns the canonical romanized spelling of ``formative``."""
    word = _GENERATORS[formative.word_type](formative)
    logger.debug("Generated %r for %s word", word, formative.word_type.value)
    return word
