"""
Surface forms of every slot, in both directions.

The resolver reads words through these tables and the generator writes words
through the same tables, so a value always has exactly one canonical
spelling. Readers raise ValueError on forms that mean nothing; callers wrap
that into the error type of their pipeline stage.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ithkuil.ca import Ca
from ithkuil.categories import (
    AffixShortcut,
    AffixualScope,
    Aspect,
    Bias,
    CaShortcut,
    Case,
    CaseScope,
    Context,
    Effect,
    Essence,
    Extension,
    Function,
    Illocution,
    Level,
    ModularMode,
    ModularScope,
    Mood,
    MoodOrCaseScope,
    ParsingStress,
    Perspective,
    Phase,
    Register,
    Relation,
    RootKind,
    Specification,
    Stem,
    SuppletiveMode,
    Valence,
    Validation,
    Version,
    Vn,
)
from ithkuil.phonology import HForm, HSeries, Stress, VowelForm

# -----------------------------------------------------------------
# --- Vc: cases
# -----------------------------------------------------------------

# Index n: series (n mod 36) // 9 + 1, degree n mod 9 + 1, glottal from 36 on.
# None marks vowel slots that hold no case.
CASE_SLOTS: Tuple[Optional[Case], ...] = tuple(Case)[:36] + (
    Case.PRN, Case.DSP, Case.COR, Case.CPS, Case.COM, Case.UTL, Case.PRD, None, Case.RLT,
    Case.ACT, Case.ASI, Case.ESS, Case.TRM, Case.SEL, Case.CFM, Case.DEP, None, Case.VOC,
    Case.LOC, Case.ATD, Case.ALL, Case.ABL, Case.ORI, Case.IRL, Case.INV, None, Case.NAV,
    Case.CNR, Case.ASS, Case.PER, Case.PRO, Case.PCV, Case.PCR, Case.ELP, None, Case.PLM,
)
_CASE_INDEX = {case: index for index, case in enumerate(CASE_SLOTS) if case is not None}

HIGH_CASE_OFFSET = 36


def case_index(case: Case) -> int:
    return _CASE_INDEX[case]


def case_from_index(index: int) -> Case:
    case = CASE_SLOTS[index] if 0 <= index < len(CASE_SLOTS) else None
    if case is None:
        raise ValueError(f"No case at vowel position {index}")
    return case


def is_high_case(case: Case) -> bool:
    return case_index(case) >= HIGH_CASE_OFFSET


def case_vowel(case: Case, glottal: bool = True) -> VowelForm:
    """The Vc form of ``case``; high cases carry a glottal stop unless ``glottal`` is off."""
    index = case_index(case)
    low = index % HIGH_CASE_OFFSET
    return VowelForm(low // 9 + 1, low % 9 + 1, glottal and index >= HIGH_CASE_OFFSET)


def case_from_vowel(vowel: VowelForm, high: bool = False) -> Case:
    if vowel.degree == 0:
        raise ValueError("degree-0 vowels carry no case")
    index = (vowel.series - 1) * 9 + vowel.degree - 1
    if vowel.glottal_stop or high:
        index += HIGH_CASE_OFFSET
    return case_from_index(index)


# -----------------------------------------------------------------
# --- Vr: function, specification, context
# -----------------------------------------------------------------

_VR_DEGREES = {
    (Function.STA, Specification.BSC): 1,
    (Function.STA, Specification.CTE): 2,
    (Function.STA, Specification.CSV): 3,
    (Function.STA, Specification.OBJ): 4,
    (Function.DYN, Specification.OBJ): 6,
    (Function.DYN, Specification.CSV): 7,
    (Function.DYN, Specification.CTE): 8,
    (Function.DYN, Specification.BSC): 9,
}
_VR_LOOKUP = {degree: pair for pair, degree in _VR_DEGREES.items()}
_CONTEXTS = tuple(Context)


def vr_vowel(function: Function, specification: Specification, context: Context) -> VowelForm:
    return VowelForm(_CONTEXTS.index(context) + 1, _VR_DEGREES[(function, specification)])


def read_vr(vowel: VowelForm) -> Tuple[Function, Specification, Context]:
    try:
        function, specification = _VR_LOOKUP[vowel.degree]
    except KeyError:
        raise ValueError(f"degree {vowel.degree} is not a Vr degree") from None
    return function, specification, _CONTEXTS[vowel.series - 1]


def affixual_vr_vowel(degree: int, context: Context) -> VowelForm:
    return VowelForm(_CONTEXTS.index(context) + 1, degree)


def read_affixual_vr(vowel: VowelForm) -> Tuple[int, Context]:
    return vowel.degree, _CONTEXTS[vowel.series - 1]


# -----------------------------------------------------------------
# --- Vv: stem, version, shortcuts, root kind
# -----------------------------------------------------------------

_STEM_VERSION_DEGREES = {
    (Stem.S1, Version.PRC): 1,
    (Stem.S1, Version.CPT): 2,
    (Stem.S2, Version.PRC): 3,
    (Stem.S2, Version.CPT): 4,
    (Stem.S0, Version.CPT): 6,
    (Stem.S0, Version.PRC): 7,
    (Stem.S3, Version.CPT): 8,
    (Stem.S3, Version.PRC): 9,
}
_STEM_VERSION_LOOKUP = {degree: pair for pair, degree in _STEM_VERSION_DEGREES.items()}

REFERENTIAL_VV_DEGREE = 0
AFFIXUAL_VV_DEGREE = 5

AFFIX_SHORTCUT_SERIES = {
    AffixShortcut.NONE: 1,
    AffixShortcut.NEG4: 2,
    AffixShortcut.DCD4: 3,
    AffixShortcut.DCD5: 4,
}
_AFFIX_SHORTCUT_LOOKUP = {series: shortcut for shortcut, series in AFFIX_SHORTCUT_SERIES.items()}

# The plain affix each affix shortcut stands for: (Cs, degree).
AFFIX_SHORTCUT_AFFIXES = {
    AffixShortcut.NEG4: ("r", 4),
    AffixShortcut.DCD4: ("t", 4),
    AffixShortcut.DCD5: ("t", 5),
}

# Ca shortcut mode (the Cc glide) and Vv series
CA_SHORTCUT_FORMS = {
    CaShortcut.DEFAULT: ("w", 1),
    CaShortcut.G: ("w", 2),
    CaShortcut.N: ("w", 3),
    CaShortcut.G_RPV: ("w", 4),
    CaShortcut.PRX: ("y", 1),
    CaShortcut.RPV: ("y", 2),
    CaShortcut.A: ("y", 3),
    CaShortcut.PRX_RPV: ("y", 4),
}
_CA_SHORTCUT_LOOKUP = {form: shortcut for shortcut, form in CA_SHORTCUT_FORMS.items()}

CA_SHORTCUT_VALUES = {
    CaShortcut.DEFAULT: Ca(),
    CaShortcut.G: Ca(perspective=Perspective.G),
    CaShortcut.N: Ca(perspective=Perspective.N),
    CaShortcut.G_RPV: Ca(perspective=Perspective.G, essence=Essence.RPV),
    CaShortcut.PRX: Ca(extension=Extension.PRX),
    CaShortcut.RPV: Ca(essence=Essence.RPV),
    CaShortcut.A: Ca(perspective=Perspective.A),
    CaShortcut.PRX_RPV: Ca(extension=Extension.PRX, essence=Essence.RPV),
}
_CA_SHORTCUT_BY_VALUE = {ca: shortcut for shortcut, ca in CA_SHORTCUT_VALUES.items()}


def ca_shortcut_for(ca: Ca) -> Optional[CaShortcut]:
    """The Ca shortcut that writes ``ca``, if there is one."""
    return _CA_SHORTCUT_BY_VALUE.get(ca)


def ca_shortcut_from(mode: str, series: int) -> CaShortcut:
    return _CA_SHORTCUT_LOOKUP[(mode, series)]


@dataclass(frozen=True)
class VvReading:
    """Everything a Vv form says before the rest of the word is known."""
    root_kind: RootKind
    version: Version
    series: int
    stem: Optional[Stem] = None
    function: Optional[Function] = None


def read_vv(vowel: VowelForm) -> VvReading:
    if vowel.degree == AFFIXUAL_VV_DEGREE:
        return VvReading(
            RootKind.AFFIXUAL,
            Version.PRC if vowel.series in (1, 3) else Version.CPT,
            vowel.series,
            function=Function.STA if vowel.series in (1, 2) else Function.DYN,
        )
    if vowel.degree == REFERENTIAL_VV_DEGREE:
        if vowel.series > 2:
            raise ValueError("referential roots take Vv from series 1 or 2 only")
        return VvReading(RootKind.REFERENTIAL, (Version.PRC, Version.CPT)[vowel.series - 1], vowel.series)

    stem, version = _STEM_VERSION_LOOKUP[vowel.degree]
    return VvReading(RootKind.NORMAL, version, vowel.series, stem=stem)


def affix_shortcut_from(series: int) -> AffixShortcut:
    return _AFFIX_SHORTCUT_LOOKUP[series]


def vv_vowel(stem: Stem, version: Version, series: int = 1) -> VowelForm:
    return VowelForm(series, _STEM_VERSION_DEGREES[(stem, version)])


def referential_vv_vowel(version: Version) -> VowelForm:
    return VowelForm(1 if version is Version.PRC else 2, REFERENTIAL_VV_DEGREE)


def affixual_vv_vowel(version: Version, function: Function) -> VowelForm:
    series = (1 if version is Version.PRC else 2) + (0 if function is Function.STA else 2)
    return VowelForm(series, AFFIXUAL_VV_DEGREE)


# -----------------------------------------------------------------
# --- Cc and stress: Ca shortcut mode, concatenation, relation
# -----------------------------------------------------------------

CC_FORMS = {
    ("w", None): "w",
    ("y", None): "y",
    (None, Relation.T1): "h",
    ("w", Relation.T1): "hl",
    ("w", Relation.T2): "hr",
    ("y", Relation.T1): "hm",
    ("y", Relation.T2): "hn",
    (None, Relation.T2): "hw",
}
_CC_LOOKUP = {text: key for key, text in CC_FORMS.items()}


def read_cc(text: str) -> Tuple[Optional[str], Optional[Relation]]:
    """Returns (Ca shortcut mode, concatenation type) for a Cc form."""
    try:
        return _CC_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a Cc form") from None


def cc_form(mode: Optional[str], concatenation: Optional[Relation]) -> Optional[str]:
    return CC_FORMS.get((mode, concatenation))


def relation_for(concatenation: Optional[Relation], stress: Stress) -> Tuple[Relation, bool]:
    """
    Reads the relation off the concatenation type and stress. The flag is
    True when a concatenated word's stress shifts its case into the high
    (glottal) half of the table.
    """
    if concatenation is None:
        if stress.is_final:
            return Relation.VRB, False
        if stress is Stress.ANTEPENULTIMATE:
            return Relation.FRM, False
        return Relation.NOM, False

    if stress is Stress.ANTEPENULTIMATE:
        raise ValueError("concatenated formatives cannot take antepenultimate stress")
    return concatenation, stress.is_final


def stress_for(relation: Relation, high_case: bool = False) -> Stress:
    if relation is Relation.VRB:
        return Stress.ULTIMATE
    if relation is Relation.FRM:
        return Stress.ANTEPENULTIMATE
    if relation.is_concatenated and high_case:
        return Stress.ULTIMATE
    return Stress.PENULTIMATE


# -----------------------------------------------------------------
# --- Vn and Cn
# -----------------------------------------------------------------

_VN_SERIES = (Valence, Phase, Effect, Level)
_ASPECTS = tuple(Aspect)
_MOODS = tuple(Mood)
_CASE_SCOPES = tuple(CaseScope)


def vn_vowel(vn: Vn) -> VowelForm:
    if isinstance(vn, Aspect):
        index = _ASPECTS.index(vn)
        return VowelForm(index // 9 + 1, index % 9 + 1)
    category = type(vn)
    return VowelForm(_VN_SERIES.index(category) + 1, tuple(category).index(vn) + 1)


def read_vn(vowel: VowelForm, aspectual: bool) -> Vn:
    if vowel.degree == 0:
        raise ValueError("degree-0 vowels carry no Vn value")
    if aspectual:
        return _ASPECTS[(vowel.series - 1) * 9 + vowel.degree - 1]
    return tuple(_VN_SERIES[vowel.series - 1])[vowel.degree - 1]


def cn_index(value: MoodOrCaseScope) -> int:
    if isinstance(value, Mood):
        return _MOODS.index(value)
    return _CASE_SCOPES.index(value)


def cn_form(value: MoodOrCaseScope, aspectual: bool) -> HForm:
    return HForm(HSeries.SW if aspectual else HSeries.S0, cn_index(value) + 1)


def read_cn(form: HForm, verbal: bool) -> MoodOrCaseScope:
    values = _MOODS if verbal else _CASE_SCOPES
    return values[form.degree - 1]


def is_aspectual_cn(form: HForm) -> bool:
    return form.series in (HSeries.SW, HSeries.SY)


def is_cn_shortcut_form(form: HForm) -> bool:
    """Cn shortcuts use the plain h-series, degrees 2 to 6."""
    return form.series is HSeries.S0 and form.degree >= 2


# -----------------------------------------------------------------
# --- Vk: illocution and validation
# -----------------------------------------------------------------

_VALIDATIONS = tuple(Validation)
_ILLOCUTION_DEGREES = {
    Illocution.DIR: 1,
    Illocution.DEC: 2,
    Illocution.IRG: 3,
    Illocution.VER: 4,
    Illocution.ADM: 6,
    Illocution.POT: 7,
    Illocution.HOR: 8,
    Illocution.CNJ: 9,
}
_ILLOCUTION_LOOKUP = {degree: illocution for illocution, degree in _ILLOCUTION_DEGREES.items()}


def vk_vowel(illocution: Illocution, validation: Optional[Validation]) -> VowelForm:
    if illocution is Illocution.ASR:
        return VowelForm(1, _VALIDATIONS.index(validation or Validation.OBS) + 1)
    return VowelForm(2, _ILLOCUTION_DEGREES[illocution])


def read_vk(vowel: VowelForm) -> Tuple[Illocution, Optional[Validation]]:
    if vowel.glottal_stop:
        raise ValueError("Vk forms take no glottal stop")
    if vowel.series == 1 and vowel.degree >= 1:
        return Illocution.ASR, _VALIDATIONS[vowel.degree - 1]
    if vowel.series == 2 and vowel.degree in _ILLOCUTION_LOOKUP:
        return _ILLOCUTION_LOOKUP[vowel.degree], None
    raise ValueError("not a Vk form")


# -----------------------------------------------------------------
# --- Affixual adjuncts and referentials
# -----------------------------------------------------------------

VS_FORMS = {
    AffixualScope.VDOM: VowelForm(1, 1),
    AffixualScope.VSUB: VowelForm(1, 9),
    AffixualScope.VIIDOM: VowelForm(1, 3),
    AffixualScope.VIISUB: VowelForm(1, 4),
    AffixualScope.FORMATIVE: VowelForm(1, 7),
    AffixualScope.OVERADJ: VowelForm(1, 6),
}
_VS_LOOKUP = {vowel: scope for scope, vowel in VS_FORMS.items()}


def read_vs(vowel: VowelForm) -> AffixualScope:
    try:
        return _VS_LOOKUP[vowel]
    except KeyError:
        raise ValueError("not a Vs form") from None


# Glide joining a referential's second case: is the case a high one?
SECOND_CASE_GLIDES = {"w": False, "y": True}
_GLIDE_FOR_HIGH = {high: glide for glide, high in SECOND_CASE_GLIDES.items()}


def second_case_glide(case: Case) -> str:
    """Referentials join a second case with w, or with y for high cases."""
    return _GLIDE_FOR_HIGH[is_high_case(case)]


def read_second_case(glide: str, vowel: VowelForm) -> Case:
    try:
        high = SECOND_CASE_GLIDES[glide]
    except KeyError:
        raise ValueError(f"{glide!r} does not join a second case") from None
    if vowel.glottal_stop:
        raise ValueError("a second case takes no glottal stop")
    return case_from_vowel(vowel, high=high)


COMBINATION_SPECIFICATIONS = {
    Specification.BSC: "x",
    Specification.CTE: "xt",
    Specification.CSV: "xp",
    Specification.OBJ: "xx",
}
_COMBINATION_LOOKUP = {text: specification for specification, text in COMBINATION_SPECIFICATIONS.items()}


def read_combination_specification(text: str) -> Specification:
    try:
        return _COMBINATION_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a combination referential specification") from None


SUPPLETIVE_FORMS = {
    SuppletiveMode.CAR: "hl",
    SuppletiveMode.QUO: "hm",
    SuppletiveMode.NAM: "hn",
    SuppletiveMode.PHR: "hň",
}
_SUPPLETIVE_LOOKUP = {text: mode for mode, text in SUPPLETIVE_FORMS.items()}


def read_suppletive(text: str) -> SuppletiveMode:
    try:
        return _SUPPLETIVE_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a suppletive adjunct form") from None


# Cz of a multiple-affix adjunct: (consonant, glottal stop on the first Vx)
CZ_FORMS = {
    AffixualScope.VDOM: ("h", False),
    AffixualScope.VSUB: ("h", True),
    AffixualScope.VIIDOM: ("hl", True),
    AffixualScope.VIISUB: ("hr", True),
    AffixualScope.FORMATIVE: ("hw", False),
    AffixualScope.OVERADJ: ("hw", True),
}
_CZ_LOOKUP = {form: scope for scope, form in CZ_FORMS.items()}

# Cz forms that need a leading schwa to tell the word from a formative
SCHWA_CZ_FORMS = frozenset(("hl", "hr"))


def read_cz(text: str, glottal: bool) -> AffixualScope:
    try:
        return _CZ_LOOKUP[(text, glottal)]
    except KeyError:
        raise ValueError(f"{text!r} is not a Cz form here") from None


# -----------------------------------------------------------------
# --- Single-category adjuncts
# -----------------------------------------------------------------

def _vowel_reader(table, what):
    lookup = {vowel: value for value, vowel in table.items()}

    def read(vowel: VowelForm):
        try:
            return lookup[vowel]
        except KeyError:
            raise ValueError(f"{vowel} is not a {what} vowel") from None

    return read


REGISTER_FORMS = {
    Register.DSV: VowelForm(1, 1),
    Register.PNT: VowelForm(1, 3),
    Register.SPF: VowelForm(1, 4),
    Register.EXM: VowelForm(1, 7),
    Register.CGT: VowelForm(1, 9),
    Register.DSV_END: VowelForm(2, 1),
    Register.PNT_END: VowelForm(2, 3),
    Register.SPF_END: VowelForm(2, 9),
    Register.EXM_END: VowelForm(2, 7),
    Register.CGT_END: VowelForm(2, 8),
    Register.END: VowelForm(1, 8),
}
read_register = _vowel_reader(REGISTER_FORMS, "register")

PARSING_FORMS = {
    ParsingStress.MONOSYLLABIC: VowelForm(1, 1, True),
    ParsingStress.ULTIMATE: VowelForm(1, 3, True),
    ParsingStress.PENULTIMATE: VowelForm(1, 7, True),
    ParsingStress.ANTEPENULTIMATE: VowelForm(1, 9, True),
}
read_parsing_stress = _vowel_reader(PARSING_FORMS, "parsing adjunct")

REGISTER_CONSONANT = "h"
MCS_CONSONANT = "hr"

MCS_FORMS = {
    Mood.FAC: VowelForm(1, 1),
    Mood.SUB: VowelForm(1, 3),
    Mood.ASM: VowelForm(1, 4),
    Mood.SPC: VowelForm(1, 7),
    Mood.COU: VowelForm(1, 6),
    Mood.HYP: VowelForm(1, 9),
    CaseScope.CCN: VowelForm(2, 1),
    CaseScope.CCA: VowelForm(2, 3),
    CaseScope.CCS: VowelForm(2, 9),
    CaseScope.CCQ: VowelForm(2, 7),
    CaseScope.CCP: VowelForm(1, 8),
    CaseScope.CCV: VowelForm(2, 8),
}
read_mcs = _vowel_reader(MCS_FORMS, "mood or case scope")

# Bias adjuncts are a bare consonant cluster.
BIAS_FORMS = {
    Bias.ACC: "lf", Bias.ACH: "mçt", Bias.ADS: "lļ", Bias.ANN: "drr", Bias.ANP: "lst",
    Bias.APB: "řs", Bias.APH: "vvz", Bias.ARB: "xtļ", Bias.ATE: "ňj", Bias.CMD: "pļļ",
    Bias.CNV: "rrj", Bias.COI: "ššč", Bias.CRP: "gžj", Bias.CRR: "ňţ", Bias.CTP: "kšš",
    Bias.CTV: "gvv", Bias.DCC: "gzj", Bias.DEJ: "žžg", Bias.DES: "mřř", Bias.DFD: "cč",
    Bias.DIS: "kff", Bias.DLC: "ẓmm", Bias.DOL: "řřx", Bias.DPB: "ffx", Bias.DRS: "pfc",
    Bias.DUB: "mmf", Bias.EUH: "gzz", Bias.EUP: "vvt", Bias.EXA: "kçç", Bias.EXG: "rrs",
    Bias.FOR: "lzp", Bias.FSC: "žžj", Bias.GRT: "mmh", Bias.IDG: "pšš", Bias.IFT: "vvr",
    Bias.IPL: "vll", Bias.IPT: "žžv", Bias.IRO: "mmž", Bias.ISP: "lçp", Bias.IVD: "řřn",
    Bias.MAN: "msk", Bias.MNF: "pss", Bias.OPT: "ççk", Bias.PES: "ksp", Bias.PPT: "mll",
    Bias.PPX: "llh", Bias.PPV: "sl", Bias.PSC: "žžt", Bias.PSM: "nnţ", Bias.RAC: "kll",
    Bias.RFL: "llm", Bias.RSG: "mžž", Bias.RPU: "šštļ", Bias.RVL: "mmļ", Bias.SAT: "ļţ",
    Bias.SGS: "ltç", Bias.SKP: "rnž", Bias.SOL: "ňňs", Bias.STU: "ļļč", Bias.TRP: "llč",
    Bias.VEX: "ksk",
}
_BIAS_LOOKUP = {text: bias for bias, text in BIAS_FORMS.items()}


def read_bias(text: str) -> Bias:
    try:
        return _BIAS_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a bias adjunct") from None


def is_bias_form(text: str) -> bool:
    return text in _BIAS_LOOKUP


# -----------------------------------------------------------------
# --- Modular adjuncts
# -----------------------------------------------------------------

MODULAR_MODE_FORMS = {
    ModularMode.FULL: "",
    ModularMode.PARENT: "w",
    ModularMode.CONCATENATED: "y",
}
_MODULAR_MODE_LOOKUP = {text: mode for mode, text in MODULAR_MODE_FORMS.items()}


def read_modular_mode(text: str) -> ModularMode:
    try:
        return _MODULAR_MODE_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a modular adjunct mode") from None


# Cm between the second and third Vn: ň makes the second Vn an aspect.
MODULAR_CM_FORMS = {False: "n", True: "ň"}
_MODULAR_CM_LOOKUP = {text: aspectual for aspectual, text in MODULAR_CM_FORMS.items()}


def read_modular_cm(text: str) -> bool:
    try:
        return _MODULAR_CM_LOOKUP[text]
    except KeyError:
        raise ValueError(f"{text!r} is not a modular adjunct Cm") from None


MODULAR_SCOPE_FORMS = {
    ModularScope.FORMATIVE: VowelForm(1, 1),
    ModularScope.MCS: VowelForm(1, 3),
    ModularScope.OVERADJ: VowelForm(1, 4),
    ModularScope.UNDERADJ: VowelForm(1, 7),
}
_MODULAR_SCOPE_LOOKUP = {vowel: scope for scope, vowel in MODULAR_SCOPE_FORMS.items()}
_MODULAR_SCOPE_LOOKUP[VowelForm(1, 9)] = ModularScope.OVERADJ


def read_modular_scope(vowel: VowelForm) -> ModularScope:
    try:
        return _MODULAR_SCOPE_LOOKUP[vowel]
    except KeyError:
        raise ValueError(f"{vowel} is not a modular scope vowel") from None
