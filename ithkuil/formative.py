"""
The Formative record and its assembler.

A ``Formative`` is the structured form of one word: formatives proper,
referentials and every kind of adjunct share the record and are told apart
by ``word_type``. Records are immutable and only ever built through
``assemble`` (or ``build_formative``, which feeds it), so every instance has
passed the same slot and compatibility checks.
"""
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional, Tuple

from ithkuil.affixes import (
    Affix,
    CaseAccessorAffix,
    CaseStackingAffix,
    CaStackingAffix,
    NumericAffix,
    PlainAffix,
    ReferentialAffix,
    check_consonant_cluster,
    check_cs,
)
from ithkuil.ca import DEFAULT_CA, Ca
from ithkuil.categories import (
    NON_ASPECTUAL_VN,
    AffixShortcut,
    AffixType,
    AffixualMode,
    AffixualScope,
    Aspect,
    Bias,
    CaShortcut,
    Case,
    CaseAccessorMode,
    CaseScope,
    Context,
    Essence,
    Function,
    Illocution,
    ModularMode,
    ModularScope,
    Mood,
    MoodOrCaseScope,
    ParsingStress,
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
    WordType,
    is_aspect,
)
from ithkuil.errors import DuplicateSlot, IncompatibleCategories, MissingSlot
from ithkuil.forms import CA_SHORTCUT_VALUES
from ithkuil.referents import ReferentList
from ithkuil.segmenter import SlotKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Root:
    """
    The root of a word. Which fields are set depends on ``kind``:
    normal roots have ``cr``, numeric roots ``number``, referential roots
    ``referents``, suppletive roots ``mode``, and affixual roots ``cr`` (the
    affix Cs) with ``degree`` (and ``affix_type`` in affixual adjuncts).

    Raises ValueError when the field for ``kind`` could not be written.
    """
    kind: RootKind = RootKind.NORMAL
    cr: Optional[str] = None
    number: Optional[int] = None
    referents: Optional[ReferentList] = None
    degree: Optional[int] = None
    affix_type: Optional[AffixType] = None
    mode: Optional[SuppletiveMode] = None
    gloss: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.kind is RootKind.NORMAL:
            check_consonant_cluster(self.cr, "root consonant cluster")
        elif self.kind is RootKind.AFFIXUAL:
            check_cs(self.cr)
            if not isinstance(self.degree, int) or not 0 <= self.degree <= 9:
                raise ValueError(f"Affixual root degree must be 0-9, got {self.degree!r}")
        elif self.kind is RootKind.NUMERIC:
            if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 0:
                raise ValueError(f"Numeric roots need a whole number >= 0, got {self.number!r}")
        elif self.kind is RootKind.REFERENTIAL:
            if not isinstance(self.referents, ReferentList):
                raise ValueError("Referential roots need a referent list")
        elif not isinstance(self.mode, SuppletiveMode):
            raise ValueError("Suppletive roots need a suppletive mode")

    @classmethod
    def normal(cls, cr: str, gloss: Optional[str] = None) -> "Root":
        return cls(RootKind.NORMAL, cr=cr, gloss=gloss)

    @classmethod
    def numeric(cls, number: int) -> "Root":
        return cls(RootKind.NUMERIC, number=number)

    @classmethod
    def referential(cls, referents) -> "Root":
        if isinstance(referents, str):
            referents = ReferentList.parse(referents)
        return cls(RootKind.REFERENTIAL, referents=referents)

    @classmethod
    def affixual(cls, cs: str, degree: int, affix_type: Optional[AffixType] = None, gloss: Optional[str] = None) -> "Root":
        return cls(RootKind.AFFIXUAL, cr=cs, degree=degree, affix_type=affix_type, gloss=gloss)

    @classmethod
    def suppletive(cls, mode: SuppletiveMode) -> "Root":
        return cls(RootKind.SUPPLETIVE, mode=mode)

    @property
    def identifier(self) -> str:
        """The key a lexicon files this root under."""
        if self.kind is RootKind.NUMERIC:
            return str(self.number)
        if self.kind is RootKind.REFERENTIAL:
            return self.referents.render()
        if self.kind is RootKind.SUPPLETIVE:
            return self.mode.abbreviation
        return self.cr


@dataclass(frozen=True)
class CnShortcut:
    """Marks a Cn value that was written in place of the Ca."""
    value: MoodOrCaseScope


@dataclass(frozen=True)
class Formative:
    word_type: WordType
    root: Optional[Root] = None
    stem: Stem = Stem.S1
    version: Version = Version.PRC
    function: Function = Function.STA
    specification: Specification = Specification.BSC
    context: Context = Context.EXS
    ca: Ca = DEFAULT_CA
    slot_v_affixes: Tuple[Affix, ...] = ()
    slot_vii_affixes: Tuple[Affix, ...] = ()
    affix_shortcut: AffixShortcut = AffixShortcut.NONE
    vn: Vn = Valence.MNO
    mood: Optional[Mood] = None
    case_scope: Optional[CaseScope] = None
    relation: Relation = Relation.NOM
    case: Optional[Case] = None
    illocution: Optional[Illocution] = None
    validation: Optional[Validation] = None
    second_case: Optional[Case] = None
    second_referents: Optional[ReferentList] = None
    combination_specification: Optional[Specification] = None
    combination_affixes: Tuple[Affix, ...] = ()
    essence: Essence = Essence.NRM
    scope: Optional[AffixualScope] = None
    other_affixes: Tuple[Affix, ...] = ()
    other_scope: Optional[AffixualScope] = None
    mode: Optional[AffixualMode] = None
    bias: Optional[Bias] = None
    register: Optional[Register] = None
    parsing_stress: Optional[ParsingStress] = None
    modular_mode: Optional[ModularMode] = None
    second_vn: Optional[Vn] = None
    final_vn: Optional[Vn] = None
    modular_scope: Optional[ModularScope] = None

    @property
    def cn(self) -> Optional[MoodOrCaseScope]:
        return self.mood if self.mood is not None else self.case_scope

    def replace(self, **changes) -> "Formative":
        """
        Returns a copy with ``changes`` applied, validated from scratch.

        Fields that a change makes meaningless must be cleared explicitly,
        e.g. ``replace(relation=Relation.VRB, case=None, case_scope=None)``.
        """
        current = {name: getattr(self, name) for name in _FIELDS_BY_WORD_TYPE[self.word_type]}
        current.update(changes)
        return build_formative(word_type=changes.get("word_type", self.word_type), **{
            name: value for name, value in current.items() if name != "word_type"
        })

    def to_dict(self) -> Dict[str, Any]:
        """A JSON-ready dictionary of every field relevant to the word type."""
        output = {"word_type": self.word_type.value}
        for name in _FIELDS_BY_WORD_TYPE[self.word_type]:
            output[name] = _encode_value(getattr(self, name))
        return output


# -----------------------------------------------------------------
# --- Slots per word type
# -----------------------------------------------------------------

WORD_TYPE_SLOTS = {
    WordType.FORMATIVE: frozenset((
        SlotKind.ROOT,
        SlotKind.STEM,
        SlotKind.VERSION,
        SlotKind.AFFIX_SHORTCUT,
        SlotKind.FUNCTION,
        SlotKind.SPECIFICATION,
        SlotKind.CONTEXT,
        SlotKind.SLOT_V_AFFIXES,
        SlotKind.CA,
        SlotKind.SLOT_VII_AFFIXES,
        SlotKind.VN,
        SlotKind.CN,
        SlotKind.RELATION,
        SlotKind.CASE,
        SlotKind.ILLOCUTION,
        SlotKind.VALIDATION,
    )),
    WordType.REFERENTIAL: frozenset((
        SlotKind.ROOT,
        SlotKind.CASE,
        SlotKind.COMBINATION_SPECIFICATION,
        SlotKind.COMBINATION_AFFIXES,
        SlotKind.SECOND_CASE,
        SlotKind.SECOND_REFERENT,
        SlotKind.ESSENCE,
    )),
    WordType.AFFIXUAL: frozenset((
        SlotKind.ROOT,
        SlotKind.SCOPE,
        SlotKind.OTHER_AFFIXES,
        SlotKind.OTHER_SCOPE,
        SlotKind.MODE,
    )),
    WordType.SUPPLETIVE: frozenset((SlotKind.ROOT, SlotKind.CASE)),
    WordType.MODULAR: frozenset((
        SlotKind.MODULAR_MODE,
        SlotKind.VN,
        SlotKind.CN,
        SlotKind.SECOND_VN,
        SlotKind.FINAL_VN,
        SlotKind.MODULAR_SCOPE,
    )),
    WordType.MCS: frozenset((SlotKind.CN,)),
    WordType.REGISTER: frozenset((SlotKind.REGISTER,)),
    WordType.PARSING: frozenset((SlotKind.PARSING_STRESS,)),
    WordType.BIAS: frozenset((SlotKind.BIAS,)),
    WordType.NUMERIC: frozenset((SlotKind.ROOT,)),
}

# The one slot a word of each type cannot do without
_REQUIRED_SLOTS = {
    WordType.FORMATIVE: SlotKind.ROOT,
    WordType.REFERENTIAL: SlotKind.ROOT,
    WordType.AFFIXUAL: SlotKind.ROOT,
    WordType.SUPPLETIVE: SlotKind.ROOT,
    WordType.MODULAR: SlotKind.VN,
    WordType.MCS: SlotKind.CN,
    WordType.REGISTER: SlotKind.REGISTER,
    WordType.PARSING: SlotKind.PARSING_STRESS,
    WordType.BIAS: SlotKind.BIAS,
    WordType.NUMERIC: SlotKind.ROOT,
}

_ROOT_KINDS = {
    WordType.FORMATIVE: (RootKind.NORMAL, RootKind.NUMERIC, RootKind.REFERENTIAL, RootKind.AFFIXUAL),
    WordType.REFERENTIAL: (RootKind.REFERENTIAL, RootKind.SUPPLETIVE),
    WordType.AFFIXUAL: (RootKind.AFFIXUAL,),
    WordType.SUPPLETIVE: (RootKind.SUPPLETIVE,),
    WordType.NUMERIC: (RootKind.NUMERIC,),
}

# Field name per slot kind; CN is split between mood and case_scope.
_SLOT_FIELDS = {
    SlotKind.ROOT: "root",
    SlotKind.STEM: "stem",
    SlotKind.VERSION: "version",
    SlotKind.AFFIX_SHORTCUT: "affix_shortcut",
    SlotKind.FUNCTION: "function",
    SlotKind.SPECIFICATION: "specification",
    SlotKind.CONTEXT: "context",
    SlotKind.SLOT_V_AFFIXES: "slot_v_affixes",
    SlotKind.CA: "ca",
    SlotKind.SLOT_VII_AFFIXES: "slot_vii_affixes",
    SlotKind.VN: "vn",
    SlotKind.RELATION: "relation",
    SlotKind.CASE: "case",
    SlotKind.ILLOCUTION: "illocution",
    SlotKind.VALIDATION: "validation",
    SlotKind.SECOND_CASE: "second_case",
    SlotKind.SECOND_REFERENT: "second_referents",
    SlotKind.COMBINATION_SPECIFICATION: "combination_specification",
    SlotKind.COMBINATION_AFFIXES: "combination_affixes",
    SlotKind.ESSENCE: "essence",
    SlotKind.SCOPE: "scope",
    SlotKind.OTHER_AFFIXES: "other_affixes",
    SlotKind.OTHER_SCOPE: "other_scope",
    SlotKind.MODE: "mode",
    SlotKind.BIAS: "bias",
    SlotKind.REGISTER: "register",
    SlotKind.PARSING_STRESS: "parsing_stress",
    SlotKind.MODULAR_MODE: "modular_mode",
    SlotKind.SECOND_VN: "second_vn",
    SlotKind.FINAL_VN: "final_vn",
    SlotKind.MODULAR_SCOPE: "modular_scope",
}
_FIELD_SLOTS = {name: kind for kind, name in _SLOT_FIELDS.items()}
_FIELD_SLOTS["mood"] = SlotKind.CN
_FIELD_SLOTS["case_scope"] = SlotKind.CN

_FIELDS_BY_WORD_TYPE = {
    word_type: tuple(
        spec.name
        for spec in fields(Formative)
        if spec.name != "word_type" and _FIELD_SLOTS[spec.name] in slots
    )
    for word_type, slots in WORD_TYPE_SLOTS.items()
}

_AFFIX_SLOTS = frozenset((
    SlotKind.SLOT_V_AFFIXES,
    SlotKind.SLOT_VII_AFFIXES,
    SlotKind.COMBINATION_AFFIXES,
    SlotKind.OTHER_AFFIXES,
))
_AFFIX_TYPES = (PlainAffix, CaStackingAffix, CaseStackingAffix, CaseAccessorAffix, ReferentialAffix, NumericAffix)
_VN_TYPES = NON_ASPECTUAL_VN + (Aspect,)

# Accepted value types per slot; affix slots hold sequences of _AFFIX_TYPES.
_SLOT_TYPES = {
    SlotKind.ROOT: Root,
    SlotKind.STEM: Stem,
    SlotKind.VERSION: Version,
    SlotKind.AFFIX_SHORTCUT: AffixShortcut,
    SlotKind.FUNCTION: Function,
    SlotKind.SPECIFICATION: Specification,
    SlotKind.CONTEXT: Context,
    SlotKind.CA: (Ca, CaShortcut),
    SlotKind.VN: _VN_TYPES,
    SlotKind.CN: (Mood, CaseScope, CnShortcut),
    SlotKind.RELATION: Relation,
    SlotKind.CASE: Case,
    SlotKind.ILLOCUTION: Illocution,
    SlotKind.VALIDATION: Validation,
    SlotKind.SECOND_CASE: Case,
    SlotKind.SECOND_REFERENT: ReferentList,
    SlotKind.COMBINATION_SPECIFICATION: Specification,
    SlotKind.ESSENCE: Essence,
    SlotKind.SCOPE: AffixualScope,
    SlotKind.OTHER_SCOPE: AffixualScope,
    SlotKind.MODE: AffixualMode,
    SlotKind.BIAS: Bias,
    SlotKind.REGISTER: Register,
    SlotKind.PARSING_STRESS: ParsingStress,
    SlotKind.MODULAR_MODE: ModularMode,
    SlotKind.SECOND_VN: _VN_TYPES,
    SlotKind.FINAL_VN: _VN_TYPES,
    SlotKind.MODULAR_SCOPE: ModularScope,
}


def _check_slot_value(kind: SlotKind, value):
    if kind in _AFFIX_SLOTS:
        if isinstance(value, (tuple, list)) and all(isinstance(item, _AFFIX_TYPES) for item in value):
            return
    elif isinstance(value, _SLOT_TYPES[kind]):
        return
    raise IncompatibleCategories(kind.name, type(value).__name__, f"{value!r} is not a {kind.name} value")


def _defaults(word_type: WordType, values: Dict[SlotKind, Any]) -> Dict[SlotKind, Any]:
    if word_type is WordType.REFERENTIAL:
        return {
            SlotKind.CASE: Case.THM,
            SlotKind.COMBINATION_SPECIFICATION: None,
            SlotKind.COMBINATION_AFFIXES: (),
            SlotKind.SECOND_CASE: None,
            SlotKind.SECOND_REFERENT: None,
            SlotKind.ESSENCE: Essence.NRM,
        }
    if word_type is WordType.AFFIXUAL:
        return {
            SlotKind.SCOPE: AffixualScope.VDOM,
            SlotKind.OTHER_AFFIXES: (),
            SlotKind.OTHER_SCOPE: None,
            SlotKind.MODE: AffixualMode.FULL,
        }
    if word_type is WordType.SUPPLETIVE:
        return {SlotKind.CASE: Case.THM}
    if word_type is WordType.MODULAR:
        closed = SlotKind.CN in values and SlotKind.MODULAR_SCOPE not in values
        return {
            SlotKind.MODULAR_MODE: ModularMode.FULL,
            SlotKind.CN: None,
            SlotKind.SECOND_VN: None,
            SlotKind.FINAL_VN: Valence.MNO if closed else None,
            SlotKind.MODULAR_SCOPE: None,
        }
    if word_type is not WordType.FORMATIVE:
        return {}

    verbal = values.get(SlotKind.RELATION, Relation.NOM).is_verbal
    illocution = values.get(SlotKind.ILLOCUTION, Illocution.ASR if verbal else None)
    return {
        SlotKind.STEM: Stem.S1,
        SlotKind.VERSION: Version.PRC,
        SlotKind.AFFIX_SHORTCUT: AffixShortcut.NONE,
        SlotKind.FUNCTION: Function.STA,
        SlotKind.SPECIFICATION: Specification.BSC,
        SlotKind.CONTEXT: Context.EXS,
        SlotKind.SLOT_V_AFFIXES: (),
        SlotKind.CA: DEFAULT_CA,
        SlotKind.SLOT_VII_AFFIXES: (),
        SlotKind.VN: Valence.MNO,
        SlotKind.CN: Mood.FAC if verbal else CaseScope.CCN,
        SlotKind.RELATION: Relation.NOM,
        SlotKind.CASE: None if verbal else Case.THM,
        SlotKind.ILLOCUTION: illocution,
        SlotKind.VALIDATION: Validation.OBS if illocution is Illocution.ASR else None,
    }


# -----------------------------------------------------------------
# --- Compatibility rules
# -----------------------------------------------------------------

class Rule(NamedTuple):
    first: SlotKind
    second: SlotKind
    allows: Callable[[Any, Any], bool]
    reason: str


def _is_ca_shortcut(value) -> bool:
    return isinstance(value, CaShortcut)


def _is_cn_shortcut(value) -> bool:
    return isinstance(value, CnShortcut)


def _cn_value(value) -> MoodOrCaseScope:
    return value.value if isinstance(value, CnShortcut) else value


def _plain_root(root: Root) -> bool:
    return root.kind in (RootKind.NORMAL, RootKind.NUMERIC)


def _suppletive(root: Root) -> bool:
    return root.kind is RootKind.SUPPLETIVE


COMPATIBILITY_RULES = (
    Rule(SlotKind.CA, SlotKind.FUNCTION,
         lambda ca, function: not _is_ca_shortcut(ca) or function is Function.STA,
         "a Ca shortcut implies STA function"),
    Rule(SlotKind.CA, SlotKind.SPECIFICATION,
         lambda ca, specification: not _is_ca_shortcut(ca) or specification is Specification.BSC,
         "a Ca shortcut implies BSC specification"),
    Rule(SlotKind.CA, SlotKind.CONTEXT,
         lambda ca, context: not _is_ca_shortcut(ca) or context is Context.EXS,
         "a Ca shortcut implies EXS context"),
    Rule(SlotKind.CA, SlotKind.AFFIX_SHORTCUT,
         lambda ca, shortcut: not _is_ca_shortcut(ca) or shortcut is AffixShortcut.NONE,
         "a Ca shortcut leaves no room for an affix shortcut"),
    Rule(SlotKind.CA, SlotKind.ROOT,
         lambda ca, root: not _is_ca_shortcut(ca) or _plain_root(root),
         "referential and affixual roots take no Ca shortcut"),
    Rule(SlotKind.CN, SlotKind.CA,
         lambda cn, ca: not _is_cn_shortcut(cn) or (isinstance(ca, Ca) and ca.is_default),
         "a Cn shortcut replaces a default Ca"),
    Rule(SlotKind.CN, SlotKind.VN,
         lambda cn, vn: not _is_cn_shortcut(cn) or vn is Valence.MNO,
         "a Cn shortcut implies MNO valence"),
    Rule(SlotKind.CN, SlotKind.SLOT_V_AFFIXES,
         lambda cn, affixes: not _is_cn_shortcut(cn) or not affixes,
         "a Cn shortcut leaves no room for slot V affixes"),
    Rule(SlotKind.CN, SlotKind.CN,
         lambda cn, _: not _is_cn_shortcut(cn) or not cn.value.is_default,
         "a Cn shortcut needs a non-default Cn"),
    Rule(SlotKind.CN, SlotKind.RELATION,
         lambda cn, relation: isinstance(_cn_value(cn), Mood) == relation.is_verbal,
         "mood belongs to verbal formatives, case scope to nominal ones"),
    Rule(SlotKind.CASE, SlotKind.RELATION,
         lambda case, relation: (case is None) == relation.is_verbal,
         "case belongs to nominal formatives"),
    Rule(SlotKind.ILLOCUTION, SlotKind.RELATION,
         lambda illocution, relation: (illocution is not None) == relation.is_verbal,
         "illocution belongs to verbal formatives"),
    Rule(SlotKind.VALIDATION, SlotKind.ILLOCUTION,
         lambda validation, illocution: (validation is not None) == (illocution is Illocution.ASR),
         "validation is marked exactly when illocution is ASR"),
    Rule(SlotKind.ROOT, SlotKind.STEM,
         lambda root, stem: _plain_root(root) or stem is Stem.S1,
         "referential and affixual roots carry no stem"),
    Rule(SlotKind.ROOT, SlotKind.SPECIFICATION,
         lambda root, specification: root.kind is not RootKind.AFFIXUAL or specification is Specification.BSC,
         "affixual roots carry no specification"),
    Rule(SlotKind.ROOT, SlotKind.AFFIX_SHORTCUT,
         lambda root, shortcut: _plain_root(root) or shortcut is AffixShortcut.NONE,
         "referential and affixual roots take no affix shortcut"),
    # Referentials
    Rule(SlotKind.SECOND_REFERENT, SlotKind.SECOND_CASE,
         lambda referents, case: referents is None or case is not None,
         "a dual referential needs a second case"),
    Rule(SlotKind.SECOND_REFERENT, SlotKind.COMBINATION_SPECIFICATION,
         lambda referents, specification: referents is None or specification is None,
         "a dual referential cannot be a combination referential"),
    Rule(SlotKind.COMBINATION_AFFIXES, SlotKind.COMBINATION_SPECIFICATION,
         lambda affixes, specification: not affixes or specification is not None,
         "affixes on a referential need a combination specification"),
    Rule(SlotKind.ROOT, SlotKind.SECOND_CASE,
         lambda root, case: not _suppletive(root) or case is not None,
         "a suppletive referential needs a second case"),
    Rule(SlotKind.ROOT, SlotKind.COMBINATION_SPECIFICATION,
         lambda root, specification: not _suppletive(root) or specification is None,
         "a suppletive root cannot head a combination referential"),
    # Affixual adjuncts
    Rule(SlotKind.OTHER_SCOPE, SlotKind.OTHER_AFFIXES,
         lambda scope, affixes: scope is None or bool(affixes),
         "a scope for further affixes needs further affixes"),
    # Modular adjuncts
    Rule(SlotKind.VN, SlotKind.CN,
         lambda vn, cn: cn is not None or is_aspect(vn),
         "a modular adjunct without Cn carries a single aspect"),
    Rule(SlotKind.CN, SlotKind.MODULAR_MODE,
         lambda cn, _: cn is None or isinstance(cn, Mood),
         "a modular adjunct writes its Cn as a mood"),
    Rule(SlotKind.SECOND_VN, SlotKind.CN,
         lambda vn, cn: vn is None or cn is not None,
         "a second Vn needs a Cn before it"),
    Rule(SlotKind.FINAL_VN, SlotKind.CN,
         lambda vn, cn: vn is None or cn is not None,
         "a final Vn needs a Cn before it"),
    Rule(SlotKind.FINAL_VN, SlotKind.FINAL_VN,
         lambda vn, _: vn is None or not is_aspect(vn),
         "the final Vn of a modular adjunct cannot be an aspect"),
    Rule(SlotKind.FINAL_VN, SlotKind.MODULAR_SCOPE,
         lambda vn, scope: vn is None or scope is None,
         "a modular adjunct ends in either a Vn or a scope"),
    Rule(SlotKind.MODULAR_SCOPE, SlotKind.CN,
         lambda scope, cn: scope is None or cn is not None,
         "a modular scope needs a Cn before it"),
)


def check_compatibility(values: Dict[SlotKind, Any]):
    """Raises IncompatibleCategories for the first rule ``values`` break."""
    for rule in COMPATIBILITY_RULES:
        if rule.first not in values or rule.second not in values:
            continue
        if not rule.allows(values[rule.first], values[rule.second]):
            raise IncompatibleCategories(rule.first.name, rule.second.name, rule.reason)


# -----------------------------------------------------------------
# --- Assembly
# -----------------------------------------------------------------

def _check_root(word_type: WordType, root: Root):
    if root.kind not in _ROOT_KINDS[word_type]:
        raise IncompatibleCategories("WORD_TYPE", "ROOT", f"{word_type.value} words cannot take this root")
    if word_type is WordType.AFFIXUAL and root.affix_type is None:
        raise IncompatibleCategories("WORD_TYPE", "ROOT", "affixual adjuncts need an affix type")
    if word_type is WordType.FORMATIVE and root.kind is RootKind.AFFIXUAL and root.affix_type is not None:
        raise IncompatibleCategories("WORD_TYPE", "ROOT", "affixual roots of formatives carry no affix type")


def assemble(word_type: WordType, pairs: Iterable[Tuple[SlotKind, Any]]) -> Formative:
    """
    Combines resolved (slot kind, value) pairs into a Formative.

    Raises DuplicateSlot, IncompatibleCategories (for slots the word type
    does not have, for values of the wrong category, and for every broken
    compatibility rule) or MissingSlot.
    """
    values: Dict[SlotKind, Any] = {}
    for kind, value in pairs:
        if kind in values:
            raise DuplicateSlot(kind)
        values[kind] = value

    allowed = WORD_TYPE_SLOTS[word_type]
    for kind, value in values.items():
        if kind not in allowed:
            raise IncompatibleCategories("WORD_TYPE", kind.name, f"{word_type.value} words have no {kind.name} slot")
        _check_slot_value(kind, value)

    required = _REQUIRED_SLOTS[word_type]
    if required not in values:
        raise MissingSlot(required, word_type)
    if SlotKind.ROOT in values:
        _check_root(word_type, values[SlotKind.ROOT])

    merged = _defaults(word_type, values)
    merged.update(values)
    check_compatibility(merged)

    ca = merged.pop(SlotKind.CA, None)
    if isinstance(ca, CaShortcut):
        ca = CA_SHORTCUT_VALUES[ca]
    cn = _cn_value(merged.pop(SlotKind.CN, None))

    kwargs = {_SLOT_FIELDS[kind]: value for kind, value in merged.items()}
    for kind in _AFFIX_SLOTS:
        if kind in merged:
            kwargs[_SLOT_FIELDS[kind]] = tuple(merged[kind])
    if ca is not None:
        kwargs["ca"] = ca
    if cn is not None:
        kwargs["mood" if isinstance(cn, Mood) else "case_scope"] = cn

    formative = Formative(word_type=word_type, **kwargs)
    logger.debug(
        "Assembled %s word%s",
        word_type.value,
        f" with root {formative.root.identifier}" if formative.root is not None else "",
    )
    return formative


def build_formative(word_type: WordType = WordType.FORMATIVE, **values) -> Formative:
    """
    Builds a Formative straight from field values, with the same validation
    as the parse path. ``None`` values count as absent.
    """
    pairs = []
    for name, value in values.items():
        if value is None:
            continue
        if name not in _FIELD_SLOTS:
            raise TypeError(f"Formative has no field {name!r}")
        pairs.append((_FIELD_SLOTS[name], value))
    return assemble(word_type, pairs)


# -----------------------------------------------------------------
# --- Serialization
# -----------------------------------------------------------------

_AFFIX_KINDS = {
    PlainAffix: "plain",
    CaStackingAffix: "ca_stacking",
    CaseStackingAffix: "case_stacking",
    CaseAccessorAffix: "case_accessor",
    ReferentialAffix: "referential",
    NumericAffix: "numeric",
}


def _encode_value(value):
    if value is None or isinstance(value, (str, int)):
        return value
    if isinstance(value, tuple):
        return [_encode_value(item) for item in value]
    if hasattr(value, "abbreviation"):
        return value.name
    if isinstance(value, ReferentList):
        return value.render()
    if isinstance(value, Root):
        output = {"kind": value.kind.value}
        for name in ("cr", "number", "degree", "affix_type", "mode", "gloss"):
            if getattr(value, name) is not None:
                output[name] = _encode_value(getattr(value, name))
        if value.referents is not None:
            output["referents"] = value.referents.render()
        return output
    if type(value) in _AFFIX_KINDS:
        output = {"kind": _AFFIX_KINDS[type(value)]}
        for spec in fields(value):
            item = getattr(value, spec.name)
            if item is not None:
                output[spec.name] = _encode_value(item)
        return output
    if isinstance(value, Ca):
        return {name: component.name for name, component in zip(_CA_FIELDS, value.components)}
    raise TypeError(f"Cannot serialize {value!r}")


_CA_FIELDS = ("affiliation", "configuration", "extension", "perspective", "essence")


def _decode_ca(data: Dict[str, str]) -> Ca:
    kwargs = {
        spec.name: spec.type.from_label(data[spec.name])
        for spec in fields(Ca)
        if spec.name in data
    }
    return Ca(**kwargs)


def _decode_affix(data: Dict[str, Any]) -> Affix:
    kind = data.get("kind", "plain")
    if kind == "plain":
        return PlainAffix(
            data["cs"],
            int(data["degree"]),
            AffixType.from_label(data.get("type", "T1")),
            gloss=data.get("gloss"),
        )
    if kind == "ca_stacking":
        return CaStackingAffix(_decode_ca(data.get("ca", {})))
    if kind == "case_stacking":
        return CaseStackingAffix(Case.from_label(data["case"]))
    if kind == "case_accessor":
        return CaseAccessorAffix(
            Case.from_label(data["case"]),
            AffixType.from_label(data.get("type", "T1")),
            CaseAccessorMode.from_label(data.get("mode", "NORMAL")),
        )
    if kind == "referential":
        return ReferentialAffix(ReferentList.parse(data["referents"]), Case.from_label(data.get("case", "THM")))
    if kind == "numeric":
        return NumericAffix(int(data["number"]), int(data["degree"]), AffixType.from_label(data.get("type", "T1")))
    raise ValueError(f"Unknown affix kind {kind!r}")


def _decode_affixes(items) -> Tuple[Affix, ...]:
    if not isinstance(items, list):
        raise ValueError("affixes must be a list")
    return tuple(_decode_affix(item) for item in items)


def _decode_root(data: Dict[str, Any]) -> Root:
    kind = RootKind(data.get("kind", "normal"))
    return Root(
        kind,
        cr=data.get("cr"),
        number=data.get("number"),
        referents=ReferentList.parse(data["referents"]) if data.get("referents") else None,
        degree=data.get("degree"),
        affix_type=AffixType.from_label(data["affix_type"]) if data.get("affix_type") else None,
        mode=SuppletiveMode.from_label(data["mode"]) if data.get("mode") else None,
        gloss=data.get("gloss"),
    )


def _decode_vn(text: str) -> Vn:
    for category in _VN_TYPES:
        try:
            return category[text]
        except KeyError:
            continue
    raise ValueError(f"{text!r} is not a Vn value")


_FIELD_DECODERS = {
    "root": _decode_root,
    "stem": Stem.from_label,
    "version": Version.from_label,
    "function": Function.from_label,
    "specification": Specification.from_label,
    "context": Context.from_label,
    "ca": _decode_ca,
    "slot_v_affixes": _decode_affixes,
    "slot_vii_affixes": _decode_affixes,
    "affix_shortcut": AffixShortcut.from_label,
    "vn": _decode_vn,
    "mood": Mood.from_label,
    "case_scope": CaseScope.from_label,
    "relation": Relation.from_label,
    "case": Case.from_label,
    "illocution": Illocution.from_label,
    "validation": Validation.from_label,
    "second_case": Case.from_label,
    "second_referents": ReferentList.parse,
    "combination_specification": Specification.from_label,
    "combination_affixes": _decode_affixes,
    "essence": Essence.from_label,
    "scope": AffixualScope.from_label,
    "other_affixes": _decode_affixes,
    "other_scope": AffixualScope.from_label,
    "mode": AffixualMode.from_label,
    "bias": Bias.from_label,
    "register": Register.from_label,
    "parsing_stress": ParsingStress.from_label,
    "modular_mode": ModularMode.from_label,
    "second_vn": _decode_vn,
    "final_vn": _decode_vn,
    "modular_scope": ModularScope.from_label,
}


def formative_from_dict(data: Dict[str, Any]) -> Formative:
    """
    Rebuilds a Formative from ``Formative.to_dict`` output. Missing fields
    take their defaults; the result is validated like any other Formative.

    Raises ValueError (an IthkuilError for invalid words) for anything that
    does not describe a word.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for a word, got {type(data).__name__}")
    word_type = WordType(data.get("word_type", WordType.FORMATIVE.value))
    values = {}
    for name, raw in data.items():
        if name == "word_type" or raw is None:
            continue
        if name not in _FIELD_DECODERS:
            raise ValueError(f"Unknown formative field {name!r}")
        try:
            values[name] = _FIELD_DECODERS[name](raw)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid value for {name!r}: {raw!r} ({e})") from e
    return build_formative(word_type, **values)
