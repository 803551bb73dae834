"""
Closed grammatical category sets of New Ithkuil.

Each category is an ``Enum`` whose members carry their abbreviation (the
canonical string form used in glosses) and a long lowercase name. The first
member declared in every category is its default, unmarked value.
"""
from enum import Enum
from typing import Dict, Optional, Union


class Category(Enum):
    """Shared behaviour for every category enumeration."""

    def __init__(self, abbreviation: str, long_name: str):
        self.abbreviation = abbreviation
        self.long_name = long_name

    def __str__(self):
        return self.abbreviation

    @classmethod
    def default(cls):
        """The unmarked member, i.e. the first one declared."""
        return next(iter(cls))

    @property
    def is_default(self) -> bool:
        return self is type(self).default()

    def label(self, long: bool = False) -> str:
        return self.long_name if long else self.abbreviation

    @classmethod
    def from_label(cls, text: str):
        """
        Looks up a member by any accepted surface variant.

        Accepts the abbreviation, the long name or the member name, ignoring
        case. Raises ValueError for anything else.
        """
        member = _LABEL_TABLES[cls].get(text.strip().lower())
        if member is None:
            raise ValueError(f"{text!r} is not a valid {cls.__name__}")
        return member


def _label_table(category) -> Dict[str, Category]:
    table = {}
    for member in category:
        for variant in (member.abbreviation, member.long_name, member.name):
            table.setdefault(variant.lower(), member)
    return table


# -----------------------------------------------------------------
# --- Slot II: Stem and Version
# -----------------------------------------------------------------

class Stem(Category):
    S1 = ("S1", "stem_one")
    S2 = ("S2", "stem_two")
    S3 = ("S3", "stem_three")
    S0 = ("S0", "stem_zero")


class Version(Category):
    PRC = ("PRC", "processual")
    CPT = ("CPT", "completive")


# -----------------------------------------------------------------
# --- Slot IV: Function, Specification, Context
# -----------------------------------------------------------------

class Function(Category):
    STA = ("STA", "static")
    DYN = ("DYN", "dynamic")


class Specification(Category):
    BSC = ("BSC", "basic")
    CTE = ("CTE", "contential")
    CSV = ("CSV", "constitutive")
    OBJ = ("OBJ", "objective")


class Context(Category):
    EXS = ("EXS", "existential")
    FNC = ("FNC", "functional")
    RPS = ("RPS", "representational")
    AMG = ("AMG", "amalgamative")


# -----------------------------------------------------------------
# --- Slot VI: the Ca complex
# -----------------------------------------------------------------

class Affiliation(Category):
    CSL = ("CSL", "consolidative")
    ASO = ("ASO", "associative")
    COA = ("COA", "coalescent")
    VAR = ("VAR", "variative")


class Configuration(Category):
    UPX = ("UPX", "uniplex")
    MSS = ("MSS", "multiplex_similar_separate")
    MSC = ("MSC", "multiplex_similar_connected")
    MSF = ("MSF", "multiplex_similar_fused")
    MDS = ("MDS", "multiplex_dissimilar_separate")
    MDC = ("MDC", "multiplex_dissimilar_connected")
    MDF = ("MDF", "multiplex_dissimilar_fused")
    MFS = ("MFS", "multiplex_fuzzy_separate")
    MFC = ("MFC", "multiplex_fuzzy_connected")
    MFF = ("MFF", "multiplex_fuzzy_fused")
    DPX = ("DPX", "duplex")
    DSS = ("DSS", "duplex_similar_separate")
    DSC = ("DSC", "duplex_similar_connected")
    DSF = ("DSF", "duplex_similar_fused")
    DDS = ("DDS", "duplex_dissimilar_separate")
    DDC = ("DDC", "duplex_dissimilar_connected")
    DDF = ("DDF", "duplex_dissimilar_fused")
    DFS = ("DFS", "duplex_fuzzy_separate")
    DFC = ("DFC", "duplex_fuzzy_connected")
    DFF = ("DFF", "duplex_fuzzy_fused")


class Extension(Category):
    DEL = ("DEL", "delimitive")
    PRX = ("PRX", "proximal")
    ICP = ("ICP", "inceptive")
    ATV = ("ATV", "attenuative")
    GRA = ("GRA", "graduative")
    DPL = ("DPL", "depletive")


class Perspective(Category):
    M = ("M", "monadic")
    G = ("G", "agglomerative")
    N = ("N", "nomic")
    A = ("A", "abstract")


class Essence(Category):
    NRM = ("NRM", "normal")
    RPV = ("RPV", "representative")


# -----------------------------------------------------------------
# --- Slot VIII: Vn and Cn
# -----------------------------------------------------------------

class Valence(Category):
    MNO = ("MNO", "monoactive")
    PRL = ("PRL", "parallel")
    CRO = ("CRO", "corollary")
    RCP = ("RCP", "reciprocal")
    CPL = ("CPL", "complementary")
    DUP = ("DUP", "duplicative")
    DEM = ("DEM", "demonstrative")
    CNG = ("CNG", "contingent")
    PTI = ("PTI", "participatory")


class Phase(Category):
    PUN = ("PUN", "punctual")
    ITR = ("ITR", "iterative")
    REP = ("REP", "repetitive")
    ITM = ("ITM", "intermittent")
    RCT = ("RCT", "recurrent")
    FRE = ("FRE", "frequentative")
    FRG = ("FRG", "fragmentative")
    VAC = ("VAC", "vacillitative")
    FLC = ("FLC", "fluctuative")


class Effect(Category):
    BEN1 = ("1:BEN", "beneficial_to_speaker")
    BEN2 = ("2:BEN", "beneficial_to_addressee")
    BEN3 = ("3:BEN", "beneficial_to_3rd_party")
    BENSELF = ("SLF:BEN", "beneficial_to_self")
    UNK = ("UNK", "unknown")
    DETSELF = ("SLF:DET", "detrimental_to_self")
    DET3 = ("3:DET", "detrimental_to_3rd_party")
    DET2 = ("2:DET", "detrimental_to_addressee")
    DET1 = ("1:DET", "detrimental_to_speaker")


class Level(Category):
    MIN = ("MIN", "minimal")
    SBE = ("SBE", "subequative")
    IFR = ("IFR", "inferior")
    DFC = ("DFC", "deficient")
    EQU = ("EQU", "equative")
    SUR = ("SUR", "surpassive")
    SPL = ("SPL", "superlative")
    SPQ = ("SPQ", "superequative")
    MAX = ("MAX", "maximal")


class Aspect(Category):
    RTR = ("RTR", "retrospective")
    PRS = ("PRS", "prospective")
    HAB = ("HAB", "habitual")
    PRG = ("PRG", "progressive")
    IMM = ("IMM", "imminent")
    PCS = ("PCS", "precessive")
    REG = ("REG", "regulative")
    SMM = ("SMM", "summative")
    ATP = ("ATP", "anticipatory")
    RSM = ("RSM", "resumptive")
    CSS = ("CSS", "cessative")
    PAU = ("PAU", "pausal")
    RGR = ("RGR", "regressive")
    PCL = ("PCL", "preclusive")
    CNT = ("CNT", "continuative")
    ICS = ("ICS", "incessative")
    EXP = ("EXP", "experiential")
    IRP = ("IRP", "interruptive")
    PMP = ("PMP", "preemptive")
    CLM = ("CLM", "climactic")
    DLT = ("DLT", "dilatory")
    TMP = ("TMP", "temporary")
    XPD = ("XPD", "expenditive")
    LIM = ("LIM", "limitative")
    EPD = ("EPD", "expeditive")
    PTC = ("PTC", "protractive")
    PPR = ("PPR", "preparatory")
    DCL = ("DCL", "disclusive")
    CCL = ("CCL", "conclusive")
    CUL = ("CUL", "culminative")
    IMD = ("IMD", "intermediative")
    TRD = ("TRD", "tardative")
    TNS = ("TNS", "transitional")
    ITC = ("ITC", "intercommutative")
    MTV = ("MTV", "motive")
    SQN = ("SQN", "sequential")


class Mood(Category):
    FAC = ("FAC", "factual")
    SUB = ("SUB", "subjunctive")
    ASM = ("ASM", "assumptive")
    SPC = ("SPC", "speculative")
    COU = ("COU", "counterfactive")
    HYP = ("HYP", "hypothetical")


class CaseScope(Category):
    CCN = ("CCN", "natural")
    CCA = ("CCA", "antecedent")
    CCS = ("CCS", "subaltern")
    CCQ = ("CCQ", "qualifier")
    CCP = ("CCP", "precedent")
    CCV = ("CCV", "successive")


# -----------------------------------------------------------------
# --- Slot IX: Case, Illocution, Validation
# -----------------------------------------------------------------

class Case(Category):
    # Transrelative
    THM = ("THM", "thematic")
    INS = ("INS", "instrumental")
    ABS = ("ABS", "absolutive")
    AFF = ("AFF", "affective")
    STM = ("STM", "stimulative")
    EFF = ("EFF", "effectuative")
    ERG = ("ERG", "ergative")
    DAT = ("DAT", "dative")
    IND = ("IND", "inducive")
    # Appositive
    POS = ("POS", "possessive")
    PRP = ("PRP", "proprietive")
    GEN = ("GEN", "genitive")
    ATT = ("ATT", "attributive")
    PDC = ("PDC", "productive")
    ITP = ("ITP", "interpretative")
    OGN = ("OGN", "originative")
    IDP = ("IDP", "interdependent")
    PAR = ("PAR", "partitive")
    # Associative
    APL = ("APL", "applicative")
    PUR = ("PUR", "purposive")
    TRA = ("TRA", "transmissive")
    DFR = ("DFR", "deferential")
    CRS = ("CRS", "contrastive")
    TSP = ("TSP", "transpositive")
    CMM = ("CMM", "commutative")
    CMP = ("CMP", "comparative")
    CSD = ("CSD", "considerative")
    # Adverbial
    FUN = ("FUN", "functive")
    TFM = ("TFM", "transformative")
    CLA = ("CLA", "classificative")
    RSL = ("RSL", "resultative")
    CSM = ("CSM", "consumptive")
    CON = ("CON", "concessive")
    AVR = ("AVR", "aversive")
    CVS = ("CVS", "conversive")
    SIT = ("SIT", "situative")
    # Relational
    PRN = ("PRN", "pertinential")
    DSP = ("DSP", "descriptive")
    COR = ("COR", "correlative")
    CPS = ("CPS", "compositive")
    COM = ("COM", "comitative")
    UTL = ("UTL", "utilitative")
    PRD = ("PRD", "predicative")
    RLT = ("RLT", "relative")
    # Affinitive
    ACT = ("ACT", "activative")
    ASI = ("ASI", "assimilative")
    ESS = ("ESS", "essive")
    TRM = ("TRM", "terminative")
    SEL = ("SEL", "selective")
    CFM = ("CFM", "conformative")
    DEP = ("DEP", "dependent")
    VOC = ("VOC", "vocative")
    # Spatio-temporal I
    LOC = ("LOC", "locative")
    ATD = ("ATD", "attendant")
    ALL = ("ALL", "allative")
    ABL = ("ABL", "ablative")
    ORI = ("ORI", "orientative")
    IRL = ("IRL", "interrelative")
    INV = ("INV", "intrative")
    NAV = ("NAV", "navigative")
    # Spatio-temporal II
    CNR = ("CNR", "concursive")
    ASS = ("ASS", "assessive")
    PER = ("PER", "periodic")
    PRO = ("PRO", "prolapsive")
    PCV = ("PCV", "precursive")
    PCR = ("PCR", "postcursive")
    ELP = ("ELP", "elapsive")
    PLM = ("PLM", "prolimitive")


class Illocution(Category):
    ASR = ("ASR", "assertive")
    DIR = ("DIR", "directive")
    DEC = ("DEC", "declarative")
    IRG = ("IRG", "interrogative")
    VER = ("VER", "verificative")
    ADM = ("ADM", "admonitive")
    POT = ("POT", "potentiative")
    HOR = ("HOR", "hortative")
    CNJ = ("CNJ", "conjectural")


class Validation(Category):
    OBS = ("OBS", "observational")
    REC = ("REC", "recollective")
    PUP = ("PUP", "purportive")
    RPR = ("RPR", "reportive")
    USP = ("USP", "unspecified")
    IMA = ("IMA", "imaginary")
    CVN = ("CVN", "conventional")
    ITU = ("ITU", "intuitive")
    INF = ("INF", "inferential")


class Relation(Category):
    """Concatenation status and framing, read from Cc and stress."""
    NOM = ("NOM", "nominal")
    T1 = ("T1", "type_one")
    T2 = ("T2", "type_two")
    FRM = ("FRM", "framed")
    VRB = ("VRB", "verbal")

    @property
    def is_verbal(self) -> bool:
        return self is Relation.VRB

    @property
    def is_concatenated(self) -> bool:
        return self in (Relation.T1, Relation.T2)


# -----------------------------------------------------------------
# --- Affixes and shortcuts
# -----------------------------------------------------------------

class AffixType(Category):
    T1 = ("₁", "type_one")
    T2 = ("₂", "type_two")
    T3 = ("₃", "type_three")


class AffixShortcut(Category):
    """Affixes folded into the Vv series of a normal formative."""
    NONE = ("", "none")
    NEG4 = ("NEG/4", "negation_4")
    DCD4 = ("DCD/4", "decided_4")
    DCD5 = ("DCD/5", "decided_5")


class CaShortcut(Category):
    """Ca values that can be folded into Cc + Vv."""
    DEFAULT = ("", "default")
    PRX = ("PRX", "proximal")
    G = ("G", "agglomerative")
    RPV = ("RPV", "representative")
    N = ("N", "nomic")
    A = ("A", "abstract")
    G_RPV = ("G.RPV", "agglomerative_representative")
    PRX_RPV = ("PRX.RPV", "proximal_representative")


class CaseAccessorMode(Category):
    NORMAL = ("acc", "case_accessor")
    INVERSE = ("ia", "inverse_accessor")


# -----------------------------------------------------------------
# --- Referentials and affixual adjuncts
# -----------------------------------------------------------------

class ReferentTarget(Category):
    M1 = ("1m", "speaker")
    M2 = ("2m", "monadic_addressee")
    P2 = ("2p", "polyadic_addressee")
    MA = ("ma", "monadic_animate")
    PA = ("pa", "polyadic_animate")
    MI = ("mi", "monadic_inanimate")
    PI = ("pi", "polyadic_inanimate")
    MX = ("Mx", "mixed_3rd_party")
    RDP = ("Rdp", "reduplicative")
    OBV = ("Obv", "obviative")
    PVS = ("PVS", "provisional")


class ReferentEffect(Category):
    NEU = ("NEU", "neutral")
    BEN = ("BEN", "beneficial")
    DET = ("DET", "detrimental")


class AffixualScope(Category):
    VDOM = ("{VDom}", "dominant_over_slot_v")
    VSUB = ("{VSub}", "subordinate_to_slot_v")
    VIIDOM = ("{VIIDom}", "dominant_over_slot_vii")
    VIISUB = ("{VIISub}", "subordinate_to_slot_vii")
    FORMATIVE = ("{Form}", "formative")
    OVERADJ = ("{OAdj}", "over_adjacent")


class AffixualMode(Category):
    FULL = ("{Full}", "full")
    CONCATENATED = ("{Stm}", "concatenated_stem")


# -----------------------------------------------------------------
# --- Single-category adjuncts
# -----------------------------------------------------------------
# These categories have no unmarked value; the first member is only the
# default of the enumeration, and glosses always show them.

class Bias(Category):
    ACC = ("ACC", "accidental")
    ACH = ("ACH", "archetypal")
    ADS = ("ADS", "admissive")
    ANN = ("ANN", "annunciative")
    ANP = ("ANP", "anticipative")
    APB = ("APB", "approbative")
    APH = ("APH", "apprehensive")
    ARB = ("ARB", "arbitrary")
    ATE = ("ATE", "attentive")
    CMD = ("CMD", "comedic")
    CNV = ("CNV", "contensive")
    COI = ("COI", "coincidental")
    CRP = ("CRP", "corruptive")
    CRR = ("CRR", "corrective")
    CTP = ("CTP", "contemptive")
    CTV = ("CTV", "contemplative")
    DCC = ("DCC", "disconcertive")
    DEJ = ("DEJ", "dejective")
    DES = ("DES", "desperative")
    DFD = ("DFD", "diffident")
    DIS = ("DIS", "dismissive")
    DLC = ("DLC", "delectative")
    DOL = ("DOL", "dolorous")
    DPB = ("DPB", "disapprobative")
    DRS = ("DRS", "derisive")
    DUB = ("DUB", "dubitative")
    EUH = ("EUH", "euphoric")
    EUP = ("EUP", "euphemistic")
    EXA = ("EXA", "exasperative")
    EXG = ("EXG", "exigent")
    FOR = ("FOR", "fortuitous")
    FSC = ("FSC", "fascinative")
    GRT = ("GRT", "gratificative")
    IDG = ("IDG", "indignative")
    IFT = ("IFT", "infatuative")
    IPL = ("IPL", "implicative")
    IPT = ("IPT", "impatient")
    IRO = ("IRO", "ironic")
    ISP = ("ISP", "insipid")
    IVD = ("IVD", "invidious")
    MAN = ("MAN", "mandatory")
    MNF = ("MNF", "manifestive")
    OPT = ("OPT", "optimal")
    PES = ("PES", "pessimistic")
    PPT = ("PPT", "propitious")
    PPX = ("PPX", "perplexive")
    PPV = ("PPV", "propositive")
    PSC = ("PSC", "prosaic")
    PSM = ("PSM", "presumptive")
    RAC = ("RAC", "reactive")
    RFL = ("RFL", "reflective")
    RSG = ("RSG", "resignative")
    RPU = ("RPU", "repulsive")
    RVL = ("RVL", "revelative")
    SAT = ("SAT", "satiated")
    SGS = ("SGS", "suggestive")
    SKP = ("SKP", "skeptical")
    SOL = ("SOL", "solicitative")
    STU = ("STU", "stupefactive")
    TRP = ("TRP", "trepidative")
    VEX = ("VEX", "vexative")


class Register(Category):
    DSV = ("DSV", "discursive")
    PNT = ("PNT", "parenthetical")
    SPF = ("SPF", "specificative")
    EXM = ("EXM", "exemplificative")
    CGT = ("CGT", "cogitant")
    DSV_END = ("DSV_END", "discursive_end")
    PNT_END = ("PNT_END", "parenthetical_end")
    SPF_END = ("SPF_END", "specificative_end")
    EXM_END = ("EXM_END", "exemplificative_end")
    CGT_END = ("CGT_END", "cogitant_end")
    END = ("END", "end")


class ParsingStress(Category):
    MONOSYLLABIC = ("MONO", "monosyllabic")
    ULTIMATE = ("ULT", "ultimate")
    PENULTIMATE = ("PEN", "penultimate")
    ANTEPENULTIMATE = ("ANTE", "antepenultimate")


class SuppletiveMode(Category):
    CAR = ("CAR", "carrier")
    QUO = ("QUO", "quotative")
    NAM = ("NAM", "naming")
    PHR = ("PHR", "phrasal")


# -----------------------------------------------------------------
# --- Modular adjuncts
# -----------------------------------------------------------------

class ModularMode(Category):
    FULL = ("{Full}", "full")
    PARENT = ("{Parent}", "parent")
    CONCATENATED = ("{Concat}", "concatenated")


class ModularScope(Category):
    FORMATIVE = ("{Form}", "formative")
    MCS = ("{MCS}", "mood_case_scope")
    OVERADJ = ("{OAdj}", "over_adjacent")
    UNDERADJ = ("{UAdj}", "under_adjacent")


Vn = Union[Valence, Phase, Effect, Level, Aspect]
MoodOrCaseScope = Union[Mood, CaseScope]
NON_ASPECTUAL_VN = (Valence, Phase, Effect, Level)


def is_aspect(vn: Optional[Vn]) -> bool:
    return isinstance(vn, Aspect)


# -----------------------------------------------------------------
# --- Word and root kinds (structural, not glossed)
# -----------------------------------------------------------------

class WordType(Enum):
    FORMATIVE = "formative"
    REFERENTIAL = "referential"
    AFFIXUAL = "affixual"
    SUPPLETIVE = "suppletive"
    MODULAR = "modular"
    MCS = "mcs"
    REGISTER = "register"
    PARSING = "parsing"
    BIAS = "bias"
    NUMERIC = "numeric"


class RootKind(Enum):
    NORMAL = "normal"
    NUMERIC = "numeric"
    REFERENTIAL = "referential"
    AFFIXUAL = "affixual"
    SUPPLETIVE = "suppletive"


def _all_categories(base=Category):
    for category in base.__subclasses__():
        yield category
        yield from _all_categories(category)


_LABEL_TABLES: Dict[type, Dict[str, Category]] = {
    category: _label_table(category) for category in _all_categories()
}
