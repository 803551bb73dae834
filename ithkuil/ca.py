"""
The Ca complex: affiliation, configuration, extension, perspective and
essence, packed into one consonant cluster.

A Ca is written in one of two shapes. The plain (ungeminated) shape appears
when slot V is empty; the geminated shape doubles a consonant or applies one
of the fixed substitutions, and tells the reader that slot V affixes came
before it. Both shapes also go through allomorphic substitutions (tt -> nt,
ll -> pļ, ...), so decoding always undoes the allomorphs before reading the
components off one at a time.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ithkuil.categories import (
    Affiliation,
    Configuration,
    Essence,
    Extension,
    Perspective,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ca:
    affiliation: Affiliation = Affiliation.CSL
    configuration: Configuration = Configuration.UPX
    extension: Extension = Extension.DEL
    perspective: Perspective = Perspective.M
    essence: Essence = Essence.NRM

    @property
    def components(self):
        return (self.affiliation, self.configuration, self.extension, self.perspective, self.essence)

    @property
    def is_default(self) -> bool:
        return all(component.is_default for component in self.components)

    def labels(self, show_defaults: bool = False, long: bool = False) -> List[str]:
        return [
            component.label(long)
            for component in self.components
            if show_defaults or not component.is_default
        ]

    def to_unallomorphed_string(self) -> str:
        special = _SPECIAL_FORMS.get(self)
        if special is not None:
            return special

        output = (
            _AFFILIATION_FORMS[self.affiliation]
            + _CONFIGURATION_FORMS[self.configuration]
            + (_UPX_EXTENSION_FORMS if self.configuration is Configuration.UPX else _EXTENSION_FORMS)[self.extension]
        )
        plain, after_stop = _PERSPECTIVE_ESSENCE_FORMS[(self.perspective, self.essence)]
        return output + (after_stop if output.endswith(("t", "p", "k")) else plain)

    def to_ungeminated_string(self) -> str:
        return allomorph(self.to_unallomorphed_string())

    def to_geminated_string(self) -> str:
        return geminate(self.to_ungeminated_string())

    def render(self, geminated: bool = False) -> str:
        return self.to_geminated_string() if geminated else self.to_ungeminated_string()

    @classmethod
    def from_unallomorphed_string(cls, text: str) -> Optional["Ca"]:
        """Reads the components off an unallomorphed string, or returns None."""
        special = _SPECIAL_LOOKUP.get(text)
        if special is not None:
            return special

        chars = list(reversed(text))

        def pop_if(options):
            if chars and chars[-1] in options:
                return chars.pop()
            return None

        affiliation = Affiliation.CSL
        if len(chars) > 1:
            found = pop_if(_AFFILIATION_LOOKUP)
            if found:
                affiliation = _AFFILIATION_LOOKUP[found]

        configuration = Configuration.UPX
        first = pop_if(_CONFIGURATION_LOOKUP)
        if first:
            configuration = _CONFIGURATION_LOOKUP[first]
            second = pop_if(_DUPLEX_FOLLOWERS.get(first, {}))
            if second:
                configuration = _DUPLEX_FOLLOWERS[first][second]

        extension = Extension.DEL
        if configuration is Configuration.UPX:
            found = pop_if(("d", "g", "b"))
            if found == "d":
                extension = Extension.PRX
            elif found == "g":
                extension = Extension.GRA if pop_if(("z",)) else Extension.ICP
            elif found == "b":
                extension = Extension.DPL if pop_if(("z",)) else Extension.ATV
        else:
            found = pop_if(_EXTENSION_LOOKUP)
            if found:
                extension = _EXTENSION_LOOKUP[found]

        perspective, essence = Perspective.M, Essence.NRM
        found = pop_if(_PERSPECTIVE_ESSENCE_LOOKUP)
        if found:
            perspective, essence = _PERSPECTIVE_ESSENCE_LOOKUP[found]

        if chars:
            return None
        return cls(affiliation, configuration, extension, perspective, essence)

    @classmethod
    def from_ungeminated_string(cls, text: str) -> Optional["Ca"]:
        return cls.from_unallomorphed_string(unallomorph(text))

    @classmethod
    def from_geminated_string(cls, text: str) -> Optional["Ca"]:
        ungeminated = ungeminate(text)
        if ungeminated is None:
            return None
        return cls.from_ungeminated_string(ungeminated)


DEFAULT_CA = Ca()

# -----------------------------------------------------------------
# --- Component tables
# -----------------------------------------------------------------

_SPECIAL_FORMS = {
    Ca(affiliation=Affiliation.ASO): "nļ",
    Ca(affiliation=Affiliation.COA): "rļ",
    Ca(affiliation=Affiliation.VAR): "ň",
    Ca(): "l",
    Ca(essence=Essence.RPV): "tļ",
    Ca(perspective=Perspective.N): "v",
    Ca(perspective=Perspective.A): "j",
}
_SPECIAL_LOOKUP = {text: ca for ca, text in _SPECIAL_FORMS.items()}

_AFFILIATION_FORMS = {
    Affiliation.CSL: "",
    Affiliation.ASO: "l",
    Affiliation.COA: "r",
    Affiliation.VAR: "ř",
}
_AFFILIATION_LOOKUP = {"l": Affiliation.ASO, "r": Affiliation.COA, "ř": Affiliation.VAR}

_CONFIGURATION_FORMS = {
    Configuration.UPX: "",
    Configuration.MSS: "t",
    Configuration.MSC: "k",
    Configuration.MSF: "p",
    Configuration.MDS: "ţ",
    Configuration.MDC: "f",
    Configuration.MDF: "ç",
    Configuration.MFS: "z",
    Configuration.MFC: "ž",
    Configuration.MFF: "ẓ",
    Configuration.DPX: "s",
    Configuration.DSS: "c",
    Configuration.DSC: "ks",
    Configuration.DSF: "ps",
    Configuration.DDS: "ţs",
    Configuration.DDC: "fs",
    Configuration.DDF: "š",
    Configuration.DFS: "č",
    Configuration.DFC: "kš",
    Configuration.DFF: "pš",
}
_CONFIGURATION_LOOKUP = {
    text: configuration
    for configuration, text in _CONFIGURATION_FORMS.items()
    if len(text) == 1
}
_DUPLEX_FOLLOWERS = {
    "k": {"s": Configuration.DSC, "š": Configuration.DFC},
    "p": {"s": Configuration.DSF, "š": Configuration.DFF},
    "ţ": {"s": Configuration.DDS},
    "f": {"s": Configuration.DDC},
}

_UPX_EXTENSION_FORMS = {
    Extension.DEL: "",
    Extension.PRX: "d",
    Extension.ICP: "g",
    Extension.ATV: "b",
    Extension.GRA: "gz",
    Extension.DPL: "bz",
}
_EXTENSION_FORMS = {
    Extension.DEL: "",
    Extension.PRX: "t",
    Extension.ICP: "k",
    Extension.ATV: "p",
    Extension.GRA: "g",
    Extension.DPL: "b",
}
_EXTENSION_LOOKUP = {text: extension for extension, text in _EXTENSION_FORMS.items() if text}

# (form after anything else, form after t/p/k)
_PERSPECTIVE_ESSENCE_FORMS = {
    (Perspective.M, Essence.NRM): ("", ""),
    (Perspective.G, Essence.NRM): ("r", "r"),
    (Perspective.N, Essence.NRM): ("w", "w"),
    (Perspective.A, Essence.NRM): ("y", "y"),
    (Perspective.M, Essence.RPV): ("l", "l"),
    (Perspective.G, Essence.RPV): ("ř", "ř"),
    (Perspective.N, Essence.RPV): ("m", "h"),
    (Perspective.A, Essence.RPV): ("n", "ç"),
}
_PERSPECTIVE_ESSENCE_LOOKUP = {
    "l": (Perspective.M, Essence.RPV),
    "r": (Perspective.G, Essence.NRM),
    "ř": (Perspective.G, Essence.RPV),
    "w": (Perspective.N, Essence.NRM),
    "m": (Perspective.N, Essence.RPV),
    "h": (Perspective.N, Essence.RPV),
    "y": (Perspective.A, Essence.NRM),
    "n": (Perspective.A, Essence.RPV),
    "ç": (Perspective.A, Essence.RPV),
}


# -----------------------------------------------------------------
# --- Allomorphs
# -----------------------------------------------------------------

_WHOLE_ALLOMORPHS = (
    ("pp", "mp"),
    ("tt", "nt"),
    ("kk", "nk"),
    ("ll", "pļ"),
    ("pb", "mb"),
    ("kg", "ng"),
    ("çy", "nd"),
    ("rr", "ns"),
    ("rř", "nš"),
    ("řr", "ňs"),
    ("řř", "ňš"),
    ("ngn", "ňn"),
)

# applied only after the first letter
_NON_INITIAL_ALLOMORPHS = (
    ("gm", "x"),
    ("gn", "ň"),
    ("çx", "xw"),
    ("bm", "v"),
    ("bn", "ḑ"),
)

_FINAL_ALLOMORPHS = (("fv", "vw"), ("ţḑ", "ḑy"))

_WHOLE_UNALLOMORPHS = (
    ("ňn", "ngn"),
    ("gnn", "ngn"),
    ("ňš", "řř"),
    ("gnš", "řř"),
    ("ňs", "řr"),
    ("gns", "řr"),
    ("nš", "rř"),
    ("ns", "rr"),
    ("nd", "çy"),
    ("ng", "kg"),
    ("mb", "pb"),
    ("pļ", "ll"),
    ("nk", "kk"),
    ("nt", "tt"),
    ("mp", "pp"),
)


def _apply(text: str, pairs) -> str:
    for old, new in pairs:
        text = text.replace(old, new)
    return text


def allomorph(ca: str) -> str:
    """Applies the allomorphic substitutions to an ungeminated Ca string."""
    if len(ca) <= 1:
        return ca
    ca = _apply(ca, _WHOLE_ALLOMORPHS)
    ca = ca[:1] + _apply(ca[1:], _NON_INITIAL_ALLOMORPHS)
    return _apply(ca, _FINAL_ALLOMORPHS)


def unallomorph(ca: str) -> str:
    """Undoes :func:`allomorph`."""
    if len(ca) <= 1:
        return ca
    ca = _apply(ca, (("ḑy", "ţḑ"), ("vw", "fv")))
    rest = _apply(ca[1:], (("ḑ", "bn"), ("v", "bm"), ("xw", "çx"), ("ň", "gn"), ("x", "gm")))
    return _apply(ca[:1] + rest, _WHOLE_UNALLOMORPHS)


# -----------------------------------------------------------------
# --- Gemination
# -----------------------------------------------------------------

_GEMINATE_SUBSTITUTIONS = (
    ("pt", "bbḑ"),
    ("pk", "bbv"),
    ("kt", "ggḑ"),
    ("kp", "ggv"),
    ("tk", "ḑvv"),
    ("tp", "ddv"),
    ("pm", "vvm"),
    ("pn", "vvn"),
    ("km", "xxm"),
    ("kn", "xxn"),
    ("tm", "ḑḑm"),
    ("tn", "ḑḑn"),
    ("bm", "mmw"),
    ("bn", "mml"),
    ("gm", "ňňw"),
    ("gn", "ňňl"),
    ("dm", "nnw"),
    ("dn", "nnl"),
)

_STOPS = frozenset("tkpdgb")
_LIQUIDS_AND_GLIDES = frozenset("lrřwy")
_SIBILANTS = frozenset("sšzžçcč")
_INITIAL_DOUBLERS = frozenset("fţvḑmnň")


def _try_geminate_core(ca: str) -> Optional[str]:
    if len(ca) == 0:
        return ""
    if len(ca) == 1:
        return ca * 2
    if ca == "tļ":
        return "ttļ"

    if ca[0] in _STOPS and ca[1] in _LIQUIDS_AND_GLIDES:
        return ca[0] + ca

    for index, char in enumerate(ca):
        if char in _SIBILANTS:
            return ca[:index] + char + ca[index:]

    if ca[0] in _INITIAL_DOUBLERS:
        return ca[0] + ca

    if ca[0] in "tkp" and ca[1] in "fţç":
        return ca[0] + ca[1] + ca[1:]

    for plain, geminated in _GEMINATE_SUBSTITUTIONS:
        if plain in ca:
            return ca.replace(plain, geminated)

    return None


def try_geminate(ca: str) -> Optional[str]:
    """Geminates an ungeminated Ca string, or returns None if no rule applies."""
    if ca[:1] in ("l", "r", "ř"):
        prefix, rest = ca[0], ca[1:]
        geminated = _try_geminate_core(rest)
        if geminated is None or not rest:
            return prefix + ca
        return prefix + geminated
    return _try_geminate_core(ca)


def geminate(ca: str) -> str:
    """Geminates a Ca string, doubling the first letter when no rule applies."""
    geminated = try_geminate(ca)
    if geminated is None:
        logger.debug("No gemination rule for %r, doubling the first letter", ca)
        return ca[0] + ca
    return geminated


def ungeminate(ca: str) -> Optional[str]:
    """Reverses :func:`geminate`. Returns None for the empty string."""
    for plain, geminated in _GEMINATE_SUBSTITUTIONS:
        if geminated in ca:
            return ca.replace(geminated, plain)

    if not ca:
        return None
    for index in range(len(ca) - 1):
        if ca[index] == ca[index + 1]:
            return ca[:index] + ca[index + 1:]
    return ca


def is_geminate(cluster: str) -> bool:
    return any(first == second for first, second in zip(cluster, cluster[1:]))
