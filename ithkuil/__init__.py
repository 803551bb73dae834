"""
New Ithkuil toolkit: romanized text to structured words and back.

    text -> tokenize -> segment -> resolve -> assemble -> Formative
    Formative -> generate -> canonical text
    Formative -> gloss -> interlinear gloss
"""
from ithkuil.errors import (
    AssembleError,
    DuplicateSlot,
    IncompatibleCategories,
    InvalidCharacter,
    InvalidStress,
    IthkuilError,
    MalformedCluster,
    MissingSlot,
    ResolveError,
    SegmentError,
    TokenizeError,
    UnknownForm,
    UnrecognizedStructure,
)
from ithkuil.formative import Formative, Root, assemble, build_formative, formative_from_dict
from ithkuil.generator import generate
from ithkuil.gloss import GlossOptions, gloss
from ithkuil.lexicon import Lexicon, load_lexicon
from ithkuil.parser import parse_text, parse_word
from ithkuil.resolver import resolve
from ithkuil.romanize import normalize, tokenize
from ithkuil.segmenter import segment
from ithkuil.trace import ParseTrace

__version__ = "0.1.0"

__all__ = [
    "AssembleError",
    "DuplicateSlot",
    "Formative",
    "GlossOptions",
    "IncompatibleCategories",
    "InvalidCharacter",
    "InvalidStress",
    "IthkuilError",
    "Lexicon",
    "MalformedCluster",
    "MissingSlot",
    "ParseTrace",
    "ResolveError",
    "Root",
    "SegmentError",
    "TokenizeError",
    "UnknownForm",
    "UnrecognizedStructure",
    "assemble",
    "build_formative",
    "formative_from_dict",
    "generate",
    "gloss",
    "load_lexicon",
    "normalize",
    "parse_text",
    "parse_word",
    "resolve",
    "segment",
    "tokenize",
]
