"""
The phonological tokenizer.

Turns one romanized word into an ordered run of tokens: consonant clusters,
h-forms, vowel forms, glottal stops and numerals, closed by a STRESS token
holding the stress the word was written with. Tokens know nothing about
grammar; the segmenter decides which slot each one fills.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from ithkuil.errors import InvalidCharacter, MalformedCluster
from ithkuil.phonology import (
    CONSONANTS,
    GLOTTAL_STOP,
    SCHWA,
    VOWELS,
    HForm,
    Stress,
    VowelForm,
    detect_stress,
    unstress_vowels,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------
# --- Normalization
# -----------------------------------------------------------------

_ALTERNATE_LETTERS = {
    "ì": "i",
    "ı": "i",
    "ù": "u",
    "ṭ": "ţ",
    "ŧ": "ţ",
    "ț": "ţ",
    "ḍ": "ḑ",
    "đ": "ḑ",
    "ł": "ļ",
    "ḷ": "ļ",
    "ż": "ẓ",
    "ṇ": "ň",
    "ņ": "ň",
    "ṛ": "ř",
    "ŗ": "ř",
    "’": GLOTTAL_STOP,
    "ʼ": GLOTTAL_STOP,
    "‘": GLOTTAL_STOP,
}


def normalize(text: str) -> str:
    """
    Brings a word into the canonical alphabet: composed characters, lower
    case, alternate letters replaced, no leading glottal stop.
    """
    text = unicodedata.normalize("NFC", text).replace("\u200b", "").lower()
    text = "".join(_ALTERNATE_LETTERS.get(char, char) for char in text)
    return text.lstrip(GLOTTAL_STOP)


# -----------------------------------------------------------------
# --- Tokens
# -----------------------------------------------------------------

class TokenKind(Enum):
    CONSONANT = "consonant"
    H_FORM = "h_form"
    VOWEL = "vowel"
    SCHWA = "schwa"
    GLOTTAL_STOP = "glottal_stop"
    NUMERAL = "numeral"
    STRESS = "stress"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int

    @property
    def is_consonantal(self) -> bool:
        """Consonant clusters, h-forms and numerals all fill consonant slots."""
        return self.kind in (TokenKind.CONSONANT, TokenKind.H_FORM, TokenKind.NUMERAL)

    @property
    def vowel(self) -> Optional[VowelForm]:
        if self.kind is TokenKind.VOWEL:
            return VowelForm.parse(self.text)
        return None

    @property
    def h_form(self) -> Optional[HForm]:
        if self.kind is TokenKind.H_FORM:
            return HForm.parse(self.text)
        return None

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class Tokenization:
    """The tokens of one word; the last token is always the STRESS token."""
    source: str
    word: str
    tokens: Tuple[Token, ...]

    @property
    def stress(self) -> Stress:
        return Stress(self.tokens[-1].text)

    @property
    def body(self) -> Tuple[Token, ...]:
        """Every token except the closing STRESS token."""
        return self.tokens[:-1]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]


# Runs of one character class; anything unmatched falls through to the
# catch-all group and is reported as invalid.
_RUN_PATTERN = re.compile(
    "(?P<consonants>[{c}]+)|(?P<vowels>[{v}{g}]+)|(?P<digits>[0-9]+)|(?P<other>.)".format(
        c="".join(sorted(CONSONANTS)),
        v="".join(sorted(VOWELS)),
        g=GLOTTAL_STOP,
    ),
    re.DOTALL,
)


def _consonant_token(text: str, position: int) -> Token:
    if text[0] in "hwy":
        try:
            HForm.parse(text)
        except ValueError:
            raise MalformedCluster(text, position, "clusters starting with h, w or y must be h-forms") from None
        return Token(TokenKind.H_FORM, text, position)
    return Token(TokenKind.CONSONANT, text, position)


def _vowel_tokens(text: str, position: int, word_final: bool):
    if word_final and text.endswith(GLOTTAL_STOP) and len(text) > 1:
        yield from _vowel_tokens(text[:-1], position, False)
        yield Token(TokenKind.GLOTTAL_STOP, GLOTTAL_STOP, position + len(text) - 1)
        return

    if text == GLOTTAL_STOP:
        yield Token(TokenKind.GLOTTAL_STOP, text, position)
    elif text == SCHWA:
        yield Token(TokenKind.SCHWA, text, position)
    else:
        try:
            VowelForm.parse(text)
        except ValueError as e:
            raise MalformedCluster(text, position, str(e)) from None
        yield Token(TokenKind.VOWEL, text, position)


def tokenize(text: str) -> Tokenization:
    """
    Tokenizes a single romanized word.

    Raises InvalidCharacter for characters outside the romanization alphabet,
    MalformedCluster for h/w/y clusters or vowel runs with no reading, and
    InvalidStress for impossible stress marks.
    """
    word = normalize(text.strip())
    stress = detect_stress(word)
    plain = unstress_vowels(word)

    tokens = []
    for match in _RUN_PATTERN.finditer(plain):
        run = match.group()
        position = match.start()
        if match.lastgroup == "consonants":
            tokens.append(_consonant_token(run, position))
        elif match.lastgroup == "vowels":
            tokens.extend(_vowel_tokens(run, position, match.end() == len(plain)))
        elif match.lastgroup == "digits":
            tokens.append(Token(TokenKind.NUMERAL, run, position))
        else:
            raise InvalidCharacter(run, position, word)

    tokens.append(Token(TokenKind.STRESS, stress.value, len(plain)))
    logger.debug("Tokenized %r as %s", word, [token.text for token in tokens])
    return Tokenization(text, word, tuple(tokens))
