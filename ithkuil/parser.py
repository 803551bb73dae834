"""
Parser facade: romanized text in, Formatives out.

Runs the four pipeline stages in order:

    tokenize -> segment -> resolve -> assemble

and optionally records each stage's input and output on a ``ParseTrace``.

Usage:
    from ithkuil.parser import parse_word, parse_text

    formative = parse_word("malëuţřait")
    words = parse_text("Wala malëuţřait.")
"""
import logging
import re
from typing import List, Optional

from ithkuil.categories import WordType
from ithkuil.errors import IthkuilError
from ithkuil.formative import Formative, assemble
from ithkuil.logging_config import log_with_context
from ithkuil.resolver import resolve_all
from ithkuil.romanize import tokenize
from ithkuil.segmenter import segment
from ithkuil.trace import ParseTrace

logger = logging.getLogger(__name__)

# A leading bracket marks a word as referential, e.g. "[la".
REFERENTIAL_MARKER = "["

# Words are runs of anything but whitespace and punctuation; the glottal
# stop apostrophe and the referential bracket stay part of the word.
_WORD_PATTERN = re.compile(r"\[?[^\s.,;:!?\"()\[\]«»“”„—–-]+")


def parse_word(text: str, word_type_hint: Optional[WordType] = None, trace: Optional[ParseTrace] = None) -> Formative:
    """
    Parse one romanized word.

    Args:
        text: The word, in any accepted spelling (stress marks, alternate
            letters, upper case)
        word_type_hint: Skip word type detection and read the word as this
            type
        trace: Optional trace to record each stage on

    Returns:
        The assembled Formative

    Raises:
        IthkuilError: A subclass naming the failing stage and position
    """
    if text.startswith(REFERENTIAL_MARKER):
        text = text[len(REFERENTIAL_MARKER):]
        word_type_hint = WordType.REFERENTIAL

    try:
        tokens = tokenize(text)
        if trace:
            trace.add_step(
                "Tokenizer",
                inputs={"text": text},
                outputs={"word": tokens.word, "tokens": [[t.kind.value, t.text] for t in tokens]},
                description="Split the word into consonant clusters, vowel forms and stress.",
            )

        segmentation = segment(tokens, word_type_hint)
        if trace:
            trace.add_step(
                "Segmenter",
                inputs={"word_type_hint": word_type_hint.value if word_type_hint else None},
                outputs={
                    "word_type": segmentation.word_type.value,
                    "slots": [
                        {"kind": slot.kind.value, "text": slot.text, "variant": slot.variant, "shortcut": slot.shortcut}
                        for slot in segmentation.slots
                    ],
                },
                description="Assigned every token to a slot of the word template.",
            )

        values = resolve_all(segmentation)
        if trace:
            trace.add_step(
                "Resolver",
                inputs={"slots": len(segmentation.slots)},
                outputs={kind.value: repr(value) for kind, value in values},
                description="Mapped each slot to its category value.",
            )

        formative = assemble(segmentation.word_type, values)
    except IthkuilError as e:
        log_with_context(f"Could not parse {text!r}", {"error": type(e).__name__, "message": e})
        if trace:
            trace.set_error(f"{type(e).__name__}: {e}")
        raise

    if trace:
        result = formative.to_dict()
        trace.add_step(
            "Assembler",
            inputs={"word_type": segmentation.word_type.value},
            outputs=result,
            description="Checked slot compatibility and expanded shortcuts.",
        )
        trace.set_result(result)

    logger.debug(
        "Parsed %r as %s word%s",
        text,
        formative.word_type.value,
        f" with root {formative.root.identifier}" if formative.root is not None else "",
    )
    return formative


def split_words(text: str) -> List[str]:
    """Split running text into words, dropping punctuation."""
    return _WORD_PATTERN.findall(text)


def parse_text(text: str) -> List[Formative]:
    """
    Parse every word of a sentence or paragraph.

    Raises the first word's IthkuilError; no partial result is returned.
    """
    words = split_words(text)
    logger.debug("Parsing %d words", len(words))
    return [parse_word(word) for word in words]
