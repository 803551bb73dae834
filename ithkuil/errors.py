"""
Error types raised by the New Ithkuil parsing pipeline.

Every stage of the pipeline raises a subclass of its own stage base, and all
of them derive from ``IthkuilError`` (itself a ``ValueError``), so callers can
catch as broadly or as narrowly as they need.
"""
from typing import Optional


class IthkuilError(ValueError):
    """Base class for every parse or construction failure."""


# -----------------------------------------------------------------
# --- Tokenizer
# -----------------------------------------------------------------

class TokenizeError(IthkuilError):
    """The input could not be split into phonological units."""


class InvalidCharacter(TokenizeError):
    def __init__(self, character: str, position: int, word: str = ""):
        self.character = character
        self.position = position
        self.word = word
        super().__init__(
            f"Invalid character {character!r} at position {position} in {word!r}"
        )


class MalformedCluster(TokenizeError):
    def __init__(self, cluster: str, position: int, reason: str = ""):
        self.cluster = cluster
        self.position = position
        self.reason = reason
        message = f"Malformed cluster {cluster!r} at position {position}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidStress(TokenizeError):
    def __init__(self, word: str, reason: str):
        self.word = word
        self.reason = reason
        super().__init__(f"Invalid stress in {word!r}: {reason}")


# -----------------------------------------------------------------
# --- Segmenter
# -----------------------------------------------------------------

class SegmentError(IthkuilError):
    """The token sequence matches no word template."""


class UnrecognizedStructure(SegmentError):
    def __init__(self, reason: str, position: Optional[int] = None, word: str = ""):
        self.reason = reason
        self.position = position
        self.word = word
        message = f"Unrecognized structure: {reason}"
        if position is not None:
            message += f" (token {position})"
        if word:
            message += f" in {word!r}"
        super().__init__(message)


# -----------------------------------------------------------------
# --- Resolver
# -----------------------------------------------------------------

class ResolveError(IthkuilError):
    """A slot's surface form maps to no category value."""


class UnknownForm(ResolveError):
    def __init__(self, slot_kind, form: str, reason: str = "", position: Optional[int] = None):
        self.slot_kind = slot_kind
        self.form = form
        self.reason = reason
        self.position = position
        label = getattr(slot_kind, "name", slot_kind)
        message = f"Unknown form {form!r} for slot {label}"
        if position is not None:
            message += f" (token {position})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


# -----------------------------------------------------------------
# --- Assembler
# -----------------------------------------------------------------

class AssembleError(IthkuilError):
    """Resolved slot values do not form a valid word."""


class MissingSlot(AssembleError):
    def __init__(self, slot_kind, word_type):
        self.slot_kind = slot_kind
        self.word_type = word_type
        super().__init__(
            f"Missing mandatory slot {slot_kind.name} for {word_type.name.lower()} words"
        )


class DuplicateSlot(AssembleError):
    def __init__(self, slot_kind):
        self.slot_kind = slot_kind
        super().__init__(f"Slot {slot_kind.name} given more than once")


class IncompatibleCategories(AssembleError):
    def __init__(self, first: str, second: str, reason: str = ""):
        self.first = first
        self.second = second
        self.pair = (first, second)
        self.reason = reason
        message = f"Incompatible categories {first} x {second}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
