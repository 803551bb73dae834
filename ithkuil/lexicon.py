"""
Root and affix display glosses.

The parser and generator treat roots and affixes as opaque identifiers (the
Cr or Cs consonants). A ``Lexicon`` maps those identifiers to the short
descriptions shown in glosses. Lexicon data is supplied by the caller,
usually as a JSON file:

    {
        "roots": {"m": "be.beautiful", "kš": "dog"},
        "affixes": {"r": "NEG", "t": "DCD"}
    }

Usage:
    from ithkuil.lexicon import load_lexicon

    lexicon = load_lexicon(Path("lexicon.json"))
    lexicon.root_gloss("kš")   # -> "dog"
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lexicon:
    """
    Read-only identifier-to-gloss maps. The maps are copied into mapping
    proxies on construction, so a Lexicon can key caches and sit inside
    other frozen records such as ``GlossOptions``.
    """
    roots: Mapping[str, str] = field(default_factory=dict)
    affixes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "roots", MappingProxyType(dict(self.roots)))
        object.__setattr__(self, "affixes", MappingProxyType(dict(self.affixes)))

    def __hash__(self):
        return hash((frozenset(self.roots.items()), frozenset(self.affixes.items())))

    def root_gloss(self, identifier: str) -> Optional[str]:
        return self.roots.get(identifier)

    def affix_gloss(self, identifier: str) -> Optional[str]:
        return self.affixes.get(identifier)

    def __len__(self):
        return len(self.roots) + len(self.affixes)


EMPTY_LEXICON = Lexicon()


def load_lexicon(path: Union[str, Path]) -> Lexicon:
    """
    Load a lexicon from a JSON file.

    Args:
        path: File holding an object with optional "roots" and "affixes"
            maps, each from identifier to display gloss

    Returns:
        Lexicon with both maps filled in

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid lexicon JSON
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with 'roots' and 'affixes'")

    sections = {}
    for name in ("roots", "affixes"):
        section = data.get(name, {})
        if not isinstance(section, dict):
            raise ValueError(f"{path}: '{name}' must map identifiers to glosses")
        sections[name] = {str(key): str(value) for key, value in section.items()}

    lexicon = Lexicon(**sections)
    logger.info(f"Loaded lexicon from {path}: {len(lexicon.roots)} roots, {len(lexicon.affixes)} affixes")
    return lexicon
