"""
The gloss renderer: Formative in, abbreviated interlinear notation out.

A gloss is a list of slot groups joined with ``-``; the category labels
inside one group are joined with ``.``. Roots are written ``''m''``, plain
affixes ``'t'/1₂`` and referents ``[1m+2p]``. Categories holding their
unmarked value are left out unless ``show_defaults`` is set, so the plainest
word glosses as just its root.

Usage:
    from ithkuil.gloss import GlossOptions, gloss

    gloss(formative)                                 # ''m''-'ţř'/5₂-'t'/1₂
    gloss(formative, GlossOptions(long=True))
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ithkuil.affixes import (
    Affix,
    CaseAccessorAffix,
    CaseStackingAffix,
    CaStackingAffix,
    NumericAffix,
    PlainAffix,
    ReferentialAffix,
)
from ithkuil.categories import (
    AffixShortcut,
    AffixType,
    Category,
    CaseScope,
    Illocution,
    Mood,
    RootKind,
    Valence,
    WordType,
)
from ithkuil.formative import Formative, Root
from ithkuil.forms import AFFIX_SHORTCUT_AFFIXES, cn_index
from ithkuil.lexicon import EMPTY_LEXICON, Lexicon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlossOptions:
    """
    Rendering switches, passed per call.

    long: use long category names ("processual") instead of abbreviations
    show_defaults: also print categories holding their unmarked value
    markdown: wrap the root in ``**`` for bold display
    slot_delimiter / category_delimiter: separators between and within groups
    lexicon: display glosses for root and affix identifiers
    """
    long: bool = False
    show_defaults: bool = False
    markdown: bool = False
    slot_delimiter: str = "-"
    category_delimiter: str = "."
    lexicon: Lexicon = EMPTY_LEXICON


DEFAULT_OPTIONS = GlossOptions()


class _Renderer:

    def __init__(self, options: GlossOptions):
        self.options = options

    def label(self, value: Optional[Category], default: Optional[bool] = None) -> Optional[str]:
        """A category label, or None when it is unmarked and defaults are hidden."""
        if value is None:
            return None
        is_default = value.is_default if default is None else default
        if is_default and not self.options.show_defaults:
            return None
        return value.label(self.options.long)

    def group(self, *labels) -> str:
        return self.options.category_delimiter.join(label for label in labels if label)

    def ca(self, ca) -> str:
        return self.options.category_delimiter.join(ca.labels(self.options.show_defaults, self.options.long))

    # -----------------------------------------------------------------
    # --- Roots and affixes
    # -----------------------------------------------------------------

    def plain_affix(self, cs: str, degree: int, affix_type: Optional[AffixType], inline: Optional[str] = None) -> str:
        name = inline or self.options.lexicon.affix_gloss(cs) or cs
        output = f"'{name}'/{degree}"
        if affix_type is not None:
            output += affix_type.abbreviation
        return output

    def affix(self, affix: Affix) -> str:
        long = self.options.long
        if isinstance(affix, PlainAffix):
            return self.plain_affix(affix.cs, affix.degree, affix.type, affix.gloss)
        if isinstance(affix, CaStackingAffix):
            return "(" + (self.ca(affix.ca) or "{Ca}") + ")"
        if isinstance(affix, CaseStackingAffix):
            prefix = "case_stacking" if long else "case"
            return f"({prefix}:{affix.case.label(long)})"
        if isinstance(affix, CaseAccessorAffix):
            return f"({affix.mode.label(long)}:{affix.case.label(long)}){affix.type.abbreviation}"
        if isinstance(affix, ReferentialAffix):
            referents = affix.referents.label(long, self.options.show_defaults)
            return f"({referents}-{affix.case.label(long)})"
        if isinstance(affix, NumericAffix):
            return self.plain_affix(str(affix.number), affix.degree, affix.type)
        raise TypeError(f"not an affix: {affix!r}")

    def root(self, root: Root) -> str:
        if root.kind is RootKind.REFERENTIAL:
            output = root.referents.label(self.options.long, self.options.show_defaults)
        elif root.kind is RootKind.AFFIXUAL:
            output = self.plain_affix(root.cr, root.degree, root.affix_type, root.gloss)
        elif root.kind is RootKind.SUPPLETIVE:
            output = root.mode.label(self.options.long)
        else:
            name = root.gloss or self.options.lexicon.root_gloss(root.identifier) or root.identifier
            output = f"''{name}''"
        if self.options.markdown:
            output = f"**{output}**"
        return output

    # -----------------------------------------------------------------
    # --- Word types
    # -----------------------------------------------------------------

    def formative(self, formative: Formative) -> List[str]:
        affixual_root = formative.root.kind is RootKind.AFFIXUAL
        groups = [self.root(formative.root)]

        if affixual_root:
            groups.append(self.group(self.label(formative.version), self.label(formative.function)))
            groups.append(self.group(self.label(formative.context)))
        else:
            groups.append(self.group(self.label(formative.stem), self.label(formative.version)))
            groups.append(self.group(
                self.label(formative.function),
                self.label(formative.specification),
                self.label(formative.context),
            ))

        groups.extend(self.affix(affix) for affix in formative.slot_v_affixes)

        ca = self.ca(formative.ca)
        if not ca and formative.slot_v_affixes:
            ca = "{Ca}"
        groups.append(ca)

        groups.extend(self.affix(affix) for affix in formative.slot_vii_affixes)
        if formative.affix_shortcut is not AffixShortcut.NONE:
            cs, degree = AFFIX_SHORTCUT_AFFIXES[formative.affix_shortcut]
            groups.append(self.plain_affix(cs, degree, AffixType.T1))

        groups.append(self.group(
            self.label(formative.vn, default=formative.vn is Valence.MNO),
            self.label(formative.cn),
        ))

        if formative.relation.is_verbal:
            groups.append(self.verbal_ending(formative))
        else:
            groups.append(self.group(self.label(formative.relation), self.label(formative.case)))
        return groups

    def verbal_ending(self, formative: Formative) -> str:
        # Assertive words always show their validation so they never gloss
        # the same as a nominal word.
        if self.options.show_defaults:
            return self.group(
                self.label(formative.relation),
                self.label(formative.illocution),
                self.label(formative.validation),
            )
        if formative.illocution is Illocution.ASR:
            return formative.validation.label(self.options.long)
        return formative.illocution.label(self.options.long)

    def referential(self, formative: Formative) -> List[str]:
        groups = [self.root(formative.root)]
        has_second = formative.second_case is not None
        groups.append(self.label(formative.case, default=formative.case.is_default and not has_second))
        if formative.combination_specification is not None:
            groups.append(formative.combination_specification.label(self.options.long))
            groups.extend(self.affix(affix) for affix in formative.combination_affixes)
            if has_second:
                groups.append(formative.second_case.label(self.options.long))
        elif has_second:
            groups.append(formative.second_case.label(self.options.long))
            if formative.second_referents is not None:
                groups.append(formative.second_referents.label(self.options.long, self.options.show_defaults))
        groups.append(self.label(formative.essence))
        return groups

    def affixual(self, formative: Formative) -> List[str]:
        groups = [self.root(formative.root), self.label(formative.scope)]
        groups.extend(self.affix(affix) for affix in formative.other_affixes)
        groups.append(self.label(formative.other_scope, default=False))
        groups.append(self.label(formative.mode))
        return groups

    def suppletive(self, formative: Formative) -> List[str]:
        return [self.root(formative.root), self.label(formative.case)]

    def cn_pair(self, mood: Mood) -> Optional[str]:
        """Modular Cn stands for a mood and the case scope sharing its form."""
        if mood.is_default and not self.options.show_defaults:
            return None
        scope = tuple(CaseScope)[cn_index(mood)]
        return f"{mood.label(self.options.long)}/{scope.label(self.options.long)}"

    def modular(self, formative: Formative) -> List[str]:
        groups = [
            self.label(formative.modular_mode),
            self.label(formative.vn, default=formative.vn is Valence.MNO),
        ]
        if formative.cn is not None:
            groups.append(self.cn_pair(formative.cn))
        groups.append(self.label(formative.second_vn, default=False))
        groups.append(self.label(formative.final_vn, default=formative.final_vn is Valence.MNO))
        groups.append(self.label(formative.modular_scope, default=False))
        if not any(groups):
            groups = [Valence.MNO.label(self.options.long)]
        return groups


_WORD_TYPE_GROUPS = {
    WordType.FORMATIVE: _Renderer.formative,
    WordType.REFERENTIAL: _Renderer.referential,
    WordType.AFFIXUAL: _Renderer.affixual,
    WordType.SUPPLETIVE: _Renderer.suppletive,
    WordType.MODULAR: _Renderer.modular,
    WordType.MCS: lambda renderer, formative: [renderer.label(formative.cn, default=False)],
    WordType.REGISTER: lambda renderer, formative: [renderer.label(formative.register, default=False)],
    WordType.PARSING: lambda renderer, formative: [renderer.label(formative.parsing_stress, default=False)],
    WordType.BIAS: lambda renderer, formative: [renderer.label(formative.bias, default=False)],
    WordType.NUMERIC: lambda renderer, formative: [str(formative.root.number)],
}


def gloss(formative: Formative, options: Optional[GlossOptions] = None) -> str:
    """
    Render ``formative`` as a gloss string.

    Args:
        formative: Any assembled word
        options: Rendering switches; defaults to short labels without
            unmarked categories

    Returns:
        Groups joined with ``options.slot_delimiter``; empty groups are skipped
    """
    options = options or DEFAULT_OPTIONS
    groups = _WORD_TYPE_GROUPS[formative.word_type](_Renderer(options), formative)

    output = options.slot_delimiter.join(group for group in groups if group)
    logger.debug("Glossed %s word as %r", formative.word_type.value, output)
    return output
