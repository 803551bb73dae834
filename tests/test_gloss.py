"""
Tests for the gloss renderer.
"""
import unittest

from ithkuil.affixes import (
    CaseAccessorAffix,
    CaseStackingAffix,
    CaStackingAffix,
    NumericAffix,
    PlainAffix,
    ReferentialAffix,
)
from ithkuil.ca import Ca
from ithkuil.categories import (
    AffixShortcut,
    AffixType,
    Aspect,
    Case,
    Configuration,
    Function,
    Perspective,
    Relation,
)
from ithkuil.formative import Root, build_formative
from ithkuil.gloss import GlossOptions, gloss
from ithkuil.lexicon import Lexicon
from ithkuil.parser import parse_word
from ithkuil.referents import ReferentList

M = Root.normal("m")


class TestFormativeGloss(unittest.TestCase):

    def test_defaults_are_hidden(self):
        """Tests that a word with only unmarked categories glosses as its root."""
        self.assertEqual(gloss(build_formative(root=M)), "''m''")
        self.assertEqual(gloss(parse_word("malëuţřait")), "''m''-'ţř'/5₂-'t'/1₂")

    def test_verbal_ending(self):
        """Tests that verbal words always show their validation or illocution."""
        self.assertEqual(gloss(parse_word("wam")), "''m''-OBS")
        self.assertEqual(gloss(parse_word("wamái")), "''m''-DIR")

    def test_marked_categories(self):
        """Tests relation, case, function and Cn labels."""
        self.assertEqual(gloss(parse_word("hlama")), "''m''-T1")
        self.assertEqual(gloss(parse_word("wama'a")), "''m''-PRN")
        self.assertEqual(gloss(parse_word("muhla")), "''m''-DYN-CCA")

    def test_empty_ca_before_slot_v(self):
        """Tests that a default Ca is written {Ca} when slot V affixes precede it."""
        self.assertEqual(gloss(parse_word("muţřëull")), "''m''-DYN-'ţř'/5₂-{Ca}")

    def test_ca_labels(self):
        """Tests that marked Ca components are joined in one group."""
        formative = build_formative(root=M, ca=Ca(configuration=Configuration.MSS, perspective=Perspective.G))
        self.assertEqual(gloss(formative), "''m''-MSS.G")

    def test_special_affixes(self):
        """Tests the notation of Ca-stacking, case-stacking and case-accessor affixes."""
        formative = build_formative(
            root=M,
            slot_vii_affixes=(
                CaStackingAffix(Ca(perspective=Perspective.A)),
                CaseStackingAffix(Case.PRN),
                CaseAccessorAffix(Case.GEN, AffixType.T3),
            ),
        )
        self.assertEqual(gloss(formative), "''m''-(A)-(case:PRN)-(acc:GEN)₃")

    def test_affix_shortcut(self):
        """Tests that an affix shortcut is glossed as the affix it stands for."""
        formative = build_formative(root=M, affix_shortcut=AffixShortcut.NEG4)
        self.assertEqual(gloss(formative), "''m''-'r'/4₁")

    def test_vn(self):
        """Tests that a marked Vn is shown."""
        self.assertEqual(gloss(build_formative(root=M, vn=Aspect.HAB)), "''m''-HAB")

    def test_affixual_root(self):
        """Tests that an affixual root shows version and function together."""
        formative = build_formative(root=Root.affixual("r", 4), function=Function.DYN)
        self.assertEqual(gloss(formative), "'r'/4-DYN")

    def test_referential_and_numeric_affixes(self):
        """Tests the notation of referential and numeric affixes."""
        formative = build_formative(
            root=M,
            slot_vii_affixes=(ReferentialAffix(ReferentList.parse("l"), Case.ERG), NumericAffix(12, 3)),
        )
        self.assertEqual(gloss(formative), "''m''-([1m]-ERG)-'12'/3₁")


class TestAdjunctGloss(unittest.TestCase):

    def test_referential(self):
        """Tests referent labels, cases and essence."""
        self.assertEqual(gloss(parse_word("la")), "[1m]")
        self.assertEqual(gloss(parse_word("lawi")), "[1m]-THM-AFF")
        self.assertEqual(gloss(parse_word("ëlá")), "[1m]-RPV")

    def test_affixual(self):
        """Tests affixual adjunct labels."""
        self.assertEqual(gloss(parse_word("ar")), "'r'/1₁")
        self.assertEqual(gloss(parse_word("ará")), "'r'/1₁-{Stm}")

    def test_dual_and_combination_referentials(self):
        """Tests the second referent and the combination specification, affixes and case."""
        self.assertEqual(gloss(parse_word("lawis")), "[1m]-THM-AFF-[2m]")
        self.assertEqual(gloss(parse_word("laxtaloi")), "[1m]-THM-CTE-'l'/1₁-OGN")
        self.assertEqual(gloss(parse_word("lax")), "[1m]-BSC")

    def test_suppletive(self):
        """Tests that suppletive heads gloss as their mode."""
        self.assertEqual(gloss(parse_word("hlawe")), "CAR-THM-ABS")
        self.assertEqual(gloss(parse_word("hna")), "NAM")

    def test_multiple_affixual(self):
        """Tests the Cz scope, further affixes and their own scope."""
        self.assertEqual(gloss(parse_word("tahwalor")), "'t'/1₁-{Form}-'l'/1₁-'r'/7₁")
        self.assertEqual(gloss(parse_word("ëta'ahlalu")), "'t'/1₁-{VIIDom}-'l'/1₁-{VSub}")

    def test_single_slot_adjuncts(self):
        """Tests that one-category adjuncts always show their value."""
        cases = {
            "lf": "ACC",
            "ha": "DSV",
            "hre": "SUB",
            "a'": "MONO",
            "12": "12",
        }
        for word, expected in cases.items():
            with self.subTest(word=word):
                self.assertEqual(gloss(parse_word(word)), expected)

    def test_modular(self):
        """Tests the modular mode, the mood and case scope pair and the final slot."""
        self.assertEqual(gloss(parse_word("o")), "REG")
        self.assertEqual(gloss(parse_word("wahlei")), "{Parent}-SUB/CCA-REP")
        self.assertEqual(gloss(parse_word("ahloní")), "SUB/CCA-DEM-{OAdj}")
        self.assertEqual(gloss(parse_word("aha")), "MNO")


class TestGlossOptions(unittest.TestCase):

    def test_show_defaults(self):
        """Tests that every category is printed when asked."""
        options = GlossOptions(show_defaults=True)
        self.assertEqual(
            gloss(build_formative(root=M), options),
            "''m''-S1.PRC-STA.BSC.EXS-CSL.UPX.DEL.M.NRM-MNO.CCN-NOM.THM",
        )
        self.assertEqual(
            gloss(build_formative(root=M, relation=Relation.VRB), options),
            "''m''-S1.PRC-STA.BSC.EXS-CSL.UPX.DEL.M.NRM-MNO.FAC-VRB.ASR.OBS",
        )

    def test_long(self):
        """Tests long category names."""
        self.assertEqual(gloss(parse_word("wamái"), GlossOptions(long=True)), "''m''-directive")
        self.assertEqual(gloss(parse_word("ar"), GlossOptions(long=True)), "'r'/1₁")

    def test_markdown(self):
        """Tests that the root is wrapped for bold display."""
        self.assertEqual(gloss(parse_word("malëuţřait"), GlossOptions(markdown=True)), "**''m''**-'ţř'/5₂-'t'/1₂")

    def test_delimiters(self):
        """Tests custom slot and category delimiters."""
        options = GlossOptions(slot_delimiter=" ", category_delimiter="/")
        formative = build_formative(root=M, function=Function.DYN, relation=Relation.T1)
        self.assertEqual(gloss(formative, options), "''m'' DYN T1")

        formative = build_formative(root=M, relation=Relation.T1, case=Case.ERG)
        self.assertEqual(gloss(formative, options), "''m'' T1/ERG")

    def test_lexicon(self):
        """Tests that lexicon glosses replace identifiers."""
        lexicon = Lexicon(roots={"m": "be.beautiful"}, affixes={"t": "DCD", "r": "NEG"})
        options = GlossOptions(lexicon=lexicon)
        self.assertEqual(gloss(parse_word("malëuţřait"), options), "''be.beautiful''-'ţř'/5₂-'DCD'/1₂")
        self.assertEqual(gloss(build_formative(root=M, affix_shortcut=AffixShortcut.NEG4), options),
                         "''be.beautiful''-'NEG'/4₁")

    def test_inline_glosses_win(self):
        """Tests that glosses carried by the root or affix are preferred."""
        lexicon = Lexicon(roots={"m": "be.beautiful"})
        formative = build_formative(
            root=Root.normal("m", gloss="beauty"),
            slot_vii_affixes=(PlainAffix("t", 1, AffixType.T2, gloss="DCD"),),
        )
        self.assertEqual(gloss(formative, GlossOptions(lexicon=lexicon)), "''beauty''-'DCD'/1₂")


if __name__ == '__main__':
    unittest.main()
