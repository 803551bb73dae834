"""
Tests for the text generator.
"""
import unittest

from ithkuil.affixes import PlainAffix
from ithkuil.ca import Ca
from ithkuil.categories import (
    AffixType,
    AffixualMode,
    AffixualScope,
    Aspect,
    Bias,
    Case,
    CaseScope,
    Configuration,
    Context,
    Effect,
    Essence,
    Function,
    Illocution,
    Level,
    ModularMode,
    ModularScope,
    Mood,
    ParsingStress,
    Perspective,
    Phase,
    Register,
    Relation,
    Specification,
    SuppletiveMode,
    Valence,
    WordType,
)
from ithkuil.formative import Root, build_formative
from ithkuil.forms import CA_SHORTCUT_VALUES
from ithkuil.generator import generate, uses_ca_shortcut, uses_cn_shortcut
from ithkuil.parser import parse_word
from ithkuil.referents import ReferentList

M = Root.normal("m")
TR5 = PlainAffix("ţř", 5, AffixType.T2)
T1 = PlainAffix("t", 1, AffixType.T2)


class TestFormativeGeneration(unittest.TestCase):

    def test_plainest_word(self):
        """Tests that the default vowel is kept only to carry stress."""
        self.assertEqual(generate(build_formative(root=M)), "wama")
        self.assertEqual(generate(build_formative(root=M, relation=Relation.VRB)), "wam")

    def test_canonical_spelling_of_parsed_word(self):
        """Tests that a long-form word comes back in its shortcut spelling."""
        formative = parse_word("malëuţřait")
        self.assertEqual(generate(formative), "wamëuţřait")
        self.assertEqual(parse_word("wamëuţřait"), formative)
        self.assertEqual(parse_word("malëuţřaita"), formative)

    def test_illocution(self):
        """Tests that non-assertive illocutions are written in Vk with ultimate stress."""
        formative = build_formative(root=M, relation=Relation.VRB, illocution=Illocution.DIR)
        self.assertEqual(generate(formative), "wamái")

    def test_slot_v_in_ca_shortcut(self):
        """Tests the glottal stop that closes slot V in a Ca-shortcut formative."""
        formative = build_formative(root=M, slot_v_affixes=(TR5,), slot_vii_affixes=(T1,))
        self.assertEqual(generate(formative), "wamë'uţřait")

    def test_slot_v_long_form(self):
        """Tests consonant-first slot V affixes before a geminated Ca."""
        formative = build_formative(root=M, function=Function.DYN, slot_v_affixes=(TR5,))
        self.assertFalse(uses_ca_shortcut(formative))
        self.assertEqual(generate(formative), "muţřëull")

    def test_cn_shortcut(self):
        """Tests that a marked Cn takes the Cn shortcut when Ca cannot be folded."""
        formative = build_formative(root=M, function=Function.DYN, case_scope=CaseScope.CCA)
        self.assertTrue(uses_cn_shortcut(formative))
        self.assertEqual(generate(formative), "muhla")
        self.assertEqual(parse_word("mulahl"), formative)

    def test_vn_cn_in_ca_shortcut(self):
        """Tests that VnCn follows the affixes in a Ca-shortcut formative."""
        formative = build_formative(root=M, case_scope=CaseScope.CCA)
        self.assertEqual(generate(formative), "wamahl")

    def test_high_case(self):
        """Tests the glottal stop of a high case."""
        self.assertEqual(generate(build_formative(root=M, case=Case.PRN)), "wama'a")

    def test_concatenated(self):
        """Tests concatenated formatives; a monosyllable reads with final stress."""
        self.assertEqual(generate(build_formative(root=M, relation=Relation.T1)), "hlama")
        high = build_formative(root=M, relation=Relation.T1, case=Case.PRN)
        self.assertEqual(generate(high), "hlam")
        self.assertEqual(parse_word("hlamá"), high)


class TestAdjunctGeneration(unittest.TestCase):

    def test_referential(self):
        """Tests referentials, their second case and representative essence."""
        root = Root.referential("l")
        self.assertEqual(generate(build_formative(WordType.REFERENTIAL, root=root)), "la")
        self.assertEqual(generate(build_formative(WordType.REFERENTIAL, root=root, second_case=Case.AFF)), "lawi")
        self.assertEqual(generate(build_formative(WordType.REFERENTIAL, root=root, essence=Essence.RPV)), "ëlá")

    def test_affixual(self):
        """Tests affixual adjuncts in both modes."""
        root = Root.affixual("r", 1, AffixType.T1)
        self.assertEqual(generate(build_formative(WordType.AFFIXUAL, root=root)), "ar")
        concatenated = build_formative(WordType.AFFIXUAL, root=root, mode=AffixualMode.CONCATENATED)
        self.assertEqual(generate(concatenated), "ará")

    def test_dual_referential(self):
        """Tests a second case followed by a second referent."""
        formative = build_formative(
            WordType.REFERENTIAL,
            root=Root.referential("l"),
            second_case=Case.AFF,
            second_referents=ReferentList.parse("s"),
        )
        self.assertEqual(generate(formative), "lawis")
        high = formative.replace(second_case=Case.CPS)
        self.assertEqual(generate(high), "layis")

    def test_combination_referential(self):
        """Tests the Cx consonant, affixes and second case of a combination referential."""
        formative = build_formative(
            WordType.REFERENTIAL,
            root=Root.referential("l"),
            combination_specification=Specification.CTE,
            combination_affixes=(PlainAffix("l", 1),),
            second_case=Case.OGN,
        )
        self.assertEqual(generate(formative), "laxtaloi")
        bare = build_formative(WordType.REFERENTIAL, root=Root.referential("l"), combination_specification=Specification.BSC)
        self.assertEqual(generate(bare), "lax")
        self.assertEqual(generate(bare.replace(essence=Essence.RPV)), "ëláx")

    def test_suppletive_words(self):
        """Tests suppletive adjuncts and suppletive-headed referentials."""
        referential = build_formative(WordType.REFERENTIAL, root=Root.suppletive(SuppletiveMode.CAR), second_case=Case.ABS)
        self.assertEqual(generate(referential), "hlawe")
        adjunct = build_formative(WordType.SUPPLETIVE, root=Root.suppletive(SuppletiveMode.NAM))
        self.assertEqual(generate(adjunct), "hna")

    def test_multiple_affixual(self):
        """Tests Cz and the schwa that hl and hr need."""
        root = Root.affixual("t", 1, AffixType.T1)
        formative = build_formative(
            WordType.AFFIXUAL,
            root=root,
            scope=AffixualScope.FORMATIVE,
            other_affixes=(PlainAffix("l", 1), PlainAffix("r", 7)),
        )
        self.assertEqual(generate(formative), "tahwalor")

        formative = build_formative(
            WordType.AFFIXUAL,
            root=root,
            scope=AffixualScope.VIIDOM,
            other_affixes=(PlainAffix("l", 1),),
            other_scope=AffixualScope.VSUB,
        )
        self.assertEqual(generate(formative), "ëta'ahlalu")
        self.assertEqual(generate(formative.replace(mode=AffixualMode.CONCATENATED)), "ëta'ahlalú")

    def test_single_slot_adjuncts(self):
        """Tests bias, register, mood/case-scope, parsing and numeric adjuncts."""
        self.assertEqual(generate(build_formative(WordType.BIAS, bias=Bias.ACC)), "lf")
        self.assertEqual(generate(build_formative(WordType.REGISTER, register=Register.DSV)), "ha")
        self.assertEqual(generate(build_formative(WordType.MCS, mood=Mood.SUB)), "hre")
        self.assertEqual(generate(build_formative(WordType.MCS, case_scope=CaseScope.CCN)), "hrai")
        self.assertEqual(generate(build_formative(WordType.PARSING, parsing_stress=ParsingStress.MONOSYLLABIC)), "a'")
        self.assertEqual(generate(build_formative(WordType.NUMERIC, root=Root.numeric(12))), "12")

    def test_modular(self):
        """Tests the modular adjunct shapes and the stress of a scope."""
        self.assertEqual(generate(build_formative(WordType.MODULAR, vn=Aspect.REG)), "o")
        formative = build_formative(
            WordType.MODULAR,
            modular_mode=ModularMode.PARENT,
            vn=Valence.MNO,
            mood=Mood.SUB,
            final_vn=Phase.REP,
        )
        self.assertEqual(generate(formative), "wahlei")
        formative = build_formative(
            WordType.MODULAR,
            vn=Valence.MNO,
            mood=Mood.SUB,
            second_vn=Valence.DEM,
            modular_scope=ModularScope.OVERADJ,
        )
        self.assertEqual(generate(formative), "ahloní")


class TestRoundTrip(unittest.TestCase):

    CANONICAL_WORDS = (
        "wama",
        "wam",
        "wamái",
        "wamëuţřait",
        "wamë'uţřait",
        "muţřëull",
        "muhla",
        "wamahl",
        "wama'a",
        "hlama",
        "hlam",
        "la",
        "lawi",
        "ëlá",
        "ar",
        "ará",
        "lawis",
        "layis",
        "laxtaloi",
        "ëláx",
        "hlawe",
        "hna",
        "tahwalor",
        "ëta'ahlalu",
        "lf",
        "ha",
        "hre",
        "a'",
        "12",
        "o",
        "aha",
        "wahlei",
        "ahloní",
    )

    def test_canonical_words_survive(self):
        """Tests that canonical spellings generate back unchanged."""
        for word in self.CANONICAL_WORDS:
            with self.subTest(word=word):
                self.assertEqual(generate(parse_word(word)), word)

    def assert_round_trip(self, formative):
        word = generate(formative)
        self.assertEqual(parse_word(word), formative, word)

    def test_every_case(self):
        """Tests that every case survives generation and parsing, plain and concatenated."""
        for case in Case:
            with self.subTest(case=case.abbreviation):
                self.assert_round_trip(build_formative(root=M, case=case))
                self.assert_round_trip(build_formative(root=M, relation=Relation.T2, case=case))

    def test_every_vn(self):
        """Tests every value of every Vn series, with a plain and a marked Cn."""
        for category in (Valence, Phase, Effect, Level, Aspect):
            for vn in category:
                with self.subTest(vn=vn.abbreviation):
                    self.assert_round_trip(build_formative(root=M, vn=vn))
                    self.assert_round_trip(build_formative(root=M, function=Function.DYN, vn=vn, case_scope=CaseScope.CCS))
                    self.assert_round_trip(build_formative(root=M, relation=Relation.VRB, vn=vn, mood=Mood.HYP))

    def test_every_ca_configuration(self):
        """Tests every configuration in both the shortcut and the long form."""
        for configuration in Configuration:
            ca = Ca(configuration=configuration)
            with self.subTest(configuration=configuration.abbreviation):
                self.assert_round_trip(build_formative(root=M, ca=ca))
                self.assert_round_trip(build_formative(root=M, function=Function.DYN, ca=ca))
                self.assert_round_trip(build_formative(root=M, ca=ca, slot_v_affixes=(TR5,)))

    def test_every_ca_shortcut(self):
        """Tests that each Ca shortcut value reads back, folded or spelt out."""
        for shortcut, ca in CA_SHORTCUT_VALUES.items():
            with self.subTest(shortcut=shortcut.name):
                formative = build_formative(root=M, ca=ca)
                self.assertTrue(uses_ca_shortcut(formative))
                self.assert_round_trip(formative)
                self.assert_round_trip(build_formative(root=M, ca=ca, slot_vii_affixes=(T1,)))
                self.assert_round_trip(build_formative(root=M, context=Context.AMG, ca=ca))

    def test_multi_referent_roots(self):
        """Tests referentials and referential-root formatives over several referents."""
        lists = [
            ReferentList.of("1m", "2m"),
            ReferentList.of("1m", "2m", "ma"),
            ReferentList.of("Rdp", "1m"),
            ReferentList.of("Obv", "2p", perspective=Perspective.G),
            ReferentList.of("2p", "mi", perspective=Perspective.A),
        ]
        for referents in lists:
            with self.subTest(referents=referents.label()):
                self.assert_round_trip(build_formative(WordType.REFERENTIAL, root=Root.referential(referents)))
                self.assert_round_trip(build_formative(
                    WordType.REFERENTIAL,
                    root=Root.referential(referents),
                    case=Case.ERG,
                    second_case=Case.DAT,
                ))
                self.assert_round_trip(build_formative(root=Root.referential(referents), case=Case.ABS))


if __name__ == '__main__':
    unittest.main()
