"""
Tests for the slot form tables and the affix codec.
"""
import unittest

from ithkuil import forms
from ithkuil.affixes import (
    CaseAccessorAffix,
    CaseStackingAffix,
    CaStackingAffix,
    NumericAffix,
    PlainAffix,
    ReferentialAffix,
    check_consonant_cluster,
    check_cs,
    decode_affix,
    encode_affix,
)
from ithkuil.ca import Ca
from ithkuil.categories import (
    AffixType,
    Aspect,
    CaseAccessorMode,
    CaShortcut,
    Case,
    CaseScope,
    Context,
    Extension,
    Function,
    Illocution,
    Level,
    Mood,
    Perspective,
    Phase,
    Relation,
    RootKind,
    Specification,
    Stem,
    Validation,
    Version,
    AffixualScope,
)
from ithkuil.phonology import HForm, Stress, VowelForm
from ithkuil.referents import ReferentList


class TestCaseForms(unittest.TestCase):

    def test_every_case_has_one_slot(self):
        """Tests that the case table holds each case exactly once."""
        cases = [case for case in forms.CASE_SLOTS if case is not None]
        self.assertEqual(len(cases), len(Case))
        self.assertEqual(set(cases), set(Case))

    def test_high_case_positions(self):
        """Tests the positions of the cases written with a glottal stop."""
        self.assertEqual(forms.case_index(Case.PRN), 36)
        self.assertEqual(forms.case_index(Case.RLT), 44)
        self.assertEqual(forms.case_index(Case.VOC), 53)
        self.assertEqual(forms.case_index(Case.NAV), 62)
        self.assertEqual(forms.case_index(Case.PLM), 71)
        self.assertTrue(forms.is_high_case(Case.PRN))
        self.assertFalse(forms.is_high_case(Case.SIT))

    def test_case_vowels(self):
        """Tests Vc spellings of low and high cases."""
        self.assertEqual(forms.case_vowel(Case.THM), VowelForm(1, 1))
        self.assertEqual(forms.case_vowel(Case.PRN), VowelForm(1, 1, True))
        self.assertEqual(forms.case_vowel(Case.PRN, glottal=False), VowelForm(1, 1))
        self.assertEqual(forms.case_vowel(Case.ALL), VowelForm(3, 3, True))

    def test_case_round_trip(self):
        """Tests that every case reads back from its vowel, with or without the glottal stop."""
        for case in Case:
            with self.subTest(case=case):
                self.assertEqual(forms.case_from_vowel(forms.case_vowel(case)), case)
                vowel = forms.case_vowel(case, glottal=False)
                self.assertEqual(forms.case_from_vowel(vowel, high=forms.is_high_case(case)), case)

    def test_empty_case_positions(self):
        """Tests that vowel positions without a case are rejected."""
        with self.assertRaises(ValueError):
            forms.case_from_vowel(VowelForm(1, 8, True))
        with self.assertRaises(ValueError):
            forms.case_from_vowel(VowelForm(1, 0))


class TestVrVv(unittest.TestCase):

    def test_vr(self):
        """Tests function/specification/context in Vr."""
        self.assertEqual(forms.vr_vowel(Function.DYN, Specification.BSC, Context.EXS), VowelForm(1, 9))
        self.assertEqual(forms.read_vr(VowelForm(4, 2)), (Function.STA, Specification.CTE, Context.AMG))
        with self.assertRaises(ValueError):
            forms.read_vr(VowelForm(1, 5))

    def test_vv_root_kinds(self):
        """Tests that the Vv degree tells the root kind."""
        reading = forms.read_vv(VowelForm(1, 7))
        self.assertEqual((reading.root_kind, reading.stem, reading.version), (RootKind.NORMAL, Stem.S0, Version.PRC))

        reading = forms.read_vv(VowelForm(2, 0))
        self.assertEqual((reading.root_kind, reading.version), (RootKind.REFERENTIAL, Version.CPT))

        reading = forms.read_vv(VowelForm(3, 5))
        self.assertEqual((reading.root_kind, reading.version, reading.function),
                         (RootKind.AFFIXUAL, Version.PRC, Function.DYN))

        with self.assertRaises(ValueError):
            forms.read_vv(VowelForm(3, 0))

    def test_ca_shortcuts(self):
        """Tests the Ca values a Cc + Vv pair can stand for."""
        self.assertEqual(forms.ca_shortcut_for(Ca()), CaShortcut.DEFAULT)
        self.assertEqual(forms.ca_shortcut_for(Ca(perspective=Perspective.G)), CaShortcut.G)
        self.assertIsNone(forms.ca_shortcut_for(Ca(perspective=Perspective.G, extension=Extension.ICP)))
        self.assertEqual(forms.ca_shortcut_from("y", 2), CaShortcut.RPV)


class TestRelation(unittest.TestCase):

    def test_cc(self):
        """Tests Cc readings."""
        self.assertEqual(forms.read_cc("hw"), (None, Relation.T2))
        self.assertEqual(forms.read_cc("hl"), ("w", Relation.T1))
        self.assertEqual(forms.cc_form("y", None), "y")
        with self.assertRaises(ValueError):
            forms.read_cc("x")

    def test_relation_for(self):
        """Tests that stress and concatenation give the relation."""
        self.assertEqual(forms.relation_for(None, Stress.ULTIMATE), (Relation.VRB, False))
        self.assertEqual(forms.relation_for(None, Stress.MONOSYLLABIC), (Relation.VRB, False))
        self.assertEqual(forms.relation_for(None, Stress.ANTEPENULTIMATE), (Relation.FRM, False))
        self.assertEqual(forms.relation_for(Relation.T2, Stress.ULTIMATE), (Relation.T2, True))
        with self.assertRaises(ValueError):
            forms.relation_for(Relation.T1, Stress.ANTEPENULTIMATE)

    def test_stress_for(self):
        """Tests the stress each relation is written with."""
        self.assertEqual(forms.stress_for(Relation.FRM), Stress.ANTEPENULTIMATE)
        self.assertEqual(forms.stress_for(Relation.T1, high_case=True), Stress.ULTIMATE)
        self.assertEqual(forms.stress_for(Relation.T1), Stress.PENULTIMATE)


class TestVnCnVk(unittest.TestCase):

    def test_vn(self):
        """Tests Vn forms for the non-aspectual and aspectual tables."""
        self.assertEqual(forms.vn_vowel(Phase.ITR), VowelForm(2, 2))
        self.assertEqual(forms.vn_vowel(Aspect.HAB), VowelForm(1, 3))
        self.assertEqual(forms.read_vn(VowelForm(1, 3), aspectual=True), Aspect.HAB)
        self.assertEqual(forms.read_vn(VowelForm(4, 9), aspectual=False), Level.MAX)

    def test_cn(self):
        """Tests Cn h-forms."""
        self.assertEqual(forms.cn_form(CaseScope.CCA, False).text, "hl")
        self.assertEqual(forms.cn_form(Mood.SUB, True).text, "hw")
        self.assertEqual(forms.read_cn(HForm.parse("hr"), verbal=True), Mood.ASM)
        self.assertTrue(forms.is_cn_shortcut_form(HForm.parse("hl")))
        self.assertFalse(forms.is_cn_shortcut_form(HForm.parse("h")))

    def test_vk(self):
        """Tests Vk forms for illocution and validation."""
        self.assertEqual(forms.vk_vowel(Illocution.ASR, Validation.REC), VowelForm(1, 2))
        self.assertEqual(forms.vk_vowel(Illocution.DIR, None), VowelForm(2, 1))
        self.assertEqual(forms.read_vk(VowelForm(1, 3)), (Illocution.ASR, Validation.PUP))
        with self.assertRaises(ValueError):
            forms.read_vk(VowelForm(2, 5))
        with self.assertRaises(ValueError):
            forms.read_vk(VowelForm(1, 1, True))

    def test_vs_and_second_case(self):
        """Tests affixual scope vowels and the referential second-case glide."""
        self.assertEqual(forms.read_vs(VowelForm(1, 9)), AffixualScope.VSUB)
        with self.assertRaises(ValueError):
            forms.read_vs(VowelForm(2, 1))
        self.assertEqual(forms.second_case_glide(Case.THM), "w")
        self.assertEqual(forms.second_case_glide(Case.PRN), "y")


class TestAffixCodec(unittest.TestCase):

    def test_plain_affix(self):
        """Tests that plain affixes take degree and type from Vx."""
        self.assertEqual(decode_affix(VowelForm(2, 5), "ţř"), PlainAffix("ţř", 5, AffixType.T2))
        self.assertEqual(decode_affix(VowelForm(1, 0), "t"), PlainAffix("t", 0, AffixType.T1))
        self.assertEqual(encode_affix(PlainAffix("t", 1, AffixType.T2)), (VowelForm(2, 1), "t"))

    def test_glottal_stop_ignored(self):
        """Tests that a glottal stop on Vx does not change the affix."""
        self.assertEqual(decode_affix(VowelForm(1, 1, True), "t"), PlainAffix("t", 1))

    def test_ca_stacking(self):
        """Tests that the series-4 degree-0 vowel stacks a Ca."""
        self.assertEqual(decode_affix(VowelForm(4, 0), "r"), CaStackingAffix(Ca(perspective=Perspective.G)))
        self.assertEqual(encode_affix(CaStackingAffix(Ca())), (VowelForm(4, 0), "l"))
        with self.assertRaises(ValueError):
            decode_affix(VowelForm(4, 0), "lq")

    def test_case_stacking(self):
        """Tests lw/ly case-stacking affixes."""
        self.assertEqual(decode_affix(VowelForm(1, 1), "lw"), CaseStackingAffix(Case.THM))
        self.assertEqual(decode_affix(VowelForm(1, 1), "ly"), CaseStackingAffix(Case.PRN))
        self.assertEqual(encode_affix(CaseStackingAffix(Case.PRN)), (VowelForm(1, 1), "ly"))

    def test_case_accessors(self):
        """Tests case accessors and inverse accessors."""
        self.assertEqual(decode_affix(VowelForm(2, 3), "sw"), CaseAccessorAffix(Case.GEN))
        self.assertEqual(decode_affix(VowelForm(1, 1), "zw"), CaseAccessorAffix(Case.THM, AffixType.T2))
        self.assertEqual(
            decode_affix(VowelForm(1, 1), "šy"),
            CaseAccessorAffix(Case.PRN, AffixType.T1, CaseAccessorMode.INVERSE),
        )
        accessor = CaseAccessorAffix(Case.ALL, AffixType.T3, CaseAccessorMode.INVERSE)
        self.assertEqual(encode_affix(accessor), (VowelForm(3, 3), "jy"))
        self.assertEqual(decode_affix(*encode_affix(accessor)), accessor)

    def test_referential_affix(self):
        """Tests that series-4 vowels past degree 0 read a referent cluster and a case."""
        affix = decode_affix(VowelForm(4, 3), "ls")
        self.assertEqual(affix, ReferentialAffix(ReferentList.of("1m", "2m"), Case.ABS))
        self.assertEqual(encode_affix(affix), (VowelForm(4, 3), "ls"))
        self.assertEqual(encode_affix(ReferentialAffix(ReferentList.parse("l"))), (VowelForm(4, 1), "l"))

    def test_referential_affix_cases(self):
        """Tests that only the first nine cases have a referential affix vowel."""
        for case in tuple(Case)[:9]:
            with self.subTest(case=case.abbreviation):
                affix = ReferentialAffix(ReferentList.parse("s"), case)
                self.assertEqual(decode_affix(*encode_affix(affix)), affix)
        with self.assertRaises(ValueError):
            ReferentialAffix(ReferentList.parse("s"), Case.PRN)
        with self.assertRaises(ValueError):
            ReferentialAffix(ReferentList.parse("ll"))

    def test_numeric_affix(self):
        """Tests that a Cs written in digits is a numeric affix."""
        self.assertEqual(decode_affix(VowelForm(1, 3), "12"), NumericAffix(12, 3))
        self.assertEqual(decode_affix(VowelForm(3, 1), "7"), NumericAffix(7, 1, AffixType.T3))
        self.assertEqual(encode_affix(NumericAffix(12, 3)), (VowelForm(1, 3), "12"))
        with self.assertRaises(ValueError):
            decode_affix(VowelForm(4, 1), "12")
        with self.assertRaises(ValueError):
            NumericAffix(-1, 1)

    def test_reserved_cs(self):
        """Tests that plain affixes refuse the consonants other affix kinds use."""
        for cs in ("lw", "ly", "sw", "zy", "jw", "hl", "wr", "yk", "tt", "rr", "", "t1"):
            with self.subTest(cs=cs):
                with self.assertRaises(ValueError):
                    PlainAffix(cs, 1)
        self.assertEqual(check_cs("st"), "st")
        with self.assertRaises(ValueError):
            check_consonant_cluster("ma")

    def test_invalid_affixes(self):
        """Tests the affixes that cannot exist."""
        with self.assertRaises(ValueError):
            decode_affix(VowelForm(4, 1), "tļ")
        with self.assertRaises(ValueError):
            PlainAffix("tt", 1)
        with self.assertRaises(ValueError):
            PlainAffix("t", 10)


if __name__ == '__main__':
    unittest.main()
