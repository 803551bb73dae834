"""
Tests for vowel forms, h-forms and stress handling.
"""
import unittest

from ithkuil.errors import InvalidStress
from ithkuil.phonology import (
    DEFAULT_VOWEL,
    HForm,
    HSeries,
    Stress,
    VowelForm,
    add_stress,
    detect_stress,
    syllable_count,
    vowel_nuclei,
)


class TestVowelForm(unittest.TestCase):

    def test_parse_series_and_degree(self):
        """Tests that vowel runs map to their table position."""
        self.assertEqual(VowelForm.parse("a"), VowelForm(1, 1))
        self.assertEqual(VowelForm.parse("ae"), VowelForm(1, 0))
        self.assertEqual(VowelForm.parse("ëu"), VowelForm(2, 5))
        self.assertEqual(VowelForm.parse("oa"), VowelForm(4, 9))

    def test_parse_alternate_spellings(self):
        """Tests that doubled vowels and glide spellings read like the plain form."""
        self.assertEqual(VowelForm.parse("aa"), VowelForm(1, 1))
        self.assertEqual(VowelForm.parse("uä"), VowelForm.parse("ia"))
        self.assertEqual(VowelForm.parse("ië"), VowelForm(3, 8))

    def test_parse_glottal_stop(self):
        """Tests that a glottal stop inside the run marks the form."""
        form = VowelForm.parse("a'i")
        self.assertEqual(form, VowelForm(2, 1, glottal_stop=True))
        self.assertFalse(form.is_default)

    def test_parse_rejects_unknown_run(self):
        """Tests that runs outside the table raise ValueError."""
        with self.assertRaises(ValueError):
            VowelForm.parse("aei")

    def test_invalid_position(self):
        """Tests that out-of-range series or degrees are rejected."""
        with self.assertRaises(ValueError):
            VowelForm(5, 1)
        with self.assertRaises(ValueError):
            VowelForm(1, 10)

    def test_render_glottal(self):
        """Tests that the glottal stop is written inside the form."""
        self.assertEqual(VowelForm(1, 1, True).render(), "a'a")
        self.assertEqual(VowelForm(2, 1, True).render(), "a'i")

    def test_render_after_glide(self):
        """Tests that series-3 forms switch spelling after a matching glide."""
        self.assertEqual(VowelForm(3, 1).render("y"), "uä")
        self.assertEqual(VowelForm(3, 1).render("w"), "ia")
        self.assertEqual(VowelForm(3, 8).render("w"), "ië")
        self.assertEqual(VowelForm(3, 8).render("m"), "ue")

    def test_default_vowel(self):
        """Tests the default vowel is plain a."""
        self.assertTrue(DEFAULT_VOWEL.is_default)
        self.assertEqual(str(DEFAULT_VOWEL), "a")


class TestHForm(unittest.TestCase):

    def test_parse(self):
        """Tests h-form lookup in both series."""
        self.assertEqual(HForm.parse("hl"), HForm(HSeries.S0, 2))
        self.assertEqual(HForm.parse("hw"), HForm(HSeries.SW, 2))
        self.assertEqual(HForm.parse("y"), HForm(HSeries.SY, 1))
        self.assertEqual(HForm(HSeries.S0, 6).text, "hň")

    def test_parse_rejects_other_clusters(self):
        """Tests that non-h-form clusters raise ValueError."""
        with self.assertRaises(ValueError):
            HForm.parse("hx")


class TestStress(unittest.TestCase):

    def test_vowel_nuclei_diphthongs(self):
        """Tests that i and u glide onto the vowel before them."""
        self.assertEqual(vowel_nuclei("malëuţřait"), [(1, 2), (3, 5), (7, 9)])
        self.assertEqual(syllable_count("wamëuţřait"), 3)
        self.assertEqual(syllable_count("wam"), 1)

    def test_detect_stress(self):
        """Tests that marked and unmarked stress are read correctly."""
        self.assertEqual(detect_stress("mala"), Stress.PENULTIMATE)
        self.assertEqual(detect_stress("malá"), Stress.ULTIMATE)
        self.assertEqual(detect_stress("málala"), Stress.ANTEPENULTIMATE)
        self.assertEqual(detect_stress("wam"), Stress.MONOSYLLABIC)

    def test_detect_stress_errors(self):
        """Tests that impossible stress marks raise InvalidStress."""
        with self.assertRaises(InvalidStress):
            detect_stress("málá")
        with self.assertRaises(InvalidStress):
            detect_stress("málalala")

    def test_add_stress(self):
        """Tests that stress is marked where the reader will find it."""
        self.assertEqual(add_stress("mala", Stress.PENULTIMATE), "mala")
        self.assertEqual(add_stress("mala", Stress.ULTIMATE), "malá")
        self.assertEqual(add_stress("malala", Stress.ANTEPENULTIMATE), "málala")
        self.assertEqual(add_stress("wamai", Stress.ULTIMATE), "wamái")
        self.assertEqual(add_stress("wam", Stress.ULTIMATE), "wam")

    def test_add_stress_too_few_syllables(self):
        """Tests that add_stress returns None when the stress cannot be written."""
        self.assertIsNone(add_stress("mal", Stress.PENULTIMATE))
        self.assertIsNone(add_stress("mala", Stress.ANTEPENULTIMATE))
        self.assertIsNone(add_stress("mala", Stress.MONOSYLLABIC))

    def test_final_stress(self):
        """Tests that ultimate and monosyllabic stress are both final."""
        self.assertTrue(Stress.ULTIMATE.is_final)
        self.assertTrue(Stress.MONOSYLLABIC.is_final)
        self.assertFalse(Stress.PENULTIMATE.is_final)


if __name__ == '__main__':
    unittest.main()
