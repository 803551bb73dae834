"""
Tests for the Ca complex: spelling, allomorphs and gemination.
"""
import unittest

from ithkuil.ca import DEFAULT_CA, Ca, geminate, is_geminate, ungeminate
from ithkuil.categories import Affiliation, Configuration, Essence, Extension, Perspective


class TestCaStrings(unittest.TestCase):

    def test_default(self):
        """Tests the default Ca spellings."""
        self.assertTrue(DEFAULT_CA.is_default)
        self.assertEqual(DEFAULT_CA.to_ungeminated_string(), "l")
        self.assertEqual(DEFAULT_CA.to_geminated_string(), "ll")
        self.assertEqual(Ca.from_ungeminated_string("l"), DEFAULT_CA)
        self.assertEqual(Ca.from_geminated_string("ll"), DEFAULT_CA)

    def test_component_spelling(self):
        """Tests that components are written in order and read back."""
        ca = Ca(configuration=Configuration.MSS)
        self.assertEqual(ca.render(), "t")
        self.assertEqual(Ca.from_ungeminated_string("t"), ca)

        ca = Ca(perspective=Perspective.G)
        self.assertEqual(ca.render(), "r")
        self.assertEqual(Ca.from_ungeminated_string("r"), ca)

    def test_allomorphs(self):
        """Tests that allomorphic substitutions are applied and undone."""
        ca = Ca(configuration=Configuration.MSS, extension=Extension.PRX)
        self.assertEqual(ca.to_ungeminated_string(), "nt")
        self.assertEqual(Ca.from_ungeminated_string("nt"), ca)

        ca = Ca(affiliation=Affiliation.ASO, essence=Essence.RPV)
        self.assertEqual(ca.to_ungeminated_string(), "pļ")
        self.assertEqual(Ca.from_ungeminated_string("pļ"), ca)

    def test_special_forms(self):
        """Tests the whole-complex special spellings."""
        self.assertEqual(Ca(essence=Essence.RPV).render(), "tļ")
        self.assertEqual(Ca(affiliation=Affiliation.VAR).render(), "ň")
        self.assertEqual(Ca(essence=Essence.RPV).render(geminated=True), "ttļ")

    def test_geminated_round_trip(self):
        """Tests that geminated spellings read back to the same Ca."""
        for ca in (
            DEFAULT_CA,
            Ca(configuration=Configuration.MSS, extension=Extension.PRX),
            Ca(essence=Essence.RPV),
            Ca(perspective=Perspective.G),
            Ca(configuration=Configuration.DPX, perspective=Perspective.A),
        ):
            with self.subTest(ca=ca):
                self.assertEqual(Ca.from_geminated_string(ca.to_geminated_string()), ca)

    def test_unreadable_string(self):
        """Tests that leftover letters make the reading fail."""
        self.assertIsNone(Ca.from_ungeminated_string("lq"))

    def test_labels(self):
        """Tests gloss labels with and without defaults."""
        self.assertEqual(DEFAULT_CA.labels(), [])
        self.assertEqual(DEFAULT_CA.labels(show_defaults=True), ["CSL", "UPX", "DEL", "M", "NRM"])
        ca = Ca(configuration=Configuration.MSS, extension=Extension.PRX)
        self.assertEqual(ca.labels(), ["MSS", "PRX"])
        self.assertEqual(ca.labels(long=True), ["multiplex_similar_separate", "proximal"])


class TestGemination(unittest.TestCase):

    def test_lone_liquids_double(self):
        """Tests that a lone l, r or ř doubles."""
        self.assertEqual(geminate("l"), "ll")
        self.assertEqual(geminate("r"), "rr")
        self.assertEqual(geminate("ř"), "řř")

    def test_stop_nasal_substitutions(self):
        """Tests that pm and pn take their own substitutions."""
        self.assertEqual(geminate("pm"), "vvm")
        self.assertEqual(geminate("pn"), "vvn")
        self.assertEqual(ungeminate("vvm"), "pm")
        self.assertEqual(ungeminate("vvn"), "pn")

    def test_stop_fricative(self):
        """Tests that t, k or p before a fricative doubles the fricative."""
        self.assertEqual(geminate("tf"), "tff")
        self.assertEqual(ungeminate("tff"), "tf")

    def test_sibilant_doubles(self):
        """Tests that the first sibilant doubles."""
        self.assertEqual(geminate("ks"), "kss")
        self.assertEqual(ungeminate("kss"), "ks")

    def test_is_geminate(self):
        """Tests detection of doubled letters."""
        self.assertTrue(is_geminate("ll"))
        self.assertTrue(is_geminate("vvm"))
        self.assertFalse(is_geminate("ţř"))
        self.assertFalse(is_geminate("l"))


if __name__ == '__main__':
    unittest.main()
