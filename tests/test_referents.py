"""
Tests for referent clusters.
"""
import unittest

from ithkuil.categories import Perspective, ReferentEffect, ReferentTarget
from ithkuil.referents import Referent, ReferentList


class TestReferentList(unittest.TestCase):

    def test_parse_single(self):
        """Tests reading one referent consonant."""
        referents = ReferentList.parse("l")
        self.assertEqual(referents.referents, (Referent(ReferentTarget.M1),))
        self.assertEqual(referents.perspective, Perspective.M)
        self.assertEqual(referents.label(), "[1m]")

    def test_parse_several(self):
        """Tests that clusters split into referents, two-letter forms first."""
        self.assertEqual(ReferentList.parse("ls").label(), "[1m+2m]")
        self.assertEqual(ReferentList.parse("thl").label(), "[Rdp+1m]")
        self.assertEqual(ReferentList.parse("ll").label(), "[Obv]")

    def test_effect_label(self):
        """Tests that non-neutral effects are glossed."""
        referents = ReferentList.parse("r")
        self.assertEqual(referents.referents[0].effect, ReferentEffect.BEN)
        self.assertEqual(referents.label(), "[1m.BEN]")
        self.assertEqual(referents.label(long=True), "[speaker.beneficial]")

    def test_perspective_markers(self):
        """Tests that perspective markers are read and written on the right side."""
        agglomerative = ReferentList.parse("tļl")
        self.assertEqual(agglomerative.perspective, Perspective.G)
        self.assertEqual(agglomerative.render(), "tļl")
        self.assertEqual(agglomerative.label(), "[1m+G]")

        abstract = ReferentList.parse("lw")
        self.assertEqual(abstract.perspective, Perspective.A)
        self.assertEqual(abstract.render(), "lw")

    def test_of(self):
        """Tests the shorthand constructor."""
        referents = ReferentList.of("1m", "2p")
        self.assertEqual(referents.render(), "ln")
        self.assertEqual(ReferentList.parse("ln"), referents)

    def test_show_defaults(self):
        """Tests that defaults are glossed when asked."""
        self.assertEqual(ReferentList.parse("l").label(show_defaults=True), "[1m.NEU+M]")

    def test_invalid(self):
        """Tests that unknown letters and empty clusters raise ValueError."""
        with self.assertRaises(ValueError):
            ReferentList.parse("q")
        with self.assertRaises(ValueError):
            ReferentList.parse("tļ")
        with self.assertRaises(ValueError):
            ReferentList(())

    def test_ambiguous_neighbours_rejected(self):
        """Tests that referents whose joined spelling reads differently are refused."""
        with self.assertRaises(ValueError) as ctx:
            ReferentList((Referent(ReferentTarget.PA), Referent(ReferentTarget.PVS, ReferentEffect.DET)))
        self.assertIn("pa and PVS.DET", str(ctx.exception))
        self.assertIn("'ňňň'", str(ctx.exception))

        with self.assertRaises(ValueError) as ctx:
            ReferentList.of("ma", "ma")
        self.assertIn("ma and ma", str(ctx.exception))

        with self.assertRaises(ValueError):
            ReferentList.of("1m", "Obv")

    def test_greedy_order_accepted(self):
        """Tests that the order the reader produces is itself accepted."""
        referents = ReferentList((Referent(ReferentTarget.PVS, ReferentEffect.DET), Referent(ReferentTarget.PA)))
        self.assertEqual(referents.render(), "ňňň")
        self.assertEqual(ReferentList.parse("ňňň"), referents)

    def test_multi_referent_round_trip(self):
        """Tests that accepted multi-referent lists read back from their spelling."""
        lists = [
            ReferentList.of("1m", "2m", "ma"),
            ReferentList.of("Rdp", "1m"),
            ReferentList.of("PVS", "pa"),
            ReferentList.of("Obv", "2p", "Mx", perspective=Perspective.G),
            ReferentList((Referent(ReferentTarget.MI, ReferentEffect.BEN), Referent(ReferentTarget.PI)), Perspective.N),
            ReferentList.of("2p", "mi", perspective=Perspective.A),
        ]
        for referents in lists:
            with self.subTest(referents=referents.label()):
                self.assertEqual(ReferentList.parse(referents.render()), referents)


if __name__ == '__main__':
    unittest.main()
