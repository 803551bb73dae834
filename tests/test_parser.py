"""
Tests for the parser facade.
"""
import unittest

from ithkuil.categories import Case, RootKind, WordType
from ithkuil.errors import InvalidCharacter, IthkuilError, UnknownForm, UnrecognizedStructure
from ithkuil.parser import parse_text, parse_word, split_words
from ithkuil.trace import ParseTrace


class TestParseWord(unittest.TestCase):

    def test_parse_formative(self):
        """Tests parsing a formative with slot VII affixes: 'malëuţřait'"""
        formative = parse_word("malëuţřait")
        self.assertEqual(formative.word_type, WordType.FORMATIVE)
        self.assertEqual(formative.root.cr, "m")
        self.assertTrue(formative.ca.is_default)
        self.assertEqual([affix.cs for affix in formative.slot_vii_affixes], ["ţř", "t"])

    def test_accepts_any_spelling(self):
        """Tests that case and alternate letters do not change the result."""
        self.assertEqual(parse_word("MALËUŢŘAIT"), parse_word("malëuţřait"))
        self.assertEqual(parse_word("ma’a"), parse_word("ma'a"))

    def test_word_types(self):
        """Tests referentials and affixual adjuncts."""
        self.assertEqual(parse_word("la").word_type, WordType.REFERENTIAL)
        self.assertEqual(parse_word("ar").word_type, WordType.AFFIXUAL)

    def test_referential_marker(self):
        """Tests that a leading bracket forces a referential reading."""
        formative = parse_word("[ëla")
        self.assertEqual(formative.word_type, WordType.REFERENTIAL)
        self.assertEqual(formative.root.kind, RootKind.REFERENTIAL)

    def test_word_type_hint(self):
        """Tests that an explicit hint is passed to the segmenter."""
        with self.assertRaises(UnrecognizedStructure):
            parse_word("lawi", WordType.FORMATIVE)

    def test_errors_propagate(self):
        """Tests that each stage's error reaches the caller."""
        with self.assertRaises(InvalidCharacter):
            parse_word("maqa")
        with self.assertRaises(UnrecognizedStructure):
            parse_word("wa")
        with self.assertRaises(UnknownForm):
            parse_word("mëila")


class TestParseTrace(unittest.TestCase):

    def test_trace_records_every_stage(self):
        """Tests that a successful parse records four steps and a result."""
        trace = ParseTrace("malëuţřait")
        formative = parse_word("malëuţřait", trace=trace)
        self.assertEqual(
            [step["name"] for step in trace.steps],
            ["Tokenizer", "Segmenter", "Resolver", "Assembler"],
        )
        self.assertEqual(trace.result, formative.to_dict())
        self.assertTrue(trace.succeeded)

    def test_trace_records_error(self):
        """Tests that a failed parse records the error and the completed steps."""
        trace = ParseTrace("mëila")
        with self.assertRaises(UnknownForm):
            parse_word("mëila", trace=trace)
        self.assertEqual([step["name"] for step in trace.steps], ["Tokenizer", "Segmenter"])
        self.assertTrue(trace.error.startswith("UnknownForm"))
        self.assertFalse(trace.succeeded)


class TestParseText(unittest.TestCase):

    def test_split_words(self):
        """Tests that punctuation is dropped and glottal stops and brackets stay."""
        self.assertEqual(split_words("Wala, malëuţřait! [ëla wama'a."), ["Wala", "malëuţřait", "[ëla", "wama'a"])

    def test_parse_sentence(self):
        """Tests parsing every word of a sentence."""
        words = parse_text("Lawi malëuţřait.")
        self.assertEqual([word.word_type for word in words], [WordType.REFERENTIAL, WordType.FORMATIVE])
        self.assertEqual(words[0].second_case, Case.AFF)

    def test_first_error_is_raised(self):
        """Tests that a bad word fails the whole text."""
        with self.assertRaises(IthkuilError):
            parse_text("malëuţřait maqa")

    def test_empty_text(self):
        """Tests that empty text parses to no words."""
        self.assertEqual(parse_text("  "), [])


if __name__ == '__main__':
    unittest.main()
