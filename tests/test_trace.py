"""
Tests for the ParseTrace.
"""
import unittest
import json
from ithkuil.trace import ParseTrace

class TestParseTrace(unittest.TestCase):

    def test_trace_initialization(self):
        """Tests that the trace is initialized correctly."""
        trace = ParseTrace(initial_text="malëuţřait")
        self.assertEqual(trace.initial_text, "malëuţřait")
        self.assertIsNotNone(trace.trace_id)
        self.assertIsNotNone(trace.start_time)
        self.assertIsNone(trace.end_time)
        self.assertEqual(trace.steps, [])
        self.assertIsNone(trace.result)
        self.assertIsNone(trace.error)
        self.assertFalse(trace.succeeded)

    def test_add_step(self):
        """Tests adding a step to the trace."""
        trace = ParseTrace("mala")
        trace.add_step(
            "Tokenizer",
            inputs={"text": "mala"},
            outputs={"tokens": ["m", "a", "l", "a"]},
            description="A test step."
        )
        trace.add_step("Segmenter", inputs={}, outputs={})
        self.assertEqual(len(trace.steps), 2)
        step = trace.steps[0]
        self.assertEqual(step["step_id"], 1)
        self.assertEqual(step["name"], "Tokenizer")
        self.assertEqual(step["inputs"], {"text": "mala"})
        self.assertEqual(step["outputs"], {"tokens": ["m", "a", "l", "a"]})
        self.assertEqual(step["description"], "A test step.")
        self.assertTrue(step["timestamp"].endswith("Z"))
        self.assertNotIn("description", trace.steps[1])

    def test_set_result(self):
        """Tests setting the parse result."""
        trace = ParseTrace("mala")
        trace.set_result({"word_type": "formative"})
        self.assertEqual(trace.result, {"word_type": "formative"})
        self.assertIsNotNone(trace.end_time)
        self.assertIsNone(trace.error)
        self.assertTrue(trace.succeeded)

    def test_set_error(self):
        """Tests setting an error."""
        trace = ParseTrace("maqa")
        trace.set_error("InvalidCharacter: 'q'")
        self.assertEqual(trace.error, "InvalidCharacter: 'q'")
        self.assertIsNotNone(trace.end_time)
        self.assertIsNone(trace.result)
        self.assertFalse(trace.succeeded)

    def test_to_json(self):
        """Tests serialization to JSON, keeping non-ASCII letters readable."""
        trace = ParseTrace("malëuţřait")
        trace.add_step("Tokenizer", inputs={}, outputs={})
        trace.set_result({"root": "m"})

        json_output = trace.to_json()
        self.assertIsInstance(json_output, str)
        self.assertIn("malëuţřait", json_output)

        data = json.loads(json_output)
        self.assertEqual(data['trace_id'], trace.trace_id)
        self.assertEqual(data['initial_text'], trace.initial_text)
        self.assertEqual(len(data['steps']), 1)
        self.assertEqual(data['result'], {"root": "m"})

if __name__ == '__main__':
    unittest.main()
