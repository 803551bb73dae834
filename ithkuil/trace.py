"""
Parse traces.

A ``ParseTrace`` records what each pipeline stage received and produced for
one word, so a failing or surprising parse can be inspected afterwards as a
JSON document.
"""
import json
import uuid
from datetime import datetime, timezone


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class ParseTrace:
    """
    Represents a single, complete trace of one word going through the pipeline.
    """
    def __init__(self, initial_text: str):
        self.trace_id = str(uuid.uuid4())
        self.start_time = _now()
        self.end_time = None
        self.initial_text = initial_text
        self.steps = []
        self.result = None
        self.error = None

    def add_step(self, step_name: str, inputs: dict, outputs: dict, description: str = None):
        """
        Adds a step to the trace.

        Args:
            step_name: The pipeline stage (e.g., "Tokenizer", "Segmenter").
            inputs: A dictionary of JSON-ready inputs to the stage.
            outputs: A dictionary of JSON-ready outputs from the stage.
            description: An optional natural language description of the step.
        """
        step = {
            "step_id": len(self.steps) + 1,
            "name": step_name,
            "timestamp": _now(),
            "inputs": inputs,
            "outputs": outputs,
        }
        if description:
            step["description"] = description
        self.steps.append(step)

    def set_result(self, result: dict):
        """Sets the parsed word (as a dictionary) and concludes the trace."""
        self.result = result
        self.end_time = _now()

    def set_error(self, error_message: str):
        """Records an error and concludes the trace."""
        self.error = error_message
        self.end_time = _now()

    @property
    def succeeded(self) -> bool:
        return self.result is not None and self.error is None

    def to_json(self, indent=2):
        """Serializes the trace to a JSON string."""
        return json.dumps(self, default=lambda o: o.__dict__, indent=indent, ensure_ascii=False)
