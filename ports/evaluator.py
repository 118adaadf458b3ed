"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie wyrażeń wpisanych przez użytkownika.
"""
from typing import Protocol, runtime_checkable

from contracts import EvalOutcome


@runtime_checkable
class Evaluator(Protocol):
    def try_evaluate(self, text: str) -> EvalOutcome:
        """
        Normalizes and evaluates a free-form arithmetic string.
        Returns EvalOutcome with:
          - ok=True, value: int (rounded), steps: human-readable computation steps
          - ok=False, error: EvalError(code, message, position)
        Never raises.
        """
        ...

    def evaluate(self, text: str) -> int:
        """
        Compatibility entry point: the rounded integer value, or 0 when the
        expression cannot be evaluated. A genuine zero and a failure look
        the same here; use try_evaluate() to tell them apart.
        Never raises.
        """
        ...
