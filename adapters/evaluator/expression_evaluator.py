"""
Adapter: ExpressionEvaluator
Implementuje port Evaluator — od surowego tekstu użytkownika do liczby całkowitej.

  normalize()   → tekst znormalizowany + tokeny (silnia/potęgi rozwinięte)
  parse_tokens() → ExprAST
  ASTEvaluator  → Fraction
  round()       → int (reguła Pythona: połówki do parzystej, 5/2 → 2)

try_evaluate() nigdy nie rzuca wyjątku — błędy enkodowane są w EvalOutcome.
evaluate() to nakładka zgodności: 0 dla każdego błędu.
"""
from __future__ import annotations

import logging

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.normalizer import normalize
from adapters.expression_parser.pratt_parser import parse_tokens
from contracts import EvalError, EvalOutcome, EvaluationFailure

logger = logging.getLogger("zk67.evaluator")

SENTINEL = 0


class ExpressionEvaluator:
    """Ewaluator wyrażeń w stylu "60 plus 7", "5!", "2^6"."""

    def __init__(
        self,
        strict: bool = False,
        max_factorial_operand: int = 500,
        max_result_bits: int = 8192,
    ) -> None:
        self._strict = strict
        self._max_factorial_operand = max_factorial_operand
        self._max_result_bits = max_result_bits
        self._ast_evaluator = ASTEvaluator()

    @classmethod
    def from_settings(cls, settings) -> "ExpressionEvaluator":
        return cls(
            strict=settings.strict_tokens,
            max_factorial_operand=settings.max_factorial_operand,
            max_result_bits=settings.max_result_bits,
        )

    # -- Evaluator protocol ------------------------------------------------

    def try_evaluate(self, text: str) -> EvalOutcome:
        normalized = ""
        try:
            normalized, tokens = normalize(
                text,
                strict=self._strict,
                max_factorial_operand=self._max_factorial_operand,
                max_result_bits=self._max_result_bits,
            )
            ast = parse_tokens(tokens)
            value, steps = self._ast_evaluator.eval_ast(ast)
            rounded = round(value)
            if rounded.bit_length() > self._max_result_bits:
                raise EvaluationFailure(
                    "RESULT_TOO_LARGE",
                    f"Wynik przekracza {self._max_result_bits} bitów",
                )
        except EvaluationFailure as exc:
            return self._failure(text, normalized, exc.code, exc.message, exc.position)
        except ZeroDivisionError as exc:
            return self._failure(text, normalized, "DIVISION_BY_ZERO", str(exc))
        except RecursionError:
            return self._failure(
                text, normalized, "NESTING_TOO_DEEP", "Wyrażenie jest zbyt głęboko zagnieżdżone"
            )

        return EvalOutcome(
            expression=text,
            normalized=normalized,
            ok=True,
            value=rounded,
            steps=steps,
        )

    def evaluate(self, text: str) -> int:
        outcome = self.try_evaluate(text)
        return outcome.value if outcome.ok else SENTINEL

    # -- Prywatne ----------------------------------------------------------

    def _failure(
        self,
        text: str,
        normalized: str,
        code: str,
        message: str,
        position: int | None = None,
    ) -> EvalOutcome:
        logger.debug("Evaluation failed (%s): %s | expr=%r", code, message, text)
        return EvalOutcome(
            expression=text,
            normalized=normalized,
            ok=False,
            error=EvalError(code=code, message=message, position=position),
        )


_DEFAULT = ExpressionEvaluator()


def try_evaluate(text: str) -> EvalOutcome:
    return _DEFAULT.try_evaluate(text)


def evaluate(text: str) -> int:
    """Wartość wyrażenia lub 0, gdy nie da się go policzyć."""
    return _DEFAULT.evaluate(text)
