"""
TerminalSession — logika terminala "zK-67".

Log wiadomości jest sekwencją append-only należącą do sesji (brak stanu
globalnego). Wywołujący tworzy sesję, może ją odtworzyć z wcześniejszego logu
(np. przesłanego przez klienta HTTP) i dostaje z submit() nowe wiadomości.

Przepływ dla równania:
  > echo
  equation: "<wyrażenie> = <wynik>"
  wynik == cel  → proof + verification
  wynik != cel  → komunikat odrzucenia
"""
from __future__ import annotations

from typing import Iterable

from adapters.commitment.mock_snark import MockSnarkEngine
from adapters.evaluator.expression_evaluator import ExpressionEvaluator
from contracts import TerminalMessage

BANNER = (
    "> ZK-SNARK Equation Terminal v1.0",
    "> Type an equation that equals {target}, or \"help\"",
)

HELP_TEXT = (
    "> Commands:",
    ">   <equation>  evaluate, prove and verify (e.g. \"60 plus 7\", \"5! - 53\")",
    ">   help        show this message",
    "> Operators: + - * / ( ) ^ !, words: plus minus times x \"divided by\"",
)


class TerminalSession:
    def __init__(
        self,
        evaluator: ExpressionEvaluator | None = None,
        engine: MockSnarkEngine | None = None,
        target: int = 67,
        history: Iterable[TerminalMessage] | None = None,
    ) -> None:
        self._evaluator = evaluator or ExpressionEvaluator()
        self._engine = engine or MockSnarkEngine()
        self._target = target
        self._messages: list[TerminalMessage] = list(history) if history is not None else []
        if history is None:
            for line in BANNER:
                self._append("system", line.format(target=target))

    @property
    def messages(self) -> tuple[TerminalMessage, ...]:
        return tuple(self._messages)

    @property
    def target(self) -> int:
        return self._target

    def submit(self, line: str) -> list[TerminalMessage]:
        """Przetwarza jedną linię wejścia. Zwraca wiadomości dodane do logu."""
        text = line.strip()
        if not text:
            return []

        command = text.lower()
        start = len(self._messages)
        self._append("system", f"> {text}")
        if command == "help":
            for help_line in HELP_TEXT:
                self._append("system", help_line)
        else:
            self._process_equation(text)
        return self._messages[start:]

    # -- Prywatne ----------------------------------------------------------

    def _process_equation(self, text: str) -> None:
        outcome = self._evaluator.try_evaluate(text)
        result = outcome.value if outcome.ok else 0
        self._append("equation", f"{text} = {result}")

        if not outcome.ok:
            self._append(
                "system",
                f"✗ Could not evaluate equation: {outcome.error.message}",  # type: ignore[union-attr]
            )
            return
        if result != self._target:
            self._append(
                "system",
                f"✗ Equation does not equal {self._target} (result: {result})",
            )
            return

        self._append("system", "> Generating zk-SNARK proof...")
        proof = self._engine.commit(text, result)
        self._append("proof", "Proof generated", proof=proof)

        self._append("system", "> Verifying proof...")
        verified = self._engine.check(proof, self._target)
        self._append(
            "verification",
            "Proof VERIFIED ✓" if verified else "Proof INVALID ✗",
            verified=verified,
        )

    def _append(self, type_: str, content: str, **extra) -> TerminalMessage:
        message = TerminalMessage(type=type_, content=content, **extra)  # type: ignore[arg-type]
        self._messages.append(message)
        return message
