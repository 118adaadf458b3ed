"""
Adapter: MockSnarkEngine
Implementuje port CommitmentEngine — atrapa dowodu zk-SNARK.

commit() — dziewięć skrótów digest(wyrażenie + tag), tagi stałe per slot:
    a: a, a2, a3
    b: (b1, b2), (b3, b4), (b5, b6)
    c: c, c2, c3
  publicSignals = [wynik dziesiętnie] (bez limitu długości int→str)

check() — porównuje WYŁĄCZNIE publicSignals[0] z oczekiwanym wynikiem.
  UWAGA: to nie jest dowód. a/b/c nie są sprawdzane, więc każdy poprawny
  składniowo obiekt z dobrym publicSignals przechodzi. Zachowanie celowe,
  pokryte testem regresji; prawdziwa weryfikacja wymaga kluczy i parowań.
"""
from __future__ import annotations

import logging
import re

from adapters.commitment.digest import digest
from adapters.decimal_text import from_decimal, short_decimal, to_decimal
from contracts import ProofObject

logger = logging.getLogger("zk67.commitment")

A_TAGS = ("a", "a2", "a3")
B_TAGS = (("b1", "b2"), ("b3", "b4"), ("b5", "b6"))
C_TAGS = ("c", "c2", "c3")

# Jak parseInt: opcjonalne białe znaki, znak, cyfry; reszta ignorowana
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_leading_int(text: str) -> int | None:
    """Początkowa liczba całkowita z tekstu ("67abc" → 67) albo None."""
    m = _LEADING_INT_RE.match(text)
    if m is None:
        return None
    return from_decimal(m.group(1))


class MockSnarkEngine:
    """Deterministyczna atrapa: ten sam (wyrażenie, wynik) → ten sam dowód."""

    # -- CommitmentEngine protocol -------------------------------------------

    def commit(self, expression: str, result: int) -> ProofObject:
        logger.debug("Generating proof for %r = %s", expression, short_decimal(result))
        return ProofObject(
            a=tuple(digest(expression + tag) for tag in A_TAGS),
            b=tuple(
                (digest(expression + first), digest(expression + second))
                for first, second in B_TAGS
            ),
            c=tuple(digest(expression + tag) for tag in C_TAGS),
            public_signals=(to_decimal(result),),
        )

    def check(self, proof: ProofObject, expected: int) -> bool:
        claimed = self.claimed_result(proof)
        is_valid = claimed is not None and claimed == expected
        logger.info(
            "Proof verification: %s (claimed=%s, expected=%s)",
            "VALID" if is_valid else "INVALID",
            None if claimed is None else short_decimal(claimed),
            short_decimal(expected),
        )
        return is_valid

    # -- Pomocnicze ----------------------------------------------------------

    def claimed_result(self, proof: ProofObject) -> int | None:
        """publicSignals[0] jako int; None gdy brak lub nie jest liczbą."""
        if not proof.public_signals:
            return None
        return parse_leading_int(proof.public_signals[0])


_DEFAULT = MockSnarkEngine()


def commit(expression: str, result: int) -> ProofObject:
    return _DEFAULT.commit(expression, result)


def check(proof: ProofObject, expected: int) -> bool:
    return _DEFAULT.check(proof, expected)
