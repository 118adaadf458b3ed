"""
Port: CommitmentEngine
Odpowiedzialność: tworzenie i sprawdzanie atrapy dowodu dla wyniku wyrażenia.
"""
from typing import Protocol, runtime_checkable

from contracts import ProofObject


@runtime_checkable
class CommitmentEngine(Protocol):
    def commit(self, expression: str, result: int) -> ProofObject:
        """
        Deterministically derives a ProofObject from the expression text.
        Identical (expression, result) pairs give identical proofs.
        publicSignals == [str(result)].
        """
        ...

    def check(self, proof: ProofObject, expected: int) -> bool:
        """
        True iff publicSignals[0] parses as an integer equal to expected.
        Does NOT look at a/b/c: any well-formed proof carrying the right
        public signal passes. Never raises.
        """
        ...
