"""
Dekodowanie dowodu z niezaufanego tekstu (weryfikator, do którego użytkownik
wkleja JSON).

Dwie ścieżki wejścia:
  decode_proof_fields()   — cztery osobne bloby JSON: a, b, c, publicSignals
  decode_proof_document() — cały dowód jako jeden dokument JSON
                            (akceptuje też klucze eksportu pi_a/pi_b/pi_c)

Błąd dekodowania to ProofDecodeFailure z listą ValidationIssue (jedna na pole),
czyli coś innego niż check() == False: użytkownik ma poprawić wklejony tekst,
a nie samo równanie.

publicSignals musi być listą napisów: liczbowe [67] jest odrzucane, choć
parseInt w przeglądarkowym weryfikatorze przyjąłby je po konwersji na tekst.
Różnica celowa: publicSignals w eksporcie zawsze jest listą napisów.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from adapters.commitment.mock_snark import MockSnarkEngine, parse_leading_int
from contracts import ProofDecodeFailure, ProofObject, ValidationIssue, VerificationReport

logger = logging.getLogger("zk67.verifier")

PROOF_FIELDS = ("a", "b", "c", "publicSignals")


def _issue(code: str, message: str, field_path: str | None) -> ValidationIssue:
    return ValidationIssue(severity="error", code=code, message=message, field_path=field_path)


def _loads(field: str, text: str) -> tuple[Any, ValidationIssue | None]:
    try:
        return json.loads(text), None
    except json.JSONDecodeError as exc:
        return None, _issue(
            "INVALID_JSON",
            f"Niepoprawny JSON: {exc.msg} (linia {exc.lineno}, kolumna {exc.colno})",
            field,
        )


def _validate(raw: dict[str, Any]) -> ProofObject:
    try:
        return ProofObject.model_validate(raw)
    except ValidationError as exc:
        issues = [
            _issue(
                "INVALID_SHAPE",
                err["msg"],
                ".".join(str(p) for p in err["loc"]) or None,
            )
            for err in exc.errors()
        ]
        raise ProofDecodeFailure(issues) from exc


def decode_proof_fields(a: str, b: str, c: str, public_signals: str) -> ProofObject:
    """Składa ProofObject z czterech blobów JSON. Rzuca ProofDecodeFailure."""
    raw: dict[str, Any] = {}
    issues: list[ValidationIssue] = []
    for field, text in zip(PROOF_FIELDS, (a, b, c, public_signals)):
        value, issue = _loads(field, text)
        if issue is not None:
            issues.append(issue)
        else:
            raw[field] = value
    if issues:
        raise ProofDecodeFailure(issues)
    return _validate(raw)


def decode_proof_document(text: str) -> ProofObject:
    """Cały dowód jako jeden obiekt JSON. Rzuca ProofDecodeFailure."""
    value, issue = _loads("proof", text)
    if issue is not None:
        raise ProofDecodeFailure([issue])
    if not isinstance(value, dict):
        raise ProofDecodeFailure([
            _issue("INVALID_SHAPE", "Dowód musi być obiektem JSON", "proof"),
        ])
    return _validate(value)


def parse_expected_result(text: str) -> int:
    """Oczekiwany wynik z pola tekstowego ("67" → 67). Rzuca ProofDecodeFailure."""
    value = parse_leading_int(text)
    if value is None:
        raise ProofDecodeFailure([
            _issue("INVALID_INTEGER", f"Oczekiwany wynik nie jest liczbą: {text!r}", "expected"),
        ])
    return value


class ProofVerifier:
    """Weryfikator dla niezaufanego wejścia: dekodowanie, potem check()."""

    def __init__(self, engine: MockSnarkEngine | None = None) -> None:
        self._engine = engine or MockSnarkEngine()

    def verify(self, proof: ProofObject, expected: int) -> VerificationReport:
        claimed = proof.public_signals[0] if proof.public_signals else None
        ok = self._engine.check(proof, expected)
        return VerificationReport(
            status="valid" if ok else "invalid",
            expected=expected,
            claimed=claimed,
        )

    def verify_fields(
        self,
        a: str,
        b: str,
        c: str,
        public_signals: str,
        expected: str,
    ) -> VerificationReport:
        return self._decode_and_verify(
            lambda: decode_proof_fields(a, b, c, public_signals), expected
        )

    def verify_document(self, text: str, expected: str) -> VerificationReport:
        return self._decode_and_verify(lambda: decode_proof_document(text), expected)

    # -- Prywatne ----------------------------------------------------------

    def _decode_and_verify(self, decode, expected_text: str) -> VerificationReport:
        issues: list[ValidationIssue] = []
        proof: ProofObject | None = None
        expected: int | None = None
        try:
            proof = decode()
        except ProofDecodeFailure as exc:
            issues.extend(exc.issues)
        try:
            expected = parse_expected_result(expected_text)
        except ProofDecodeFailure as exc:
            issues.extend(exc.issues)

        if issues:
            logger.warning(
                "Proof decode failed: %s",
                ", ".join(f"{i.field_path}:{i.code}" for i in issues),
            )
            return VerificationReport(status="decode_error", expected=expected, issues=issues)
        return self.verify(proof, expected)  # type: ignore[arg-type]


def verify_untrusted(
    a: str,
    b: str,
    c: str,
    public_signals: str,
    expected: str = "67",
) -> VerificationReport:
    return ProofVerifier().verify_fields(a, b, c, public_signals, expected)
