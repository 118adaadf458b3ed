"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w zk67.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Helpers ─────────────────────────────────────

def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


# ─────────────────────────── Walidacja ───────────────────────────────────

class ValidationIssue(BaseModel):
    severity: Literal["error", "warning", "info"]
    code: str      # np. "INVALID_JSON", "INVALID_SHAPE", "INVALID_INTEGER"
    message: str
    field_path: Optional[str] = None


# ─────────────────────────── Błędy ───────────────────────────────────────

class EvaluationFailure(Exception):
    """Nieparsowalne lub nieobliczalne wyrażenie. Nie wychodzi poza ewaluator."""

    def __init__(self, code: str, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.position = position


class ProofDecodeFailure(ValueError):
    """Wklejony tekst dowodu nie daje się zdekodować (zły JSON lub zły kształt)."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        fields = ", ".join(i.field_path or "?" for i in issues)
        super().__init__(f"Nie udało się zdekodować dowodu: {fields}")
        self.issues = issues


# ─────────────────────────── Evaluator ───────────────────────────────────

# AST dla wyrażeń arytmetycznych (silnia i potęgi są rozwinięte przed parsowaniem)

class NumberNode(BaseModel):
    node_type: Literal["number"] = "number"
    value: int


class BinOpNode(BaseModel):
    node_type: Literal["binop"] = "binop"
    op: Literal["+", "-", "*", "/"]
    left: "ExprAST"
    right: "ExprAST"


class UnaryOpNode(BaseModel):
    node_type: Literal["unary"] = "unary"
    op: Literal["+", "-"]
    operand: "ExprAST"


ExprAST = Union[NumberNode, BinOpNode, UnaryOpNode]
BinOpNode.model_rebuild()
UnaryOpNode.model_rebuild()


class EvalError(BaseModel):
    code: str      # np. "EMPTY_EXPRESSION", "DIVISION_BY_ZERO", "UNEXPECTED_TOKEN"
    message: str
    position: Optional[int] = None  # indeks w tekście znormalizowanym


class EvalOutcome(BaseModel):
    """Wynik ewaluacji: albo ok=True z wartością, albo ok=False z błędem."""
    expression: str
    normalized: str = ""
    ok: bool
    value: Optional[int] = None
    steps: list[str] = Field(default_factory=list)  # czytelne kroki
    error: Optional[EvalError] = None


# ─────────────────────────── Commitment ──────────────────────────────────

HexPair = tuple[str, str]


class ProofObject(BaseModel):
    """
    Atrapa dowodu zk-SNARK. Pola a/b/c to skróty tekstu wyrażenia,
    publicSignals to zadeklarowany wynik. Weryfikacja patrzy tylko na
    publicSignals — a/b/c niczego nie wiążą.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    a: tuple[str, str, str] = Field(validation_alias=AliasChoices("a", "pi_a"))
    b: tuple[HexPair, HexPair, HexPair] = Field(validation_alias=AliasChoices("b", "pi_b"))
    c: tuple[str, str, str] = Field(validation_alias=AliasChoices("c", "pi_c"))
    public_signals: tuple[str, ...] = Field(
        validation_alias=AliasChoices("publicSignals", "public_signals"),
        serialization_alias="publicSignals",
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class VerificationReport(BaseModel):
    status: Literal["valid", "invalid", "decode_error"]
    expected: Optional[int] = None
    claimed: Optional[str] = None   # publicSignals[0], jeśli był
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"


# ─────────────────────────── Terminal ────────────────────────────────────

class TerminalMessage(BaseModel):
    type: Literal["system", "equation", "proof", "verification"]
    content: str
    timestamp: datetime = Field(default_factory=_now)
    proof: Optional[ProofObject] = None
    verified: Optional[bool] = None
