"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import EvalError, ProofObject, TerminalMessage, ValidationIssue


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    expression: str = Field(..., max_length=10_000)


class EvaluateResponse(BaseModel):
    expression: str
    normalized: str
    ok: bool
    result: int                       # 0 także przy błędzie (zgodność)
    equals_target: bool
    steps: list[str]
    error: Optional[EvalError] = None


# ─────────────────────────── /proof ──────────────────────────────

class ProofRequest(BaseModel):
    expression: str = Field(..., min_length=1, max_length=10_000)


class ProofResponse(BaseModel):
    expression: str
    result: int
    proof: ProofObject


# ─────────────────────────── /verify ─────────────────────────────

class VerifyRequest(BaseModel):
    proof: ProofObject
    expected: int = 67


class VerifyRawRequest(BaseModel):
    """Pola wklejane osobno w weryfikatorze — każde to tekst JSON."""
    a: str
    b: str
    c: str
    public_signals: str = Field(..., alias="publicSignals")
    expected: str = "67"

    model_config = {"populate_by_name": True}


class VerifyDocumentRequest(BaseModel):
    """Cały dowód wklejony jako jeden tekst JSON."""
    document: str
    expected: str = "67"


class VerifyResponse(BaseModel):
    status: str                       # valid | invalid | decode_error
    valid: bool
    expected: Optional[int] = None
    claimed: Optional[str] = None
    issues: list[ValidationIssue] = []


# ─────────────────────────── /terminal ───────────────────────────

class TerminalRequest(BaseModel):
    input: str = Field(..., max_length=10_000)
    history: Optional[list[TerminalMessage]] = None


class TerminalResponse(BaseModel):
    added: list[TerminalMessage]
    messages: list[TerminalMessage]


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    target: int
