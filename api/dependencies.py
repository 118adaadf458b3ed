"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.commitment.mock_snark import MockSnarkEngine
from adapters.commitment.proof_decoder import ProofVerifier
from adapters.evaluator.expression_evaluator import ExpressionEvaluator
from config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_evaluator(request: Request) -> ExpressionEvaluator:
    return request.app.state.evaluator


def get_commitment_engine(request: Request) -> MockSnarkEngine:
    return request.app.state.commitment_engine


def get_verifier(request: Request) -> ProofVerifier:
    return request.app.state.verifier
