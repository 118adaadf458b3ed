"""
Router: POST /proof

Liczy wyrażenie i generuje dla niego atrapę dowodu.
Nieobliczalne wyrażenie → 422 (nie generujemy dowodu dla sentinela 0).
"""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from adapters.commitment.mock_snark import MockSnarkEngine
from adapters.evaluator.expression_evaluator import ExpressionEvaluator
from api.dependencies import get_commitment_engine, get_evaluator, get_settings
from api.schemas import ProofRequest, ProofResponse
from config import Settings

router = APIRouter(prefix="/proof", tags=["proof"])


@router.post("", response_model=ProofResponse)
async def generate_proof(
    body: ProofRequest,
    evaluator: ExpressionEvaluator = Depends(get_evaluator),
    engine: MockSnarkEngine = Depends(get_commitment_engine),
    settings: Settings = Depends(get_settings),
) -> ProofResponse:
    outcome = evaluator.try_evaluate(body.expression)
    if not outcome.ok:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Equation could not be evaluated",
                "error": outcome.error.model_dump(),  # type: ignore[union-attr]
            },
        )

    if settings.prove_delay_ms > 0:
        await asyncio.sleep(settings.prove_delay_ms / 1000)

    proof = engine.commit(body.expression, outcome.value)  # type: ignore[arg-type]
    return ProofResponse(expression=body.expression, result=outcome.value, proof=proof)
