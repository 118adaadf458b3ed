"""
Router: POST /evaluate

Liczy wyrażenie i mówi, czy równa się wartości docelowej (domyślnie 67).
Błąd ewaluacji to nadal 200 — ok=False, result=0 i error z kodem.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from adapters.evaluator.expression_evaluator import SENTINEL, ExpressionEvaluator
from api.dependencies import get_evaluator, get_settings
from api.schemas import EvaluateRequest, EvaluateResponse
from config import Settings

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse)
async def evaluate_expression(
    body: EvaluateRequest,
    evaluator: ExpressionEvaluator = Depends(get_evaluator),
    settings: Settings = Depends(get_settings),
) -> EvaluateResponse:
    outcome = evaluator.try_evaluate(body.expression)
    result = outcome.value if outcome.ok else SENTINEL
    return EvaluateResponse(
        expression=outcome.expression,
        normalized=outcome.normalized,
        ok=outcome.ok,
        result=result,
        equals_target=outcome.ok and result == settings.target_value,
        steps=outcome.steps,
        error=outcome.error,
    )
