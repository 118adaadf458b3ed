"""
Router: POST /terminal

Bezstanowy terminal: klient odsyła dotychczasowy log (history), serwer
dopisuje wiadomości dla nowej linii i zwraca cały log oraz same nowe wpisy.
Bez history sesja zaczyna się od banera.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from adapters.commitment.mock_snark import MockSnarkEngine
from adapters.evaluator.expression_evaluator import ExpressionEvaluator
from adapters.terminal.session import TerminalSession
from api.dependencies import get_commitment_engine, get_evaluator, get_settings
from api.schemas import TerminalRequest, TerminalResponse
from config import Settings

router = APIRouter(prefix="/terminal", tags=["terminal"])


@router.post("", response_model=TerminalResponse)
async def terminal_submit(
    body: TerminalRequest,
    evaluator: ExpressionEvaluator = Depends(get_evaluator),
    engine: MockSnarkEngine = Depends(get_commitment_engine),
    settings: Settings = Depends(get_settings),
) -> TerminalResponse:
    session = TerminalSession(
        evaluator=evaluator,
        engine=engine,
        target=settings.target_value,
        history=body.history,
    )
    added = session.submit(body.input)
    return TerminalResponse(added=added, messages=list(session.messages))
