"""
api/main.py — punkt wejścia FastAPI.

Adaptery są bezstanowe — tworzone raz w create_app() i trzymane w app.state.
Sztuczne opóźnienia generowania/weryfikacji dowodu (Settings.*_delay_ms)
żyją tylko w routerach; rdzeń jest synchroniczny.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.commitment.mock_snark import MockSnarkEngine
from adapters.commitment.proof_decoder import ProofVerifier
from adapters.evaluator.expression_evaluator import ExpressionEvaluator
from api.routers import evaluate, proof, terminal, verify
from api.schemas import HealthResponse
from config import Settings
from contracts import ProofDecodeFailure

logger = logging.getLogger("zk67")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )
    app.state.settings = settings

    engine = MockSnarkEngine()
    app.state.evaluator = ExpressionEvaluator.from_settings(settings)
    app.state.commitment_engine = engine
    app.state.verifier = ProofVerifier(engine)

    # Routers
    app.include_router(evaluate.router)
    app.include_router(proof.router)
    app.include_router(verify.router)
    app.include_router(terminal.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            target=settings.target_value,
        )

    # Globalny handler błędów dekodowania dowodu
    @app.exception_handler(ProofDecodeFailure)
    async def proof_decode_handler(request: Request, exc: ProofDecodeFailure):
        return JSONResponse(
            status_code=400,
            content={
                "detail": str(exc),
                "issues": [i.model_dump() for i in exc.issues],
            },
        )

    logger.info("zk67 API ready (target=%d).", settings.target_value)
    return app


app = create_app()
