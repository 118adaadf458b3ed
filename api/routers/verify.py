"""
Router: /verify

  POST /verify           — dowód jako obiekt JSON (walidacja przez pydantic → 422)
  POST /verify/raw       — cztery pola tekstowe wklejone osobno; błąd dekodowania → 400
  POST /verify/document  — cały dowód jako jeden tekst ("wklej wszystko"); błąd → 400

400 oznacza "popraw wklejony tekst"; 200 z valid=False oznacza, że dowód się
zdekodował, ale deklarowany wynik nie zgadza się z oczekiwanym.
"""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from adapters.commitment.proof_decoder import (
    ProofVerifier,
    decode_proof_document,
    parse_expected_result,
)
from api.dependencies import get_settings, get_verifier
from api.schemas import VerifyDocumentRequest, VerifyRawRequest, VerifyRequest, VerifyResponse
from config import Settings
from contracts import VerificationReport

router = APIRouter(prefix="/verify", tags=["verify"])


def _to_response(report: VerificationReport) -> VerifyResponse:
    return VerifyResponse(
        status=report.status,
        valid=report.is_valid,
        expected=report.expected,
        claimed=report.claimed,
        issues=report.issues,
    )


async def _simulate_latency(settings: Settings) -> None:
    if settings.verify_delay_ms > 0:
        await asyncio.sleep(settings.verify_delay_ms / 1000)


@router.post("", response_model=VerifyResponse)
async def verify_proof(
    body: VerifyRequest,
    verifier: ProofVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
) -> VerifyResponse:
    await _simulate_latency(settings)
    return _to_response(verifier.verify(body.proof, body.expected))


@router.post("/raw", response_model=VerifyResponse)
async def verify_raw(
    body: VerifyRawRequest,
    verifier: ProofVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
):
    report = verifier.verify_fields(body.a, body.b, body.c, body.public_signals, body.expected)
    if report.status == "decode_error":
        return JSONResponse(status_code=400, content=_to_response(report).model_dump())
    await _simulate_latency(settings)
    return _to_response(report)


@router.post("/document", response_model=VerifyResponse)
async def verify_document(
    body: VerifyDocumentRequest,
    verifier: ProofVerifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
) -> VerifyResponse:
    # ProofDecodeFailure → 400 przez handler w api/main.py
    proof = decode_proof_document(body.document)
    expected_value = parse_expected_result(body.expected)
    await _simulate_latency(settings)
    return _to_response(verifier.verify(proof, expected_value))
