"""Rotas HTTP: webhook WhatsApp (Twilio) e simulação síncrona."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from qualif_agent.adapters.twilio.twiml import TWIML_MEDIA_TYPE
from qualif_agent.ai.openai_client import GenerationGateway
from qualif_agent.api.dependencies import (
    get_generation_gateway,
    get_inbound_handler,
    get_settings,
)
from qualif_agent.application.inbound_handler import InboundMessageHandler
from qualif_agent.application.simulation import run_simulation
from qualif_agent.config.settings import Settings
from qualif_agent.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    GenerationError,
    ValidationError,
)
from qualif_agent.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/webhooks/whatsapp")
def whatsapp_ready() -> dict[str, str]:
    """Indica que o endpoint está pronto para callbacks Twilio."""
    return {"status": "ready", "info": "POST Twilio webhook payloads to this endpoint."}


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    handler: InboundMessageHandler = Depends(get_inbound_handler),
) -> Response:
    """Recebe callback Twilio e responde sempre com TwiML (exceto rejeição)."""
    raw_body = await request.body()

    try:
        outcome = await handler.handle(raw_body, request.headers, str(request.url))
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=exc.detail,
        ) from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.detail) from exc

    return Response(content=outcome.twiml, media_type=TWIML_MEDIA_TYPE)


def _error_response(status_code: int, error: str, details: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


@router.post("/api/simulate")
async def simulate(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: GenerationGateway | None = Depends(get_generation_gateway),
) -> Response:
    """Gera uma resposta para persona + histórico fornecidos pelo chamador."""
    if not settings.openai_api_key or gateway is None:
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "OPENAI_API_KEY manquante dans les variables d'environnement.",
            "missing_credentials",
        )

    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Payload invalide pour la simulation.", str(exc)
        )

    try:
        reply = await run_simulation(data, settings, gateway)
    except ValidationError as exc:
        logger.info("simulation_invalid_payload", extra={"fields": exc.fields})
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Payload invalide pour la simulation.", exc.message
        )
    except GenerationError as exc:
        logger.error("simulation_generation_failed", extra={"error": exc.detail})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Erreur lors de l'appel OpenAI.", exc.detail
        )

    return JSONResponse(content={"reply": reply})
