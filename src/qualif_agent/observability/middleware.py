"""Middleware de correlação de requests.

Ordem de origem do correlation_id:
1. ``x-correlation-id`` enviado pelo chamador (simulação, testes, proxies)
2. ``i-twilio-idempotency-token``: o mesmo valor em retries de um callback
   Twilio, o que permite agrupar as tentativas de uma mesma mensagem
3. UUID novo
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "x-correlation-id"
TWILIO_IDEMPOTENCY_HEADER = "i-twilio-idempotency-token"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


def resolve_correlation_id(request: Request) -> str:
    for header in (CORRELATION_HEADER, TWILIO_IDEMPOTENCY_HEADER):
        value = request.headers.get(header, "").strip()
        if value:
            return value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga o correlation_id no contexto de log e na resposta."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        correlation_id = resolve_correlation_id(request)
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
