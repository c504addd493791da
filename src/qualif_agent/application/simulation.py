"""Endpoint síncrono de simulação: persona e histórico vêm do chamador.

Sem SessionStore. Falhas de geração são propagadas (não há canal de retry
assíncrono a proteger).
"""

from __future__ import annotations

import logging
from typing import Any

from qualif_agent.ai.openai_client import (
    SIMULATION_FREQUENCY_PENALTY,
    GenerationGateway,
    build_generation_request,
)
from qualif_agent.ai.prompts import compile_persona
from qualif_agent.application.messages import SIMULATION_EMPTY_REPLY
from qualif_agent.config.settings import Settings
from qualif_agent.domain.persona import SimulationPayload
from qualif_agent.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)


async def run_simulation(
    data: Any,
    settings: Settings,
    gateway: GenerationGateway,
) -> str:
    """Valida o payload, chama o gateway uma vez e devolve o texto gerado.

    Raises:
        ValidationError: payload inválido
        GenerationError: falha do gateway
    """
    payload = SimulationPayload.from_payload(data)
    compiled = compile_persona(payload.config)
    request = build_generation_request(
        compiled,
        payload.conversation,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
        frequency_penalty=SIMULATION_FREQUENCY_PENALTY,
    )

    result = await gateway.generate(request)
    if result.text is None:
        log_fallback(logger, "simulation", reason="empty_completion")
        return SIMULATION_EMPTY_REPLY

    logger.info(
        "simulation_replied",
        extra={"turns": len(payload.conversation), "tone": payload.config.tone.value},
    )
    return result.text
