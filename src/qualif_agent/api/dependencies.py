"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from qualif_agent.ai.openai_client import GenerationGateway
from qualif_agent.application.inbound_handler import InboundMessageHandler
from qualif_agent.config.settings import Settings
from qualif_agent.infra.session_contract import SessionStore


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    """Retorna o store de sessão ativo."""

    return request.app.state.session_store


def get_generation_gateway(request: Request) -> GenerationGateway | None:
    """Retorna o gateway de geração (None sem OPENAI_API_KEY)."""

    return request.app.state.generation_gateway


def get_inbound_handler(request: Request) -> InboundMessageHandler:
    """Monta o handler inbound com as dependências do app."""

    state = request.app.state
    return InboundMessageHandler(
        settings=state.settings,
        session_store=state.session_store,
        gateway=state.generation_gateway,
    )
