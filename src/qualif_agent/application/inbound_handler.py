"""Handler de mensagens inbound (máquina de estados do webhook WhatsApp).

Estados: RECEIVED → AUTHENTICATED → SESSION_LOADED → GENERATING → REPLIED,
com saídas REJECTED (assinatura/configuração), DEGRADED_REPLY (falha de
geração ou do store) e CLARIFICATION (corpo vazio).

Invariantes:
- Exatamente um turno de usuário por mensagem não vazia, qualquer que seja
  o resultado da geração.
- Turno de assistente anexado se e somente se a geração teve sucesso.
- O store nunca é tocado durante a chamada ao gateway.
- Operações do store rodam fora do event loop (anyio.to_thread).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

import anyio

from qualif_agent.adapters.twilio.form import decode_form_body
from qualif_agent.adapters.twilio.signature import verify_twilio_signature
from qualif_agent.adapters.twilio.twiml import render_message_response
from qualif_agent.ai.openai_client import (
    WEBHOOK_FREQUENCY_PENALTY,
    GenerationGateway,
    build_generation_request,
)
from qualif_agent.ai.prompts import compile_persona
from qualif_agent.application.messages import (
    CLARIFICATION_MESSAGE,
    TECHNICAL_DIFFICULTY_MESSAGE,
    greeting_message,
    rephrase_message,
)
from qualif_agent.application.persona_loader import load_persona_from_settings
from qualif_agent.config.settings import Settings
from qualif_agent.domain.enums import Role
from qualif_agent.domain.errors import AuthenticationError, ConfigurationError, GenerationError
from qualif_agent.domain.persona import ConversationTurn
from qualif_agent.domain.session import Session
from qualif_agent.infra.session_contract import SessionStore, SessionStoreError
from qualif_agent.observability.logging import get_logger, log_fallback, mask_sender

logger: logging.Logger = get_logger(__name__)

UNKNOWN_SENDER = "unknown-sender"


class HandlerState(StrEnum):
    """Estados do processamento de um callback."""

    RECEIVED = "RECEIVED"
    AUTHENTICATED = "AUTHENTICATED"
    SESSION_LOADED = "SESSION_LOADED"
    GENERATING = "GENERATING"
    REPLIED = "REPLIED"
    CLARIFICATION = "CLARIFICATION"
    DEGRADED_REPLY = "DEGRADED_REPLY"
    REJECTED = "REJECTED"


@dataclass(slots=True)
class InboundOutcome:
    """Resultado terminal não rejeitado: sempre HTTP 200 + TwiML."""

    state: HandlerState
    reply: str

    @property
    def twiml(self) -> str:
        return render_message_response(self.reply)


class InboundMessageHandler:
    """Orquestra assinatura, sessão, geração e resposta TwiML."""

    def __init__(
        self,
        settings: Settings,
        session_store: SessionStore,
        gateway: GenerationGateway | None,
    ) -> None:
        self._settings = settings
        self._store = session_store
        self._gateway = gateway

    def ensure_configured(self) -> GenerationGateway:
        """Falha rápido (500) se credenciais obrigatórias estiverem ausentes."""
        missing = self._settings.missing_webhook_credentials()
        if missing or self._gateway is None:
            logger.error("inbound_missing_credentials", extra={"missing": missing})
            raise ConfigurationError(missing or ["OPENAI_API_KEY"])
        return self._gateway

    def authenticate(
        self, fields: Mapping[str, str], headers: Mapping[str, str], request_url: str
    ) -> None:
        """Valida a assinatura Twilio; levanta AuthenticationError se inválida."""
        url = self._settings.webhook_validation_url or request_url
        result = verify_twilio_signature(
            url, fields, headers, self._settings.twilio_auth_token or ""
        )
        if not result.valid:
            logger.warning(
                "inbound_signature_rejected",
                extra={"state": HandlerState.REJECTED.value, "reason": result.error},
            )
            raise AuthenticationError("Signature Twilio invalide.", detail="invalid_signature")

    async def handle(
        self, raw_body: bytes | str, headers: Mapping[str, str], request_url: str
    ) -> InboundOutcome:
        """Processa um callback inbound completo.

        Raises:
            ConfigurationError: OPENAI_API_KEY/TWILIO_AUTH_TOKEN ausentes
            AuthenticationError: assinatura inválida (nenhuma sessão tocada)
        """
        gateway = self.ensure_configured()

        fields = decode_form_body(raw_body)
        self.authenticate(fields, headers, request_url)

        incoming_message = (fields.get("Body") or "").strip()
        sender_id = fields.get("From") or UNKNOWN_SENDER

        if not incoming_message:
            logger.info(
                "inbound_empty_body",
                extra={
                    "state": HandlerState.CLARIFICATION.value,
                    "sender": mask_sender(sender_id),
                },
            )
            return InboundOutcome(HandlerState.CLARIFICATION, CLARIFICATION_MESSAGE)

        return await self._converse(gateway, sender_id, incoming_message)

    async def _converse(
        self, gateway: GenerationGateway, sender_id: str, incoming_message: str
    ) -> InboundOutcome:
        persona = load_persona_from_settings(self._settings)
        greeting = greeting_message(persona.company_name, persona.language)

        try:
            session = await anyio.to_thread.run_sync(
                self._record_user_turn, sender_id, greeting, incoming_message
            )
        except SessionStoreError as exc:
            return self._store_failed(sender_id, exc)

        logger.debug(
            "inbound_session_loaded",
            extra={
                "state": HandlerState.SESSION_LOADED.value,
                "sender": mask_sender(sender_id),
                "turns": len(session),
            },
        )

        compiled = compile_persona(persona)
        request = build_generation_request(
            compiled,
            session.turns,
            model=self._settings.openai_model,
            max_tokens=self._settings.openai_max_tokens,
            frequency_penalty=WEBHOOK_FREQUENCY_PENALTY,
        )

        try:
            result = await gateway.generate(request)
        except GenerationError as exc:
            logger.error(
                "inbound_generation_failed",
                extra={
                    "state": HandlerState.DEGRADED_REPLY.value,
                    "sender": mask_sender(sender_id),
                    "error": exc.detail,
                },
            )
            return InboundOutcome(HandlerState.DEGRADED_REPLY, TECHNICAL_DIFFICULTY_MESSAGE)

        reply = result.text
        if reply is None:
            log_fallback(logger, "generation", reason="empty_completion")
            reply = rephrase_message(persona.language)

        try:
            await anyio.to_thread.run_sync(
                self._store.append,
                sender_id,
                [ConversationTurn(role=Role.ASSISTANT, content=reply)],
            )
        except SessionStoreError as exc:
            return self._store_failed(sender_id, exc)

        logger.info(
            "inbound_replied",
            extra={"state": HandlerState.REPLIED.value, "sender": mask_sender(sender_id)},
        )
        return InboundOutcome(HandlerState.REPLIED, reply)

    def _record_user_turn(self, sender_id: str, greeting: str, incoming_message: str) -> Session:
        """Executa em thread: o store pode fazer I/O bloqueante (Redis)."""
        self._store.get_or_create(sender_id, greeting)
        return self._store.append(
            sender_id, [ConversationTurn(role=Role.USER, content=incoming_message)]
        )

    def _store_failed(self, sender_id: str, exc: SessionStoreError) -> InboundOutcome:
        logger.error(
            "inbound_session_store_failed",
            extra={
                "state": HandlerState.DEGRADED_REPLY.value,
                "sender": mask_sender(sender_id),
                "error": str(exc),
            },
        )
        return InboundOutcome(HandlerState.DEGRADED_REPLY, TECHNICAL_DIFFICULTY_MESSAGE)
