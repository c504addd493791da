"""Implementação de SessionStore usando Redis (continuidade entre processos)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from qualif_agent.domain.persona import ConversationTurn
from qualif_agent.domain.session import DEFAULT_MAX_TURNS, Session, greeting_turn
from qualif_agent.infra.session_contract import SessionStore, SessionStoreError
from qualif_agent.observability.logging import get_logger, mask_sender

logger: logging.Logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    """Sessões serializadas em JSON sob `session:<sender_id>`."""

    def __init__(
        self,
        redis_client: Any,
        max_turns: int = DEFAULT_MAX_TURNS,
        ttl_seconds: int | None = None,
    ) -> None:
        super().__init__(max_turns=max_turns)
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def _key(sender_id: str) -> str:
        return f"session:{sender_id}"

    def get(self, sender_id: str) -> Session | None:
        try:
            payload = self._redis.get(self._key(sender_id))
        except Exception as e:
            logger.error(
                "Failed to load session from Redis",
                extra={"sender": mask_sender(sender_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis load failed: {e}") from e

        if not payload:
            return None
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        return Session.model_validate_json(payload)

    def get_or_create(self, sender_id: str, greeting: str) -> Session:
        session = self.get(sender_id)
        if session is not None:
            return session

        session = Session(sender_id=sender_id, turns=(greeting_turn(greeting),))
        try:
            created = self._redis.set(
                self._key(sender_id), session.model_dump_json(), nx=True, ex=self._ttl_seconds
            )
        except Exception as e:
            logger.error(
                "Failed to create session in Redis",
                extra={"sender": mask_sender(sender_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis save failed: {e}") from e

        if not created:
            # Outro request criou a sessão entre o GET e o SET NX
            existing = self.get(sender_id)
            return existing if existing is not None else session
        return session

    def append(self, sender_id: str, turns: Sequence[ConversationTurn]) -> Session:
        current = self.get(sender_id)
        if current is None:
            current = Session(sender_id=sender_id)
        previous_len = len(current) + len(turns)
        updated = current.with_turns(turns, self.max_turns)

        try:
            self._redis.set(self._key(sender_id), updated.model_dump_json(), ex=self._ttl_seconds)
        except Exception as e:
            logger.error(
                "Failed to save session to Redis",
                extra={"sender": mask_sender(sender_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis save failed: {e}") from e

        self._log_pruned(sender_id, previous_len, len(updated))
        return updated
