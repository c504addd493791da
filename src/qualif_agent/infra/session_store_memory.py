"""Implementação de SessionStore em memória (processo único).

Sem limites configurados, as sessões vivem enquanto o processo viver.
`max_senders` (LRU) e `ttl_seconds` (inatividade) limitam a memória.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Sequence

from qualif_agent.domain.persona import ConversationTurn
from qualif_agent.domain.session import DEFAULT_MAX_TURNS, Session, greeting_turn
from qualif_agent.infra.session_contract import SessionStore
from qualif_agent.observability.logging import get_logger, mask_sender

logger: logging.Logger = get_logger(__name__)


class InMemorySessionStore(SessionStore):
    """Armazenamento em memória protegido por lock."""

    def __init__(
        self,
        max_turns: int = DEFAULT_MAX_TURNS,
        max_senders: int | None = None,
        ttl_seconds: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(max_turns=max_turns)
        self._max_senders = max_senders
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        # sender_id -> (sessão, último acesso)
        self._sessions: OrderedDict[str, tuple[Session, float]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, sender_id: str) -> Session | None:
        with self._lock:
            return self._load_locked(sender_id)

    def get_or_create(self, sender_id: str, greeting: str) -> Session:
        with self._lock:
            session = self._load_locked(sender_id)
            if session is not None:
                return session

            session = Session(sender_id=sender_id, turns=(greeting_turn(greeting),))
            self._store_locked(session)
            logger.debug("Session created (in-memory)", extra={"sender": mask_sender(sender_id)})
            return session

    def append(self, sender_id: str, turns: Sequence[ConversationTurn]) -> Session:
        with self._lock:
            current = self._load_locked(sender_id)
            if current is None:
                current = Session(sender_id=sender_id)
            previous_len = len(current) + len(turns)
            updated = current.with_turns(turns, self.max_turns)
            self._store_locked(updated)

        self._log_pruned(sender_id, previous_len, len(updated))
        return updated

    def _load_locked(self, sender_id: str) -> Session | None:
        entry = self._sessions.get(sender_id)
        if entry is None:
            return None

        session, last_access = entry
        now = self._clock()
        if self._ttl_seconds is not None and now - last_access > self._ttl_seconds:
            del self._sessions[sender_id]
            logger.debug("Session expired (in-memory)", extra={"sender": mask_sender(sender_id)})
            return None

        self._sessions[sender_id] = (session, now)
        self._sessions.move_to_end(sender_id)
        return session

    def _store_locked(self, session: Session) -> None:
        self._sessions[session.sender_id] = (session, self._clock())
        self._sessions.move_to_end(session.sender_id)

        if self._max_senders is None:
            return
        while len(self._sessions) > self._max_senders:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("session_evicted_lru", extra={"sender": mask_sender(evicted)})
