"""Contrato de persistência de sessão (SessionStore).

Implementações devem permanecer íntegras sob acesso concorrente. Entre
ciclos read-modify-write intercalados vale "last writer wins".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from qualif_agent.domain.persona import ConversationTurn
from qualif_agent.domain.session import DEFAULT_MAX_TURNS, Session
from qualif_agent.observability.logging import get_logger, mask_sender

logger: logging.Logger = get_logger(__name__)


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""

    pass


class SessionStore(ABC):
    """Contrato abstrato para armazenamento de Session por remetente."""

    def __init__(self, max_turns: int = DEFAULT_MAX_TURNS) -> None:
        self.max_turns = max_turns

    @abstractmethod
    def get(self, sender_id: str) -> Session | None:
        """Retorna a sessão do remetente, se existir."""
        ...

    @abstractmethod
    def get_or_create(self, sender_id: str, greeting: str) -> Session:
        """Retorna a sessão; se ausente, cria com um turno de saudação."""
        ...

    @abstractmethod
    def append(self, sender_id: str, turns: Sequence[ConversationTurn]) -> Session:
        """Anexa turnos em ordem, aplica a janela e persiste."""
        ...

    def _log_pruned(self, sender_id: str, previous_len: int, new_len: int) -> None:
        if previous_len > new_len:
            logger.info(
                "session_history_pruned",
                extra={
                    "session_history_pruned": True,
                    "sender": mask_sender(sender_id),
                    "max_turns": self.max_turns,
                    "previous_len": previous_len,
                    "new_len": new_len,
                },
            )
