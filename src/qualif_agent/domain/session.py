"""Sessão de conversa: histórico limitado e ordenado por remetente."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from qualif_agent.domain.enums import Role
from qualif_agent.domain.persona import ConversationTurn

DEFAULT_MAX_TURNS = 20


class Session(BaseModel):
    """Histórico de um remetente (mais antigo primeiro)."""

    model_config = ConfigDict(frozen=True)

    sender_id: str
    turns: tuple[ConversationTurn, ...] = ()

    def __len__(self) -> int:
        return len(self.turns)

    def with_turns(self, turns: Sequence[ConversationTurn], max_turns: int) -> Session:
        """Nova sessão com `turns` anexados e janela deslizante aplicada."""
        return Session(
            sender_id=self.sender_id,
            turns=trim_history((*self.turns, *turns), max_turns),
        )


def trim_history(
    turns: Sequence[ConversationTurn], max_turns: int = DEFAULT_MAX_TURNS
) -> tuple[ConversationTurn, ...]:
    """Mantém apenas os `max_turns` turnos mais recentes."""
    if len(turns) <= max_turns:
        return tuple(turns)
    return tuple(turns[-max_turns:])


def greeting_turn(content: str) -> ConversationTurn:
    """Turno sintético de saudação do assistente."""
    return ConversationTurn(role=Role.ASSISTANT, content=content)
