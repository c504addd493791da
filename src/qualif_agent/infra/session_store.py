"""Factory de SessionStore conforme backend configurado."""

from __future__ import annotations

from typing import Any

from qualif_agent.domain.session import DEFAULT_MAX_TURNS
from qualif_agent.infra.session_contract import SessionStore
from qualif_agent.infra.session_store_memory import InMemorySessionStore
from qualif_agent.infra.session_store_redis import RedisSessionStore


def create_session_store(
    backend: str,
    *,
    client: Any = None,
    max_turns: int = DEFAULT_MAX_TURNS,
    max_senders: int | None = None,
    ttl_seconds: int | None = None,
) -> SessionStore:
    """Cria o SessionStore.

    Args:
        backend: "memory" | "redis"
        client: cliente Redis (obrigatório para backend redis)
        max_turns: janela deslizante por remetente
        max_senders: limite LRU de remetentes (apenas memory)
        ttl_seconds: expiração por inatividade

    Raises:
        ValueError: backend desconhecido ou cliente ausente
    """
    backend = backend.lower()

    if backend == "memory":
        return InMemorySessionStore(
            max_turns=max_turns, max_senders=max_senders, ttl_seconds=ttl_seconds
        )

    if backend == "redis":
        if client is None:
            raise ValueError("backend redis requer client configurado")
        return RedisSessionStore(client, max_turns=max_turns, ttl_seconds=ttl_seconds)

    raise ValueError(f"SESSION_STORE_BACKEND desconhecido: {backend}")
