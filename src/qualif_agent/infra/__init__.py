"""Camada de infraestrutura — persistência de sessões.

Uso típico:
    from qualif_agent.infra import create_session_store
"""

from qualif_agent.infra.session_contract import SessionStore, SessionStoreError
from qualif_agent.infra.session_store import create_session_store
from qualif_agent.infra.session_store_memory import InMemorySessionStore
from qualif_agent.infra.session_store_redis import RedisSessionStore

__all__ = [
    "SessionStore",
    "SessionStoreError",
    "InMemorySessionStore",
    "RedisSessionStore",
    "create_session_store",
]
