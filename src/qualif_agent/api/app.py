"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from fastapi import FastAPI

from qualif_agent.ai.openai_client import OpenAIGenerationGateway
from qualif_agent.api.routes import router
from qualif_agent.config.settings import Settings, get_settings
from qualif_agent.infra.session_contract import SessionStore
from qualif_agent.infra.session_store import create_session_store
from qualif_agent.observability.logging import configure_logging, get_logger
from qualif_agent.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def _create_redis_client(redis_url: str | None):
    """Cria cliente Redis se URL disponível."""
    if not redis_url:
        return None
    import redis

    return redis.from_url(redis_url, decode_responses=True)


def _create_session_store(settings: Settings) -> SessionStore:
    """Cria store de sessão conforme backend."""
    backend = settings.session_store_backend.lower()
    client = None
    if backend == "redis":
        client = _create_redis_client(settings.redis_url)

    return create_session_store(
        backend,
        client=client,
        max_turns=settings.session_max_turns,
        max_senders=settings.session_max_senders,
        ttl_seconds=settings.session_ttl_seconds,
    )


def _create_gateway(settings: Settings) -> OpenAIGenerationGateway | None:
    """Gateway OpenAI; None quando a chave não está configurada."""
    if not settings.openai_api_key:
        logger.warning("openai_api_key_missing")
        return None
    return OpenAIGenerationGateway(
        api_key=settings.openai_api_key,
        timeout_seconds=settings.openai_timeout_seconds,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria a aplicação FastAPI."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_session_store_config())
    validation_errors.extend(settings.validate_openai_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(CorrelationIdMiddleware)
    app.include_router(router)

    app.state.settings = settings
    app.state.session_store = _create_session_store(settings)
    app.state.generation_gateway = _create_gateway(settings)

    return app


app = create_app()
