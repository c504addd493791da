"""Configuração de logging estruturado (JSON)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from qualif_agent.observability.middleware import get_correlation_id


class CorrelationIdFilter(logging.Filter):
    """Insere correlation_id e service no record de log.

    Importante: nunca adicionar corpo de mensagem ou número do remetente nos logs.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else get_correlation_id()
        record.service = self._service_name
        return True


def configure_logging(level: str, service_name: str) -> None:
    """Configura logging JSON com campos padrão do serviço."""

    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s %(service)s",
        rename_fields={"levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service/correlation_id."""

    return logging.getLogger(name)


def mask_sender(sender_id: str | None) -> str:
    """Mascara o identificador do remetente (ex.: whatsapp:+33612345678)."""
    if not sender_id:
        return ""
    return sender_id[:12] + "..." if len(sender_id) > 12 else sender_id[:4] + "..."


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    *,
    level: int = logging.INFO,
    **fields: object,
) -> None:
    """Log observável de fallback usado (sem PII).

    Args:
        logger: Logger instance
        component: Nome do componente (ex: "persona_config", "generation")
        reason: Razão do fallback (ex: "invalid_config", "empty_completion")
        level: Nível do log (WARNING para má configuração)
        **fields: Campos extras estruturados

    Exemplo:
        log_fallback(logger, "persona_config", reason="invalid_config", level=logging.WARNING)
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    extra.update(fields)

    logger.log(level, f"{component}_fallback", extra=extra)
