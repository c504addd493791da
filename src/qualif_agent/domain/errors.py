"""Taxonomia de erros do agente.

- ValidationError: payload malformado ou campo ausente (falha do cliente)
- AuthenticationError: assinatura do provedor inválida (rejeitado, sem efeitos)
- ConfigurationError: credencial obrigatória ausente (falha do servidor)
- GenerationError: gateway LLM indisponível ou com erro
"""

from __future__ import annotations


class AgentError(Exception):
    """Erro base do qualif_agent."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class ValidationError(AgentError):
    """Campos ausentes, vazios ou enum desconhecido."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class AuthenticationError(AgentError):
    """Assinatura do callback não confere."""


class ConfigurationError(AgentError):
    """Credencial ou secret obrigatório ausente."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Configuração ausente: {', '.join(missing)}", detail="missing_credentials")
        self.missing = missing


class GenerationError(AgentError):
    """Falha na chamada ao serviço de geração (rede, provedor, timeout)."""
