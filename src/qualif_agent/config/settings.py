"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (ou de um arquivo .env).
Nunca hardcode secrets ou valores sensíveis.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Separador literal usado em AGENT_QUALIFICATION_POINTS
QUALIFICATION_SEPARATOR: str = "||"


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # Aplicação
    service_name: str = "qualif_agent"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # OpenAI (Generation Gateway)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 20.0
    openai_max_tokens: int = 320  # Teto de tamanho da resposta

    # Twilio / WhatsApp
    twilio_auth_token: str | None = None  # Secret HMAC-SHA1 da assinatura
    whatsapp_webhook_url: str | None = None  # URL pública usada na assinatura

    # Persona derivada do ambiente (None = usar padrão embutido)
    agent_company_name: str | None = None
    agent_value_proposition: str | None = None
    agent_target_profile: str | None = None
    agent_tone: str | None = None
    agent_qualification_points: str | None = None  # Perguntas separadas por "||"
    agent_closing_strategy: str | None = None
    agent_call_to_action: str | None = None
    agent_language: str | None = None

    # Sessão
    session_store_backend: str = "memory"  # memory | redis
    redis_url: str | None = None
    session_max_turns: int = 20  # Janela deslizante por remetente
    session_max_senders: int | None = None  # Limite LRU de remetentes (memory)
    session_ttl_seconds: int | None = None  # Expiração por inatividade

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def webhook_validation_url(self) -> str | None:
        """URL configurada para validar a assinatura (None = usar URL do request)."""
        if self.whatsapp_webhook_url and self.whatsapp_webhook_url.strip():
            return self.whatsapp_webhook_url.strip()
        return None

    def missing_webhook_credentials(self) -> list[str]:
        """Lista credenciais obrigatórias ausentes para o webhook."""
        missing: list[str] = []
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if not self.twilio_auth_token:
            missing.append("TWILIO_AUTH_TOKEN")
        return missing

    def validate_session_store_config(self) -> list[str]:
        """Valida backend de session store.

        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        backend = self.session_store_backend.lower()

        valid_backends = {"memory", "redis"}
        if backend not in valid_backends:
            errors.append(
                f"SESSION_STORE_BACKEND '{backend}' inválido. Valores válidos: {valid_backends}"
            )

        if backend == "redis" and not self.redis_url:
            errors.append("SESSION_STORE_BACKEND=redis requer REDIS_URL configurado")

        if self.session_max_turns < 1:
            errors.append("SESSION_MAX_TURNS deve ser >= 1")

        if self.session_max_senders is not None and self.session_max_senders < 1:
            errors.append("SESSION_MAX_SENDERS deve ser >= 1 quando definido")

        if self.session_ttl_seconds is not None and self.session_ttl_seconds < 1:
            errors.append("SESSION_TTL_SECONDS deve ser >= 1 quando definido")

        return errors

    def validate_openai_config(self) -> list[str]:
        """Valida parâmetros numéricos da chamada OpenAI."""
        errors: list[str] = []
        if self.openai_max_tokens < 1:
            errors.append("OPENAI_MAX_TOKENS deve ser >= 1")
        if self.openai_timeout_seconds <= 0:
            errors.append("OPENAI_TIMEOUT_SECONDS deve ser > 0")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
