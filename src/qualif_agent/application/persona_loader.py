"""Persona derivada do ambiente, com fallback para a persona padrão.

O canal de mensagens nunca pode rejeitar um callback por má configuração:
valores inválidos fazem cair na persona embutida, com WARNING observável.
"""

from __future__ import annotations

import logging

from qualif_agent.config.settings import QUALIFICATION_SEPARATOR, Settings
from qualif_agent.domain.errors import ValidationError
from qualif_agent.domain.persona import DEFAULT_PERSONA, PersonaConfig
from qualif_agent.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)


def split_qualification_points(raw: str) -> list[str]:
    """Divide no separador literal `||`, remove espaços e segmentos vazios."""
    return [segment.strip() for segment in raw.split(QUALIFICATION_SEPARATOR) if segment.strip()]


def _pick(value: str | None, default: str) -> str:
    return default if value is None else value


def load_persona_from_settings(settings: Settings) -> PersonaConfig:
    """Monta a persona a partir de AGENT_* (campos ausentes usam o padrão)."""
    default = DEFAULT_PERSONA
    raw_questions = _pick(
        settings.agent_qualification_points,
        f" {QUALIFICATION_SEPARATOR} ".join(default.qualification_questions),
    )

    candidate = {
        "company_name": _pick(settings.agent_company_name, default.company_name),
        "value_proposition": _pick(settings.agent_value_proposition, default.value_proposition),
        "target_profile": _pick(settings.agent_target_profile, default.target_profile),
        "tone": _pick(settings.agent_tone, default.tone.value),
        "qualification_questions": split_qualification_points(raw_questions),
        "closing_strategy": _pick(settings.agent_closing_strategy, default.closing_strategy),
        "call_to_action": _pick(settings.agent_call_to_action, default.call_to_action),
        "language": _pick(settings.agent_language, default.language.value),
    }

    try:
        return PersonaConfig.from_payload(candidate)
    except ValidationError as exc:
        log_fallback(
            logger,
            "persona_config",
            reason="invalid_config",
            level=logging.WARNING,
            invalid_fields=exc.fields,
        )
        return DEFAULT_PERSONA
