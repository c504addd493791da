"""Modelos de domínio: persona de vendas e turnos de conversa.

A persona é construída a cada request (payload de simulação ou ambiente)
e nunca é mutada nem persistida.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from qualif_agent.domain.enums import TONE_ALIASES, Language, Role, Tone
from qualif_agent.domain.errors import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _describe_errors(exc: PydanticValidationError) -> tuple[str, list[str]]:
    """Resume erros pydantic como 'campo: mensagem' (sem valores de entrada)."""
    fields: list[str] = []
    parts: list[str] = []
    for err in exc.errors(include_input=False):
        loc = ".".join(str(p) for p in err["loc"]) or "payload"
        fields.append(loc)
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts), fields


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class PersonaConfig(_FrozenModel):
    """Identidade, tom e roteiro de qualificação do agente."""

    company_name: NonEmptyStr
    value_proposition: NonEmptyStr
    target_profile: NonEmptyStr
    tone: Tone
    qualification_questions: tuple[NonEmptyStr, ...] = Field(min_length=1)
    closing_strategy: NonEmptyStr
    call_to_action: NonEmptyStr
    language: Language

    @field_validator("tone", mode="before")
    @classmethod
    def normalize_tone(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip().lower()
            return TONE_ALIASES.get(key, key)
        return value

    @field_validator("language", mode="before")
    @classmethod
    def normalize_language(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_payload(cls, data: Any) -> PersonaConfig:
        """Decodifica e valida; levanta ValidationError nomeando os campos."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            message, fields = _describe_errors(exc)
            raise ValidationError(message, fields=fields) from exc


class ConversationTurn(_FrozenModel):
    """Um turno imutável (usuário ou assistente)."""

    role: Role
    content: NonEmptyStr

    def as_message(self) -> dict[str, str]:
        """Formato de mensagem aceito pelo gateway de geração."""
        return {"role": self.role.value, "content": self.content}


class SimulationPayload(_FrozenModel):
    """Corpo do endpoint de simulação: persona explícita + histórico do chamador."""

    config: PersonaConfig
    conversation: tuple[ConversationTurn, ...] = ()

    @classmethod
    def from_payload(cls, data: Any) -> SimulationPayload:
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            message, fields = _describe_errors(exc)
            raise ValidationError(message, fields=fields) from exc


DEFAULT_PERSONA = PersonaConfig(
    company_name="NovaSales",
    value_proposition=(
        "Solution CRM tout-en-un pour automatiser vos ventes B2B et augmenter "
        "votre taux de conversion de 35%."
    ),
    target_profile=(
        "Dirigeants de PME (10-100 employés) dans les services et le e-commerce, "
        "déjà équipés d'un CRM basique mais insatisfaits."
    ),
    tone=Tone.CONSULTATIVE,
    qualification_questions=(
        "Quel est aujourd'hui votre principal défi commercial au quotidien ?",
        "Combien de commerciaux travaillent sur vos prospects chaque mois ?",
        "Quelle solution utilisez-vous actuellement et qu'est-ce qui vous manque le plus ?",
    ),
    closing_strategy=(
        "Positionner l'offre comme la solution évidente, proposer une démonstration "
        "personnalisée et souligner la valeur immédiate."
    ),
    call_to_action="Proposer un créneau pour une démo en visio de 20 minutes avec un expert.",
    language=Language.FR,
)
