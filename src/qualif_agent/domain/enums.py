"""Enums de domínio para tom, idioma e papéis de conversa."""

from __future__ import annotations

from enum import StrEnum


class Tone(StrEnum):
    """Tons suportados pela persona (cada um mapeia para uma temperatura)."""

    CONCISE = "concise"
    CONSULTATIVE = "consultative"
    ENTHUSIASTIC = "enthusiastic"
    PREMIUM = "premium"


# Rótulos usados pelo editor de configuração em francês
TONE_ALIASES: dict[str, Tone] = {
    "concis": Tone.CONCISE,
    "consultatif": Tone.CONSULTATIVE,
    "enthousiaste": Tone.ENTHUSIASTIC,
}


class Language(StrEnum):
    """Idioma/registro das instruções de sistema."""

    FR = "fr"
    EN = "en"


class Role(StrEnum):
    """Autor de um turno na conversa."""

    USER = "user"
    ASSISTANT = "assistant"
