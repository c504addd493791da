"""Compilação da persona em prompt de sistema + temperatura.

Função pura: mesma persona produz o mesmo prompt (byte a byte) e a mesma
temperatura. Nenhum truncamento é feito aqui.
"""

from __future__ import annotations

from dataclasses import dataclass

from qualif_agent.domain.enums import Language, Tone
from qualif_agent.domain.persona import PersonaConfig

TONE_TEMPERATURES: dict[Tone, float] = {
    Tone.CONCISE: 0.3,
    Tone.CONSULTATIVE: 0.5,
    Tone.ENTHUSIASTIC: 0.7,
    Tone.PREMIUM: 0.4,
}

_TONE_DIRECTIVES: dict[Language, dict[Tone, str]] = {
    Language.FR: {
        Tone.CONCISE: "Direct et efficace : phrases courtes, une idée par message.",
        Tone.CONSULTATIVE: (
            "Consultatif : écoute active, reformule les besoins avant de proposer."
        ),
        Tone.ENTHUSIASTIC: "Énergique et chaleureux : transmets l'enthousiasme sans exagérer.",
        Tone.PREMIUM: "Haut de gamme et exclusif : vocabulaire soigné, posture d'expert.",
    },
    Language.EN: {
        Tone.CONCISE: "Direct and efficient: short sentences, one idea per message.",
        Tone.CONSULTATIVE: "Consultative: listen actively, restate needs before proposing.",
        Tone.ENTHUSIASTIC: "Energetic and warm: convey enthusiasm without overselling.",
        Tone.PREMIUM: "High-end and exclusive: polished vocabulary, expert posture.",
    },
}

_LANGUAGE_DIRECTIVES: dict[Language, str] = {
    Language.FR: (
        "Réponds exclusivement en français, en vouvoyant le prospect, "
        "dans un registre professionnel adapté à WhatsApp."
    ),
    Language.EN: (
        "Reply exclusively in English, in a professional register suited to WhatsApp."
    ),
}


@dataclass(frozen=True, slots=True)
class CompiledPrompt:
    """Resultado da compilação."""

    system_prompt: str
    temperature: float


def tone_temperature(tone: Tone) -> float:
    """Temperatura associada ao tom (tom desconhecido é erro de programação)."""
    return TONE_TEMPERATURES[tone]


def _format_questions(questions: tuple[str, ...]) -> str:
    return "\n".join(f"{index}. {question}" for index, question in enumerate(questions, start=1))


def _build_fr(persona: PersonaConfig) -> str:
    return f"""Tu es l'agent commercial de {persona.company_name}, chargé de qualifier des prospects sur WhatsApp.

## Proposition de valeur
{persona.value_proposition}

## Profil cible
{persona.target_profile}

## Ton
{_TONE_DIRECTIVES[Language.FR][persona.tone]}

## Script de qualification
Pose ces questions dans cet ordre, une seule à la fois, en t'appuyant sur les réponses précédentes :
{_format_questions(persona.qualification_questions)}

## Stratégie de closing
{persona.closing_strategy}

## Appel à l'action
{persona.call_to_action}

## Règles
- Ne pose jamais plus d'une question par message.
- Si le prospect n'est pas qualifié, remercie-le poliment et reste disponible.
- {_LANGUAGE_DIRECTIVES[Language.FR]}"""


def _build_en(persona: PersonaConfig) -> str:
    return f"""You are the sales agent of {persona.company_name}, in charge of qualifying prospects on WhatsApp.

## Value proposition
{persona.value_proposition}

## Target profile
{persona.target_profile}

## Tone
{_TONE_DIRECTIVES[Language.EN][persona.tone]}

## Qualification script
Ask these questions in this order, one at a time, building on previous answers:
{_format_questions(persona.qualification_questions)}

## Closing strategy
{persona.closing_strategy}

## Call to action
{persona.call_to_action}

## Rules
- Never ask more than one question per message.
- If the prospect is not qualified, thank them politely and stay available.
- {_LANGUAGE_DIRECTIVES[Language.EN]}"""


def build_system_prompt(persona: PersonaConfig) -> str:
    """Monta o prompt de sistema no registro do idioma da persona."""
    if persona.language is Language.EN:
        return _build_en(persona)
    return _build_fr(persona)


def compile_persona(persona: PersonaConfig) -> CompiledPrompt:
    """Compila persona em (system_prompt, temperature)."""
    return CompiledPrompt(
        system_prompt=build_system_prompt(persona),
        temperature=tone_temperature(persona.tone),
    )
