"""Mensagens fixas enviadas ao usuário final (nunca texto de erro bruto)."""

from __future__ import annotations

from qualif_agent.domain.enums import Language

CLARIFICATION_MESSAGE = "Merci pour votre message. Pouvez-vous préciser votre demande ?"
TECHNICAL_DIFFICULTY_MESSAGE = (
    "Nous rencontrons un léger contretemps technique. "
    "Un conseiller reprendra la conversation très vite."
)
SIMULATION_EMPTY_REPLY = "Je n'ai pas pu générer de réponse pour le moment."

_REPHRASE: dict[Language, str] = {
    Language.FR: "Je vous remercie pour votre message. Pourriez-vous reformuler ?",
    Language.EN: "Thank you for your message. Could you rephrase it?",
}

_GREETING: dict[Language, str] = {
    Language.FR: "Bonjour ! Je suis {company}. Comment puis-je vous aider aujourd'hui ?",
    Language.EN: "Hello! I'm {company}. How can I help you today?",
}


def greeting_message(company_name: str, language: Language) -> str:
    return _GREETING[language].format(company=company_name)


def rephrase_message(language: Language) -> str:
    return _REPHRASE[language]
