"""Testes para PersonaConfig, ConversationTurn e SimulationPayload."""

from __future__ import annotations

import pydantic
import pytest

from qualif_agent.domain.enums import Language, Role, Tone
from qualif_agent.domain.errors import ValidationError
from qualif_agent.domain.persona import (
    DEFAULT_PERSONA,
    ConversationTurn,
    PersonaConfig,
    SimulationPayload,
)


class TestPersonaDecode:
    """Decodificação direta do payload."""

    def test_valid_camel_case_payload(self, persona_payload: dict) -> None:
        persona = PersonaConfig.from_payload(persona_payload)

        assert persona.company_name == "Acme Cloud"
        assert persona.tone is Tone.PREMIUM
        assert persona.language is Language.FR
        assert persona.qualification_questions == (
            "Quel est votre hébergeur actuel ?",
            "Combien de serveurs gérez-vous ?",
        )

    def test_snake_case_names_accepted(self, persona_payload: dict) -> None:
        snake = {
            "company_name": persona_payload["companyName"],
            "value_proposition": persona_payload["valueProposition"],
            "target_profile": persona_payload["targetProfile"],
            "tone": "concise",
            "qualification_questions": ["Q1"],
            "closing_strategy": persona_payload["closingStrategy"],
            "call_to_action": persona_payload["callToAction"],
            "language": "en",
        }

        persona = PersonaConfig.from_payload(snake)
        assert persona.tone is Tone.CONCISE
        assert persona.language is Language.EN

    def test_missing_field_is_named(self, persona_payload: dict) -> None:
        del persona_payload["callToAction"]

        with pytest.raises(ValidationError) as exc_info:
            PersonaConfig.from_payload(persona_payload)

        assert "callToAction" in str(exc_info.value)
        assert "callToAction" in exc_info.value.fields

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_string_rejected(self, persona_payload: dict, value: str) -> None:
        persona_payload["companyName"] = value

        with pytest.raises(ValidationError) as exc_info:
            PersonaConfig.from_payload(persona_payload)

        assert "companyName" in exc_info.value.fields

    def test_unknown_tone_rejected(self, persona_payload: dict) -> None:
        persona_payload["tone"] = "aggressive"

        with pytest.raises(ValidationError) as exc_info:
            PersonaConfig.from_payload(persona_payload)

        assert "tone" in exc_info.value.fields

    def test_unknown_language_rejected(self, persona_payload: dict) -> None:
        persona_payload["language"] = "de"

        with pytest.raises(ValidationError):
            PersonaConfig.from_payload(persona_payload)

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("concis", Tone.CONCISE),
            ("consultatif", Tone.CONSULTATIVE),
            ("enthousiaste", Tone.ENTHUSIASTIC),
            ("premium", Tone.PREMIUM),
            ("Consultative", Tone.CONSULTATIVE),
        ],
    )
    def test_french_tone_labels_normalized(
        self, persona_payload: dict, label: str, expected: Tone
    ) -> None:
        persona_payload["tone"] = label
        assert PersonaConfig.from_payload(persona_payload).tone is expected

    def test_empty_question_list_rejected(self, persona_payload: dict) -> None:
        persona_payload["qualificationQuestions"] = []

        with pytest.raises(ValidationError) as exc_info:
            PersonaConfig.from_payload(persona_payload)

        assert "qualificationQuestions" in exc_info.value.fields

    def test_blank_question_rejected(self, persona_payload: dict) -> None:
        persona_payload["qualificationQuestions"] = ["Q1", "  "]

        with pytest.raises(ValidationError):
            PersonaConfig.from_payload(persona_payload)

    def test_duplicate_questions_allowed_and_ordered(self, persona_payload: dict) -> None:
        persona_payload["qualificationQuestions"] = ["B", "A", "B"]

        persona = PersonaConfig.from_payload(persona_payload)
        assert persona.qualification_questions == ("B", "A", "B")

    def test_persona_is_immutable(self, persona_payload: dict) -> None:
        persona = PersonaConfig.from_payload(persona_payload)

        with pytest.raises(pydantic.ValidationError):
            persona.company_name = "Other"  # type: ignore[misc]


class TestDefaultPersona:
    """Persona embutida usada como fallback."""

    def test_default_persona_is_valid_and_french(self) -> None:
        assert DEFAULT_PERSONA.company_name == "NovaSales"
        assert DEFAULT_PERSONA.tone is Tone.CONSULTATIVE
        assert DEFAULT_PERSONA.language is Language.FR
        assert len(DEFAULT_PERSONA.qualification_questions) == 3


class TestConversationTurn:
    def test_as_message(self) -> None:
        turn = ConversationTurn(role=Role.USER, content="Bonjour")
        assert turn.as_message() == {"role": "user", "content": "Bonjour"}

    def test_empty_content_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ConversationTurn(role=Role.USER, content="")

    def test_whitespace_content_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ConversationTurn(role=Role.USER, content="   \n")


class TestSimulationPayload:
    def test_valid_payload(self, persona_payload: dict) -> None:
        payload = SimulationPayload.from_payload(
            {
                "config": persona_payload,
                "conversation": [
                    {"role": "assistant", "content": "Bonjour !"},
                    {"role": "user", "content": "Salut"},
                ],
            }
        )

        assert payload.config.company_name == "Acme Cloud"
        assert [t.role for t in payload.conversation] == [Role.ASSISTANT, Role.USER]

    def test_system_role_rejected(self, persona_payload: dict) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SimulationPayload.from_payload(
                {"config": persona_payload, "conversation": [{"role": "system", "content": "x"}]}
            )

        assert any(field.startswith("conversation") for field in exc_info.value.fields)

    def test_blank_turn_content_rejected(self, persona_payload: dict) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SimulationPayload.from_payload(
                {"config": persona_payload, "conversation": [{"role": "user", "content": "   "}]}
            )

        assert "conversation.0.content" in exc_info.value.fields

    def test_missing_config_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SimulationPayload.from_payload({"conversation": []})

        assert "config" in exc_info.value.fields

    def test_non_object_payload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SimulationPayload.from_payload(["not", "an", "object"])
