"""Testes da persona derivada do ambiente (com fallback)."""

from __future__ import annotations

import logging

import pytest

from qualif_agent.application.persona_loader import (
    load_persona_from_settings,
    split_qualification_points,
)
from qualif_agent.config.settings import Settings
from qualif_agent.domain.enums import Language, Tone
from qualif_agent.domain.persona import DEFAULT_PERSONA


class TestSplitQualificationPoints:
    def test_split_trim_and_drop_empty(self) -> None:
        raw = "  Q1 ? ||Q2 ?||   || Q3 ?  ||"
        assert split_qualification_points(raw) == ["Q1 ?", "Q2 ?", "Q3 ?"]

    def test_single_pipe_is_not_a_separator(self) -> None:
        assert split_qualification_points("A | B") == ["A | B"]


class TestLoadPersonaFromSettings:
    def test_defaults_when_nothing_configured(self) -> None:
        persona = load_persona_from_settings(Settings())
        assert persona == DEFAULT_PERSONA

    def test_env_values_override_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT_COMPANY_NAME", "Acme")
        monkeypatch.setenv("AGENT_TONE", "enthousiaste")
        monkeypatch.setenv("AGENT_LANGUAGE", "en")
        monkeypatch.setenv("AGENT_QUALIFICATION_POINTS", "Budget? || Team size? ||")

        persona = load_persona_from_settings(Settings())

        assert persona.company_name == "Acme"
        assert persona.tone is Tone.ENTHUSIASTIC
        assert persona.language is Language.EN
        assert persona.qualification_questions == ("Budget?", "Team size?")
        assert persona.value_proposition == DEFAULT_PERSONA.value_proposition

    def test_invalid_tone_falls_back_to_default(self, caplog) -> None:
        settings = Settings(agent_company_name="Acme", agent_tone="shouty")

        with caplog.at_level(logging.WARNING):
            persona = load_persona_from_settings(settings)

        assert persona == DEFAULT_PERSONA
        records = [r for r in caplog.records if r.message == "persona_config_fallback"]
        assert records
        assert records[-1].levelno == logging.WARNING
        assert records[-1].reason == "invalid_config"
        assert "tone" in records[-1].invalid_fields

    def test_only_separators_falls_back(self) -> None:
        settings = Settings(agent_company_name="Acme", agent_qualification_points=" || || ")

        assert load_persona_from_settings(settings) == DEFAULT_PERSONA

    def test_empty_company_name_falls_back(self) -> None:
        settings = Settings(agent_company_name="   ")

        assert load_persona_from_settings(settings) == DEFAULT_PERSONA
