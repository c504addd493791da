from __future__ import annotations

import pytest

from qualif_agent.config.settings import Settings, get_settings
from tests.helpers.fakes import AUTH_TOKEN, WEBHOOK_URL


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    """Settings com credenciais de teste e URL de assinatura fixa."""
    return Settings(
        openai_api_key="sk-test",
        twilio_auth_token=AUTH_TOKEN,
        whatsapp_webhook_url=WEBHOOK_URL,
    )


@pytest.fixture()
def persona_payload() -> dict:
    """Persona válida no formato camelCase do wire."""
    return {
        "companyName": "Acme Cloud",
        "valueProposition": "Hébergement souverain pour PME.",
        "targetProfile": "DSI de PME industrielles.",
        "tone": "premium",
        "qualificationQuestions": [
            "Quel est votre hébergeur actuel ?",
            "Combien de serveurs gérez-vous ?",
        ],
        "closingStrategy": "Mettre en avant la conformité RGPD.",
        "callToAction": "Proposer un audit gratuit.",
        "language": "fr",
    }
