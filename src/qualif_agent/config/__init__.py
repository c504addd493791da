"""Configurações centralizadas do qualif_agent.

Uso típico:
    from qualif_agent.config import get_settings
"""

from qualif_agent.config.settings import (
    QUALIFICATION_SEPARATOR,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "QUALIFICATION_SEPARATOR",
]
