"""qualif_agent — agente de qualificação comercial (WhatsApp via Twilio)."""

__version__ = "0.1.0"
