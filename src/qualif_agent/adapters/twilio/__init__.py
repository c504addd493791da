"""Adapter Twilio (WhatsApp): formulário, assinatura e TwiML."""

from qualif_agent.adapters.twilio.form import decode_form_body
from qualif_agent.adapters.twilio.signature import (
    SIGNATURE_HEADER,
    SignatureResult,
    compute_twilio_signature,
    verify_twilio_signature,
)
from qualif_agent.adapters.twilio.twiml import TWIML_MEDIA_TYPE, render_message_response

__all__ = [
    "SIGNATURE_HEADER",
    "SignatureResult",
    "TWIML_MEDIA_TYPE",
    "compute_twilio_signature",
    "decode_form_body",
    "render_message_response",
    "verify_twilio_signature",
]
