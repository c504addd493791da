"""Testes do adapter Twilio: formulário, assinatura HMAC-SHA1 e TwiML."""

from __future__ import annotations

import base64
import hashlib
import hmac
import xml.etree.ElementTree as ET

from qualif_agent.adapters.twilio.form import decode_form_body
from qualif_agent.adapters.twilio.signature import (
    compute_twilio_signature,
    verify_twilio_signature,
)
from qualif_agent.adapters.twilio.twiml import render_message_response

URL = "https://agent.example.test/webhooks/whatsapp"
TOKEN = "my_auth_token"


def _expected(url: str, params: dict[str, str], token: str) -> str:
    data = url + "".join(k + params[k] for k in sorted(params))
    return base64.b64encode(
        hmac.new(token.encode(), data.encode(), hashlib.sha1).digest()
    ).decode()


class TestDecodeFormBody:
    def test_decodes_urlencoded_fields(self) -> None:
        body = b"Body=Bonjour+%C3%A0+tous&From=whatsapp%3A%2B33612345678"
        assert decode_form_body(body) == {
            "Body": "Bonjour à tous",
            "From": "whatsapp:+33612345678",
        }

    def test_keeps_blank_values(self) -> None:
        assert decode_form_body("Body=&From=x") == {"Body": "", "From": "x"}

    def test_last_value_wins(self) -> None:
        assert decode_form_body("A=1&A=2") == {"A": "2"}


class TestSignature:
    """Validação com auth token definido."""

    def test_compute_matches_algorithm(self) -> None:
        params = {"From": "whatsapp:+1555", "Body": "Hi", "AccountSid": "AC123"}
        assert compute_twilio_signature(URL, params, TOKEN) == _expected(URL, params, TOKEN)

    def test_key_order_is_irrelevant(self) -> None:
        a = {"b": "2", "a": "1"}
        b = {"a": "1", "b": "2"}
        assert compute_twilio_signature(URL, a, TOKEN) == compute_twilio_signature(URL, b, TOKEN)

    def test_valid_signature_passes(self) -> None:
        params = {"Body": "Bonjour", "From": "whatsapp:+33600000000"}
        headers = {"x-twilio-signature": _expected(URL, params, TOKEN)}

        result = verify_twilio_signature(URL, params, headers, TOKEN)
        assert result.valid
        assert result.error is None

    def test_tampered_field_fails(self) -> None:
        params = {"Body": "Bonjour", "From": "whatsapp:+33600000000"}
        headers = {"x-twilio-signature": _expected(URL, params, TOKEN)}

        result = verify_twilio_signature(URL, {**params, "Body": "Salut"}, headers, TOKEN)
        assert not result.valid
        assert result.error == "signature_mismatch"

    def test_other_url_fails(self) -> None:
        params = {"Body": "Bonjour"}
        headers = {"x-twilio-signature": _expected(URL, params, TOKEN)}

        result = verify_twilio_signature(URL + "?x=1", params, headers, TOKEN)
        assert not result.valid

    def test_missing_header_fails(self) -> None:
        result = verify_twilio_signature(URL, {"Body": "x"}, {}, TOKEN)
        assert not result.valid
        assert result.error == "missing_signature"

    def test_non_ascii_header_fails_cleanly(self) -> None:
        result = verify_twilio_signature(URL, {"Body": "x"}, {"x-twilio-signature": "é"}, TOKEN)
        assert not result.valid


class TestTwiml:
    def test_single_message_envelope(self) -> None:
        xml = render_message_response("Bonjour !")

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        root = ET.fromstring(xml.split("?>", 1)[1])
        assert root.tag == "Response"
        assert [child.tag for child in root] == ["Message"]
        assert root[0].text == "Bonjour !"

    def test_special_characters_escaped(self) -> None:
        xml = render_message_response("Prix < 5€ & > 2€")

        assert "&lt;" in xml and "&amp;" in xml
        root = ET.fromstring(xml.split("?>", 1)[1])
        assert root[0].text == "Prix < 5€ & > 2€"
