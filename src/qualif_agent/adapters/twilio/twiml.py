"""Renderização do envelope TwiML de resposta."""

from __future__ import annotations

import xml.etree.ElementTree as ET

TWIML_MEDIA_TYPE = "text/xml"
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def render_message_response(message: str) -> str:
    """Gera <Response><Message>…</Message></Response> com o texto escapado."""
    root = ET.Element("Response")
    ET.SubElement(root, "Message").text = message
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode")
