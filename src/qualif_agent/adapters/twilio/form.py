"""Decodificação do corpo form-urlencoded enviado pela Twilio."""

from __future__ import annotations

from urllib.parse import parse_qsl


def decode_form_body(raw_body: bytes | str) -> dict[str, str]:
    """Decodifica em mapa plano campo → valor (última ocorrência vence)."""
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode("utf-8", errors="replace")
    return dict(parse_qsl(raw_body, keep_blank_values=True))
