"""Validação de assinatura do webhook Twilio (HMAC SHA-1, base64).

Algoritmo: URL do callback concatenada com cada par chave+valor dos campos
POST ordenados por chave, assinada com o auth token da conta.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass

SIGNATURE_HEADER = "x-twilio-signature"


@dataclass(slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    error: str | None = None


def compute_twilio_signature(url: str, params: Mapping[str, str], auth_token: str) -> str:
    """Calcula a assinatura esperada para a URL e os campos."""
    data = url + "".join(f"{key}{params[key]}" for key in sorted(params))
    digest = hmac.new(auth_token.encode("utf-8"), data.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_twilio_signature(
    url: str,
    params: Mapping[str, str],
    headers: Mapping[str, str],
    auth_token: str,
) -> SignatureResult:
    """Valida o header X-Twilio-Signature.

    O auth token é obrigatório: a ausência é tratada antes, como
    erro de configuração.
    """
    signature = headers.get(SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_twilio_signature(url, params, auth_token)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
