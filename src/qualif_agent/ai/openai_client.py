"""Generation Gateway: contrato e implementação OpenAI.

O gateway recebe um pedido determinístico (modelo, temperatura, penalidades,
mensagens com um system prompt inicial) e devolve a lista de candidatos.
Ausência de candidato ou texto vazio NÃO é erro: é "sem conteúdo".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from openai import APIError, APITimeoutError, AsyncOpenAI

from qualif_agent.ai.prompts import CompiledPrompt
from qualif_agent.domain.errors import GenerationError
from qualif_agent.domain.persona import ConversationTurn
from qualif_agent.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 320
WEBHOOK_FREQUENCY_PENALTY = 0.3
SIMULATION_FREQUENCY_PENALTY = 0.2


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Pedido ao serviço de geração."""

    model: str
    temperature: float
    messages: tuple[dict[str, str], ...]
    max_tokens: int = DEFAULT_MAX_TOKENS
    presence_penalty: float = 0.0
    frequency_penalty: float = WEBHOOK_FREQUENCY_PENALTY


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Candidatos devolvidos pelo provedor (texto opcional em cada um)."""

    candidates: list[str | None] = field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Texto do primeiro candidato, sem espaços; None se vazio/ausente."""
        if not self.candidates:
            return None
        first = (self.candidates[0] or "").strip()
        return first or None


def build_generation_request(
    compiled: CompiledPrompt,
    history: Sequence[ConversationTurn],
    *,
    model: str,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    frequency_penalty: float = WEBHOOK_FREQUENCY_PENALTY,
) -> GenerationRequest:
    """Monta pedido: system prompt seguido do histórico (mais antigo primeiro)."""
    messages = [{"role": "system", "content": compiled.system_prompt}]
    messages.extend(turn.as_message() for turn in history)
    return GenerationRequest(
        model=model,
        temperature=compiled.temperature,
        messages=tuple(messages),
        max_tokens=max_tokens,
        presence_penalty=0.0,
        frequency_penalty=frequency_penalty,
    )


class GenerationGateway(ABC):
    """Contrato do serviço externo de completion."""

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Executa a geração.

        Raises:
            GenerationError: rede, erro do provedor ou timeout
        """
        ...


class OpenAIGenerationGateway(GenerationGateway):
    """Gateway baseado em chat completions da OpenAI."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout_seconds: float = 20.0,
        max_retries: int = 2,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            api_key=api_key, timeout=timeout_seconds, max_retries=max_retries
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        try:
            completion = await self._client.chat.completions.create(
                model=request.model,
                temperature=request.temperature,
                messages=list(request.messages),
                max_tokens=request.max_tokens,
                presence_penalty=request.presence_penalty,
                frequency_penalty=request.frequency_penalty,
            )
        except (APIError, APITimeoutError) as e:
            logger.warning(
                "generation_provider_error",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise GenerationError("Erreur lors de l'appel OpenAI.", detail=str(e)) from e

        candidates = [
            choice.message.content if choice.message is not None else None
            for choice in (completion.choices or [])
        ]
        return GenerationResult(candidates=candidates)
