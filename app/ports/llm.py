"""LLM port: provider-agnostic structured generation."""

from abc import ABC, abstractmethod
from typing import Any


class LLMPort(ABC):
    """Abstraction over a generative model that can answer in JSON."""

    @abstractmethod
    async def generate_json(
        self,
        system: str,
        user: str,
        schema: dict[str, Any],
        max_tokens: int,
    ) -> str:
        """Return the raw JSON text produced for the prompt and output schema."""
        ...
