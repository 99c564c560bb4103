import logging
from typing import Any

from openai import AsyncOpenAI

from app.ports.llm import LLMPort

logger = logging.getLogger(__name__)


class OpenAILLMAdapter(LLMPort):
    """LLM adapter using OpenAI API (GPT-4o, GPT-4o-mini, etc.)."""

    def __init__(self, api_key: str, model: str, client: AsyncOpenAI | None = None) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key)
        self._model = model

    async def generate_json(
        self,
        system: str,
        user: str,
        schema: dict[str, Any],
        max_tokens: int,
    ) -> str:
        """Send a strict JSON-schema chat completion request to OpenAI."""
        logger.info("OpenAI request: model=%s, max_tokens=%d", self._model, max_tokens)
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=0.7,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "structured_answer",
                    "schema": schema,
                    "strict": True,
                },
            },
        )
        result = resp.choices[0].message.content or ""
        logger.info("OpenAI response: %d chars", len(result))
        return result
