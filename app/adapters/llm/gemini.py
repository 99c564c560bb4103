import logging
from typing import Any

import httpx

from app.ports.llm import LLMPort

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 60.0


def to_gemini_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Translate a JSON Schema into Gemini's OpenAPI-style responseSchema.

    Gemini spells types in upper case and rejects `additionalProperties`.
    """
    out: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "additionalProperties":
            continue
        if key == "type":
            out[key] = value.upper()
        elif key == "properties":
            out[key] = {name: to_gemini_schema(sub) for name, sub in value.items()}
        elif key == "items":
            out[key] = to_gemini_schema(value)
        else:
            out[key] = value
    return out


class GeminiLLMAdapter(LLMPort):
    """LLM adapter using the Gemini `generateContent` REST endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def generate_json(
        self,
        system: str,
        user: str,
        schema: dict[str, Any],
        max_tokens: int,
    ) -> str:
        """Send a structured-output request to Gemini and return the JSON text."""
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": to_gemini_schema(schema),
                "maxOutputTokens": max_tokens,
            },
        }
        url = f"{self._base_url}/models/{self._model}:generateContent"
        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT, transport=self._transport
        ) as client:
            logger.info("Gemini request: model=%s, max_tokens=%d", self._model, max_tokens)
            resp = await client.post(
                url, json=payload, headers={"x-goog-api-key": self._api_key}
            )
            resp.raise_for_status()
            parts = resp.json()["candidates"][0]["content"]["parts"]
            result = "".join(p.get("text", "") for p in parts)
            logger.info("Gemini response: %d chars", len(result))
            return result
