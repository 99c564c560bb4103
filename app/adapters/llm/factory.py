"""Build the configured LLM adapter, if any."""

import logging

from app.adapters.llm.gemini import GeminiLLMAdapter
from app.adapters.llm.openai_adapter import OpenAILLMAdapter
from app.config import LLMProvider, Settings
from app.ports.llm import LLMPort

logger = logging.getLogger(__name__)


def build_llm_adapter(settings: Settings) -> LLMPort | None:
    """Return the adapter for the configured provider, or None without a credential."""
    if not settings.has_llm_credential:
        logger.warning("No LLM API key configured; recommendations use the catalog fallback")
        return None

    api_key = settings.llm_api_key.get_secret_value()
    if settings.llm_provider is LLMProvider.OPENAI:
        return OpenAILLMAdapter(api_key=api_key, model=settings.openai_model)
    return GeminiLLMAdapter(
        api_key=api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
    )
