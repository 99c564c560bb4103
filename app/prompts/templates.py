"""
Structured, reusable, versioned prompt templates for LLM interactions.

Design Principles:
  1. Prompts are immutable dataclass objects — no inline strings in adapters.
  2. Each template is versioned for traceability.
  3. Templates are adapter-agnostic: same template works with Gemini, OpenAI, etc.
  4. Output schemas are declared next to the prompt that requests them.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from app.domain.models import Book

# ── Token Estimation ─────────────────────────────────────────────
# Rough estimate: 1 token ≈ 4 characters for English text.

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Estimate token count from character length."""
    return len(text) // CHARS_PER_TOKEN


# ── Prompt Template ──────────────────────────────────────────────

@dataclass(frozen=True)
class PromptTemplate:
    """
    Immutable prompt template with system persona and user message.

    Attributes:
        name:          Unique identifier for logging and tracking.
        version:       Semantic version for prompt iteration tracking.
        system:        System message defining the LLM persona and constraints.
        user_template: User message template with {variable} placeholders.
        max_tokens:    Maximum output tokens requested from the LLM.
        tags:          Metadata tags for categorization.
    """

    name: str
    version: str
    system: str
    user_template: str
    max_tokens: int = 1024
    tags: tuple[str, ...] = field(default_factory=tuple)

    def render(self, **kwargs: str) -> dict[str, str]:
        """Render template with variables, returning system + user messages."""
        return {
            "system": self.system,
            "user": self.user_template.format(**kwargs),
        }


# ── Recommendation Prompt ────────────────────────────────────────

RECOMMEND_BOOKS = PromptTemplate(
    name="recommend_books",
    version="1.0.0",
    system="You are an expert librarian recommendation engine.",
    user_template=(
        "Context:\n"
        'The user is currently looking at: "{title}" by {author} ({genre}).\n'
        "The user has recently viewed/shown interest in: [{history}].\n\n"
        "Task:\n"
        'From the provided "Available Catalog" JSON below, select exactly 3 books '
        "that this user would most likely enjoy based on their current interest "
        "and history.\n"
        'Provide a "reasoning" paragraph explaining the common themes or why these '
        "specific books match their taste.\n\n"
        "Available Catalog:\n"
        "{catalog}"
    ),
    max_tokens=1024,
    tags=("recommendation", "book", "structured-output"),
)

# JSON Schema for the structured answer. Adapters translate it to their
# provider's dialect.
RECOMMENDATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "recommendedBookIds": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of exactly 3 book IDs from the catalog",
        },
        "reasoning": {
            "type": "string",
            "description": (
                "A friendly, librarian-style explanation of why these books were chosen."
            ),
        },
    },
    "required": ["recommendedBookIds", "reasoning"],
    "additionalProperties": False,
}


# ── Rendering Helpers ────────────────────────────────────────────

def serialize_candidates(candidates: list[Book]) -> str:
    """
    Compact JSON of the candidate books for the prompt.

    Only fields useful for thematic matching are sent: status, rating and
    cover are left out.
    """
    return json.dumps(
        [
            {
                "id": b.id,
                "title": b.title,
                "author": b.author,
                "genre": b.genre,
                "description": b.description,
            }
            for b in candidates
        ],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def render_recommendation_prompt(
    focal: Book,
    history: list[Book],
    candidates: list[Book],
) -> dict[str, str]:
    """
    Render the recommendation prompt.

    Args:
        focal: The book the user is looking at.
        history: Books viewed this session, oldest first.
        candidates: Catalog minus the focal book.

    Returns:
        Dict with 'system' and 'user' keys ready for any LLM adapter.
    """
    return RECOMMEND_BOOKS.render(
        title=focal.title,
        author=focal.author,
        genre=focal.genre,
        history=", ".join(b.title for b in history),
        catalog=serialize_candidates(candidates),
    )

