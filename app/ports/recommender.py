"""Recommender port — abstract interface for the recommendation engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.domain.models import Book


@dataclass(frozen=True)
class RecommendationRequest:
    """Everything the engine sees: the focal book, history and candidates."""

    focal: Book
    history: list[Book] = field(default_factory=list)
    candidates: list[Book] = field(default_factory=list)

    @classmethod
    def for_focal(
        cls, focal: Book, history: list[Book], catalog: list[Book]
    ) -> "RecommendationRequest":
        """Build a request whose candidates are the catalog minus the focal book."""
        return cls(
            focal=focal,
            history=list(history),
            candidates=[b for b in catalog if b.id != focal.id],
        )


@dataclass(frozen=True)
class RecommendationResult:
    """Recommended book ids with a reasoning string meant for direct display."""

    recommended_book_ids: list[str]
    reasoning: str


class RecommenderPort(ABC):
    """Abstraction for the book recommendation engine."""

    @abstractmethod
    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        """Return recommendations for the request. Must not raise."""
        ...
