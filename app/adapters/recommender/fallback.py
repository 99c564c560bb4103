import logging

from app.ports.recommender import (
    RecommendationRequest,
    RecommendationResult,
    RecommenderPort,
)

logger = logging.getLogger(__name__)

FALLBACK_LIMIT = 3
FALLBACK_REASONING = "API key missing. Showing catalog suggestions instead of AI picks."


class CatalogOrderRecommender(RecommenderPort):
    """
    Deterministic recommender used when no LLM credential is configured.

    Picks the first candidates in catalog order. No randomness, no I/O.
    """

    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        ids = [b.id for b in request.candidates[:FALLBACK_LIMIT]]
        logger.debug("CatalogOrderRecommender: %d picks for %s", len(ids), request.focal.id)
        return RecommendationResult(recommended_book_ids=ids, reasoning=FALLBACK_REASONING)
