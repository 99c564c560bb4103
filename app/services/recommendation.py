"""AI recommendation client and the per-session recommendation controller."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from app.adapters.recommender.fallback import CatalogOrderRecommender
from app.domain.state import LibraryState, RecommendationPanel
from app.ports.llm import LLMPort
from app.ports.recommender import (
    RecommendationRequest,
    RecommendationResult,
    RecommenderPort,
)
from app.prompts.templates import (
    RECOMMEND_BOOKS,
    RECOMMENDATION_SCHEMA,
    estimate_tokens,
    render_recommendation_prompt,
)

logger = logging.getLogger(__name__)

ERROR_REASONING = "We are having trouble connecting to the AI Librarian at the moment."


class RecommendationPayload(BaseModel):
    """Structured answer expected back from the model."""

    model_config = ConfigDict(populate_by_name=True)

    recommended_book_ids: list[str] = Field(alias="recommendedBookIds")
    reasoning: str


class RecommendationClient(RecommenderPort):
    """
    Turns a RecommendationRequest into a RecommendationResult without raising.

    Three paths:
      - no LLM adapter (no credential): first candidates in catalog order;
      - LLM answers with valid JSON: the parsed result, passed through as-is;
      - anything else (transport, provider or parse failure): no ids and a
        fixed apology.

    Ids returned by the model are not checked against the candidates here;
    callers filter against their own catalog before display.
    """

    def __init__(self, llm: LLMPort | None) -> None:
        self._llm = llm
        self._fallback = CatalogOrderRecommender()

    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        if self._llm is None:
            return await self._fallback.recommend(request)

        prompt = render_recommendation_prompt(
            request.focal, request.history, request.candidates
        )
        logger.info(
            "Requesting recommendations for %s (%d candidates, ~%d prompt tokens)",
            request.focal.id,
            len(request.candidates),
            estimate_tokens(prompt["user"]),
        )
        try:
            raw = await self._llm.generate_json(
                prompt["system"],
                prompt["user"],
                RECOMMENDATION_SCHEMA,
                RECOMMEND_BOOKS.max_tokens,
            )
            payload = RecommendationPayload.model_validate_json(raw)
        except Exception:
            logger.exception("Recommendation call failed for book %s", request.focal.id)
            return RecommendationResult(recommended_book_ids=[], reasoning=ERROR_REASONING)

        return RecommendationResult(
            recommended_book_ids=payload.recommended_book_ids,
            reasoning=payload.reasoning,
        )


class RecommendationController:
    """
    Issues recommendation requests for the selected book of a session and
    drops answers that arrive after the selection moved on.
    """

    def __init__(self, client: RecommenderPort) -> None:
        self._client = client

    async def refresh(self, state: LibraryState) -> RecommendationPanel | None:
        """
        Fetch recommendations for the selected book.

        Returns None when nothing is selected, or when the answer is stale:
        another book was selected, or a newer request was issued, while
        this one was in flight.
        """
        focal = state.selected_book
        if focal is None:
            return None

        ticket = state.issue_recommendation_ticket(focal.id)
        request = RecommendationRequest.for_focal(
            focal, state.history.snapshot(), state.catalog
        )
        result = await self._client.recommend(request)

        if not state.is_current(ticket):
            logger.info(
                "Discarding stale recommendations for %s (request #%d)",
                ticket.focal_book_id,
                ticket.sequence,
            )
            return None

        wanted = set(result.recommended_book_ids)
        panel = RecommendationPanel(
            focal_book_id=focal.id,
            books=[b for b in state.catalog if b.id in wanted and b.id != focal.id],
            reasoning=result.reasoning,
        )
        state.recommendations = panel
        return panel
