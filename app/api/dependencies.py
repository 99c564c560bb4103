"""Injectable collaborators, built once from settings and overridable in tests."""

from functools import lru_cache

from app.adapters.covers.openlibrary import OpenLibraryCoverAdapter
from app.adapters.llm.factory import build_llm_adapter
from app.config import settings
from app.ports.auth import CredentialVerifier
from app.ports.recommender import RecommenderPort
from app.services.auth import DemoCredentialVerifier
from app.services.recommendation import RecommendationClient


@lru_cache
def get_recommender() -> RecommenderPort:
    return RecommendationClient(build_llm_adapter(settings))


@lru_cache
def get_credential_verifier() -> CredentialVerifier:
    password = settings.admin_password
    return DemoCredentialVerifier(password.get_secret_value() if password else None)


@lru_cache
def get_cover_adapter() -> OpenLibraryCoverAdapter:
    return OpenLibraryCoverAdapter(
        base_url=settings.openlibrary_base_url,
        enabled=settings.cover_lookup_enabled,
    )
