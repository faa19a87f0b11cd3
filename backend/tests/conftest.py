"""Shared test configuration, fixtures and pytest markers."""

import pytest

from config import Settings
from models.schemas import EntityProfile
from services.embeddings.hashing_provider import HashingEmbeddingProvider
from services.engine import MatchingEngine


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "network: calls the remote embedding API (needs GEMINI_API_KEY)"
    )


@pytest.fixture
def settings():
    return Settings(_env_file=None, embedding_dimensions=256)


@pytest.fixture
def engine(settings):
    provider = HashingEmbeddingProvider(dimensions=settings.embedding_dimensions)
    return MatchingEngine(settings, provider=provider)


@pytest.fixture
def expert_candidate():
    return EntityProfile(
        id="cand-1",
        description="Experienced forestry worker, chainsaw operation and tree felling",
        experience_level="expert",
        country="DE",
        languages={"english": "fluent"},
        compensation={"amount": 3000, "currency": "EUR"},
        culture_tags=["teamwork", "outdoor"],
    )


@pytest.fixture
def intermediate_opportunity():
    return EntityProfile(
        id="job-1",
        description="Experienced forestry worker, chainsaw operation and tree felling",
        experience_level="intermediate",
        country="DE",
        required_language="english",
        compensation={"amount": 3000, "currency": "EUR"},
        culture_tags=["teamwork"],
        industry="forestry",
    )
