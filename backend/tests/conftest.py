"""Shared test configuration, pytest markers and fixtures."""

import pytest

from services import embedding
from services.embedding import HashingEmbeddingGenerator
from services.vocabulary import default_rules, default_vocabulary


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real ML models (slow, needs GPU/CPU)"
    )


@pytest.fixture
def generator():
    return HashingEmbeddingGenerator(dimension=128)


@pytest.fixture
def vocabulary():
    return default_vocabulary()


@pytest.fixture
def rules():
    return default_rules()


@pytest.fixture(autouse=True)
def _reset_generator_registry():
    yield
    embedding.clear()
