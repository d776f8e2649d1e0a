"""Tests for embedding generators and the generator registry."""

import numpy as np
import pytest

from services import embedding
from services.embedding import HashingEmbeddingGenerator, get_generator

TEXT = "Senior Python developer building REST APIs with Docker and AWS"


def test_hashing_embedding_has_configured_dimension():
    assert HashingEmbeddingGenerator(dimension=128).embed(TEXT).shape == (128,)
    assert HashingEmbeddingGenerator(dimension=64).embed(TEXT).shape == (64,)


def test_hashing_embedding_is_deterministic(generator):
    first = generator.embed(TEXT)
    second = generator.embed(TEXT)
    assert first.tobytes() == second.tobytes()


def test_hashing_embedding_is_identical_across_instances():
    a = HashingEmbeddingGenerator(dimension=128).embed(TEXT)
    b = HashingEmbeddingGenerator(dimension=128).embed(TEXT)
    assert a.tobytes() == b.tobytes()


def test_hashing_embedding_is_unit_length(generator):
    assert np.linalg.norm(generator.embed(TEXT)) == pytest.approx(1.0)


def test_hashing_embedding_has_no_negative_components(generator):
    assert (generator.embed(TEXT) >= 0).all()


def test_hashing_embedding_empty_text_is_zero_vector(generator):
    vector = generator.embed("")
    assert vector.shape == (128,)
    assert not vector.any()


def test_hashing_embedding_stop_word_only_text_is_not_zero(generator):
    assert np.linalg.norm(generator.embed("and the of")) == pytest.approx(1.0)


def test_hashing_embedding_ignores_case_and_punctuation(generator):
    a = generator.embed("Python, Docker; AWS!")
    b = generator.embed("python docker aws")
    assert a.tobytes() == b.tobytes()


def test_hashing_embedding_rejects_non_positive_dimension():
    with pytest.raises(ValueError):
        HashingEmbeddingGenerator(dimension=0)


def test_generator_loads_lazily():
    gen = HashingEmbeddingGenerator()
    assert not gen.is_loaded
    gen.embed(TEXT)
    assert gen.is_loaded


def test_get_generator_caches_instance():
    first = get_generator("hashing")
    assert first is get_generator("hashing")
    assert first.is_loaded


def test_clear_drops_cached_generators():
    first = get_generator("hashing")
    embedding.clear()
    assert get_generator("hashing") is not first


def test_get_generator_unknown_backend():
    with pytest.raises(ValueError, match="Unknown embedding backend"):
        get_generator("word2vec")


@pytest.mark.integration
def test_sentence_embedding_generator():
    pytest.importorskip("sentence_transformers")
    gen = get_generator("sbert")
    vector = gen.embed(TEXT)
    assert vector.shape == (gen.dimension,)
    assert np.linalg.norm(vector) == pytest.approx(1.0, abs=1e-5)
    assert not gen.embed("").any()
