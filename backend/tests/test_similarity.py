import numpy as np
import pytest

from services.similarity import InvalidDimensionError, cosine_similarity


def test_cosine_similarity_identical_embeddings(generator):
    vector = generator.embed("Python developer with React and Docker experience")
    assert cosine_similarity(vector, vector) == 1.0


def test_cosine_similarity_accepts_tuples(generator):
    vector = tuple(generator.embed("Python developer").tolist())
    assert cosine_similarity(vector, vector) == 1.0


def test_cosine_similarity_related_beats_unrelated(generator):
    jd = generator.embed("Looking for a Python backend engineer with REST API and Docker experience")
    related = generator.embed("Senior Python engineer building REST APIs with Docker")
    unrelated = generator.embed("Marketing manager with expertise in social media and brand strategy")
    assert cosine_similarity(related, jd) > cosine_similarity(unrelated, jd)


def test_cosine_similarity_is_bounded():
    rng = np.random.default_rng(0)
    for _ in range(50):
        a, b = rng.normal(size=16), rng.normal(size=16)
        score = cosine_similarity(a, b)
        assert 0.0 <= score <= 1.0


def test_cosine_similarity_floors_negative_values():
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == 0.0


def test_cosine_similarity_orthogonal():
    assert cosine_similarity([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]) == 0.0


def test_cosine_similarity_is_scale_invariant():
    assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == 1.0


def test_cosine_similarity_zero_vector():
    assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
    assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0
    assert cosine_similarity([], []) == 0.0


def test_cosine_similarity_rounds_to_six_places():
    score = cosine_similarity([1.0, 2.0], [2.0, 1.0])
    assert score == pytest.approx(0.8)
    assert score == round(score, 6)


def test_cosine_similarity_dimension_mismatch():
    with pytest.raises(InvalidDimensionError):
        cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])


def test_invalid_dimension_error_is_value_error():
    assert issubclass(InvalidDimensionError, ValueError)
