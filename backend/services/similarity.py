"""Cosine similarity between resume and job embeddings."""

from collections.abc import Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

# Norms below this are treated as the zero vector
EPSILON = 1e-12


class InvalidDimensionError(ValueError):
    """Two embeddings of different length were compared.

    Signals a generator configuration mismatch upstream.
    """


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Cosine similarity clamped to [0, 1].

    Negative cosine carries no meaning for job matching and is floored to
    0. A zero (or near-zero) vector on either side gives 0 rather than a
    division by zero.
    """
    vec_a = np.asarray(a, dtype=np.float64).ravel()
    vec_b = np.asarray(b, dtype=np.float64).ravel()
    if vec_a.shape != vec_b.shape:
        raise InvalidDimensionError(
            f"Cannot compare embeddings of dimension {vec_a.size} and {vec_b.size}"
        )
    if vec_a.size == 0 or np.linalg.norm(vec_a) < EPSILON or np.linalg.norm(vec_b) < EPSILON:
        return 0.0

    score = float(sklearn_cosine(vec_a.reshape(1, -1), vec_b.reshape(1, -1))[0][0])
    return round(min(1.0, max(0.0, score)), 6)
