"""Text embedding generators and their lazy registry.

The default generator is a deterministic bag of hashed tokens: no external
model, and cosine similarity between vectors reflects lexical overlap.
A Sentence-BERT generator can be selected instead via
``settings.embedding_backend = "sbert"``; vectors from different generators
are never comparable.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np
from sklearn.feature_extraction.text import HashingVectorizer

from config import settings
from services.text_normalizer import content_tokens, tokenize

logger = logging.getLogger(__name__)


class EmbeddingGenerator(ABC):
    """Base class for embedding generators.

    Subclasses must implement:
        - name: identifier used in the registry
        - load(): prepare the vectorizer or model
        - embed(text): return a fixed-length float vector
    """

    name: str = ""
    _loaded: bool = False

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this generator produces."""

    @abstractmethod
    def load(self) -> None:
        """Load vectorizer/model state. Called once by ``ensure_loaded``."""

    @abstractmethod
    def embed(self, text: str) -> np.ndarray:
        """Return the embedding of ``text``. Empty text gives the zero vector."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load if not already loaded."""
        if not self._loaded:
            logger.info("Loading embedding generator: %s", self.name)
            self.load()
            self._loaded = True
            logger.info("Embedding generator loaded: %s", self.name)


class HashingEmbeddingGenerator(EmbeddingGenerator):
    """Bag-of-hashed-tokens embedding, L2-normalized.

    Each token is hashed (MurmurHash3, fixed seed) into one of ``dimension``
    buckets and the bucket accumulates the token's frequency. Identical text
    always produces bit-identical vectors, across calls and processes.
    """

    name = "hashing"

    def __init__(self, dimension: int = 128, stop_words: bool = True) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self._dimension = dimension
        self.stop_words = stop_words
        self._vectorizer: HashingVectorizer | None = None

    @property
    def dimension(self) -> int:
        return self._dimension

    def _analyze(self, text: str) -> list[str]:
        tokens = tokenize(text)
        return content_tokens(tokens) if self.stop_words else tokens

    def load(self) -> None:
        self._vectorizer = HashingVectorizer(
            n_features=self._dimension,
            analyzer=self._analyze,
            alternate_sign=False,
            norm="l2",
            dtype=np.float64,
        )

    def embed(self, text: str) -> np.ndarray:
        self.ensure_loaded()
        matrix = self._vectorizer.transform([text])
        return matrix.toarray()[0]


class SentenceEmbeddingGenerator(EmbeddingGenerator):
    """Sentence-BERT embeddings (semantic rather than lexical similarity).

    The model (~425MB for JobBERT-v2) is loaded on first use.
    """

    name = "sbert"

    def __init__(self, model_name: str = "TechWolf/JobBERT-v2") -> None:
        self.model_name = model_name
        self._model = None

    @property
    def dimension(self) -> int:
        self.ensure_loaded()
        return int(self._model.get_sentence_embedding_dimension())

    def load(self) -> None:
        try:
            from sentence_transformers import SentenceTransformer

            self._model = SentenceTransformer(self.model_name)
        except Exception as e:
            logger.error("Failed to load sentence model %s: %s", self.model_name, e)
            raise RuntimeError(
                f"Embedding backend 'sbert' is unavailable: could not load '{self.model_name}'. "
                "Install the 'semantic' extra or use the 'hashing' backend."
            ) from e

    def embed(self, text: str) -> np.ndarray:
        self.ensure_loaded()
        if not tokenize(text):
            return np.zeros(self.dimension, dtype=np.float64)
        vector = self._model.encode([text], convert_to_numpy=True, normalize_embeddings=True)[0]
        return np.asarray(vector, dtype=np.float64)


# ---------------------------------------------------------------------------
# Registry: one generator per backend name, created on first access
# ---------------------------------------------------------------------------

_registry: dict[str, EmbeddingGenerator] = {}


def _create_generator(name: str) -> EmbeddingGenerator:
    if name == "hashing":
        return HashingEmbeddingGenerator(
            dimension=settings.embedding_dimension,
            stop_words=settings.embedding_stop_words,
        )
    elif name == "sbert":
        return SentenceEmbeddingGenerator(settings.sbert_model_name)
    else:
        raise ValueError(f"Unknown embedding backend: {name}")


def get_generator(name: str | None = None) -> EmbeddingGenerator:
    """Get the generator for ``name`` (default: ``settings.embedding_backend``), loading it on first access."""
    name = name or settings.embedding_backend
    if name not in _registry:
        _registry[name] = _create_generator(name)
    generator = _registry[name]
    generator.ensure_loaded()
    return generator


def clear() -> None:
    """Drop all cached generators. Useful for testing."""
    _registry.clear()
