"""Text normalization shared by embedding, skill extraction and advisory scoring.

Keeps the characters that carry meaning in technical terms ("node.js",
"c++", "c#", "ci/cd", "scikit-learn", ".net") and treats every other
punctuation mark, including a sentence-final period, as a separator.
"""

import re
import unicodedata

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

# A token starts with a word character (or a leading dot, for ".net"), may
# contain ". # + / -" internally, and may end with "+" or "#" ("c++", "c#").
_TOKEN_RE = re.compile(r"\.?\w(?:[\w.#+/-]*[\w#+])?")


def _strip_non_printable(text: str) -> str:
    return "".join(ch for ch in text if ch.isprintable() or ch.isspace())


def normalize(text: str) -> str:
    """Return the lowercase, single-space-joined token string for ``text``.

    Idempotent: ``normalize(normalize(t)) == normalize(t)``.
    """
    if not text:
        return ""
    cleaned = _strip_non_printable(unicodedata.normalize("NFKC", text)).lower()
    return " ".join(_TOKEN_RE.findall(cleaned))


def tokenize(text: str) -> list[str]:
    """Split text into normalized tokens."""
    normalized = normalize(text)
    return normalized.split() if normalized else []


def content_tokens(tokens: list[str]) -> list[str]:
    """Drop English stop words, keeping the input when nothing else remains."""
    kept = [t for t in tokens if t not in ENGLISH_STOP_WORDS]
    return kept or list(tokens)
