"""Vocabulary-driven skill extraction.

Matches every alias of every canonical skill against normalized text as a
whole word or whole multi-word phrase. Exact alias matches only: there is
no fuzzy or typo-tolerant matching, trading recall for precision.
"""

import logging
from collections.abc import Iterable

from services.text_normalizer import normalize
from services.vocabulary import SkillVocabulary, default_vocabulary

logger = logging.getLogger(__name__)


def extract_skills(text: str, vocabulary: SkillVocabulary | None = None) -> frozenset[str]:
    """Return the canonical skills whose aliases appear in ``text``.

    Accepts raw or already-normalized text (normalization is idempotent).
    """
    if vocabulary is None:
        vocabulary = default_vocabulary()
    normalized = normalize(text)
    if not normalized:
        return frozenset()
    found = frozenset(
        skill for skill, pattern in vocabulary.patterns.items() if pattern.search(normalized)
    )
    logger.debug("Matched %d of %d vocabulary skills", len(found), len(vocabulary))
    return found


def get_skill_gap(
    found_skills: Iterable[str], required_skills: Iterable[str]
) -> tuple[frozenset[str], frozenset[str]]:
    """Get matched and missing skills between a resume and a job.

    Returns (matched_skills, missing_skills).
    """
    found = frozenset(found_skills)
    required = frozenset(required_skills)
    return found & required, required - found


def skill_match_ratio(found_skills: Iterable[str], required_skills: Iterable[str]) -> float:
    """Share of required skills present: |found ∩ required| / max(1, |required|)."""
    required = frozenset(required_skills)
    matched, _ = get_skill_gap(found_skills, required)
    return len(matched) / max(1, len(required))
