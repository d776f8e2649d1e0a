"""Job-fit ranking: blends embedding similarity with required-skill overlap.

    match_percentage = round(100 * (W_SIMILARITY * similarity + W_SKILLS * skill_ratio))

Similarity to the full job text is the primary signal; explicit skill
overlap corroborates it.
"""

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from config import settings
from models.schemas.job_description import JobDescription
from models.schemas.match_result import MatchResult
from models.schemas.resume_record import ResumeRecord
from services.embedding import EmbeddingGenerator, get_generator
from services.similarity import InvalidDimensionError, cosine_similarity
from services.skill_extractor import extract_skills, get_skill_gap
from services.vocabulary import SkillVocabulary, default_vocabulary

logger = logging.getLogger(__name__)

# Weights for the blended match percentage
W_SIMILARITY = 0.6
W_SKILLS = 0.4


def build_job_description(
    job_id: str,
    title: str,
    raw_text: str,
    required_skills: Iterable[str] | None = None,
    generator: EmbeddingGenerator | None = None,
    vocabulary: SkillVocabulary | None = None,
) -> JobDescription:
    """Embed a job posting and resolve its required skills.

    Explicit ``required_skills`` are canonicalized through the vocabulary;
    otherwise they are extracted from the job text.
    """
    generator = generator or get_generator()
    if vocabulary is None:
        vocabulary = default_vocabulary()
    if required_skills is None:
        skills = extract_skills(raw_text, vocabulary)
    else:
        skills = vocabulary.canonicalize_all(required_skills)
    return JobDescription(
        id=job_id,
        title=title,
        raw_text=raw_text,
        embedding=tuple(generator.embed(raw_text).tolist()),
        required_skills=skills,
    )


def build_resume_record(
    resume_id: str,
    file_name: str,
    raw_text: str,
    generator: EmbeddingGenerator | None = None,
    vocabulary: SkillVocabulary | None = None,
) -> ResumeRecord:
    """Embed a resume and extract its skills."""
    generator = generator or get_generator()
    return ResumeRecord(
        id=resume_id,
        file_name=file_name,
        raw_text=raw_text,
        embedding=tuple(generator.embed(raw_text).tolist()),
        skills=extract_skills(raw_text, vocabulary),
    )


def compute_match_percentage(
    similarity: float,
    skill_ratio: float,
    similarity_weight: float = W_SIMILARITY,
    skill_weight: float = W_SKILLS,
) -> int:
    """Blend similarity and skill overlap into a 0-100 percentage."""
    raw = similarity_weight * similarity + skill_weight * skill_ratio
    return min(100, max(0, round(raw * 100)))


def score_resume(
    job: JobDescription,
    resume: ResumeRecord,
    similarity_weight: float = W_SIMILARITY,
    skill_weight: float = W_SKILLS,
) -> MatchResult:
    """Score one resume against one job.

    Raises InvalidDimensionError if the embeddings were produced by
    differently configured generators.
    """
    similarity = cosine_similarity(resume.embedding, job.embedding)
    matched, _ = get_skill_gap(resume.skills, job.required_skills)
    ratio = len(matched) / max(1, len(job.required_skills))
    return MatchResult(
        resume_id=resume.id,
        similarity_score=similarity,
        matched_skills=matched,
        skill_match_ratio=ratio,
        match_percentage=compute_match_percentage(similarity, ratio, similarity_weight, skill_weight),
    )


def failed_result(resume_id: str, error: str) -> MatchResult:
    """Sentinel for a comparison that could not be computed."""
    return MatchResult(resume_id=resume_id, error=error)


def score_or_fail(
    job: JobDescription,
    resume: ResumeRecord,
    similarity_weight: float = W_SIMILARITY,
    skill_weight: float = W_SKILLS,
) -> MatchResult:
    """Like score_resume, but an InvalidDimensionError becomes a failed sentinel result."""
    try:
        return score_resume(job, resume, similarity_weight, skill_weight)
    except InvalidDimensionError as e:
        logger.warning("Skipping resume %s for job %s: %s", resume.id, job.id, e)
        return failed_result(resume.id, str(e))


def rank_results(results: Iterable[MatchResult]) -> list[MatchResult]:
    """Sort by match percentage descending, resume id ascending on ties."""
    return sorted(results, key=lambda r: (-r.match_percentage, r.resume_id))


def rank_resumes(
    job: JobDescription,
    resumes: Sequence[ResumeRecord],
    max_workers: int | None = None,
    similarity_weight: float = W_SIMILARITY,
    skill_weight: float = W_SKILLS,
) -> list[MatchResult]:
    """Score every resume against ``job`` in parallel, then rank.

    A comparison that fails with InvalidDimensionError yields a sentinel
    result (``error`` set, percentage 0) and does not abort the batch.
    """
    if not resumes:
        return []
    workers = max(1, min(max_workers or settings.max_workers, len(resumes)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(
            executor.map(
                lambda resume: score_or_fail(job, resume, similarity_weight, skill_weight),
                resumes,
            )
        )
    ranked = rank_results(results)
    failed = sum(1 for r in ranked if r.failed)
    logger.debug("Ranked %d resumes for job %s (%d failed)", len(ranked), job.id, failed)
    return ranked
