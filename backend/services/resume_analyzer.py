"""Entry points: job-fit ranking and resume quality analysis.

Pipeline per resume:
1. Normalization + embedding (lexical hashing by default)
2. Skill extraction against the skill vocabulary
3. Similarity + skill overlap -> match percentage (ranking stream)
4. Section detection on raw text -> advisor report (quality stream)

The two streams read the same text and share no state. Batches fan out over
a thread pool; ranking sorts once after every resume has been scored.
"""

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from config import settings
from models.schemas.advisor_report import AdvisorReport
from models.schemas.job_description import JobDescription
from models.schemas.match_result import MatchResult
from models.schemas.resume_record import ResumeRecord
from models.schemas.screening_report import ScreeningReport
from services import match_ranker
from services.advisor import score_resume_quality
from services.embedding import EmbeddingGenerator, get_generator
from services.section_parser import detect_sections
from services.skill_extractor import extract_skills
from services.vocabulary import SectionRules, SkillVocabulary, default_rules, default_vocabulary

logger = logging.getLogger(__name__)


def rank_resumes(
    job: JobDescription,
    resumes: Sequence[ResumeRecord],
    max_workers: int | None = None,
) -> list[MatchResult]:
    """Rank resumes against a job, best match first."""
    return match_ranker.rank_resumes(job, resumes, max_workers=max_workers)


def analyze_quality(
    resume_text: str,
    job_skills: Iterable[str] | None = None,
    vocabulary: SkillVocabulary | None = None,
    rules: SectionRules | None = None,
) -> AdvisorReport:
    """Assess resume structure and produce prioritized suggestions.

    ``job_skills`` enables the missing-skills check; names are
    canonicalized through the vocabulary.
    """
    if vocabulary is None:
        vocabulary = default_vocabulary()
    rules = rules or default_rules()
    found = extract_skills(resume_text, vocabulary)
    flags = detect_sections(resume_text, rules)
    required = vocabulary.canonicalize_all(job_skills) if job_skills is not None else None
    return score_resume_quality(
        flags,
        found,
        job_skills=required,
        text_length=len(resume_text.strip()),
        rules=rules,
    )


def _screen_one(
    job: JobDescription,
    document: tuple[str, str, str],
    generator: EmbeddingGenerator,
    vocabulary: SkillVocabulary,
    rules: SectionRules,
) -> tuple[MatchResult, AdvisorReport]:
    resume_id, file_name, raw_text = document
    record = match_ranker.build_resume_record(resume_id, file_name, raw_text, generator, vocabulary)
    result = match_ranker.score_or_fail(job, record)
    report = analyze_quality(raw_text, job.required_skills, vocabulary, rules)
    return result, report


def screen_resumes(
    job: JobDescription,
    documents: Sequence[tuple[str, str, str]],
    max_workers: int | None = None,
    generator: EmbeddingGenerator | None = None,
    vocabulary: SkillVocabulary | None = None,
    rules: SectionRules | None = None,
) -> ScreeningReport:
    """Run the full per-resume pipeline over ``(resume_id, file_name, raw_text)`` documents.

    Returns the ranking for ``job`` plus an advisor report per resume id.
    """
    # Resolve shared read-only collaborators once, before fanning out
    generator = generator or get_generator()
    if vocabulary is None:
        vocabulary = default_vocabulary()
    rules = rules or default_rules()

    if not documents:
        return ScreeningReport(job_id=job.id)

    workers = max(1, min(max_workers or settings.max_workers, len(documents)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        outcomes = list(
            executor.map(
                lambda doc: _screen_one(job, doc, generator, vocabulary, rules),
                documents,
            )
        )

    ranking = match_ranker.rank_results(result for result, _ in outcomes)
    reports = {result.resume_id: report for result, report in outcomes}
    logger.debug("Screened %d resumes for job %s", len(outcomes), job.id)
    return ScreeningReport(job_id=job.id, ranking=tuple(ranking), reports=reports)
