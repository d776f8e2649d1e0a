"""Resume quality advisor: deductions, priority tier and ordered suggestions.

Scoring starts at 100 and subtracts a fixed weight for every failed rule,
floored at 0. Suggestions come out highest-impact first.
"""

import logging
from collections.abc import Iterable, Mapping

from models.schemas.advisor_report import AdvisorReport, Priority, SectionFlags
from services.vocabulary import SectionRules, default_rules

logger = logging.getLogger(__name__)

# Rule -> points deducted when the rule fails. Order breaks ties between equal weights.
DEDUCTIONS: dict[str, int] = {
    "contact_info": 15,
    "skills_section": 15,
    "projects_or_experience": 15,
    "education": 10,
    "quantified_achievements": 15,
    "action_verbs": 10,
    "bullet_formatting": 10,
    "skill_gap": 10,
    "brief_content": 10,
}

# Lowest score for each tier, checked top-down; anything below is critical
PRIORITY_THRESHOLDS: tuple[tuple[int, Priority], ...] = (
    (85, Priority.LOW),
    (70, Priority.MEDIUM),
    (50, Priority.HIGH),
)

MIN_MISSING_SKILLS = 3  # missing job skills before the gap rule fires
MIN_TEXT_LENGTH = 250  # characters of stripped text
MAX_NAMED_SKILLS = 5


def priority_for(score: int) -> Priority:
    for threshold, priority in PRIORITY_THRESHOLDS:
        if score >= threshold:
            return priority
    return Priority.CRITICAL


def _name_skills(skills: list[str]) -> str:
    named = ", ".join(skills[:MAX_NAMED_SKILLS])
    extra = len(skills) - MAX_NAMED_SKILLS
    return f"{named} (and {extra} more)" if extra > 0 else named


def _suggestion(
    rule: str,
    found_skills: list[str],
    missing_skills: list[str],
    text_length: int,
    rules: SectionRules,
) -> str:
    if rule == "contact_info":
        return (
            "Add contact details at the top of the resume, e.g. "
            "'jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe'."
        )
    if rule == "skills_section":
        example = _name_skills(found_skills) if found_skills else "Python, SQL, Docker, AWS"
        return f"Add a dedicated 'Skills' section, e.g. 'Skills: {example}'."
    if rule == "projects_or_experience":
        return (
            "Add an 'Experience' or 'Projects' section with role, employer and dates, "
            "e.g. 'Software Engineer, Acme Corp (2021 - Present)'."
        )
    if rule == "education":
        return (
            "Add an 'Education' section with your degree or certifications, "
            "e.g. 'B.S. Computer Science, State University, 2020'."
        )
    if rule == "quantified_achievements":
        return (
            "Quantify achievements with concrete numbers, "
            "e.g. 'Reduced page load time by 40%' or 'Grew active users to 10,000'."
        )
    if rule == "action_verbs":
        verbs = ", ".join(f"'{v}'" for v in rules.action_verbs[:3])
        return (
            f"Start each bullet with a strong action verb such as {verbs}, "
            "e.g. 'Implemented a caching layer that cut API latency by 30%'."
        )
    if rule == "bullet_formatting":
        return (
            "Format achievements as bullet points, one per line, "
            "e.g. '- Built a CI/CD pipeline with GitHub Actions'."
        )
    if rule == "skill_gap":
        return f"Add the job's required skills you can back up with experience: {_name_skills(missing_skills)}."
    if rule == "brief_content":
        return (
            f"Expand the resume: it has only {text_length} characters of text. "
            "Describe each role and project with concrete results."
        )
    raise ValueError(f"Unknown advisor rule: {rule}")


def _summary(count: int, priority: Priority) -> str:
    if count == 0:
        return f"No improvements needed; every check passed (priority: {priority.value})."
    plural = "s" if count != 1 else ""
    return f"Found {count} improvement{plural} for this resume (priority: {priority.value})."


def score_resume_quality(
    flags: SectionFlags,
    found_skills: Iterable[str],
    job_skills: Iterable[str] | None = None,
    text_length: int = 0,
    deductions: Mapping[str, int] = DEDUCTIONS,
    rules: SectionRules | None = None,
) -> AdvisorReport:
    """Turn detector flags and a skill-gap check into an AdvisorReport.

    Never fails: a resume with no detectable structure gets every suggestion
    and a score of 0. Rules left out of ``deductions`` are disabled.
    """
    rules = rules or default_rules()
    found = sorted(found_skills)
    missing = sorted(frozenset(job_skills) - frozenset(found)) if job_skills else []

    failed = flags.missing()
    if len(missing) >= MIN_MISSING_SKILLS:
        failed.append("skill_gap")
    if text_length < MIN_TEXT_LENGTH:
        failed.append("brief_content")
    failed = [rule for rule in failed if rule in deductions]

    order = list(deductions)
    failed.sort(key=lambda rule: (-deductions[rule], order.index(rule)))

    applied = {rule: deductions[rule] for rule in failed}
    score = max(0, 100 - sum(applied.values()))
    priority = priority_for(score)
    suggestions = tuple(_suggestion(rule, found, missing, text_length, rules) for rule in failed)

    logger.debug("Advisor score %d (%s) with %d suggestions", score, priority.value, len(suggestions))
    return AdvisorReport(
        score=score,
        priority=priority,
        summary=_summary(len(suggestions), priority),
        suggestions=suggestions,
        flags=flags,
        deductions=applied,
        missing_skills=tuple(missing),
    )
