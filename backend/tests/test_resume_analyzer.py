"""Tests for the ranking and quality-analysis entry points."""

import pytest

from models.schemas.advisor_report import Priority
from services.match_ranker import build_job_description, build_resume_record
from services.resume_analyzer import analyze_quality, rank_resumes, screen_resumes

JOB_TEXT = """Frontend Developer.
We are hiring a frontend developer to build fast web apps with React, TypeScript and AWS.
You will lead a team, reduce load time and ship reusable React components.
Skills: React, TypeScript, AWS. Education: B.S. Computer Science or equivalent experience.
"""

SCENARIO_LINE = (
    "Built apps using React and AWS, led a team, reduced load time by 40%, "
    "includes Skills: React, AWS section, Education: B.S. Computer Science"
)

SCENARIO_RESUME = f"""Jane Smith
jane.smith@example.com | (555) 987-6543

Summary
Frontend developer building fast web apps with React.

Experience
Frontend Developer | WebWorks | 2020 - Present
- {SCENARIO_LINE}
- Implemented reusable React components adopted by 4 teams
"""


@pytest.fixture
def job(generator):
    return build_job_description(
        "job-1",
        "Frontend Developer",
        JOB_TEXT,
        required_skills=["React", "TypeScript", "AWS"],
        generator=generator,
    )


def test_analyze_quality_scenario_resume():
    report = analyze_quality(SCENARIO_RESUME, job_skills=["React", "TypeScript", "AWS"])
    assert report.priority in (Priority.LOW, Priority.MEDIUM)
    assert report.flags.has_quantified_achievements
    assert report.flags.has_education
    assert report.missing_skills == ("typescript",)


def test_analyze_quality_single_line():
    # On its own the line has no contact details, headings or bullets:
    # 100 - 15 - 15 - 10 - 10 (brief) = 50
    report = analyze_quality(SCENARIO_LINE, job_skills=["React", "TypeScript", "AWS"])
    assert report.score == 50
    assert report.priority == Priority.HIGH
    assert report.flags.has_quantified_achievements
    assert report.flags.has_education
    assert report.flags.has_skills_section
    assert not report.flags.has_contact_info
    assert "contact_info" in report.deductions


def test_analyze_quality_empty_resume():
    report = analyze_quality("")
    assert report.score == 0
    assert report.priority == Priority.CRITICAL
    assert len(report.suggestions) == 8


def test_analyze_quality_canonicalizes_job_skills():
    report = analyze_quality("", job_skills=["K8s", "Terraform", "Golang"])
    assert report.missing_skills == ("go", "kubernetes", "terraform")
    assert "skill_gap" in report.deductions
    assert len(report.suggestions) == 9


def test_analyze_quality_is_deterministic():
    assert analyze_quality(SCENARIO_RESUME) == analyze_quality(SCENARIO_RESUME)


def test_rank_resumes_entry_point(job, generator):
    resumes = [
        build_resume_record("weak", "weak.txt", "Marketing manager", generator),
        build_resume_record("strong", "strong.txt", SCENARIO_RESUME, generator),
    ]
    ranked = rank_resumes(job, resumes)
    assert [r.resume_id for r in ranked] == ["strong", "weak"]
    assert ranked[0].match_percentage > 60


def test_screen_resumes(job, generator):
    documents = [
        ("r3", "empty.txt", ""),
        ("r2", "copy.txt", SCENARIO_RESUME),
        ("r1", "jane.txt", SCENARIO_RESUME),
    ]
    report = screen_resumes(job, documents, generator=generator)
    assert report.job_id == "job-1"
    assert [r.resume_id for r in report.ranking] == ["r1", "r2", "r3"]
    assert set(report.reports) == {"r1", "r2", "r3"}
    assert report.reports["r1"] == report.reports["r2"]
    assert report.reports["r3"].score == 0
    assert report.ranking[2].match_percentage == 0


def test_screen_resumes_identical_documents_score_identically(job, generator):
    documents = [("a", "a.txt", SCENARIO_RESUME), ("b", "b.txt", SCENARIO_RESUME)]
    first, second = screen_resumes(job, documents, max_workers=2, generator=generator).ranking
    assert first.model_dump(exclude={"resume_id"}) == second.model_dump(exclude={"resume_id"})


def test_screen_resumes_empty(job, generator):
    report = screen_resumes(job, [], generator=generator)
    assert report.ranking == ()
    assert report.reports == {}


def test_screen_resumes_reports_are_read_only(job, generator):
    report = screen_resumes(job, [("r1", "jane.txt", SCENARIO_RESUME)], generator=generator)
    with pytest.raises(TypeError):
        report.reports["r2"] = report.reports["r1"]
    assert list(report.reports) == ["r1"]
