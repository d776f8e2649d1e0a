"""Pydantic contracts shared by the matching and advisory pipelines."""

from models.schemas.job_description import JobDescription
from models.schemas.resume_record import ResumeRecord
from models.schemas.match_result import MatchResult
from models.schemas.advisor_report import AdvisorReport, Priority, SectionFlags
from models.schemas.screening_report import ScreeningReport

__all__ = [
    "JobDescription",
    "ResumeRecord",
    "MatchResult",
    "AdvisorReport",
    "Priority",
    "SectionFlags",
    "ScreeningReport",
]
