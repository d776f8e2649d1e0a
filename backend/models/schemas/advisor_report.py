"""Resume quality assessment: structural flags, score and suggestions."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer

# Read-only once validated; dumps as a plain dict
Deductions = Annotated[Mapping[str, int], AfterValidator(MappingProxyType), PlainSerializer(dict)]


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SectionFlags(BaseModel):
    """Structural signals detected in raw resume text.

    Field order matches the advisor's deduction table.
    """
    model_config = {"frozen": True}

    has_contact_info: bool = False
    has_skills_section: bool = False
    has_projects_or_experience: bool = False
    has_education: bool = False
    has_quantified_achievements: bool = False
    has_action_verbs: bool = False
    has_bullet_formatting: bool = False

    def missing(self) -> list[str]:
        """Names of the failed signals, without the ``has_`` prefix."""
        return [name.removeprefix("has_") for name, present in self if not present]


class AdvisorReport(BaseModel):
    """Quality score (0-100), priority tier and ordered improvement suggestions.

    ``suggestions`` and ``deductions`` are ordered by deduction weight,
    highest impact first.
    """
    model_config = {"frozen": True}

    score: int = Field(default=100, ge=0, le=100)
    priority: Priority = Priority.LOW
    summary: str = ""
    suggestions: tuple[str, ...] = ()
    flags: SectionFlags = SectionFlags()
    deductions: Deductions = Field(default_factory=lambda: MappingProxyType({}))
    missing_skills: tuple[str, ...] = ()
