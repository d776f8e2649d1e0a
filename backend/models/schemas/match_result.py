"""Ranking output: how well one resume fits one job."""

from pydantic import BaseModel, Field


class MatchResult(BaseModel):
    """Blended job-fit score for a single resume.

    Rank order is a property of the list of results for one job, not of a
    single result. A result with ``error`` set is a sentinel for a
    comparison that could not be computed; all of its scores are zero.
    """
    model_config = {"frozen": True}

    resume_id: str
    similarity_score: float = Field(default=0.0, ge=0.0, le=1.0)
    matched_skills: frozenset[str] = frozenset()
    skill_match_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    match_percentage: int = Field(default=0, ge=0, le=100)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
