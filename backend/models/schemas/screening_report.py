"""Batch screening output: ranking plus per-resume quality reports."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer

from models.schemas.advisor_report import AdvisorReport
from models.schemas.match_result import MatchResult

Reports = Annotated[Mapping[str, AdvisorReport], AfterValidator(MappingProxyType), PlainSerializer(dict)]


class ScreeningReport(BaseModel):
    model_config = {"frozen": True}

    job_id: str
    ranking: tuple[MatchResult, ...] = ()
    reports: Reports = Field(default_factory=lambda: MappingProxyType({}))
