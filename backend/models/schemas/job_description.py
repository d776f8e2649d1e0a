"""Job posting prepared for matching: embedded once, read by every comparison."""

from pydantic import BaseModel


class JobDescription(BaseModel):
    """A job posting with its embedding and required skill set.

    Immutable after creation.
    """
    model_config = {"frozen": True}

    id: str
    title: str = ""
    raw_text: str = ""
    embedding: tuple[float, ...] = ()
    required_skills: frozenset[str] = frozenset()
