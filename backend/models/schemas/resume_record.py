"""Resume prepared for matching."""

from pydantic import BaseModel


class ResumeRecord(BaseModel):
    model_config = {"frozen": True}

    id: str
    file_name: str = ""
    raw_text: str = ""
    embedding: tuple[float, ...] = ()
    skills: frozenset[str] = frozenset()  # canonical skills found in raw_text
