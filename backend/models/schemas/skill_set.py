"""Transient extraction results: candidate skills and aggregated skill sets."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from models.schemas.skill_taxonomy import DomainCategory, SkillCategory

PRIMARY_CATEGORIES: tuple[str, ...] = tuple(c.value for c in SkillCategory)
DOMAIN_PREFIX = "ai_"
DOMAIN_BUCKETS: tuple[str, ...] = tuple(f"{DOMAIN_PREFIX}{d.value}" for d in DomainCategory)


def domain_bucket(domain: str) -> str:
    """SkillSet key for a secondary overlay tag, e.g. ``concepts`` -> ``ai_concepts``."""
    return f"{DOMAIN_PREFIX}{domain}"


class ScoredSkill(BaseModel):
    name: str
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class CandidateSkill(BaseModel):
    """An unverified extraction proposal; consumed by the aggregator."""
    raw_text: str
    category: str = SkillCategory.OTHER.value
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class ExtractedCandidates(BaseModel):
    """Schema for the extraction collaborator's JSON object.

    Every primary category defaults to an empty list. Non-string items
    are dropped and unknown keys are ignored.
    """
    technical: list[str] = []
    soft: list[str] = []
    tools: list[str] = []
    frameworks: list[str] = []
    languages: list[str] = []
    databases: list[str] = []
    methodologies: list[str] = []
    platforms: list[str] = []
    other: list[str] = []

    model_config = {"extra": "ignore"}

    @field_validator(*PRIMARY_CATEGORIES, mode="before")
    @classmethod
    def _strings_only(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            raise ValueError("expected a list of strings")
        return [item for item in value if isinstance(item, str)]

    def as_mapping(self) -> dict[str, list[str]]:
        return {category: list(getattr(self, category)) for category in PRIMARY_CATEGORIES}


class SkillSet(BaseModel):
    """Category -> scored skills. Absent and empty categories look the same."""
    kind: Literal["resume", "job"] = "resume"
    skills: dict[str, list[ScoredSkill]] = {}

    def get(self, category: str) -> list[ScoredSkill]:
        return self.skills.get(category, [])

    def categories(self) -> list[str]:
        """Categories holding at least one skill, in insertion order."""
        return [c for c, entries in self.skills.items() if entries]

    def names(self, category: str) -> list[str]:
        return [s.name for s in self.get(category)]

    def is_empty(self) -> bool:
        return not any(self.skills.values())


class TextChunk(BaseModel):
    """One window of a chunked document. ``start``/``end`` index the source text."""
    text: str
    index: int
    total: int
    is_first: bool
    is_last: bool
    start: int = 0
    end: int = 0
