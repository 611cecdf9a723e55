"""Skill matcher output: resume vs. job description skill comparison."""

from typing import Literal

from pydantic import BaseModel, Field


class PartialMatch(BaseModel):
    """A near miss between a resume skill and a job skill."""
    resume_skill: str
    job_skill: str
    similarity: float = Field(default=0.0, ge=0.0, le=1.0)  # shared-token overlap


class CategoryBreakdown(BaseModel):
    category: str
    matched: list[str] = []
    missing: list[str] = []


class MatchReport(BaseModel):
    """Structured output of the skill matcher.

    ``match_percentage`` is an integer 0-100 and the only figure a caller
    should persist; lists hold normalized job skill names in job order.
    """
    kind: Literal["match_report"] = "match_report"
    match_percentage: int = Field(default=0, ge=0, le=100)
    matched_skills: list[str] = []
    missing_skills: list[str] = []
    partial_matches: list[PartialMatch] = []
    skills_by_category: list[CategoryBreakdown] = []
