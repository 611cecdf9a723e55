from typing import Literal

from pydantic import BaseModel, Field

from models.schemas.skill_set import SkillSet


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    job_description: str = Field(..., max_length=10000, description="Job description text")


class ExtractRequest(BaseModel):
    text: str = Field(..., max_length=50000, description="Resume or job description text")
    source: Literal["resume", "job"] = "resume"


class MatchRequest(BaseModel):
    resume_skills: SkillSet
    job_skills: SkillSet
