from pydantic import BaseModel

from models.schemas.match_report import MatchReport
from models.schemas.skill_set import SkillSet


class AnalysisResponse(BaseModel):
    resume_skills: SkillSet = SkillSet(kind="resume")
    job_skills: SkillSet = SkillSet(kind="job")
    report: MatchReport = MatchReport()
    degraded: bool = False
    used_fallback: bool = False  # regex extractor replaced Gemini for some chunk
    session_id: str | None = None


class SkillSearchResult(BaseModel):
    name: str
    category: str
    popularity: int = 0
