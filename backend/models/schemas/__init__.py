"""Pydantic contracts shared by the skill matching pipeline."""

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from models.schemas.match_report import CategoryBreakdown, MatchReport, PartialMatch
from models.schemas.skill_set import (
    CandidateSkill,
    ExtractedCandidates,
    ScoredSkill,
    SkillSet,
    TextChunk,
)
from models.schemas.skill_taxonomy import (
    DomainCategory,
    RelationshipType,
    Skill,
    SkillCategory,
    SkillCategoryRecord,
    SkillEquivalent,
    SkillRelationship,
)

# Resume/job skill sets and match reports, told apart by ``kind``.
AnalysisResult = Annotated[Union[SkillSet, MatchReport], Field(discriminator="kind")]
analysis_result_adapter: TypeAdapter = TypeAdapter(AnalysisResult)

__all__ = [
    "AnalysisResult",
    "analysis_result_adapter",
    "CandidateSkill",
    "CategoryBreakdown",
    "DomainCategory",
    "ExtractedCandidates",
    "MatchReport",
    "PartialMatch",
    "RelationshipType",
    "ScoredSkill",
    "Skill",
    "SkillCategory",
    "SkillCategoryRecord",
    "SkillEquivalent",
    "SkillRelationship",
    "SkillSet",
    "TextChunk",
]
