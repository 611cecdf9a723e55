"""Persisted taxonomy records: skills, equivalent terms and relationships."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class SkillCategory(str, Enum):
    """Primary category of a skill, as stored and as proposed by extraction."""
    TECHNICAL = "technical"
    SOFT = "soft"
    TOOLS = "tools"
    FRAMEWORKS = "frameworks"
    LANGUAGES = "languages"
    DATABASES = "databases"
    METHODOLOGIES = "methodologies"
    PLATFORMS = "platforms"
    OTHER = "other"


class DomainCategory(str, Enum):
    """Secondary AI-domain overlay tags."""
    CONCEPTS = "concepts"
    FRAMEWORKS = "frameworks"
    INFRASTRUCTURE = "infrastructure"
    AGENTS = "agents"
    ENGINEERING = "engineering"
    DATA = "data"
    APPLICATIONS = "applications"


class RelationshipType(str, Enum):
    PARENT_CHILD = "parent-child"
    REQUIRES = "requires"
    SIMILAR = "similar"
    ALTERNATIVE = "alternative"
    USED_WITH = "used-with"


class Skill(BaseModel):
    """A canonical skill. ``normalized_name`` is unique within a store."""
    id: str
    name: str
    normalized_name: str
    category: SkillCategory = SkillCategory.OTHER
    description: str | None = None
    popularity: int = 0


class SkillEquivalent(BaseModel):
    """An alternate term that resolves to ``skill_id``."""
    id: str
    skill_id: str
    equivalent_term: str
    normalized_term: str


class SkillRelationship(BaseModel):
    """Directed edge from ``parent_skill_id`` to ``child_skill_id``."""
    id: str
    parent_skill_id: str
    child_skill_id: str
    relationship_type: RelationshipType = RelationshipType.PARENT_CHILD
    strength: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _reject_self_loop(self) -> "SkillRelationship":
        if self.parent_skill_id == self.child_skill_id:
            raise ValueError("a skill cannot be related to itself")
        return self


class SkillCategoryRecord(BaseModel):
    """Named grouping used by the admin taxonomy (e.g. "Cloud Platforms")."""
    id: str
    name: str
    description: str | None = None
    parent_category_id: str | None = None
