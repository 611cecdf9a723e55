"""Taxonomy store boundary and the in-memory implementation used by the service.

The matching core only reads through ``TaxonomyStore``; the write methods
back administrative flows such as seeding and are never called
while matching.
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from models.schemas.skill_taxonomy import (
    RelationshipType,
    Skill,
    SkillCategory,
    SkillCategoryRecord,
    SkillEquivalent,
    SkillRelationship,
)
from services.errors import AmbiguousEquivalentError, DuplicateSkillError
from services.skill_normalizer import normalize_skill

logger = logging.getLogger(__name__)


class TaxonomyStore(ABC):
    """Durable store of skills, equivalents and relationships.

    Implementations raise ``StoreUnavailable`` when the backing store
    cannot be reached; ``TaxonomyResolver`` turns that into empty answers.
    """

    @abstractmethod
    def find_by_normalized_name(self, normalized_name: str) -> Skill | None:
        """Exact lookup on the unique normalized name."""

    @abstractmethod
    def find_by_category(self, category: str) -> list[Skill]:
        """All skills whose primary category is ``category``."""

    @abstractmethod
    def equivalents_for(self, skill_id: str) -> list[SkillEquivalent]:
        """Equivalent terms registered for ``skill_id`` in insertion order."""

    @abstractmethod
    def relationships_for(self, skill_id: str) -> list[SkillRelationship]:
        """Edges whose parent is ``skill_id``."""

    @abstractmethod
    def skills_by_ids(self, skill_ids: list[str]) -> list[Skill]:
        """Skills for the given ids; unknown ids are skipped."""

    @abstractmethod
    def equivalent_owners(self, normalized_term: str) -> list[Skill]:
        """Skills that list ``normalized_term`` as an equivalent, first registered first."""

    @abstractmethod
    def search_names(self, fragment: str, limit: int = 20) -> list[Skill]:
        """Skills whose normalized name contains ``fragment``, most popular first."""

    @abstractmethod
    def all_skills(self) -> list[Skill]:
        """Every skill in insertion order."""

    @abstractmethod
    def all_equivalents(self) -> list[SkillEquivalent]:
        """Every equivalent term in insertion order."""

    @abstractmethod
    def all_categories(self) -> list[str]:
        """Names of the category groupings, sorted."""

    @abstractmethod
    def add_skill(
        self,
        name: str,
        category: str = SkillCategory.OTHER.value,
        description: str | None = None,
        popularity: int = 0,
    ) -> Skill:
        """Insert a skill; raises DuplicateSkillError on a normalized-name clash."""

    @abstractmethod
    def add_equivalent(self, skill_id: str, term: str, strict: bool = True) -> SkillEquivalent:
        """Register ``term`` as an alternate form of ``skill_id``."""

    @abstractmethod
    def add_relationship(
        self,
        parent_skill_id: str,
        child_skill_id: str,
        relationship_type: str = RelationshipType.PARENT_CHILD.value,
        strength: float = 1.0,
    ) -> SkillRelationship:
        """Insert a directed edge; self-loops are rejected."""


class InMemoryTaxonomyStore(TaxonomyStore):
    """Dict-backed store. A loaded store is a read-only snapshot for matching."""

    def __init__(self) -> None:
        self._skills: dict[str, Skill] = {}  # id -> skill
        self._by_name: dict[str, str] = {}  # normalized name -> id
        self._equivalents: list[SkillEquivalent] = []
        self._relationships: list[SkillRelationship] = []
        self._categories: dict[str, SkillCategoryRecord] = {}

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # --- reads ---

    def find_by_normalized_name(self, normalized_name: str) -> Skill | None:
        skill_id = self._by_name.get(normalized_name)
        return self._skills[skill_id] if skill_id else None

    def find_by_category(self, category: str) -> list[Skill]:
        return [s for s in self._skills.values() if s.category.value == category]

    def equivalents_for(self, skill_id: str) -> list[SkillEquivalent]:
        return [e for e in self._equivalents if e.skill_id == skill_id]

    def relationships_for(self, skill_id: str) -> list[SkillRelationship]:
        return [r for r in self._relationships if r.parent_skill_id == skill_id]

    def skills_by_ids(self, skill_ids: list[str]) -> list[Skill]:
        return [self._skills[i] for i in skill_ids if i in self._skills]

    def equivalent_owners(self, normalized_term: str) -> list[Skill]:
        owners: list[Skill] = []
        for eq in self._equivalents:
            if eq.normalized_term == normalized_term:
                skill = self._skills.get(eq.skill_id)
                if skill is not None and skill not in owners:
                    owners.append(skill)
        return owners

    def search_names(self, fragment: str, limit: int = 20) -> list[Skill]:
        hits = [s for s in self._skills.values() if fragment in s.normalized_name]
        hits.sort(key=lambda s: (-s.popularity, s.normalized_name))
        return hits[:limit]

    def all_skills(self) -> list[Skill]:
        return list(self._skills.values())

    def all_equivalents(self) -> list[SkillEquivalent]:
        return list(self._equivalents)

    def all_categories(self) -> list[str]:
        return sorted(self._categories)

    # --- writes ---

    def add_category(self, name: str, description: str | None = None) -> SkillCategoryRecord:
        if name not in self._categories:
            self._categories[name] = SkillCategoryRecord(
                id=self._new_id(), name=name, description=description
            )
        return self._categories[name]

    def add_skill(
        self,
        name: str,
        category: str = SkillCategory.OTHER.value,
        description: str | None = None,
        popularity: int = 0,
    ) -> Skill:
        normalized = normalize_skill(name)
        if not normalized:
            raise ValueError("skill name must not be empty")
        if normalized in self._by_name:
            raise DuplicateSkillError(f"skill already exists: {normalized!r}")
        skill = Skill(
            id=self._new_id(),
            name=name.strip(),
            normalized_name=normalized,
            category=SkillCategory(category),
            description=description,
            popularity=popularity,
        )
        self._skills[skill.id] = skill
        self._by_name[normalized] = skill.id
        return skill

    def add_equivalent(self, skill_id: str, term: str, strict: bool = True) -> SkillEquivalent:
        """Register ``term`` for ``skill_id``; re-adding the same pair is a no-op.

        With ``strict`` a term that is another skill's canonical name is
        refused. Seed loading passes ``strict=False`` so such collisions
        land in the store and are reported by the resolver instead.
        """
        if skill_id not in self._skills:
            raise KeyError(f"unknown skill id: {skill_id}")
        normalized = normalize_skill(term)
        if not normalized:
            raise ValueError("equivalent term must not be empty")

        for eq in self._equivalents:
            if eq.skill_id == skill_id and eq.normalized_term == normalized:
                return eq

        owner_id = self._by_name.get(normalized)
        if strict and owner_id is not None and owner_id != skill_id:
            raise AmbiguousEquivalentError(
                f"{term!r} is the canonical name of another skill"
            )

        eq = SkillEquivalent(
            id=self._new_id(),
            skill_id=skill_id,
            equivalent_term=term.strip(),
            normalized_term=normalized,
        )
        self._equivalents.append(eq)
        return eq

    def add_relationship(
        self,
        parent_skill_id: str,
        child_skill_id: str,
        relationship_type: str = RelationshipType.PARENT_CHILD.value,
        strength: float = 1.0,
    ) -> SkillRelationship:
        """Insert a typed edge; one edge per (parent, child, type).

        Re-adding an existing edge is a no-op; re-adding it with a different
        strength raises ValueError.
        """
        kind = RelationshipType(relationship_type)
        for rel in self._relationships:
            if (rel.parent_skill_id, rel.child_skill_id, rel.relationship_type) == (
                parent_skill_id, child_skill_id, kind
            ):
                if rel.strength != strength:
                    raise ValueError(
                        f"{kind.value} edge already exists with strength {rel.strength}"
                    )
                return rel
        rel = SkillRelationship(
            id=self._new_id(),
            parent_skill_id=parent_skill_id,
            child_skill_id=child_skill_id,
            relationship_type=kind,
            strength=strength,
        )
        self._relationships.append(rel)
        return rel


def load_seed(path: str | Path, store: InMemoryTaxonomyStore | None = None) -> InMemoryTaxonomyStore:
    """Populate a store from the JSON seed file.

    Equivalents and relationships naming unknown skills are skipped.
    """
    store = store or InMemoryTaxonomyStore()
    data = json.loads(Path(path).read_text(encoding="utf-8"))

    for category in data.get("categories", []):
        store.add_category(category["name"], category.get("description"))

    for group in data.get("skills", []):
        for name, popularity in group.get("skills", []):
            try:
                store.add_skill(name, group["category"], popularity=popularity)
            except DuplicateSkillError:
                logger.debug("Skipping duplicate seed skill %s", name)

    skipped = 0
    for skill_name, terms in data.get("equivalents", {}).items():
        skill = store.find_by_normalized_name(normalize_skill(skill_name))
        if skill is None:
            skipped += len(terms)
            continue
        for term in terms:
            store.add_equivalent(skill.id, term, strict=False)

    for parent_name, child_name, rel_type in data.get("relationships", []):
        parent = store.find_by_normalized_name(normalize_skill(parent_name))
        child = store.find_by_normalized_name(normalize_skill(child_name))
        if parent is None or child is None:
            skipped += 1
            continue
        store.add_relationship(parent.id, child.id, rel_type)

    logger.info(
        "Loaded taxonomy seed: %d skills, %d equivalents, %d skipped entries",
        len(store.all_skills()), len(store.all_equivalents()), skipped,
    )
    return store
