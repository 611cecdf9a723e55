"""Taxonomy queries used by extraction and matching.

Every read goes through ``_safe``: a ``StoreUnavailable`` from the store
is logged and answered with the empty value, so callers see "no taxonomy
data" instead of an error and equivalence checks degrade to exact match.

Equivalence is NOT transitively closed: with A~B and B~C registered,
``are_equivalent(A, C)`` is False unless A~C is registered directly.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from models.schemas.skill_taxonomy import Skill
from services import ai_taxonomy
from services.errors import StoreUnavailable
from services.skill_normalizer import normalize_skill
from services.taxonomy_store import TaxonomyStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaxonomyResolver:
    def __init__(self, store: TaxonomyStore | None) -> None:
        self._store = store

    def _safe(self, op: str, fn: Callable[[TaxonomyStore], T], default: T) -> T:
        if self._store is None:
            return default
        try:
            return fn(self._store)
        except StoreUnavailable as e:
            logger.warning("Taxonomy store unavailable during %s: %s", op, e)
            return default

    # --- lookups ---

    def find_skill(self, name: str) -> Skill | None:
        """Exact lookup by normalized name; no containment at this layer."""
        normalized = normalize_skill(name)
        if not normalized:
            return None
        return self._safe("find_skill", lambda s: s.find_by_normalized_name(normalized), None)

    def find_equivalents(self, skill_name: str) -> list[str]:
        """Alternate terms registered for the skill; empty if it is unknown."""
        skill = self.find_skill(skill_name)
        if skill is None:
            return []
        return self._safe(
            "find_equivalents",
            lambda s: [e.equivalent_term for e in s.equivalents_for(skill.id)],
            [],
        )

    def are_equivalent(self, a: str, b: str) -> bool:
        """Equal after normalization, or either is a registered equivalent of the other."""
        na, nb = normalize_skill(a), normalize_skill(b)
        if na == nb:
            return True
        if any(normalize_skill(t) == nb for t in self.find_equivalents(a)):
            return True
        if any(normalize_skill(t) == na for t in self.find_equivalents(b)):
            return True
        return False

    def resolve_term(self, term: str) -> Skill | None:
        """Canonical skill for a mention: exact name first, then the first equivalent owner."""
        skill = self.find_skill(term)
        if skill is not None:
            return skill
        normalized = normalize_skill(term)
        if not normalized:
            return None
        owners = self._safe("resolve_term", lambda s: s.equivalent_owners(normalized), [])
        if len(owners) > 1:
            logger.warning("Ambiguous equivalent %r maps to %d skills; using %s",
                           normalized, len(owners), owners[0].normalized_name)
        return owners[0] if owners else None

    def find_related_skills(self, skill_name: str) -> list[Skill]:
        """Child skills reachable by one parent -> child edge."""
        skill = self.find_skill(skill_name)
        if skill is None:
            return []

        def _children(store: TaxonomyStore) -> list[Skill]:
            child_ids = list(dict.fromkeys(r.child_skill_id for r in store.relationships_for(skill.id)))
            return store.skills_by_ids(child_ids) if child_ids else []

        return self._safe("find_related_skills", _children, [])

    def find_skills_by_category(self, category: str) -> list[Skill]:
        return self._safe("find_skills_by_category", lambda s: s.find_by_category(category), [])

    def categories_of(self, skill_name: str) -> list[str]:
        """Secondary AI-domain tags; ``["other"]`` when none apply. Needs no store."""
        return ai_taxonomy.categorize_skill(skill_name)

    def related_domain_terms(self, skill_name: str, limit: int = 5) -> list[str]:
        return ai_taxonomy.related_terms(skill_name, limit)

    def search_by_prefix(self, query: str, limit: int = 20) -> list[Skill]:
        """Case-insensitive partial match on the normalized name, most popular first."""
        normalized = normalize_skill(query)
        if not normalized or limit <= 0:
            return []
        return self._safe("search_by_prefix", lambda s: s.search_names(normalized, limit), [])

    def get_popular_skills(self, limit: int = 20) -> list[Skill]:
        skills = self._safe("get_popular_skills", lambda s: s.all_skills(), [])
        return sorted(skills, key=lambda s: (-s.popularity, s.normalized_name))[:limit]

    def get_all_categories(self) -> list[str]:
        return self._safe("get_all_categories", lambda s: s.all_categories(), [])

    # --- matching helpers ---

    def find_semantic_matches(
        self, resume_skills: list[str], job_skills: list[str]
    ) -> dict[str, list[str]]:
        """Resume skill -> job skills it is equivalent to (only non-empty entries)."""
        matches: dict[str, list[str]] = {}
        for resume_skill in resume_skills:
            hits = [j for j in job_skills if self.are_equivalent(resume_skill, j)]
            if hits:
                matches[resume_skill] = hits
        return matches

    def ambiguous_equivalents(self) -> dict[str, list[str]]:
        """Equivalent terms that resolve to more than one skill.

        A term is ambiguous when it is registered under several skills, or
        when it equals a different skill's canonical name. Maps the
        normalized term to the canonical names involved, first-registered
        owner first.
        """

        def _scan(store: TaxonomyStore) -> dict[str, list[str]]:
            skills = {s.id: s for s in store.all_skills()}
            by_name = {s.normalized_name: s for s in skills.values()}
            owners: dict[str, list[str]] = {}
            for eq in store.all_equivalents():
                owner = skills.get(eq.skill_id)
                if owner is None:
                    continue
                names = owners.setdefault(eq.normalized_term, [])
                if owner.normalized_name not in names:
                    names.append(owner.normalized_name)
            result: dict[str, list[str]] = {}
            for term, names in owners.items():
                canonical = by_name.get(term)
                if canonical is not None and canonical.normalized_name not in names:
                    names = names + [canonical.normalized_name]
                if len(names) > 1:
                    result[term] = names
            return result

        return self._safe("ambiguous_equivalents", _scan, {})
