"""Resume vs. job skill matching.

A job skill counts as matched when some resume skill is equal to it,
contains it or is contained by it after normalization, or is a registered
equivalent of it (see TaxonomyResolver.are_equivalent). Containment makes
"java" match "javascript"; that false positive is a known limitation.
"""

import logging

from models.schemas.match_report import CategoryBreakdown, MatchReport, PartialMatch
from models.schemas.skill_set import DOMAIN_BUCKETS, PRIMARY_CATEGORIES, SkillSet
from services.skill_normalizer import normalize_skill, skills_match
from services.taxonomy_resolver import TaxonomyResolver
from services.text_normalizer import normalize_for_matching

logger = logging.getLogger(__name__)

PARTIAL_MATCH_THRESHOLD = 0.3


def _ordered_categories(*skill_sets: SkillSet) -> list[str]:
    """Known categories first in canonical order, then any other keys as seen."""
    present: list[str] = []
    for skill_set in skill_sets:
        for category in skill_set.categories():
            if category not in present:
                present.append(category)
    canonical = [c for c in PRIMARY_CATEGORIES + DOMAIN_BUCKETS if c in present]
    return canonical + [c for c in present if c not in canonical]


def flatten_skills(skill_set: SkillSet, categories: list[str] | None = None) -> list[tuple[str, str]]:
    """Unique ``(normalized_name, category)`` pairs; a name keeps its first category."""
    seen: set[str] = set()
    flat: list[tuple[str, str]] = []
    for category in categories if categories is not None else _ordered_categories(skill_set):
        for entry in skill_set.get(category):
            name = normalize_skill(entry.name)
            if name and name not in seen:
                seen.add(name)
                flat.append((name, category))
    return flat


def token_similarity(a: str, b: str) -> float:
    """1.0 for identical names, else shared-token overlap (Jaccard) in [0, 1]."""
    na, nb = normalize_skill(a), normalize_skill(b)
    if na == nb:
        return 1.0
    tokens_a = set(normalize_for_matching(na).split())
    tokens_b = set(normalize_for_matching(nb).split())
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def round_half_up_percentage(part: int, whole: int) -> int:
    """round(100 * part / whole) with halves rounded up, in exact integer arithmetic."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class _Matcher:
    def __init__(self, resolver: TaxonomyResolver) -> None:
        self._resolver = resolver
        self._cache: dict[tuple[str, str], bool] = {}

    def is_match(self, resume_skill: str, job_skill: str) -> bool:
        key = (resume_skill, job_skill)
        if key not in self._cache:
            self._cache[key] = (
                skills_match(resume_skill, job_skill)
                or self._resolver.are_equivalent(resume_skill, job_skill)
            )
        return self._cache[key]

    def split(self, resume_names: list[str], job_names: list[str]) -> tuple[list[str], list[str]]:
        matched: list[str] = []
        missing: list[str] = []
        for job_skill in job_names:
            if any(self.is_match(r, job_skill) for r in resume_names):
                matched.append(job_skill)
            else:
                missing.append(job_skill)
        return matched, missing


def find_partial_matches(
    resume_names: list[str],
    job_names: list[str],
    threshold: float = PARTIAL_MATCH_THRESHOLD,
) -> list[PartialMatch]:
    """Pairs with token similarity above ``threshold``, most similar first."""
    partial: list[PartialMatch] = []
    for job_skill in job_names:
        for resume_skill in resume_names:
            similarity = token_similarity(resume_skill, job_skill)
            if similarity > threshold:
                partial.append(PartialMatch(
                    resume_skill=resume_skill,
                    job_skill=job_skill,
                    similarity=round(similarity, 4),
                ))
    # stable sort keeps job order, then resume order, among equal scores
    partial.sort(key=lambda m: m.similarity, reverse=True)
    return partial


def match_skills(
    resume_skills: SkillSet,
    job_skills: SkillSet,
    resolver: TaxonomyResolver | None = None,
    partial_threshold: float = PARTIAL_MATCH_THRESHOLD,
) -> MatchReport:
    """Compare a resume skill set against a job skill set.

    Pure with respect to its inputs and the resolver's snapshot. Without a
    resolver, equivalence falls back to exact normalized equality.
    """
    matcher = _Matcher(resolver or TaxonomyResolver(None))

    resume_flat = [name for name, _ in flatten_skills(resume_skills)]
    job_flat = [name for name, _ in flatten_skills(job_skills)]

    if not job_flat:
        return MatchReport()

    matched, missing = matcher.split(resume_flat, job_flat)
    percentage = round_half_up_percentage(len(matched), len(job_flat))

    used_resume = [r for r in resume_flat if any(matcher.is_match(r, j) for j in matched)]
    remaining_resume = [r for r in resume_flat if r not in used_resume]
    partial = find_partial_matches(remaining_resume, missing, partial_threshold)

    breakdown: list[CategoryBreakdown] = []
    for category in _ordered_categories(resume_skills, job_skills):
        cat_resume = [name for name, _ in flatten_skills(resume_skills, [category])]
        cat_job = [name for name, _ in flatten_skills(job_skills, [category])]
        cat_matched, cat_missing = matcher.split(cat_resume, cat_job)
        breakdown.append(CategoryBreakdown(category=category, matched=cat_matched, missing=cat_missing))

    logger.info("Matched %d/%d job skills (%d%%), %d partial matches",
                len(matched), len(job_flat), percentage, len(partial))
    return MatchReport(
        match_percentage=percentage,
        matched_skills=matched,
        missing_skills=missing,
        partial_matches=partial,
        skills_by_category=breakdown,
    )
