"""Turns raw category -> candidate lists into a deduplicated, scored SkillSet.

Flow per document:
    raw collaborator output
      ├─ parse_extraction_output()         → ExtractedCandidates
      │     (on MalformedExtractionOutput: extract_skills_pattern(), 0.5 each)
      └─ aggregate()
           ├─ score_candidate() per raw string → CandidateSkill → ScoredSkill
           ├─ primary bucket + ai_<domain> overlay buckets
           └─ dedupe by normalized name, highest confidence wins
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Literal

from models.schemas.skill_set import (
    DOMAIN_BUCKETS,
    PRIMARY_CATEGORIES,
    CandidateSkill,
    ScoredSkill,
    SkillSet,
    domain_bucket,
)
from models.schemas.skill_taxonomy import SkillCategory
from services.ai_taxonomy import DEFAULT_DOMAIN
from services.confidence_scorer import score_confidence
from services.errors import MalformedExtractionOutput
from services.extraction_parser import parse_extraction_output
from services.skill_extractor import FALLBACK_CONFIDENCE, extract_skills_pattern
from services.skill_normalizer import normalize_skill
from services.taxonomy_resolver import TaxonomyResolver

logger = logging.getLogger(__name__)

SkillSetKind = Literal["resume", "job"]


def _empty_buckets() -> dict[str, list[ScoredSkill]]:
    return {category: [] for category in PRIMARY_CATEGORIES + DOMAIN_BUCKETS}


def _add(bucket: list[ScoredSkill], entry: ScoredSkill) -> None:
    """Insert keeping one entry per normalized name, the higher confidence one."""
    key = normalize_skill(entry.name)
    for i, existing in enumerate(bucket):
        if normalize_skill(existing.name) == key:
            if entry.confidence > existing.confidence:
                bucket[i] = entry
            return
    bucket.append(entry)


def merge_candidates(results: Iterable[Mapping[str, Iterable[str]]]) -> dict[str, list[str]]:
    """Order-preserving union of per-chunk candidate lists, per category."""
    merged: dict[str, list[str]] = {}
    for result in results:
        for category, candidates in result.items():
            bucket = merged.setdefault(category, [])
            for candidate in candidates:
                if candidate not in bucket:
                    bucket.append(candidate)
    return merged


def aggregate(
    candidates_by_category: Mapping[str, Iterable[str]],
    source_text: str,
    kind: SkillSetKind = "resume",
    resolver: TaxonomyResolver | None = None,
    fixed_confidence: float | None = None,
) -> SkillSet:
    """Score, categorize and deduplicate candidate skills against ``source_text``.

    Each candidate lands in its declared category (unknown labels go to
    ``other``) and is copied into every AI-domain bucket it belongs to.
    ``fixed_confidence`` replaces scoring, as the fallback extractor does.
    """
    buckets = _empty_buckets()
    if not source_text or not source_text.strip():
        return SkillSet(kind=kind, skills=buckets)

    resolver = resolver or TaxonomyResolver(None)

    for category, candidates in candidates_by_category.items():
        if category not in PRIMARY_CATEGORIES:
            logger.debug("Unknown category label %r, filing under other", category)
            category = SkillCategory.OTHER.value
        for raw in candidates or []:
            if not isinstance(raw, str) or not raw.strip():
                continue
            candidate = score_candidate(raw, category, source_text, fixed_confidence)
            entry = ScoredSkill(name=candidate.raw_text, confidence=candidate.confidence)
            _add(buckets[candidate.category], entry)

            for domain in resolver.categories_of(entry.name):
                if domain == DEFAULT_DOMAIN:
                    continue
                _add(buckets[domain_bucket(domain)], entry.model_copy())

    return SkillSet(kind=kind, skills=buckets)


def score_candidate(
    raw_text: str,
    category: str,
    source_text: str,
    fixed_confidence: float | None = None,
) -> CandidateSkill:
    """One trimmed, scored extraction proposal; unknown categories become ``other``."""
    name = raw_text.strip()
    if category not in PRIMARY_CATEGORIES:
        category = SkillCategory.OTHER.value
    if fixed_confidence is not None:
        confidence = fixed_confidence
    else:
        confidence = score_confidence(name, source_text)
    return CandidateSkill(raw_text=name, category=category, confidence=confidence)


def candidates_from_output(raw: str | dict | None, source_text: str) -> tuple[dict[str, list[str]], bool]:
    """Candidate lists from the collaborator output, or from the fallback extractor.

    Returns ``(candidates, used_fallback)``.
    """
    try:
        return parse_extraction_output(raw).as_mapping(), False
    except MalformedExtractionOutput as e:
        logger.warning("Using fallback skill extraction: %s", e)
        return extract_skills_pattern(source_text), True


def aggregate_extraction_output(
    raw: str | dict | None,
    source_text: str,
    kind: SkillSetKind = "resume",
    resolver: TaxonomyResolver | None = None,
) -> tuple[SkillSet, bool]:
    """Aggregate a raw collaborator response; never raises for bad output.

    Returns ``(skill_set, used_fallback)``.
    """
    candidates, used_fallback = candidates_from_output(raw, source_text)
    skill_set = aggregate(
        candidates,
        source_text,
        kind=kind,
        resolver=resolver,
        fixed_confidence=FALLBACK_CONFIDENCE if used_fallback else None,
    )
    return skill_set, used_fallback


def merge_skill_sets(first: SkillSet, *others: SkillSet) -> SkillSet:
    """Union of skill sets of the same kind, deduplicated per bucket."""
    buckets = {category: list(entries) for category, entries in first.skills.items()}
    for other in others:
        for category, entries in other.skills.items():
            bucket = buckets.setdefault(category, [])
            for entry in entries:
                _add(bucket, entry)
    return SkillSet(kind=first.kind, skills=buckets)
