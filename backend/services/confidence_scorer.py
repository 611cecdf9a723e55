"""Context-based confidence that a candidate skill is really present in a text."""

import re

from services import ai_taxonomy
from services.skill_normalizer import normalize_skill
from services.text_normalizer import clean_text

EXACT_MATCH_CONFIDENCE = 0.9
SUBSTRING_CONFIDENCE = 0.7
UNCATEGORIZED_CONFIDENCE = 0.3
CO_OCCURRENCE_CONFIDENCE = 0.5

_WHITESPACE_RE = re.compile(r"\s+")


def _word_boundary_pattern(skill: str) -> re.Pattern:
    # lookarounds instead of \b so names ending in symbols ("c++", "c#") still anchor
    return re.compile(rf"(?<!\w){re.escape(skill)}(?!\w)")


def score_confidence(skill_name: str, context: str) -> float:
    """Score in [0, 1]; the first matching rule wins.

    0.9 whole-word mention, 0.7 mention inside a longer word, 0.3 when the
    skill has no AI-domain tag, 0.5 when another term from one of its
    domains appears in the context, else 0.0.
    """
    skill = _WHITESPACE_RE.sub(" ", normalize_skill(skill_name))
    if not skill:
        return 0.0
    # line breaks count as spaces so wrapped multi-word skills still match
    text = _WHITESPACE_RE.sub(" ", clean_text(context).lower())

    if skill in text:
        if _word_boundary_pattern(skill).search(text):
            return EXACT_MATCH_CONFIDENCE
        return SUBSTRING_CONFIDENCE

    domains = ai_taxonomy.categorize_skill(skill)
    if ai_taxonomy.DEFAULT_DOMAIN in domains:
        return UNCATEGORIZED_CONFIDENCE

    for domain in domains:
        if any(term != skill and term in text for term in ai_taxonomy.domain_terms(domain)):
            return CO_OCCURRENCE_CONFIDENCE
    return 0.0
