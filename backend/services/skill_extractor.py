"""Vocabulary-based fallback skill extraction.

Used when the extraction collaborator is unavailable or its output cannot
be parsed. Scans the case-folded text for a fixed list of known terms per
category with word-boundary matching.
"""

import logging
import re

from models.schemas.skill_taxonomy import SkillCategory

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.5

# Display names per category; matching is case-insensitive
FALLBACK_VOCABULARY: dict[str, tuple[str, ...]] = {
    SkillCategory.LANGUAGES.value: (
        "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Ruby", "Go",
        "Rust", "PHP", "Swift", "Kotlin",
    ),
    SkillCategory.FRAMEWORKS.value: (
        "React", "Angular", "Vue", "Next.js", "Express", "Django", "Flask",
        "Spring", "TensorFlow", "PyTorch", "LangChain",
    ),
    SkillCategory.DATABASES.value: (
        "SQL", "MySQL", "PostgreSQL", "MongoDB", "DynamoDB", "Redis", "Cassandra",
        "SQLite", "Oracle", "Vector database",
    ),
    # common AI terms are reported as technical skills
    SkillCategory.TECHNICAL.value: (
        "Machine learning", "Deep learning", "NLP", "Computer vision", "AI", "ML",
        "Neural network", "LLM", "Large language model", "RAG",
        "Retrieval augmented generation",
    ),
    SkillCategory.SOFT.value: (
        "Leadership", "Communication", "Teamwork", "Problem solving",
        "Critical thinking", "Time management", "Collaboration", "Adaptability",
    ),
}

# Word boundary matching prevents substring hits,
# e.g. "java" inside "javascript" or "go" inside "google"
_PATTERNS: dict[str, list[tuple[str, re.Pattern]]] = {
    category: [
        (term, re.compile(rf"(?<![a-z0-9.#+]){re.escape(term.lower())}(?![a-z0-9+#])"))
        for term in terms
    ]
    for category, terms in FALLBACK_VOCABULARY.items()
}


def extract_skills_pattern(text: str) -> dict[str, list[str]]:
    """Known terms found in ``text``, keyed by category (every primary category present)."""
    found: dict[str, list[str]] = {c.value: [] for c in SkillCategory}
    text_lower = (text or "").lower()
    if not text_lower.strip():
        return found

    for category, patterns in _PATTERNS.items():
        for term, pattern in patterns:
            if pattern.search(text_lower):
                found[category].append(term)

    logger.info("Fallback extractor matched %d terms",
                sum(len(terms) for terms in found.values()))
    return found
