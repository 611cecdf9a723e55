"""Skill name canonicalization and the permissive mention-equality rule."""


def normalize_skill(name: str | None) -> str:
    """Lookup key for a skill: lowercased and trimmed."""
    if not name:
        return ""
    return name.strip().lower()


def skills_match(a: str, b: str) -> bool:
    """True if two mentions are equal or either contains the other once normalized.

    Containment is deliberately permissive ("react" matches "react.js"),
    which also lets "java" match "javascript". Known false positive; callers
    rely on the current match percentages, so it is not special-cased.
    """
    na, nb = normalize_skill(a), normalize_skill(b)
    if not na or not nb:
        return False
    return na == nb or na in nb or nb in na
