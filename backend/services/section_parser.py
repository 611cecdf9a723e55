"""Resume section segmentation and skill-focused preprocessing."""

import logging
import re

from services.text_normalizer import clean_text

logger = logging.getLogger(__name__)

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|summary|path)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills(?:\s*(?:&|and)\s*\w+)?",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
        r"(?:technical\s+)?(?:stack|toolkit|tooling)",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"profile",
    ],
    "projects": [
        r"(?:key|notable|selected|personal)?\s*projects",
    ],
    "certifications": [
        r"certific(?:ations?|ates?)",
    ],
}

# Compile all patterns into a single regex per section
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(
        rf"^\s*(?:{combined})\s*:?\s*$", re.IGNORECASE | re.MULTILINE
    )

MIN_SKILLS_SECTION_CHARS = 50
LEADING_CONTEXT_CHARS = 1000


def parse_sections(text: str) -> dict[str, str]:
    """Split resume text into named sections.

    Returns a dict mapping section name -> section text content.
    Unmatched text at the top goes into 'header'.
    """
    lines = text.split("\n")
    sections: dict[str, str] = {}
    current_section = "header"
    current_lines: list[str] = []

    for line in lines:
        matched_section = None
        stripped = line.strip()

        if stripped:
            for section_name, pattern in _COMPILED.items():
                if pattern.match(stripped):
                    matched_section = section_name
                    break

        if matched_section:
            if current_lines:
                sections[current_section] = "\n".join(current_lines).strip()
            current_section = matched_section
            current_lines = []
        else:
            current_lines.append(line)

    if current_lines:
        sections[current_section] = "\n".join(current_lines).strip()

    return sections


def preprocess_for_skill_extraction(text: str) -> str:
    """Cleaned text, led by the skills section when the resume has a real one.

    A skills section of at least 50 characters is put first, followed by the
    first 1000 characters of the whole document for context.
    """
    cleaned = clean_text(text)
    skills_section = parse_sections(cleaned).get("skills", "")
    if len(skills_section) >= MIN_SKILLS_SECTION_CHARS:
        logger.info("Using skills section (%d chars) for extraction", len(skills_section))
        return f"{skills_section}\n\n{cleaned[:LEADING_CONTEXT_CHARS]}"
    return cleaned
