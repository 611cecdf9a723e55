"""Prompt templates for Gemini skill extraction."""

from typing import Literal

Source = Literal["resume", "job"]


def build_skill_extraction_prompt(text: str, source: Source = "resume") -> str:
    """Ask for every skill in ``text`` as one JSON object keyed by the nine categories."""
    label = "RESUME" if source == "resume" else "JOB DESCRIPTION"
    noun = "resume" if source == "resume" else "job description"

    return f"""You are an expert skills analyzer for the AI and tech industry.

Extract and categorize all skills mentioned in the following {noun}.

{label}:
---
{text}
---

Extract ALL skills mentioned in the text, including:
1. Technical skills (programming, engineering, data analysis, machine learning, NLP)
2. Soft skills (communication, leadership)
3. Tools (specific software)
4. Frameworks and libraries
5. Programming languages
6. Databases
7. Methodologies (Agile, Scrum)
8. Platforms (cloud services, operating systems)
9. Other relevant skills

GUIDELINES:
- Extract every skill, even if it is mentioned only once
- Use the wording that appears in the text
- If a skill fits several categories, place it in the most specific one
- Do not include generic terms that are not specific skills

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "technical": [<skills>],
  "soft": [<skills>],
  "tools": [<skills>],
  "frameworks": [<skills>],
  "languages": [<skills>],
  "databases": [<skills>],
  "methodologies": [<skills>],
  "platforms": [<skills>],
  "other": [<skills>]
}}"""
