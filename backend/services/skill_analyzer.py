"""Orchestrator: resume and job description in, skill sets and match report out.

Pipeline per document:
1. Clean text (resumes are led by their skills section when one exists)
2. Chunk, and send every chunk to Gemini concurrently
3. Parse each response; chunks with no usable response use the regex extractor
4. Merge chunk candidates and aggregate into a scored SkillSet
Then both skill sets are matched into a MatchReport.
"""

import asyncio
import logging

from config import settings
from models.responses import AnalysisResponse
from models.schemas.skill_set import SkillSet, TextChunk
from services import gemini_client, prompt_builder
from services.section_parser import preprocess_for_skill_extraction
from services.skill_aggregator import (
    SkillSetKind,
    aggregate,
    candidates_from_output,
    merge_candidates,
    merge_skill_sets,
)
from services.skill_extractor import FALLBACK_CONFIDENCE
from services.skill_matcher import match_skills
from services.taxonomy_resolver import TaxonomyResolver
from services.text_chunker import chunk_text
from services.text_normalizer import clean_text

logger = logging.getLogger(__name__)


async def _extract_chunk(chunk: TextChunk, kind: SkillSetKind) -> tuple[dict[str, list[str]], bool]:
    prompt = prompt_builder.build_skill_extraction_prompt(chunk.text, kind)
    raw = await gemini_client.generate_text(prompt)
    return candidates_from_output(raw, chunk.text)


async def extract_skill_set(
    text: str,
    kind: SkillSetKind = "resume",
    resolver: TaxonomyResolver | None = None,
) -> tuple[SkillSet, bool]:
    """Extract a scored SkillSet from one document.

    Returns ``(skill_set, used_fallback)``. Confidence is scored against the
    whole cleaned document, not the chunk a candidate came from.
    """
    cleaned = clean_text(text)
    if not cleaned:
        return aggregate({}, "", kind=kind), False

    focused = preprocess_for_skill_extraction(cleaned) if kind == "resume" else cleaned
    chunks = chunk_text(focused, settings.chunk_size, settings.chunk_overlap)
    results = await asyncio.gather(*(_extract_chunk(c, kind) for c in chunks))

    extracted = merge_candidates(candidates for candidates, fallback in results if not fallback)
    fallback = merge_candidates(candidates for candidates, fallback in results if fallback)

    skill_set = aggregate(extracted, cleaned, kind=kind, resolver=resolver)
    if fallback:
        logger.warning("%d of %d %s chunks used the fallback extractor",
                       sum(1 for _, fb in results if fb), len(chunks), kind)
        skill_set = merge_skill_sets(
            skill_set,
            aggregate(fallback, cleaned, kind=kind, resolver=resolver,
                      fixed_confidence=FALLBACK_CONFIDENCE),
        )
    return skill_set, bool(fallback)


async def _extract_with_deadline(
    text: str, kind: SkillSetKind, resolver: TaxonomyResolver | None
) -> tuple[SkillSet, bool, bool]:
    """``(skill_set, used_fallback, timed_out)``; a timed-out side counts as empty input."""
    try:
        skill_set, used_fallback = await asyncio.wait_for(
            extract_skill_set(text, kind, resolver), timeout=settings.extraction_timeout_s
        )
        return skill_set, used_fallback, False
    except asyncio.TimeoutError:
        logger.warning("%s extraction exceeded %.0fs, treating as empty",
                       kind, settings.extraction_timeout_s)
        return aggregate({}, "", kind=kind), False, True


async def analyze(
    resume_text: str,
    job_description: str,
    resolver: TaxonomyResolver | None = None,
) -> AnalysisResponse:
    """Extract both skill sets concurrently and match them."""
    (resume_skills, resume_fallback, resume_timeout), (job_skills, job_fallback, job_timeout) = (
        await asyncio.gather(
            _extract_with_deadline(resume_text, "resume", resolver),
            _extract_with_deadline(job_description, "job", resolver),
        )
    )

    report = match_skills(
        resume_skills, job_skills, resolver, partial_threshold=settings.partial_match_threshold
    )

    used_fallback = resume_fallback or job_fallback
    return AnalysisResponse(
        resume_skills=resume_skills,
        job_skills=job_skills,
        report=report,
        degraded=used_fallback or resume_timeout or job_timeout,
        used_fallback=used_fallback,
    )
