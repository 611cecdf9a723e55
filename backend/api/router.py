from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_resolver, get_session_store
from config import settings
from models.requests import AnalyzeRequest, ExtractRequest, MatchRequest
from models.responses import AnalysisResponse, SkillSearchResult
from models.schemas.match_report import MatchReport
from models.schemas.skill_set import SkillSet
from services import skill_analyzer
from services.session_store import AnalysisSession, SessionStore
from services.skill_matcher import match_skills
from services.taxonomy_resolver import TaxonomyResolver

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    x_session_id: str | None = Header(default=None),
    resolver: TaxonomyResolver = Depends(get_resolver),
    sessions: SessionStore = Depends(get_session_store),
):
    if not body.resume_text.strip() or not body.job_description.strip():
        raise HTTPException(status_code=400, detail="Resume text and job description are required")

    result = await skill_analyzer.analyze(body.resume_text, body.job_description, resolver)
    if x_session_id:
        result.session_id = x_session_id
        sessions.save(AnalysisSession(id=x_session_id), result)
    return result


@router.post("/extract", response_model=SkillSet)
@limiter.limit("20/minute")
async def extract(
    request: Request,
    body: ExtractRequest,
    resolver: TaxonomyResolver = Depends(get_resolver),
):
    skill_set, _ = await skill_analyzer.extract_skill_set(body.text, body.source, resolver)
    return skill_set


@router.post("/match", response_model=MatchReport)
async def match(body: MatchRequest, resolver: TaxonomyResolver = Depends(get_resolver)):
    return match_skills(
        body.resume_skills,
        body.job_skills,
        resolver,
        partial_threshold=settings.partial_match_threshold,
    )


@router.get("/skills/search", response_model=list[SkillSearchResult])
async def search_skills(
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(20, ge=1, le=100),
    resolver: TaxonomyResolver = Depends(get_resolver),
):
    return [
        SkillSearchResult(name=s.name, category=s.category.value, popularity=s.popularity)
        for s in resolver.search_by_prefix(q, limit)
    ]


@router.get("/sessions/{session_id}", response_model=AnalysisResponse)
async def get_session(session_id: str, sessions: SessionStore = Depends(get_session_store)):
    result = sessions.get(session_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return result
