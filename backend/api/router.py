from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedding_provider
from config import settings
from models.requests import CoverageRequest, FitScoreRequest
from models.responses import CoverageResponse, FitAnalysisResponse, FitScoreResponse
from services import fit_analyzer, fit_scorer
from services.embedding_provider import EmbeddingProvider

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_resume_size(resume_html: str) -> None:
    if len(resume_html) > settings.max_resume_html_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Resume HTML too long (max {settings.max_resume_html_chars} chars)",
        )


@router.get("/health")
async def health(provider: EmbeddingProvider = Depends(get_embedding_provider)):
    return {
        "status": "ok",
        "embedding_model": provider.model_name,
        "model_loaded": provider.is_loaded,
    }


@router.post("/coverage", response_model=CoverageResponse)
@limiter.limit("30/minute")
async def coverage(
    request: Request,
    body: CoverageRequest,
    provider: EmbeddingProvider = Depends(get_embedding_provider),
):
    _check_resume_size(body.resume_html)
    return await fit_analyzer.analyze_coverage(body.job_requirements, body.resume_html, provider)


@router.post("/fit-score", response_model=FitScoreResponse)
@limiter.limit("60/minute")
async def fit_score(request: Request, body: FitScoreRequest):
    breakdown = fit_scorer.score_breakdown(
        body.job_requirements, body.requirement_coverage, body.resume_coverage
    )
    return FitScoreResponse(overall_score=breakdown.overall_score, breakdown=breakdown)


@router.post("/analyze/fit", response_model=FitAnalysisResponse)
@limiter.limit("30/minute")
async def analyze_fit(
    request: Request,
    body: CoverageRequest,
    provider: EmbeddingProvider = Depends(get_embedding_provider),
):
    _check_resume_size(body.resume_html)
    return await fit_analyzer.analyze_fit(body.job_requirements, body.resume_html, provider)
