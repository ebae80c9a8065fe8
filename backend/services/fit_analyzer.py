"""Fit analysis: wires chunk extraction, embedding, coverage and scoring.

Flow:
    resume_html + job_requirements
      ├─ extract_all(resume_html)   → all chunks
      ├─ extract_key(resume_html)   → key chunks
      │
      ├─ embed(requirements) ┐
      ├─ embed(all chunks)   ├─ asyncio.gather
      ├─ embed(key chunks)   ┘
      │
      ├─ best_matches(requirements → all chunks)  → requirement coverage
      ├─ best_matches(key chunks → requirements)  → resume coverage
      │
      └─ score_breakdown(requirements, coverage maps) → overall fit score
"""

import asyncio
import logging
from collections.abc import Sequence

import numpy as np

from models.requests import JobRequirements
from models.responses import CoverageResponse, FitAnalysisResponse
from services import chunk_extractor
from services.coverage_matcher import best_matches, coverage_scores, sort_by_score
from services.embedding_provider import EmbeddingProvider
from services.fit_scorer import score_breakdown

logger = logging.getLogger(__name__)


async def _embed_or_empty(provider: EmbeddingProvider, texts: Sequence[str]) -> np.ndarray:
    # Empty sets have nothing to embed; the matcher handles them structurally
    if not texts:
        return np.empty((0, 0), dtype=np.float32)
    return await provider.embed(texts)


async def analyze_coverage(
    requirements: JobRequirements,
    resume_html: str,
    provider: EmbeddingProvider,
) -> CoverageResponse:
    """Compute requirement and resume coverage, each sorted by score descending.

    Raises InvalidInput on blank resume HTML.
    """
    all_chunks = chunk_extractor.extract_all(resume_html)
    key_chunks = chunk_extractor.extract_key(resume_html)
    req_items = requirements.all_items()

    req_vecs, all_vecs, key_vecs = await asyncio.gather(
        _embed_or_empty(provider, req_items),
        _embed_or_empty(provider, all_chunks),
        _embed_or_empty(provider, key_chunks),
    )

    req_embedded = list(zip(req_items, req_vecs))
    requirement_coverage = best_matches(req_embedded, list(zip(all_chunks, all_vecs)))
    resume_coverage = best_matches(list(zip(key_chunks, key_vecs)), req_embedded)

    logger.info(
        "Coverage computed: %d requirements vs %d chunks, %d key chunks",
        len(req_items), len(all_chunks), len(key_chunks),
    )
    return CoverageResponse(
        requirement_coverage=sort_by_score(requirement_coverage),
        resume_coverage=sort_by_score(resume_coverage),
    )


async def analyze_fit(
    requirements: JobRequirements,
    resume_html: str,
    provider: EmbeddingProvider,
) -> FitAnalysisResponse:
    """Run coverage analysis and score the result."""
    coverage = await analyze_coverage(requirements, resume_html, provider)
    breakdown = score_breakdown(
        requirements,
        coverage_scores(coverage.requirement_coverage),
        coverage_scores(coverage.resume_coverage),
    )
    return FitAnalysisResponse(
        requirement_coverage=coverage.requirement_coverage,
        resume_coverage=coverage.resume_coverage,
        overall_score=breakdown.overall_score,
        breakdown=breakdown,
    )
