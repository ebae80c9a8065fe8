"""Overall Resume-Job Fit Score.

Overall = min(1, 0.8 * RequirementFit + 0.2 * ResumeFocus)

RequirementFit is a weighted sum of per-category scores, each a rank-decayed
average of the requirement coverage similarities. ResumeFocus is the share
of key resume chunks that are relevant to the job at all.
"""

import logging
from collections.abc import Mapping, Sequence

from models.requests import JobRequirements
from models.responses import FitScoreBreakdown

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS: dict[str, float] = {
    "required_skills": 0.5,
    "key_responsibilities": 0.3,
    "preferred_qualifications": 0.2,
}
# exact_phrases is accepted but not weighted yet; reserved for a bonus term.

RANK_DECAY = 0.1
RELEVANCE_THRESHOLD = 0.5
W_REQUIREMENT_FIT = 0.8
W_RESUME_FOCUS = 0.2


def rank_weight(position: int) -> float:
    """Linear decay by rank: 1.0, 0.9, 0.8, ... and 0 from position 10 on."""
    return max(0.0, 1.0 - position * RANK_DECAY)


def category_score(items: Sequence[str], coverage: Mapping[str, float]) -> float:
    """Rank-weighted average similarity of one ordered requirement category.

    Items missing from coverage count as 0. An empty category scores 0.
    """
    if not items:
        return 0.0

    total_weighted = 0.0
    total_weight = 0.0
    for i, item in enumerate(items):
        weight = rank_weight(i)
        if weight <= 0:
            break
        total_weighted += coverage.get(item, 0.0) * weight
        total_weight += weight

    return total_weighted / total_weight if total_weight > 0 else 0.0


def _as_requirements(requirements: JobRequirements | Mapping) -> JobRequirements:
    # Missing categories become empty lists, blank entries are dropped
    if isinstance(requirements, JobRequirements):
        return requirements
    return JobRequirements.model_validate(dict(requirements))


def _category_scores(
    requirements: JobRequirements | Mapping,
    requirement_coverage: Mapping[str, float],
) -> dict[str, float]:
    reqs = _as_requirements(requirements)
    return {
        category: category_score(getattr(reqs, category), requirement_coverage)
        for category in CATEGORY_WEIGHTS
    }


def requirement_fit_score(
    requirements: JobRequirements | Mapping,
    requirement_coverage: Mapping[str, float],
) -> float:
    """Weighted sum of required skills, responsibilities and preferred quals."""
    scores = _category_scores(requirements, requirement_coverage)
    return sum(scores[c] * w for c, w in CATEGORY_WEIGHTS.items())


def resume_focus_score(resume_coverage: Mapping[str, float]) -> float:
    """Fraction of key resume chunks whose best match reaches the relevance threshold."""
    if not resume_coverage:
        return 0.0
    relevant = sum(1 for score in resume_coverage.values() if score >= RELEVANCE_THRESHOLD)
    return relevant / len(resume_coverage)


def overall_fit_score(
    requirements: JobRequirements | Mapping,
    requirement_coverage: Mapping[str, float],
    resume_coverage: Mapping[str, float],
) -> float:
    """Final fit score in [0, 1]."""
    return score_breakdown(requirements, requirement_coverage, resume_coverage).overall_score


def score_breakdown(
    requirements: JobRequirements | Mapping,
    requirement_coverage: Mapping[str, float],
    resume_coverage: Mapping[str, float],
) -> FitScoreBreakdown:
    """Compute the overall score along with every intermediate score."""
    scores = _category_scores(requirements, requirement_coverage)
    fit = sum(scores[c] * w for c, w in CATEGORY_WEIGHTS.items())
    focus = resume_focus_score(resume_coverage)
    overall = min(1.0, fit * W_REQUIREMENT_FIT + focus * W_RESUME_FOCUS)

    logger.debug(
        "Fit score: requirement_fit=%.3f focus=%.3f overall=%.3f", fit, focus, overall
    )
    return FitScoreBreakdown(
        required_skills=scores["required_skills"],
        key_responsibilities=scores["key_responsibilities"],
        preferred_qualifications=scores["preferred_qualifications"],
        requirement_fit_score=fit,
        resume_focus_score=focus,
        overall_score=overall,
    )
