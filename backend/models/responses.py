from pydantic import BaseModel, ConfigDict, Field

# Score reported when there was nothing to match against
NO_MATCH_SCORE = -1.0


class CoverageEntry(BaseModel):
    """Best match for one source text in the opposing set."""

    model_config = ConfigDict(frozen=True)

    source_text: str
    best_match_text: str | None = None
    score: float = NO_MATCH_SCORE

    @property
    def has_match(self) -> bool:
        return self.best_match_text is not None


class FitScoreBreakdown(BaseModel):
    required_skills: float = 0.0
    key_responsibilities: float = 0.0
    preferred_qualifications: float = 0.0
    requirement_fit_score: float = 0.0
    resume_focus_score: float = 0.0
    overall_score: float = 0.0


class CoverageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requirement_coverage: list[CoverageEntry] = Field(
        default_factory=list, serialization_alias="requirementCoverage"
    )
    resume_coverage: list[CoverageEntry] = Field(
        default_factory=list, serialization_alias="resumeCoverage"
    )


class FitScoreResponse(BaseModel):
    overall_score: float = 0.0
    breakdown: FitScoreBreakdown = FitScoreBreakdown()


class FitAnalysisResponse(CoverageResponse):
    overall_score: float = 0.0
    breakdown: FitScoreBreakdown = FitScoreBreakdown()
