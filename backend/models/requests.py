from pydantic import BaseModel, Field, field_validator

REQUIREMENT_CATEGORIES = (
    "required_skills",
    "preferred_qualifications",
    "key_responsibilities",
    "exact_phrases",
)


class JobRequirements(BaseModel):
    """Job requirements grouped by category, each ordered most important first."""

    required_skills: list[str] = []
    preferred_qualifications: list[str] = []
    key_responsibilities: list[str] = []
    exact_phrases: list[str] = []

    @field_validator(*REQUIREMENT_CATEGORIES, mode="before")
    @classmethod
    def _drop_blank(cls, value):
        if value is None:
            return []
        return [item for item in value if not isinstance(item, str) or item.strip()]

    def all_items(self) -> list[str]:
        """Every requirement across categories, deduplicated, in category order."""
        items: list[str] = []
        for category in REQUIREMENT_CATEGORIES:
            items.extend(getattr(self, category))
        return list(dict.fromkeys(items))


class CoverageRequest(BaseModel):
    job_requirements: JobRequirements = JobRequirements()
    resume_html: str = Field(..., description="Resume HTML markup")


class FitScoreRequest(BaseModel):
    job_requirements: JobRequirements = JobRequirements()
    requirement_coverage: dict[str, float] = Field(
        default_factory=dict, description="Requirement text -> best-match similarity"
    )
    resume_coverage: dict[str, float] = Field(
        default_factory=dict, description="Key resume chunk -> best-match similarity"
    )
