"""Score input Pydantic models.

Field names are snake_case; camelCase aliases (``hIndex``, ``yearsActive``,
``journalImpactFactors`` ...) are accepted so records produced by the content
store and the web client validate unchanged.
"""
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Immutable model accepting both snake_case and camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


class Award(_CamelModel):
    """A raw, unvalidated award entry from a profile."""
    name: str
    year: Optional[int] = None
    issuing_body: Optional[str] = None


class JournalCitation(_CamelModel):
    """Citations received by papers in one journal."""
    journal: str
    citation_count: int = Field(default=0, ge=0)


class FourPillars(_CamelModel):
    """The Four Pillars of Excellence, each independently bounded to [0, 100]."""
    clinical_mastery_index: float = Field(default=0.0, ge=0, le=100)
    intellectual_legacy: float = Field(default=0.0, ge=0, le=100)
    global_mentorship_score: float = Field(default=0.0, ge=0, le=100)
    humanitarian_impact: float = Field(default=0.0, ge=0, le=100)


class ScoreInput(_CamelModel):
    """Input value object for one MDR score calculation.

    Negative counters are a caller contract violation and are rejected here,
    at the model boundary.
    """
    citations: float = Field(default=0, ge=0, description="Raw citation count")
    years_active: float = Field(default=0, ge=0, description="Career span in years")
    h_index: float = Field(default=0, ge=0)
    verified_surgeries: int = Field(default=0, ge=0)
    lives_saved: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("lives_saved", "livesSaved", "liveSaved"),
    )
    techniques_invented: int = Field(default=0, ge=0, description="Named techniques count")
    board_certifications: int = Field(default=0, ge=0)
    manual_verifications: int = Field(
        default=0,
        ge=0,
        description="Peer verifications from Titan-tier doctors",
    )

    has_invention: bool = False
    license_verified: bool = False
    is_historical: bool = False
    is_pioneer: bool = False
    is_leader: bool = False
    has_retraction: bool = False

    pillars: FourPillars = Field(default_factory=FourPillars)
    honors: Tuple[Award, ...] = ()
    journal_impact_factors: Tuple[JournalCitation, ...] = ()

    year_of_death: Optional[int] = None
    technique_still_gold_standard: bool = False
