"""MDR score endpoints."""

import logging
from functools import lru_cache
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import BaseModel, Field

from mdrscore.config import get_settings
from mdrscore.models import ErrorResponse, ScoreInput, Tier
from mdrscore.pipelines.profile_mapper import build_tier_facts
from mdrscore.pipelines.scoring_pipeline import MDRScoringPipeline
from mdrscore.scoring.mdr_score_engine import MDRScoreEngine, ScoreResult
from mdrscore.scoring.tier_gatekeeper import TierAssignment

logger = logging.getLogger(__name__)

# ── request / response schema ─────────────────────────────────────────────────


class ScoreRequest(ScoreInput):
    """Score input plus the request-only options of the calculate endpoint."""

    total_publications: int = Field(default=0, ge=0, description="Peer-reviewed publication count")
    use_seed_pillars: bool = Field(default=False, description="Trust the supplied pillars")


class ScoreResultResponse(BaseModel):
    """Engine result for one subject."""

    score: Optional[float]
    tier: Tier
    pillars: dict[str, float]
    breakdown: dict[str, Optional[float]]
    disqualified: bool
    reason: Optional[str] = None
    floor_protection_applied: bool = False
    honor_total_points: int = 0
    parameter_version: str


class TierAssignmentResponse(BaseModel):
    """Gatekeeper assignment for one subject."""

    tier: Tier
    reason: str
    meets_all_requirements: bool
    unmet_requirements: list[str]


class CalculateScoreResponse(BaseModel):
    score: ScoreResultResponse
    tier: TierAssignmentResponse


class ProfileScoreResponse(BaseModel):
    """Scored profile record."""

    slug: str
    specialty: Optional[str] = None
    persisted_tier: Tier
    score: ScoreResultResponse
    tier: TierAssignmentResponse


def _score_response(result: ScoreResult) -> ScoreResultResponse:
    return ScoreResultResponse(**result.to_dict())


def _tier_response(assignment: TierAssignment) -> TierAssignmentResponse:
    return TierAssignmentResponse(**assignment.to_dict())


@lru_cache
def get_scoring_pipeline() -> MDRScoringPipeline:
    """Get cached pipeline; legacy decay uses the configured reference year."""
    settings = get_settings()
    engine = MDRScoreEngine(reference_year=settings.scoring_reference_year)
    return MDRScoringPipeline(engine=engine)


router = APIRouter(prefix="/api/v1/scores", tags=["MDR Scores"])


@router.post(
    "/calculate",
    response_model=CalculateScoreResponse,
    summary="Calculate MDR Score",
    description="Score one subject from raw metrics and assign a gatekeeper tier.",
)
async def calculate_score(request: ScoreRequest):
    """Run the engine and the tier gatekeeper on a single score input."""
    pipeline = get_scoring_pipeline()
    result = pipeline.engine.calculate(request, use_seed_pillars=request.use_seed_pillars)
    facts = build_tier_facts(request, request.total_publications)
    assignment = pipeline.gatekeeper.assign_tier(result, facts)

    logger.info(
        "Scored subject: score=%s engine_tier=%s gatekeeper_tier=%s",
        result.score, result.tier.value, assignment.tier.value,
    )
    return CalculateScoreResponse(
        score=_score_response(result),
        tier=_tier_response(assignment),
    )


@router.post(
    "/profile",
    response_model=ProfileScoreResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Score Profile Record",
    description="Map a stored profile record to a score input and score it.",
)
async def score_profile(profile: dict[str, Any] = Body(...)):
    """Score a raw profile document (camelCase keys, as kept by the content store)."""
    pipeline = get_scoring_pipeline()
    try:
        scored = pipeline.score_profile(profile)
    except ValueError as e:
        logger.warning(f"Rejected profile record: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return ProfileScoreResponse(
        slug=scored.slug,
        specialty=scored.specialty,
        persisted_tier=scored.persisted_tier,
        score=_score_response(scored.result),
        tier=_tier_response(scored.assignment),
    )
