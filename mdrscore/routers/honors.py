"""Honor classification endpoints."""

from typing import Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel, Field

from mdrscore.models import Award, HonorTier
from mdrscore.scoring.honor_classifier import get_honor_classifier


class ClassifyAwardRequest(BaseModel):
    name: str = Field(..., description="Free-text award name")


class HonorClassificationResponse(BaseModel):
    tier: HonorTier
    points: int
    matched_honor: Optional[str] = None
    category: Optional[str] = None


class HonorBonusRequest(BaseModel):
    awards: list[Union[str, Award]] = Field(default_factory=list)


class HonorBonusResponse(BaseModel):
    total_points: int
    highest_tier: HonorTier
    floor_protection: bool
    classifications: list[HonorClassificationResponse]


router = APIRouter(prefix="/api/v1/honors", tags=["Honors"])


@router.post(
    "/classify",
    response_model=HonorClassificationResponse,
    summary="Classify Award",
)
async def classify_award(request: ClassifyAwardRequest):
    """Classify one award name into an honor tier."""
    classification = get_honor_classifier().classify_award(request.name)
    return HonorClassificationResponse(**classification.to_dict())


@router.post(
    "/bonus",
    response_model=HonorBonusResponse,
    summary="Calculate Honor Bonus",
)
async def calculate_honor_bonus(request: HonorBonusRequest):
    """Aggregate an award list into points, highest tier and floor protection."""
    result = get_honor_classifier().calculate_honor_bonus(request.awards)
    return HonorBonusResponse(**result.to_dict())
