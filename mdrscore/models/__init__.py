"""Pydantic models for the MDR Score Engine."""

# Common Models
from mdrscore.models.common import (
    HealthResponse,
    ErrorResponse,
)

# Enums
from mdrscore.models.enums import (
    Tier,
    HonorTier,
    ProfileStatus,
    HONOR_TIER_POINTS,
    TIER_ORDER,
)

# Score input
from mdrscore.models.score import (
    Award,
    JournalCitation,
    FourPillars,
    ScoreInput,
)

__all__ = [
    # Common
    "HealthResponse",
    "ErrorResponse",
    # Enums
    "Tier",
    "HonorTier",
    "ProfileStatus",
    "HONOR_TIER_POINTS",
    "TIER_ORDER",
    # Score input
    "Award",
    "JournalCitation",
    "FourPillars",
    "ScoreInput",
]
