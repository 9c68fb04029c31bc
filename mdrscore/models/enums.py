"""Enumeration types for the MDR Score Engine."""
from enum import Enum


class Tier(str, Enum):
    """Discrete reputation brackets."""
    TITAN = "TITAN"  # Top 0.01%
    ELITE = "ELITE"  # Top 1%
    MASTER = "MASTER"  # Top 3%
    UNRANKED = "UNRANKED"


class HonorTier(str, Enum):
    """Prestige tiers for classified awards."""
    GLOBAL_LANDMARK = "GLOBAL_LANDMARK"
    NATIONAL_HONOR = "NATIONAL_HONOR"
    PROFESSIONAL_EXCELLENCE = "PROFESSIONAL_EXCELLENCE"
    UNCLASSIFIED = "UNCLASSIFIED"


class ProfileStatus(str, Enum):
    """Whether a profile describes a living or a historical subject."""
    LIVING = "LIVING"
    HISTORICAL = "HISTORICAL"


# Points awarded per honor tier
HONOR_TIER_POINTS: dict[HonorTier, int] = {
    HonorTier.GLOBAL_LANDMARK: 100,
    HonorTier.NATIONAL_HONOR: 75,
    HonorTier.PROFESSIONAL_EXCELLENCE: 50,
    HonorTier.UNCLASSIFIED: 0,
}

# Higher rank wins when tracking a subject's most prestigious honor
HONOR_TIER_RANK: dict[HonorTier, int] = {
    HonorTier.GLOBAL_LANDMARK: 3,
    HonorTier.NATIONAL_HONOR: 2,
    HonorTier.PROFESSIONAL_EXCELLENCE: 1,
    HonorTier.UNCLASSIFIED: 0,
}

# Tier ordering, lowest first
TIER_ORDER: list[Tier] = [Tier.UNRANKED, Tier.MASTER, Tier.ELITE, Tier.TITAN]
