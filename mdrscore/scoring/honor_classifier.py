"""Honor Classifier.

Maps free-text award names to prestige tiers and aggregates a subject's award
list into an honor bonus.

Matching (first hit wins)
-------------------------
  1. exact match on the normalized name against ``GLOBAL_HONORS``
  2. substring match, either direction, against the same table
     (whole words only, so "OBE" never matches inside "Robert"); a name
     found inside a table entry must carry a distinguishing word, so a bare
     "Award" or "Gold Medal" claims nothing
  3. keyword match against ``HONOR_KEYWORDS``
  4. fallback: UNCLASSIFIED, 0 points

Aggregation
-----------
  * awards are deduplicated by matched category (two Lasker variants count once)
  * awards without a matched category are never deduplicated
  * floor_protection = highest tier is GLOBAL_LANDMARK or NATIONAL_HONOR
"""
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, List, Optional, Union

import structlog

from mdrscore.models.enums import HONOR_TIER_POINTS, HONOR_TIER_RANK, HonorTier
from mdrscore.models.score import Award
from mdrscore.scoring.honors_table import (
    GLOBAL_HONORS,
    HONOR_KEYWORDS,
    GlobalHonor,
    HonorKeyword,
)
from mdrscore.scoring.utils import contains_phrase

logger = structlog.get_logger(__name__)

_SINGLE_QUOTES = re.compile("[‘’‛´`]")
_DOUBLE_QUOTES = re.compile("[“”‟]")
_WHITESPACE = re.compile(r"\s+")
_WORD = re.compile(r"[^\W_]+")

# Words that never identify an honor on their own; a name made only of these
# cannot claim a table entry through the reverse substring match.
_GENERIC_AWARD_WORDS = frozenset({
    "a", "an", "and", "award", "awards", "basic", "clinical", "distinguished",
    "fellow", "fellowship", "for", "foundation", "gold", "honor", "honors",
    "honour", "honours", "in", "international", "life", "medal", "medals",
    "medical", "medicine", "merit", "national", "of", "or", "order", "prize",
    "prizes", "public", "research", "royal", "science", "sciences", "service",
    "society", "the",
})

_FLOOR_PROTECTED_TIERS = {HonorTier.GLOBAL_LANDMARK, HonorTier.NATIONAL_HONOR}


@dataclass(frozen=True)
class HonorClassification:
    """Derived classification of a single award."""

    tier: HonorTier
    points: int
    matched_honor: Optional[GlobalHonor] = None

    @property
    def category(self) -> Optional[str]:
        return self.matched_honor.category if self.matched_honor else None

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "points": self.points,
            "matched_honor": self.matched_honor.name if self.matched_honor else None,
            "category": self.category,
        }


@dataclass(frozen=True)
class HonorBonusResult:
    """Aggregated honor bonus for a full award list."""

    total_points: int
    highest_tier: HonorTier
    floor_protection: bool
    classifications: List[HonorClassification] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_points": self.total_points,
            "highest_tier": self.highest_tier.value,
            "floor_protection": self.floor_protection,
            "classifications": [c.to_dict() for c in self.classifications],
        }


def normalize_award_name(name: str) -> str:
    """Lowercase, unify quote characters, collapse whitespace and trim."""
    text = _SINGLE_QUOTES.sub("'", name.lower())
    text = _DOUBLE_QUOTES.sub('"', text)
    return _WHITESPACE.sub(" ", text).strip()


def _is_distinctive(normalized: str) -> bool:
    return any(word not in _GENERIC_AWARD_WORDS for word in _WORD.findall(normalized))


class HonorClassifier:
    """Classify awards against an ordered honors table.

    Parameters
    ----------
    honors:
        Override the built-in ``GLOBAL_HONORS`` table.
    keywords:
        Override the built-in ``HONOR_KEYWORDS`` list.
    """

    def __init__(
        self,
        honors: Optional[List[GlobalHonor]] = None,
        keywords: Optional[List[HonorKeyword]] = None,
    ) -> None:
        self.honors = honors if honors is not None else GLOBAL_HONORS
        self.keywords = keywords if keywords is not None else HONOR_KEYWORDS
        # (normalized name, honor) pairs, computed once
        self._normalized = [(normalize_award_name(h.name), h) for h in self.honors]
        logger.info(
            "honor_classifier_initialized",
            honors=len(self.honors),
            keyword_groups=len(self.keywords),
        )

    # ── public API ────────────────────────────────────────────────────────────

    def classify_award(self, name: str) -> HonorClassification:
        """Classify one award name. Unknown names degrade to UNCLASSIFIED."""
        normalized = normalize_award_name(name or "")
        if not normalized:
            return HonorClassification(HonorTier.UNCLASSIFIED, 0)

        # ── 1. Exact ─────────────────────────────────────────────────────────
        for honor_name, honor in self._normalized:
            if honor_name == normalized:
                return HonorClassification(honor.tier, honor.points, honor)

        # ── 2. Substring (either direction, whole words only) ────────────────
        distinctive = _is_distinctive(normalized)
        for honor_name, honor in self._normalized:
            if contains_phrase(normalized, honor_name) or (
                distinctive and contains_phrase(honor_name, normalized)
            ):
                return HonorClassification(honor.tier, honor.points, honor)

        # ── 3. Keyword ───────────────────────────────────────────────────────
        for entry in self.keywords:
            if any(kw in normalized for kw in entry.keywords):
                return HonorClassification(entry.tier, HONOR_TIER_POINTS[entry.tier])

        return HonorClassification(HonorTier.UNCLASSIFIED, 0)

    def calculate_honor_bonus(
        self,
        awards: Iterable[Union[Award, dict, str]],
    ) -> HonorBonusResult:
        """Aggregate an award list into total points, highest tier and floor protection.

        Args:
            awards: ``Award`` models, ``{"name": ...}`` dicts or plain names.

        Returns:
            HonorBonusResult; an empty list yields 0 points and no protection.
        """
        classifications: List[HonorClassification] = []
        seen_categories: set[str] = set()
        total_points = 0
        highest = HonorTier.UNCLASSIFIED

        for award in awards:
            classification = self.classify_award(_award_name(award))
            classifications.append(classification)

            category = classification.category
            if category is not None:
                if category in seen_categories:
                    continue
                seen_categories.add(category)

            total_points += classification.points
            if HONOR_TIER_RANK[classification.tier] > HONOR_TIER_RANK[highest]:
                highest = classification.tier

        return HonorBonusResult(
            total_points=total_points,
            highest_tier=highest,
            floor_protection=highest in _FLOOR_PROTECTED_TIERS,
            classifications=classifications,
        )


def _award_name(award: Union[Award, dict, str]) -> str:
    if isinstance(award, Award):
        return award.name
    if isinstance(award, dict):
        return str(award.get("name") or "")
    return str(award)


@lru_cache
def get_honor_classifier() -> HonorClassifier:
    """Get cached classifier over the built-in tables."""
    return HonorClassifier()


def classify_award(name: str) -> HonorClassification:
    """Classify one award with the default classifier."""
    return get_honor_classifier().classify_award(name)


def calculate_honor_bonus(awards: Iterable[Union[Award, dict, str]]) -> HonorBonusResult:
    """Aggregate an award list with the default classifier."""
    return get_honor_classifier().calculate_honor_bonus(awards)
