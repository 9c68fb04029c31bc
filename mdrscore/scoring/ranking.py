"""Specialty ranking over scored profiles.

Profiles are grouped by specialty, sorted by score descending (ties broken by
slug so output is deterministic) and assigned 1-based ranks.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

DEFAULT_SPECIALTY = "General Practice"


@dataclass(frozen=True)
class RankingEntry:
    """One scored profile to be ranked."""

    slug: str
    score: float
    specialty: Optional[str] = None


@dataclass(frozen=True)
class SpecialtyRank:
    slug: str
    specialty: str
    score: float
    rank: int
    total_in_specialty: int

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "specialty": self.specialty,
            "score": self.score,
            "rank": self.rank,
            "total_in_specialty": self.total_in_specialty,
        }


def rank_by_specialty(entries: Iterable[RankingEntry]) -> Dict[str, SpecialtyRank]:
    """Rank every entry within its specialty.

    Args:
        entries: Scored profiles; a missing specialty falls back to
            ``DEFAULT_SPECIALTY``.

    Returns:
        Mapping of slug to its SpecialtyRank.
    """
    groups: Dict[str, List[RankingEntry]] = defaultdict(list)
    for entry in entries:
        groups[entry.specialty or DEFAULT_SPECIALTY].append(entry)

    rankings: Dict[str, SpecialtyRank] = {}
    for specialty, members in groups.items():
        ordered = sorted(members, key=lambda e: (-e.score, e.slug))
        total = len(ordered)
        for index, entry in enumerate(ordered, start=1):
            rankings[entry.slug] = SpecialtyRank(
                slug=entry.slug,
                specialty=specialty,
                score=entry.score,
                rank=index,
                total_in_specialty=total,
            )
    return rankings


def top_profiles(
    rankings: Dict[str, SpecialtyRank],
    specialty: Optional[str] = None,
    limit: int = 10,
) -> List[SpecialtyRank]:
    """Highest-ranked profiles, optionally restricted to one specialty."""
    selected = [
        r for r in rankings.values()
        if specialty is None or r.specialty == specialty
    ]
    selected.sort(key=lambda r: (-r.score, r.slug))
    return selected[:limit]
