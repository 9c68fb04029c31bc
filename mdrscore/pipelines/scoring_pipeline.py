"""
Profile scoring pipeline.

Runs one stored profile through the full chain:
  profile record → ScoreInput → MDRScoreEngine → TierGatekeeper

The engine tier is the one persisted on the profile; the gatekeeper
assignment is returned alongside it for display and audit.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import structlog
from pydantic import ValidationError

from mdrscore.models.enums import Tier
from mdrscore.models.score import ScoreInput
from mdrscore.pipelines.profile_mapper import (
    build_score_input,
    build_tier_facts,
    count_publications,
)
from mdrscore.pipelines.publication_signals import Paper
from mdrscore.scoring.mdr_score_engine import MDRScoreEngine, ScoreResult
from mdrscore.scoring.ranking import RankingEntry, SpecialtyRank, rank_by_specialty
from mdrscore.scoring.tier_gatekeeper import TierAssignment, TierGatekeeper

logger = structlog.get_logger(__name__)


@dataclass
class ProfileScore:
    """Scored profile: engine result plus gatekeeper assignment."""

    slug: str
    specialty: Optional[str]
    score_input: ScoreInput
    result: ScoreResult
    assignment: TierAssignment

    @property
    def persisted_tier(self) -> Tier:
        return self.result.tier

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "specialty": self.specialty,
            "persisted_tier": self.persisted_tier.value,
            "score": self.result.to_dict(),
            "tier": self.assignment.to_dict(),
        }


@dataclass
class BatchScoreResult:
    """Outcome of scoring a batch; failed records are reported, never raised."""

    scores: List[ProfileScore] = field(default_factory=list)
    errors: List[Dict[str, str]] = field(default_factory=list)

    def rankings(self) -> Dict[str, SpecialtyRank]:
        entries = [
            RankingEntry(slug=s.slug, score=float(s.result.score), specialty=s.specialty)
            for s in self.scores
            if not s.result.disqualified and s.result.score is not None
        ]
        return rank_by_specialty(entries)

    def to_dict(self) -> dict:
        return {
            "scored": len(self.scores),
            "failed": len(self.errors),
            "scores": [s.to_dict() for s in self.scores],
            "errors": list(self.errors),
        }


class MDRScoringPipeline:
    """
    Score stored profiles end to end.

    Parameters
    ----------
    engine:
        Score engine to use; a default engine is built if None.
    gatekeeper:
        Tier gatekeeper to use; a default gatekeeper is built if None.
    """

    def __init__(
        self,
        engine: Optional[MDRScoreEngine] = None,
        gatekeeper: Optional[TierGatekeeper] = None,
    ) -> None:
        self.engine = engine or MDRScoreEngine()
        self.gatekeeper = gatekeeper or TierGatekeeper()

    def score_profile(
        self,
        profile: Dict[str, Any],
        papers: Optional[Sequence[Paper]] = None,
    ) -> ProfileScore:
        """
        Score one profile record.

        Raises:
            ValueError: If the record cannot be mapped to a score input.
        """
        score_input = build_score_input(profile, papers)
        result = self.engine.calculate(score_input)
        facts = build_tier_facts(score_input, count_publications(profile, papers))
        assignment = self.gatekeeper.assign_tier(result, facts)

        slug = str(profile.get("slug") or profile.get("id") or "")
        logger.info(
            "profile_scored",
            slug=slug,
            score=float(result.score) if result.score is not None else None,
            engine_tier=result.tier.value,
            gatekeeper_tier=assignment.tier.value,
            disqualified=result.disqualified,
            reason=result.reason,
            floor_protection_applied=result.floor_protection_applied,
            parameter_version=result.parameter_version,
        )
        return ProfileScore(
            slug=slug,
            specialty=profile.get("specialty"),
            score_input=score_input,
            result=result,
            assignment=assignment,
        )

    def score_many(self, profiles: Iterable[Dict[str, Any]]) -> BatchScoreResult:
        """Score a batch; one malformed record never aborts the rest."""
        batch = BatchScoreResult()
        for index, profile in enumerate(profiles):
            try:
                batch.scores.append(self.score_profile(profile))
            except (ValueError, TypeError, ValidationError) as e:
                slug = str(profile.get("slug") or index) if isinstance(profile, dict) else str(index)
                logger.warning("profile_scoring_failed", slug=slug, error=str(e))
                batch.errors.append({"slug": slug, "error": str(e)})
        logger.info("profile_batch_scored", scored=len(batch.scores), failed=len(batch.errors))
        return batch
