"""Tier Gatekeeper.

Assigns a tier from a scored result plus hard requirements. Evaluation
cascades strictly downward: a candidate that fails a tier's requirements is
re-evaluated at the next tier with the same score, and every failed check is
carried forward in ``unmet_requirements``.

  Titan   score ≥ 95   invention, ≥3 peer verifications,
                       h-index ≥ 60 OR ≥ 20 000 verified lives saved
  Elite   score ≥ 80   license verified, ≥ 100 peer-reviewed publications
                       (any unmet → Master)
  Master  score ≥ 60   ≥ 15 years active (soft: flags, never downgrades)
  else    UNRANKED
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from mdrscore.models.enums import Tier
from mdrscore.scoring.mdr_score_engine import ScoreResult


@dataclass(frozen=True)
class GatekeeperThresholds:
    """Score thresholds and hard requirements used by the gatekeeper."""

    titan_score: Decimal = Decimal("95")
    titan_manual_verifications: int = 3
    titan_h_index: Decimal = Decimal("60")
    titan_lives_saved: int = 20000
    elite_score: Decimal = Decimal("80")
    elite_publications: int = 100
    master_score: Decimal = Decimal("60")
    master_years_active: Decimal = Decimal("15")


DEFAULT_GATEKEEPER_THRESHOLDS = GatekeeperThresholds()


@dataclass(frozen=True)
class TierFacts:
    """Requirement facts for one subject, independent of the score."""

    has_invention: bool = False
    manual_verifications: int = 0
    h_index: float = 0
    lives_saved: int = 0
    years_active: float = 0
    total_publications: int = 0
    license_verified: bool = False


@dataclass(frozen=True)
class TierAssignment:
    """Gatekeeper output for one subject."""

    tier: Tier
    reason: str
    meets_all_requirements: bool
    unmet_requirements: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "reason": self.reason,
            "meets_all_requirements": self.meets_all_requirements,
            "unmet_requirements": list(self.unmet_requirements),
        }


def _fmt(value: Decimal) -> str:
    # 97.50 -> "97.5", 95.00 -> "95"
    return format(value.normalize(), "f")


class TierGatekeeper:
    """Requirement-aware tier assignment over an engine ``ScoreResult``."""

    def __init__(self, thresholds: Optional[GatekeeperThresholds] = None) -> None:
        self.thresholds = thresholds or DEFAULT_GATEKEEPER_THRESHOLDS

    def assign_tier(self, score_result: ScoreResult, facts: TierFacts) -> TierAssignment:
        """Assign a tier; never raises for well-typed input."""
        if score_result.disqualified or score_result.score is None:
            reason = score_result.reason or "Score disqualified"
            return TierAssignment(
                tier=Tier.UNRANKED,
                reason=f"Disqualified: {reason}",
                meets_all_requirements=False,
                unmet_requirements=["Score disqualified"],
            )

        t = self.thresholds
        score = score_result.score
        score_text = _fmt(score)
        unmet: List[str] = []

        # ── Titan ────────────────────────────────────────────────────────────
        if score >= t.titan_score:
            if not facts.has_invention:
                unmet.append("Requires a documented paradigm-shifting invention")
            if facts.manual_verifications < t.titan_manual_verifications:
                unmet.append(
                    f"Requires ≥ {t.titan_manual_verifications} manual verifications "
                    f"from Titan-tier peers (has {facts.manual_verifications})"
                )
            if (
                Decimal(str(facts.h_index)) < t.titan_h_index
                and facts.lives_saved < t.titan_lives_saved
            ):
                unmet.append(
                    f"Requires H-index ≥ {_fmt(t.titan_h_index)} OR "
                    f"≥ {t.titan_lives_saved:,} verified lives saved"
                )
            if not unmet:
                return TierAssignment(
                    tier=Tier.TITAN,
                    reason=(
                        f"Score {score_text} ≥ {_fmt(t.titan_score)} with paradigm-shifting "
                        f"invention and {facts.manual_verifications} peer verifications."
                    ),
                    meets_all_requirements=True,
                )

        # ── Elite ────────────────────────────────────────────────────────────
        if score >= t.elite_score:
            elite_unmet: List[str] = []
            if not facts.license_verified:
                elite_unmet.append("Active license must be verified via API")
            if facts.total_publications < t.elite_publications:
                elite_unmet.append(
                    f"Requires ≥ {t.elite_publications} peer-reviewed publications "
                    f"(has {facts.total_publications})"
                )
            unmet.extend(elite_unmet)
            if not elite_unmet:
                if unmet:
                    reason = (
                        f"Score {score_text} ≥ {_fmt(t.titan_score)} qualifies for Titan but missing: "
                        f"{'; '.join(unmet)}. Assigned Elite instead."
                    )
                else:
                    reason = (
                        f"Score {score_text} ≥ {_fmt(t.elite_score)} with verified "
                        f"license and {facts.total_publications} publications."
                    )
                return TierAssignment(
                    tier=Tier.ELITE,
                    reason=reason,
                    meets_all_requirements=not unmet,
                    unmet_requirements=unmet,
                )
            return TierAssignment(
                tier=Tier.MASTER,
                reason=(
                    f"Score {score_text} ≥ {_fmt(t.elite_score)} but Elite requirements "
                    f"unmet: {'; '.join(elite_unmet)}. Assigned Master instead."
                ),
                meets_all_requirements=False,
                unmet_requirements=unmet,
            )

        # ── Master ───────────────────────────────────────────────────────────
        if score >= t.master_score:
            if Decimal(str(facts.years_active)) < t.master_years_active:
                unmet.append(
                    f"Requires ≥ {_fmt(t.master_years_active)} years of clinical "
                    f"excellence (has {_fmt(Decimal(str(facts.years_active)))})"
                )
            return TierAssignment(
                tier=Tier.MASTER,
                reason=f"Score {score_text} ≥ {_fmt(t.master_score)} with regional mastery.",
                meets_all_requirements=not unmet,
                unmet_requirements=unmet,
            )

        return TierAssignment(
            tier=Tier.UNRANKED,
            reason=f"Score {score_text} below Master threshold of {_fmt(t.master_score)}.",
            meets_all_requirements=False,
            unmet_requirements=[f"Score must be ≥ {_fmt(t.master_score)}"],
        )


def assign_tier(score_result: ScoreResult, facts: TierFacts) -> TierAssignment:
    """Assign a tier with the default thresholds."""
    return TierGatekeeper().assign_tier(score_result, facts)
