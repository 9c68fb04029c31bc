"""MDR Score Engine.

Full formula
------------
  factor_sum = 0.35 × CitationScore(IF-weighted) + 0.15 × n(years active)
             + 0.30 × n(techniques) + 0.20 × n(min(honor points, 300))
             + PioneerBonus(10) + LeadershipBonus(5)
  pillar_avg = 0.3 × CMI + 0.3 × IL + 0.2 × GMS + 0.2 × HCI
  raw        = 0.5 × factor_sum + 0.5 × pillar_avg
  raw       *= LegacyDecay                       (historical subjects only)
  MDR        = round(clamp(raw, 0, 100), 2)

Evaluation order
----------------
  1. retraction           → score 0,    UNRANKED, disqualified
  2. unverifiable license → score None, UNRANKED, disqualified
                            (historical subjects are exempt)
  3. pillars, weighted factors, blend, decay, clamp
  4. tier: ≥90 TITAN, ≥70 ELITE, ≥50 MASTER, else UNRANKED
  5. floor protection: a Global Landmark or National honor lifts the tier
     to ELITE, never to TITAN

``calculate`` is a pure function of its input and the engine's reference
year: it performs no I/O and no logging, and keeps no state between calls.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from mdrscore.models.enums import TIER_ORDER, Tier
from mdrscore.models.score import FourPillars, ScoreInput
from mdrscore.scoring.honor_classifier import (
    HonorBonusResult,
    HonorClassifier,
    get_honor_classifier,
)
from mdrscore.scoring.impact_normalizer import calculate_if_weighted_citations, normalize
from mdrscore.scoring.pillar_calculator import calculate_pillars, pillar_weighted_average
from mdrscore.scoring.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    EngineTierThresholds,
    LegacyDecay,
    ScoringConfig,
)
from mdrscore.scoring.utils import clamp, round_score

logger = structlog.get_logger(__name__)

REASON_RETRACTED = "retracted"
REASON_UNVERIFIABLE_LICENSE = "unverifiable license"

_ZERO = Decimal("0")


@dataclass(frozen=True)
class ScoreBreakdown:
    """Named weighted components behind one MDR score."""

    citation_weight: Decimal = _ZERO
    years_active_weight: Decimal = _ZERO
    technique_weight: Decimal = _ZERO
    honor_bonus: Decimal = _ZERO
    pioneer_bonus: Decimal = _ZERO
    leadership_bonus: Decimal = _ZERO
    weighted_factor_sum: Decimal = _ZERO
    pillar_average: Decimal = _ZERO
    legacy_decay: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            "citation_weight": float(self.citation_weight),
            "years_active_weight": float(self.years_active_weight),
            "technique_weight": float(self.technique_weight),
            "honor_bonus": float(self.honor_bonus),
            "pioneer_bonus": float(self.pioneer_bonus),
            "leadership_bonus": float(self.leadership_bonus),
            "weighted_factor_sum": float(self.weighted_factor_sum),
            "pillar_average": float(self.pillar_average),
            "legacy_decay": float(self.legacy_decay) if self.legacy_decay is not None else None,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Complete MDR scoring result.

    ``score`` is None only for the unverifiable-license state; a retraction
    yields ``score == 0``. Callers must check ``disqualified`` before trusting
    ``score``.
    """

    score: Optional[Decimal]
    tier: Tier
    pillars: FourPillars
    breakdown: ScoreBreakdown
    disqualified: bool
    reason: Optional[str] = None
    floor_protection_applied: bool = False
    honor_result: Optional[HonorBonusResult] = None
    parameter_version: str = DEFAULT_SCORING_CONFIG.version

    def to_dict(self) -> dict:
        """Serialise to plain-Python dict (floats) for logging / JSON."""
        return {
            "score": float(self.score) if self.score is not None else None,
            "tier": self.tier.value,
            "pillars": self.pillars.model_dump(),
            "breakdown": self.breakdown.to_dict(),
            "disqualified": self.disqualified,
            "reason": self.reason,
            "floor_protection_applied": self.floor_protection_applied,
            "honor_total_points": self.honor_result.total_points if self.honor_result else 0,
            "parameter_version": self.parameter_version,
        }


def calculate_legacy_decay(
    year_of_death: int,
    technique_still_gold_standard: bool,
    reference_year: int,
    decay: LegacyDecay = DEFAULT_SCORING_CONFIG.legacy_decay,
) -> Decimal:
    """Decay factor in [floor, 1] for a historical subject.

    No decay while the technique is still the gold standard or within the
    grace period; afterwards 0.5% per year, floored at 50%. A death year in
    the future counts as zero years.
    """
    if technique_still_gold_standard:
        return Decimal("1.000")
    years_since_death = max(0, reference_year - year_of_death)
    if years_since_death <= decay.grace_years:
        return Decimal("1.000")
    factor = max(
        decay.floor,
        Decimal("1") - Decimal(years_since_death - decay.grace_years) * decay.rate_per_year,
    )
    return round_score(factor, places=3)


def tier_for_score(
    score: Decimal,
    thresholds: EngineTierThresholds = DEFAULT_SCORING_CONFIG.tier_thresholds,
) -> Tier:
    """Map a numeric score onto the engine's tier thresholds."""
    if score >= thresholds.titan:
        return Tier.TITAN
    if score >= thresholds.elite:
        return Tier.ELITE
    if score >= thresholds.master:
        return Tier.MASTER
    return Tier.UNRANKED


class MDRScoreEngine:
    """Compute the MDR score and the engine tier for one subject.

    Parameters
    ----------
    config:
        Override the versioned ``DEFAULT_SCORING_CONFIG``.
    honor_classifier:
        Provide a custom HonorClassifier; if None the cached default is used.
    reference_year:
        Year that legacy decay is measured against. Pin it for reproducible
        audits; if None the current calendar year is read on each call.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        honor_classifier: Optional[HonorClassifier] = None,
        reference_year: Optional[int] = None,
    ) -> None:
        self.config = config or DEFAULT_SCORING_CONFIG
        self.honor_classifier = honor_classifier or get_honor_classifier()
        self.reference_year = reference_year
        logger.info(
            "mdr_score_engine_initialized",
            parameter_version=self.config.version,
            reference_year=reference_year,
        )

    # ── public API ────────────────────────────────────────────────────────────

    def calculate(
        self,
        score_input: ScoreInput,
        use_seed_pillars: bool = False,
    ) -> ScoreResult:
        """Calculate the MDR score.

        Args:
            score_input: Validated input value object.
            use_seed_pillars: Trust ``score_input.pillars`` instead of
                recomputing them (legacy callers with pre-computed pillars).

        Returns:
            ScoreResult with pillars, weighted breakdown and engine tier.

        Note:
            Legacy decay for historical subjects depends on the reference
            year. Without a pinned ``reference_year`` it is read from the
            wall clock, so the same input can score differently once the
            calendar year changes.
        """
        # ── 1. Retraction dominates every other signal ───────────────────────
        if score_input.has_retraction:
            return self._disqualified(Decimal("0"), REASON_RETRACTED)

        # ── 2. No-dummy guardrail ────────────────────────────────────────────
        if not score_input.license_verified and not score_input.is_historical:
            return self._disqualified(None, REASON_UNVERIFIABLE_LICENSE)

        ceilings = self.config.ceilings
        weights = self.config.factor_weights

        # ── 3. Four Pillars ──────────────────────────────────────────────────
        if use_seed_pillars:
            pillars = score_input.pillars
        else:
            pillars = calculate_pillars(score_input, ceilings)
        pillar_average = pillar_weighted_average(pillars, self.config.pillar_weights)

        # ── 4. Weighted raw factors ──────────────────────────────────────────
        citation_score = calculate_if_weighted_citations(
            score_input.citations, score_input.journal_impact_factors, ceilings
        )
        citation_weight = citation_score * weights.citations
        years_active_weight = (
            normalize(score_input.years_active, ceilings.years_active) * weights.years_active
        )
        technique_weight = (
            normalize(score_input.techniques_invented, ceilings.techniques) * weights.techniques
        )

        honor_result: Optional[HonorBonusResult] = None
        honor_bonus = _ZERO
        if score_input.honors:
            honor_result = self.honor_classifier.calculate_honor_bonus(score_input.honors)
            capped = min(Decimal(honor_result.total_points), weights.max_honor_points)
            honor_bonus = normalize(capped, ceilings.honor_points) * weights.honors

        pioneer_bonus = weights.pioneer_bonus if score_input.is_pioneer else _ZERO
        leadership_bonus = weights.leadership_bonus if score_input.is_leader else _ZERO

        factor_sum = (
            citation_weight
            + years_active_weight
            + technique_weight
            + honor_bonus
            + pioneer_bonus
            + leadership_bonus
        )

        # ── 5. Blend with the pillar average ─────────────────────────────────
        blend = weights.factor_blend
        raw_score = blend * factor_sum + (Decimal("1") - blend) * pillar_average

        # ── 6. Legacy decay for historical subjects ──────────────────────────
        legacy_decay: Optional[Decimal] = None
        if score_input.is_historical and score_input.year_of_death is not None:
            legacy_decay = calculate_legacy_decay(
                score_input.year_of_death,
                score_input.technique_still_gold_standard,
                self._reference_year(),
                self.config.legacy_decay,
            )
            raw_score *= legacy_decay

        # ── 7. Clamp, round, tier ────────────────────────────────────────────
        final_score = round_score(clamp(raw_score))
        tier = tier_for_score(final_score, self.config.tier_thresholds)

        # ── 8. Floor protection (never grants TITAN) ─────────────────────────
        floor_applied = False
        if honor_result is not None and honor_result.floor_protection:
            if TIER_ORDER.index(tier) < TIER_ORDER.index(Tier.ELITE):
                tier = Tier.ELITE
                floor_applied = True

        breakdown = ScoreBreakdown(
            citation_weight=round_score(citation_weight),
            years_active_weight=round_score(years_active_weight),
            technique_weight=round_score(technique_weight),
            honor_bonus=round_score(honor_bonus),
            pioneer_bonus=round_score(pioneer_bonus),
            leadership_bonus=round_score(leadership_bonus),
            weighted_factor_sum=round_score(factor_sum),
            pillar_average=round_score(pillar_average),
            legacy_decay=legacy_decay,
        )
        return ScoreResult(
            score=final_score,
            tier=tier,
            pillars=pillars,
            breakdown=breakdown,
            disqualified=False,
            floor_protection_applied=floor_applied,
            honor_result=honor_result,
            parameter_version=self.config.version,
        )

    # ── helpers ───────────────────────────────────────────────────────────────

    def _reference_year(self) -> int:
        if self.reference_year is not None:
            return self.reference_year
        return date.today().year

    def _disqualified(self, score: Optional[Decimal], reason: str) -> ScoreResult:
        return ScoreResult(
            score=score,
            tier=Tier.UNRANKED,
            pillars=FourPillars(),
            breakdown=ScoreBreakdown(),
            disqualified=True,
            reason=reason,
            parameter_version=self.config.version,
        )
