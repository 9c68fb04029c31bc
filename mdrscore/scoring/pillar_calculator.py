"""Four-Pillar Aggregator.

Pillars
-------
  Clinical Mastery Index   = 0.6 × n(surgeries) + 0.4 × n(years active)
  Intellectual Legacy      = 0.4 × n(h-index) + 0.3 × n(citations)
                             + 0.3 × n(techniques invented)
  Global Mentorship Score  = n(board certifications)
  Humanitarian Impact      = n(lives saved)

Where n(x) = normalize(x, ceiling) onto [0, 100]. Each pillar is rounded to
2 d.p. and computed independently of the others.

Global Mentorship is a single-factor proxy: certifications stand in for
institutional influence until mentee data is available.
"""
from decimal import Decimal

from mdrscore.models.score import FourPillars, ScoreInput
from mdrscore.scoring.impact_normalizer import normalize
from mdrscore.scoring.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    Ceilings,
    PillarWeights,
)
from mdrscore.scoring.utils import round_score, to_decimal, weighted_mean

_SURGERY_WEIGHT = Decimal("0.6")
_LONGEVITY_WEIGHT = Decimal("0.4")
_H_INDEX_WEIGHT = Decimal("0.4")
_CITATION_WEIGHT = Decimal("0.3")
_TECHNIQUE_WEIGHT = Decimal("0.3")


def calculate_pillars(
    score_input: ScoreInput,
    ceilings: Ceilings = DEFAULT_SCORING_CONFIG.ceilings,
) -> FourPillars:
    """Compute the Four Pillars from raw profile metrics."""
    clinical = (
        _SURGERY_WEIGHT * normalize(score_input.verified_surgeries, ceilings.surgeries)
        + _LONGEVITY_WEIGHT * normalize(score_input.years_active, ceilings.years_active)
    )
    legacy = (
        _H_INDEX_WEIGHT * normalize(score_input.h_index, ceilings.h_index)
        + _CITATION_WEIGHT * normalize(score_input.citations, ceilings.citations)
        + _TECHNIQUE_WEIGHT * normalize(score_input.techniques_invented, ceilings.techniques)
    )
    mentorship = normalize(score_input.board_certifications, ceilings.certifications)
    humanitarian = normalize(score_input.lives_saved, ceilings.lives_saved)

    return FourPillars(
        clinical_mastery_index=float(round_score(clinical)),
        intellectual_legacy=float(round_score(legacy)),
        global_mentorship_score=float(round_score(mentorship)),
        humanitarian_impact=float(round_score(humanitarian)),
    )


def pillar_weighted_average(
    pillars: FourPillars,
    weights: PillarWeights = DEFAULT_SCORING_CONFIG.pillar_weights,
) -> Decimal:
    """Weighted average of the four pillars (CMI, IL, GMS, HCI order)."""
    values = [
        to_decimal(pillars.clinical_mastery_index),
        to_decimal(pillars.intellectual_legacy),
        to_decimal(pillars.global_mentorship_score),
        to_decimal(pillars.humanitarian_impact),
    ]
    return weighted_mean(values, weights.as_list())
