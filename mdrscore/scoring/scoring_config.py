"""Versioned scoring constants owned by the MDR Score Engine.

Every weight, ceiling and threshold the engine uses lives here, in one
immutable structure. Application settings (``mdrscore.config``) never carry
scoring weights.

Pillar weights
--------------
  CMI 0.30, IL 0.30, GMS 0.20, HCI 0.20

Weighted raw factors
--------------------
  citations 0.35, years active 0.15, techniques 0.30, honors 0.20
  pioneer +10, leadership +5 (flat, bounded bonuses)

Normalization ceilings
----------------------
  citations 500, years 50, h-index 100, surgeries 50 000,
  lives saved 50 000, techniques 10, certifications 10, honor points 100
"""
from dataclasses import dataclass, field
from decimal import Decimal

PARAM_VERSION = "1.0.0"


@dataclass(frozen=True)
class Ceilings:
    """Value at which a raw metric normalizes to 100."""

    citations: Decimal = Decimal("500")
    years_active: Decimal = Decimal("50")
    h_index: Decimal = Decimal("100")
    surgeries: Decimal = Decimal("50000")
    lives_saved: Decimal = Decimal("50000")
    techniques: Decimal = Decimal("10")
    certifications: Decimal = Decimal("10")
    honor_points: Decimal = Decimal("100")
    # IF-weighted citations may legitimately exceed the raw citation scale
    if_weighted_multiplier: Decimal = Decimal("3")


@dataclass(frozen=True)
class PillarWeights:
    """Weights for the pillar weighted average (must sum to 1.0)."""

    clinical_mastery: Decimal = Decimal("0.30")
    intellectual_legacy: Decimal = Decimal("0.30")
    global_mentorship: Decimal = Decimal("0.20")
    humanitarian_impact: Decimal = Decimal("0.20")

    def as_list(self) -> list[Decimal]:
        return [
            self.clinical_mastery,
            self.intellectual_legacy,
            self.global_mentorship,
            self.humanitarian_impact,
        ]


@dataclass(frozen=True)
class FactorWeights:
    """Weights for the raw-factor sum blended with the pillar average."""

    citations: Decimal = Decimal("0.35")
    years_active: Decimal = Decimal("0.15")
    techniques: Decimal = Decimal("0.30")
    honors: Decimal = Decimal("0.20")
    pioneer_bonus: Decimal = Decimal("10")
    leadership_bonus: Decimal = Decimal("5")
    max_honor_points: Decimal = Decimal("300")
    # rawScore = factor_blend × factor_sum + (1 − factor_blend) × pillar_average
    factor_blend: Decimal = Decimal("0.5")


@dataclass(frozen=True)
class LegacyDecay:
    """Decay applied to historical subjects after a grace period."""

    grace_years: int = 10
    rate_per_year: Decimal = Decimal("0.005")
    floor: Decimal = Decimal("0.5")


@dataclass(frozen=True)
class EngineTierThresholds:
    """Numeric tier thresholds used by the score engine."""

    titan: Decimal = Decimal("90")
    elite: Decimal = Decimal("70")
    master: Decimal = Decimal("50")


@dataclass(frozen=True)
class ScoringConfig:
    """Complete, immutable parameter set for one engine version."""

    version: str = PARAM_VERSION
    ceilings: Ceilings = field(default_factory=Ceilings)
    pillar_weights: PillarWeights = field(default_factory=PillarWeights)
    factor_weights: FactorWeights = field(default_factory=FactorWeights)
    legacy_decay: LegacyDecay = field(default_factory=LegacyDecay)
    tier_thresholds: EngineTierThresholds = field(default_factory=EngineTierThresholds)

    def to_dict(self) -> dict:
        """Serialise to plain-Python dict (floats) for logging / JSON."""
        return {
            "version": self.version,
            "ceilings": {k: float(v) for k, v in vars(self.ceilings).items()},
            "pillar_weights": {k: float(v) for k, v in vars(self.pillar_weights).items()},
            "factor_weights": {k: float(v) for k, v in vars(self.factor_weights).items()},
            "legacy_decay": {
                "grace_years": self.legacy_decay.grace_years,
                "rate_per_year": float(self.legacy_decay.rate_per_year),
                "floor": float(self.legacy_decay.floor),
            },
            "tier_thresholds": {
                k: float(v) for k, v in vars(self.tier_thresholds).items()
            },
        }


DEFAULT_SCORING_CONFIG = ScoringConfig()
