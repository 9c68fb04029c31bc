"""Tests for the MDR score engine."""
from decimal import Decimal

import pytest

from mdrscore.models import Award, FourPillars, ScoreInput, Tier
from mdrscore.scoring.mdr_score_engine import (
    REASON_RETRACTED,
    REASON_UNVERIFIABLE_LICENSE,
    MDRScoreEngine,
    calculate_legacy_decay,
    tier_for_score,
)
from mdrscore.scoring.scoring_config import DEFAULT_SCORING_CONFIG


# ── Disqualification ──────────────────────────────────────────────────────────

class TestDisqualification:

    def test_retraction_scores_zero(self, engine):
        result = engine.calculate(ScoreInput(has_retraction=True))
        assert result.score == Decimal("0")
        assert result.tier == Tier.UNRANKED
        assert result.disqualified is True
        assert result.reason == REASON_RETRACTED

    def test_retraction_overrides_everything(self, engine, titan_input):
        result = engine.calculate(titan_input.model_copy(update={"has_retraction": True}))
        assert result.score == Decimal("0")
        assert result.tier == Tier.UNRANKED

    def test_retraction_checked_before_license(self, engine):
        result = engine.calculate(ScoreInput(has_retraction=True, license_verified=False))
        assert result.score == Decimal("0")
        assert result.reason == REASON_RETRACTED

    def test_unverified_license_has_null_score(self, engine, titan_input):
        result = engine.calculate(titan_input.model_copy(update={"license_verified": False}))
        assert result.score is None
        assert result.tier == Tier.UNRANKED
        assert result.disqualified is True
        assert result.reason == REASON_UNVERIFIABLE_LICENSE

    def test_historical_subjects_are_exempt_from_license(self, engine):
        result = engine.calculate(ScoreInput(is_historical=True, h_index=50))
        assert result.disqualified is False
        assert result.score is not None


# ── Scoring ───────────────────────────────────────────────────────────────────

class TestScoring:

    def test_nobel_example_breakdown(self, engine, nobel_input):
        result = engine.calculate(nobel_input)
        b = result.breakdown
        assert b.citation_weight == Decimal("21.00")
        assert b.years_active_weight == Decimal("9.00")
        assert b.technique_weight == Decimal("0.00")
        assert b.honor_bonus == Decimal("20.00")
        assert b.weighted_factor_sum == Decimal("50.00")
        assert b.pillar_average == Decimal("22.20")
        assert b.legacy_decay is None
        # 0.5 × 50 + 0.5 × 22.2
        assert result.score == Decimal("36.10")

    def test_nobel_example_is_lifted_to_elite_by_floor_protection(self, engine, nobel_input):
        result = engine.calculate(nobel_input)
        assert result.tier == Tier.ELITE
        assert result.floor_protection_applied is True

    def test_fully_populated_nobel_profile_reaches_titan(self, engine, titan_input):
        result = engine.calculate(titan_input)
        # factor sum 95, pillar average 89.2
        assert result.score == Decimal("92.10")
        assert result.tier == Tier.TITAN
        assert result.floor_protection_applied is False

    def test_unclassified_award_gives_no_floor_protection(self, engine, nobel_input):
        local = nobel_input.model_copy(update={"honors": (Award(name="Some Local Club Award"),)})
        result = engine.calculate(local)
        assert result.breakdown.honor_bonus == Decimal("0.00")
        assert result.score == Decimal("26.10")
        assert result.tier == Tier.UNRANKED
        assert result.floor_protection_applied is False

    def test_floor_protection_never_grants_titan(self, engine, titan_input):
        weaker = titan_input.model_copy(update={"is_pioneer": False, "is_leader": False})
        result = engine.calculate(weaker)
        # 0.5 × 80 + 0.5 × 89.2
        assert result.score == Decimal("84.60")
        assert result.tier == Tier.ELITE
        assert result.floor_protection_applied is False

    def test_honor_points_capped_at_300(self, engine):
        many = tuple(Award(name=n) for n in ["Nobel Prize", "Lasker Award", "Wolf Prize", "Japan Prize"])
        result = engine.calculate(ScoreInput(license_verified=True, honors=many))
        assert result.honor_result.total_points == 400
        # min(400, 300) normalized against 100 saturates at 100 × 0.20
        assert result.breakdown.honor_bonus == Decimal("20.00")

    def test_pioneer_and_leadership_bonuses(self, engine):
        result = engine.calculate(ScoreInput(license_verified=True, is_pioneer=True, is_leader=True))
        assert result.breakdown.pioneer_bonus == Decimal("10.00")
        assert result.breakdown.leadership_bonus == Decimal("5.00")
        assert result.score == Decimal("7.50")

    def test_score_is_clamped_to_100(self, engine):
        result = engine.calculate(ScoreInput(
            license_verified=True,
            citations=500, years_active=50, h_index=100,
            verified_surgeries=50000, lives_saved=50000,
            techniques_invented=10, board_certifications=10,
            is_pioneer=True, is_leader=True,
            honors=(Award(name="Nobel Prize"),),
        ))
        assert result.score == Decimal("100.00")
        assert result.tier == Tier.TITAN

    @pytest.mark.parametrize(
        "overrides, expected",
        [
            # citation factor saturates: 100 × 0.35 = 35; intellectual pillar 30
            ({"citations": 1e30}, Decimal("22.00")),
            # clinical pillar 60 → pillar average 18
            ({"verified_surgeries": 10**30}, Decimal("9.00")),
            # mentorship and humanitarian pillars saturate → pillar average 40
            ({"lives_saved": 10**40, "board_certifications": 10**40}, Decimal("20.00")),
        ],
    )
    def test_huge_magnitudes_saturate(self, engine, overrides, expected):
        result = engine.calculate(ScoreInput(license_verified=True, **overrides))
        assert result.score == expected

    def test_huge_journal_breakdown_saturates(self, engine):
        result = engine.calculate(ScoreInput(
            license_verified=True,
            journal_impact_factors=({"journal": "Lancet", "citation_count": 10**30},),
        ))
        assert result.breakdown.citation_weight == Decimal("35.00")

    def test_if_weighted_citations_replace_plain_count(self, engine):
        plain = engine.calculate(ScoreInput(license_verified=True, citations=300))
        weighted = engine.calculate(ScoreInput(
            license_verified=True,
            citations=300,
            journal_impact_factors=({"journal": "Lancet", "citation_count": 300},),
        ))
        assert plain.breakdown.citation_weight == Decimal("21.00")
        # 300 × 5.0 = 1500 → 100 × 0.35
        assert weighted.breakdown.citation_weight == Decimal("35.00")

    def test_seed_pillars_used_only_on_request(self, engine):
        seeded = ScoreInput(
            license_verified=True,
            pillars=FourPillars(
                clinical_mastery_index=100,
                intellectual_legacy=100,
                global_mentorship_score=100,
                humanitarian_impact=100,
            ),
        )
        assert engine.calculate(seeded).score == Decimal("0.00")
        result = engine.calculate(seeded, use_seed_pillars=True)
        assert result.score == Decimal("50.00")
        assert result.tier == Tier.MASTER

    def test_deterministic(self, engine, titan_input):
        assert engine.calculate(titan_input) == engine.calculate(titan_input)

    def test_to_dict(self, engine, nobel_input):
        data = engine.calculate(nobel_input).to_dict()
        assert data["score"] == 36.1
        assert data["tier"] == "ELITE"
        assert data["honor_total_points"] == 100
        assert data["parameter_version"] == DEFAULT_SCORING_CONFIG.version
        assert data["pillars"]["intellectual_legacy"] == 50.0


# ── Legacy decay ──────────────────────────────────────────────────────────────

class TestLegacyDecay:

    @pytest.mark.parametrize(
        "year_of_death, expected",
        [
            (2020, Decimal("1.000")),   # within grace period
            (2016, Decimal("1.000")),   # exactly 10 years
            (2000, Decimal("0.920")),
            (1950, Decimal("0.670")),
            (1800, Decimal("0.500")),   # floored
            (2030, Decimal("1.000")),   # future death year counts as zero years
        ],
    )
    def test_decay_factor(self, year_of_death, expected):
        assert calculate_legacy_decay(year_of_death, False, 2026) == expected

    def test_gold_standard_technique_does_not_decay(self):
        assert calculate_legacy_decay(1800, True, 2026) == Decimal("1.000")

    def test_decay_applied_to_historical_score(self, engine, titan_input):
        historical = titan_input.model_copy(update={
            "license_verified": False,
            "is_historical": True,
            "year_of_death": 1950,
        })
        result = engine.calculate(historical)
        assert result.breakdown.legacy_decay == Decimal("0.670")
        # 92.1 × 0.67
        assert result.score == Decimal("61.71")
        assert result.tier == Tier.ELITE  # Nobel floor protection

    def test_historical_without_death_year_is_not_decayed(self, engine, titan_input):
        historical = titan_input.model_copy(update={"is_historical": True})
        result = engine.calculate(historical)
        assert result.breakdown.legacy_decay is None
        assert result.score == Decimal("92.10")

    def test_reference_year_is_injectable(self, titan_input):
        historical = titan_input.model_copy(update={"is_historical": True, "year_of_death": 2000})
        recent = MDRScoreEngine(reference_year=2005).calculate(historical)
        later = MDRScoreEngine(reference_year=2040).calculate(historical)
        assert recent.breakdown.legacy_decay == Decimal("1.000")
        assert later.breakdown.legacy_decay == Decimal("0.850")


# ── Tier thresholds ───────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "score, expected",
    [
        ("100", Tier.TITAN),
        ("90", Tier.TITAN),
        ("89.99", Tier.ELITE),
        ("70", Tier.ELITE),
        ("69.99", Tier.MASTER),
        ("50", Tier.MASTER),
        ("49.99", Tier.UNRANKED),
        ("0", Tier.UNRANKED),
    ],
)
def test_tier_for_score(score, expected):
    assert tier_for_score(Decimal(score)) == expected
