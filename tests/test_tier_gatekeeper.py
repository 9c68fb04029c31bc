"""Tests for the requirement-aware tier gatekeeper."""
from dataclasses import replace
from decimal import Decimal

import pytest

from mdrscore.models import FourPillars, Tier
from mdrscore.scoring.mdr_score_engine import ScoreBreakdown, ScoreResult
from mdrscore.scoring.tier_gatekeeper import TierFacts, TierGatekeeper, assign_tier


def _result(score, disqualified=False, reason=None):
    return ScoreResult(
        score=Decimal(score) if score is not None else None,
        tier=Tier.UNRANKED,
        pillars=FourPillars(),
        breakdown=ScoreBreakdown(),
        disqualified=disqualified,
        reason=reason,
    )


@pytest.fixture
def titan_facts():
    return TierFacts(
        has_invention=True,
        manual_verifications=3,
        h_index=60,
        lives_saved=0,
        years_active=30,
        total_publications=150,
        license_verified=True,
    )


class TestDisqualified:

    def test_retracted_result_is_unranked_with_engine_reason(self, titan_facts):
        assignment = assign_tier(_result("0", True, "retracted"), titan_facts)
        assert assignment.tier == Tier.UNRANKED
        assert "retracted" in assignment.reason
        assert assignment.meets_all_requirements is False

    def test_null_score_is_unranked(self, titan_facts):
        assignment = assign_tier(_result(None, True, "unverifiable license"), titan_facts)
        assert assignment.tier == Tier.UNRANKED
        assert "unverifiable license" in assignment.reason


class TestTitan:

    def test_all_requirements_met(self, titan_facts):
        assignment = assign_tier(_result("97.5"), titan_facts)
        assert assignment.tier == Tier.TITAN
        assert assignment.meets_all_requirements is True
        assert assignment.unmet_requirements == []
        assert "97.5" in assignment.reason and "95" in assignment.reason

    def test_lives_saved_substitutes_for_h_index(self, titan_facts):
        facts = replace(titan_facts, h_index=10, lives_saved=20000)
        assert assign_tier(_result("96"), facts).tier == Tier.TITAN

    def test_missing_invention_downgrades_to_elite(self, titan_facts):
        facts = replace(titan_facts, has_invention=False)
        assignment = assign_tier(_result("96"), facts)
        assert assignment.tier == Tier.ELITE
        assert assignment.meets_all_requirements is False
        assert assignment.unmet_requirements == [
            "Requires a documented paradigm-shifting invention"
        ]
        assert "qualifies for Titan" in assignment.reason

    def test_every_failed_titan_check_is_listed(self, titan_facts):
        facts = replace(titan_facts, has_invention=False, manual_verifications=1, h_index=20)
        assignment = assign_tier(_result("99"), facts)
        assert assignment.tier == Tier.ELITE
        assert len(assignment.unmet_requirements) == 3
        assert any("(has 1)" in u for u in assignment.unmet_requirements)
        assert any("20,000" in u for u in assignment.unmet_requirements)

    def test_titan_and_elite_failures_fall_to_master(self, titan_facts):
        facts = replace(titan_facts, has_invention=False, license_verified=False)
        assignment = assign_tier(_result("96"), facts)
        assert assignment.tier == Tier.MASTER
        assert "Active license must be verified via API" in assignment.unmet_requirements
        assert "Requires a documented paradigm-shifting invention" in assignment.unmet_requirements

    def test_engine_titan_score_below_95_is_not_titan(self, titan_facts):
        assignment = assign_tier(_result("92"), titan_facts)
        assert assignment.tier == Tier.ELITE
        assert assignment.meets_all_requirements is True


class TestElite:

    def test_elite_met(self, titan_facts):
        assignment = assign_tier(_result("85"), titan_facts)
        assert assignment.tier == Tier.ELITE
        assert "85" in assignment.reason and "80" in assignment.reason

    def test_too_few_publications_downgrades_to_master(self, titan_facts):
        facts = replace(titan_facts, total_publications=50)
        assignment = assign_tier(_result("85"), facts)
        assert assignment.tier == Tier.MASTER
        assert assignment.unmet_requirements == [
            "Requires ≥ 100 peer-reviewed publications (has 50)"
        ]

    def test_unverified_license_downgrades_to_master(self, titan_facts):
        facts = replace(titan_facts, license_verified=False)
        assignment = assign_tier(_result("80"), facts)
        assert assignment.tier == Tier.MASTER
        assert assignment.meets_all_requirements is False


class TestMaster:

    def test_master_met(self, titan_facts):
        assignment = assign_tier(_result("65"), titan_facts)
        assert assignment.tier == Tier.MASTER
        assert assignment.meets_all_requirements is True
        assert assignment.reason == "Score 65 ≥ 60 with regional mastery."

    def test_short_career_is_soft_requirement(self, titan_facts):
        facts = replace(titan_facts, years_active=10)
        assignment = assign_tier(_result("65"), facts)
        assert assignment.tier == Tier.MASTER
        assert assignment.meets_all_requirements is False
        assert assignment.unmet_requirements == [
            "Requires ≥ 15 years of clinical excellence (has 10)"
        ]


def test_below_master_is_unranked(titan_facts):
    assignment = TierGatekeeper().assign_tier(_result("55"), titan_facts)
    assert assignment.tier == Tier.UNRANKED
    assert assignment.reason == "Score 55 below Master threshold of 60."
    assert assignment.unmet_requirements == ["Score must be ≥ 60"]


def test_to_dict(titan_facts):
    data = assign_tier(_result("97"), titan_facts).to_dict()
    assert data["tier"] == "TITAN"
    assert data["meets_all_requirements"] is True
