"""Tests for metric normalization and journal impact-factor weighting."""
from decimal import Decimal

import pytest

from mdrscore.models import JournalCitation
from mdrscore.scoring.impact_normalizer import (
    calculate_if_weighted_citations,
    get_impact_factor_multiplier,
    lookup_impact_factor,
    normalize,
)


class TestNormalize:

    def test_scales_against_ceiling(self):
        assert normalize(250, 500) == Decimal("50.0000")

    def test_caps_at_100(self):
        assert normalize(1000, 500) == Decimal("100")

    def test_negative_clamps_to_zero(self):
        assert normalize(-5, 500) == Decimal("0")

    def test_non_positive_ceiling_yields_zero(self):
        assert normalize(5, 0) == Decimal("0")

    @pytest.mark.parametrize("value", [1e30, 10**30, 1e308, Decimal("1E+60")])
    def test_huge_values_saturate(self, value):
        assert normalize(value, 500) == Decimal("100")

    def test_tiny_value(self):
        assert normalize(1e-30, 500) == Decimal("0")


class TestJournalLookup:

    def test_exact_match(self):
        assert lookup_impact_factor("Nature Medicine") == 82.9

    def test_case_and_dots_ignored(self):
        assert lookup_impact_factor("J.A.M.A.") == 120.7

    def test_longest_partial_match_wins(self):
        assert lookup_impact_factor("The Lancet Oncology") == 51.1
        assert lookup_impact_factor("The Lancet") == 168.9

    def test_partial_match_respects_word_boundaries(self):
        # "science" must not match inside "neuroscience"
        assert lookup_impact_factor("Journal of Neuroscience") == 6.7

    def test_abbreviations_are_not_resolved(self):
        assert lookup_impact_factor("N. Engl. J. Med.") is None

    @pytest.mark.parametrize("name", ["", "   ", "Regional Bulletin of Surgery Notes"])
    def test_unknown_returns_none(self, name):
        assert lookup_impact_factor(name) is None


class TestImpactFactorMultiplier:

    @pytest.mark.parametrize(
        "journal, expected",
        [
            ("New England Journal of Medicine", Decimal("5.0")),
            ("JAMA", Decimal("5.0")),
            ("Circulation", Decimal("3.0")),
            ("Annals of Surgery", Decimal("2.0")),
            ("Hepatology", Decimal("2.0")),
            ("Neurology", Decimal("1.5")),
            ("Regional Bulletin of Surgery Notes", Decimal("1.0")),
        ],
    )
    def test_bands(self, journal, expected):
        assert get_impact_factor_multiplier(journal) == expected


class TestIFWeightedCitations:

    def test_without_breakdown_falls_back_to_plain_normalize(self):
        assert calculate_if_weighted_citations(300) == Decimal("60.0000")

    def test_empty_breakdown_falls_back(self):
        assert calculate_if_weighted_citations(300, []) == Decimal("60.0000")

    def test_breakdown_normalizes_against_triple_ceiling(self):
        breakdown = [JournalCitation(journal="Lancet", citation_count=100)]
        # 100 × 5.0 = 500 against 1500
        assert calculate_if_weighted_citations(0, breakdown) == Decimal("33.3333")

    def test_unknown_journal_counts_at_face_value(self):
        breakdown = [JournalCitation(journal="Regional Bulletin of Surgery Notes", citation_count=150)]
        assert calculate_if_weighted_citations(0, breakdown) == Decimal("10.0000")

    def test_breakdown_is_capped_at_100(self):
        breakdown = [JournalCitation(journal="New England Journal of Medicine", citation_count=400)]
        assert calculate_if_weighted_citations(0, breakdown) == Decimal("100")

    def test_huge_breakdown_is_capped_at_100(self):
        breakdown = [JournalCitation(journal="Lancet", citation_count=10**40)]
        assert calculate_if_weighted_citations(0, breakdown) == Decimal("100")
