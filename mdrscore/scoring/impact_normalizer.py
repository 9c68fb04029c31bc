"""Evidence / Impact Normalizer.

Converts raw citation counts and journal names into 0–100 sub-scores.

  normalize(value, ceiling) = clamp(value / ceiling × 100, 0, 100)

Journal impact factor → citation multiplier
--------------------------------------------
  IF ≥ 50 → 5.0   (NEJM, Lancet, Nature, JAMA)
  IF ≥ 20 → 3.0   (top specialty journals)
  IF ≥ 10 → 2.0
  IF ≥  5 → 1.5
  else / unknown → 1.0

IF-weighted citations are normalized against three times the citation
ceiling, since weighting legitimately pushes totals past the raw scale.
Negative values are clamped to 0; unknown journals never raise.
"""
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from mdrscore.models.score import JournalCitation
from mdrscore.scoring.scoring_config import DEFAULT_SCORING_CONFIG, Ceilings
from mdrscore.scoring.utils import clamp, contains_phrase, to_decimal

# Journal impact factors (curated, lower-cased keys)
JOURNAL_IMPACT_FACTORS: Dict[str, float] = {
    # Tier S (IF > 50)
    "new england journal of medicine": 176.1,
    "lancet": 168.9,
    "nature": 64.8,
    "nature medicine": 82.9,
    "science": 56.9,
    "cell": 64.5,
    "jama": 120.7,
    "bmj": 105.7,
    # Tier A (IF 20-50)
    "lancet oncology": 51.1,
    "nature genetics": 31.7,
    "journal of clinical oncology": 45.3,
    "annals of internal medicine": 39.2,
    "circulation": 37.8,
    "journal of the american college of cardiology": 24.0,
    "gut": 24.5,
    "european heart journal": 39.3,
    "gastroenterology": 29.4,
    "hepatology": 17.3,
    # Tier B (IF 10-20)
    "blood": 21.0,
    "journal of clinical investigation": 15.9,
    "plos medicine": 15.8,
    "annals of surgery": 10.5,
    "british journal of surgery": 11.2,
    "american journal of respiratory and critical care medicine": 24.7,
    "diabetes care": 16.2,
    "clinical infectious diseases": 11.8,
    "journal of neuroscience": 6.7,
    "brain": 14.5,
    # Tier C (IF 5-10)
    "neurology": 9.9,
    "chest": 9.6,
    "critical care medicine": 9.3,
    "journal of bone and joint surgery": 6.6,
    "radiology": 19.7,
    "annals of oncology": 32.9,
    "cancer research": 11.2,
}

# (minimum impact factor, multiplier), highest band first
IMPACT_FACTOR_BANDS: List[Tuple[float, Decimal]] = [
    (50.0, Decimal("5.0")),
    (20.0, Decimal("3.0")),
    (10.0, Decimal("2.0")),
    (5.0, Decimal("1.5")),
]
_DEFAULT_MULTIPLIER = Decimal("1.0")


def normalize(value: float, ceiling: float) -> Decimal:
    """Scale ``value`` against ``ceiling`` onto [0, 100].

    Args:
        value: Raw metric (negative values clamp to 0).
        ceiling: Value that maps to 100; a non-positive ceiling yields 0.

    Returns:
        Normalized score as Decimal, 4 d.p.
    """
    ceiling_dec = to_decimal(ceiling)
    if ceiling_dec <= 0:
        return Decimal("0")
    value_dec = value if isinstance(value, Decimal) else Decimal(str(value))
    # saturate before quantizing; huge magnitudes overflow 4 d.p. precision
    if value_dec >= ceiling_dec:
        return Decimal("100.0000")
    if value_dec <= 0:
        return Decimal("0.0000")
    return clamp(to_decimal(value_dec / ceiling_dec * Decimal(100)))


def lookup_impact_factor(journal_name: str) -> Optional[float]:
    """Return the curated impact factor for a journal, or None when unknown.

    Matching is case-insensitive, ignores dots, and falls back to whole-word
    substring matching in either direction; the longest matching journal wins
    so "Nature Medicine" is not read as "Nature". Abbreviations such as
    "N Engl J Med" are not resolved.
    """
    normalized = (journal_name or "").lower().replace(".", "").strip()
    if not normalized:
        return None
    if normalized in JOURNAL_IMPACT_FACTORS:
        return JOURNAL_IMPACT_FACTORS[normalized]
    candidates = [
        key for key in JOURNAL_IMPACT_FACTORS
        if contains_phrase(normalized, key) or contains_phrase(key, normalized)
    ]
    if not candidates:
        return None
    return JOURNAL_IMPACT_FACTORS[max(candidates, key=len)]


def get_impact_factor_multiplier(journal_name: str) -> Decimal:
    """Map a journal to its citation multiplier (1.0 for unknown journals)."""
    impact_factor = lookup_impact_factor(journal_name)
    if impact_factor is None:
        return _DEFAULT_MULTIPLIER
    for minimum, multiplier in IMPACT_FACTOR_BANDS:
        if impact_factor >= minimum:
            return multiplier
    return _DEFAULT_MULTIPLIER


def calculate_if_weighted_citations(
    citations: float,
    breakdown: Optional[Iterable[JournalCitation]] = None,
    ceilings: Ceilings = DEFAULT_SCORING_CONFIG.ceilings,
) -> Decimal:
    """Citation sub-score, weighted by journal prestige when a breakdown exists.

    Args:
        citations: Raw citation total (used when no breakdown is supplied).
        breakdown: Per-journal citation counts.
        ceilings: Normalization ceilings.

    Returns:
        Normalized citation score in [0, 100].
    """
    entries = list(breakdown or [])
    if not entries:
        return normalize(citations, ceilings.citations)

    weighted_total = sum(
        (Decimal(entry.citation_count) * get_impact_factor_multiplier(entry.journal)
         for entry in entries),
        Decimal("0"),
    )
    return normalize(weighted_total, ceilings.citations * ceilings.if_weighted_multiplier)
