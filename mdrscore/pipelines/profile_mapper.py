"""Map stored profile records onto score inputs.

Profile records are the camelCase JSON documents kept by the content store
(``hIndex``, ``techniquesInvented``, ``dateOfDeath`` ...). snake_case keys are
accepted as well. Missing or null fields degrade to zero / false; values that
cannot be interpreted at all raise ``ValueError``.
"""
import math
import re
from collections import OrderedDict
from datetime import date
from typing import Any, Iterable, List, Optional, Sequence

from mdrscore.models.enums import ProfileStatus
from mdrscore.models.score import Award, JournalCitation, ScoreInput
from mdrscore.pipelines.publication_signals import (
    Paper,
    detect_leadership_role,
    detect_pioneer_keywords,
)
from mdrscore.scoring.tier_gatekeeper import TierFacts

_CERTIFICATION_PATTERN = re.compile(r"board|frcs|\bm\.?d\b", re.IGNORECASE)
_LEADER_ROLE_PATTERN = re.compile(r"chairman|president|director|founder", re.IGNORECASE)
_YEAR_PATTERN = re.compile(r"^\s*(\d{4})")


def _get(record: dict, *keys: str, default: Any = None) -> Any:
    """First non-null value among ``keys``."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_year(value: Any) -> Optional[int]:
    """Extract a year from an int, ISO date string or ``date``."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.year
    if isinstance(value, bool):
        raise ValueError(f"Invalid date value: {value!r}")
    if isinstance(value, int):
        return value
    match = _YEAR_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid date value: {value!r}")
    return int(match.group(1))


def _as_number(value: Any, field: str) -> float:
    """Coerce a numeric field; anything non-numeric raises ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field} value: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid {field} value: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Invalid {field} value: {value!r}")
    return number


def _citation_entries(profile: dict) -> List[dict]:
    raw = _get(profile, "citations", default=[])
    if isinstance(raw, (int, float)):
        return []
    return [c for c in _as_list(raw) if isinstance(c, dict)]


def _citation_total(profile: dict, papers: Sequence[Paper]) -> float:
    raw = _get(profile, "citations", default=[])
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return _as_number(raw, "citations")
    entries = _citation_entries(profile)
    if entries:
        return sum(
            _as_number(_get(c, "citationCount", "citation_count", default=0), "citationCount")
            for c in entries
        )
    return float(sum(p.citation_count for p in papers))


def _journal_breakdown(profile: dict, papers: Sequence[Paper]) -> tuple:
    """Per-journal citation counts, in first-seen journal order."""
    totals: "OrderedDict[str, int]" = OrderedDict()
    entries = _citation_entries(profile)
    if entries:
        if not any(_get(c, "journal") for c in entries):
            return ()
        for entry in entries:
            journal = str(_get(entry, "journal", default=""))
            count = int(_as_number(
                _get(entry, "citationCount", "citation_count", default=0), "citationCount"
            ))
            totals[journal] = totals.get(journal, 0) + count
    else:
        for paper in papers:
            if paper.journal:
                totals[paper.journal] = totals.get(paper.journal, 0) + paper.citation_count
    return tuple(
        JournalCitation(journal=journal, citation_count=count)
        for journal, count in totals.items()
    )


def _awards(profile: dict) -> tuple:
    honors: List[Award] = []
    for award in _as_list(_get(profile, "awards", "honors", default=[])):
        if isinstance(award, dict):
            name = str(_get(award, "name", "title", default="")).strip()
            if not name:
                continue
            honors.append(
                Award(
                    name=name,
                    year=parse_year(_get(award, "year")),
                    issuing_body=_get(award, "issuingBody", "issuing_body"),
                )
            )
        elif isinstance(award, str) and award.strip():
            honors.append(Award(name=award.strip()))
    return tuple(honors)


def _board_certifications(profile: dict) -> int:
    count = 0
    for entry in _as_list(_get(profile, "education", default=[])):
        if isinstance(entry, dict):
            text = " ".join(str(v) for v in entry.values() if v is not None)
        else:
            text = str(entry)
        if _CERTIFICATION_PATTERN.search(text):
            count += 1
    return count


def _is_leader(affiliations: Iterable[Any]) -> bool:
    affiliations = list(affiliations)
    for affiliation in affiliations:
        role = affiliation.get("role") if isinstance(affiliation, dict) else affiliation
        if role and _LEADER_ROLE_PATTERN.search(str(role)):
            return True
    return detect_leadership_role(affiliations).is_leader


def count_publications(profile: dict, papers: Optional[Sequence[Paper]] = None) -> int:
    """Explicit publication count, else synced papers, else citation entries."""
    explicit = _get(profile, "totalPublications", "total_publications", "publicationCount")
    if explicit is not None:
        return int(_as_number(explicit, "totalPublications"))
    if papers:
        return len(papers)
    return len(_citation_entries(profile))


def build_score_input(profile: dict, papers: Optional[Sequence[Paper]] = None) -> ScoreInput:
    """Build a ``ScoreInput`` from a stored profile record.

    Args:
        profile: Profile document (camelCase or snake_case keys).
        papers: Synced publications, used for pioneer detection and as the
            citation source when the record carries no citation list.

    Raises:
        ValueError: If the record is not a mapping, or a field holds a value
            that cannot be interpreted (including negative counters).
    """
    if not isinstance(profile, dict):
        raise ValueError("Profile record must be a JSON object")
    papers = list(papers or [])

    techniques = _as_list(_get(profile, "techniquesInvented", "techniques_invented", default=[]))
    status = str(_get(profile, "status", default=ProfileStatus.LIVING.value)).upper()
    affiliations = _as_list(_get(profile, "affiliations", default=[]))

    is_pioneer = bool(techniques) or bool(_get(profile, "isPioneer", "is_pioneer", default=False))
    if not is_pioneer and papers:
        is_pioneer = detect_pioneer_keywords(papers).is_pioneer

    return ScoreInput(
        citations=_citation_total(profile, papers),
        years_active=_get(profile, "yearsActive", "years_active", default=0),
        h_index=_get(profile, "hIndex", "h_index", default=0),
        verified_surgeries=_get(profile, "verifiedSurgeries", "verified_surgeries", default=0),
        lives_saved=_get(profile, "livesSaved", "liveSaved", "lives_saved", default=0),
        techniques_invented=len(techniques),
        board_certifications=_board_certifications(profile),
        manual_verifications=_get(profile, "manualVerifications", "manual_verifications", default=0),
        has_invention=bool(techniques) or bool(_get(profile, "hasInvention", "has_invention", default=False)),
        license_verified=bool(_get(profile, "licenseVerified", "license_verified", default=False)),
        is_historical=status == ProfileStatus.HISTORICAL.value,
        is_pioneer=is_pioneer,
        is_leader=_is_leader(affiliations) or bool(_get(profile, "isLeader", "is_leader", default=False)),
        has_retraction=bool(_get(profile, "hasRetraction", "has_retraction", default=False)),
        honors=_awards(profile),
        journal_impact_factors=_journal_breakdown(profile, papers),
        year_of_death=parse_year(_get(profile, "dateOfDeath", "date_of_death", "yearOfDeath")),
        technique_still_gold_standard=bool(
            _get(profile, "techniqueStillGoldStandard", "technique_still_gold_standard", default=False)
        ),
    )


def build_tier_facts(score_input: ScoreInput, total_publications: Optional[int] = None) -> TierFacts:
    """Requirement facts for the gatekeeper, taken from a score input."""
    return TierFacts(
        has_invention=score_input.has_invention,
        manual_verifications=score_input.manual_verifications,
        h_index=score_input.h_index,
        lives_saved=score_input.lives_saved,
        years_active=score_input.years_active,
        total_publications=total_publications or 0,
        license_verified=score_input.license_verified,
    )
