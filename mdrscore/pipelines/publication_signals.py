"""Publication and affiliation signals: evidence strength, pioneer and leadership detection."""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from mdrscore.scoring.utils import contains_phrase

logger = logging.getLogger(__name__)


# Phrases in a title, abstract or MeSH term that indicate pioneering work
PIONEER_KEYWORDS = [
    "first human", "first-in-human", "first in human",
    "pioneer", "pioneered", "pioneering",
    "invention", "invented",
    "novel technique", "novel method", "novel approach",
    "breakthrough", "landmark",
    "first successful", "first reported",
    "gold standard",
]

# Affiliation roles that indicate institutional leadership
LEADERSHIP_KEYWORDS = [
    "head of department", "department head", "department chief",
    "chief of", "chair of", "chairman",
    "dean", "dean of medicine",
    "director", "medical director",
    "president", "vice president",
    "surgeon general",
]


class EvidenceStrength(IntEnum):
    """Strength of evidence by study design, strongest first."""
    META_ANALYSIS = 5
    RANDOMIZED_TRIAL = 4
    COHORT_STUDY = 3
    CASE_SERIES = 2
    CASE_REPORT = 1


# (publication-type phrases, strength, label), strongest design first
_EVIDENCE_RULES: List[Tuple[Tuple[str, ...], EvidenceStrength, str]] = [
    (("meta-analysis", "systematic review"), EvidenceStrength.META_ANALYSIS, "Meta-Analysis"),
    (("randomized controlled trial", "clinical trial"), EvidenceStrength.RANDOMIZED_TRIAL, "RCT"),
    (("cohort", "observational study", "comparative study"), EvidenceStrength.COHORT_STUDY, "Cohort Study"),
    (("case reports", "case series"), EvidenceStrength.CASE_SERIES, "Case Series"),
    (("editorial", "letter", "comment"), EvidenceStrength.CASE_REPORT, "Editorial"),
]
_DEFAULT_EVIDENCE = (EvidenceStrength.COHORT_STUDY, "Journal Article")


@dataclass(frozen=True)
class Paper:
    """Publication metadata as delivered by the literature sync."""
    pmid: str
    title: str
    abstract: Optional[str] = None
    mesh_terms: Tuple[str, ...] = ()
    journal: str = ""
    citation_count: int = 0
    publication_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PioneerDetection:
    is_pioneer: bool
    matched_keywords: List[str] = field(default_factory=list)
    matched_papers: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LeadershipDetection:
    is_leader: bool
    matched_roles: List[str] = field(default_factory=list)


def classify_evidence(publication_types: Sequence[str]) -> Tuple[EvidenceStrength, str]:
    """Map publication types to (strength, label).

    The strongest design present among the types wins; when nothing matches
    the paper is treated as a cohort-level journal article.
    """
    types = [t.lower() for t in publication_types]
    for phrases, strength, label in _EVIDENCE_RULES:
        if any(p in t for t in types for p in phrases):
            return strength, label
    return _DEFAULT_EVIDENCE


def _paper_text(paper: Paper) -> str:
    parts = [paper.title or "", paper.abstract or "", " ".join(paper.mesh_terms)]
    return " ".join(parts).lower()


def detect_pioneer_keywords(papers: Iterable[Paper]) -> PioneerDetection:
    """Scan titles, abstracts and MeSH terms for pioneer phrases."""
    matched_keywords: List[str] = []
    matched_papers: List[str] = []

    for paper in papers:
        text = _paper_text(paper)
        hits = [kw for kw in PIONEER_KEYWORDS if contains_phrase(text, kw)]
        if not hits:
            continue
        matched_papers.append(paper.pmid)
        for kw in hits:
            if kw not in matched_keywords:
                matched_keywords.append(kw)

    if matched_papers:
        logger.info(
            "pioneer_keywords_detected papers=%s keywords=%s",
            len(matched_papers), ",".join(matched_keywords),
        )
    return PioneerDetection(
        is_pioneer=bool(matched_papers),
        matched_keywords=matched_keywords,
        matched_papers=matched_papers,
    )


def detect_leadership_role(affiliations: Iterable[Union[str, dict]]) -> LeadershipDetection:
    """Detect leadership roles in affiliation strings or ``{"role": ...}`` dicts.

    Matched roles are de-duplicated and kept in first-seen order.
    """
    matched: List[str] = []
    for affiliation in affiliations:
        if isinstance(affiliation, dict):
            text = " ".join(
                str(affiliation.get(key) or "") for key in ("role", "title", "position")
            )
        else:
            text = str(affiliation or "")
        lower = text.lower()
        for kw in LEADERSHIP_KEYWORDS:
            if contains_phrase(lower, kw) and kw not in matched:
                matched.append(kw)

    if matched:
        logger.debug("leadership_roles_detected roles=%s", ",".join(matched))
    return LeadershipDetection(is_leader=bool(matched), matched_roles=matched)
