"""Profile ingestion pipelines for the MDR Score Engine."""

from mdrscore.pipelines.publication_signals import (
    EvidenceStrength,
    Paper,
    classify_evidence,
    detect_leadership_role,
    detect_pioneer_keywords,
)
from mdrscore.pipelines.profile_mapper import build_score_input, build_tier_facts
from mdrscore.pipelines.scoring_pipeline import MDRScoringPipeline, ProfileScore

__all__ = [
    "EvidenceStrength",
    "Paper",
    "classify_evidence",
    "detect_leadership_role",
    "detect_pioneer_keywords",
    "build_score_input",
    "build_tier_facts",
    "MDRScoringPipeline",
    "ProfileScore",
]
