from dataclasses import dataclass
from typing import List, Optional, Tuple

from mdrscore.models.enums import HonorTier


@dataclass(frozen=True)
class GlobalHonor:
    """A known award with its prestige tier and dedup category."""

    name: str
    tier: HonorTier
    points: int
    category: str
    country: Optional[str] = None


@dataclass(frozen=True)
class HonorKeyword:
    """Tier-indicative substrings used when no table entry matches."""

    keywords: Tuple[str, ...]
    tier: HonorTier


def _landmark(name: str, category: str) -> GlobalHonor:
    return GlobalHonor(name, HonorTier.GLOBAL_LANDMARK, 100, category)


def _national(name: str, category: str, country: str) -> GlobalHonor:
    return GlobalHonor(name, HonorTier.NATIONAL_HONOR, 75, category, country)


def _professional(name: str, category: str, country: Optional[str] = None) -> GlobalHonor:
    return GlobalHonor(name, HonorTier.PROFESSIONAL_EXCELLENCE, 50, category, country)


# ---------------------------------------------------------------------------
# GLOBAL_HONORS
# Order matters: exact and substring passes both walk the list top-down and
# the first hit wins, so specific names precede their generic forms.
# ---------------------------------------------------------------------------

GLOBAL_HONORS: List[GlobalHonor] = [
    # ------------------------------------------------------------------
    # Tier 1 - Global Landmark (+100)
    # ------------------------------------------------------------------
    _landmark("Nobel Prize in Physiology or Medicine", "Nobel"),
    _landmark("Nobel Prize", "Nobel"),
    _landmark("Lasker Award", "Lasker"),
    _landmark("Lasker Award for Basic Medical Research", "Lasker"),
    _landmark("Lasker Award for Clinical Medical Research", "Lasker"),
    _landmark("Lasker Award for Public Service", "Lasker"),
    _landmark("Lasker-DeBakey Clinical Medical Research Award", "Lasker"),
    _landmark("Lasker-Koshland Award", "Lasker"),
    _landmark("Wolf Prize in Medicine", "Wolf"),
    _landmark("Wolf Prize", "Wolf"),
    _landmark("Canada Gairdner International Award", "Gairdner"),
    _landmark("Gairdner International Award", "Gairdner"),
    _landmark("Gairdner Foundation International Award", "Gairdner"),
    _landmark("Breakthrough Prize in Life Sciences", "Breakthrough"),
    _landmark("Tang Prize in Biopharmaceutical Science", "Tang"),
    _landmark("Japan Prize", "Japan"),
    _landmark("Harvey Prize", "Harvey"),
    _landmark("Robert Koch Gold Medal", "Koch"),
    _landmark("Louisa Gross Horwitz Prize", "Horwitz"),
    # ------------------------------------------------------------------
    # Tier 2 - National Honor (+75)
    # ------------------------------------------------------------------
    _national("Padma Vibhushan", "Padma", "India"),
    _national("Padma Bhushan", "Padma", "India"),
    _national("Padma Shri", "Padma", "India"),
    _national("Bharat Ratna", "Padma", "India"),
    _national("Presidential Medal of Freedom", "Presidential", "USA"),
    _national("National Medal of Science", "Presidential", "USA"),
    _national("National Medal of Technology and Innovation", "Presidential", "USA"),
    _national("Congressional Gold Medal", "Congressional", "USA"),
    _national("Knighthood", "Royal", "UK"),
    _national("Knight Bachelor", "Royal", "UK"),
    _national("Order of the British Empire", "Royal", "UK"),
    _national("OBE", "Royal", "UK"),
    _national("CBE", "Royal", "UK"),
    _national("KBE", "Royal", "UK"),
    _national("Order of Merit", "Royal", "UK"),
    _national("Fellow of the Royal Society", "FRS", "UK"),
    _national("Légion d'honneur", "Legion", "France"),
    _national("Legion of Honour", "Legion", "France"),
    _national("Légion of Honor", "Legion", "France"),
    _national("Order of Merit of the Federal Republic of Germany", "Merit", "Germany"),
    _national("Pour le Mérite", "Merit", "Germany"),
    _national("Order of Culture", "Imperial", "Japan"),
    _national("Order of the Rising Sun", "Imperial", "Japan"),
    # ------------------------------------------------------------------
    # Tier 3 - Professional Excellence (+50)
    # ------------------------------------------------------------------
    _professional("Dr. B.C. Roy Award", "Medical", "India"),
    _professional("B.C. Roy Award", "Medical", "India"),
    _professional("Dhanvantari Award", "Medical", "India"),
    _professional("AMA Medal of Valor", "AMA", "USA"),
    _professional("AMA Distinguished Service Award", "AMA", "USA"),
    _professional("Pulitzer Prize", "Pulitzer", "USA"),
    _professional("MacArthur Fellowship", "MacArthur", "USA"),
    _professional("Dan David Prize", "DanDavid"),
    _professional("Hunterian Professorship", "RCS", "UK"),
    _professional("Lister Medal", "Lister", "UK"),
    _professional("Cameron Prize", "Edinburgh", "UK"),
    _professional("Prix Galien", "Galien", "France"),
    _professional("Copley Medal", "RoyalSociety"),
    _professional("King Faisal International Prize", "International"),
    _professional("Prince Mahidol Award", "International"),
]


# Keyword fallback, evaluated top-down after exact and substring matching
HONOR_KEYWORDS: List[HonorKeyword] = [
    HonorKeyword(("nobel",), HonorTier.GLOBAL_LANDMARK),
    HonorKeyword(("lasker",), HonorTier.GLOBAL_LANDMARK),
    HonorKeyword(("wolf prize",), HonorTier.GLOBAL_LANDMARK),
    HonorKeyword(("gairdner",), HonorTier.GLOBAL_LANDMARK),
    HonorKeyword(("padma vibhushan", "padma bhushan", "padma shri"), HonorTier.NATIONAL_HONOR),
    HonorKeyword(("presidential medal",), HonorTier.NATIONAL_HONOR),
    HonorKeyword(("knighthood", "knight bachelor"), HonorTier.NATIONAL_HONOR),
    HonorKeyword(
        ("legion of honour", "légion d'honneur", "legion d'honneur"),
        HonorTier.NATIONAL_HONOR,
    ),
    HonorKeyword(("order of merit",), HonorTier.NATIONAL_HONOR),
]
