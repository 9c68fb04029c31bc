"""Pytest fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient

from mdrscore.models import Award, ScoreInput
from mdrscore.scoring.mdr_score_engine import MDRScoreEngine

REFERENCE_YEAR = 2026


@pytest.fixture
def client():
    """Create test client for the application."""
    from mdrscore.main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def engine():
    """Engine pinned to a fixed reference year so decay is reproducible."""
    return MDRScoreEngine(reference_year=REFERENCE_YEAR)


@pytest.fixture
def nobel_input():
    """h-index 80, 300 citations, 30 years and a Nobel Prize; nothing else."""
    return ScoreInput(
        h_index=80,
        citations=300,
        years_active=30,
        honors=(Award(name="Nobel Prize"),),
        license_verified=True,
    )


@pytest.fixture
def titan_input():
    """Same headline metrics as ``nobel_input`` on a fully populated profile."""
    return ScoreInput(
        h_index=80,
        citations=300,
        years_active=30,
        verified_surgeries=50000,
        lives_saved=50000,
        techniques_invented=10,
        board_certifications=10,
        is_pioneer=True,
        is_leader=True,
        has_invention=True,
        manual_verifications=3,
        honors=(Award(name="Nobel Prize"),),
        license_verified=True,
    )


@pytest.fixture
def sample_profile():
    """Stored profile record in content-store (camelCase) shape."""
    return {
        "slug": "jane-doe",
        "fullName": "Dr. Jane Doe",
        "specialty": "Cardiothoracic Surgery",
        "status": "LIVING",
        "hIndex": 80,
        "yearsActive": 30,
        "verifiedSurgeries": 50000,
        "livesSaved": 50000,
        "licenseVerified": True,
        "manualVerifications": 3,
        "totalPublications": 240,
        "techniquesInvented": ["Doe Valve Repair", "Minimal Access Bypass"],
        "education": ["MD, Harvard Medical School", "FRCS (England)", "BSc Biology"],
        "affiliations": [
            {"institution": "Mass General", "role": "Chairman of Surgery"},
        ],
        "awards": ["Lasker Award", {"name": "Padma Shri", "year": 2015}],
        "citations": [
            {"journal": "The Lancet", "citationCount": 120},
            {"journal": "Annals of Surgery", "citationCount": 60},
            {"journal": "The Lancet", "citationCount": 20},
        ],
    }
