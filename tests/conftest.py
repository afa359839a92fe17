"""Shared fixtures for the Smart Sponsor Evaluator test suite."""

from __future__ import annotations

import pytest

from sponsor_evaluator.domain.enums import SponsorshipType
from sponsor_evaluator.domain.values import (
    BusinessInfoResult,
    BusinessProfile,
    ClubProfile,
    FitScore,
    RawItem,
)
from tests.helpers.http import ACME_SNIPPET

# ---------------------------------------------------------------------------
# Value-object fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def club() -> ClubProfile:
    """Youth soccer club in Denver."""
    return ClubProfile(
        club_name="Denver Youth Soccer",
        sport_type="Soccer",
        location="Denver, CO",
        total_members=320,
        age_groups="youth, adults",
        gender_split="55/45",
        competition_level="regional",
        additional_info="Volunteer run",
    )


@pytest.fixture
def acme_info() -> BusinessInfoResult:
    return BusinessInfoResult(
        query="Acme Outdoor official site Denver, CO",
        name="Acme Outdoor",
        website="https://acme-outdoor.com/",
        title="Acme Outdoor",
        snippet=ACME_SNIPPET,
        description=ACME_SNIPPET,
        categories=("Gear",),
        raw_items=(
            RawItem(
                title="Acme Outdoor - Soccer Gear for Families",
                link="https://acme-outdoor.com/",
                snippet=ACME_SNIPPET,
            ),
        ),
    )


@pytest.fixture
def aligned_profile() -> BusinessProfile:
    """A profile that earns every bonus against the ``club`` fixture."""
    return BusinessProfile(
        industry="Sports Equipment",
        services="Soccer cleats, Training balls",
        brand_voice="community",
        audience="families",
        geography="Denver, Colorado",
        relevant_notes="Family owned store",
    )


@pytest.fixture
def sample_fit() -> FitScore:
    return FitScore(
        score=78,
        fit_reasons=(
            "Strong regional overlap with your club's location.",
            "Broad consumer focus can amplify your community reach.",
        ),
        suggested_sponsorship_type=SponsorshipType.COMMUNITY_IMPACT_PARTNER,
    )
