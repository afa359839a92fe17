"""Tests for deterministic sponsor-fit scoring."""

from __future__ import annotations

import dataclasses

import pytest

from sponsor_evaluator.domain.enums import SponsorshipType
from sponsor_evaluator.domain.values import BusinessProfile, ClubProfile
from sponsor_evaluator.services.fit_scoring import score_sponsor_fit, suggest_sponsorship_type

BROAD_REASON = "Broad consumer focus can amplify your community reach."


def _plain_profile(**overrides: str) -> BusinessProfile:
    values = {
        "industry": "General",
        "services": "Acme solutions",
        "brand_voice": "professional",
        "audience": "broad consumers",
        "geography": "Multiple regions",
        "relevant_notes": "",
    }
    values.update(overrides)
    return BusinessProfile(**values)


class TestScoreSponsorFit:

    def test_every_bonus(self, aligned_profile: BusinessProfile, club: ClubProfile) -> None:
        fit = score_sponsor_fit(aligned_profile, club)

        assert fit.score == 95
        assert fit.suggested_sponsorship_type is SponsorshipType.PRESENTING_PARTNER
        assert fit.fit_reasons == (
            "Strong regional overlap with your club's location.",
            "Family-focused audience aligns with your youth programs.",
            "Sports Equipment partners often activate well with sports clubs.",
            "Community-driven messaging complements your club values.",
            "Services directly reference your sport vertical.",
        )

    def test_baseline(self) -> None:
        fit = score_sponsor_fit(_plain_profile(), ClubProfile())
        assert fit.score == 60
        assert fit.fit_reasons == (BROAD_REASON,)
        assert fit.suggested_sponsorship_type is SponsorshipType.EVENT_ACTIVATION_PARTNER

    def test_athlete_audience(self, club: ClubProfile) -> None:
        fit = score_sponsor_fit(_plain_profile(audience="athletes"), club)
        assert fit.score == 68
        assert fit.fit_reasons == ("Active consumer focus matches your athlete community.",)

    def test_families_without_youth_programs_get_no_bonus(self, club: ClubProfile) -> None:
        adults_only = dataclasses.replace(club, age_groups="adults")
        fit = score_sponsor_fit(_plain_profile(audience="families"), adults_only)
        assert fit.score == 60
        assert BROAD_REASON in fit.fit_reasons

    def test_region_uses_first_location_segment(self, club: ClubProfile) -> None:
        fit = score_sponsor_fit(_plain_profile(geography="Greater Denver area"), club)
        assert fit.score == 70

    def test_empty_location_never_overlaps(self) -> None:
        fit = score_sponsor_fit(_plain_profile(geography="Denver"), ClubProfile(location=""))
        assert fit.score == 60

    def test_empty_sport_type_earns_nothing(self) -> None:
        fit = score_sponsor_fit(_plain_profile(services="Anything"), ClubProfile(sport_type=""))
        assert "Services directly reference your sport vertical." not in fit.fit_reasons

    def test_technology_activation(self) -> None:
        fit = score_sponsor_fit(_plain_profile(industry="Technology"), ClubProfile())
        assert fit.score == 66
        assert "Technology partners often activate well with sports clubs." in fit.fit_reasons

    def test_reasons_never_empty(self, aligned_profile: BusinessProfile) -> None:
        fit = score_sponsor_fit(aligned_profile, ClubProfile())
        assert fit.fit_reasons
        assert 40 <= fit.score <= 98


class TestSuggestSponsorshipType:

    @pytest.mark.parametrize(
        ("score", "tier"),
        [
            (98, SponsorshipType.PRESENTING_PARTNER),
            (86, SponsorshipType.PRESENTING_PARTNER),
            (85, SponsorshipType.COMMUNITY_IMPACT_PARTNER),
            (76, SponsorshipType.COMMUNITY_IMPACT_PARTNER),
            (75, SponsorshipType.EVENT_ACTIVATION_PARTNER),
            (40, SponsorshipType.EVENT_ACTIVATION_PARTNER),
        ],
    )
    def test_thresholds(self, score: int, tier: SponsorshipType) -> None:
        assert suggest_sponsorship_type(score) is tier
