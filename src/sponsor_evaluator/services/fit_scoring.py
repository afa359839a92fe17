"""Deterministic sponsor-fit scoring.

Starts from a base score, adds bonuses for each alignment signal between a
:class:`BusinessProfile` and a :class:`ClubProfile`, clamps the total and
maps it onto a sponsorship tier.  Reasons are collected in check order.
"""

from __future__ import annotations

import logging

from sponsor_evaluator.domain.enums import SponsorshipType
from sponsor_evaluator.domain.values import BusinessProfile, ClubProfile, FitScore

logger = logging.getLogger(__name__)

BASE_SCORE = 60
MIN_SCORE = 40
MAX_SCORE = 98

REGION_BONUS = 10
AUDIENCE_BONUS = 8
INDUSTRY_BONUS = 6
BRAND_VOICE_BONUS = 6
SPORT_BONUS = 5

ACTIVATION_INDUSTRIES = frozenset({"Sports Equipment", "Technology"})


def suggest_sponsorship_type(score: int) -> SponsorshipType:
    """Map a clamped score onto a sponsorship tier."""
    if score > 85:
        return SponsorshipType.PRESENTING_PARTNER
    if score > 75:
        return SponsorshipType.COMMUNITY_IMPACT_PARTNER
    return SponsorshipType.EVENT_ACTIVATION_PARTNER


def _region_overlaps(profile: BusinessProfile, club: ClubProfile) -> bool:
    # Plain substring test on the part of the club location before the first comma.
    if not club.location:
        return False
    region = club.location.lower().split(",")[0]
    return region in profile.geography.lower()


def score_sponsor_fit(profile: BusinessProfile, club: ClubProfile) -> FitScore:
    """Score how well *profile* fits *club* as a sponsor.

    Pure function; empty fields simply earn no bonus.

    Returns
    -------
    FitScore
        Score clamped to [40, 98], non-empty reasons, and suggested tier.
    """
    score = BASE_SCORE
    reasons: list[str] = []

    if _region_overlaps(profile, club):
        score += REGION_BONUS
        reasons.append("Strong regional overlap with your club's location.")

    if "families" in profile.audience and "youth" in club.age_groups:
        score += AUDIENCE_BONUS
        reasons.append("Family-focused audience aligns with your youth programs.")
    elif "athletes" in profile.audience:
        score += AUDIENCE_BONUS
        reasons.append("Active consumer focus matches your athlete community.")
    else:
        reasons.append("Broad consumer focus can amplify your community reach.")

    if profile.industry in ACTIVATION_INDUSTRIES:
        score += INDUSTRY_BONUS
        reasons.append(f"{profile.industry} partners often activate well with sports clubs.")

    if profile.brand_voice == "community":
        score += BRAND_VOICE_BONUS
        reasons.append("Community-driven messaging complements your club values.")

    sport = club.sport_type.lower()
    if sport and sport in profile.services.lower():
        score += SPORT_BONUS
        reasons.append("Services directly reference your sport vertical.")

    score = min(MAX_SCORE, max(MIN_SCORE, score))
    tier = suggest_sponsorship_type(score)
    logger.debug("Fit score %d (%s) from %d reasons", score, tier.value, len(reasons))

    return FitScore(
        score=score,
        fit_reasons=tuple(reasons),
        suggested_sponsorship_type=tier,
    )
