"""Assemble the final evaluation artifacts from a completed workflow."""

from __future__ import annotations

import re

from sponsor_evaluator.domain.entities import utc_timestamp
from sponsor_evaluator.domain.values import (
    BusinessInfoResult,
    BusinessProfile,
    FitScore,
    Sponsor,
    TrackingPayload,
)
from sponsor_evaluator.infrastructure.i18n import Messages

# Illustrative values shown until the sponsor is contacted.
DEFAULT_BUDGET = "$25k - $75k"
DEFAULT_MATCH_REASON = "Values and audience alignment"
DEFAULT_CAMPAIGN_IDEAS = (
    "Community experience days",
    "Content storytelling series",
    "Co-branded training clinics",
)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lower-case *name* and drop everything but ASCII letters and digits."""
    return _NON_ALNUM_RE.sub("", name.lower()) or "partner"


def display_name(info: BusinessInfoResult | None, fallback: str) -> str:
    """The business name as gathered, or the user's input when none was found."""
    if info is not None and info.name.strip():
        return info.name.strip()
    return fallback.strip()


def build_sponsor(
    name: str,
    info: BusinessInfoResult,
    profile: BusinessProfile,
    fit: FitScore,
) -> Sponsor:
    return Sponsor(
        name=name,
        industry=profile.industry,
        description=info.description or profile.services,
        target_audience=profile.audience,
        sponsorship_budget=DEFAULT_BUDGET,
        website=info.website,
        email=f"partnerships@{slugify(name)}.com",
        match_reason=fit.fit_reasons[0] if fit.fit_reasons else DEFAULT_MATCH_REASON,
        campaign_ideas=DEFAULT_CAMPAIGN_IDEAS,
    )


def render_summary(messages: Messages, business: str, fit: FitScore) -> str:
    return messages.format(
        "final_summary",
        business=business,
        score=fit.score,
        type=fit.suggested_sponsorship_type.value,
    )


def build_tracking_payload(
    sponsor: Sponsor,
    profile: BusinessProfile,
    fit: FitScore,
) -> TrackingPayload:
    tags = tuple(t for t in (profile.industry, fit.suggested_sponsorship_type.value) if t)
    return TrackingPayload(
        sponsor=sponsor,
        score=fit.score,
        notes=" ".join(fit.fit_reasons),
        generated_at=utc_timestamp(),
        tags=tags,
    )
