"""Rule-based business profile extraction.

Turns a :class:`BusinessInfoResult` into a :class:`BusinessProfile` by
keyword matching.  The classification tables are ordered lists of
``(label, keywords)`` pairs: the first label with any keyword present in the
text wins, so table order is the tie-break and must stay stable.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from sponsor_evaluator.domain.values import BusinessInfoResult, BusinessProfile

logger = logging.getLogger(__name__)

KeywordTable = Sequence[tuple[str, Sequence[str]]]

INDUSTRY_KEYWORDS: KeywordTable = (
    ("Technology", ("software", "technology", "platform", "saas", "cloud", "tech")),
    ("Food & Beverage", ("restaurant", "cafe", "beverage", "food", "drink")),
    ("Healthcare", ("wellness", "health", "medical", "pharma", "clinic")),
    ("Finance", ("bank", "financial", "fintech", "investment", "insurance")),
    ("Sports Equipment", ("sports", "gear", "apparel", "fitness", "equipment")),
    ("Retail", ("retail", "store", "shop", "ecommerce")),
    ("Education", ("education", "training", "school", "learning")),
    ("Automotive", ("automotive", "mobility", "transport", "vehicle")),
)

BRAND_VOICE_KEYWORDS: KeywordTable = (
    ("energetic", ("energy", "dynamic", "fast", "innovation", "future")),
    ("community", ("community", "local", "neighbors", "grassroots", "together")),
    ("premium", ("premium", "luxury", "exclusive", "elite")),
    ("playful", ("fun", "playful", "delight", "creative")),
)

AUDIENCE_KEYWORDS: KeywordTable = (
    ("families", ("family", "parents", "kids")),
    ("professionals", ("professionals", "enterprise", "business")),
    ("athletes", ("athlete", "sports", "fitness")),
    ("youth", ("youth", "student", "teen")),
)

DEFAULT_INDUSTRY = "General"
DEFAULT_BRAND_VOICE = "professional"
DEFAULT_AUDIENCE = "broad consumers"
DEFAULT_GEOGRAPHY = "Multiple regions"

_BASED_IN_RE = re.compile(r"based in ([^.]+)", re.IGNORECASE)
_CITY_STATE_RE = re.compile(r"[A-Z][a-z]+,\s?[A-Z]{2}")


def match_keyword_group(table: KeywordTable, text: str, fallback: str) -> str:
    """Return the first label whose keywords appear in *text*, else *fallback*."""
    lowered = text.lower()
    for label, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return label
    return fallback


def _extract_geography(info: BusinessInfoResult) -> str:
    for item in info.raw_items:
        if "based in" in item.snippet.lower():
            match = _BASED_IN_RE.search(item.snippet)
            if match and match.group(1).strip():
                return match.group(1).strip()
            break

    if info.raw_items:
        match = _CITY_STATE_RE.search(info.raw_items[0].snippet)
        if match:
            return match.group(0)

    return DEFAULT_GEOGRAPHY


def extract_business_profile(business_name: str, info: BusinessInfoResult) -> BusinessProfile:
    """Classify a business from its gathered evidence.

    Pure and total: any input yields a profile, with defaults standing in
    for whatever the evidence does not reveal.

    Parameters
    ----------
    business_name:
        Display name used for fallback services and notes.
    info:
        Evidence from either acquisition strategy.

    Returns
    -------
    BusinessProfile
    """
    corpus = f"{info.description} {info.snippet} {info.title}".lower()

    industry = match_keyword_group(INDUSTRY_KEYWORDS, corpus, DEFAULT_INDUSTRY)
    brand_voice = match_keyword_group(BRAND_VOICE_KEYWORDS, corpus, DEFAULT_BRAND_VOICE)
    audience = match_keyword_group(AUDIENCE_KEYWORDS, corpus, DEFAULT_AUDIENCE)

    services = ", ".join(item.title for item in info.raw_items[:3] if item.title)

    if info.raw_items:
        relevant_notes = info.raw_items[0].snippet
    else:
        relevant_notes = f"Limited public info about {business_name}"

    profile = BusinessProfile(
        industry=industry,
        services=services or f"{business_name} solutions",
        brand_voice=brand_voice,
        audience=audience,
        geography=_extract_geography(info),
        relevant_notes=relevant_notes,
    )
    logger.debug(
        "Profile for %r: industry=%s voice=%s audience=%s geography=%s",
        business_name,
        profile.industry,
        profile.brand_voice,
        profile.audience,
        profile.geography,
    )
    return profile
