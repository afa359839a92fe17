"""Value objects for the Smart Sponsor Evaluator.

All types here are frozen dataclasses: immutable, compared by value.  They
represent the evidence gathered about a business, the classifications derived
from it and the final evaluation artifacts.

``to_dict()`` emits camelCase keys, which is the JSON shape the web client
consumes.  Input types also provide ``from_dict()`` accepting that shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .enums import SponsorshipType

# ---------------------------------------------------------------------------
# ClubProfile
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClubProfile:
    """The sports club a sponsor is being evaluated for.

    Immutable for the duration of one evaluation.
    """

    club_name: str = ""
    sport_type: str = ""
    location: str = ""
    total_members: int = 0
    age_groups: str = ""
    gender_split: str = ""
    competition_level: str = ""
    additional_info: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "clubName": self.club_name,
            "sportType": self.sport_type,
            "location": self.location,
            "totalMembers": self.total_members,
            "ageGroups": self.age_groups,
            "genderSplit": self.gender_split,
            "competitionLevel": self.competition_level,
            "additionalInfo": self.additional_info,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClubProfile:
        """Build a profile from the camelCase wire shape.

        Missing keys fall back to empty values; ``totalMembers`` is coerced
        to ``int`` (non-numeric values become ``0``).
        """
        try:
            members = int(data.get("totalMembers") or 0)
        except (TypeError, ValueError):
            members = 0
        return cls(
            club_name=str(data.get("clubName") or ""),
            sport_type=str(data.get("sportType") or ""),
            location=str(data.get("location") or ""),
            total_members=members,
            age_groups=str(data.get("ageGroups") or ""),
            gender_split=str(data.get("genderSplit") or ""),
            competition_level=str(data.get("competitionLevel") or ""),
            additional_info=str(data.get("additionalInfo") or ""),
        )


# ---------------------------------------------------------------------------
# BusinessInfoResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawItem:
    """A single piece of evidence: a search hit or a page excerpt."""

    title: str = ""
    link: str = ""
    snippet: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "link": self.link, "snippet": self.snippet}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawItem:
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            snippet=str(data.get("snippet") or ""),
        )


@dataclass(frozen=True)
class BusinessInfoResult:
    """Normalized output of either business-info acquisition strategy.

    Produced once per evaluation and treated as immutable evidence by the
    downstream profile and scoring steps.
    """

    query: str
    name: str
    website: str = ""
    title: str = ""
    snippet: str = ""
    description: str = ""
    categories: tuple[str, ...] = ()
    raw_items: tuple[RawItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "name": self.name,
            "website": self.website,
            "title": self.title,
            "snippet": self.snippet,
            "description": self.description,
            "categories": list(self.categories),
            "rawItems": [item.to_dict() for item in self.raw_items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BusinessInfoResult:
        return cls(
            query=str(data.get("query") or ""),
            name=str(data.get("name") or ""),
            website=str(data.get("website") or ""),
            title=str(data.get("title") or ""),
            snippet=str(data.get("snippet") or ""),
            description=str(data.get("description") or ""),
            categories=tuple(str(c) for c in data.get("categories") or ()),
            raw_items=tuple(RawItem.from_dict(i) for i in data.get("rawItems") or ()),
        )


# ---------------------------------------------------------------------------
# BusinessProfile / FitScore
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BusinessProfile:
    """Deterministic classification of a business, derived from its evidence."""

    industry: str
    services: str
    brand_voice: str
    audience: str
    geography: str
    relevant_notes: str

    def to_dict(self) -> dict[str, str]:
        return {
            "industry": self.industry,
            "services": self.services,
            "brandVoice": self.brand_voice,
            "audience": self.audience,
            "geography": self.geography,
            "relevantNotes": self.relevant_notes,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BusinessProfile:
        return cls(
            industry=str(data.get("industry") or ""),
            services=str(data.get("services") or ""),
            brand_voice=str(data.get("brandVoice") or ""),
            audience=str(data.get("audience") or ""),
            geography=str(data.get("geography") or ""),
            relevant_notes=str(data.get("relevantNotes") or ""),
        )


@dataclass(frozen=True)
class FitScore:
    """How well a business fits a club as a sponsor.

    ``score`` is an integer in [40, 98]; ``fit_reasons`` is never empty when
    produced by the scorer.
    """

    score: int
    fit_reasons: tuple[str, ...]
    suggested_sponsorship_type: SponsorshipType

    def __post_init__(self) -> None:
        if not 40 <= self.score <= 98:
            raise ValueError(f"score must be in [40, 98], got {self.score}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "fitReasons": list(self.fit_reasons),
            "suggestedSponsorshipType": self.suggested_sponsorship_type.value,
        }


# ---------------------------------------------------------------------------
# Final evaluation artifacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Sponsor:
    """Sponsor-shaped projection of an evaluated business, ready for tracking."""

    name: str
    industry: str
    description: str
    target_audience: str
    sponsorship_budget: str
    website: str = ""
    email: str = ""
    match_reason: str = ""
    campaign_ideas: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        contact: dict[str, str] = {}
        if self.website:
            contact["website"] = self.website
        if self.email:
            contact["email"] = self.email
        return {
            "name": self.name,
            "industry": self.industry,
            "description": self.description,
            "targetAudience": self.target_audience,
            "sponsorshipBudget": self.sponsorship_budget,
            "contactInfo": contact,
            "matchReason": self.match_reason,
            "campaignIdeas": list(self.campaign_ideas),
        }


@dataclass(frozen=True)
class TrackingPayload:
    """What the client stores when a user decides to track the sponsor."""

    sponsor: Sponsor
    score: int
    notes: str
    generated_at: str
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "sponsor": self.sponsor.to_dict(),
            "score": self.score,
            "notes": self.notes,
            "generatedAt": self.generated_at,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class AgentEvaluationResult:
    """Outcome of a successful controller run.

    ``logs`` holds the log entries as they stood at termination; ``actions``
    is the ordered path of tools the controller executed.
    """

    logs: tuple[Any, ...]
    business_info: BusinessInfoResult
    profile: BusinessProfile
    fit: FitScore
    final_summary: str
    tracking_payload: TrackingPayload
    actions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "logs": [entry.to_dict() for entry in self.logs],
            "businessInfo": self.business_info.to_dict(),
            "profile": self.profile.to_dict(),
            "fit": self.fit.to_dict(),
            "finalSummary": self.final_summary,
            "trackingPayload": self.tracking_payload.to_dict(),
            "actions": list(self.actions),
        }


@dataclass(frozen=True)
class EvaluationFailure:
    """Outcome of a failed run: a user-facing message plus partial progress."""

    error: str
    detail: str = ""
    error_type: str = ""
    logs: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "detail": self.detail,
            "errorType": self.error_type,
            "logs": [entry.to_dict() for entry in self.logs],
        }
