"""Domain enumerations for the Smart Sponsor Evaluator.

These enums capture the fixed vocabularies used across the domain layer:
controller actions, workflow log statuses, sponsorship tiers and the
languages supported for log and summary messages.
"""

from enum import Enum


class AgentAction(str, Enum):
    """Actions the LLM controller may choose between."""

    EXTRACT_FROM_URL = "extractFromUrl"
    SEARCH_BUSINESS_INFO = "searchBusinessInfo"
    EXTRACT_BUSINESS_PROFILE = "extractBusinessProfile"
    SCORE_SPONSOR_FIT = "scoreSponsorFit"
    DONE = "done"


class LogStatus(str, Enum):
    """Status of a workflow log entry."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class SponsorshipType(str, Enum):
    """Suggested sponsorship tier, derived from the fit score."""

    PRESENTING_PARTNER = "Presenting Partner"
    COMMUNITY_IMPACT_PARTNER = "Community Impact Partner"
    EVENT_ACTIVATION_PARTNER = "Event Activation Partner"


class Language(str, Enum):
    """Languages available for log and summary messages."""

    EN = "en"
    FR = "fr"
    DE = "de"
