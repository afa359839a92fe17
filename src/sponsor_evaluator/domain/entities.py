"""Domain entities for the Smart Sponsor Evaluator.

Entities have *identity* and a mutable lifecycle.  ``WorkflowLogEntry`` is
addressed by its ``id`` and may only move out of ``pending`` once.
``WorkflowState`` is the per-run scratchpad owned by a single controller run.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .enums import AgentAction, LogStatus
from .exceptions import PreconditionError
from .values import BusinessInfoResult, BusinessProfile, FitScore


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string (millisecond precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_entry_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


# ---------------------------------------------------------------------------
# WorkflowLogEntry
# ---------------------------------------------------------------------------

@dataclass
class WorkflowLogEntry:
    """One line of the step-by-step log shown to the user.

    Only ``status`` changes after the entry is appended, and only from
    ``PENDING`` to ``SUCCESS`` or ``ERROR``.
    """

    message: str
    status: LogStatus = LogStatus.PENDING
    id: str = field(default_factory=_new_entry_id)
    timestamp: str = field(default_factory=utc_timestamp)

    @property
    def is_pending(self) -> bool:
        return self.status is LogStatus.PENDING

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "message": self.message,
            "status": self.status.value,
            "timestamp": self.timestamp,
        }


# ---------------------------------------------------------------------------
# WorkflowState
# ---------------------------------------------------------------------------

@dataclass
class WorkflowState:
    """Everything a controller run has gathered so far.

    Result fields are write-once: ``record_*`` raises ``PreconditionError``
    if the field is already populated.  ``actions`` keeps the execution order
    while ``actions_taken`` answers membership questions.
    """

    business_name: str
    url_supplied: bool = False
    known_website: str | None = None
    business_info: BusinessInfoResult | None = None
    profile: BusinessProfile | None = None
    fit: FitScore | None = None
    actions_taken: set[AgentAction] = field(default_factory=set)
    actions: list[AgentAction] = field(default_factory=list)
    extraction_used: bool = False
    search_used: bool = False

    # -- eligibility ----------------------------------------------------------

    @property
    def search_eligible(self) -> bool:
        return not self.search_used and not self.url_supplied and self.business_info is None

    @property
    def extraction_eligible(self) -> bool:
        return (
            bool(self.known_website)
            and not self.extraction_used
            and self.business_info is None
        )

    @property
    def is_complete(self) -> bool:
        return (
            self.business_info is not None
            and self.profile is not None
            and self.fit is not None
        )

    def missing_results(self) -> tuple[str, ...]:
        """Names of the result fields still unset, in workflow order."""
        missing = []
        if self.business_info is None:
            missing.append("businessInfo")
        if self.profile is None:
            missing.append("profile")
        if self.fit is None:
            missing.append("fit")
        return tuple(missing)

    # -- write-once recorders -------------------------------------------------

    def record_action(self, action: AgentAction) -> None:
        self.actions_taken.add(action)
        self.actions.append(action)

    def record_business_info(self, info: BusinessInfoResult) -> None:
        if self.business_info is not None:
            raise PreconditionError(
                "Business information has already been gathered for this run.",
                action="businessInfo",
            )
        self.business_info = info

    def record_profile(self, profile: BusinessProfile) -> None:
        if self.profile is not None:
            raise PreconditionError(
                "The business profile has already been extracted for this run.",
                action=AgentAction.EXTRACT_BUSINESS_PROFILE.value,
            )
        self.profile = profile

    def record_fit(self, fit: FitScore) -> None:
        if self.fit is not None:
            raise PreconditionError(
                "The sponsor fit has already been scored for this run.",
                action=AgentAction.SCORE_SPONSOR_FIT.value,
            )
        self.fit = fit

    # -- prompt snapshot ------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Redacted view of the state handed to the LLM controller.

        Business info is reduced to name and website; raw evidence never
        reaches the prompt.
        """
        info = self.business_info
        return {
            "businessName": self.business_name,
            "urlProvided": self.url_supplied,
            "knownWebsite": self.known_website,
            "searchAvailable": self.search_eligible,
            "extractionAvailable": self.extraction_eligible,
            "businessInfo": (
                {"name": info.name, "website": info.website} if info is not None else None
            ),
            "profile": self.profile.to_dict() if self.profile is not None else None,
            "fit": self.fit.to_dict() if self.fit is not None else None,
            "actionsTaken": sorted(a.value for a in self.actions_taken),
        }
