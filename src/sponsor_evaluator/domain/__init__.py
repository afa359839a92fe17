"""Domain layer for the Smart Sponsor Evaluator.

Re-exports all public domain types so that consumers can write::

    from sponsor_evaluator.domain import ClubProfile, AgentAction, FitScore
"""

# -- Enumerations -------------------------------------------------------------
from .enums import AgentAction, Language, LogStatus, SponsorshipType

# -- Value Objects ------------------------------------------------------------
from .values import (
    AgentEvaluationResult,
    BusinessInfoResult,
    BusinessProfile,
    ClubProfile,
    EvaluationFailure,
    FitScore,
    RawItem,
    Sponsor,
    TrackingPayload,
)

# -- Entities -----------------------------------------------------------------
from .entities import WorkflowLogEntry, WorkflowState, utc_timestamp

# -- Exceptions ---------------------------------------------------------------
from .exceptions import (
    ConfigError,
    ControllerOutputError,
    FetchError,
    IncompleteWorkflowError,
    InvalidRequestError,
    NoResultsError,
    ParseError,
    PreconditionError,
    RepeatedActionError,
    ResolverError,
    SearchError,
    SponsorEvaluatorError,
    WorkflowError,
    WorkflowExhaustedError,
)

__all__ = [
    # Enums
    "AgentAction",
    "Language",
    "LogStatus",
    "SponsorshipType",
    # Values
    "AgentEvaluationResult",
    "BusinessInfoResult",
    "BusinessProfile",
    "ClubProfile",
    "EvaluationFailure",
    "FitScore",
    "RawItem",
    "Sponsor",
    "TrackingPayload",
    # Entities
    "WorkflowLogEntry",
    "WorkflowState",
    "utc_timestamp",
    # Exceptions
    "ConfigError",
    "ControllerOutputError",
    "FetchError",
    "IncompleteWorkflowError",
    "InvalidRequestError",
    "NoResultsError",
    "ParseError",
    "PreconditionError",
    "RepeatedActionError",
    "ResolverError",
    "SearchError",
    "SponsorEvaluatorError",
    "WorkflowError",
    "WorkflowExhaustedError",
]
