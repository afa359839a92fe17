"""Domain exceptions for the Smart Sponsor Evaluator.

All domain-specific exceptions inherit from ``SponsorEvaluatorError`` so
callers can catch the full family with a single ``except`` clause when needed.

The controller attaches the workflow log accumulated before a failure to the
raised exception (``exc.logs``) so that callers can render partial progress.
"""

from __future__ import annotations

from typing import Any


class SponsorEvaluatorError(Exception):
    """Base exception for all Smart Sponsor Evaluator errors."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}
        self.logs: list[Any] = []


class ConfigError(SponsorEvaluatorError):
    """Raised when required external credentials or settings are missing.

    Always fatal, and surfaced before the controller starts iterating.
    """

    def __init__(
        self,
        message: str = "Missing configuration",
        missing: tuple[str, ...] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.missing = missing


class InvalidRequestError(SponsorEvaluatorError):
    """Raised when the evaluation request itself is unusable (e.g. blank input)."""


# ---------------------------------------------------------------------------
# Acquisition errors (BusinessInfoResolver)
# ---------------------------------------------------------------------------


class ResolverError(SponsorEvaluatorError):
    """Base class for failures while acquiring business information."""


class FetchError(ResolverError):
    """Raised when a web page cannot be fetched.

    ``status_code`` is set when the server answered with a non-success
    status; it is ``None`` for transport-level failures.
    """

    def __init__(
        self,
        message: str = "Unable to fetch website content",
        url: str = "",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ParseError(ResolverError):
    """Raised when a URL is empty or malformed."""

    def __init__(
        self,
        message: str = "Invalid URL",
        value: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.value = value


class SearchError(ResolverError):
    """Raised when the search API call fails upstream."""

    def __init__(
        self,
        message: str = "Search request failed.",
        query: str = "",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.query = query
        self.status_code = status_code


class NoResultsError(ResolverError):
    """Raised when the search API returns zero results."""

    def __init__(
        self,
        message: str = "No search results found for that company.",
        query: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.query = query


# ---------------------------------------------------------------------------
# Workflow errors (AgentController)
# ---------------------------------------------------------------------------


class WorkflowError(SponsorEvaluatorError):
    """Base class for controller guard failures."""


class PreconditionError(WorkflowError):
    """Raised when an action is chosen before its dependencies are satisfied.

    This is a bug guard: in normal operation the controller never reaches
    it, but the run fails loudly instead of silently skipping the step.
    """

    def __init__(
        self,
        message: str = "Action precondition not satisfied",
        action: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.action = action


class RepeatedActionError(WorkflowError):
    """Raised when the controller chooses a tool that already ran in this run."""

    def __init__(
        self,
        message: str = "Action already executed",
        action: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.action = action


class IncompleteWorkflowError(WorkflowError):
    """Raised when ``done`` is chosen while results are still missing."""

    def __init__(
        self,
        message: str = "Controller exited before all data was collected.",
        missing: tuple[str, ...] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.missing = missing


class WorkflowExhaustedError(WorkflowError):
    """Raised when the step budget runs out before the evaluation is complete."""

    def __init__(
        self,
        message: str = "Unable to complete evaluation after multiple attempts.",
        steps: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.steps = steps


class ControllerOutputError(WorkflowError):
    """Raised when the structured completion cannot be decoded into an action."""

    def __init__(
        self,
        message: str = "Controller returned an invalid action",
        raw: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.raw = raw
