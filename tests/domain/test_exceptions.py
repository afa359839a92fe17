"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from sponsor_evaluator.domain.exceptions import (
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


@pytest.mark.parametrize(
    "exc_type",
    [
        ConfigError,
        InvalidRequestError,
        FetchError,
        ParseError,
        SearchError,
        NoResultsError,
        PreconditionError,
        RepeatedActionError,
        IncompleteWorkflowError,
        WorkflowExhaustedError,
        ControllerOutputError,
    ],
)
def test_all_errors_share_the_base(exc_type: type[SponsorEvaluatorError]) -> None:
    exc = exc_type()
    assert isinstance(exc, SponsorEvaluatorError)
    assert exc.logs == []
    assert exc.details == {}


def test_resolver_family() -> None:
    for exc_type in (FetchError, ParseError, SearchError, NoResultsError):
        assert issubclass(exc_type, ResolverError)


def test_workflow_family() -> None:
    for exc_type in (
        PreconditionError,
        RepeatedActionError,
        IncompleteWorkflowError,
        WorkflowExhaustedError,
        ControllerOutputError,
    ):
        assert issubclass(exc_type, WorkflowError)


def test_fetch_error_attributes() -> None:
    exc = FetchError("status 503", url="https://acme.com/", status_code=503)
    assert exc.status_code == 503
    assert exc.url == "https://acme.com/"
    assert str(exc) == "status 503"


def test_default_messages() -> None:
    assert str(NoResultsError()) == "No search results found for that company."
    assert str(WorkflowExhaustedError(steps=6)) == (
        "Unable to complete evaluation after multiple attempts."
    )
    assert str(IncompleteWorkflowError()) == "Controller exited before all data was collected."


def test_incomplete_workflow_error_lists_missing() -> None:
    exc = IncompleteWorkflowError(missing=("profile", "fit"))
    assert exc.missing == ("profile", "fit")


def test_config_error_missing() -> None:
    exc = ConfigError("no creds", missing=("GOOGLE_CSE_ID",))
    assert exc.missing == ("GOOGLE_CSE_ID",)
