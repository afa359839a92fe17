"""LLM-directed sponsor evaluation loop.

The controller repeatedly asks a chat model to pick the next action from a
fixed vocabulary, validates that choice against the workflow rules, runs the
matching tool and records every step in a :class:`WorkflowLog`:

1. **Think**: log a pending entry and await one structured completion.
2. **Override**: URL inputs always go through page extraction first.
3. **Guard**: ``done`` needs every result; tools run at most once; each tool
   checks its own preconditions.
4. **Dispatch**: run the tool and store its result in the run's state.

The loop stops on ``done`` or when the step budget runs out.  Any error
aborts the run; there is no retry or re-prompting.

Classes
-------
ControllerDecision
    Structured-output schema for the controller's choice.
AgentController
    Runs evaluations; one instance can serve many concurrent runs.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, ValidationError

from sponsor_evaluator.domain.entities import WorkflowState
from sponsor_evaluator.domain.enums import AgentAction, LogStatus
from sponsor_evaluator.domain.exceptions import (
    ControllerOutputError,
    IncompleteWorkflowError,
    InvalidRequestError,
    PreconditionError,
    RepeatedActionError,
    SponsorEvaluatorError,
    WorkflowExhaustedError,
)
from sponsor_evaluator.domain.values import (
    AgentEvaluationResult,
    ClubProfile,
    EvaluationFailure,
)
from sponsor_evaluator.infrastructure.config import AgentConfig
from sponsor_evaluator.infrastructure.i18n import Messages
from sponsor_evaluator.services.business_info import (
    BusinessInfoResolver,
    looks_like_url,
    normalize_url,
)
from sponsor_evaluator.services.finalization import (
    build_sponsor,
    build_tracking_payload,
    display_name,
    render_summary,
)
from sponsor_evaluator.services.fit_scoring import score_sponsor_fit
from sponsor_evaluator.services.profile import extract_business_profile
from sponsor_evaluator.services.workflow_log import WorkflowLog

logger = logging.getLogger(__name__)


# -- Structured output schema ------------------------------------------------


class ControllerDecision(BaseModel):
    """The single next action chosen by the controller."""

    action: AgentAction = Field(description="The next action to take")


# -- Prompt ------------------------------------------------------------------

_CONTROLLER_PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are a controller deciding the next action for the Smart Sponsor "
            "Evaluator. You assemble a sponsor evaluation from three results: "
            "business info, a business profile and a fit score.\n\n"
            "Available actions:\n"
            "- extractFromUrl: read the company's website (only when a website "
            "is known and extraction is available)\n"
            "- searchBusinessInfo: search the web for the company (only when "
            "search is available)\n"
            "- extractBusinessProfile: classify the company (needs business info)\n"
            "- scoreSponsorFit: score the company against the club (needs a profile)\n"
            "- done: finish (only when business info, profile and fit are all available)\n\n"
            "Never repeat an action listed in actionsTaken. "
            "Respond with exactly one action.",
        ),
        (
            "human",
            "## State\n{state}\n\n"
            "## Club profile\n{club}\n\n"
            "Decide the next step.",
        ),
    ]
)


# -- AgentController ---------------------------------------------------------


class AgentController:
    """Drive an LLM controller through the evaluation workflow.

    Parameters
    ----------
    model:
        A LangChain chat model supporting ``with_structured_output``.
    resolver:
        Business-info acquisition tools.
    config:
        Loop configuration (step budget).  Defaults to ``AgentConfig()``.
    prompt:
        Optional custom ``ChatPromptTemplate`` taking ``state`` and ``club``.

    All per-run state lives inside :meth:`run`; the instance only holds
    immutable collaborators, so concurrent runs do not interfere.
    """

    def __init__(
        self,
        model: BaseChatModel,
        resolver: BusinessInfoResolver,
        config: AgentConfig | None = None,
        prompt: ChatPromptTemplate | None = None,
    ) -> None:
        self.model = model
        self.resolver = resolver
        self.config = config or AgentConfig()
        self.config.validate()
        self._prompt = prompt or _CONTROLLER_PROMPT
        self._chain = self._build_chain()

    def _build_chain(self) -> Any:
        """Build the decision chain with structured output."""
        structured_model = self.model.with_structured_output(ControllerDecision)
        return self._prompt | structured_model

    # -- public API -----------------------------------------------------------

    async def evaluate(
        self,
        business_name: str,
        club: ClubProfile,
        language: str | None = None,
    ) -> AgentEvaluationResult | EvaluationFailure:
        """Run an evaluation and return either the result or a failure value.

        Never raises for workflow, tool or LLM errors: the failure carries a
        localized message, the underlying detail and the log accumulated up
        to the point of failure.
        """
        messages = Messages(language)
        log = WorkflowLog()
        try:
            return await self.run(business_name, club, language, log=log)
        except InvalidRequestError as exc:
            return EvaluationFailure(
                error=str(exc),
                detail=str(exc),
                error_type=type(exc).__name__,
            )
        except Exception as exc:
            logger.warning(
                "Agent evaluation of %r failed (%s): %s",
                business_name,
                type(exc).__name__,
                exc,
            )
            return EvaluationFailure(
                error=messages.get("error_generic"),
                detail=str(exc),
                error_type=type(exc).__name__,
                logs=tuple(log.entries),
            )

    async def run(
        self,
        business_name: str,
        club: ClubProfile,
        language: str | None = None,
        log: WorkflowLog | None = None,
    ) -> AgentEvaluationResult:
        """Run an evaluation, raising on failure.

        Parameters
        ----------
        business_name:
            Company name or URL-like text typed by the user.
        club:
            The club the sponsor is evaluated for.
        language:
            Language tag for log and summary messages (``en``, ``fr``, ``de``).
        log:
            Optional log to write into; lets callers inspect partial progress
            after any exception.  A fresh log is used otherwise.

        Raises
        ------
        InvalidRequestError
            If *business_name* is blank.
        SponsorEvaluatorError
            Any workflow, configuration or tool error.  ``exc.logs`` holds the
            log entries accumulated before the failure.
        """
        messages = Messages(language)
        name = (business_name or "").strip()
        if not name:
            raise InvalidRequestError(messages.get("error_provide_company"))

        log = log if log is not None else WorkflowLog()
        logger.info("Starting evaluation of %r (language=%s)", name, messages.language.value)

        try:
            result = await self._run(name, club, messages, log)
        except Exception as exc:
            log.fail_pending()
            log.append(
                f"{messages.get('log_failure_prefix')}: {str(exc) or type(exc).__name__}",
                LogStatus.ERROR,
            )
            if isinstance(exc, SponsorEvaluatorError):
                exc.logs = log.entries
            raise

        logger.info(
            "Evaluation of %r finished: score=%d path=%s",
            name,
            result.fit.score,
            " -> ".join(result.actions),
        )
        return result

    # -- loop -----------------------------------------------------------------

    async def _run(
        self,
        name: str,
        club: ClubProfile,
        messages: Messages,
        log: WorkflowLog,
    ) -> AgentEvaluationResult:
        log.append(messages.get("log_reasoning"))

        url_supplied = looks_like_url(name)
        state = WorkflowState(
            business_name=name,
            url_supplied=url_supplied,
            known_website=normalize_url(name) if url_supplied else None,
        )
        if not url_supplied:
            # Search is the only way to gather info for a plain name.
            self.resolver.require_search_credentials()

        for step in range(1, self.config.max_steps + 1):
            thinking = log.pending(messages.get("log_thinking"))
            proposed = await self._decide(state, club)
            log.succeed(thinking.id)

            action = self._apply_override(state, proposed)
            logger.debug("Step %d: proposed=%s action=%s", step, proposed.value, action.value)
            log.append(messages.format("log_decision", action=messages.action_label(action)))

            if action is AgentAction.DONE:
                if not state.is_complete:
                    raise IncompleteWorkflowError(missing=state.missing_results())
                break

            if action in state.actions_taken:
                raise RepeatedActionError(
                    f"Controller chose {action.value} again; each tool runs at most once.",
                    action=action.value,
                )
            state.record_action(action)

            await self._dispatch(action, state, club, messages, log)
        else:
            if not state.is_complete:
                raise WorkflowExhaustedError(steps=self.config.max_steps)

        return self._finalize(state, messages, log)

    async def _decide(self, state: WorkflowState, club: ClubProfile) -> AgentAction:
        """One structured-completion round-trip, decoded into an action."""
        raw = await self._chain.ainvoke(
            {
                "state": json.dumps(state.snapshot(), ensure_ascii=False, indent=2),
                "club": json.dumps(club.to_dict(), ensure_ascii=False, indent=2),
            }
        )
        return self.decode_decision(raw)

    @staticmethod
    def decode_decision(raw: Any) -> AgentAction:
        """Decode an untrusted completion into an :class:`AgentAction`.

        Accepts a ``ControllerDecision``, a mapping with an ``action`` key,
        or a bare action string.

        Raises
        ------
        ControllerOutputError
            If the value is not one of the known actions.
        """
        if isinstance(raw, ControllerDecision):
            return raw.action
        if isinstance(raw, AgentAction):
            return raw
        try:
            if isinstance(raw, dict):
                return ControllerDecision.model_validate(raw).action
            if isinstance(raw, str):
                return AgentAction(raw.strip())
        except (ValidationError, ValueError) as exc:
            raise ControllerOutputError(
                f"Controller returned an invalid action: {raw!r}", raw=raw
            ) from exc
        raise ControllerOutputError(
            f"Controller returned an unsupported value: {raw!r}", raw=raw
        )

    @staticmethod
    def _apply_override(state: WorkflowState, proposed: AgentAction) -> AgentAction:
        """URL inputs are never routed through search: extract first."""
        if (
            state.url_supplied
            and state.business_info is None
            and not state.extraction_used
            and proposed is not AgentAction.EXTRACT_FROM_URL
        ):
            logger.info(
                "Overriding controller choice %s with %s for URL input",
                proposed.value,
                AgentAction.EXTRACT_FROM_URL.value,
            )
            return AgentAction.EXTRACT_FROM_URL
        return proposed

    # -- tools ----------------------------------------------------------------

    async def _dispatch(
        self,
        action: AgentAction,
        state: WorkflowState,
        club: ClubProfile,
        messages: Messages,
        log: WorkflowLog,
    ) -> None:
        if action is AgentAction.EXTRACT_FROM_URL:
            await self._extract_from_url(state, messages, log)
        elif action is AgentAction.SEARCH_BUSINESS_INFO:
            await self._search_business_info(state, club, messages, log)
        elif action is AgentAction.EXTRACT_BUSINESS_PROFILE:
            self._extract_business_profile(state, messages, log)
        elif action is AgentAction.SCORE_SPONSOR_FIT:
            self._score_sponsor_fit(state, club, messages, log)
        else:
            raise PreconditionError(f"No tool for action {action.value}", action=action.value)

    async def _extract_from_url(
        self,
        state: WorkflowState,
        messages: Messages,
        log: WorkflowLog,
    ) -> None:
        if not state.extraction_eligible or state.known_website is None:
            raise PreconditionError(
                "Controller requested website extraction without an available website.",
                action=AgentAction.EXTRACT_FROM_URL.value,
            )
        entry = log.pending(messages.get("log_extract"))
        info = await self.resolver.extract_from_url(state.known_website)
        log.succeed(entry.id)
        log.append(messages.get("log_extract_done"))

        state.record_business_info(info)
        state.known_website = info.website or state.known_website
        state.extraction_used = True

    async def _search_business_info(
        self,
        state: WorkflowState,
        club: ClubProfile,
        messages: Messages,
        log: WorkflowLog,
    ) -> None:
        if state.url_supplied or not state.search_eligible:
            raise PreconditionError(
                "Controller requested a web search that is not available for this input.",
                action=AgentAction.SEARCH_BUSINESS_INFO.value,
            )
        entry = log.pending(messages.get("log_search"))
        query = f"{state.business_name} official site {club.location}".strip()
        info = await self.resolver.search_business_info(query)
        log.succeed(entry.id)

        state.record_business_info(info)
        if info.website:
            state.known_website = info.website
        state.search_used = True

    def _extract_business_profile(
        self,
        state: WorkflowState,
        messages: Messages,
        log: WorkflowLog,
    ) -> None:
        if state.business_info is None:
            raise PreconditionError(
                "Controller requested profile extraction before business info was available.",
                action=AgentAction.EXTRACT_BUSINESS_PROFILE.value,
            )
        entry = log.pending(messages.get("log_profile"))
        name = display_name(state.business_info, state.business_name)
        profile = extract_business_profile(name, state.business_info)
        log.succeed(entry.id)
        state.record_profile(profile)

    def _score_sponsor_fit(
        self,
        state: WorkflowState,
        club: ClubProfile,
        messages: Messages,
        log: WorkflowLog,
    ) -> None:
        if state.profile is None:
            raise PreconditionError(
                "Controller requested fit scoring before the profile was extracted.",
                action=AgentAction.SCORE_SPONSOR_FIT.value,
            )
        entry = log.pending(messages.get("log_fit"))
        fit = score_sponsor_fit(state.profile, club)
        log.succeed(entry.id)
        state.record_fit(fit)

    # -- finalization ---------------------------------------------------------

    def _finalize(
        self,
        state: WorkflowState,
        messages: Messages,
        log: WorkflowLog,
    ) -> AgentEvaluationResult:
        info, profile, fit = state.business_info, state.profile, state.fit
        if info is None or profile is None or fit is None:
            raise IncompleteWorkflowError(missing=state.missing_results())

        name = display_name(info, state.business_name)
        sponsor = build_sponsor(name, info, profile, fit)
        log.append(messages.get("log_summary"))

        return AgentEvaluationResult(
            logs=tuple(log.entries),
            business_info=info,
            profile=profile,
            fit=fit,
            final_summary=render_summary(messages, name, fit),
            tracking_payload=build_tracking_payload(sponsor, profile, fit),
            actions=tuple(action.value for action in state.actions),
        )
