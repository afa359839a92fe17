"""Mock LLM for testing and examples.

Provides a ``MockStructuredChatModel`` that supports ``with_structured_output``
by returning pre-configured responses, and a ``PromptCapturingMock`` that
also records the rendered prompt of every call.
"""

from __future__ import annotations

from typing import Any

from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from langchain_core.runnables import RunnableSerializable
from pydantic import BaseModel, ConfigDict

from sponsor_evaluator.domain.enums import AgentAction


def _render_prompt(input: Any) -> str:
    if hasattr(input, "to_string"):
        return input.to_string()
    return str(input)


class MockStructuredChatModel(BaseChatModel):
    """A mock chat model that supports with_structured_output.

    Usage::

        model = MockStructuredChatModel(
            structured_responses=[
                ControllerDecision(action=AgentAction.SEARCH_BUSINESS_INFO),
                {"action": "extractBusinessProfile"},
                RuntimeError("model unavailable"),
            ],
        )
        # Each call to the chain returns the next response in order.
        # Exception instances are raised instead of returned.
        # After exhausting the list, it cycles back to the start.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    structured_responses: list[Any] = []
    _call_index: int = 0

    @property
    def _llm_type(self) -> str:
        return "mock-structured"

    @property
    def call_count(self) -> int:
        return self._call_index

    def _next_response(self, input: Any) -> Any:
        if not self.structured_responses:
            raise RuntimeError("MockStructuredChatModel has no structured_responses")
        idx = self._call_index % len(self.structured_responses)
        resp = self.structured_responses[idx]
        self._call_index += 1
        if isinstance(resp, BaseException):
            raise resp
        return resp

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        resp = self._next_response(messages)
        text = resp.model_dump_json() if isinstance(resp, BaseModel) else str(resp)
        return ChatResult(
            generations=[ChatGeneration(message=AIMessage(content=text))]
        )

    def with_structured_output(self, schema: Any, **kwargs: Any) -> Any:
        """Return a runnable that yields pre-configured structured responses."""
        model_ref = self

        class _MultiStructuredRunnable(RunnableSerializable):
            """Returns responses in sequence, cycling."""

            model_config = ConfigDict(arbitrary_types_allowed=True)

            def invoke(self, input: Any, config: Any = None, **kwargs: Any) -> Any:
                return model_ref._next_response(input)

            async def ainvoke(self, input: Any, config: Any = None, **kwargs: Any) -> Any:
                return model_ref._next_response(input)

        return _MultiStructuredRunnable()


class PromptCapturingMock(MockStructuredChatModel):
    """A ``MockStructuredChatModel`` that keeps every rendered prompt.

    ``captured_prompts[i]`` is the full text of the prompt sent on call *i*.
    """

    captured_prompts: list[str] = []

    def _next_response(self, input: Any) -> Any:
        self.captured_prompts.append(_render_prompt(input))
        return super()._next_response(input)


def scripted_controller(*actions: AgentAction | str) -> MockStructuredChatModel:
    """Build a mock whose controller decisions follow *actions* in order."""
    return MockStructuredChatModel(
        structured_responses=[{"action": AgentAction(action).value} for action in actions],
    )
