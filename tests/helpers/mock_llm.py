"""Mock LLM for testing: re-exports from ``sponsor_evaluator.testing``."""

from sponsor_evaluator.testing.mock_llm import (
    MockStructuredChatModel,
    PromptCapturingMock,
    scripted_controller,
)

__all__ = ["MockStructuredChatModel", "PromptCapturingMock", "scripted_controller"]
