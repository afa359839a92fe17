"""Public testing utilities for the Smart Sponsor Evaluator.

Provides mock LLM models for writing self-contained examples and tests
without requiring API keys.
"""

from sponsor_evaluator.testing.mock_llm import (
    MockStructuredChatModel,
    PromptCapturingMock,
    scripted_controller,
)

__all__ = ["MockStructuredChatModel", "PromptCapturingMock", "scripted_controller"]
