"""Infrastructure layer: configuration and localized messages."""

from sponsor_evaluator.infrastructure.config import (
    AgentConfig,
    FetchConfig,
    SearchConfig,
    load_config_from_json,
)
from sponsor_evaluator.infrastructure.i18n import Messages, ensure_language

__all__ = [
    "AgentConfig",
    "FetchConfig",
    "Messages",
    "SearchConfig",
    "ensure_language",
    "load_config_from_json",
]
