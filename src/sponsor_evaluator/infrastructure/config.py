"""Configuration dataclasses for the Smart Sponsor Evaluator.

Each config is a plain ``dataclass`` with a ``validate()`` method that raises
``ValueError`` on invalid combinations.  Configs are **frozen** so a single
instance can be shared by concurrent evaluation runs without risking silent
mutation.

Secrets (search API key, search engine id) are read from the environment by
:meth:`SearchConfig.from_env`; missing secrets are not a validation error
here, they surface as ``ConfigError`` when the search tool is needed.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

from sponsor_evaluator.domain.exceptions import ConfigError

SEARCH_API_KEY_ENV = "GOOGLE_CSE_API_KEY"
SEARCH_ENGINE_ID_ENV = "GOOGLE_CSE_ID"


# ===================================================================== #
#  Agent Configuration                                                   #
# ===================================================================== #

_VALID_PROVIDERS = frozenset({"anthropic", "openai"})


@dataclass(frozen=True)
class AgentConfig:
    """Parameters governing the controller loop and its LLM.

    Attributes
    ----------
    max_steps:
        Hard upper limit on controller iterations (one LLM call each).
    provider:
        LLM backend used by the CLI to build a chat model.
    model:
        Model identifier passed to the provider.
    temperature:
        Sampling temperature for the controller's decisions.
    """

    max_steps: int = 6
    provider: str = "anthropic"
    model: str = "claude-sonnet-4-5-20250929"
    temperature: float = 0.0

    def validate(self) -> None:
        """Raise ``ValueError`` if any field is out of valid range."""
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")
        if self.provider not in _VALID_PROVIDERS:
            raise ValueError(
                f"provider must be one of {sorted(_VALID_PROVIDERS)}, "
                f"got '{self.provider}'"
            )
        if not self.model:
            raise ValueError("model must not be empty")
        if not (0.0 <= self.temperature <= 2.0):
            raise ValueError(
                f"temperature must be in [0, 2], got {self.temperature}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AgentConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Fetch Configuration                                                   #
# ===================================================================== #

@dataclass(frozen=True)
class FetchConfig:
    """HTTP settings for page extraction.

    Attributes
    ----------
    user_agent:
        ``User-Agent`` header sent with every page request.
    timeout:
        Request timeout in seconds.
    """

    user_agent: str = "SmartSponsorEvaluatorBot/1.0"
    timeout: float = 15.0

    def validate(self) -> None:
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FetchConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Search Configuration                                                  #
# ===================================================================== #

@dataclass(frozen=True)
class SearchConfig:
    """Google Custom Search settings.

    Attributes
    ----------
    api_key:
        Custom Search JSON API key.
    engine_id:
        Programmable search engine id (``cx``).
    endpoint:
        API endpoint URL.
    num_results:
        Number of results requested per query (1-10).
    language:
        ``lr`` restriction sent to the API.
    timeout:
        Request timeout in seconds.
    """

    api_key: str = ""
    engine_id: str = ""
    endpoint: str = "https://www.googleapis.com/customsearch/v1"
    num_results: int = 5
    language: str = "lang_en"
    timeout: float = 15.0

    def __repr__(self) -> str:
        key = "***" if self.api_key else "''"
        return (
            f"SearchConfig(api_key={key}, engine_id={self.engine_id!r}, "
            f"endpoint={self.endpoint!r}, num_results={self.num_results})"
        )

    @property
    def is_configured(self) -> bool:
        """True when both secrets are present."""
        return bool(self.api_key) and bool(self.engine_id)

    def missing_credentials(self) -> tuple[str, ...]:
        missing = []
        if not self.api_key:
            missing.append(SEARCH_API_KEY_ENV)
        if not self.engine_id:
            missing.append(SEARCH_ENGINE_ID_ENV)
        return tuple(missing)

    def require_credentials(self) -> None:
        """Raise ``ConfigError`` naming every missing secret."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigError(
                "Google Custom Search credentials are not configured "
                f"(missing {', '.join(missing)}).",
                missing=missing,
            )

    def validate(self) -> None:
        if not self.endpoint:
            raise ValueError("endpoint must not be empty")
        if not (1 <= self.num_results <= 10):
            raise ValueError(
                f"num_results must be in [1, 10], got {self.num_results}"
            )
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["api_key"] = "***" if self.api_key else ""
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> SearchConfig:
        """Read the secrets from the environment (or the given mapping)."""
        env = os.environ if environ is None else environ
        cfg = cls(
            api_key=env.get(SEARCH_API_KEY_ENV, "").strip(),
            engine_id=env.get(SEARCH_ENGINE_ID_ENV, "").strip(),
            **overrides,
        )
        cfg.validate()
        return cfg


# ===================================================================== #
#  Unified config loader                                                 #
# ===================================================================== #

_CONFIG_MAP: dict[str, type] = {
    "agent": AgentConfig,
    "fetch": FetchConfig,
    "search": SearchConfig,
}


def load_config_from_json(json_str: str) -> dict[str, Any]:
    """Parse a JSON string into a dict of typed config objects.

    The JSON is expected to be an object whose top-level keys correspond to
    config section names (``agent``, ``fetch``, ``search``).  Unknown
    sections are preserved as raw dicts.

    Returns a dict mapping section name -> config instance (or raw dict).
    """
    raw = json.loads(json_str)
    if not isinstance(raw, dict):
        raise ValueError("Top-level JSON must be an object")
    result: dict[str, Any] = {}
    for section, data in raw.items():
        cls = _CONFIG_MAP.get(section)
        if cls is not None and isinstance(data, dict):
            result[section] = cls.from_dict(data)
        else:
            result[section] = data
    return result
