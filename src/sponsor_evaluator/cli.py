"""Command-line interface for the Smart Sponsor Evaluator.

Provides subcommands for running a full agent evaluation, exercising the
individual tools and querying package information.  Each subcommand imports
its heavy dependencies lazily so that ``sponsor-evaluator info`` works even
when no LLM provider package is installed.

Entry point
-----------
The ``main()`` function is registered as a console script in
``pyproject.toml``::

    [project.scripts]
    sponsor-evaluator = "sponsor_evaluator.cli:main"

Usage examples::

    sponsor-evaluator evaluate "Acme Outdoor" --club club.json --language fr
    sponsor-evaluator evaluate acme.com --club club.json --output result.json
    sponsor-evaluator extract https://acme.com/about
    sponsor-evaluator search "Acme Outdoor official site Denver"
    sponsor-evaluator score acme.com --club club.json
    sponsor-evaluator info
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from sponsor_evaluator.domain.exceptions import ConfigError
from sponsor_evaluator.domain.values import ClubProfile
from sponsor_evaluator.infrastructure.config import (
    SEARCH_API_KEY_ENV,
    SEARCH_ENGINE_ID_ENV,
    AgentConfig,
    FetchConfig,
    SearchConfig,
    load_config_from_json,
)

logger = logging.getLogger(__name__)

_PROVIDER_KEYS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="sponsor-evaluator",
        description=(
            "Smart Sponsor Evaluator -- score how well a company fits your "
            "sports club as a sponsor."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Show package version and exit.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-v for INFO, -vv for DEBUG).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=(
            "Path to a JSON config file with optional 'agent', 'fetch' and "
            "'search' sections."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available subcommands")

    # -- evaluate ----------------------------------------------------------
    eval_parser = subparsers.add_parser(
        "evaluate",
        help="Run a full agent evaluation.",
        description="Let the LLM controller gather data and score a prospective sponsor.",
    )
    eval_parser.add_argument("business", help="Company name or website.")
    _add_club_arguments(eval_parser)
    eval_parser.add_argument(
        "--language",
        type=str,
        default="en",
        help="Language for log and summary messages: en, fr or de. (default: en)",
    )
    eval_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=sorted(_PROVIDER_KEYS),
        help="LLM provider for the controller. (default: from config, else anthropic)",
    )
    eval_parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model name passed to the provider.",
    )
    eval_parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Controller step budget. (default: 6)",
    )
    eval_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the JSON result to this file instead of stdout.",
    )

    # -- extract -----------------------------------------------------------
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract business info from a website.",
        description="Fetch a page and print the extracted business info as JSON.",
    )
    extract_parser.add_argument("url", help="Page URL or bare domain.")

    # -- search ------------------------------------------------------------
    search_parser = subparsers.add_parser(
        "search",
        help="Search the web for business info.",
        description=(
            "Query Google Custom Search and print the mapped business info as "
            f"JSON.  Requires {SEARCH_API_KEY_ENV} and {SEARCH_ENGINE_ID_ENV}."
        ),
    )
    search_parser.add_argument("query", help="Search query.")

    # -- score -------------------------------------------------------------
    score_parser = subparsers.add_parser(
        "score",
        help="Score a company without the LLM controller.",
        description=(
            "Resolve business info (extraction for websites, search for names), "
            "then print the derived profile and fit score."
        ),
    )
    score_parser.add_argument("business", help="Company name or website.")
    _add_club_arguments(score_parser)

    # -- info --------------------------------------------------------------
    subparsers.add_parser(
        "info",
        help="Show version, dependencies and configuration status.",
        description="Display version, optional dependency status and credential status.",
    )

    return parser


def _add_club_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--club",
        type=str,
        default=None,
        help="Path to a JSON club profile (camelCase keys, e.g. 'sportType').",
    )
    parser.add_argument("--club-name", type=str, default=None, help="Override the club name.")
    parser.add_argument("--sport", type=str, default=None, help="Override the sport type.")
    parser.add_argument("--location", type=str, default=None, help="Override the club location.")
    parser.add_argument("--age-groups", type=str, default=None, help="Override the age groups.")


# =========================================================================
# Helpers
# =========================================================================

def _load_configs(args: argparse.Namespace) -> tuple[AgentConfig, FetchConfig, SearchConfig]:
    """Combine the optional JSON config file with environment secrets."""
    sections: dict[str, Any] = {}
    if args.config is not None:
        sections = load_config_from_json(Path(args.config).read_text(encoding="utf-8"))

    agent = sections.get("agent")
    if not isinstance(agent, AgentConfig):
        agent = AgentConfig()
    fetch = sections.get("fetch")
    if not isinstance(fetch, FetchConfig):
        fetch = FetchConfig()

    env_search = SearchConfig.from_env()
    search = sections.get("search")
    if isinstance(search, SearchConfig):
        search = dataclasses.replace(
            search,
            api_key=search.api_key or env_search.api_key,
            engine_id=search.engine_id or env_search.engine_id,
        )
    else:
        search = env_search
    return agent, fetch, search


def _load_club(args: argparse.Namespace) -> ClubProfile:
    data: dict[str, Any] = {}
    if args.club is not None:
        data = json.loads(Path(args.club).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Club profile must be a JSON object: {args.club}")
    overrides = {
        "clubName": args.club_name,
        "sportType": args.sport,
        "location": args.location,
        "ageGroups": args.age_groups,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ClubProfile.from_dict(data)


def _make_resolver(fetch: FetchConfig, search: SearchConfig) -> Any:
    from sponsor_evaluator.services.business_info import BusinessInfoResolver

    return BusinessInfoResolver(fetch_config=fetch, search_config=search)


def _build_chat_model(config: AgentConfig) -> Any:
    """Instantiate the provider's chat model, importing it lazily."""
    env_var = _PROVIDER_KEYS[config.provider]
    if not os.environ.get(env_var):
        raise ConfigError(
            f"{config.provider} provider selected but {env_var} is not set.",
            missing=(env_var,),
        )

    if config.provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=config.model, temperature=config.temperature)

    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(model=config.model, temperature=config.temperature)


def _emit(payload: dict[str, Any], output: str | None = None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        print(text)
        return
    Path(output).write_text(text + "\n", encoding="utf-8")
    print(f"Wrote {output}", file=sys.stderr)


# =========================================================================
# Subcommand handlers
# =========================================================================

def _cmd_evaluate(args: argparse.Namespace) -> int:
    """Handle the ``evaluate`` subcommand."""
    from sponsor_evaluator.domain.values import EvaluationFailure
    from sponsor_evaluator.services.controller import AgentController

    agent, fetch, search = _load_configs(args)
    overrides = {
        "provider": args.provider,
        "model": args.model,
        "max_steps": args.max_steps,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.provider is not None and args.model is None and args.provider != agent.provider:
        overrides["model"] = "gpt-4o-mini" if args.provider == "openai" else AgentConfig.model
    agent = dataclasses.replace(agent, **overrides)
    agent.validate()

    club = _load_club(args)
    controller = AgentController(
        model=_build_chat_model(agent),
        resolver=_make_resolver(fetch, search),
        config=agent,
    )

    result = asyncio.run(controller.evaluate(args.business, club, args.language))
    _emit(result.to_dict(), args.output)
    return 1 if isinstance(result, EvaluationFailure) else 0


def _cmd_extract(args: argparse.Namespace) -> int:
    """Handle the ``extract`` subcommand."""
    _, fetch, search = _load_configs(args)
    resolver = _make_resolver(fetch, search)
    info = asyncio.run(resolver.extract_from_url(args.url))
    _emit(info.to_dict())
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    """Handle the ``search`` subcommand."""
    _, fetch, search = _load_configs(args)
    resolver = _make_resolver(fetch, search)
    info = asyncio.run(resolver.search_business_info(args.query))
    _emit(info.to_dict())
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    """Handle the ``score`` subcommand."""
    from sponsor_evaluator.services.business_info import looks_like_url
    from sponsor_evaluator.services.finalization import display_name
    from sponsor_evaluator.services.fit_scoring import score_sponsor_fit
    from sponsor_evaluator.services.profile import extract_business_profile

    _, fetch, search = _load_configs(args)
    resolver = _make_resolver(fetch, search)
    club = _load_club(args)

    business = args.business.strip()
    if looks_like_url(business):
        info = asyncio.run(resolver.extract_from_url(business))
    else:
        query = f"{business} official site {club.location}".strip()
        info = asyncio.run(resolver.search_business_info(query))

    profile = extract_business_profile(display_name(info, business), info)
    fit = score_sponsor_fit(profile, club)
    _emit({
        "businessInfo": info.to_dict(),
        "profile": profile.to_dict(),
        "fit": fit.to_dict(),
    })
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    """Handle the ``info`` subcommand."""
    from sponsor_evaluator import __version__

    print(f"Smart Sponsor Evaluator v{__version__}")
    print()

    optional_deps = {
        "langchain_core": "LLM controller chain (required)",
        "httpx": "Website and search requests (required)",
        "bs4": "HTML extraction (required)",
        "langchain_anthropic": "Anthropic controller model",
        "langchain_openai": "OpenAI controller model",
    }

    print("Dependencies:")
    for pkg, desc in optional_deps.items():
        try:
            mod = __import__(pkg)
            version = getattr(mod, "__version__", "unknown")
            print(f"  [installed] {pkg} {version} -- {desc}")
        except ImportError:
            print(f"  [missing]   {pkg} -- {desc}")

    print()

    search = SearchConfig.from_env()
    print("Credentials:")
    for env_var in (SEARCH_API_KEY_ENV, SEARCH_ENGINE_ID_ENV, *_PROVIDER_KEYS.values()):
        status = "set" if os.environ.get(env_var) else "not set"
        print(f"  {env_var}: {status}")
    print(f"  web search: {'available' if search.is_configured else 'unavailable'}")
    print()

    print("Controller actions:")
    from sponsor_evaluator.domain.enums import AgentAction

    for action in AgentAction:
        print(f"  - {action.value}")

    return 0


# =========================================================================
# Main entry point
# =========================================================================

def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Handle --version at top level
    if args.version:
        from sponsor_evaluator import __version__
        print(f"sponsor-evaluator {__version__}")
        sys.exit(0)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers: dict[str, Any] = {
        "evaluate": _cmd_evaluate,
        "extract": _cmd_extract,
        "search": _cmd_search,
        "score": _cmd_score,
        "info": _cmd_info,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130
    except Exception as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)
