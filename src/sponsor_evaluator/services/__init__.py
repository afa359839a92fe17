"""Application services: acquisition tools, deterministic heuristics and the controller loop."""

from sponsor_evaluator.services.business_info import (
    BusinessInfoResolver,
    looks_like_url,
    map_search_response,
    normalize_url,
    parse_business_page,
)
from sponsor_evaluator.services.controller import AgentController, ControllerDecision
from sponsor_evaluator.services.finalization import (
    build_sponsor,
    build_tracking_payload,
    render_summary,
    slugify,
)
from sponsor_evaluator.services.fit_scoring import score_sponsor_fit, suggest_sponsorship_type
from sponsor_evaluator.services.profile import extract_business_profile
from sponsor_evaluator.services.workflow_log import WorkflowLog

__all__ = [
    # Acquisition
    "BusinessInfoResolver",
    "looks_like_url",
    "map_search_response",
    "normalize_url",
    "parse_business_page",
    # Heuristics
    "extract_business_profile",
    "score_sponsor_fit",
    "suggest_sponsorship_type",
    # Controller
    "AgentController",
    "ControllerDecision",
    "WorkflowLog",
    # Finalization
    "build_sponsor",
    "build_tracking_payload",
    "render_summary",
    "slugify",
]
