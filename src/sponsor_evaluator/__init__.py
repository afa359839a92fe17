"""Smart Sponsor Evaluator.

An LLM-directed agent that gathers public information about a prospective
sponsor, classifies it into a business profile and scores how well it fits
a sports club.
"""

__version__ = "0.1.0"

from sponsor_evaluator.domain.values import (
    AgentEvaluationResult,
    ClubProfile,
    EvaluationFailure,
)
from sponsor_evaluator.services.business_info import BusinessInfoResolver
from sponsor_evaluator.services.controller import AgentController

__all__ = [
    "AgentController",
    "AgentEvaluationResult",
    "BusinessInfoResolver",
    "ClubProfile",
    "EvaluationFailure",
]
