"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .check_eligibility import (
    CheckEligibilityRequest,
    CheckEligibilityResponse,
    CheckEligibilityUseCase,
)
from .get_current_vote import (
    CurrentVoteResponse,
    GetCurrentVoteRequest,
    GetCurrentVoteUseCase,
)
from .retract_vote import RetractVoteRequest, RetractVoteResponse, RetractVoteUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "CheckEligibilityRequest",
    "CheckEligibilityResponse",
    "CheckEligibilityUseCase",
    "CurrentVoteResponse",
    "GetCurrentVoteRequest",
    "GetCurrentVoteUseCase",
    "RetractVoteRequest",
    "RetractVoteResponse",
    "RetractVoteUseCase",
]
