"""Draw assignment rules and the records they operate on."""

from .engine import (
    PrizeDrawEngine,
    assign,
    eligible_participants,
    find_by_token,
    pick_random,
)
from .outcomes import AssignmentResult, DrawFailure, SelectionResult
from .ranks import LIMITED_RANKS, PRIZE_RANKS, selectable_years
from .records import Participant, Winner

__all__ = [
    "AssignmentResult",
    "DrawFailure",
    "LIMITED_RANKS",
    "PRIZE_RANKS",
    "Participant",
    "PrizeDrawEngine",
    "SelectionResult",
    "Winner",
    "assign",
    "eligible_participants",
    "find_by_token",
    "pick_random",
    "selectable_years",
]
