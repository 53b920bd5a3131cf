"""Result types returned by the draw engine.

Expected business conditions are never raised. Each engine call returns a
result object whose ``failure`` is ``None`` on success, or one of the
:class:`DrawFailure` values otherwise. ``message`` renders the condition in
the wording shown to operators.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .records import Participant, Winner


class DrawFailure(str, Enum):
    NOT_FOUND = "not_found"
    NO_ELIGIBLE_PARTICIPANTS = "no_eligible_participants"
    NO_SELECTION = "no_selection"
    DUPLICATE_PARTICIPANT_IN_YEAR = "duplicate_participant_in_year"
    RANK_ALREADY_ASSIGNED = "rank_already_assigned"


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a token search or random pick.

    Attributes
    ----------
    participant : Optional[Participant]
        Selected participant; ``None`` when the selection failed.
    failure : Optional[DrawFailure]
        ``NOT_FOUND`` or ``NO_ELIGIBLE_PARTICIPANTS`` on failure.
    """

    participant: Optional[Participant] = None
    failure: Optional[DrawFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        if self.failure is DrawFailure.NOT_FOUND:
            return "Participant not found with this token number"
        if self.failure is DrawFailure.NO_ELIGIBLE_PARTICIPANTS:
            return "No available participants for random selection"
        return ""


@dataclass(frozen=True)
class AssignmentResult:
    """Outcome of :func:`~luckydraw.draw.engine.assign`.

    Attributes
    ----------
    winner : Optional[Winner]
        Candidate winner record (without an id) when the assignment is legal.
    failure : Optional[DrawFailure]
        Reason the assignment was rejected.
    rank : str
        Rank that was requested.
    year : str
        Award year that was requested.
    held_rank : Optional[str]
        Rank the participant already holds for ``year``; only set for
        ``DUPLICATE_PARTICIPANT_IN_YEAR``.
    """

    rank: str
    year: str
    winner: Optional[Winner] = None
    failure: Optional[DrawFailure] = None
    held_rank: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        if self.failure is DrawFailure.NO_SELECTION:
            return "Please select a participant first"
        if self.failure is DrawFailure.DUPLICATE_PARTICIPANT_IN_YEAR:
            return f'This participant has already won "{self.held_rank}" in {self.year}'
        if self.failure is DrawFailure.RANK_ALREADY_ASSIGNED:
            return f"{self.rank} has already been assigned for {self.year}"
        return ""


__all__ = ["AssignmentResult", "DrawFailure", "SelectionResult"]
