"""Rules deciding which participants may be drawn and which prizes they may receive."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Sequence

from .outcomes import AssignmentResult, DrawFailure, SelectionResult
from .ranks import is_limited, validate_rank, validate_year
from .records import Participant, Winner

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def find_by_token(
    participants: Iterable[Participant], token_query: str
) -> SelectionResult:
    """Return the first participant whose token number equals ``token_query``.

    The query is stripped of surrounding whitespace; the comparison itself is
    exact and case-sensitive.
    """
    token = token_query.strip()
    for participant in participants:
        if participant.token_no == token:
            return SelectionResult(participant=participant)
    return SelectionResult(failure=DrawFailure.NOT_FOUND)


def eligible_participants(
    participants: Iterable[Participant],
    winners: Iterable[Winner],
    year: str,
) -> list[Participant]:
    """Return participants who hold no winner record for ``year``."""
    taken = {w.participant_id for w in winners if w.year == year}
    return [p for p in participants if p.id not in taken]


def pick_random(
    participants: Sequence[Participant],
    winners: Sequence[Winner],
    year: str,
    rng: Optional[random.Random] = None,
) -> SelectionResult:
    """Pick a participant uniformly at random among those still eligible for ``year``.

    Parameters
    ----------
    participants : Sequence[Participant]
        Current roster snapshot.
    winners : Sequence[Winner]
        Current winner snapshot.
    year : str
        Award year the pick is for.
    rng : Optional[random.Random], default: None
        Random source. The module-level generator is used when omitted.

    Returns
    -------
    SelectionResult
        The chosen participant, or ``NO_ELIGIBLE_PARTICIPANTS`` when everyone
        already won in ``year``.
    """
    validate_year(year)
    pool = eligible_participants(participants, winners, year)
    if not pool:
        return SelectionResult(failure=DrawFailure.NO_ELIGIBLE_PARTICIPANTS)

    chooser = rng or random
    picked = pool[chooser.randrange(len(pool))]
    logger.debug("Random pick for %s chose token %s out of %d", year, picked.token_no, len(pool))
    return SelectionResult(participant=picked)


def assign(
    participant: Optional[Participant],
    rank: str,
    year: str,
    winners: Iterable[Winner],
    now: Optional[datetime] = None,
) -> AssignmentResult:
    """Decide whether ``participant`` may receive ``rank`` for ``year``.

    Checks run in this order and the first failing one is reported:

    1. a participant must be selected (``NO_SELECTION``);
    2. the participant must not already hold any rank for ``year``
       (``DUPLICATE_PARTICIPANT_IN_YEAR``);
    3. a limited rank (1st/2nd/3rd Prize) must not already be held by
       someone for ``year`` (``RANK_ALREADY_ASSIGNED``).

    On success the result carries a new :class:`Winner` without an id. The
    store assigns the id when the caller persists it.

    Raises
    ------
    ValueError
        If a participant is given and ``rank`` is not one of the known prize
        ranks or ``year`` is not a four-digit string.
    """
    if participant is None:
        return AssignmentResult(rank=rank, year=year, failure=DrawFailure.NO_SELECTION)
    validate_rank(rank)
    validate_year(year)

    existing = list(winners)
    held = next(
        (w for w in existing if w.participant_id == participant.id and w.year == year),
        None,
    )
    if held is not None:
        return AssignmentResult(
            rank=rank,
            year=year,
            failure=DrawFailure.DUPLICATE_PARTICIPANT_IN_YEAR,
            held_rank=held.rank,
        )

    if is_limited(rank) and any(w.rank == rank and w.year == year for w in existing):
        return AssignmentResult(
            rank=rank, year=year, failure=DrawFailure.RANK_ALREADY_ASSIGNED
        )

    winner = Winner(
        participant=participant,
        rank=rank,
        year=year,
        assigned_at=now or _utcnow(),
    )
    return AssignmentResult(rank=rank, year=year, winner=winner)


class PrizeDrawEngine:
    """Draw engine bound to a random source and a clock."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Create a draw engine.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Random source used by :meth:`pick_random`. A fresh, unseeded
            :class:`random.Random` is used when omitted.
        clock : Optional[Callable[[], datetime]], default: None
            Returns the timestamp stamped on new winners. Defaults to the
            current UTC time.
        """
        self._rng = rng or random.Random()
        self._clock = clock or _utcnow

    def find_by_token(
        self, participants: Iterable[Participant], token_query: str
    ) -> SelectionResult:
        return find_by_token(participants, token_query)

    def pick_random(
        self,
        participants: Sequence[Participant],
        winners: Sequence[Winner],
        year: str,
    ) -> SelectionResult:
        return pick_random(participants, winners, year, rng=self._rng)

    def assign(
        self,
        participant: Optional[Participant],
        rank: str,
        year: str,
        winners: Iterable[Winner],
    ) -> AssignmentResult:
        return assign(participant, rank, year, winners, now=self._clock())


__all__ = [
    "PrizeDrawEngine",
    "assign",
    "eligible_participants",
    "find_by_token",
    "pick_random",
]
