from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .csv_codec import parse_participants
from .draw.engine import PrizeDrawEngine
from .draw.outcomes import AssignmentResult, SelectionResult
from .draw.ranks import PRIZE_RANKS, selectable_years
from .draw.records import Participant, Winner
from .stores import ParticipantStore, WinnerStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawSnapshot:
    """Participants and winners as last fetched from the stores.

    Snapshots are immutable; every mutation helper returns a new snapshot.
    """

    participants: tuple[Participant, ...] = field(default_factory=tuple)
    winners: tuple[Winner, ...] = field(default_factory=tuple)

    def with_participant(self, participant: Participant) -> "DrawSnapshot":
        return DrawSnapshot(self.participants + (participant,), self.winners)

    def replacing_participant(self, participant: Participant) -> "DrawSnapshot":
        participants = tuple(
            participant if p.id == participant.id else p for p in self.participants
        )
        return DrawSnapshot(participants, self.winners)

    def without_participant(self, participant_id: str) -> "DrawSnapshot":
        """Drop the participant and every winner record that references it."""
        return DrawSnapshot(
            tuple(p for p in self.participants if p.id != participant_id),
            tuple(w for w in self.winners if w.participant_id != participant_id),
        )

    def with_winner(self, winner: Winner) -> "DrawSnapshot":
        return DrawSnapshot(self.participants, self.winners + (winner,))

    def without_winner(self, winner_id: str) -> "DrawSnapshot":
        return DrawSnapshot(
            self.participants, tuple(w for w in self.winners if w.id != winner_id)
        )


def load_snapshot(
    participant_store: ParticipantStore, winner_store: WinnerStore
) -> DrawSnapshot:
    """Fetch the full participant and winner lists."""
    snapshot = DrawSnapshot(
        participants=tuple(participant_store.list()),
        winners=tuple(winner_store.list()),
    )
    logger.debug(
        "Loaded %d participants and %d winners",
        len(snapshot.participants),
        len(snapshot.winners),
    )
    return snapshot


def add_participant(
    store: ParticipantStore, snapshot: DrawSnapshot, participant: Participant
) -> tuple[Participant, DrawSnapshot]:
    """Create ``participant`` in the store and append the stored copy to the snapshot.

    Any id already on ``participant`` (e.g. a CSV placeholder) is discarded;
    the store assigns the real one.
    """
    created = store.create(participant.with_id(None))
    return created, snapshot.with_participant(created)


def edit_participant(
    store: ParticipantStore, snapshot: DrawSnapshot, participant: Participant
) -> tuple[Participant, DrawSnapshot]:
    """Replace a participant in the store and in the snapshot.

    Existing winner records keep the participant snapshot taken when they
    were assigned.
    """
    updated = store.update(participant)
    return updated, snapshot.replacing_participant(updated)


def delete_participant(
    participant_store: ParticipantStore,
    snapshot: DrawSnapshot,
    participant_id: str,
    *,
    winner_store: Optional[WinnerStore] = None,
    purge_winners: bool = False,
) -> DrawSnapshot:
    """Delete a participant and drop their winner records from the snapshot.

    Parameters
    ----------
    participant_store : ParticipantStore
        Store the participant is deleted from.
    snapshot : DrawSnapshot
        Current view; the returned snapshot no longer contains the
        participant nor any winner referencing it.
    participant_id : str
        Id of the participant to delete.
    winner_store : Optional[WinnerStore], default: None
        Required when ``purge_winners`` is set.
    purge_winners : bool, default: False
        Also delete the participant's winner records from ``winner_store``.
        The two deletions are not transactional: a failure part-way leaves
        the participant deleted and some winners in place.

    Raises
    ------
    ValueError
        If ``purge_winners`` is set without a ``winner_store``.
    """
    if purge_winners and winner_store is None:
        raise ValueError("winner_store is required when purge_winners is set")

    participant_store.delete(participant_id)
    if purge_winners and winner_store is not None:
        for winner in snapshot.winners:
            if winner.participant_id == participant_id and winner.id is not None:
                winner_store.delete(winner.id)
    return snapshot.without_participant(participant_id)


def _check_draw_year(year: str, years: Optional[Sequence[str]]) -> None:
    allowed = selectable_years() if years is None else tuple(years)
    if year not in allowed:
        raise ValueError(
            f"{year!r} is not an open draw year; expected one of {', '.join(allowed)}"
        )


def search_participant(
    snapshot: DrawSnapshot,
    token_query: str,
    *,
    engine: Optional[PrizeDrawEngine] = None,
) -> SelectionResult:
    return (engine or PrizeDrawEngine()).find_by_token(snapshot.participants, token_query)


def random_participant(
    snapshot: DrawSnapshot,
    year: str,
    *,
    engine: Optional[PrizeDrawEngine] = None,
    years: Optional[Sequence[str]] = None,
) -> SelectionResult:
    _check_draw_year(year, years)
    return (engine or PrizeDrawEngine()).pick_random(
        snapshot.participants, snapshot.winners, year
    )


def assign_winner(
    store: WinnerStore,
    snapshot: DrawSnapshot,
    participant: Optional[Participant],
    rank: str,
    year: str,
    *,
    engine: Optional[PrizeDrawEngine] = None,
    years: Optional[Sequence[str]] = None,
) -> tuple[AssignmentResult, DrawSnapshot]:
    """Check an assignment against the snapshot and persist it when legal.

    Returns
    -------
    tuple[AssignmentResult, DrawSnapshot]
        On success the result carries the stored winner (with its id) and the
        snapshot includes it. On failure the result carries the reason and the
        original snapshot is returned; nothing is written to ``store``.

    Raises
    ------
    ValueError
        If ``year`` is not one of ``years``. The configured
        :func:`~luckydraw.draw.ranks.selectable_years` are used when
        ``years`` is omitted.

    Notes
    -----
    The check only sees ``snapshot``. Refresh it first when other operators
    may be assigning at the same time; the store has the final word.
    """
    _check_draw_year(year, years)
    engine = engine or PrizeDrawEngine()
    result = engine.assign(participant, rank, year, snapshot.winners)
    if not result.ok or result.winner is None:
        logger.warning("Rejected %s for %s: %s", rank, year, result.message)
        return result, snapshot

    stored = store.create(result.winner)
    logger.info(
        "Assigned %s for %s to token %s", rank, year, stored.participant.token_no
    )
    return AssignmentResult(rank=rank, year=year, winner=stored), snapshot.with_winner(stored)


def delete_winner(store: WinnerStore, snapshot: DrawSnapshot, winner_id: str) -> DrawSnapshot:
    store.delete(winner_id)
    return snapshot.without_winner(winner_id)


def import_participants_csv(
    store: ParticipantStore, snapshot: DrawSnapshot, text: str
) -> tuple[list[Participant], DrawSnapshot]:
    """Parse CSV ``text`` and create each participant through ``store``.

    Parsing completes before anything is written, so malformed CSV leaves
    the store untouched.

    Rows are created one at a time and not rolled back. If ``store.create``
    raises partway through, the rows created so far stay in the store and the
    exception propagates without a snapshot; call :func:`load_snapshot` again
    before continuing.
    """
    created: list[Participant] = []
    for candidate in parse_participants(text):
        participant, snapshot = add_participant(store, snapshot, candidate)
        created.append(participant)
    logger.info("Imported %d participants from CSV", len(created))
    return created, snapshot


def filter_participants(
    participants: Iterable[Participant],
    search: str = "",
    year: Optional[str] = None,
) -> list[Participant]:
    """Return participants whose token number or name contains ``search``
    (case-insensitive) and, when ``year`` is given, registered in that year."""
    needle = search.lower()
    return [
        p
        for p in participants
        if (needle in p.token_no.lower() or needle in p.name.lower())
        and (not year or p.year == year)
    ]


def winners_for_year(winners: Iterable[Winner], year: str) -> list[Winner]:
    return [w for w in winners if w.year == year]


def winners_by_rank(winners: Iterable[Winner], year: str) -> dict[str, list[Winner]]:
    """Group the winners of ``year`` by rank, with every rank present in display order."""
    grouped: dict[str, list[Winner]] = {rank: [] for rank in PRIZE_RANKS}
    for winner in winners_for_year(winners, year):
        grouped.setdefault(winner.rank, []).append(winner)
    return grouped


def recent_winners(winners: Sequence[Winner], limit: int = 5) -> list[Winner]:
    """Return the last ``limit`` winners, newest first."""
    if limit <= 0:
        return []
    return list(reversed(winners[-limit:]))
