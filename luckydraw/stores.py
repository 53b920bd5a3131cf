"""Participant and winner stores.

The draw workflows only talk to the two small interfaces below. The HTTP
implementations front the remote lucky-draw backend; the SQL implementations
keep the same data in a local SQLAlchemy database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from .draw.records import Participant, Winner
from .models import ParticipantRow, WinnerRow

if TYPE_CHECKING:
    from .api.client import LuckyDrawClient

logger = logging.getLogger(__name__)


class ParticipantStore(Protocol):
    """Persistence interface for participants."""

    def list(self) -> list[Participant]:
        """Return every stored participant."""
        ...

    def create(self, participant: Participant) -> Participant:
        """Store a participant that has no id yet and return it with its new id."""
        ...

    def update(self, participant: Participant) -> Participant:
        """Replace the stored participant carrying the same id."""
        ...

    def delete(self, participant_id: str) -> None:
        """Delete the participant with ``participant_id``."""
        ...


class WinnerStore(Protocol):
    """Persistence interface for winners."""

    def list(self) -> list[Winner]:
        """Return every stored winner."""
        ...

    def create(self, winner: Winner) -> Winner:
        """Store a winner that has no id yet and return it with its new id."""
        ...

    def delete(self, winner_id: str) -> None:
        """Delete the winner with ``winner_id``."""
        ...


def _require_new(record: Participant | Winner) -> None:
    if record.id is not None:
        raise ValueError("Record already has an id; it cannot be created again")


def _require_id(record: Participant) -> str:
    if record.id is None:
        raise ValueError("Participant must have an id to be updated")
    return record.id


class HttpParticipantStore:
    """:class:`ParticipantStore` backed by the remote backend."""

    def __init__(self, client: "LuckyDrawClient") -> None:
        self._client = client

    def list(self) -> list[Participant]:
        return [Participant.from_json(item) for item in self._client.list_participants()]

    def create(self, participant: Participant) -> Participant:
        _require_new(participant)
        created = self._client.create_participant(participant.to_json(include_id=False))
        return Participant.from_json(created)

    def update(self, participant: Participant) -> Participant:
        participant_id = _require_id(participant)
        updated = self._client.update_participant(participant_id, participant.to_json())
        return Participant.from_json(updated)

    def delete(self, participant_id: str) -> None:
        self._client.delete_participant(participant_id)


class HttpWinnerStore:
    """:class:`WinnerStore` backed by the remote backend."""

    def __init__(self, client: "LuckyDrawClient") -> None:
        self._client = client

    def list(self) -> list[Winner]:
        return [Winner.from_json(item) for item in self._client.list_winners()]

    def create(self, winner: Winner) -> Winner:
        _require_new(winner)
        created = self._client.create_winner(winner.to_json(include_id=False))
        return Winner.from_json(created)

    def delete(self, winner_id: str) -> None:
        self._client.delete_winner(winner_id)


def _row_id(raw_id: str) -> int:
    try:
        return int(raw_id)
    except (TypeError, ValueError) as exc:
        raise LookupError(f"No stored record with id {raw_id!r}") from exc


class SqlParticipantStore:
    """:class:`ParticipantStore` over a SQLAlchemy session.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list(self) -> list[Participant]:
        rows = self._session.scalars(select(ParticipantRow).order_by(ParticipantRow.id.asc()))
        return [row.to_record() for row in rows]

    def create(self, participant: Participant) -> Participant:
        _require_new(participant)
        row = ParticipantRow.from_record(participant)
        self._session.add(row)
        self._session.flush()
        logger.debug("Stored participant %s as id %s", row.token_no, row.id)
        return row.to_record()

    def update(self, participant: Participant) -> Participant:
        row = self._get(_require_id(participant))
        row.apply(participant)
        self._session.flush()
        return row.to_record()

    def delete(self, participant_id: str) -> None:
        self._session.delete(self._get(participant_id))
        self._session.flush()

    def _get(self, participant_id: str) -> ParticipantRow:
        row = self._session.get(ParticipantRow, _row_id(participant_id))
        if row is None:
            raise LookupError(f"No participant with id {participant_id!r}")
        return row


class SqlWinnerStore:
    """:class:`WinnerStore` over a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list(self) -> list[Winner]:
        stmt = select(WinnerRow).order_by(WinnerRow.assigned_at.asc(), WinnerRow.id.asc())
        return [row.to_record() for row in self._session.scalars(stmt)]

    def create(self, winner: Winner) -> Winner:
        _require_new(winner)
        row = WinnerRow.from_record(winner)
        self._session.add(row)
        self._session.flush()
        return row.to_record()

    def delete(self, winner_id: str) -> None:
        row = self._session.get(WinnerRow, _row_id(winner_id))
        if row is None:
            raise LookupError(f"No winner with id {winner_id!r}")
        self._session.delete(row)
        self._session.flush()


__all__ = [
    "HttpParticipantStore",
    "HttpWinnerStore",
    "ParticipantStore",
    "SqlParticipantStore",
    "SqlWinnerStore",
    "WinnerStore",
]
