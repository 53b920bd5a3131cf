"""Database model for recorded prize winners."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ..draw.records import Participant, Winner
from .base import Base


class WinnerRow(Base):
    """A prize awarded to a participant for a given year.

    The participant is stored as a JSON snapshot taken at assignment time
    rather than a foreign key, so editing or deleting the participant later
    leaves this row untouched.
    """

    __tablename__ = "winners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    participant_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    """Id of the participant at assignment time, duplicated out of the snapshot for lookups."""

    participant_snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    """Participant fields (camelCase) as they were when the prize was assigned."""

    rank: Mapped[str] = mapped_column(String(32), nullable=False)

    year: Mapped[str] = mapped_column(String(4), nullable=False)
    """Award year."""

    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_winners_year_rank", "year", "rank"),
        Index("ix_winners_participant_year", "participant_id", "year"),
        {"sqlite_autoincrement": True},
    )

    def __init__(
        self,
        *,
        participant_snapshot: dict[str, Any],
        rank: str,
        year: str,
        assigned_at: datetime,
        participant_id: Optional[str] = None,
    ) -> None:
        self.participant_snapshot = participant_snapshot
        self.participant_id = participant_id
        self.rank = rank
        self.year = year
        self.assigned_at = assigned_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<WinnerRow(id={self.id}, participant_id={self.participant_id}, "
            f"rank='{self.rank}', year='{self.year}')>"
        )

    @classmethod
    def from_record(cls, winner: Winner) -> "WinnerRow":
        return cls(
            participant_snapshot=winner.participant.to_json(),
            participant_id=winner.participant_id,
            rank=winner.rank,
            year=winner.year,
            assigned_at=winner.assigned_at,
        )

    def to_record(self) -> Winner:
        assigned_at = self.assigned_at
        # SQLite hands back naive datetimes even for timezone-aware columns.
        if assigned_at.tzinfo is None:
            assigned_at = assigned_at.replace(tzinfo=timezone.utc)
        return Winner(
            id=str(self.id),
            participant=Participant.from_json(self.participant_snapshot),
            rank=self.rank,
            year=self.year,
            assigned_at=assigned_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.to_record().to_json()

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def list_for_year(cls, session: Session, year: str) -> list["WinnerRow"]:
        """Return winners of ``year`` in assignment order."""
        stmt = (
            select(cls)
            .where(cls.year == year)
            .order_by(cls.assigned_at.asc(), cls.id.asc())
        )
        return list(session.scalars(stmt).all())

    @classmethod
    def list_for_participant(cls, session: Session, participant_id: str) -> list["WinnerRow"]:
        """Return every winner row recorded for ``participant_id``."""
        stmt = select(cls).where(cls.participant_id == participant_id).order_by(cls.id.asc())
        return list(session.scalars(stmt).all())
