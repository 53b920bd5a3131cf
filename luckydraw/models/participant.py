"""Database model for draw participants."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Integer, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ..db.utils import dt_iso
from ..draw.records import Participant
from .base import Base


class ParticipantRow(Base):
    """A participant stored in the local database."""

    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key; exposed to callers as the participant's string id."""

    token_no: Mapped[str] = mapped_column(String(64), nullable=False)
    """Draw ticket number. Uniqueness is left to operators."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    year: Mapped[str] = mapped_column(String(4), nullable=False)
    """Registration year."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_participants_token_no", "token_no"),
        # Never reuse ids: stored winners may still reference deleted participants
        {"sqlite_autoincrement": True},
    )

    def __init__(
        self,
        *,
        token_no: str,
        name: str,
        year: str,
        phone: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        self.token_no = token_no
        self.name = name
        self.phone = phone
        self.year = year
        if created_at is not None:
            self.created_at = created_at
        if updated_at is not None:
            self.updated_at = updated_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return f"<ParticipantRow(id={self.id}, token_no='{self.token_no}')>"

    @classmethod
    def from_record(cls, participant: Participant) -> "ParticipantRow":
        return cls(
            token_no=participant.token_no,
            name=participant.name,
            phone=participant.phone,
            year=participant.year,
        )

    def apply(self, participant: Participant) -> None:
        """Replace every editable field with the values from ``participant``."""
        self.token_no = participant.token_no
        self.name = participant.name
        self.phone = participant.phone
        self.year = participant.year
        self.updated_at = datetime.now(timezone.utc)

    def to_record(self) -> Participant:
        return Participant(
            id=str(self.id),
            token_no=self.token_no,
            name=self.name,
            phone=self.phone,
            year=self.year,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            **self.to_record().to_json(),
            "created_at": dt_iso(self.created_at),
            "updated_at": dt_iso(self.updated_at),
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def get_by_token_no(cls, session: Session, token_no: str) -> Optional["ParticipantRow"]:
        """Return the first participant holding ``token_no``, if any."""
        return session.scalars(
            select(cls).where(cls.token_no == token_no).order_by(cls.id.asc())
        ).first()
