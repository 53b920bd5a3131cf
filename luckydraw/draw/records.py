"""Value objects exchanged between the draw engine, the stores and the CSV codec."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..db.utils import dt_iso, parse_iso


def _optional_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class Participant:
    """A registrant eligible to win.

    Attributes
    ----------
    id : Optional[str]
        Identifier assigned by the store. ``None`` until the participant
        has been created there.
    token_no : str
        Draw ticket number handed to the participant.
    name : str
        Participant name.
    phone : str
        Contact phone number.
    year : str
        Registration year as a four-digit string. Informational only; it is
        unrelated to the year a prize is awarded for.
    """

    token_no: str
    name: str
    phone: str = ""
    year: str = ""
    id: Optional[str] = None

    def with_id(self, id: Optional[str]) -> "Participant":
        return replace(self, id=id)

    def to_json(self, *, include_id: bool = True) -> dict[str, Any]:
        """Return the camelCase mapping used on the wire."""
        data: dict[str, Any] = {
            "tokenNo": self.token_no,
            "name": self.name,
            "phone": self.phone,
            "year": self.year,
        }
        if include_id and self.id is not None:
            data = {"id": self.id, **data}
        return data

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Participant":
        return cls(
            id=_optional_id(data.get("id")),
            token_no=str(data.get("tokenNo") or ""),
            name=str(data.get("name") or ""),
            phone=str(data.get("phone") or ""),
            year=str(data.get("year") or ""),
        )


@dataclass(frozen=True)
class Winner:
    """A participant awarded a prize rank for a given year.

    ``participant`` is the snapshot taken at assignment time, so editing the
    participant afterwards leaves past winner records unchanged.
    """

    participant: Participant
    rank: str
    year: str
    assigned_at: datetime
    id: Optional[str] = None

    @property
    def participant_id(self) -> Optional[str]:
        return self.participant.id

    def with_id(self, id: Optional[str]) -> "Winner":
        return replace(self, id=id)

    def to_json(self, *, include_id: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "participant": self.participant.to_json(),
            "rank": self.rank,
            "year": self.year,
            "assignedAt": dt_iso(self.assigned_at),
        }
        if include_id and self.id is not None:
            data = {"id": self.id, **data}
        return data

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Winner":
        assigned_at = parse_iso(data.get("assignedAt"))
        if assigned_at is None:
            raise ValueError("Winner payload is missing 'assignedAt'")
        return cls(
            id=_optional_id(data.get("id")),
            participant=Participant.from_json(data.get("participant") or {}),
            rank=str(data.get("rank") or ""),
            year=str(data.get("year") or ""),
            assigned_at=assigned_at,
        )


__all__ = ["Participant", "Winner"]
