"""CSV import/export for participants and winners."""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .db.utils import dt_iso
from .draw.records import Participant, Winner

logger = logging.getLogger(__name__)

PARTICIPANT_HEADERS: tuple[str, ...] = ("tokenNo", "name", "phone", "year")
WINNER_HEADERS: tuple[str, ...] = ("tokenNo", "name", "phone", "rank", "year", "assignedAt")


def _write_rows(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    # Header stays bare; every data value is quoted with inner quotes doubled.
    buffer = io.StringIO()
    buffer.write(",".join(headers))
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        buffer.write("\n")
        writer.writerow(row)
    return buffer.getvalue().rstrip("\n")


def export_participants(participants: Iterable[Participant]) -> str:
    """Serialize participants as CSV text with columns ``tokenNo,name,phone,year``."""
    return _write_rows(
        PARTICIPANT_HEADERS,
        ([p.token_no, p.name, p.phone, p.year] for p in participants),
    )


def export_winners(winners: Iterable[Winner], year: Optional[str] = None) -> str:
    """Serialize winners as CSV text, restricted to ``year`` when given."""
    return _write_rows(
        WINNER_HEADERS,
        (
            [
                w.participant.token_no,
                w.participant.name,
                w.participant.phone,
                w.rank,
                w.year,
                dt_iso(w.assigned_at) or "",
            ]
            for w in winners
            if year is None or w.year == year
        ),
    )


def parse_participants(text: str, *, now: Optional[datetime] = None) -> list[Participant]:
    """Parse CSV text into candidate participants.

    The first line is treated as a header and skipped. Columns are read by
    position (``tokenNo, name, phone, year``) and trimmed. Blank lines are
    ignored, rows without a token number or name are dropped, and a missing
    year defaults to the current one.

    Every participant receives a placeholder id of the form
    ``imported_<epoch-ms>_<row-index>``; the store replaces it on create.

    Raises
    ------
    csv.Error
        If the text is not well-formed CSV.
    """
    moment = now or datetime.now(timezone.utc)
    stamp = int(moment.timestamp() * 1000)
    default_year = str(moment.year)

    reader = csv.reader(io.StringIO(text), strict=True)
    next(reader, None)
    rows = (row for row in reader if any(value.strip() for value in row))

    parsed: list[Participant] = []
    skipped = 0
    for index, row in enumerate(rows):
        values = [value.strip() for value in row] + [""] * 4
        token_no, name, phone, year = values[:4]
        if not token_no or not name:
            skipped += 1
            continue
        parsed.append(
            Participant(
                id=f"imported_{stamp}_{index}",
                token_no=token_no,
                name=name,
                phone=phone,
                year=year or default_year,
            )
        )

    if skipped:
        logger.info("Skipped %d CSV rows without a token number or name", skipped)
    return parsed


def read_participants_file(
    path: Union[str, Path], *, now: Optional[datetime] = None
) -> list[Participant]:
    """Read and parse a participant CSV file (UTF-8, optional BOM)."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_participants(text, now=now)


def write_csv_file(path: Union[str, Path], text: str) -> Path:
    """Write exported CSV ``text`` to ``path``, adding a ``.csv`` suffix if missing."""
    target = Path(path)
    if target.suffix.lower() != ".csv":
        target = target.with_name(target.name + ".csv")
    target.write_text(text, encoding="utf-8")
    logger.debug("Wrote CSV export to %s", target)
    return target


__all__ = [
    "PARTICIPANT_HEADERS",
    "WINNER_HEADERS",
    "export_participants",
    "export_winners",
    "parse_participants",
    "read_participants_file",
    "write_csv_file",
]
