"""Prize ranks and selectable draw years."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

FIRST_PRIZE = "1st Prize"
SECOND_PRIZE = "2nd Prize"
THIRD_PRIZE = "3rd Prize"
CONSOLATION_PRIZE = "Consolation Prize"
SPECIAL_PRIZE = "Special Prize"

PRIZE_RANKS: tuple[str, ...] = (
    FIRST_PRIZE,
    SECOND_PRIZE,
    THIRD_PRIZE,
    CONSOLATION_PRIZE,
    SPECIAL_PRIZE,
)
"""All prize ranks, in display order."""

LIMITED_RANKS: frozenset[str] = frozenset({FIRST_PRIZE, SECOND_PRIZE, THIRD_PRIZE})
"""Ranks that at most one winner may hold per year."""

DEFAULT_YEARS: tuple[str, ...] = ("2023", "2024", "2025", "2026", "2027")


def is_limited(rank: str) -> bool:
    """Return ``True`` when ``rank`` admits a single winner per year."""
    return rank in LIMITED_RANKS


def validate_rank(rank: str) -> str:
    """Return ``rank`` unchanged, raising :class:`ValueError` if it is unknown."""
    if rank not in PRIZE_RANKS:
        raise ValueError(
            f"Unknown prize rank {rank!r}; expected one of {', '.join(PRIZE_RANKS)}"
        )
    return rank


def validate_year(year: str) -> str:
    """Return ``year`` unchanged, raising :class:`ValueError` unless it is four digits."""
    if not isinstance(year, str):
        raise TypeError("year must be a string")
    if len(year) != 4 or not year.isdigit():
        raise ValueError(f"year must be a four-digit string, got {year!r}")
    return year


def selectable_years(raw: Optional[str] = None) -> tuple[str, ...]:
    """Return the years operators may draw for.

    Parameters
    ----------
    raw : Optional[str], default: None
        Comma-separated list of years. When omitted, ``LUCKYDRAW_YEARS`` is
        read from the environment (after loading ``.env``) and
        :data:`DEFAULT_YEARS` is used when that is unset or empty.

    Raises
    ------
    ValueError
        If any configured entry is not a four-digit year.
    """
    if raw is None:
        load_dotenv()
        raw = os.getenv("LUCKYDRAW_YEARS", "")

    years = [part.strip() for part in raw.split(",") if part.strip()]
    if not years:
        return DEFAULT_YEARS
    return tuple(validate_year(year) for year in years)


__all__ = [
    "CONSOLATION_PRIZE",
    "DEFAULT_YEARS",
    "FIRST_PRIZE",
    "LIMITED_RANKS",
    "PRIZE_RANKS",
    "SECOND_PRIZE",
    "SPECIAL_PRIZE",
    "THIRD_PRIZE",
    "is_limited",
    "selectable_years",
    "validate_rank",
    "validate_year",
]
