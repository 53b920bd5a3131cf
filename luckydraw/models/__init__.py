from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .participant import ParticipantRow  # noqa: F401
from .winner import WinnerRow  # noqa: F401

__all__ = [
    "Base",
    "ParticipantRow",
    "WinnerRow",
]
