from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import func, inspect, select

from luckydraw.db.engine import get_sessionmaker, make_engine
from luckydraw.models import ParticipantRow, WinnerRow


def upgrade_db(target_revision: str = "head") -> None:
    """Apply Alembic migrations up to the requested revision."""
    project_root = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    command.upgrade(alembic_cfg, target_revision)


def print_summary() -> None:
    """Print the tables present and how many participants and winners they hold."""
    engine = make_engine()
    print("Current tables:", ", ".join(sorted(inspect(engine).get_table_names())))
    Session = get_sessionmaker(engine)
    with Session() as session:
        participants = session.scalar(select(func.count()).select_from(ParticipantRow))
        winners = session.scalar(select(func.count()).select_from(WinnerRow))
    print(f"Participants: {participants}, winners: {winners}")


def main() -> None:
    upgrade_db()
    print_summary()


if __name__ == "__main__":
    main()
