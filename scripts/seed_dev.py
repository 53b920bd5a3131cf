import logging
import random

from luckydraw.db.engine import get_sessionmaker, make_engine, reset_schema
from luckydraw.draw import PrizeDrawEngine
from luckydraw.draw.ranks import CONSOLATION_PRIZE, FIRST_PRIZE, SECOND_PRIZE
from luckydraw.draw.records import Participant
from luckydraw.stores import SqlParticipantStore, SqlWinnerStore
from luckydraw.workflows import (
    DrawSnapshot,
    add_participant,
    assign_winner,
    random_participant,
)

SAMPLE_PARTICIPANTS = [
    ("T100", "Alice Tan", "555-0100", "2024"),
    ("T101", "Bob Lee", "555-0101", "2024"),
    ("T102", "Chitra Nair", "555-0102", "2024"),
    ("T103", "Daniel Ortiz", "555-0103", "2025"),
    ("T104", "Emi Sato", "555-0104", "2025"),
    ("T105", "Farid Haddad", "555-0105", "2025"),
]


def main() -> None:
    """Reset the development database and seed sample participants and winners."""
    logging.basicConfig(level=logging.INFO)
    engine = make_engine()
    reset_schema(engine)
    Session = get_sessionmaker(engine)

    draw_engine = PrizeDrawEngine(rng=random.Random(2024))
    with Session.begin() as session:
        participants = SqlParticipantStore(session)
        winners = SqlWinnerStore(session)

        snapshot = DrawSnapshot()
        for token_no, name, phone, year in SAMPLE_PARTICIPANTS:
            _, snapshot = add_participant(
                participants,
                snapshot,
                Participant(token_no=token_no, name=name, phone=phone, year=year),
            )

        for rank in (FIRST_PRIZE, SECOND_PRIZE, CONSOLATION_PRIZE):
            pick = random_participant(snapshot, "2024", engine=draw_engine)
            _, snapshot = assign_winner(
                winners, snapshot, pick.participant, rank, "2024", engine=draw_engine
            )

    print(
        f"Seeded {len(snapshot.participants)} participants and "
        f"{len(snapshot.winners)} winners"
    )


if __name__ == "__main__":
    main()
