from __future__ import annotations

import random
import unittest
from collections import Counter
from datetime import datetime, timezone

from luckydraw.draw import (
    DrawFailure,
    Participant,
    PrizeDrawEngine,
    Winner,
    assign,
    eligible_participants,
    find_by_token,
    pick_random,
)
from luckydraw.draw.ranks import (
    CONSOLATION_PRIZE,
    FIRST_PRIZE,
    LIMITED_RANKS,
    PRIZE_RANKS,
    SECOND_PRIZE,
    SPECIAL_PRIZE,
    THIRD_PRIZE,
)

NOW = datetime(2024, 12, 24, 18, 30, tzinfo=timezone.utc)


def make_participants(count: int, year: str = "2024") -> list[Participant]:
    return [
        Participant(
            id=str(i),
            token_no=f"T{100 + i}",
            name=f"Person {i}",
            phone=f"555-01{i:02d}",
            year=year,
        )
        for i in range(1, count + 1)
    ]


def persisted(winner: Winner, winner_id: str) -> Winner:
    return winner.with_id(winner_id)


class FindByTokenTests(unittest.TestCase):
    def setUp(self) -> None:
        self.participants = make_participants(3)

    def test_trims_query_before_matching(self) -> None:
        result = find_by_token(self.participants, "  T101  ")
        self.assertTrue(result.ok)
        self.assertEqual(result.participant, self.participants[0])

    def test_match_is_case_sensitive(self) -> None:
        result = find_by_token(self.participants, "t101")
        self.assertFalse(result.ok)
        self.assertIs(result.failure, DrawFailure.NOT_FOUND)
        self.assertIsNone(result.participant)
        self.assertEqual(result.message, "Participant not found with this token number")

    def test_no_partial_match(self) -> None:
        self.assertIs(find_by_token(self.participants, "T10").failure, DrawFailure.NOT_FOUND)

    def test_returns_first_of_duplicate_tokens(self) -> None:
        duplicate = Participant(id="99", token_no="T101", name="Second holder")
        result = find_by_token(self.participants + [duplicate], "T101")
        self.assertEqual(result.participant.id, "1")

    def test_empty_roster(self) -> None:
        self.assertIs(find_by_token([], "T101").failure, DrawFailure.NOT_FOUND)


class PickRandomTests(unittest.TestCase):
    def test_never_returns_participant_who_won_that_year(self) -> None:
        participants = make_participants(4)
        winners = [
            Winner(participant=participants[0], rank=FIRST_PRIZE, year="2024", assigned_at=NOW, id="w1"),
            Winner(participant=participants[2], rank=CONSOLATION_PRIZE, year="2024", assigned_at=NOW, id="w2"),
        ]
        rng = random.Random(7)
        for _ in range(200):
            result = pick_random(participants, winners, "2024", rng=rng)
            self.assertTrue(result.ok)
            self.assertIn(result.participant.id, {"2", "4"})

    def test_winners_of_other_years_stay_eligible(self) -> None:
        participants = make_participants(1)
        winners = [Winner(participant=participants[0], rank=FIRST_PRIZE, year="2023", assigned_at=NOW)]
        result = pick_random(participants, winners, "2024", rng=random.Random(1))
        self.assertEqual(result.participant, participants[0])

    def test_everyone_won_reports_no_eligible(self) -> None:
        participants = make_participants(2)
        winners = [
            Winner(participant=p, rank=SPECIAL_PRIZE, year="2024", assigned_at=NOW)
            for p in participants
        ]
        result = pick_random(participants, winners, "2024")
        self.assertIs(result.failure, DrawFailure.NO_ELIGIBLE_PARTICIPANTS)
        self.assertEqual(result.message, "No available participants for random selection")

    def test_empty_roster_reports_no_eligible(self) -> None:
        self.assertIs(pick_random([], [], "2024").failure, DrawFailure.NO_ELIGIBLE_PARTICIPANTS)

    def test_pick_is_roughly_uniform(self) -> None:
        participants = make_participants(4)
        rng = random.Random(12345)
        counts = Counter(
            pick_random(participants, [], "2024", rng=rng).participant.id for _ in range(4000)
        )
        self.assertEqual(set(counts), {"1", "2", "3", "4"})
        for count in counts.values():
            self.assertGreater(count, 850)
            self.assertLess(count, 1150)

    def test_does_not_mutate_inputs(self) -> None:
        participants = make_participants(3)
        winners: list[Winner] = []
        pick_random(participants, winners, "2024", rng=random.Random(3))
        self.assertEqual(len(participants), 3)
        self.assertEqual(winners, [])

    def test_eligible_participants_filters_by_year(self) -> None:
        participants = make_participants(3)
        winners = [Winner(participant=participants[1], rank=SECOND_PRIZE, year="2025", assigned_at=NOW)]
        self.assertEqual(
            [p.id for p in eligible_participants(participants, winners, "2025")],
            ["1", "3"],
        )


class AssignTests(unittest.TestCase):
    def setUp(self) -> None:
        self.participants = make_participants(6)

    def test_success_builds_unsaved_winner_with_snapshot(self) -> None:
        participant = self.participants[0]
        result = assign(participant, FIRST_PRIZE, "2024", [], now=NOW)
        self.assertTrue(result.ok)
        self.assertIsNone(result.failure)
        winner = result.winner
        self.assertIsNotNone(winner)
        self.assertIsNone(winner.id)
        self.assertEqual(winner.participant, participant)
        self.assertEqual(winner.rank, FIRST_PRIZE)
        self.assertEqual(winner.year, "2024")
        self.assertEqual(winner.assigned_at, NOW)

    def test_default_timestamp_is_current_utc(self) -> None:
        before = datetime.now(timezone.utc)
        winner = assign(self.participants[0], SPECIAL_PRIZE, "2024", []).winner
        after = datetime.now(timezone.utc)
        self.assertLessEqual(before, winner.assigned_at)
        self.assertLessEqual(winner.assigned_at, after)

    def test_missing_participant_reports_no_selection(self) -> None:
        result = assign(None, FIRST_PRIZE, "2024", [])
        self.assertIs(result.failure, DrawFailure.NO_SELECTION)
        self.assertIsNone(result.winner)
        self.assertEqual(result.message, "Please select a participant first")

    def test_no_selection_reported_before_rank_and_year_validation(self) -> None:
        result = assign(None, "Grand Prize", "24", [])
        self.assertIs(result.failure, DrawFailure.NO_SELECTION)
        self.assertIsNone(result.winner)

    def test_limited_rank_taken_by_someone_else(self) -> None:
        for rank in sorted(LIMITED_RANKS):
            first = assign(self.participants[0], rank, "2024", [], now=NOW)
            winners = [persisted(first.winner, "w1")]
            second = assign(self.participants[1], rank, "2024", winners, now=NOW)
            self.assertIs(second.failure, DrawFailure.RANK_ALREADY_ASSIGNED, rank)
            self.assertEqual(second.message, f"{rank} has already been assigned for 2024")

    def test_participant_already_won_that_year(self) -> None:
        for held_rank in PRIZE_RANKS:
            first = assign(self.participants[0], held_rank, "2024", [], now=NOW)
            winners = [persisted(first.winner, "w1")]
            for rank in PRIZE_RANKS:
                result = assign(self.participants[0], rank, "2024", winners, now=NOW)
                self.assertIs(result.failure, DrawFailure.DUPLICATE_PARTICIPANT_IN_YEAR)
                self.assertEqual(result.held_rank, held_rank)
                self.assertEqual(
                    result.message,
                    f'This participant has already won "{held_rank}" in 2024',
                )

    def test_duplicate_participant_checked_before_rank(self) -> None:
        winners = [
            Winner(participant=self.participants[0], rank=SECOND_PRIZE, year="2024", assigned_at=NOW, id="w1"),
            Winner(participant=self.participants[1], rank=FIRST_PRIZE, year="2024", assigned_at=NOW, id="w2"),
        ]
        result = assign(self.participants[0], FIRST_PRIZE, "2024", winners, now=NOW)
        self.assertIs(result.failure, DrawFailure.DUPLICATE_PARTICIPANT_IN_YEAR)
        self.assertEqual(result.held_rank, SECOND_PRIZE)

    def test_unlimited_ranks_accept_many_winners(self) -> None:
        for rank in (CONSOLATION_PRIZE, SPECIAL_PRIZE):
            winners: list[Winner] = []
            for index, participant in enumerate(self.participants[:5]):
                result = assign(participant, rank, "2024", winners, now=NOW)
                self.assertTrue(result.ok, f"{rank} #{index}")
                winners.append(persisted(result.winner, f"w{index}"))
            self.assertEqual(len(winners), 5)

    def test_same_participant_wins_in_other_years(self) -> None:
        participant = self.participants[0]
        winners = [Winner(participant=participant, rank=FIRST_PRIZE, year="2024", assigned_at=NOW, id="w1")]
        result = assign(participant, FIRST_PRIZE, "2025", winners, now=NOW)
        self.assertTrue(result.ok)
        result = assign(participant, THIRD_PRIZE, "2026", winners, now=NOW)
        self.assertTrue(result.ok)

    def test_unknown_rank_raises(self) -> None:
        with self.assertRaises(ValueError):
            assign(self.participants[0], "Grand Prize", "2024", [])

    def test_malformed_year_raises(self) -> None:
        with self.assertRaises(ValueError):
            assign(self.participants[0], FIRST_PRIZE, "24", [])
        with self.assertRaises(ValueError):
            pick_random(self.participants, [], "next year")

    def test_scenario_from_single_participant_roster(self) -> None:
        p1 = Participant(id="1", token_no="A1", name="Asha", year="2024")
        p2 = Participant(id="2", token_no="A2", name="Ben", year="2024")
        winners: list[Winner] = []

        first = assign(p1, FIRST_PRIZE, "2024", winners, now=NOW)
        self.assertTrue(first.ok)
        self.assertEqual(first.winner.rank, FIRST_PRIZE)
        self.assertEqual(first.winner.year, "2024")
        winners.append(persisted(first.winner, "w1"))

        self.assertIs(
            assign(p1, SECOND_PRIZE, "2024", winners).failure,
            DrawFailure.DUPLICATE_PARTICIPANT_IN_YEAR,
        )
        self.assertIs(
            assign(p2, FIRST_PRIZE, "2024", winners).failure,
            DrawFailure.RANK_ALREADY_ASSIGNED,
        )
        self.assertTrue(assign(p1, FIRST_PRIZE, "2025", winners).ok)


class PrizeDrawEngineTests(unittest.TestCase):
    def test_engine_uses_bound_clock_and_rng(self) -> None:
        participants = make_participants(5)
        engine_a = PrizeDrawEngine(rng=random.Random(42), clock=lambda: NOW)
        engine_b = PrizeDrawEngine(rng=random.Random(42), clock=lambda: NOW)

        picks_a = [engine_a.pick_random(participants, [], "2024").participant.id for _ in range(10)]
        picks_b = [engine_b.pick_random(participants, [], "2024").participant.id for _ in range(10)]
        self.assertEqual(picks_a, picks_b)

        result = engine_a.assign(participants[0], FIRST_PRIZE, "2024", [])
        self.assertEqual(result.winner.assigned_at, NOW)

    def test_engine_find_by_token(self) -> None:
        participants = make_participants(2)
        result = PrizeDrawEngine().find_by_token(participants, "T102 ")
        self.assertEqual(result.participant.id, "2")


if __name__ == "__main__":
    unittest.main()
