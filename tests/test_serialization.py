import json
import unittest
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from luckydraw.draw.records import Participant, Winner
from luckydraw.models import Base, ParticipantRow, WinnerRow

NOW = datetime(2024, 12, 24, 18, 30, tzinfo=timezone.utc)


class RecordSerializationTestCase(unittest.TestCase):
    def test_participant_json_uses_camel_case(self):
        participant = Participant(id="5", token_no="T5", name="Eve", phone="123", year="2024")
        self.assertEqual(
            participant.to_json(),
            {"id": "5", "tokenNo": "T5", "name": "Eve", "phone": "123", "year": "2024"},
        )
        self.assertNotIn("id", participant.to_json(include_id=False))
        self.assertEqual(Participant.from_json(json.loads(participant.to_json_str())), participant)

    def test_unsaved_participant_omits_id(self):
        self.assertNotIn("id", Participant(token_no="T", name="N").to_json())

    def test_from_json_coerces_numeric_ids_and_missing_fields(self):
        participant = Participant.from_json({"id": 12, "tokenNo": "T12", "name": "Twelve"})
        self.assertEqual(participant.id, "12")
        self.assertEqual(participant.phone, "")
        self.assertEqual(participant.year, "")

    def test_winner_json(self):
        participant = Participant(id="5", token_no="T5", name="Eve", phone="123", year="2023")
        winner = Winner(id="w1", participant=participant, rank="3rd Prize", year="2024", assigned_at=NOW)
        data = winner.to_json()
        self.assertEqual(data["id"], "w1")
        self.assertEqual(data["participant"]["tokenNo"], "T5")
        self.assertEqual(data["rank"], "3rd Prize")
        self.assertEqual(data["assignedAt"], "2024-12-24T18:30:00+00:00")
        self.assertNotIn("prize", data)
        self.assertEqual(Winner.from_json(json.loads(winner.to_json_str())), winner)

    def test_winner_without_timestamp_is_rejected(self):
        with self.assertRaises(ValueError):
            Winner.from_json({"participant": {}, "rank": "1st Prize", "year": "2024"})


class RowSerializationTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, future=True, expire_on_commit=False)

    def tearDown(self):
        self.engine.dispose()

    def test_participant_row_to_json(self):
        with self.Session() as session:
            row = ParticipantRow(token_no="T1", name="Ann", phone="555", year="2024")
            session.add(row)
            session.flush()

            d = row.to_json()
            self.assertEqual(d["id"], str(row.id))
            self.assertEqual(d["tokenNo"], "T1")
            self.assertIsInstance(d["created_at"], str)
            self.assertIsInstance(d["updated_at"], str)
            self.assertEqual(json.loads(row.to_json_str()), d)

    def test_winner_row_round_trip(self):
        participant = Participant(id="1", token_no="T1", name="Ann", phone="555", year="2024")
        winner = Winner(participant=participant, rank="Special Prize", year="2025", assigned_at=NOW)
        with self.Session() as session:
            row = WinnerRow.from_record(winner)
            session.add(row)
            session.commit()
            row_id = row.id

        with self.Session() as session:
            loaded = session.get(WinnerRow, row_id)
            record = loaded.to_record()
            self.assertEqual(record.id, str(row_id))
            self.assertEqual(record.participant, participant)
            self.assertEqual(record.assigned_at, NOW)
            self.assertEqual(json.loads(loaded.to_json_str())["rank"], "Special Prize")


if __name__ == "__main__":
    unittest.main()
