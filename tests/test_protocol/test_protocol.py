"""
Tests for the delimited text form and the JSON record format.

Run with: python -m pytest tests/test_protocol -v
"""

import json
import sys
import unittest
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dicelib.engine import Die
from dicelib.shared import notation
from dicelib.shared.errors import MalformedInputError, NullOrEmptyInputError
from dicelib.shared.protocol import DiceRecord, DieRecord


class TestParse(unittest.TestCase):
    """Parsing the delimited form."""

    def test_weighted(self):
        die = Die.parse("1,2,3:1,1,2")
        self.assertEqual(die.faces, (1, 2, 3))
        self.assertEqual(die.weights, (1, 1, 2))
        self.assertTrue(die.is_weighted)

    def test_plain(self):
        die = Die.parse("1,2,3")
        self.assertEqual(die.faces, (1, 2, 3))
        self.assertIsNone(die.weights)

    def test_whitespace_trimmed(self):
        die = Die.parse(" 1 , 2 ,3 : 4, 5 ,6 ")
        self.assertEqual(die.faces, (1, 2, 3))
        self.assertEqual(die.weights, (4, 5, 6))

    def test_negative_faces(self):
        self.assertEqual(Die.parse("-3,0,3").faces, (-3, 0, 3))

    def test_single_face(self):
        self.assertEqual(Die.parse("7").faces, (7,))

    def test_single_weight_ignored(self):
        die = Die.parse("5:3")
        self.assertEqual(die.faces, (5,))
        self.assertIsNone(die.weights)

    def test_seed_supplied_separately(self):
        self.assertEqual(Die.parse("1,2,3,4", seed=42).seed, 42)
        self.assertEqual(
            Die.parse("1,2,3,4", seed=42).roll_many(10),
            Die([1, 2, 3, 4], seed=42).roll_many(10),
        )

    def test_null_or_empty(self):
        for text in (None, "", "   ", "\t\n"):
            with self.assertRaises(NullOrEmptyInputError):
                Die.parse(text)

    def test_null_or_empty_is_malformed(self):
        with self.assertRaises(MalformedInputError):
            Die.parse("")

    def test_too_many_sections(self):
        with self.assertRaises(MalformedInputError):
            Die.parse("1,2:1,1:3")

    def test_bad_token(self):
        for text in ("1,a,3", "1,,3", "1.5,2", "1,2:x,y", "1,2:", ":1,2"):
            with self.assertRaises(MalformedInputError):
                Die.parse(text)

    def test_non_ascii_or_underscored_integers(self):
        for text in ("1_0,2", "\u0663,2", "1,2:1_0,1", "\uff11,2"):
            with self.assertRaises(MalformedInputError):
                Die.parse(text)

    def test_signed_values(self):
        self.assertEqual(Die.parse("+1,-2").faces, (1, -2))

    def test_weight_mismatch(self):
        with self.assertRaises(MalformedInputError):
            Die.parse("1,2,3:1,2")

    def test_negative_weight(self):
        with self.assertRaises(MalformedInputError):
            Die.parse("1,2:1,-1")

    def test_zero_weights(self):
        with self.assertRaises(MalformedInputError):
            Die.parse("1,2:0,0")


class TestFormat(unittest.TestCase):
    """Writing the delimited form."""

    def test_plain(self):
        self.assertEqual(str(Die.standard(4)), "1,2,3,4")

    def test_weighted(self):
        self.assertEqual(str(Die.weighted([1, 2, 3], [1, 1, 2])), "1,2,3:1,1,2")

    def test_round_trip(self):
        dice = [
            Die.standard(20, seed=3),
            Die([1, 1, 2, 2, 3, 3]),
            Die([-5, 0, 5, 100]),
            Die.weighted([2, 4, 6, 8], [0, 3, 1, 9]),
        ]
        for die in dice:
            parsed = Die.parse(str(die))
            self.assertEqual(parsed.faces, die.faces)
            self.assertEqual(parsed.weights, die.weights)

    def test_format_face_set(self):
        self.assertEqual(notation.format_face_set(Die.parse("3,1:2,5").face_set), "3,1:2,5")

    def test_seed_not_written(self):
        self.assertNotIn("42", str(Die([1, 2, 3], seed=42)))


class TestDieRecord(unittest.TestCase):
    """JSON record for a single die."""

    def test_round_trip_keeps_seed(self):
        die = Die.weighted([1, 2, 3], [1, 1, 2], seed=42)
        restored = Die.from_json(die.to_json())
        self.assertEqual(restored, die)
        self.assertEqual(restored.weights, (1, 1, 2))
        self.assertEqual(restored.seed, 42)
        self.assertEqual(restored.roll_many(10), Die.weighted([1, 2, 3], [1, 1, 2], seed=42).roll_many(10))

    def test_plain_record(self):
        raw = json.loads(Die.standard(3).to_json())
        self.assertEqual(raw, {"faces": [1, 2, 3], "weights": None, "seed": None})

    def test_seed_optional(self):
        die = Die.from_json('{"faces": [1, 2, 3]}')
        self.assertEqual(die.faces, (1, 2, 3))
        self.assertIsNone(die.seed)
        self.assertIsNone(die.weights)

    def test_indent_parameter(self):
        record = DieRecord(faces=[1, 2], seed=5)
        self.assertNotIn("\n", record.to_json(indent=0))
        self.assertIn('\n    "faces"', record.to_json(indent=4))

    def test_default_indent(self):
        self.assertIn('\n  "faces"', DieRecord(faces=[1, 2]).to_json())

    def test_missing_faces(self):
        with self.assertRaises(MalformedInputError):
            Die.from_json('{"seed": 1}')

    def test_faces_not_integers(self):
        for text in ('{"faces": [1, "a"]}', '{"faces": [true, 2]}', '{"faces": 3}', '{"faces": [1.5]}'):
            with self.assertRaises(MalformedInputError):
                Die.from_json(text)

    def test_bad_seed(self):
        with self.assertRaises(MalformedInputError):
            Die.from_json('{"faces": [1, 2], "seed": "x"}')

    def test_bad_weights(self):
        with self.assertRaises(MalformedInputError):
            Die.from_json('{"faces": [1, 2], "weights": [1, "a"]}')
        with self.assertRaises(MalformedInputError):
            Die.from_json('{"faces": [1, 2], "weights": [1, 2, 3]}')

    def test_not_an_object(self):
        with self.assertRaises(MalformedInputError):
            Die.from_json("[1, 2, 3]")

    def test_invalid_json(self):
        with self.assertRaises(MalformedInputError):
            Die.from_json("{faces: [1, 2]")

    def test_empty_json(self):
        with self.assertRaises(NullOrEmptyInputError):
            DieRecord.from_json("  ")


class TestDiceRecord(unittest.TestCase):
    """JSON record for a collection."""

    def test_round_trip(self):
        record = DiceRecord([DieRecord([1, 2]), DieRecord([1, 2, 3], [1, 1, 1], seed=4)])
        restored = DiceRecord.from_json(record.to_json())
        self.assertEqual(restored, record)

    def test_not_a_list(self):
        with self.assertRaises(MalformedInputError):
            DiceRecord.from_json('{"faces": [1, 2]}')

    def test_bad_entry(self):
        with self.assertRaises(MalformedInputError):
            DiceRecord.from_json('[{"faces": [1, 2]}, {"seed": 3}]')


if __name__ == "__main__":
    unittest.main()
