"""Tests for beacons.tally.validation: selection filtering and truncation."""

from beacons.schemas.beacon import Answer, BeaconDefinition
from beacons.tally.validation import validate_selections


def _make_beacon(max_selections: int = 1) -> BeaconDefinition:
    return BeaconDefinition(
        question="Favourite colour?",
        max_selections=max_selections,
        answers=[
            Answer(id="red", text="Red"),
            Answer(id="green", text="Green"),
            Answer(id="blue", text="Blue"),
        ],
    )


class TestValidateSelections:
    def test_single_valid(self):
        assert validate_selections(_make_beacon(), ["red"]) == ["red"]

    def test_unknown_ids_dropped(self):
        beacon = _make_beacon(max_selections=3)
        assert validate_selections(beacon, ["pink", "blue", "cyan"]) == ["blue"]

    def test_no_valid_selection(self):
        assert validate_selections(_make_beacon(), ["pink", "cyan"]) is None

    def test_empty_selection(self):
        assert validate_selections(_make_beacon(), []) is None

    def test_truncated_to_max_selections(self):
        assert validate_selections(_make_beacon(), ["blue", "red"]) == ["blue"]

    def test_earliest_selections_win(self):
        beacon = _make_beacon(max_selections=2)
        assert validate_selections(beacon, ["green", "pink", "red", "blue"]) == [
            "green", "red",
        ]

    def test_order_preserved(self):
        beacon = _make_beacon(max_selections=3)
        assert validate_selections(beacon, ["blue", "red", "green"]) == [
            "blue", "red", "green",
        ]

    def test_duplicates_pass_through(self):
        beacon = _make_beacon(max_selections=3)
        assert validate_selections(beacon, ["red", "red"]) == ["red", "red"]

    def test_explicit_max_overrides_beacon(self):
        beacon = _make_beacon(max_selections=1)
        assert validate_selections(beacon, ["red", "blue"], max_selections=2) == [
            "red", "blue",
        ]

    def test_result_within_bounds(self):
        beacon = _make_beacon(max_selections=2)
        raw = ["red", "x", "green", "blue", "red", "y"]
        result = validate_selections(beacon, raw)
        assert result is not None
        assert len(result) <= beacon.max_selections
        assert set(result) <= beacon.answer_ids
