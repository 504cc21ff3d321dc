"""Tests for beacons.tally.compiler: last-response-wins tallying."""

import logging

from beacons.schemas.beacon import Answer, BeaconDefinition, ResponseRecord
from beacons.tally.compiler import compile_results, order_by_submission

ALICE = "@alice:example.org"
BOB = "@bob:example.org"
CAROL = "@carol:example.org"


# ── Factories ──────────────────────────────────────────────────────


def _make_beacon(max_selections: int = 1) -> BeaconDefinition:
    return BeaconDefinition(
        question="Favourite colour?",
        max_selections=max_selections,
        answers=[
            Answer(id="red", text="Red"),
            Answer(id="blue", text="Blue"),
            Answer(id="green", text="Green"),
        ],
    )


def _response(sender: str, ts: int, *selections: str) -> ResponseRecord:
    return ResponseRecord(sender=sender, submitted_at=ts, selections=selections)


# ── Tests ──────────────────────────────────────────────────────────


class TestCompileResults:
    def test_example_scenario(self):
        responses = [
            _response(ALICE, 1, "red"),
            _response(BOB, 2, "blue", "red"),
            _response(ALICE, 3, "blue"),
        ]
        tally = compile_results(_make_beacon(), responses)
        assert tally == {"blue": frozenset({ALICE, BOB})}

    def test_empty_responses(self):
        assert compile_results(_make_beacon(), []) == {}

    def test_zero_vote_answers_absent(self):
        tally = compile_results(_make_beacon(), [_response(ALICE, 1, "green")])
        assert "red" not in tally
        assert "blue" not in tally

    def test_keys_in_ascending_order(self):
        responses = [
            _response(ALICE, 1, "red"),
            _response(BOB, 2, "green"),
            _response(CAROL, 3, "blue"),
        ]
        tally = compile_results(_make_beacon(), responses)
        assert list(tally) == ["blue", "green", "red"]

    def test_accepts_generator(self):
        responses = (_response(s, 1, "red") for s in (ALICE, BOB))
        assert compile_results(_make_beacon(), responses) == {
            "red": frozenset({ALICE, BOB}),
        }


class TestLastResponseWins:
    def test_last_processed_wins(self):
        responses = [_response(ALICE, 1, "red"), _response(ALICE, 2, "blue")]
        assert compile_results(_make_beacon(), responses) == {"blue": frozenset({ALICE})}

    def test_processing_order_beats_timestamps(self):
        responses = [_response(ALICE, 10, "red"), _response(ALICE, 2, "blue")]
        assert compile_results(_make_beacon(), responses) == {"blue": frozenset({ALICE})}

    def test_invalid_response_keeps_previous_vote(self):
        responses = [_response(ALICE, 1, "red"), _response(ALICE, 2, "pink")]
        assert compile_results(_make_beacon(), responses) == {"red": frozenset({ALICE})}

    def test_empty_response_keeps_previous_vote(self):
        responses = [_response(ALICE, 1, "red"), _response(ALICE, 2)]
        assert compile_results(_make_beacon(), responses) == {"red": frozenset({ALICE})}

    def test_order_by_submission_gives_latest_wins(self):
        responses = [_response(ALICE, 10, "red"), _response(ALICE, 2, "blue")]
        tally = compile_results(_make_beacon(), order_by_submission(responses))
        assert tally == {"red": frozenset({ALICE})}


class TestMultiSelect:
    def test_counts_toward_each_selection(self):
        tally = compile_results(
            _make_beacon(max_selections=2), [_response(ALICE, 1, "red", "blue")],
        )
        assert tally == {"blue": frozenset({ALICE}), "red": frozenset({ALICE})}

    def test_duplicate_selection_counts_once(self):
        tally = compile_results(
            _make_beacon(max_selections=2), [_response(ALICE, 1, "red", "red")],
        )
        assert tally == {"red": frozenset({ALICE})}

    def test_extra_selections_truncated(self):
        tally = compile_results(
            _make_beacon(max_selections=2),
            [_response(ALICE, 1, "green", "red", "blue")],
        )
        assert tally == {"green": frozenset({ALICE}), "red": frozenset({ALICE})}


class TestCutoff:
    def test_late_response_ignored(self):
        responses = [_response(ALICE, 5, "red"), _response(BOB, 11, "blue")]
        tally = compile_results(_make_beacon(), responses, cutoff=10)
        assert tally == {"red": frozenset({ALICE})}

    def test_response_at_cutoff_counted(self):
        tally = compile_results(_make_beacon(), [_response(ALICE, 10, "red")], cutoff=10)
        assert tally == {"red": frozenset({ALICE})}

    def test_late_change_does_not_override(self):
        responses = [_response(ALICE, 5, "red"), _response(ALICE, 20, "blue")]
        tally = compile_results(_make_beacon(), responses, cutoff=10)
        assert tally == {"red": frozenset({ALICE})}

    def test_no_cutoff_counts_everything(self):
        responses = [_response(ALICE, 10**13, "red")]
        assert compile_results(_make_beacon(), responses, cutoff=None) == {
            "red": frozenset({ALICE}),
        }


class TestDeterminism:
    def test_idempotent(self):
        beacon = _make_beacon(max_selections=2)
        responses = [
            _response(ALICE, 1, "red", "blue"),
            _response(BOB, 2, "pink"),
            _response(CAROL, 3, "green"),
            _response(BOB, 4, "blue"),
        ]
        first = compile_results(beacon, responses, cutoff=3)
        second = compile_results(beacon, responses, cutoff=3)
        assert first == second
        assert list(first) == list(second)

    def test_inputs_not_mutated(self):
        responses = [_response(ALICE, 1, "red")]
        snapshot = list(responses)
        compile_results(_make_beacon(), responses)
        assert responses == snapshot


class TestOrderBySubmission:
    def test_sorts_oldest_first(self):
        responses = [_response(ALICE, 3, "red"), _response(BOB, 1, "red")]
        assert [r.sender for r in order_by_submission(responses)] == [BOB, ALICE]

    def test_stable_for_equal_timestamps(self):
        responses = [_response(ALICE, 1, "red"), _response(ALICE, 1, "blue")]
        ordered = order_by_submission(responses)
        assert [r.selections for r in ordered] == [("red",), ("blue",)]


class TestLogging:
    def test_skipped_responses_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="beacons.tally.compiler")
        responses = [_response(ALICE, 20, "red"), _response(BOB, 1, "pink")]
        compile_results(_make_beacon(), responses, cutoff=10)
        assert "after cutoff" in caplog.text
        assert "no valid selection" in caplog.text
        assert "2 response(s) skipped" in caplog.text
