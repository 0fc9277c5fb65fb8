"""
Resistance Duration Tests
"""

from tarot.calc.durations import (
    compute_resistance_durations,
    duration_dice,
    duration_lines,
    duration_notation,
)


class TestComputeDurations:

    def test_tally_per_type(self):
        assert compute_resistance_durations(["acid", "cold", "acid"]) == {"acid": 2, "cold": 1}

    def test_first_selected_order(self):
        durations = compute_resistance_durations(["fire", "acid", "fire"])
        assert list(durations) == ["fire", "acid"]

    def test_empty(self):
        assert compute_resistance_durations([]) == {}

    def test_total_equals_selections(self):
        selections = ["force", "poison", "force", "radiant", "force"]
        assert sum(compute_resistance_durations(selections).values()) == len(selections)


class TestDurationNotation:

    def test_single_selection_keeps_highest(self):
        assert duration_notation(1) == "1d12kh1"
        assert duration_dice(1).keep_highest_one

    def test_multiple_selections_sum(self):
        assert duration_notation(3) == "3d12"
        assert not duration_dice(3).keep_highest_one

    def test_lines(self):
        assert duration_lines({"acid": 2, "cold": 1}) == [
            "Acid: 2d12 days",
            "Cold: 1d12kh1 days",
        ]
