"""
Tests for next_index: bounds-checked stepping through the word list.
"""

import pytest

from animations.word_cycler import next_index


WORDS = ["A", "B", "C", "D"]


class TestNextIndexBasics:

    def test_steps_forward(self):
        assert next_index(0, WORDS) == 1
        assert next_index(1, WORDS) == 2
        assert next_index(2, WORDS) == 3

    def test_wraps_after_last_word(self):
        assert next_index(3, WORDS) == 0

    def test_full_walk_returns_to_start(self):
        index = 0
        visited = []
        for _ in range(8):
            index = next_index(index, WORDS)
            visited.append(WORDS[index])
        assert visited == ["B", "C", "D", "A", "B", "C", "D", "A"]


class TestNextIndexEdgeCases:

    def test_empty_list_returns_zero(self):
        assert next_index(0, []) == 0
        assert next_index(5, []) == 0

    @pytest.mark.parametrize("current", [0, 1, -1, 42])
    def test_single_word_always_zero(self, current):
        assert next_index(current, ["Only"]) == 0

    @pytest.mark.parametrize("current", [4, 7, 1000])
    def test_out_of_range_heals_to_zero(self, current):
        assert next_index(current, WORDS) == 0

    @pytest.mark.parametrize("current", [-2, -5, -1000])
    def test_negative_heals_to_zero(self, current):
        assert next_index(current, WORDS) == 0

    def test_minus_one_steps_to_first_word(self):
        assert next_index(-1, WORDS) == 0

    def test_result_always_in_range(self):
        for current in range(-20, 20):
            assert 0 <= next_index(current, WORDS) < len(WORDS)

    def test_accepts_tuple(self):
        assert next_index(1, ("x", "y", "z")) == 2
