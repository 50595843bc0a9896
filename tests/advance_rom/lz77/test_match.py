"""Tests for the greedy match finder."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from advance_rom.lz77 import Match, find_match
from advance_rom.lz77.constants import MAX_MATCH_LENGTH, WINDOW_SIZE


class TestDegenerateInputs:
    """Positions where no match can be reported."""

    @pytest.mark.parametrize("position", [0, 1])
    def test_first_two_positions(self, position: int) -> None:
        """Nothing is searched before position 2."""
        assert find_match(b"AAAAAA", position) is None

    def test_past_end(self) -> None:
        """Positions at or past the end have no match."""
        assert find_match(b"AAAA", 4) is None
        assert find_match(b"AAAA", 10) is None

    def test_single_trailing_byte(self) -> None:
        """The last byte alone never matches."""
        assert find_match(b"AAAA", 3) is None

    def test_no_candidates(self) -> None:
        """A byte not seen in the window has no match."""
        assert find_match(b"ABCD", 2) is None

    def test_distance_one_is_not_a_candidate(self) -> None:
        """Only the byte directly behind matches, and distance 1 is never proposed."""
        assert find_match(b"BAAC", 2) is None


class TestSelection:
    """Greedy extension and tie-break behavior."""

    def test_self_overlapping_match(self) -> None:
        """'ABABAB' at position 2 extends cyclically to the end of input."""
        assert find_match(b"ABABAB", 2) == Match(length=4, distance=2)

    def test_length_cap(self) -> None:
        """Extension stops at 18 bytes."""
        assert find_match(bytes(64), 2) == Match(length=MAX_MATCH_LENGTH, distance=2)

    def test_failing_candidate_is_dropped(self) -> None:
        """A nearer candidate that stops matching gives way to a farther one."""
        # Candidates at position 5 are distances 2 and 5; only 5 continues.
        assert find_match(b"ABDACABD", 5) == Match(length=3, distance=5)

    def test_simultaneous_failure_keeps_nearest(self) -> None:
        """When every candidate fails at once, the nearest one is reported."""
        assert find_match(b"AXAYAZ", 4) == Match(length=1, distance=2)

    def test_short_match_is_reported(self) -> None:
        """Matches shorter than 3 are returned; the caller decides to skip them."""
        match = find_match(b"ABXAB", 3)
        assert match == Match(length=2, distance=3)

    def test_window_limit(self) -> None:
        """Bytes more than 4096 back are out of reach."""
        data = b"\x00" + bytes(range(1, 256)) * 17
        position = WINDOW_SIZE + 1
        data = data[:position] + b"\x00" + data[position:]

        assert find_match(data, position) is None

    def test_window_edge(self) -> None:
        """A byte exactly 4096 back is still in reach."""
        data = b"\x00\xff" + bytes(range(1, 255)) * 17
        data = data[:WINDOW_SIZE] + b"\x00\xff" + data[WINDOW_SIZE:]

        match = find_match(data, WINDOW_SIZE)
        assert match is not None
        assert match.distance == WINDOW_SIZE


class TestBounds:
    """Properties that hold for every input."""

    @given(st.binary(min_size=1, max_size=300), st.data())
    def test_match_within_limits(self, data: bytes, choice: st.DataObject) -> None:
        """Length and distance stay inside the format limits and the input."""
        position = choice.draw(st.integers(min_value=0, max_value=len(data) - 1))
        match = find_match(data, position)

        if match is not None:
            assert 1 <= match.length <= MAX_MATCH_LENGTH
            assert 2 <= match.distance <= min(WINDOW_SIZE, position)
            assert position + match.length <= len(data)

    @given(st.lists(st.sampled_from(b"AB"), min_size=3, max_size=200).map(bytes), st.data())
    def test_match_is_decodable(self, data: bytes, choice: st.DataObject) -> None:
        """Copying with the cyclic rule reproduces the matched bytes."""
        position = choice.draw(st.integers(min_value=0, max_value=len(data) - 1))
        match = find_match(data, position)

        if match is not None:
            start = position - match.distance
            copied = bytes(data[start + j % match.distance] for j in range(match.length))
            assert copied == data[position : position + match.length]
