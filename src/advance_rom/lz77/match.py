"""
Match search for the LZ77 compressor.

For each write position the compressor asks: "does the data starting here
already appear somewhere in the last 4096 bytes?" This module answers that.


HOW THE SEARCH WORKS
--------------------
The search is greedy and runs in two phases.

  1. COLLECT: walk back through the window and keep every distance whose
     byte equals the byte at the current position. Distances are collected
     nearest first.

  2. EXTEND: grow the match one byte at a time. At each step, every
     surviving candidate is checked against the next input byte. Candidates
     that fail are dropped, newest-collected first, until only one is left.
     When the last candidate fails, the match stops growing.

The surviving candidate at the front of the list wins. This is not the
longest or nearest match in general; the result depends on collection order.
It is kept exactly so that compressed output stays byte-identical with
existing assets.


SELF-REFERENCE
--------------
A candidate may overlap the bytes it is about to produce. The comparison
uses the same cyclic index as the decoder:

    buffer[position + n]  vs  buffer[position - distance + (n mod distance)]

Example: "ABABAB" at position 2, distance 2

    n = 1: buffer[3] = 'B' vs buffer[0 + 1] = 'B'  -> match
    n = 2: buffer[4] = 'A' vs buffer[0 + 0] = 'A'  -> match
    n = 3: buffer[5] = 'B' vs buffer[0 + 1] = 'B'  -> match
    n = 4: end of buffer                           -> stop

    Result: length 4, distance 2.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MAX_MATCH_LENGTH, MIN_MATCH_DISTANCE, WINDOW_SIZE


@dataclass(frozen=True, slots=True)
class Match:
    """A candidate back-reference at a given write position."""

    length: int
    """Number of bytes the match covers (1-18)."""

    distance: int
    """How far back the match starts (2-4096)."""


def find_match(buffer: bytes, position: int) -> Match | None:
    """Find the greedy match for the bytes starting at position.

    Args:
        buffer: The complete raw input.
        position: Current write position in buffer.

    Returns:
        The chosen match, or None if no earlier byte matches.
        A returned match may be shorter than 3 bytes; the caller decides
        whether it is worth a back-reference.
    """
    end = len(buffer)

    # Degenerate positions.
    #
    # The first two bytes have nothing useful behind them, and a single
    # trailing byte cannot form a back-reference.
    if position >= end or position < MIN_MATCH_DISTANCE or end - position < 2:
        return None

    candidates = _collect_candidates(buffer, position)
    if not candidates:
        return None

    length = _extend_candidates(buffer, position, candidates)
    return Match(length=length, distance=candidates[0])


def _collect_candidates(buffer: bytes, position: int) -> list[int]:
    """Collect every distance whose byte equals the byte at position.

    Args:
        buffer: The complete raw input.
        position: Current write position.

    Returns:
        Candidate distances in ascending order (nearest first).

    Distances run from 2 up to min(4096, position), so a candidate never
    reaches before the start of the buffer.
    """
    first = buffer[position]
    lowest = position - min(WINDOW_SIZE, position)

    # rfind scans right to left, which yields distances in ascending order.
    #
    # The search end is exclusive, so position - 1 excludes distance 1.
    candidates: list[int] = []
    index = buffer.rfind(first, lowest, position - 1)
    while index != -1:
        candidates.append(position - index)
        index = buffer.rfind(first, lowest, index)

    return candidates


def _extend_candidates(buffer: bytes, position: int, candidates: list[int]) -> int:
    """Grow the match while candidates keep agreeing with the input.

    Args:
        buffer: The complete raw input.
        position: Current write position.
        candidates: Distances whose first byte matches (modified in place).

    Returns:
        The match length. On return, candidates[0] is the chosen distance.

    Each step compares the byte at position + length against every candidate.
    A failing candidate is removed unless it is the last one left, in which
    case extension stops with the current length.

    Example: candidates = [2, 5], buffer[position + 1] matches only distance 5

        length = 1: distance 5 matches, distance 2 fails and is removed.
        candidates = [5]
    """
    end = len(buffer)
    length = 0
    extending = True

    while length < MAX_MATCH_LENGTH and extending:
        length += 1
        ahead = position + length

        # Walk candidates from the back so removals don't shift unvisited entries.
        for i in range(len(candidates) - 1, -1, -1):
            distance = candidates[i]

            # Running off the end of the input counts as a mismatch.
            if ahead < end and buffer[ahead] == buffer[position - distance + length % distance]:
                continue

            if len(candidates) > 1:
                del candidates[i]
            else:
                extending = False

    return length
