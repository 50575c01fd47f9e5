"""
Half-open interval helpers over minutes-of-day.

Intervals are ``(start, end)`` integer pairs with ``start < end``; values run
from 0 to 1440 so an interval may end exactly at midnight.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple, TypeVar

Interval = Tuple[int, int]

T = TypeVar("T")


def overlaps(start1: T, end1: T, start2: T, end2: T) -> bool:
    """True when ``[start1, end1)`` and ``[start2, end2)`` share any point."""
    return start1 < end2 and end1 > start2  # type: ignore[operator]


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Sort and merge overlapping or touching intervals."""
    ordered = sorted((s, e) for s, e in intervals if e > s)
    if not ordered:
        return []

    merged: List[Interval] = []
    cs, ce = ordered[0]
    for s, e in ordered[1:]:
        if s <= ce:
            ce = max(ce, e)
        else:
            merged.append((cs, ce))
            cs, ce = s, e
    merged.append((cs, ce))
    return merged


def subtract_intervals(bases: Iterable[Interval], cuts: Iterable[Interval]) -> List[Interval]:
    """
    Remove every cut from the bases.

    A cut inside a base splits it in two; a cut covering a base removes it.
    """
    base_list = merge_intervals(bases)
    cut_list = merge_intervals(cuts)
    if not base_list or not cut_list:
        return base_list

    out: List[Interval] = []
    for bs, be in base_list:
        segs = [(bs, be)]
        for cs, ce in cut_list:
            remaining: List[Interval] = []
            for s, e in segs:
                if e <= cs or s >= ce:
                    remaining.append((s, e))
                    continue
                if s < cs:
                    remaining.append((s, cs))
                if e > ce:
                    remaining.append((ce, e))
            segs = remaining
            if not segs:
                break
        out.extend(segs)
    return merge_intervals(out)


def union_intervals(*groups: Iterable[Interval]) -> List[Interval]:
    """Merge several interval groups into one sorted, non-overlapping list."""
    combined: List[Interval] = []
    for group in groups:
        combined.extend(group)
    return merge_intervals(combined)
