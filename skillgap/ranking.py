from __future__ import annotations

from dataclasses import replace

from skillgap.models import GapItem


def priority_key(item: GapItem) -> tuple[float, float, int, str]:
    return (-item.impact, -item.gap_size, item.estimated_time_weeks, item.skill_id)


def rank_gaps(items: list[GapItem]) -> list[GapItem]:
    """Order gaps by impact, size and quick wins, then assign dense ranks 1..N.

    The key ends in skill_id, which is unique per gap, so the order is total.
    Returns new items; the inputs are left untouched.
    """
    ordered = sorted(items, key=priority_key)
    return [replace(item, priority=rank) for rank, item in enumerate(ordered, start=1)]
