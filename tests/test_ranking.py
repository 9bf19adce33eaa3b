from __future__ import annotations

from skillgap.models import GapItem, ImpactLevel
from skillgap.ranking import rank_gaps


def _item(skill_id: str, impact: float, gap: float, weeks: int) -> GapItem:
    return GapItem(
        skill_id=skill_id,
        skill_name=skill_id.title(),
        current_level=0,
        target_level=gap,
        gap_size=gap,
        impact=impact,
        impact_level=ImpactLevel.LOW,
        explanation="",
        recommended_actions=[],
        estimated_time_weeks=weeks,
        priority=0,
    )


def test_composite_key_order():
    ranked = rank_gaps(
        [
            _item("slow", 0.5, 3, 10),
            _item("quick", 0.5, 3, 2),
            _item("big", 0.5, 4, 12),
            _item("top", 0.9, 1, 20),
        ]
    )
    assert [g.skill_id for g in ranked] == ["top", "big", "quick", "slow"]
    assert [g.priority for g in ranked] == [1, 2, 3, 4]


def test_exact_ties_break_on_skill_id():
    ranked = rank_gaps([_item("zeta", 0, 2, 4), _item("alpha", 0, 2, 4), _item("mid", 0, 2, 4)])
    assert [g.skill_id for g in ranked] == ["alpha", "mid", "zeta"]


def test_ranking_is_independent_of_input_order():
    items = [_item(str(i), (i % 3) / 3, i % 4 + 1, i % 5 + 1) for i in range(12)]
    forward = rank_gaps(items)
    backward = rank_gaps(list(reversed(items)))
    assert [g.skill_id for g in forward] == [g.skill_id for g in backward]
    assert sorted(g.priority for g in forward) == list(range(1, 13))


def test_inputs_keep_their_priority():
    items = [_item("a", 0.1, 1, 1)]
    rank_gaps(items)
    assert items[0].priority == 0


def test_empty_input():
    assert rank_gaps([]) == []
