from __future__ import annotations

import threading

import pytest

from skillgap.config import EngineConfig, ImpactLevels
from skillgap.errors import AnalysisCancelled
from skillgap.gaps import calculate_gaps
from skillgap.graph import SkillGraph
from skillgap.impact import explain_gap, impact_level, propagate_impact
from skillgap.models import ImpactLevel, RelationKind, Skill, SkillRelation


def _skill(skill_id: str) -> Skill:
    return Skill(id=skill_id, name=skill_id.title(), category="HARD", difficulty=3)


def _run(graph, levels, requirements, config=None, cancel=None):
    config = config or EngineConfig()
    scan = calculate_gaps(graph, levels, requirements, config.max_level)
    return scan, propagate_impact(graph, scan.gaps, requirements, config, cancel=cancel)


def test_prerequisite_chain_decays_per_hop():
    graph = SkillGraph.load(
        [_skill(s) for s in ("a", "b", "c", "d")],
        [
            SkillRelation("a", "b", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("b", "c", RelationKind.BUILDS_ON, 1.0),
            SkillRelation("c", "d", RelationKind.BUILDS_ON, 1.0),
        ],
    )
    # only "a" is gapped, so the dependent bonus is zero
    _, impacts = _run(graph, {"b": 3, "c": 3, "d": 3}, {"a": 3, "b": 3, "c": 3, "d": 3})
    assert impacts["a"].raw == pytest.approx(1.0 + 0.5 + 0.25)
    assert impacts["a"].normalized == 1.0
    assert impacts["a"].unlocks == ("b", "c", "d")


def test_depth_cap_stops_traversal():
    graph = SkillGraph.load(
        [_skill(s) for s in ("a", "b", "c")],
        [
            SkillRelation("a", "b", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("b", "c", RelationKind.PREREQUISITE, 1.0),
        ],
    )
    config = EngineConfig(max_depth=1)
    _, impacts = _run(graph, {"b": 3, "c": 3}, {"a": 3, "b": 3, "c": 3}, config)
    assert impacts["a"].unlocks == ("b",)
    assert impacts["a"].raw == pytest.approx(1.0)


def test_unrequired_skills_are_traversed_but_not_scored():
    graph = SkillGraph.load(
        [_skill(s) for s in ("a", "bridge", "c")],
        [
            SkillRelation("a", "bridge", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("bridge", "c", RelationKind.PREREQUISITE, 0.8),
        ],
    )
    _, impacts = _run(graph, {"c": 3}, {"a": 3, "c": 3})
    assert impacts["a"].unlocks == ("c",)
    assert impacts["a"].raw == pytest.approx(0.8 * 0.5)


def test_related_edges_do_not_propagate():
    graph = SkillGraph.load(
        [_skill("a"), _skill("b")],
        [SkillRelation("a", "b", RelationKind.RELATED, 1.0)],
    )
    _, impacts = _run(graph, {}, {"a": 3, "b": 3})
    assert impacts["a"].raw == 0
    assert impacts["a"].normalized == 0
    assert impacts["b"].normalized == 0


def test_gapped_dependents_add_base_weight():
    graph = SkillGraph.load(
        [_skill("a"), _skill("b")],
        [SkillRelation("a", "b", RelationKind.PREREQUISITE, 0.6)],
    )
    _, impacts = _run(graph, {}, {"a": 3, "b": 3})
    assert impacts["a"].dependents == ("b",)
    assert impacts["a"].raw == pytest.approx(0.6 + 0.5)
    assert impacts["b"].dependents == ()


def test_cycle_terminates_and_still_ranks():
    graph = SkillGraph.load(
        [_skill(s) for s in ("a", "b", "c")],
        [
            SkillRelation("a", "b", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("b", "c", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("c", "a", RelationKind.PREREQUISITE, 1.0),
        ],
    )
    _, impacts = _run(graph, {}, {"a": 3, "b": 3, "c": 3})
    assert set(impacts) == {"a", "b", "c"}
    for impact in impacts.values():
        assert impact.raw == pytest.approx(1.0 + 0.5 + 0.5)
        assert 0.0 <= impact.normalized <= 1.0
        assert impact.skill_id not in impact.unlocks


def test_normalized_values_are_within_unit_interval():
    graph = SkillGraph.load(
        [_skill(s) for s in ("a", "b", "c")],
        [
            SkillRelation("a", "b", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("a", "c", RelationKind.PREREQUISITE, 1.0),
            SkillRelation("b", "c", RelationKind.BUILDS_ON, 0.2),
        ],
    )
    _, impacts = _run(graph, {}, {"a": 4, "b": 4, "c": 4})
    values = [impact.normalized for impact in impacts.values()]
    assert max(values) == 1.0
    assert all(0.0 <= v <= 1.0 for v in values)


def test_cancel_flag_aborts_between_skills():
    graph = SkillGraph.load([_skill("a"), _skill("b")], [])
    flag = threading.Event()
    flag.set()
    with pytest.raises(AnalysisCancelled):
        _run(graph, {}, {"a": 2, "b": 2}, cancel=flag)


def test_impact_level_thresholds():
    levels = ImpactLevels()
    assert impact_level(1.0, levels) is ImpactLevel.CRITICAL
    assert impact_level(0.5, levels) is ImpactLevel.HIGH
    assert impact_level(0.3, levels) is ImpactLevel.MEDIUM
    assert impact_level(0.0, levels) is ImpactLevel.LOW


def test_explanation_mentions_levels_and_unlocked_skills():
    graph = SkillGraph.load(
        [_skill("a"), _skill("b")],
        [SkillRelation("a", "b", RelationKind.PREREQUISITE, 1.0)],
    )
    scan, impacts = _run(graph, {"a": 1}, {"a": 4, "b": 2})
    gap_a = next(g for g in scan.gaps if g.skill_id == "a")
    gap_b = next(g for g in scan.gaps if g.skill_id == "b")
    text = explain_gap(graph, gap_a, impacts["a"])
    assert "level 1 against a required 4, a gap of 3" in text
    assert "unlocks 1 other required skill: B." in text
    assert "1 other gap lists it as a prerequisite" in text
    assert "does not unlock" in explain_gap(graph, gap_b, impacts["b"])
