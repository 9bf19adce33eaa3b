"""Graph-aware impact scoring for gapped skills.

A gapped skill matters more when closing it opens the way to other required
skills. Impact is the decayed sum of outgoing propagation-edge strengths that
reach required skills within `max_depth` hops, plus a base weight for every
other gapped skill that lists it as a direct prerequisite. Raw values are
normalized by the largest raw impact in the run.
"""

from __future__ import annotations

from typing import Iterable, Protocol

import structlog

from skillgap.config import EngineConfig, ImpactLevels
from skillgap.errors import AnalysisCancelled
from skillgap.graph import SkillGraph
from skillgap.models import ImpactLevel, RelationKind, SkillGap, SkillImpact

logger = structlog.get_logger()

MAX_NAMED_UNLOCKS = 3


class CancelFlag(Protocol):
    def is_set(self) -> bool: ...


def _downstream(
    graph: SkillGraph,
    start: str,
    required: frozenset[str],
    kinds: frozenset[RelationKind],
    max_depth: int,
    decay: float,
) -> tuple[float, list[str]]:
    """Breadth-first walk from `start`; each skill is scored once, at its nearest hop."""
    visited = {start}
    frontier = [start]
    total = 0.0
    reached: list[str] = []
    for hop in range(1, max_depth + 1):
        best: dict[str, float] = {}
        for node in frontier:
            for edge in graph.neighbors(node, "out"):
                if edge.kind not in kinds or edge.skill_id in visited:
                    continue
                if edge.strength > best.get(edge.skill_id, -1.0):
                    best[edge.skill_id] = edge.strength
        if not best:
            break
        weight = decay ** (hop - 1)
        for skill_id, strength in best.items():
            visited.add(skill_id)
            if skill_id in required:
                total += strength * weight
                reached.append(skill_id)
        frontier = list(best)
    return total, reached


def _prerequisite_dependents(graph: SkillGraph, gapped: Iterable[str]) -> dict[str, list[str]]:
    """Map each gapped skill to the other gapped skills whose incoming
    prerequisite edges name it."""
    gapped_set = set(gapped)
    dependents: dict[str, list[str]] = {skill_id: [] for skill_id in gapped_set}
    for dependent in sorted(gapped_set):
        for edge in graph.neighbors(dependent, "in"):
            if edge.kind != RelationKind.PREREQUISITE:
                continue
            if edge.skill_id in gapped_set and dependent not in dependents[edge.skill_id]:
                dependents[edge.skill_id].append(dependent)
    return dependents


def propagate_impact(
    graph: SkillGraph,
    gaps: list[SkillGap],
    required: Iterable[str],
    config: EngineConfig,
    cancel: CancelFlag | None = None,
) -> dict[str, SkillImpact]:
    required_ids = frozenset(required)
    kinds = frozenset(config.propagate_kinds)
    gapped = sorted(gap.skill_id for gap in gaps)
    dependents = _prerequisite_dependents(graph, gapped)

    raw_scores: dict[str, tuple[float, list[str]]] = {}
    for skill_id in gapped:
        if cancel is not None and cancel.is_set():
            logger.info("impact.cancelled", skill_id=skill_id)
            raise AnalysisCancelled(f"Analysis cancelled before scoring {skill_id}")
        downstream, reached = _downstream(
            graph,
            skill_id,
            required_ids - {skill_id},
            kinds,
            config.max_depth,
            config.decay_factor,
        )
        raw = downstream + config.dependent_weight * len(dependents[skill_id])
        raw_scores[skill_id] = (raw, reached)

    peak = max((raw for raw, _ in raw_scores.values()), default=0.0)
    divisor = peak if peak > 0 else 1.0

    impacts: dict[str, SkillImpact] = {}
    for skill_id, (raw, reached) in raw_scores.items():
        impacts[skill_id] = SkillImpact(
            skill_id=skill_id,
            raw=raw,
            normalized=round(raw / divisor, 6),
            unlocks=tuple(reached),
            dependents=tuple(dependents[skill_id]),
        )

    logger.debug("impact.computed", gapped=len(gapped), peak=peak)
    return impacts


def impact_level(normalized: float, levels: ImpactLevels) -> ImpactLevel:
    if normalized >= levels.critical:
        return ImpactLevel.CRITICAL
    if normalized >= levels.high:
        return ImpactLevel.HIGH
    if normalized >= levels.medium:
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW


def format_level(value: float) -> str:
    return f"{value:g}"


def explain_gap(graph: SkillGraph, gap: SkillGap, impact: SkillImpact) -> str:
    name = graph.skill(gap.skill_id).name
    text = (
        f"{name} is at level {format_level(gap.current_level)} against a required "
        f"{format_level(gap.target_level)}, a gap of {format_level(gap.gap_size)}."
    )
    if impact.unlocks:
        names = [graph.skill(skill_id).name for skill_id in impact.unlocks]
        shown = ", ".join(names[:MAX_NAMED_UNLOCKS])
        if len(names) > MAX_NAMED_UNLOCKS:
            shown += f" and {len(names) - MAX_NAMED_UNLOCKS} more"
        noun = "skill" if len(names) == 1 else "skills"
        text += f" Closing it unlocks {len(names)} other required {noun}: {shown}."
    else:
        text += " It does not unlock other required skills for this role."
    if impact.dependents:
        count = len(impact.dependents)
        noun = "gap lists" if count == 1 else "gaps list"
        text += f" {count} other {noun} it as a prerequisite."
    return text
