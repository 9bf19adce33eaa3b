from __future__ import annotations

from numbers import Real
from typing import Mapping, NamedTuple

from skillgap.errors import ValidationError
from skillgap.graph import SkillGraph
from skillgap.models import SkillGap


class GapScan(NamedTuple):
    gaps: list[SkillGap]
    met: list[SkillGap]


def validate_levels(
    graph: SkillGraph, levels: Mapping[str, float], max_level: float, label: str
) -> None:
    for skill_id, level in levels.items():
        if skill_id not in graph:
            raise ValidationError(f"{label} references unknown skill: {skill_id}")
        if isinstance(level, bool) or not isinstance(level, Real):
            raise ValidationError(f"{label} for {skill_id} must be a number, got {level!r}")
        if not 0 <= level <= max_level:
            raise ValidationError(
                f"{label} for {skill_id} must be within [0, {max_level}], got {level}"
            )


def calculate_gaps(
    graph: SkillGraph,
    current_levels: Mapping[str, float],
    requirements: Mapping[str, float],
    max_level: float,
) -> GapScan:
    """Compare every required skill with the person's level (absent = 0).

    Required skills at or above target come back in `met` with a
    non-positive gap_size so strength detection can reuse them.
    """
    validate_levels(graph, requirements, max_level, "Required level")
    validate_levels(graph, current_levels, max_level, "Current level")

    gaps: list[SkillGap] = []
    met: list[SkillGap] = []
    for skill_id in sorted(requirements):
        required = requirements[skill_id]
        current = current_levels.get(skill_id, 0)
        record = SkillGap(
            skill_id=skill_id,
            current_level=current,
            target_level=required,
            gap_size=required - current,
        )
        if required > current:
            gaps.append(record)
        else:
            met.append(record)
    return GapScan(gaps, met)
