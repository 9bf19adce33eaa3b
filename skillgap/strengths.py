from __future__ import annotations

from typing import Mapping

from skillgap.graph import SkillGraph


def detect_strengths(
    graph: SkillGraph,
    current_levels: Mapping[str, float],
    requirements: Mapping[str, float],
    notable_threshold: float,
) -> list[str]:
    """Required skills that meet their requirement, plus unrequired skills at
    or above the notable threshold. A skill at level 0 is never a strength.

    Sorted by current level descending, then by name.
    """
    found: list[tuple[float, str, str]] = []
    for skill_id in set(requirements) | set(current_levels):
        current = current_levels.get(skill_id, 0)
        required = requirements.get(skill_id)
        bar = notable_threshold if required is None else required
        if current <= 0 or current < bar:
            continue
        found.append((current, graph.skill(skill_id).name, skill_id))
    found.sort(key=lambda entry: (-entry[0], entry[1], entry[2]))
    return [name for _, name, _ in found]
