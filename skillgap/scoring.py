from __future__ import annotations

from typing import Mapping

import numpy as np
import structlog

from skillgap.models import SkillGap, SkillImpact

logger = structlog.get_logger()


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def readiness_score(
    gaps: list[SkillGap],
    impacts: Mapping[str, SkillImpact],
    requirements: Mapping[str, float],
    max_level: float,
) -> int:
    """100 x (1 - weighted gap ratio) over every required skill.

    Each required skill weighs 1 + its normalized impact (0 when it has no
    gap), and the worst case for each is a full max_level gap.
    """
    if not requirements:
        logger.info("readiness.degenerate_input", case="no_requirements")
        return 100

    by_skill = {gap.skill_id: gap.gap_size for gap in gaps}
    skill_ids = sorted(requirements)
    gap_sizes = np.array([by_skill.get(skill_id, 0.0) for skill_id in skill_ids], dtype=float)
    weights = np.array(
        [
            1.0 + (impacts[skill_id].normalized if skill_id in impacts else 0.0)
            for skill_id in skill_ids
        ],
        dtype=float,
    )
    worst = max_level * float(weights.sum())
    ratio = _clamp(float(np.dot(gap_sizes, weights)) / worst)
    return int(round(_clamp((1.0 - ratio) * 100.0, 0.0, 100.0)))
