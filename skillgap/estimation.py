from __future__ import annotations

import math

from skillgap.config import GENERIC_ACTION, DifficultyBand, EngineConfig
from skillgap.models import Skill

GAP_BUCKETS = (
    (1, "small"),
    (2, "medium"),
)
LARGEST_BUCKET = "large"


def difficulty_multiplier(weight: float, bands: list[DifficultyBand]) -> float:
    for band in bands:
        if weight <= band.max_weight:
            return band.multiplier
    return bands[-1].multiplier


def base_weeks(category: str, config: EngineConfig) -> float:
    return config.base_weeks.get(category, config.default_base_weeks)


def estimate_weeks(gap_size: float, skill: Skill, config: EngineConfig) -> int:
    weeks = (
        gap_size
        * base_weeks(skill.category, config)
        * difficulty_multiplier(skill.difficulty, config.difficulty_bands)
    )
    # round first so 3 * 2 * 1.5 style products don't ceil up on float noise
    return max(1, math.ceil(round(weeks, 6)))


def gap_bucket(gap_size: float) -> str:
    for upper, bucket in GAP_BUCKETS:
        if gap_size <= upper:
            return bucket
    return LARGEST_BUCKET


def recommended_actions(skill: Skill, gap_size: float, config: EngineConfig) -> list[str]:
    steps = config.action_templates.get(skill.category, {}).get(gap_bucket(gap_size))
    if not steps:
        return [GENERIC_ACTION.replace("{skill}", skill.name)]
    return [step.replace("{skill}", skill.name) for step in steps]
