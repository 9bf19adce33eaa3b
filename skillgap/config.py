"""Scoring policy configuration loaded from YAML into pydantic models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from skillgap.models import RelationKind

CONFIG_ENV_VAR = "SKILLGAP_CONFIG"

GENERIC_ACTION = "Practice and seek mentorship in {skill}"


def _default_action_templates() -> dict[str, dict[str, list[str]]]:
    return {
        "HARD": {
            "small": [
                "Work through the advanced sections of the official {skill} documentation.",
                "Apply {skill} in one focused exercise and get it reviewed.",
            ],
            "medium": [
                "Complete a structured course on {skill}.",
                "Build a small project that relies on {skill}.",
                "Ask a senior colleague to review your {skill} work.",
            ],
            "large": [
                "Start from the fundamentals of {skill} with a guided course.",
                "Ship two portfolio projects that exercise {skill} end to end.",
                "Pair with a mentor on {skill} for at least a month.",
            ],
        },
        "SOFT": {
            "small": [
                "Ask for targeted feedback on your {skill} after your next project.",
            ],
            "medium": [
                "Practice {skill} deliberately in weekly team situations.",
                "Keep a short log of {skill} moments and review it monthly.",
            ],
            "large": [
                "Take a workshop on {skill}.",
                "Find a mentor who models strong {skill}.",
                "Volunteer for responsibilities that force you to exercise {skill}.",
            ],
        },
        "META": {
            "small": [
                "Reflect weekly on how you applied {skill}.",
            ],
            "medium": [
                "Set a learning goal around {skill} and track it for six weeks.",
                "Read one book on {skill} and summarize the takeaways.",
            ],
            "large": [
                "Build a routine that practices {skill} every week.",
                "Work with a coach on {skill}.",
                "Run retrospectives on how {skill} affected recent outcomes.",
            ],
        },
        "language": {
            "small": [
                "Solve ten intermediate {skill} exercises.",
                "Refactor an existing {skill} project using idiomatic patterns.",
            ],
            "medium": [
                "Complete a structured {skill} course.",
                "Build a small application in {skill}.",
                "Get your {skill} code reviewed by an experienced developer.",
            ],
            "large": [
                "Learn {skill} fundamentals with a beginner course.",
                "Write daily {skill} exercises for a month.",
                "Build and publish a complete project in {skill}.",
            ],
        },
        "tooling": {
            "small": [
                "Use {skill} in your daily workflow for two weeks.",
            ],
            "medium": [
                "Follow the official {skill} getting-started guide.",
                "Automate one recurring task with {skill}.",
            ],
            "large": [
                "Take an introductory {skill} course.",
                "Set up {skill} from scratch in a side project.",
                "Shadow a teammate who uses {skill} heavily.",
            ],
        },
        "soft-skill": {
            "small": [
                "Ask for feedback on your {skill} in the next review.",
            ],
            "medium": [
                "Practice {skill} in low-stakes settings every week.",
                "Study one framework for {skill} and apply it.",
            ],
            "large": [
                "Join a workshop or group focused on {skill}.",
                "Find a mentor for {skill}.",
                "Take on a role that requires {skill} regularly.",
            ],
        },
    }


class DifficultyBand(BaseModel):
    """Multiplier applied to skills whose difficulty weight is at most max_weight."""

    max_weight: float
    multiplier: float = Field(gt=0)


class ReadinessBuckets(BaseModel):
    """Lower bounds of the narrative buckets; below `close` is 'significant gaps'."""

    well_positioned: int = 85
    close: int = 50

    @model_validator(mode="after")
    def validate_order(self):
        if not 0 <= self.close <= self.well_positioned <= 100:
            raise ValueError(
                f"Readiness buckets must satisfy 0 <= close <= well_positioned <= 100, "
                f"got close={self.close} well_positioned={self.well_positioned}"
            )
        return self


class ImpactLevels(BaseModel):
    """Lower bounds of normalized impact for each categorical level."""

    critical: float = 0.75
    high: float = 0.5
    medium: float = 0.25

    @model_validator(mode="after")
    def validate_order(self):
        if not 0.0 <= self.medium <= self.high <= self.critical <= 1.0:
            raise ValueError("Impact levels must satisfy 0 <= medium <= high <= critical <= 1")
        return self


class EngineConfig(BaseModel):
    """Every tunable policy of the gap engine."""

    max_level: float = Field(default=5, gt=0)
    decay_factor: float = 0.5
    max_depth: int = 3
    dependent_weight: float = Field(default=0.5, ge=0)
    propagate_kinds: list[RelationKind] = Field(
        default_factory=lambda: [RelationKind.PREREQUISITE, RelationKind.BUILDS_ON]
    )
    base_weeks: dict[str, float] = Field(
        default_factory=lambda: {
            "HARD": 2.0,
            "SOFT": 3.0,
            "META": 3.0,
            "language": 2.0,
            "tooling": 1.0,
            "soft-skill": 3.0,
        }
    )
    default_base_weeks: float = Field(default=2.0, gt=0)
    difficulty_bands: list[DifficultyBand] = Field(
        default_factory=lambda: [
            DifficultyBand(max_weight=2, multiplier=1.0),
            DifficultyBand(max_weight=4, multiplier=1.25),
            DifficultyBand(max_weight=6, multiplier=1.5),
            DifficultyBand(max_weight=8, multiplier=1.75),
            DifficultyBand(max_weight=10, multiplier=2.0),
        ]
    )
    notable_threshold: float = 4
    readiness_buckets: ReadinessBuckets = Field(default_factory=ReadinessBuckets)
    impact_levels: ImpactLevels = Field(default_factory=ImpactLevels)
    action_templates: dict[str, dict[str, list[str]]] = Field(
        default_factory=_default_action_templates
    )

    @field_validator("decay_factor")
    @classmethod
    def validate_decay(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"decay_factor must be in (0, 1], got {v}")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be at least 1, got {v}")
        return v

    @field_validator("base_weeks")
    @classmethod
    def validate_base_weeks(cls, v: dict[str, float]) -> dict[str, float]:
        for category, weeks in v.items():
            if weeks <= 0:
                raise ValueError(f"base_weeks[{category}] must be positive, got {weeks}")
        return v

    @field_validator("difficulty_bands")
    @classmethod
    def validate_bands(cls, v: list[DifficultyBand]) -> list[DifficultyBand]:
        if not v:
            raise ValueError("difficulty_bands must not be empty")
        bounds = [band.max_weight for band in v]
        if bounds != sorted(bounds):
            raise ValueError(f"difficulty_bands must be sorted by max_weight, got {bounds}")
        return v

    @classmethod
    def from_dict(cls, data: dict) -> EngineConfig:
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def find_config() -> Optional[Path]:
    """Find config file from the environment or the working directory."""
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    local = Path.cwd() / "skillgap.yaml"
    if local.exists():
        return local
    return None


def load_config(config_path: Optional[Path] = None) -> EngineConfig:
    """Load engine configuration, falling back to defaults when no file exists."""
    data: dict = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

    try:
        return EngineConfig.from_dict(_deep_merge(EngineConfig().to_dict(), data))
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
