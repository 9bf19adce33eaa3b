from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from skillgap.errors import ValidationError
from skillgap.models import Skill, SkillRelation


@dataclass
class AnalysisInput:
    assessment_id: str
    skills: list[Skill]
    relations: list[SkillRelation]
    current_levels: dict[str, float]
    requirements: dict[str, float]
    target_role: str | None = None
    assessment_gaps_id: str | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    evidence: dict[str, Any] = field(default_factory=dict)


def _require(record: dict, key: str, what: str) -> Any:
    if key not in record:
        raise ValidationError(f"{what} is missing required field '{key}': {record!r}")
    return record[key]


def _number(record: dict, key: str, default: float, what: str) -> float:
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{what} field '{key}' must be a number, got {value!r}")
    return float(value)


def _records(payload: dict, key: str) -> list[dict]:
    value = payload.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"'{key}' must be a list of records")
    for item in value:
        if not isinstance(item, dict):
            raise ValidationError(f"Every entry in '{key}' must be a mapping, got {item!r}")
    return value


def _skill(record: dict) -> Skill:
    return Skill(
        id=str(_require(record, "id", "Skill")),
        name=str(_require(record, "name", "Skill")),
        category=str(_require(record, "category", "Skill")),
        difficulty=_number(record, "difficulty", 1.0, "Skill"),
    )


def _relation(record: dict) -> SkillRelation:
    kind = record.get("relationKind", record.get("kind"))
    if kind is None:
        raise ValidationError(f"Relation is missing required field 'relationKind': {record!r}")
    return SkillRelation(
        from_id=str(_require(record, "fromId", "Relation")),
        to_id=str(_require(record, "toId", "Relation")),
        kind=kind,
        strength=_number(record, "strength", 1.0, "Relation"),
    )


def _mapping(payload: dict, key: str) -> dict:
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        raise ValidationError(f"'{key}' must be a mapping of skill id to value")
    return dict(value)


def load_analysis_input(payload: dict) -> AnalysisInput:
    """Build engine inputs from a decoded JSON/YAML document."""
    if not isinstance(payload, dict):
        raise ValidationError("Analysis input must be a mapping")
    return AnalysisInput(
        assessment_id=str(_require(payload, "assessmentId", "Analysis input")),
        target_role=payload.get("targetRole"),
        assessment_gaps_id=payload.get("assessmentGapsId"),
        skills=[_skill(item) for item in _records(payload, "skills")],
        relations=[_relation(item) for item in _records(payload, "relations")],
        current_levels=_mapping(payload, "currentLevels"),
        requirements=_mapping(payload, "requirements"),
        resources=_mapping(payload, "resources"),
        evidence=_mapping(payload, "evidence"),
    )


def read_input_file(path: Path) -> AnalysisInput:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not parse {path.name}: {e}")
    return load_analysis_input(payload)
