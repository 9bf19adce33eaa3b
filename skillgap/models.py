from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class RelationKind(StrEnum):
    PREREQUISITE = "prerequisite"
    BUILDS_ON = "builds-on"
    RELATED = "related"


class ImpactLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class DegenerateInputCase(StrEnum):
    NO_REQUIREMENTS = "no_requirements"
    NO_LEVELS = "no_levels"


@dataclass(frozen=True)
class Skill:
    id: str
    name: str
    category: str
    difficulty: float = 1.0


@dataclass(frozen=True)
class SkillRelation:
    from_id: str
    to_id: str
    kind: RelationKind
    strength: float = 1.0


@dataclass(frozen=True)
class SkillGap:
    """Raw comparison of one required skill against the person's level."""

    skill_id: str
    current_level: float
    target_level: float
    gap_size: float


@dataclass(frozen=True)
class SkillImpact:
    skill_id: str
    raw: float
    normalized: float
    unlocks: tuple[str, ...] = ()
    dependents: tuple[str, ...] = ()


@dataclass
class GapItem:
    skill_id: str
    skill_name: str
    current_level: float
    target_level: float
    gap_size: float
    impact: float
    impact_level: ImpactLevel
    explanation: str
    recommended_actions: list[str]
    estimated_time_weeks: int
    priority: int
    resources: Any = None
    evidence: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "skillId": self.skill_id,
            "skillName": self.skill_name,
            "currentLevel": self.current_level,
            "targetLevel": self.target_level,
            "gapSize": self.gap_size,
            "impact": self.impact,
            "impactLevel": str(self.impact_level),
            "explanation": self.explanation,
            "recommendedActions": list(self.recommended_actions),
            "estimatedTimeWeeks": self.estimated_time_weeks,
            "priority": self.priority,
        }
        if self.resources is not None:
            payload["resources"] = self.resources
        if self.evidence is not None:
            payload["evidence"] = self.evidence
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> GapItem:
        return cls(
            skill_id=raw["skillId"],
            skill_name=raw["skillName"],
            current_level=raw["currentLevel"],
            target_level=raw["targetLevel"],
            gap_size=raw["gapSize"],
            impact=raw["impact"],
            impact_level=ImpactLevel(raw["impactLevel"]),
            explanation=raw["explanation"],
            recommended_actions=list(raw["recommendedActions"]),
            estimated_time_weeks=raw["estimatedTimeWeeks"],
            priority=raw["priority"],
            resources=raw.get("resources"),
            evidence=raw.get("evidence"),
        )


@dataclass
class GapsData:
    assessment_id: str
    readiness_score: int
    gaps: list[GapItem]
    strengths: list[str]
    overall_recommendation: str | None
    target_role: str | None = None
    assessment_gaps_id: str | None = None
    degenerate_cases: list[DegenerateInputCase] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assessmentId": self.assessment_id,
            "assessmentGapsId": self.assessment_gaps_id,
            "targetRole": self.target_role,
            "readinessScore": self.readiness_score,
            "gaps": [gap.to_dict() for gap in self.gaps],
            "strengths": list(self.strengths),
            "overallRecommendation": self.overall_recommendation,
            "degenerateCases": [str(case) for case in self.degenerate_cases],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> GapsData:
        return cls(
            assessment_id=raw["assessmentId"],
            assessment_gaps_id=raw.get("assessmentGapsId"),
            target_role=raw.get("targetRole"),
            readiness_score=raw["readinessScore"],
            gaps=[GapItem.from_dict(item) for item in raw.get("gaps", [])],
            strengths=list(raw.get("strengths", [])),
            overall_recommendation=raw.get("overallRecommendation"),
            degenerate_cases=[DegenerateInputCase(c) for c in raw.get("degenerateCases", [])],
        )
