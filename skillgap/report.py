from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Mapping

from skillgap.models import DegenerateInputCase, GapItem, GapsData


def assemble_report(
    assessment_id: str,
    readiness: int,
    gaps: list[GapItem],
    strengths: list[str],
    recommendation: str | None,
    target_role: str | None = None,
    assessment_gaps_id: str | None = None,
    resources: Mapping[str, Any] | None = None,
    evidence: Mapping[str, Any] | None = None,
    degenerate_cases: list[DegenerateInputCase] | None = None,
) -> GapsData:
    """Package the ranked gaps and scores into the final report.

    Resources and evidence are attached to the gap with the same skill id
    exactly as supplied; their contents are never inspected.
    """
    resources = resources or {}
    evidence = evidence or {}
    enriched = [
        replace(
            gap,
            resources=resources.get(gap.skill_id, gap.resources),
            evidence=evidence.get(gap.skill_id, gap.evidence),
        )
        for gap in gaps
    ]
    return GapsData(
        assessment_id=assessment_id,
        assessment_gaps_id=assessment_gaps_id,
        target_role=target_role,
        readiness_score=readiness,
        gaps=enriched,
        strengths=list(strengths),
        overall_recommendation=recommendation,
        degenerate_cases=list(degenerate_cases or []),
    )


def to_json(report: GapsData, indent: int | None = 2) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)


def from_json(text: str) -> GapsData:
    return GapsData.from_dict(json.loads(text))
