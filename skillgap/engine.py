"""End-to-end gap analysis over one skill graph snapshot."""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from skillgap.config import EngineConfig
from skillgap.estimation import estimate_weeks, recommended_actions
from skillgap.gaps import calculate_gaps
from skillgap.graph import SkillGraph
from skillgap.impact import CancelFlag, explain_gap, impact_level, propagate_impact
from skillgap.models import DegenerateInputCase, GapItem, GapsData
from skillgap.ranking import rank_gaps
from skillgap.recommendations import compose_recommendation
from skillgap.report import assemble_report
from skillgap.scoring import readiness_score
from skillgap.strengths import detect_strengths

logger = structlog.get_logger()


def analyze(
    graph: SkillGraph,
    current_levels: Mapping[str, float],
    requirements: Mapping[str, float],
    *,
    assessment_id: str,
    target_role: str | None = None,
    assessment_gaps_id: str | None = None,
    resources: Mapping[str, Any] | None = None,
    evidence: Mapping[str, Any] | None = None,
    config: EngineConfig | None = None,
    cancel: CancelFlag | None = None,
) -> GapsData:
    """Run the full gap analysis for one assessment.

    Reads but never modifies `graph`, `current_levels` or `requirements`, so
    concurrent calls over the same graph are safe. Raises ValidationError on
    malformed input and AnalysisCancelled when `cancel` is set mid-run;
    either way no report is returned.
    """
    config = config or EngineConfig()
    log = logger.bind(assessment_id=assessment_id)

    unchecked = set(config.propagate_kinds) - graph.cycle_kinds
    if unchecked:
        log.warning(
            "analysis.cycle_kinds_unchecked",
            kinds=sorted(str(kind) for kind in unchecked),
        )

    scan = calculate_gaps(graph, current_levels, requirements, config.max_level)

    degenerate: list[DegenerateInputCase] = []
    if not requirements:
        degenerate.append(DegenerateInputCase.NO_REQUIREMENTS)
    if not current_levels:
        degenerate.append(DegenerateInputCase.NO_LEVELS)
    for case in degenerate:
        log.info("analysis.degenerate_input", case=str(case))

    impacts = propagate_impact(graph, scan.gaps, requirements, config, cancel=cancel)

    items: list[GapItem] = []
    for gap in scan.gaps:
        skill = graph.skill(gap.skill_id)
        impact = impacts[gap.skill_id]
        items.append(
            GapItem(
                skill_id=gap.skill_id,
                skill_name=skill.name,
                current_level=gap.current_level,
                target_level=gap.target_level,
                gap_size=gap.gap_size,
                impact=impact.normalized,
                impact_level=impact_level(impact.normalized, config.impact_levels),
                explanation=explain_gap(graph, gap, impact),
                recommended_actions=recommended_actions(skill, gap.gap_size, config),
                estimated_time_weeks=estimate_weeks(gap.gap_size, skill, config),
                priority=0,
            )
        )
    ranked = rank_gaps(items)

    strengths = detect_strengths(graph, current_levels, requirements, config.notable_threshold)
    readiness = readiness_score(scan.gaps, impacts, requirements, config.max_level)
    recommendation = compose_recommendation(
        readiness,
        ranked,
        strengths,
        has_requirements=bool(requirements),
        target_role=target_role,
        buckets=config.readiness_buckets,
    )

    report = assemble_report(
        assessment_id,
        readiness,
        ranked,
        strengths,
        recommendation,
        target_role=target_role,
        assessment_gaps_id=assessment_gaps_id,
        resources=resources,
        evidence=evidence,
        degenerate_cases=degenerate,
    )
    log.info(
        "analysis.complete",
        readiness=readiness,
        gaps=len(ranked),
        strengths=len(strengths),
    )
    return report
