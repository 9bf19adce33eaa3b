from __future__ import annotations

from skillgap.config import ReadinessBuckets
from skillgap.models import GapItem

TOP_GAPS_NAMED = 3


def _join_names(names: list[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


def readiness_bucket(score: int, buckets: ReadinessBuckets) -> str:
    if score >= buckets.well_positioned:
        return "well-positioned"
    if score >= buckets.close:
        return "close"
    return "significant gaps"


def compose_recommendation(
    readiness: int,
    gaps: list[GapItem],
    strengths: list[str],
    has_requirements: bool,
    target_role: str | None,
    buckets: ReadinessBuckets,
) -> str | None:
    """One to three sentences on readiness, where to start, and what to build on."""
    if not gaps and not strengths:
        return None

    role = target_role or "the target role"
    strength_text = (
        f"You bring {len(strengths)} {'strength' if len(strengths) == 1 else 'strengths'} "
        f"to build on, led by {strengths[0]}."
        if strengths
        else "No strengths stand out yet."
    )

    if not has_requirements:
        return (
            f"No skill requirements were provided for {role}, so there are no gaps to close. "
            f"{strength_text}"
        ).strip()

    bucket = readiness_bucket(readiness, buckets)
    if bucket == "well-positioned":
        opening = f"You are {readiness}% ready for {role} and well-positioned to make the move."
    elif bucket == "close":
        opening = f"You are {readiness}% ready for {role} and close to meeting its requirements."
    else:
        opening = f"You are {readiness}% ready for {role}, with significant gaps still to close."

    if gaps:
        top = [gap.skill_name for gap in gaps[:TOP_GAPS_NAMED]]
        focus = f"Focus first on {_join_names(top)}."
    else:
        focus = "You already meet every requirement for this role."

    return " ".join(part for part in (opening, focus, strength_text) if part)
