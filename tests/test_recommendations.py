from __future__ import annotations

from skillgap.config import ReadinessBuckets
from skillgap.models import GapItem, ImpactLevel
from skillgap.recommendations import compose_recommendation, readiness_bucket


def _gap(name: str, priority: int) -> GapItem:
    return GapItem(
        skill_id=name.lower(),
        skill_name=name,
        current_level=1,
        target_level=3,
        gap_size=2,
        impact=0.5,
        impact_level=ImpactLevel.HIGH,
        explanation="",
        recommended_actions=[],
        estimated_time_weeks=4,
        priority=priority,
    )


def test_bucket_boundaries():
    buckets = ReadinessBuckets()
    assert readiness_bucket(85, buckets) == "well-positioned"
    assert readiness_bucket(84, buckets) == "close"
    assert readiness_bucket(50, buckets) == "close"
    assert readiness_bucket(49, buckets) == "significant gaps"


def test_custom_buckets_are_honoured():
    buckets = ReadinessBuckets(well_positioned=95, close=70)
    assert readiness_bucket(90, buckets) == "close"
    assert readiness_bucket(60, buckets) == "significant gaps"


def test_names_top_three_gaps_only():
    gaps = [_gap(name, i) for i, name in enumerate(["Rust", "Go", "SQL", "Kafka"], start=1)]
    text = compose_recommendation(40, gaps, [], True, "Platform Engineer", ReadinessBuckets())
    assert text == (
        "You are 40% ready for Platform Engineer, with significant gaps still to close. "
        "Focus first on Rust, Go and SQL. No strengths stand out yet."
    )
    assert "Kafka" not in text


def test_well_positioned_with_single_gap_and_strength():
    text = compose_recommendation(90, [_gap("Docker", 1)], ["Python"], True, None, ReadinessBuckets())
    assert text == (
        "You are 90% ready for the target role and well-positioned to make the move. "
        "Focus first on Docker. You bring 1 strength to build on, led by Python."
    )


def test_all_requirements_met():
    text = compose_recommendation(100, [], ["Python", "SQL"], True, "Analyst", ReadinessBuckets())
    assert "You already meet every requirement for this role." in text
    assert "2 strengths" in text


def test_no_gaps_and_no_strengths_returns_none():
    assert compose_recommendation(100, [], [], False, "Analyst", ReadinessBuckets()) is None
