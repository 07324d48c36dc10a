"""Savings target progress against time-based pacing."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Sequence

from .models import Target, TargetAnalysis
from .money import ZERO, percentage, round_money, safe_divide
from .standards import ON_TRACK_TOLERANCE


class TargetStanding(str, Enum):
    COMPLETED = "completed"
    ON_TRACK = "on_track"
    BEHIND = "behind"
    UNSCHEDULED = "unscheduled"


def expected_progress(target: Target, today: date) -> Decimal:
    """Fraction of the target expected by ``today`` under linear pacing.

    Capped at 1 once the deadline passes and floored at 0 before creation.
    A deadline on or before the creation date expects full progress.
    """
    total_days = (target.target_date - target.created_at).days
    if total_days <= 0:
        return Decimal("1")
    days_passed = (today - target.created_at).days
    fraction = Decimal(days_passed) / Decimal(total_days)
    return max(ZERO, min(fraction, Decimal("1")))


def classify_target(
    target: Target,
    today: date,
    tolerance: Decimal = ON_TRACK_TOLERANCE,
) -> TargetStanding:
    """Place one target in exactly one standing."""
    if target.is_completed:
        return TargetStanding.COMPLETED
    if target.target_date is None:
        return TargetStanding.UNSCHEDULED

    progress = safe_divide(target.current_amount, target.target_amount)
    if progress >= expected_progress(target, today) * tolerance:
        return TargetStanding.ON_TRACK
    return TargetStanding.BEHIND


def analyze_targets(
    targets: Sequence[Target],
    today: date,
    tolerance: Decimal = ON_TRACK_TOLERANCE,
) -> TargetAnalysis:
    """
    Summarize progress across all savings targets.

    Args:
        targets: All savings targets for one user
        today: Reference date for pacing
        tolerance: Share of expected progress that still counts as on track

    Returns:
        TargetAnalysis; unfinished targets without a deadline count as behind
        and are also reported as unscheduled
    """
    total_target = sum((t.target_amount for t in targets), ZERO)
    total_current = sum((t.current_amount for t in targets), ZERO)

    standings = [classify_target(t, today, tolerance) for t in targets]
    completed = standings.count(TargetStanding.COMPLETED)
    on_track = standings.count(TargetStanding.ON_TRACK)
    unscheduled = standings.count(TargetStanding.UNSCHEDULED)

    return TargetAnalysis(
        total_targets=len(targets),
        total_target_amount=round_money(total_target),
        total_current_amount=round_money(total_current),
        overall_progress=round_money(percentage(total_current, total_target)),
        completed_targets=completed,
        on_track_targets=on_track,
        behind_targets=len(targets) - completed - on_track,
        unscheduled_targets=unscheduled,
    )
