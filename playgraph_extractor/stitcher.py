"""Concatenation of per-day series into the all-time cumulative curve."""

import math
from typing import Mapping, Optional, Sequence

from .errors import StitchIntegrityError
from .models import CumulativePoint, DomainPoint

DEDUP_DECIMALS = 6


def _is_finite_point(point: DomainPoint) -> bool:
    return math.isfinite(point.game) and math.isfinite(point.diff)


def verify_monotonic(points: Sequence[CumulativePoint]) -> None:
    """Raise StitchIntegrityError if cum_game ever decreases."""
    for i in range(1, len(points)):
        if points[i].cum_game < points[i - 1].cum_game:
            raise StitchIntegrityError(i, points[i - 1].cum_game, points[i].cum_game)


def stitch_days(
    day_series: Mapping[str, Sequence[DomainPoint]],
    day_order: Optional[Sequence[str]] = None
) -> list[CumulativePoint]:
    """Stitch per-day series into one cumulative series.

    Each day is rebaselined so its first point sits at (0, 0), then
    shifted by the games and balance accumulated over all earlier days.
    The carry advances by the day's net change (last minus first), so
    days whose series does not start at zero still join up.

    After concatenation the curve is zero-based on its first point,
    points repeating an already emitted cum_game (rounded to 6 decimals)
    are dropped, and monotonicity is verified before the final sort.

    Args:
        day_series: Day key (YYYY-MM-DD) -> that day's points
        day_order: Chronological day keys; defaults to the sorted keys

    Returns:
        List of CumulativePoint, strictly increasing in cum_game

    Raises:
        StitchIntegrityError: If cum_game goes backwards, which means a
            day's series is out of order or the day order is wrong
    """
    if day_order is None:
        day_order = sorted(day_series)

    stitched = []
    cum_game = 0.0
    cum_diff = 0.0

    for day in day_order:
        # Corrupt coordinates are dropped before they can poison the carry
        points = [p for p in day_series.get(day) or () if _is_finite_point(p)]
        if not points:
            continue

        start_game = points[0].game
        start_diff = points[0].diff

        for p in points:
            stitched.append(CumulativePoint(
                cum_game=cum_game + (p.game - start_game),
                cum_diff=cum_diff + (p.diff - start_diff),
                day=day,
                extrapolated=p.extrapolated,
            ))

        cum_game += points[-1].game - start_game
        cum_diff += points[-1].diff - start_diff

    if not stitched:
        return []

    base = stitched[0].cum_diff
    seen = set()
    result = []
    for p in stitched:
        key = round(p.cum_game, DEDUP_DECIMALS)
        if key in seen:
            continue
        seen.add(key)
        result.append(CumulativePoint(p.cum_game, p.cum_diff - base, p.day, p.extrapolated))

    verify_monotonic(result)
    result.sort(key=lambda p: p.cum_game)
    return result
