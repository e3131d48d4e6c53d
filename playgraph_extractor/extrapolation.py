"""
Extension of a truncated day's series.

Used only for days with a known broken graph: the widget pins the balance
to its -2000 floor, so the trend just before the floor is projected forward
until the known final game count.
"""

import math
from typing import Optional

import numpy as np

from .config import ExtrapolationSettings
from .models import DomainPoint
from .transform import round_half_away


def find_bottom_start_index(
    series: list[DomainPoint],
    bottom_value: float = -2000,
    eps: float = 10
) -> Optional[int]:
    """Index of the first point within eps of the clipped floor, or None."""
    for i, point in enumerate(series):
        if abs(point.diff - bottom_value) <= eps:
            return i
    return None


def estimate_slope_before_bottom(
    series: list[DomainPoint],
    bottom_index: int,
    window_size: int = 5
) -> float:
    """Least-squares slope of diff over game just before the floor.

    Fits up to window_size points preceding bottom_index. Windows with
    fewer than two points, no spread in games, or a non-finite fit
    give a slope of 0.

    Args:
        series: Day series
        bottom_index: Index where the series reaches the floor
        window_size: Maximum number of points to fit

    Returns:
        Slope in balance per game
    """
    if bottom_index < 2:
        return 0.0

    start = max(0, bottom_index - window_size)
    window = series[start:bottom_index]
    if len(window) < 2:
        return 0.0

    games = np.array([p.game for p in window], dtype=np.float64)
    diffs = np.array([p.diff for p in window], dtype=np.float64)

    # All games equal: vertical fit
    if np.ptp(games) == 0:
        return 0.0

    centered = games - games.mean()
    denominator = np.sum(centered * centered)
    if denominator == 0:
        return 0.0

    slope = float(np.sum(centered * (diffs - diffs.mean())) / denominator)
    return slope if math.isfinite(slope) else 0.0


def extrapolate_series(
    series: list[DomainPoint],
    settings: ExtrapolationSettings = ExtrapolationSettings()
) -> list[DomainPoint]:
    """Append synthetic points from the last real point to the target game.

    Each step advances game by step_game and diff by slope * step_game,
    with diff held at target_min_diff once it would fall below it. The
    input list is not modified.

    Args:
        series: Day series known to be truncated
        settings: Target game, floor and step parameters

    Returns:
        New list: the original points followed by extrapolated ones

    Raises:
        ValueError: If step_game is not positive
    """
    if settings.step_game <= 0:
        raise ValueError(f"step_game must be positive, got {settings.step_game}")

    if not series:
        return list(series)

    bottom_index = find_bottom_start_index(series, settings.bottom_value, settings.eps)
    slope = 0.0
    if bottom_index is not None:
        slope = estimate_slope_before_bottom(series, bottom_index, settings.window_size)

    last = series[-1]
    game = last.game
    diff = last.diff

    extended = list(series)
    while game < settings.target_game:
        game += settings.step_game
        diff += slope * settings.step_game
        if diff < settings.target_min_diff:
            diff = settings.target_min_diff

        extended.append(DomainPoint(
            game=round_half_away(game),
            diff=round_half_away(diff),
            extrapolated=True,
        ))

    return extended
