"""Pixel to domain coordinate transform for PlayGraph widgets."""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .errors import GraphDataError
from .models import DomainPoint, PixelGraph

ONE_DECIMAL = Decimal("0.1")


def round_half_away(value: float, quantum: Decimal = ONE_DECIMAL) -> float:
    """Round to the given quantum, ties away from zero.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def pixel_to_domain(graph: PixelGraph, px: float, py: float) -> tuple:
    """Invert the widget's linear mapping for one pixel.

    Y grows downward in the canvas while balance grows upward, so the
    normalized offset is subtracted from the top of the balance range.

    Returns:
        (game, diff) without rounding
    """
    rect = graph.rect
    info = graph.play_info
    game = (px - rect.x) / rect.w * info.total
    diff = info.max - (py - rect.y) / rect.h * (info.max - info.min)
    return game, diff


def to_series(graph: PixelGraph, actual_games: Optional[int] = None) -> list[DomainPoint]:
    """Convert a pixel-space graph to a series of domain points.

    Args:
        graph: Graph to convert
        actual_games: If given, rescale games so the last point equals it

    Returns:
        List of DomainPoint, in capture order

    Raises:
        GraphDataError: If the plot rectangle has zero width or height
    """
    if graph.rect.w == 0 or graph.rect.h == 0:
        raise GraphDataError(
            f"Degenerate graph rectangle {graph.rect.w}x{graph.rect.h}"
        )

    series = []
    for px, py in graph.points:
        game, diff = pixel_to_domain(graph, px, py)
        series.append(DomainPoint(round_half_away(game), round_half_away(diff)))

    if actual_games is not None:
        series = rescale_to_games(series, actual_games)

    return series


def rescale_to_games(series: list[DomainPoint], actual_games: float) -> list[DomainPoint]:
    """Scale games linearly so the last point lands on actual_games.

    The widget quantizes its own x-axis, so the last point of a session
    rarely sits on the real game count. A series whose last game is not
    positive is returned unchanged.
    """
    if not series or series[-1].game <= 0:
        return list(series)

    factor = actual_games / series[-1].game
    rescaled = [
        DomainPoint(round_half_away(p.game * factor), p.diff, p.extrapolated)
        for p in series[:-1]
    ]
    last = series[-1]
    rescaled.append(DomainPoint(float(actual_games), last.diff, last.extrapolated))
    return rescaled
