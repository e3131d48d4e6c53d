"""Detection of axis clipping in PlayGraph widgets."""

from typing import Optional

from .models import CensorFlags, DomainPoint, PixelGraph

# The record site draws every session in a fixed 8000 game by
# -2000..max balance frame; play beyond it is clipped to the edges.
RIGHT_CLIP_TOTAL = 8000
BOTTOM_CLIP_MIN = -2000
BOTTOM_MARGIN_PX = 5
BOTTOM_RUN_LENGTH = 3


def is_right_censored(graph: PixelGraph, actual_games: Optional[int]) -> bool:
    """True when the axis stops at 8000 but more games were played."""
    return (
        graph.play_info.total == RIGHT_CLIP_TOTAL
        and actual_games is not None
        and actual_games > RIGHT_CLIP_TOTAL
    )


def is_bottom_censored(graph: PixelGraph) -> bool:
    """True when a run of raw points is pinned to the -2000 floor."""
    if graph.play_info.min != BOTTOM_CLIP_MIN:
        return False

    threshold = graph.rect.y + graph.rect.h - BOTTOM_MARGIN_PX
    run = 0
    for _, py in graph.points:
        if py >= threshold:
            run += 1
            if run >= BOTTOM_RUN_LENGTH:
                return True
        else:
            run = 0
    return False


def detect_censor_flags(
    graph: PixelGraph,
    series: list[DomainPoint],
    actual_games: Optional[int] = None
) -> CensorFlags:
    """Flag whether a day's graph was clipped at the right or bottom edge.

    Args:
        graph: Raw pixel-space graph
        series: Domain series derived from the graph
        actual_games: Authoritative game count from the page, if known

    Returns:
        CensorFlags for the day
    """
    # Decided on raw pixels; series is unused.
    return CensorFlags(
        censored_right=is_right_censored(graph, actual_games),
        censored_bottom=is_bottom_censored(graph),
    )
