"""Data model for PlayGraph reconstruction."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class GraphRect:
    """Plot rectangle of the widget, in canvas pixels."""
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class PlayInfo:
    """Declared axis range: total games and the balance window."""
    total: float
    min: float
    max: float


@dataclass(frozen=True)
class PixelGraph:
    """One embedded PlayGraph widget in pixel space."""
    rect: GraphRect
    play_info: PlayInfo
    points: tuple

    @classmethod
    def from_dict(cls, payload: dict) -> "PixelGraph":
        """Build a graph from the widget's JSON payload.

        Args:
            payload: Decoded JSON with GRAPH_RECT, PLAY_INFO and PLAY_LOG keys

        Returns:
            PixelGraph instance

        Raises:
            KeyError, TypeError, ValueError: If the payload is not shaped
                like a PlayGraph
        """
        rect = payload["GRAPH_RECT"]
        info = payload["PLAY_INFO"]
        points = tuple(
            (float(px), float(py)) for px, py in payload["PLAY_LOG"]
        )
        return cls(
            rect=GraphRect(
                x=float(rect["x"]),
                y=float(rect["y"]),
                w=float(rect["w"]),
                h=float(rect["h"]),
            ),
            play_info=PlayInfo(
                total=float(info["total"]),
                min=float(info["min"]),
                max=float(info["max"]),
            ),
            points=points,
        )

    @property
    def point_count(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class DomainPoint:
    """Reconstructed sample: games played and net balance."""
    game: float
    diff: float
    extrapolated: bool = False


@dataclass(frozen=True)
class CensorFlags:
    """Whether the widget's axis range clipped the session."""
    censored_right: bool
    censored_bottom: bool


@dataclass(frozen=True)
class DailySummary:
    """Per-day record written to the daily summary."""
    day: str
    last_diff: float
    actual_games: Optional[int]
    censored_right: bool
    censored_bottom: bool
    special_rule_applied: bool
    extrapolated_points_count: int


@dataclass(frozen=True)
class CumulativePoint:
    """One point of the all-time curve."""
    cum_game: float
    cum_diff: float
    day: str
    extrapolated: bool = False


@dataclass
class DayResult:
    """Output of processing a single day's document."""
    day: str
    series: list
    summary: DailySummary


@dataclass
class BatchResult:
    """Output of processing a batch of documents."""
    day_series: dict = field(default_factory=dict)
    summaries: list = field(default_factory=list)
    cumulative: list = field(default_factory=list)

    @property
    def censored_days(self) -> list[str]:
        return [
            s.day for s in self.summaries
            if s.censored_right or s.censored_bottom
        ]
