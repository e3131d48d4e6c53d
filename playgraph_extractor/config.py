"""Pipeline configuration."""

import os
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class ExtrapolationSettings:
    """Parameters for extending a truncated day's series."""

    target_game: float = 10073
    target_min_diff: float = -3000
    step_game: float = 50

    # Where the widget clips the balance axis, and how close counts as clipped
    bottom_value: float = -2000
    eps: float = 10

    # Points before the clip used for the slope fit
    window_size: int = 5


def _default_special_days() -> dict:
    # 2024-08-31: the graph stops at the -2000 floor while play continued
    # to roughly 10073 games and about -3000.
    return {"2024-08-31": ExtrapolationSettings()}


@dataclass
class PipelineConfig:
    """Configuration for the reconstruction pipeline and its collaborators."""

    # Day key -> extrapolation settings; only listed days are extended
    special_days: dict = field(default_factory=_default_special_days)

    # Stretch each day's games so the last point equals the page's game count
    rescale_to_actual_games: bool = False

    # Export settings
    days_dir_name: str = "days"
    summary_file_name: str = "daily_summary.csv"
    cumulative_csv_name: str = "all_time_curve.csv"
    cumulative_png_name: str = "all_time_curve.png"
    cumulative_json_name: str = "all_time_curve.json"

    # Chart settings; maxX of the JSON payload is rounded up to chart_x_step
    chart_width: int = 1200
    chart_height: int = 800
    chart_dpi: int = 100
    chart_x_step: int = 2000

    # Fetch settings
    base_url: str = "https://sammyqr.jp/smartphone/B1/record/index"
    fetch_start: date = date(2023, 12, 1)
    fetch_delay: float = 1.0
    fetch_timeout: int = 30
    cookie: str = ""

    def settings_for_day(self, day: str):
        """Return the extrapolation override for a day, or None."""
        return self.special_days.get(day)

    @classmethod
    def from_environment(cls) -> "PipelineConfig":
        """Load configuration from environment variables."""
        return cls(
            rescale_to_actual_games=os.environ.get(
                "PLAYGRAPH_RESCALE", "false").lower() == "true",
            fetch_delay=float(os.environ.get("PLAYGRAPH_FETCH_DELAY", "1.0")),
            cookie=os.environ.get("MYSLO_COOKIE", ""),
        )


# Global configuration instance
config = PipelineConfig()
