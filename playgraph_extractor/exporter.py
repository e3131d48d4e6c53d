"""CSV export of day series, daily summaries and the cumulative curve."""

from pathlib import Path
from typing import Optional

import pandas as pd

from .config import PipelineConfig, config as default_config
from .models import CumulativePoint, DailySummary, DomainPoint

SERIES_COLUMNS = ["game", "diff", "extrapolated"]
SUMMARY_COLUMNS = [
    "day",
    "last_diff",
    "actual_games",
    "censored_right",
    "censored_bottom",
    "special_rule_applied",
    "extrapolated_points_count",
]
CUMULATIVE_COLUMNS = ["cum_game", "cum_diff", "day", "extrapolated"]


def _bool_text(series: pd.Series) -> pd.Series:
    return series.map(lambda v: "true" if v else "false")


def series_to_dataframe(series: list[DomainPoint]) -> pd.DataFrame:
    """Day series as a DataFrame with game, diff and extrapolated columns."""
    df = pd.DataFrame(
        [(p.game, p.diff, p.extrapolated) for p in series],
        columns=SERIES_COLUMNS
    )
    df["extrapolated"] = _bool_text(df["extrapolated"])
    return df


def summaries_to_dataframe(summaries: list[DailySummary]) -> pd.DataFrame:
    """Daily summaries as a DataFrame; unknown game counts stay empty."""
    df = pd.DataFrame(
        [
            (
                s.day,
                s.last_diff,
                s.actual_games,
                s.censored_right,
                s.censored_bottom,
                s.special_rule_applied,
                s.extrapolated_points_count,
            )
            for s in summaries
        ],
        columns=SUMMARY_COLUMNS
    )
    df["actual_games"] = df["actual_games"].astype("Int64")
    for column in ("censored_right", "censored_bottom", "special_rule_applied"):
        df[column] = _bool_text(df[column])
    return df


def cumulative_to_dataframe(points: list[CumulativePoint]) -> pd.DataFrame:
    """Cumulative curve as a DataFrame."""
    df = pd.DataFrame(
        [(p.cum_game, p.cum_diff, p.day, p.extrapolated) for p in points],
        columns=CUMULATIVE_COLUMNS
    )
    df["extrapolated"] = _bool_text(df["extrapolated"])
    return df


def write_day_csv(
    output_dir: str | Path,
    day: str,
    series: list[DomainPoint],
    settings: Optional[PipelineConfig] = None
) -> Path:
    """Write one day's series to <output_dir>/days/<day>.csv."""
    settings = settings if settings is not None else default_config
    day_dir = Path(output_dir) / settings.days_dir_name
    day_dir.mkdir(parents=True, exist_ok=True)

    filepath = day_dir / f"{day}.csv"
    series_to_dataframe(series).to_csv(filepath, index=False)
    return filepath


def write_daily_summary_csv(
    output_dir: str | Path,
    summaries: list[DailySummary],
    settings: Optional[PipelineConfig] = None
) -> Path:
    """Write all daily summaries to one CSV."""
    settings = settings if settings is not None else default_config
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / settings.summary_file_name
    summaries_to_dataframe(summaries).to_csv(filepath, index=False)
    return filepath


def write_cumulative_csv(
    output_dir: str | Path,
    points: list[CumulativePoint],
    settings: Optional[PipelineConfig] = None
) -> Path:
    """Write the cumulative curve to CSV."""
    settings = settings if settings is not None else default_config
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / settings.cumulative_csv_name
    cumulative_to_dataframe(points).to_csv(filepath, index=False)
    return filepath
