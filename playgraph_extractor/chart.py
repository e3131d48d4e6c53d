"""Rendering of the cumulative curve."""

import json
import math
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from .config import PipelineConfig, config as default_config
from .models import CumulativePoint


def split_series(points: list[CumulativePoint]) -> tuple:
    """Partition the curve into real and extrapolated (x, y) pairs."""
    real = [(p.cum_game, p.cum_diff) for p in points if not p.extrapolated]
    extrapolated = [(p.cum_game, p.cum_diff) for p in points if p.extrapolated]
    return real, extrapolated


def build_chart_payload(points: list[CumulativePoint], x_step: Optional[int] = None) -> dict:
    """Chart data for a web client: one dataset plus a rounded x maximum.

    Args:
        points: Cumulative curve
        x_step: maxX is rounded up to a multiple of this (default: configured chart_x_step)

    Returns:
        Dict with 'datasets' and 'maxX'
    """
    if x_step is None:
        x_step = default_config.chart_x_step

    last_x = points[-1].cum_game if points else 0
    max_x = math.ceil(last_x / x_step) * x_step

    data = [
        {"x": p.cum_game, "y": p.cum_diff, "day": p.day, "extrapolated": p.extrapolated}
        for p in points
    ]
    return {
        "datasets": [{
            "label": "Cumulative balance",
            "data": data,
            "showLine": True,
        }],
        "maxX": max_x,
    }


def write_chart_payload(
    output_dir: str | Path,
    points: list[CumulativePoint],
    settings: Optional[PipelineConfig] = None
) -> Path:
    """Write the chart payload as JSON for a web client.

    Returns:
        Path to the written file
    """
    settings = settings if settings is not None else default_config
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / settings.cumulative_json_name
    payload = build_chart_payload(points, settings.chart_x_step)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return filepath


def render_cumulative_chart(
    output_dir: str | Path,
    points: list[CumulativePoint],
    settings: Optional[PipelineConfig] = None
) -> Path:
    """Save the cumulative curve as a PNG.

    Real points are drawn solid; extrapolated points dashed.

    Returns:
        Path to the written image
    """
    settings = settings if settings is not None else default_config
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    real, extrapolated = split_series(points)

    fig, ax = plt.subplots(figsize=(settings.chart_width / settings.chart_dpi,
                                    settings.chart_height / settings.chart_dpi),
                           dpi=settings.chart_dpi)
    fig.patch.set_facecolor("white")

    if real:
        xs, ys = zip(*real)
        ax.plot(xs, ys, color="#0066cc", linewidth=2, label="Observed")
    if extrapolated:
        xs, ys = zip(*extrapolated)
        ax.plot(xs, ys, color="#cc6600", linewidth=2, linestyle="--",
                label="Extrapolated (estimate)")

    ax.set_title("Cumulative balance", fontsize=20, fontweight="bold")
    ax.set_xlabel("Games")
    ax.set_ylabel("Balance")
    ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{v / 1000:.0f}K"))
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{v:.0f}"))
    ax.grid(True, alpha=0.3)
    if real or extrapolated:
        ax.legend(loc="upper left")

    filepath = output_dir / settings.cumulative_png_name
    fig.savefig(filepath)
    plt.close(fig)
    return filepath
