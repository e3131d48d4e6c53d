"""Per-day processing and batch assembly of the cumulative curve."""

from pathlib import Path
from typing import Iterable, Optional

from .censor import detect_censor_flags
from .config import PipelineConfig, config as default_config
from .diagnostics import EventType, Reporter
from .extractor import (
    extract_actual_games,
    extract_date_from_path,
    extract_graph_blocks,
    select_target_graph,
)
from .extrapolation import extrapolate_series
from .models import BatchResult, DailySummary, DayResult
from .stitcher import stitch_days
from .transform import rescale_to_games, to_series


def process_day_html(
    html: str,
    day: str,
    actual_games: Optional[int] = None,
    reporter: Optional[Reporter] = None,
    settings: Optional[PipelineConfig] = None
) -> Optional[DayResult]:
    """Reconstruct one day's series and summary from its page.

    Args:
        html: Raw page text
        day: Day key, YYYY-MM-DD
        actual_games: Authoritative game count; read from the page if None
        reporter: Diagnostics collector
        settings: Pipeline configuration (default: global config)

    Returns:
        DayResult, or None if the page has no usable graph
    """
    reporter = reporter if reporter is not None else Reporter(quiet=True)
    settings = settings if settings is not None else default_config

    blocks = extract_graph_blocks(html, reporter)
    target = select_target_graph(blocks)
    if target is None:
        reporter.warning(EventType.NO_TARGET_GRAPH, "No PlayGraph data found", day)
        return None
    if target.point_count == 0:
        reporter.warning(EventType.NO_TARGET_GRAPH, "Target PlayGraph has no points", day)
        return None

    if actual_games is None:
        actual_games = extract_actual_games(html)

    series = to_series(target)
    flags = detect_censor_flags(target, series, actual_games)

    # A right-censored graph ends at the axis, not at the real count
    if settings.rescale_to_actual_games and actual_games is not None and not flags.censored_right:
        series = rescale_to_games(series, actual_games)

    if flags.censored_right or flags.censored_bottom:
        edges = [name for name, hit in
                 (("right", flags.censored_right), ("bottom", flags.censored_bottom)) if hit]
        reporter.warning(EventType.CENSORED, f"Graph clipped at {'/'.join(edges)} edge", day)

    special_rule_applied = False
    extrapolated_count = 0
    override = settings.settings_for_day(day)
    if override is not None:
        series = extrapolate_series(series, override)
        special_rule_applied = True
        extrapolated_count = sum(1 for p in series if p.extrapolated)
        reporter.info(
            f"Special rule applied: {extrapolated_count} extrapolated points "
            f"to {override.target_game:g} games",
            EventType.SPECIAL_RULE, day,
        )

    summary = DailySummary(
        day=day,
        last_diff=series[-1].diff,
        actual_games=actual_games,
        censored_right=flags.censored_right,
        censored_bottom=flags.censored_bottom,
        special_rule_applied=special_rule_applied,
        extrapolated_points_count=extrapolated_count,
    )
    return DayResult(day=day, series=series, summary=summary)


def process_day_file(
    file_path,
    reporter: Optional[Reporter] = None,
    settings: Optional[PipelineConfig] = None
) -> Optional[DayResult]:
    """Process a saved page whose path contains its date."""
    reporter = reporter if reporter is not None else Reporter(quiet=True)
    day = extract_date_from_path(file_path)
    if day is None:
        reporter.warning(EventType.MISSING_DATE, f"Could not extract date from path: {file_path}")
        return None

    html = Path(file_path).read_text(encoding="utf-8")
    return process_day_html(html, day, reporter=reporter, settings=settings)


def process_documents(
    documents: Iterable[tuple],
    reporter: Optional[Reporter] = None,
    settings: Optional[PipelineConfig] = None
) -> BatchResult:
    """Process (day, html) pairs and stitch them into one curve.

    A failure in one document is reported and that day skipped; the
    rest of the batch still runs. Integrity failures of the stitched
    curve are not caught here.

    Args:
        documents: Iterable of (day, html) pairs, in any order
        reporter: Diagnostics collector
        settings: Pipeline configuration

    Returns:
        BatchResult with per-day series, sorted summaries and the
        cumulative curve

    Raises:
        StitchIntegrityError: If the stitched curve is not monotonic
    """
    reporter = reporter if reporter is not None else Reporter(quiet=True)
    result = BatchResult()

    for day, html in documents:
        reporter.info(f"Processing: {day}", day=day)
        try:
            day_result = process_day_html(html, day, reporter=reporter, settings=settings)
        except Exception as e:
            reporter.error(EventType.DAY_FAILED, f"Error processing {day}: {e}", day)
            continue

        if day_result is None:
            continue
        if day_result.day in result.day_series:
            reporter.warning(
                EventType.DAY_FAILED,
                "Duplicate day, keeping the later document",
                day_result.day,
            )
            result.summaries = [s for s in result.summaries if s.day != day_result.day]

        result.day_series[day_result.day] = day_result.series
        result.summaries.append(day_result.summary)

    result.summaries.sort(key=lambda s: s.day)
    result.cumulative = stitch_days(result.day_series)
    return result


def load_documents(paths: Iterable, reporter: Optional[Reporter] = None) -> list[tuple]:
    """Read saved pages into (day, html) pairs, skipping undated paths."""
    reporter = reporter if reporter is not None else Reporter(quiet=True)
    documents = []
    for path in paths:
        day = extract_date_from_path(path)
        if day is None:
            reporter.warning(EventType.MISSING_DATE, f"Could not extract date from path: {path}")
            continue
        documents.append((day, Path(path).read_text(encoding="utf-8")))
    return documents
