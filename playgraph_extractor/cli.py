#!/usr/bin/env python3
"""Command-line interface for PlayGraph reconstruction."""

import argparse
import glob
import sys
from pathlib import Path

from . import __version__
from .chart import render_cumulative_chart, write_chart_payload
from .config import PipelineConfig
from .diagnostics import EventType, Reporter, format_report
from .errors import StitchIntegrityError
from .exporter import write_cumulative_csv, write_daily_summary_csv, write_day_csv
from .fetcher import fetch_monthly_pages
from .pipeline import load_documents, process_documents


def print_banner():
    """Print application banner."""
    print("""
╔═══════════════════════════════════════════════════════════╗
║          PLAYGRAPH-EXTRACTOR v{version}                      ║
║   Rebuild cumulative balance curves from record pages     ║
╚═══════════════════════════════════════════════════════════╝
""".format(version=__version__))


def print_summary(result):
    """Print the run summary."""
    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)
    print(f"  Processed days: {len(result.summaries)}")
    print(f"  Total data points: {len(result.cumulative)}")

    if result.cumulative:
        last = result.cumulative[-1]
        print(f"  Final games: {last.cum_game:g}")
        print(f"  Final balance: {last.cum_diff:g}")

    for summary in result.summaries:
        if summary.special_rule_applied:
            print(f"  {summary.day}: special rule applied, "
                  f"{summary.extrapolated_points_count} extrapolated points")

    if result.censored_days:
        print(f"  Censored days: {', '.join(result.censored_days)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='playgraph-extract',
        description='Rebuild per-day and cumulative balance curves from saved record pages',
        epilog='Example: playgraph-extract "data/**/*.html" -o out'
    )

    parser.add_argument(
        'pattern',
        nargs='?',
        help='Glob pattern of saved HTML pages (file names must contain YYYY-MM-DD)'
    )

    parser.add_argument(
        '-o', '--output',
        default='out',
        help='Output directory (default: out)'
    )

    parser.add_argument(
        '--fetch',
        action='store_true',
        help='Download monthly pages instead of reading files (cookie from MYSLO_COOKIE)'
    )

    parser.add_argument(
        '--rescale',
        action='store_true',
        help='Stretch each day so its last point matches the page game count'
    )

    parser.add_argument(
        '--no-chart',
        action='store_true',
        help='Skip the PNG chart'
    )

    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress progress messages'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.pattern and not args.fetch:
        parser.error("a file pattern is required unless --fetch is given")

    reporter = Reporter(quiet=args.quiet)
    output_dir = Path(args.output)

    if not args.quiet:
        print_banner()

    try:
        settings = PipelineConfig.from_environment()
        if args.rescale:
            settings.rescale_to_actual_games = True

        output_dir.mkdir(parents=True, exist_ok=True)

        if args.fetch:
            documents = fetch_monthly_pages(reporter=reporter, settings=settings)
        else:
            files = sorted(glob.glob(args.pattern, recursive=True))
            reporter.info(f"Found {len(files)} files matching: {args.pattern}")
            if not files:
                print("Error: No files found matching the pattern", file=sys.stderr)
                sys.exit(1)
            documents = load_documents(files, reporter)

        result = process_documents(documents, reporter=reporter, settings=settings)

        for day, series in result.day_series.items():
            path = write_day_csv(output_dir, day, series, settings)
            reporter.info(f"Written: {path}", EventType.WRITTEN, day)

        path = write_daily_summary_csv(output_dir, result.summaries, settings)
        reporter.info(f"Written: {path}", EventType.WRITTEN)
        path = write_cumulative_csv(output_dir, result.cumulative, settings)
        reporter.info(f"Written: {path}", EventType.WRITTEN)
        path = write_chart_payload(output_dir, result.cumulative, settings)
        reporter.info(f"Written: {path}", EventType.WRITTEN)

        if not args.no_chart:
            path = render_cumulative_chart(output_dir, result.cumulative, settings)
            reporter.info(f"Written: {path}", EventType.WRITTEN)

        if not args.quiet:
            print_summary(result)
            print(format_report(reporter))
            print(f"\n✓ All files written to: {output_dir}/")

        sys.exit(0)

    except StitchIntegrityError as e:
        print(f"Integrity error: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
