"""Monthly record page fetcher for the play record site."""

import time
from datetime import date
from typing import Iterator, Optional

import requests

from .config import PipelineConfig, config as default_config
from .diagnostics import EventType, Reporter

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 18_6 like Mac OS X) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Mobile/15E148 MysloApp/2.2.3"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ja",
}


def iter_months(start: date, end: date) -> Iterator[date]:
    """Yield the first day of every month from start to end, inclusive."""
    current = date(start.year, start.month, 1)
    while current <= end:
        yield current
        if current.month == 12:
            current = date(current.year + 1, 1, 1)
        else:
            current = date(current.year, current.month + 1, 1)


def month_url(month: date, settings: Optional[PipelineConfig] = None) -> str:
    settings = settings if settings is not None else default_config
    return f"{settings.base_url}?date={month:%Y%m}&site_type=0"


def make_session(cookie: str) -> requests.Session:
    """Session carrying the app headers and the login cookie header."""
    s = requests.Session()
    s.headers.update(HEADERS)
    if cookie:
        s.headers["Cookie"] = cookie
    return s


def fetch_monthly_pages(
    cookie: str = "",
    start: Optional[date] = None,
    end: Optional[date] = None,
    delay: Optional[float] = None,
    session: Optional[requests.Session] = None,
    reporter: Optional[Reporter] = None,
    settings: Optional[PipelineConfig] = None
) -> list[tuple]:
    """Download one record page per month.

    A month whose request fails is reported and skipped. Requests are
    spaced by delay seconds.

    Args:
        cookie: Cookie header of a logged-in session
        start: First month (default: configured fetch_start)
        end: Last month (default: today)
        delay: Seconds between requests (default: configured fetch_delay)
        session: Optional pre-built requests session
        reporter: Diagnostics collector
        settings: Pipeline configuration

    Returns:
        List of (day, html) pairs keyed by the month's first day
    """
    settings = settings if settings is not None else default_config
    reporter = reporter if reporter is not None else Reporter(quiet=True)
    start = start or settings.fetch_start
    end = end or date.today()
    delay = settings.fetch_delay if delay is None else delay
    s = session if session is not None else make_session(cookie or settings.cookie)

    pages = []
    months = list(iter_months(start, end))
    for i, month in enumerate(months):
        url = month_url(month, settings)
        try:
            r = s.get(url, headers={"Referer": url}, timeout=settings.fetch_timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            reporter.error(EventType.FETCH_FAILED, f"Error fetching {month:%Y/%m}: {e}")
        else:
            pages.append((month.isoformat(), r.text))
            reporter.info(f"Fetched {month:%Y/%m} ({len(r.text)} bytes)")

        if i < len(months) - 1 and delay > 0:
            time.sleep(delay)

    return pages
