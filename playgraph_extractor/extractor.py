"""Locate and decode PlayGraph widgets embedded in record pages."""

import json
import re
from typing import Optional

from .diagnostics import EventType, Reporter
from .models import PixelGraph

REQUIRED_KEYS = ("GRAPH_RECT", "PLAY_INFO", "PLAY_LOG")

# new PlayGraph(<element>, '<json>')
PLAY_GRAPH_PATTERN = re.compile(r"new PlayGraph\([^,]+,\s*'([^']+)'\)")

ACTUAL_GAMES_PATTERN = re.compile(
    r'<td class="cName">ゲーム数</td>\s*<td class="param">(\d+)G</td>'
)

DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")


def _decode_payload(raw: str) -> Optional[PixelGraph]:
    """Decode one payload, returning None if required keys are missing."""
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        return None
    if not all(payload.get(key) is not None for key in REQUIRED_KEYS):
        return None
    return PixelGraph.from_dict(payload)


def extract_graph_blocks(html: str, reporter: Optional[Reporter] = None) -> list[PixelGraph]:
    """Extract every valid PlayGraph payload from a page.

    A payload that fails to decode is retried once with line breaks
    removed. Payloads that still fail, or that lack GRAPH_RECT, PLAY_INFO
    or PLAY_LOG, are skipped and scanning continues.

    Args:
        html: Raw page text
        reporter: Optional reporter for skipped payloads

    Returns:
        List of graphs in document order
    """
    blocks = []

    for match in PLAY_GRAPH_PATTERN.finditer(html):
        raw = match.group(1)
        try:
            graph = _decode_payload(raw)
        except (ValueError, KeyError, TypeError) as first_error:
            cleaned = raw.replace("\n", "").replace("\r", "")
            try:
                graph = _decode_payload(cleaned)
            except (ValueError, KeyError, TypeError) as retry_error:
                if reporter is not None:
                    reporter.warning(
                        EventType.MALFORMED_PAYLOAD,
                        f"Skipping PlayGraph at offset {match.start()}: "
                        f"{first_error}; retry failed: {retry_error}",
                    )
                continue

        if graph is not None:
            blocks.append(graph)

    return blocks


def select_target_graph(blocks: list[PixelGraph]) -> Optional[PixelGraph]:
    """Pick the graph with the most points (first one wins ties)."""
    if not blocks:
        return None

    target = blocks[0]
    for graph in blocks[1:]:
        if graph.point_count > target.point_count:
            target = graph
    return target


def extract_actual_games(html: str) -> Optional[int]:
    """Read the game count printed in the page's session table."""
    match = ACTUAL_GAMES_PATTERN.search(html)
    return int(match.group(1)) if match else None


def extract_date_from_path(file_path) -> Optional[str]:
    """Return the first YYYY-MM-DD found in a file path."""
    match = DATE_PATTERN.search(str(file_path))
    return match.group(1) if match else None
