"""Builders for synthetic record pages used across the tests."""

import json

RECT = {"x": 119, "y": 68, "w": 893, "h": 646}
INFO = {"total": 8000, "min": -2000, "max": 4000}


def pixel_for(game, diff, rect=RECT, info=INFO):
    """Forward widget mapping: domain values to canvas pixels."""
    px = rect["x"] + game / info["total"] * rect["w"]
    py = rect["y"] + (info["max"] - diff) / (info["max"] - info["min"]) * rect["h"]
    return [px, py]


def graph_payload(domain_points, rect=RECT, info=INFO):
    return {
        "GRAPH_RECT": rect,
        "PLAY_INFO": info,
        "PLAY_LOG": [pixel_for(g, d, rect, info) for g, d in domain_points],
    }


def play_graph_script(payload, element="play_graph_0"):
    raw = payload if isinstance(payload, str) else json.dumps(payload)
    return f"<script>new PlayGraph(document.getElementById('{element}'), '{raw}');</script>"


def games_row(games):
    return f'<tr><td class="cName">ゲーム数</td>\n<td class="param">{games}G</td></tr>'


def record_page(*scripts, games=None):
    body = "".join(scripts)
    table = f"<table>{games_row(games)}</table>" if games is not None else ""
    return f"<html><body>{table}{body}</body></html>"
