"""PlayGraph Extractor - Rebuild balance curves from record page graphs."""

__version__ = "1.0.0"

from .extractor import extract_graph_blocks, select_target_graph
from .transform import to_series
from .censor import detect_censor_flags
from .extrapolation import extrapolate_series
from .stitcher import stitch_days
from .pipeline import process_day_html, process_documents

__all__ = [
    "extract_graph_blocks",
    "select_target_graph",
    "to_series",
    "detect_censor_flags",
    "extrapolate_series",
    "stitch_days",
    "process_day_html",
    "process_documents",
    "__version__",
]
