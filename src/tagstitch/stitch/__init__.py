"""
Chunk merging for tagstitch.

Source lines are split into labelled chunks at ``## ---- label, opts`` header
lines and spliced into a host template at its ``%sCHUNK_LABEL_HERE`` line.
"""

from .merger import (
    DEFAULT_HEADER_MARKER,
    DEFAULT_LABEL,
    DEFAULT_LABEL_TOKEN,
    find_headers,
    find_marker_line,
    header_format,
    header_pattern,
    merge,
    merge_chunks,
    parse_header,
    stamp,
)
from .metadata import extract_metadata
from .stitcher import stitch
from .templates import list_templates, resolve_template

__all__ = [
    "DEFAULT_HEADER_MARKER",
    "DEFAULT_LABEL",
    "DEFAULT_LABEL_TOKEN",
    "extract_metadata",
    "find_headers",
    "find_marker_line",
    "header_format",
    "header_pattern",
    "list_templates",
    "merge",
    "merge_chunks",
    "parse_header",
    "resolve_template",
    "stamp",
    "stitch",
]
