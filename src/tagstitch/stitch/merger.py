"""
Merge source lines into a host template as labelled chunks.
"""

import re
from typing import List, Optional, Pattern, Sequence

from ..core.errors import TemplateError
from ..core.logging import log
from ..core.models import ChunkHeader

DEFAULT_HEADER_MARKER = "## ----"
DEFAULT_LABEL_TOKEN = "CHUNK_LABEL_HERE"
DEFAULT_LABEL = "auto-report"


def header_pattern(marker: str = DEFAULT_HEADER_MARKER) -> Pattern[str]:
    """Pattern for ``<marker> label, opt=val, ...`` lines.

    Extra dashes after the marker and a trailing dash run are ignored, so
    ``## ---- label ----`` carries the label ``label``.
    """
    return re.compile(r"^" + re.escape(marker) + r"-*\s*(.*?)\s*-*\s*$")


def parse_header(
    line: str, marker: str = DEFAULT_HEADER_MARKER, line_no: int = 0
) -> Optional[ChunkHeader]:
    match = header_pattern(marker).match(line)
    if match is None:
        return None
    return ChunkHeader(line_no, match.group(1))


def find_headers(
    lines: Sequence[str], marker: str = DEFAULT_HEADER_MARKER
) -> List[ChunkHeader]:
    """Return the chunk headers in ``lines`` in line order."""
    pattern = header_pattern(marker)
    headers = []
    for i, line in enumerate(lines):
        match = pattern.match(line)
        if match:
            headers.append(ChunkHeader(i, match.group(1)))
    return headers


def find_marker_line(
    template_lines: Sequence[str], label_token: str = DEFAULT_LABEL_TOKEN
) -> int:
    """Index of the single template line holding ``%s<label_token>``.

    Raises:
        TemplateError: if no line or more than one line holds the marker.
    """
    marker = "%s" + label_token
    hits = [i for i, line in enumerate(template_lines) if marker in line]
    if len(hits) != 1:
        raise TemplateError(
            f"Wrong template for stitch: expected exactly one line containing "
            f"{marker!r}, found {len(hits)}"
        )
    return hits[0]


def header_format(
    template_lines: Sequence[str], label_token: str = DEFAULT_LABEL_TOKEN
) -> str:
    """The marker line with the label token removed, leaving a ``%s`` slot."""
    line = template_lines[find_marker_line(template_lines, label_token)]
    return line.replace(label_token, "", 1)


def stamp(fmt: str, text: str) -> str:
    """Fill the ``%s`` slot of a header format."""
    return fmt.replace("%s", text, 1)


def merge_chunks(
    source_lines: Sequence[str],
    fmt: str,
    header_marker: str = DEFAULT_HEADER_MARKER,
    default_label: str = DEFAULT_LABEL,
) -> List[str]:
    """Stamp chunk headers into ``source_lines``.

    With no headers the whole source becomes one chunk labelled
    ``default_label``. Otherwise every header line is replaced by its stamped
    form, and content before the first header gets an unlabelled chunk.
    """
    lines = list(source_lines)
    headers = find_headers(lines, header_marker)

    if not headers:
        log.debug("merge.headers", count=0, default_label=default_label)
        return [stamp(fmt, default_label)] + lines

    for header in headers:
        lines[header.line_no] = stamp(fmt, header.body)
    if headers[0].line_no != 0:
        lines.insert(0, stamp(fmt, ""))

    log.debug(
        "merge.headers",
        count=len(headers),
        leading_chunk=headers[0].line_no != 0,
    )
    return lines


def merge(
    source_lines: Sequence[str],
    template_lines: Sequence[str],
    header_marker: str = DEFAULT_HEADER_MARKER,
    default_label: str = DEFAULT_LABEL,
    label_token: str = DEFAULT_LABEL_TOKEN,
) -> List[str]:
    """
    Splice ``source_lines`` into ``template_lines`` at the marker line.

    Args:
        source_lines: Content to embed, possibly holding chunk headers
        template_lines: Host template with exactly one ``%sCHUNK_LABEL_HERE`` line
        header_marker: Prefix identifying a chunk header line in the source
        default_label: Label for the implicit chunk when there are no headers
        label_token: Inner token of the template marker

    Returns:
        Template lines with the marker line replaced by the merged block,
        itself a single newline-joined string

    Raises:
        TemplateError: if the template does not hold exactly one marker line
    """
    index = find_marker_line(template_lines, label_token)
    fmt = template_lines[index].replace(label_token, "", 1)
    merged = merge_chunks(source_lines, fmt, header_marker, default_label)

    result = list(template_lines)
    result[index] = "\n".join(merged)
    return result
