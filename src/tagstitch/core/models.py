from typing import Any, NamedTuple

from pydantic import BaseModel


class TagMatch(NamedTuple):
    """One delimiter-bounded tag located in a block of text."""

    start: int  # offset of the opening delimiter
    end: int  # offset just past the closing delimiter
    expression: str  # text strictly between the delimiters


class ChunkHeader(NamedTuple):
    """A chunk header line found in source lines."""

    line_no: int  # 0-based index into the source lines
    body: str  # everything after the marker, trimmed

    @property
    def label(self) -> str:
        """First comma-delimited field of the body, may be empty."""
        return self.body.split(",", 1)[0].strip()

    @property
    def options(self) -> str:
        """Raw option text after the first comma, not parsed."""
        parts = self.body.split(",", 1)
        return parts[1].strip() if len(parts) > 1 else ""


class StitchResult(BaseModel):
    text: str  # composed template text
    title: str | None = None  # from a leading "## title:" comment
    author: str | None = None  # from a leading "## author:" comment
    template: str  # template name or path that was used
    chunk_count: int = 0
    expanded: bool = False  # whether tags in the template were expanded
    output: Any = None  # return value of the compile callback, if any
