"""Title and author comments at the top of a source script."""

import re
from typing import Dict, List, Sequence, Tuple

TITLE_PATTERN = re.compile(r"^#+ *title:")
AUTHOR_PATTERN = re.compile(r"^#+ *author:")


def _take(lines: List[str], pattern: re.Pattern) -> str | None:
    if lines and pattern.match(lines[0]):
        value = pattern.sub("", lines.pop(0), count=1)
        return value.strip()
    return None


def extract_metadata(lines: Sequence[str]) -> Tuple[Dict[str, str | None], List[str]]:
    """Pull ``## title:`` then ``## author:`` off the first lines.

    Only the first line is checked for the title, and only the line that
    follows it (or the first line, without a title) for the author.

    Returns:
        ({"title": ..., "author": ...}, remaining lines)
    """
    remaining = list(lines)
    title = _take(remaining, TITLE_PATTERN)
    author = _take(remaining, AUTHOR_PATTERN)
    return {"title": title, "author": author}, remaining
