"""
Delimiter compilation and tag scanning.
"""

import re
from typing import List, Pattern, Sequence

from ..core.errors import ConfigError
from ..core.models import TagMatch

DEFAULT_DELIMITERS = ("{{", "}}")


def compile_delimiters(delimiters: Sequence[str] = DEFAULT_DELIMITERS) -> Pattern[str]:
    """Compile an (open, close) pair into a lazy tag pattern.

    Both delimiters are matched literally. The captured group is everything
    between an opening delimiter and the nearest following closing delimiter,
    line breaks included.

    Raises:
        ConfigError: if ``delimiters`` is not a pair of non-empty strings.
    """
    if isinstance(delimiters, str):
        raise ConfigError(
            f"delimiters must be an (open, close) pair, got {delimiters!r}"
        )
    try:
        open_delim, close_delim = delimiters
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"delimiters must be an (open, close) pair, got {delimiters!r}"
        ) from e
    if not isinstance(open_delim, str) or not isinstance(close_delim, str):
        raise ConfigError("delimiters must be strings")
    if not open_delim or not close_delim:
        raise ConfigError("delimiters must be non-empty")

    return re.compile(
        re.escape(open_delim) + r"(.+?)" + re.escape(close_delim), re.DOTALL
    )


def find_tags(text: str, delimiters: Sequence[str] = DEFAULT_DELIMITERS) -> List[TagMatch]:
    """Locate every tag in ``text``, ordered by start offset.

    An opening delimiter with no closing delimiter after it is not a tag.
    """
    pattern = compile_delimiters(delimiters)
    return [
        TagMatch(m.start(), m.end(), m.group(1)) for m in pattern.finditer(text)
    ]


def has_tags(text: str, delimiters: Sequence[str] = DEFAULT_DELIMITERS) -> bool:
    return compile_delimiters(delimiters).search(text) is not None
