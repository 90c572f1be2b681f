"""
Single-pass tag expansion.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..core.errors import EvaluationError
from ..core.logging import log
from .patterns import DEFAULT_DELIMITERS, compile_delimiters
from .scope import Evaluator, as_scope, python_evaluator


def render_value(value: Any) -> str:
    """Turn an evaluated tag value into text.

    None renders as nothing. Non-string iterables other than mappings render
    one item per line; mappings and scalars use str().
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        return "\n".join(render_value(item) for item in value)
    return str(value)


def expand(
    text: str,
    delimiters: Sequence[str] = DEFAULT_DELIMITERS,
    context: Any = None,
    evaluator: Optional[Evaluator] = None,
) -> str:
    """
    Expand every tag in ``text`` and return the reassembled text.

    Tags are evaluated left to right against one shared context, so a value
    assigned by one tag is visible to every tag after it. Substituted values
    are not scanned again.

    Args:
        text: Text that may contain tags
        delimiters: (open, close) pair marking a tag
        context: Mapping or VariableScope the expressions run against
        evaluator: Callable taking (expression, scope); defaults to Python

    Returns:
        The text with each tag replaced by its rendered value

    Raises:
        ConfigError: if ``delimiters`` is malformed
        EvaluationError: if any tag fails to evaluate; nothing is returned
    """
    pattern = compile_delimiters(delimiters)
    matches = list(pattern.finditer(text))
    if not matches:
        return text

    scope = as_scope(context)
    evaluate = evaluator or python_evaluator
    log.debug("expand.start", tags=len(matches), chars=len(text))

    pieces: List[str] = []
    last_end = 0
    for match in matches:
        expression = match.group(1)
        try:
            value = evaluate(expression, scope)
        except Exception as e:
            raise EvaluationError(expression, match.start(), str(e)) from e
        pieces.append(text[last_end : match.start()])
        pieces.append(render_value(value))
        last_end = match.end()
    pieces.append(text[last_end:])

    log.debug("expand.done", tags=len(matches))
    return "".join(pieces)


def expand_lines(
    lines: Iterable[str],
    delimiters: Sequence[str] = DEFAULT_DELIMITERS,
    context: Any = None,
    evaluator: Optional[Evaluator] = None,
) -> str:
    """Join ``lines`` with newlines and expand the result."""
    return expand("\n".join(lines), delimiters, context, evaluator)


def read_text(path: str | Path) -> str:
    """Read a UTF-8 file, dropping a leading byte order mark."""
    return Path(path).read_text(encoding="utf-8-sig")


def expand_file(
    path: str | Path,
    delimiters: Sequence[str] = DEFAULT_DELIMITERS,
    context: Any = None,
    evaluator: Optional[Evaluator] = None,
) -> str:
    """Expand the tags in a template file."""
    log.info("expand.file", path=str(path))
    return expand(read_text(path), delimiters, context, evaluator)
