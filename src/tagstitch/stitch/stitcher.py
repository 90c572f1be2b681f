"""
Compose a report from a source script and a host template.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from ..core.config import SETTINGS, Settings
from ..core.logging import log
from ..core.models import StitchResult
from ..expand import VariableScope, as_scope, expand, has_tags, read_text
from .merger import find_headers, find_marker_line, merge
from .metadata import extract_metadata
from .templates import resolve_template

Compiler = Callable[[str], Any]


def split_lines(text: str) -> list[str]:
    """Split text on line breaks only, tolerating CRLF and a trailing newline.

    Form feeds and other Unicode separators stay inside their line.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _expand_block(lines: list[str], delimiters, scope: VariableScope) -> list[str]:
    if not lines:
        return []
    return expand("\n".join(lines), delimiters, scope).split("\n")


def stitch(
    source: str | Path | None = None,
    template: str | None = None,
    *,
    text: str | None = None,
    context: Any = None,
    settings: Optional[Settings] = None,
    compile: Optional[Compiler] = None,
) -> StitchResult:
    """
    Build a report by merging a source script into a host template.

    The first line of the source may be a ``## title:`` comment and the next
    a ``## author:`` comment; both are removed from the body and exposed to
    the template's tags as ``title`` and ``author``.

    Args:
        source: Path of the source script (ignored when ``text`` is given)
        template: Built-in template name or template path
        text: Source content given directly
        context: Ambient variables for the template's tags
        settings: Settings to use instead of the global SETTINGS
        compile: Callable receiving the composed text, e.g. a document compiler

    Returns:
        StitchResult holding the composed text and the compile output

    Raises:
        TemplateError: if the template cannot be found or has no single marker
        EvaluationError: if a template tag fails to evaluate
    """
    settings = settings or SETTINGS
    if text is None:
        if source is None:
            raise ValueError("either a source path or text is required")
        text = read_text(source)
    template = template or settings.DEFAULT_TEMPLATE

    meta, lines = extract_metadata(split_lines(text))
    template_lines = split_lines(
        resolve_template(template, template_dir=settings.TEMPLATE_DIR)
    )

    index = find_marker_line(template_lines, settings.LABEL_TOKEN)
    host_lines = template_lines[:index] + template_lines[index + 1 :]
    needs_expansion = has_tags("\n".join(host_lines), settings.delimiters)

    merged = merge(
        lines,
        template_lines,
        header_marker=settings.HEADER_MARKER,
        default_label=settings.DEFAULT_LABEL,
        label_token=settings.LABEL_TOKEN,
    )
    before, body, after = merged[:index], merged[index], merged[index + 1 :]

    # Merged source lines are never scanned for tags
    if needs_expansion:
        scope = VariableScope(dict(meta), as_scope(context))
        before = _expand_block(before, settings.delimiters, scope)
        after = _expand_block(after, settings.delimiters, scope)
    composed = "\n".join(before + [body] + after)

    headers = find_headers(lines, settings.HEADER_MARKER)
    chunk_count = len(headers) + (not headers or headers[0].line_no != 0)

    output = compile(composed) if compile is not None else None
    log.info(
        "stitch.done",
        template=template,
        chunks=chunk_count,
        expanded=needs_expansion,
        compiled=compile is not None,
    )
    return StitchResult(
        text=composed,
        title=meta["title"],
        author=meta["author"],
        template=str(template),
        chunk_count=chunk_count,
        expanded=needs_expansion,
        output=output,
    )
