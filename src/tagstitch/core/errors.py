"""Error taxonomy shared by the expander, the merger and the CLI."""

from typing import Optional


class TagstitchError(Exception):
    """Base class for all tagstitch failures."""

    pass


class ConfigError(TagstitchError):
    """Raised when delimiters or other configuration input are malformed."""

    pass


class TemplateError(TagstitchError):
    """Raised when a host template cannot be used for stitching."""

    pass


class EvaluationError(TagstitchError):
    """Raised when a tag expression fails to evaluate.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, expression: str, start: int, reason: Optional[str] = None):
        self.expression = expression
        self.start = start
        message = f"failed to evaluate tag at offset {start}: {expression.strip()!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
