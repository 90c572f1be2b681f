"""tagstitch: tag expansion and chunk stitching for report templates."""

__version__ = "0.1.0"

from .core.errors import ConfigError, EvaluationError, TagstitchError, TemplateError
from .expand import VariableScope, expand, expand_file
from .stitch import merge, stitch

__all__ = [
    "ConfigError",
    "EvaluationError",
    "TagstitchError",
    "TemplateError",
    "VariableScope",
    "__version__",
    "expand",
    "expand_file",
    "merge",
    "stitch",
]
