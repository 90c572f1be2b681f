"""
Tag expansion for tagstitch.

Tags are delimiter-bounded expressions (``{{ ... }}`` by default) that are
evaluated against a variable scope and replaced by their values in one pass.
"""

from .expander import expand, expand_file, expand_lines, read_text, render_value
from .patterns import DEFAULT_DELIMITERS, compile_delimiters, find_tags, has_tags
from .scope import Evaluator, VariableScope, as_scope, python_evaluator

__all__ = [
    "DEFAULT_DELIMITERS",
    "Evaluator",
    "VariableScope",
    "as_scope",
    "compile_delimiters",
    "expand",
    "expand_file",
    "expand_lines",
    "find_tags",
    "has_tags",
    "python_evaluator",
    "read_text",
    "render_value",
]
