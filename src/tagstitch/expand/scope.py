"""
Evaluation context and the default Python evaluator.
"""

from __future__ import annotations

import ast
import builtins
import textwrap
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterator, Optional

Evaluator = Callable[[str, "VariableScope"], Any]

_MISSING = object()


class VariableScope(MutableMapping):
    """Two-level variable scope.

    Names are looked up in ``explicit`` first and then in ``ambient``.
    Assignments and deletions only ever touch ``explicit``; the ambient layer
    is treated as read-only.
    """

    def __init__(
        self,
        explicit: Optional[MutableMapping[str, Any]] = None,
        ambient: Optional[Mapping[str, Any]] = None,
    ):
        self.explicit: MutableMapping[str, Any] = {} if explicit is None else explicit
        self.ambient: Mapping[str, Any] = {} if ambient is None else ambient

    def __getitem__(self, name: str) -> Any:
        if name in self.explicit:
            return self.explicit[name]
        return self.ambient[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.explicit[name] = value

    def __delitem__(self, name: str) -> None:
        del self.explicit[name]

    def __iter__(self) -> Iterator[str]:
        seen = set()
        for name in self.explicit:
            seen.add(name)
            yield name
        for name in self.ambient:
            if name not in seen:
                yield name

    def __len__(self) -> int:
        return len(set(self.explicit) | set(self.ambient))

    def __repr__(self) -> str:
        return f"VariableScope(explicit={dict(self.explicit)!r}, ambient=<{len(self.ambient)} names>)"

    def flatten(self) -> Dict[str, Any]:
        """Snapshot of every visible name, explicit values winning."""
        namespace = dict(self.ambient)
        namespace.update(self.explicit)
        return namespace


def as_scope(context: Any = None) -> VariableScope:
    """Coerce a caller-supplied context into a VariableScope.

    A plain mapping becomes the explicit layer and is mutated in place.
    """
    if isinstance(context, VariableScope):
        return context
    if context is None:
        return VariableScope()
    if isinstance(context, MutableMapping):
        return VariableScope(context)
    if isinstance(context, Mapping):
        return VariableScope(dict(context))
    raise TypeError(f"context must be a mapping, got {type(context).__name__}")


def python_evaluator(expression: str, scope: VariableScope) -> Any:
    """Run a tag body as Python code against ``scope``.

    The body may hold several statements separated by ``;`` or newlines. When
    the last statement is an expression its value is returned, otherwise the
    result is None. Names bound or rebound by the code are written back to the
    explicit layer of ``scope``; names it deletes are removed from it.
    """
    tree = ast.parse(textwrap.dedent(expression).strip(), mode="exec")

    last_expr = None
    if tree.body and isinstance(tree.body[-1], ast.Expr):
        last_expr = ast.Expression(tree.body.pop().value)

    before = scope.flatten()
    namespace = dict(before)
    namespace["__builtins__"] = builtins

    if tree.body:
        exec(compile(tree, "<tag>", "exec"), namespace)
    result = None
    if last_expr is not None:
        result = eval(compile(last_expr, "<tag>", "eval"), namespace)

    namespace.pop("__builtins__", None)
    for name, value in namespace.items():
        if before.get(name, _MISSING) is not value:
            scope[name] = value
    for name in before:
        if name not in namespace and name in scope.explicit:
            del scope[name]

    return result
