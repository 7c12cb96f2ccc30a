"""Restricted literal evaluation for Python page frontmatter.

A Python page declares its frontmatter as a module-level dict literal::

    CATEGORY = "writing"

    frontmatter = {
        "title": "Page 1",
        "type": "select",
        "selectedTerms": [CATEGORY],
        "taxonomyName": "categories",
    }

The module is parsed with :mod:`ast` and only the literal bound to
``frontmatter`` is evaluated, by walking its tree. Nothing in the module
is ever executed: calls, attribute access, subscripts, comprehensions,
f-strings and operators are rejected. Plain names are allowed when they
refer to an earlier module-level binding that was itself a literal.
"""

from __future__ import annotations

import ast
import copy
from typing import Any

FRONTMATTER_NAME = "frontmatter"

_SCALARS = (str, int, float, bool, type(None))


class UnsafeLiteral(ValueError):
    """An expression contains a node the literal evaluator does not accept."""

    def __init__(self, message: str, node: ast.AST | None = None) -> None:
        self.lineno: int | None = getattr(node, "lineno", None)
        if self.lineno is not None:
            message = f"line {self.lineno}: {message}"
        super().__init__(message)


def evaluate(node: ast.expr, names: dict[str, Any] | None = None) -> Any:
    """Structurally evaluate a literal expression tree.

    Args:
        node: Expression node to evaluate.
        names: Values of already-resolved module-level literals, available
            to plain ``Name`` references.

    Returns:
        Plain Python data. Tuples and sets come back as lists.

    Raises:
        UnsafeLiteral: If the tree contains any non-literal node.

    """
    names = names if names is not None else {}

    if isinstance(node, ast.Constant):
        if isinstance(node.value, _SCALARS):
            return node.value
        msg = f"unsupported constant {type(node.value).__name__}"
        raise UnsafeLiteral(msg, node)

    if isinstance(node, ast.Dict):
        result: dict[Any, Any] = {}
        for key, value in zip(node.keys, node.values, strict=True):
            if key is None:
                msg = "dict unpacking (**) is not a literal"
                raise UnsafeLiteral(msg, value)
            k = evaluate(key, names)
            if isinstance(k, (list, dict)):
                msg = "dict keys must be scalars"
                raise UnsafeLiteral(msg, key)
            result[k] = evaluate(value, names)
        return result

    if isinstance(node, (ast.List, ast.Tuple, ast.Set)):
        items = [_element(elt, names) for elt in node.elts]
        if isinstance(node, ast.Set):
            return _unique(items, node)
        return items

    if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
        operand = evaluate(node.operand, names)
        if isinstance(operand, bool) or not isinstance(operand, (int, float)):
            msg = "unary +/- only applies to numbers"
            raise UnsafeLiteral(msg, node)
        return -operand if isinstance(node.op, ast.USub) else operand

    if isinstance(node, ast.Name):
        if node.id in names:
            return copy.deepcopy(names[node.id])
        msg = f"name {node.id!r} does not refer to a module-level literal"
        raise UnsafeLiteral(msg, node)

    msg = f"{type(node).__name__} is not a literal"
    raise UnsafeLiteral(msg, node)


def _element(node: ast.expr, names: dict[str, Any]) -> Any:
    if isinstance(node, ast.Starred):
        msg = "starred unpacking is not a literal"
        raise UnsafeLiteral(msg, node)
    return evaluate(node, names)


def _unique(items: list[Any], node: ast.AST) -> list[Any]:
    seen: list[Any] = []
    for item in items:
        if isinstance(item, (list, dict)):
            msg = "set members must be scalars"
            raise UnsafeLiteral(msg, node)
        if item not in seen:
            seen.append(item)
    return seen


def _bindings(stmt: ast.stmt) -> list[tuple[str, ast.expr]]:
    """Return the ``(name, value)`` pairs a top-level statement binds."""
    if isinstance(stmt, ast.Assign):
        return [
            (target.id, stmt.value)
            for target in stmt.targets
            if isinstance(target, ast.Name)
        ]
    if (
        isinstance(stmt, ast.AnnAssign)
        and stmt.value is not None
        and isinstance(stmt.target, ast.Name)
    ):
        return [(stmt.target.id, stmt.value)]
    return []


def find_frontmatter(module: ast.Module) -> dict[str, Any] | None:
    """Evaluate the module-level ``frontmatter`` dict literal.

    The last top-level binding of ``frontmatter`` wins, and it sees only
    the literal names bound before it, as it would at import time.

    Returns:
        The evaluated mapping, or None when there is no binding or the
        last binding is not a dict literal.

    Raises:
        UnsafeLiteral: If the bound dict literal contains non-literal nodes.

    """
    names: dict[str, Any] = {}
    candidate: tuple[ast.expr, dict[str, Any]] | None = None

    for stmt in module.body:
        for name, value in _bindings(stmt):
            if name == FRONTMATTER_NAME:
                candidate = (value, dict(names))
                continue
            try:
                names[name] = evaluate(value, names)
            except UnsafeLiteral:
                # Rebound to something dynamic: no longer a known literal
                names.pop(name, None)

    if candidate is None:
        return None
    node, scope = candidate
    if not isinstance(node, ast.Dict):
        return None
    return evaluate(node, scope)
