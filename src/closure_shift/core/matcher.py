"""
Declarative Shape Matching.

A *shape* is a partial structural description of a node. It is either a
predicate ``Callable[[Node], bool]`` or a dict whose keys constrain the node:

- ``type``: node type, or a tuple of accepted types.
- ``text``: exact source text (trivia excluded).
- ``dotted``: exact dotted name (see ``Node.dotted_name``).
- ``string``: content of a string literal.
- ``arguments``: list of shapes, one per positional call argument (exact arity).
- ``argc``: number of call arguments.
- any other key: a grammar field of the node, matched against a nested shape.

Values for ``type``, ``text``, ``dotted`` and ``string`` may themselves be
predicates over the extracted value. Matching never mutates the tree.

Example::

    matches(node, {
      "type": "call_expression",
      "function": {"dotted": "goog.inherits"},
      "argc": 2,
    })
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.query import find

Shape = Union[Dict[str, Any], Callable[[Node], bool]]


def matches(node: Optional[Node], shape: Shape) -> bool:
  """
  Checks whether ``node`` satisfies ``shape``.

  Args:
      node: Candidate node (None never matches).
      shape: Dict shape or predicate.

  Returns:
      True if every constraint of the shape holds.
  """
  if node is None:
    return False
  if callable(shape):
    return bool(shape(node))

  for key, expected in shape.items():
    if key == "type":
      types = expected if isinstance(expected, tuple) else (expected,)
      if callable(expected):
        if not expected(node.type):
          return False
      elif node.type not in types:
        return False
    elif key == "text":
      if not _check(node.code, expected):
        return False
    elif key == "dotted":
      if not _check(node.dotted_name(), expected):
        return False
    elif key == "string":
      if not _check(string_value(node), expected):
        return False
    elif key == "arguments":
      args = call_arguments(node)
      if args is None or len(args) != len(expected):
        return False
      if not all(matches(arg, sub) for arg, sub in zip(args, expected)):
        return False
    elif key == "argc":
      args = call_arguments(node)
      if args is None or len(args) != expected:
        return False
    elif not matches(node.child(key), expected):
      return False
  return True


def _check(value: Any, expected: Any) -> bool:
  if callable(expected):
    return value is not None and bool(expected(value))
  return value == expected


def find_all(root: Node, shape: Shape) -> List[Node]:
  """Pre-order list of every node under ``root`` matching ``shape``."""
  return find(root, lambda n: matches(n, shape))


# --- Extractors ---


def call_arguments(node: Node) -> Optional[List[Node]]:
  """
  Positional arguments of a call or ``new`` expression.

  Returns:
      The argument nodes, or None if ``node`` is not a plain call.
  """
  if node.type not in ("call_expression", "new_expression"):
    return None
  args = node.child("arguments")
  if args is None or args.type != "arguments":
    return None
  return args.named_children


def string_value(node: Node) -> Optional[str]:
  """Content of a quoted string literal, without the quotes."""
  if node.type != "string":
    return None
  return node.code[1:-1]


def assignment_parts(stmt: Node) -> Optional[Tuple[Node, Node]]:
  """
  Splits ``left = right;`` expression statements.

  Args:
      stmt: Candidate statement.

  Returns:
      ``(left, right)`` for plain ``=`` assignments, else None.
  """
  if stmt.type != "expression_statement":
    return None
  named = stmt.named_children
  if not named or named[0].type != "assignment_expression":
    return None
  expr = named[0]
  return expr.child("left"), expr.child("right")


# --- Convenience Shapes ---


def member_of(path: str) -> Dict[str, Any]:
  """Shape of a member access whose object is exactly ``path`` (``path.x``)."""
  return {"type": "member_expression", "object": {"dotted": path}}


def is_member_path(node: Node, path: str) -> bool:
  """True if ``node`` is an identifier or member chain spelling exactly ``path``."""
  return matches(node, {"type": ("identifier", "member_expression"), "dotted": path})


def is_qualified_call(node: Node, path: str) -> bool:
  """True if ``node`` calls the function named ``path``."""
  return matches(node, {"type": "call_expression", "function": {"dotted": path}})


def is_namespace_export_call(node: Node) -> bool:
  """True for ``goog.provide('a.b.c')``."""
  return matches(
    node,
    {
      "type": "call_expression",
      "function": {"dotted": "goog.provide"},
      "arguments": [{"type": "string"}],
    },
  )


def is_module_declaration(node: Node) -> bool:
  """True for ``goog.module('a.b.c')``."""
  return matches(
    node,
    {
      "type": "call_expression",
      "function": {"dotted": "goog.module"},
      "arguments": [{"type": "string"}],
    },
  )


def call_statement(stmt: Node, path: str) -> Optional[Node]:
  """
  Returns the call expression of an ``path(...);`` statement.

  Args:
      stmt: Candidate expression statement.
      path: Dotted callee name.
  """
  if stmt.type != "expression_statement":
    return None
  named = stmt.named_children
  if named and is_qualified_call(named[0], path):
    return named[0]
  return None
