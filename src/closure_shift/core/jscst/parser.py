"""
tree-sitter Ingestion.

Parses JavaScript source with ``tree_sitter_javascript`` and hydrates the
mutable ``Node`` tree. All text between tokens is captured as trivia, so
``parse_module(src).to_text() == src`` holds for every accepted input.

Snippet helpers (``parse_statements``, ``parse_expression``,
``parse_class_members``) build detached nodes from code templates; they are the
node construction primitives used by ``builders.JsBuilder``.
"""

from typing import List, Optional

import tree_sitter
import tree_sitter_javascript

from closure_shift.core.errors import ParseError
from closure_shift.core.jscst.nodes import Node

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


def parse_module(source: str) -> Node:
  """
  Parses a complete program.

  Args:
      source: JavaScript source text.

  Returns:
      The ``program`` root node.

  Raises:
      ParseError: If tree-sitter reports a syntax error anywhere in the tree.
  """
  data = source.encode("utf-8")
  parser = tree_sitter.Parser(_JS_LANGUAGE)
  tree = parser.parse(data)
  root = tree.root_node

  if root.has_error:
    bad = _first_error(root)
    line, column = (bad.start_point[0] + 1, bad.start_point[1] + 1) if bad is not None else (0, 0)
    raise ParseError(f"Syntax error at line {line}, column {column}", line=line, column=column)

  module = _hydrate(root, data, 0, None)
  module.suffix += data[root.end_byte :].decode("utf-8")
  return module


def _hydrate(ts_node: tree_sitter.Node, data: bytes, pos: int, field_name: Optional[str]) -> Node:
  node = Node(
    type=ts_node.type,
    prefix=data[pos : ts_node.start_byte].decode("utf-8"),
    field_name=field_name,
    named=ts_node.is_named,
  )

  if ts_node.child_count == 0:
    node.value = data[ts_node.start_byte : ts_node.end_byte].decode("utf-8")
    return node

  offset = ts_node.start_byte
  cursor = ts_node.walk()
  if cursor.goto_first_child():
    while True:
      child_ts = cursor.node
      child = _hydrate(child_ts, data, offset, cursor.field_name)
      child.parent = node
      node.children.append(child)
      offset = max(offset, child_ts.end_byte)
      if not cursor.goto_next_sibling():
        break

  node.suffix = data[offset : ts_node.end_byte].decode("utf-8")
  return node


def _first_error(ts_node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
  if ts_node.type == "ERROR" or ts_node.is_missing:
    return ts_node
  for child in ts_node.children:
    if child.has_error or child.is_missing:
      found = _first_error(child)
      if found is not None:
        return found
  return None


# --- Snippet Construction ---


def parse_statements(code: str) -> List[Node]:
  """
  Parses a code fragment into detached top-level nodes (comments included).

  Args:
      code: One or more statements.

  Returns:
      The statement nodes in source order, each detached from the parse root.
  """
  module = parse_module(code)
  nodes = list(module.children)
  for n in nodes:
    n.parent = None
    n.field_name = None
  return nodes


def parse_statement(code: str) -> Node:
  """Parses a single statement and returns it detached, without leading trivia."""
  for node in parse_statements(code):
    if node.type != "comment":
      node.prefix = ""
      return node
  raise ParseError(f"No statement found in snippet: {code!r}")


def parse_expression(code: str) -> Node:
  """
  Parses a single expression.

  The snippet is wrapped in parentheses so object literals and function
  expressions are not mistaken for blocks or declarations.
  """
  stmt = parse_statement(f"({code});")
  wrapper = stmt.named_children[0]
  inner = wrapper.named_children[0]
  inner.detach()
  inner.prefix = ""
  inner.field_name = None
  return inner


def parse_class_members(code: str) -> List[Node]:
  """
  Parses class member source (methods, fields, comments).

  The members are parsed inside a throwaway class at column zero, so their
  prefixes carry the indentation written in ``code``.
  """
  decl = parse_statement(f"class _ {{\n{code}\n}}")
  body = decl.child("body")
  members = body.children[1:-1]
  for member in members:
    member.parent = None
  return members
