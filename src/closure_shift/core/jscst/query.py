"""
Descendant Search.
"""

from typing import Callable, List, Set

from closure_shift.core.jscst.nodes import Node


def find(root: Node, predicate: Callable[[Node], bool]) -> List[Node]:
  """
  Collects every node under ``root`` (inclusive) accepted by ``predicate``.

  The result is a snapshot in document order; callers may mutate the tree
  while iterating it.
  """
  return [node for node in root.walk() if predicate(node)]


def top_level_statements(module: Node) -> List[Node]:
  """Snapshot of the program's direct statements, comments excluded."""
  return [c for c in module.children if c.named and c.type != "comment"]


def declared_names(module: Node) -> Set[str]:
  """
  Names bound by top-level declarations.

  Covers classes, functions and ``var``/``let``/``const`` declarators with a
  plain identifier target.
  """
  names: Set[str] = set()
  for stmt in top_level_statements(module):
    if stmt.type in ("class_declaration", "function_declaration", "generator_function_declaration"):
      name = stmt.child("name")
      if name is not None:
        names.add(name.code)
    elif stmt.type in ("lexical_declaration", "variable_declaration"):
      for declarator in stmt.named_children:
        target = declarator.child("name")
        if target is not None and target.type == "identifier":
          names.add(target.code)
  return names
