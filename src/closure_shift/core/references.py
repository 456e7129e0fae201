"""
Qualified Reference Rewriting.
"""

from typing import List, Optional

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import parse_expression
from closure_shift.core.jscst.query import find


def references_to(root: Node, path: str) -> List[Node]:
  """
  Collects identifier/member nodes spelling ``path``.

  References to members of ``path`` are found through their object node, so
  ``a.b.C.x`` yields its inner ``a.b.C``.
  """
  return find(root, lambda n: n.type in ("identifier", "member_expression") and n.dotted_name() == path)


def is_referenced(root: Node, path: str, exclude: Optional[Node] = None) -> bool:
  """True if ``path`` (or a member of it) is referenced outside ``exclude``."""
  for node in references_to(root, path):
    if exclude is not None and (node is exclude or any(a is exclude for a in node.ancestors())):
      continue
    return True
  return False


def rewrite_references(root: Node, path: str, replacement: str) -> int:
  """
  Replaces every reference to ``path`` under ``root`` with ``replacement``.

  Property accesses and calls on the reference keep working because only the
  matched node is swapped (``a.b.C.x()`` -> ``C.x()``).

  Args:
      root: Subtree to rewrite.
      path: Dotted name to replace, e.g. ``app.ui.Widget``.
      replacement: Identifier or dotted expression source.

  Returns:
      Number of replaced nodes.
  """
  count = 0
  for node in references_to(root, path):
    node.replace_with(parse_expression(replacement))
    count += 1
  return count


def rename_property_references(root: Node, object_path: str, old: str, new: str) -> int:
  """
  Renames ``<object_path>.<old>`` accesses to ``<object_path>.<new>``.

  Args:
      root: Subtree to rewrite.
      object_path: Dotted object name, e.g. ``this`` or ``app.Widget.prototype``.
      old: Current property name.
      new: New property name.

  Returns:
      Number of renamed accesses.
  """
  count = 0
  for node in find(root, lambda n: n.type == "member_expression"):
    prop = node.child("property")
    if prop is None or prop.type != "property_identifier" or prop.value != old:
      continue
    obj = node.child("object")
    if obj is not None and obj.dotted_name() == object_path:
      prop.value = new
      count += 1
  return count
