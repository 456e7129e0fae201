"""
JavaScript Concrete Syntax Tree Nodes.

This module defines the mutable node structure shared by every rewriting pass.
Nodes are hydrated from a tree-sitter parse (see ``parser.py``) and keep all
inter-token text (whitespace, line breaks) in their ``prefix`` so that printing
an unmodified tree reproduces the source exactly.

Trivia Model:
    prefix:  Text between the end of the previous sibling (or the start of the
             parent) and the start of this node.
    value:   Source text of a leaf token (empty for inner nodes).
    suffix:  Text between the end of the last child and the end of this node.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

# Function value node types across tree-sitter-javascript releases.
FUNCTION_TYPES = ("function_expression", "function")

# Subtrees whose inner text must never be re-indented.
OPAQUE_TYPES = frozenset({"string", "template_string", "regex"})


@dataclass(eq=False)
class Node:
  """
  A single CST node.

  Identity semantics (``eq=False``) are intentional: two nodes with the same
  text at different positions are different nodes.
  """

  type: str
  children: List["Node"] = field(default_factory=list)
  value: str = ""
  prefix: str = ""
  suffix: str = ""
  field_name: Optional[str] = None
  named: bool = True
  parent: Optional["Node"] = field(default=None, repr=False)

  def __post_init__(self) -> None:
    for child in self.children:
      child.parent = self

  # --- Printing ---

  @property
  def code(self) -> str:
    """Source text of the node without its leading trivia."""
    return self.value + "".join(c.to_text() for c in self.children) + self.suffix

  def to_text(self) -> str:
    """Source text of the node including its leading trivia."""
    return self.prefix + self.code

  # --- Navigation ---

  def child(self, field_name: str) -> Optional["Node"]:
    """Returns the first child stored under the given grammar field."""
    for c in self.children:
      if c.field_name == field_name:
        return c
    return None

  def children_by_field(self, field_name: str) -> List["Node"]:
    return [c for c in self.children if c.field_name == field_name]

  @property
  def named_children(self) -> List["Node"]:
    """Named children, excluding comments."""
    return [c for c in self.children if c.named and c.type != "comment"]

  def first_child_of_type(self, *types: str) -> Optional["Node"]:
    for c in self.children:
      if c.type in types:
        return c
    return None

  def walk(self) -> Iterator["Node"]:
    """Pre-order traversal including this node."""
    stack = [self]
    while stack:
      node = stack.pop()
      yield node
      stack.extend(reversed(node.children))

  def ancestors(self) -> Iterator["Node"]:
    current = self.parent
    while current is not None:
      yield current
      current = current.parent

  def enclosing(self, *types: str) -> Optional["Node"]:
    """Nearest ancestor of one of the given types."""
    for ancestor in self.ancestors():
      if ancestor.type in types:
        return ancestor
    return None

  @property
  def root(self) -> "Node":
    node = self
    while node.parent is not None:
      node = node.parent
    return node

  def index(self) -> int:
    """Position of this node within its parent's children."""
    if self.parent is None:
      raise ValueError(f"Node '{self.type}' is detached")
    for i, sibling in enumerate(self.parent.children):
      if sibling is self:
        return i
    raise ValueError(f"Node '{self.type}' is not listed by its parent")

  def previous_sibling(self) -> Optional["Node"]:
    if self.parent is None:
      return None
    idx = self.index()
    return self.parent.children[idx - 1] if idx > 0 else None

  def next_sibling(self) -> Optional["Node"]:
    if self.parent is None:
      return None
    idx = self.index()
    siblings = self.parent.children
    return siblings[idx + 1] if idx + 1 < len(siblings) else None

  def is_attached_to(self, root: "Node") -> bool:
    return self.root is root

  # --- Names ---

  def dotted_name(self) -> Optional[str]:
    """
    Resolves identifier/member chains to a dotted string.

    ``app.ui.Widget`` -> ``"app.ui.Widget"``; ``this.x`` -> ``"this.x"``.
    Optional chains, computed access and calls resolve to None.

    Returns:
        The dotted path, or None if the node is not a plain qualified name.
    """
    if self.type in ("identifier", "this"):
      return self.code
    if self.type != "member_expression":
      return None
    if any(c.type in ("optional_chain", "?.") for c in self.children):
      return None
    obj = self.child("object")
    prop = self.child("property")
    if obj is None or prop is None or prop.type != "property_identifier":
      return None
    base = obj.dotted_name()
    if base is None:
      return None
    return f"{base}.{prop.code}"

  # --- Mutation ---

  def detach(self) -> "Node":
    """Removes the node from its parent (if any) and returns it."""
    if self.parent is not None:
      siblings = self.parent.children
      for i, sibling in enumerate(siblings):
        if sibling is self:
          del siblings[i]
          break
      self.parent = None
    return self

  def remove(self) -> None:
    if self.parent is None:
      raise ValueError(f"Cannot remove detached node '{self.type}'")
    self.detach()

  def replace_with(self, new: "Node", keep_prefix: bool = True) -> "Node":
    """
    Substitutes ``new`` for this node at the same position.

    Args:
        new: Replacement node. Detached from its current parent first.
        keep_prefix: Transfer this node's leading trivia to the replacement.

    Returns:
        The replacement node.
    """
    parent = self.parent
    if parent is None:
      raise ValueError(f"Cannot replace detached node '{self.type}'")
    idx = self.index()
    new.detach()
    if keep_prefix:
      new.prefix = self.prefix
    new.field_name = self.field_name
    new.parent = parent
    parent.children[idx] = new
    self.parent = None
    return new

  def insert_child(self, index: int, node: "Node") -> "Node":
    node.detach()
    node.parent = self
    self.children.insert(index, node)
    return node

  def append_child(self, node: "Node") -> "Node":
    return self.insert_child(len(self.children), node)

  def shift_indent(self, delta: int) -> None:
    """
    Re-indents every line inside this node by ``delta`` spaces.

    The node's own prefix is left alone (callers position the node itself).
    Literal strings, templates and regexes are never touched.
    """
    if delta == 0:
      return
    stack = [self]
    while stack:
      node = stack.pop()
      if node is not self:
        node.prefix = _shift_lines(node.prefix, delta)
      if node.type in OPAQUE_TYPES:
        continue
      if node.type == "comment":
        node.value = _shift_lines(node.value, delta)
      node.suffix = _shift_lines(node.suffix, delta)
      stack.extend(node.children)


def _shift_lines(text: str, delta: int) -> str:
  if "\n" not in text:
    return text
  lines = text.split("\n")
  last = len(lines) - 1
  for i in range(1, len(lines)):
    line = lines[i]
    if i != last and not line.strip():
      # interior blank line
      lines[i] = ""
      continue
    if delta > 0:
      lines[i] = " " * delta + line
    else:
      leading = len(line) - len(line.lstrip(" "))
      lines[i] = line[min(-delta, leading) :]
  return "\n".join(lines)


def line_indent(node: Node) -> str:
  """
  Column indentation of the line a statement starts on.

  Derived from the statement's prefix; a statement at the very start of the
  file has no indentation.
  """
  if "\n" in node.prefix:
    tail = node.prefix.rsplit("\n", 1)[1]
    return tail if not tail.strip() else ""
  if node.previous_sibling() is None and node.parent is not None and node.parent.type == "program":
    # leading whitespace of the file may be held by the program itself
    lead = (node.parent.prefix + node.prefix).rsplit("\n", 1)[-1]
    return lead if not lead.strip() else ""
  return ""
