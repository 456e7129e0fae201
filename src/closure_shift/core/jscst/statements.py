"""
Statement-Level Tree Surgery.

Helpers for moving whole statements around while keeping their JSDoc blocks
and blank-line layout intact. A statement's JSDoc is the ``/** ... */``
comment that directly precedes it among its siblings.
"""

from typing import List, Optional, Sequence

from closure_shift.core.jscst.nodes import Node, line_indent


def leading_comments(stmt: Node) -> List[Node]:
  """Consecutive comment siblings directly before ``stmt``, in source order."""
  comments: List[Node] = []
  prev = stmt.previous_sibling()
  while prev is not None and prev.type == "comment":
    comments.insert(0, prev)
    prev = prev.previous_sibling()
  return comments


def doc_comment(stmt: Node) -> Optional[Node]:
  """The JSDoc block attached to ``stmt``, if any."""
  prev = stmt.previous_sibling()
  if prev is not None and prev.type == "comment" and prev.code.startswith("/**"):
    return prev
  return None


def trailing_comment(stmt: Node) -> Optional[Node]:
  """A comment that follows ``stmt`` on the same line."""
  nxt = stmt.next_sibling()
  if nxt is not None and nxt.type == "comment" and "\n" not in nxt.prefix:
    return nxt
  return None


def expression_of(stmt: Node) -> Optional[Node]:
  """The expression carried by an ``expression_statement``."""
  if stmt.type != "expression_statement":
    return None
  named = stmt.named_children
  return named[0] if named else None


def statement_of(node: Node) -> Optional[Node]:
  """The nearest enclosing node that sits directly inside a statement list."""
  current: Optional[Node] = node
  while current is not None and current.parent is not None:
    if current.parent.type in ("program", "statement_block", "class_body", "switch_body"):
      return current
    current = current.parent
  return None


def anchor_of(stmt: Node) -> Node:
  """The first node of a statement's group: its JSDoc if present, else itself."""
  return doc_comment(stmt) or stmt


def remove_statement(stmt: Node, with_doc: bool = True) -> None:
  """
  Deletes a statement together with its JSDoc and same-line trailing comment.

  Blank lines that separated the following statement from the removed one
  stay with the following statement.
  """
  trailing = trailing_comment(stmt)
  if trailing is not None:
    trailing.remove()
  if with_doc:
    doc = doc_comment(stmt)
    if doc is not None:
      doc.remove()
  stmt.remove()


def replace_statement(stmt: Node, nodes: Sequence[Node], with_doc: bool = True) -> List[Node]:
  """
  Replaces a statement (and, by default, its JSDoc) with ``nodes``.

  The first inserted node inherits the leading trivia of the replaced group;
  the remaining nodes keep their own prefixes.

  Args:
      stmt: Statement to replace.
      nodes: Replacement statements/comments.
      with_doc: Also drop the JSDoc attached to ``stmt``.

  Returns:
      The inserted nodes.
  """
  anchor = anchor_of(stmt) if with_doc else stmt
  parent = anchor.parent
  idx = anchor.index()
  prefix = anchor.prefix

  if with_doc and anchor is not stmt:
    anchor.remove()
  stmt.remove()

  inserted = list(nodes)
  for offset, node in enumerate(inserted):
    parent.insert_child(idx + offset, node)
  if inserted:
    inserted[0].prefix = prefix
  return inserted


def insert_before(anchor: Node, nodes: Sequence[Node], separator: str = "\n\n") -> List[Node]:
  """
  Inserts ``nodes`` before ``anchor``.

  The inserted group takes over the anchor's leading trivia and the anchor is
  pushed down by ``separator`` (followed by its original indentation).
  """
  parent = anchor.parent
  idx = anchor.index()
  indent = anchor.prefix.rsplit("\n", 1)[1] if "\n" in anchor.prefix else ""
  inserted = list(nodes)
  for offset, node in enumerate(inserted):
    parent.insert_child(idx + offset, node)
  if inserted:
    inserted[0].prefix = anchor.prefix
    anchor.prefix = separator + indent
  return inserted


def insert_after(anchor: Node, nodes: Sequence[Node], separator: str = "\n") -> List[Node]:
  """Inserts ``nodes`` after ``anchor`` (and its trailing comment)."""
  target = trailing_comment(anchor) or anchor
  parent = target.parent
  idx = target.index() + 1
  inserted = list(nodes)
  for offset, node in enumerate(inserted):
    parent.insert_child(idx + offset, node)
  if inserted:
    indent = anchor.prefix.rsplit("\n", 1)[1] if "\n" in anchor.prefix else ""
    inserted[0].prefix = separator + indent
  return inserted


def append_statements(module: Node, nodes: Sequence[Node], separator: str = "\n\n") -> List[Node]:
  """Appends ``nodes`` at the end of the program."""
  inserted = list(nodes)
  for node in inserted:
    module.append_child(node)
  if inserted:
    inserted[0].prefix = separator if len(module.children) > len(inserted) else ""
  return inserted


def stack(nodes: Sequence[Node], indent: str = "") -> List[Node]:
  """Lays out a group of nodes one per line at ``indent`` (first node untouched)."""
  group = list(nodes)
  for node in group[1:]:
    node.prefix = "\n" + indent
  return group


def class_members(class_decl: Node) -> List[Node]:
  """Named members (methods/fields) of a class declaration."""
  body = class_decl.child("body")
  if body is None:
    return []
  return [c for c in body.children if c.named and c.type != "comment"]


def member_name(member: Node) -> Optional[str]:
  name = member.child("name") or member.child("property")
  return name.code if name is not None else None


def append_class_member(
  class_decl: Node,
  member: Node,
  indent: str,
  comment: Optional[Node] = None,
  class_indent: Optional[str] = None,
) -> Node:
  """
  Appends a member (optionally preceded by its JSDoc) to a class body.

  Members are separated by one blank line; the closing brace is realigned to
  the class declaration's indentation.

  Args:
      class_decl: The ``class_declaration`` node.
      member: A ``method_definition`` (or field) node.
      indent: Indentation of the member lines.
      comment: Optional JSDoc ``comment`` node.
      class_indent: Indentation of the class itself; derived from its prefix
          when omitted.

  Returns:
      The appended member.
  """
  body = class_decl.child("body")
  closing = body.children[-1]
  has_members = any(c.named for c in body.children)

  group = [comment, member] if comment is not None else [member]
  idx = len(body.children) - 1
  for offset, node in enumerate(group):
    node.field_name = "member" if node is member else None
    body.insert_child(idx + offset, node)

  group[0].prefix = ("\n\n" if has_members else "\n") + indent
  if comment is not None:
    member.prefix = "\n" + indent
  closing.prefix = "\n" + (class_indent if class_indent is not None else line_indent(class_decl))
  return member


def take_doc_comment(stmt: Node, delta: int = 0) -> Optional[Node]:
  """
  Detaches the JSDoc of ``stmt`` so it can travel with the statement's code.

  Args:
      stmt: Statement owning the comment.
      delta: Columns to re-indent the comment's continuation lines by.

  Returns:
      The detached comment, or None if the statement has no JSDoc.
  """
  doc = doc_comment(stmt)
  if doc is None:
    return None
  # the statement takes over the blank lines that preceded its comment
  stmt.prefix = doc.prefix
  doc.detach()
  doc.prefix = ""
  doc.shift_indent(delta)
  return doc
