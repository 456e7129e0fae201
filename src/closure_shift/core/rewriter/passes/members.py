"""
Member Migration Pass.

Moves the members of every registered class onto its class body.

Instance members (``<path>.prototype.<m> = value``):
    - function values become methods, carrying their JSDoc. A ``@private``
      method named ``m_`` is renamed ``m`` along with every ``this.m_`` in the
      class and every ``<path>.prototype.m_`` in the program, unless ``m`` is
      already taken.
    - qualified references keep their statement; only ``<path>`` on the left
      is replaced by the class name.
    - other values are reported and left alone.

Static members (``<path>.<m> = value`` or a bare ``<path>.<m>;``):
    - function values become static methods.
    - ``@private`` members become module bindings: ``const`` when assigned
      once, ``let`` when reassigned or only declared. The binding goes right
      before the class, or at the end of the program when its value refers to
      the class. References to ``<path>.<m>`` become ``m``.
    - other values become ``static get m() { return value; }`` with ``@const``
      stripped from the comment. A property assigned at more than one site
      has no single value to return; it is reported once and left alone.
"""

from typing import List, Optional, Set, Tuple

from closure_shift.core.comments import AnnotationComment
from closure_shift.core.jscst.nodes import FUNCTION_TYPES, Node, line_indent
from closure_shift.core.jscst.query import declared_names, find, top_level_statements
from closure_shift.core.jscst.statements import (
  anchor_of,
  append_class_member,
  append_statements,
  class_members,
  doc_comment,
  expression_of,
  insert_before,
  member_name,
  remove_statement,
  stack,
  take_doc_comment,
)
from closure_shift.core.matcher import assignment_parts
from closure_shift.core.references import rename_property_references, rewrite_references
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass


def function_flags(fn: Node) -> Tuple[bool, bool]:
  """``(is_async, is_generator)`` of a function expression."""
  types = {c.type for c in fn.children if not c.named}
  return "async" in types, "*" in types


def assignment_count(root: Node, path: str) -> int:
  """
  Number of sites writing to ``path``.

  Plain, compound (``+=``) and update (``++``) assignments all count.
  """

  def writes(node: Node) -> bool:
    if node.type in ("assignment_expression", "augmented_assignment_expression"):
      target = node.child("left")
    elif node.type == "update_expression":
      target = node.child("argument")
    else:
      return False
    return target is not None and target.dotted_name() == path

  return len(find(root, writes))


def references_class(value: Node, path: str, name: str) -> bool:
  """True if ``value`` mentions the class by path or by local name."""
  for node in value.walk():
    if node.type == "identifier" and node.code == name:
      return True
    if node.type == "member_expression":
      dotted = node.dotted_name()
      if dotted is not None and (dotted == path or dotted.startswith(f"{path}.")):
        return True
  return False


def member_target(stmt: Node) -> Optional[Tuple[Node, Optional[Node]]]:
  """``(left, value)`` of ``x.y = value;`` or ``(x.y, None)`` of ``x.y;``."""
  parts = assignment_parts(stmt)
  if parts is not None:
    left, right = parts
  else:
    expr = expression_of(stmt)
    if expr is None:
      return None
    left, right = expr, None
  if left is None or left.type != "member_expression":
    return None
  prop = left.child("property")
  if prop is None or prop.type != "property_identifier":
    return None
  return left, right


class MemberMigrationPass(RewriterPass):
  """
  Migrates prototype and static members into registered classes.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    for path, cls in context.registry.items():
      name = context.registry.class_name(path)
      renames = self._migrate_instance_members(module, cls, path, name, context)
      self._migrate_static_members(module, cls, path, name, context)

      for old, new in renames:
        rename_property_references(cls, "this", old, new)
        rename_property_references(module, f"{path}.prototype", old, new)
        context.tracer.log_mutation("private method", f"{path}.prototype.{old}", f"{name}#{new}")

  # --- Instance Members ---

  def _migrate_instance_members(
    self, module: Node, cls: Node, path: str, name: str, context: RewriterContext
  ) -> List[Tuple[str, str]]:
    b = context.builder
    class_indent = line_indent(cls)
    member_indent = class_indent + context.indent_unit
    prototype = f"{path}.prototype"

    candidates = []
    for stmt in top_level_statements(module):
      target = member_target(stmt)
      if target is None or target[1] is None:
        continue
      left, right = target
      if left.child("object").dotted_name() == prototype:
        candidates.append((stmt, left, right))

    existing: Set[str] = {member_name(m) for m in class_members(cls)}
    assigned = {left.child("property").code for _, left, _ in candidates}
    renames: List[Tuple[str, str]] = []

    for stmt, left, right in candidates:
      member = left.child("property").code

      if right.type in FUNCTION_TYPES:
        doc = doc_comment(stmt)
        annotation = AnnotationComment.parse(doc.code) if doc is not None else AnnotationComment()
        method_name = member

        if context.config.rename_private_methods and annotation.is_private and member.endswith("_") and len(member) > 1:
          target = member[:-1]
          if target in existing or target in assigned:
            context.warn(path, member, f"cannot rename private method to '{target}': name already in use")
          else:
            method_name = target
            renames.append((member, target))

        if method_name in existing:
          context.warn(path, member, "class already defines a member with this name")
          continue

        source_indent = line_indent(stmt)
        is_async, generator = function_flags(right)
        doc = take_doc_comment(stmt, len(member_indent) - len(source_indent))
        method = b.method(
          method_name,
          right.child("parameters"),
          right.child("body"),
          indent=member_indent,
          source_indent=source_indent,
          is_async=is_async,
          generator=generator,
        )
        append_class_member(cls, method, member_indent, comment=doc, class_indent=class_indent)
        remove_statement(stmt, with_doc=False)
        existing.add(method_name)

      elif right.type == "member_expression" and right.dotted_name() is not None:
        # a.b.C.prototype.alias = a.b.C.prototype.fn -> C.prototype.alias = ...
        left.child("object").child("object").replace_with(b.identifier(name))

      else:
        context.warn(path, member, f"unsupported instance member value ({right.type})")

    return renames

  # --- Static Members ---

  def _migrate_static_members(self, module: Node, cls: Node, path: str, name: str, context: RewriterContext) -> None:
    class_indent = line_indent(cls)
    member_indent = class_indent + context.indent_unit
    existing: Set[str] = {member_name(m) for m in class_members(cls) if m.first_child_of_type("static")}
    reassigned: Set[str] = set()

    for stmt in top_level_statements(module):
      if stmt.parent is not module:
        continue
      target = member_target(stmt)
      if target is None:
        continue
      left, right = target
      if left.child("object").dotted_name() != path:
        continue

      member = left.child("property").code
      static_path = f"{path}.{member}"
      if member == "prototype" or static_path in context.registry or static_path in context.local_names:
        continue

      doc = doc_comment(stmt)
      annotation = AnnotationComment.parse(doc.code) if doc is not None else AnnotationComment()

      if right is not None and right.type in FUNCTION_TYPES:
        if member in existing:
          context.warn(path, member, "class already defines a static member with this name")
          continue
        self._to_static_method(cls, stmt, member, right, member_indent, class_indent, context)
        existing.add(member)
      elif annotation.is_private:
        self._to_module_binding(module, cls, stmt, path, name, member, right, annotation, context)
      elif right is None:
        continue
      elif member in existing:
        context.warn(path, member, "class already defines a static member with this name")
      elif assignment_count(module, static_path) > 1:
        # one report per property, however many assignment sites it has
        if static_path not in reassigned:
          reassigned.add(static_path)
          context.warn(path, member, "reassigned static property cannot become a getter")
      else:
        self._to_static_getter(cls, stmt, member, right, annotation, member_indent, class_indent, context)
        existing.add(member)

  def _to_static_method(
    self,
    cls: Node,
    stmt: Node,
    member: str,
    fn: Node,
    member_indent: str,
    class_indent: str,
    context: RewriterContext,
  ) -> None:
    source_indent = line_indent(stmt)
    is_async, generator = function_flags(fn)
    doc = take_doc_comment(stmt, len(member_indent) - len(source_indent))
    method = context.builder.method(
      member,
      fn.child("parameters"),
      fn.child("body"),
      indent=member_indent,
      source_indent=source_indent,
      static=True,
      is_async=is_async,
      generator=generator,
    )
    append_class_member(cls, method, member_indent, comment=doc, class_indent=class_indent)
    remove_statement(stmt, with_doc=False)

  def _to_static_getter(
    self,
    cls: Node,
    stmt: Node,
    member: str,
    value: Node,
    annotation: AnnotationComment,
    member_indent: str,
    class_indent: str,
    context: RewriterContext,
  ) -> None:
    b = context.builder
    had_doc = doc_comment(stmt) is not None
    before = stmt.code
    getter = b.static_getter(member, value, member_indent, line_indent(stmt))
    remove_statement(stmt)

    comment = None
    if had_doc:
      stripped = annotation.const_as_type()
      if not stripped.is_empty:
        comment = b.comment(stripped.render(member_indent))
    append_class_member(cls, getter, member_indent, comment=comment, class_indent=class_indent)
    context.tracer.log_mutation("static property", before, getter.code)

  def _to_module_binding(
    self,
    module: Node,
    cls: Node,
    stmt: Node,
    path: str,
    name: str,
    member: str,
    value: Optional[Node],
    annotation: AnnotationComment,
    context: RewriterContext,
  ) -> None:
    static_path = f"{path}.{member}"
    if member in declared_names(module) or member in context.local_names.values():
      context.warn(path, member, f"module binding '{member}' would shadow an existing name")
      return

    b = context.builder
    kind = "const" if value is not None and assignment_count(module, static_path) <= 1 else "let"
    after_class = value is not None and references_class(value, path, name)
    had_doc = doc_comment(stmt) is not None
    indent = line_indent(cls)

    before = stmt.code
    binding = b.binding(kind, member, value)
    remove_statement(stmt)

    nodes = [binding]
    comment = annotation.without_tags("private")
    if had_doc and not comment.is_empty:
      nodes.insert(0, b.comment(comment.render(indent)))

    if after_class:
      append_statements(module, stack(nodes, indent))
    else:
      insert_before(anchor_of(cls), stack(nodes, indent))

    rewrite_references(module, static_path, member)
    context.tracer.log_mutation("private static", before, binding.code)
