"""
Class and Interface Extraction Pass.

Recognises the three constructor-like declaration shapes bound to a namespace
path and replaces each with its native equivalent:

- ``/** @constructor */ a.b.C = function(x) {...};`` becomes ``class C``
  with a ``constructor(x)`` method. The JSDoc is split between the two with
  ``split_class_comment``. UI controllers (``a.b.FooCtrl``) are named
  ``Controller`` and tagged ``@unrestricted``.
- ``/** @interface */ a.b.I = function() {};`` becomes an empty ``class I``
  keeping its whole comment; ``a.b.I.prototype.m;`` stubs become empty
  methods whose parameters come from their ``@param`` tags.
- ``a.b.fooDirective = function() {...};`` becomes
  ``const directive = () => {...};``.

Each generated class is registered under its path. Every converted path is
queued for reference rewriting and its local name for export.
"""

import re
from typing import Optional, Set

from closure_shift.core.comments import AnnotationComment, split_class_comment
from closure_shift.core.jscst.nodes import FUNCTION_TYPES, Node, line_indent
from closure_shift.core.jscst.query import declared_names, top_level_statements
from closure_shift.core.jscst.statements import (
  append_class_member,
  doc_comment,
  expression_of,
  remove_statement,
  replace_statement,
  stack,
  take_doc_comment,
)
from closure_shift.core.matcher import assignment_parts
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def _taken_names(module: Node, context: RewriterContext) -> Set[str]:
  return declared_names(module) | set(context.local_names.values())


class ClassExtractionPass(RewriterPass):
  """
  Converts constructor, interface and directive declarations.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    for stmt in top_level_statements(module):
      # interface stubs are consumed while converting their interface
      if stmt.parent is not module:
        continue

      parts = assignment_parts(stmt)
      if parts is None:
        continue
      left, right = parts
      path = left.dotted_name()
      if left.type != "member_expression" or path is None or ".prototype." in f"{path}.":
        continue
      if right is None or right.type not in FUNCTION_TYPES:
        continue

      doc = doc_comment(stmt)
      if doc is None:
        continue
      annotation = AnnotationComment.parse(doc.code)
      last = path.rsplit(".", 1)[1]

      if annotation.is_interface:
        self._convert_interface(module, stmt, path, last, context)
      elif annotation.is_constructor:
        self._convert_class(module, stmt, right, path, last, annotation, context)
      elif last.endswith(context.config.directive_suffix):
        self._convert_directive(module, stmt, right, path, context)

  def _convert_class(
    self,
    module: Node,
    stmt: Node,
    fn: Node,
    path: str,
    last: str,
    annotation: AnnotationComment,
    context: RewriterContext,
  ) -> None:
    config = context.config
    is_controller = last.endswith(config.controller_suffix)
    name = config.controller_name if is_controller else last
    if not self._claim(module, path, name, context):
      return

    b = context.builder
    indent = line_indent(stmt)
    member_indent = indent + context.indent_unit

    split = split_class_comment(annotation)
    class_comment: Optional[AnnotationComment] = split.class_comment
    if is_controller:
      class_comment = (class_comment or AnnotationComment()).with_tag("unrestricted")

    cls = b.class_declaration(name)
    context.registry.register(path, cls)

    before = stmt.code
    ctor = b.method(
      "constructor",
      fn.child("parameters"),
      fn.child("body"),
      indent=member_indent,
      source_indent=indent,
    )
    ctor_comment = b.comment(split.constructor_comment.render(member_indent))
    append_class_member(cls, ctor, member_indent, comment=ctor_comment, class_indent=indent)

    nodes = [cls] if class_comment is None else [b.comment(class_comment.render(indent)), cls]
    replace_statement(stmt, stack(nodes, indent))

    context.tracer.log_registration(path, name)
    context.tracer.log_mutation("constructor", before, cls.code)
    context.bind_local(path, name)
    if not annotation.is_private:
      context.export(name)
    if is_controller:
      context.controller = path

  def _convert_interface(self, module: Node, stmt: Node, path: str, name: str, context: RewriterContext) -> None:
    if not self._claim(module, path, name, context):
      return

    b = context.builder
    indent = line_indent(stmt)
    member_indent = indent + context.indent_unit

    cls = b.class_declaration(name)
    context.registry.register(path, cls)
    replace_statement(stmt, [cls], with_doc=False)

    for stub in top_level_statements(module):
      expr = expression_of(stub)
      if expr is None or expr.type != "member_expression":
        continue
      obj = expr.child("object")
      if obj is None or obj.dotted_name() != f"{path}.prototype":
        continue

      member = expr.child("property").code
      doc = take_doc_comment(stub, len(member_indent) - len(line_indent(stub)))
      params = []
      if doc is not None:
        params = [p for p in AnnotationComment.parse(doc.code).param_names() if _IDENTIFIER_RE.match(p)]
      method = b.method(member, f"({', '.join(params)})", "{}", indent=member_indent)
      append_class_member(cls, method, member_indent, comment=doc, class_indent=indent)
      remove_statement(stub, with_doc=False)

    context.tracer.log_registration(path, name)
    context.bind_local(path, name)
    context.export(name)

  def _convert_directive(self, module: Node, stmt: Node, fn: Node, path: str, context: RewriterContext) -> None:
    name = context.config.directive_name
    if not self._claim(module, path, name, context):
      return

    b = context.builder
    before = stmt.code
    arrow = b.arrow(fn.child("body"), params=fn.child("parameters").code)
    decl = b.binding("const", name, arrow)
    replace_statement(stmt, [decl], with_doc=False)

    context.tracer.log_mutation("directive", before, decl.code)
    context.bind_local(path, name)
    context.export(name)
    context.directive = path

  def _claim(self, module: Node, path: str, name: str, context: RewriterContext) -> bool:
    """Checks that ``name`` is free as a top-level binding; warns otherwise."""
    if path not in context.registry and name in _taken_names(module, context):
      context.warn(path, "", f"local name '{name}' is already bound in this file")
      return False
    return True
