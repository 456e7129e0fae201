"""
Namespace Member Pass.

Handles members of a provided namespace that is not itself a class, e.g.
``goog.provide('app.util')`` followed by ``app.util.format = function...``:

- public members become named exports: ``exports.format = function...``,
  and ``app.util.format`` references become ``exports.format``.
- ``@private`` members become module bindings in place (``const`` when
  assigned once, ``let`` otherwise) and references use the bare name.
"""

from typing import List

from closure_shift.core.comments import AnnotationComment
from closure_shift.core.jscst.nodes import Node, line_indent
from closure_shift.core.jscst.query import declared_names, top_level_statements
from closure_shift.core.jscst.statements import doc_comment, expression_of, replace_statement, stack
from closure_shift.core.matcher import call_arguments, is_module_declaration, string_value
from closure_shift.core.references import rewrite_references
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.passes.members import member_target, assignment_count


def declared_modules(module: Node) -> List[str]:
  """Names passed to top-level ``goog.module(...)`` calls, in order."""
  names = []
  for stmt in top_level_statements(module):
    call = expression_of(stmt)
    if call is not None and is_module_declaration(call):
      names.append(string_value(call_arguments(call)[0]))
  return names


class NamespaceMemberPass(RewriterPass):
  """
  Converts members of plain provided namespaces to exports or local bindings.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    for namespace in declared_modules(module):
      if namespace in context.registry or namespace in context.local_names:
        continue
      self._convert_namespace(module, namespace, context)

  def _convert_namespace(self, module: Node, namespace: str, context: RewriterContext) -> None:
    b = context.builder
    for stmt in top_level_statements(module):
      if stmt.parent is not module:
        continue
      target = member_target(stmt)
      if target is None:
        continue
      left, value = target
      obj = left.child("object")
      if obj.dotted_name() != namespace:
        continue

      member = left.child("property").code
      member_path = f"{namespace}.{member}"
      if member_path in context.registry or member_path in context.local_names:
        continue

      doc = doc_comment(stmt)
      annotation = AnnotationComment.parse(doc.code) if doc is not None else AnnotationComment()
      before = stmt.code

      if annotation.is_private:
        if member in declared_names(module):
          context.warn(namespace, member, f"module binding '{member}' would shadow an existing name")
          continue
        kind = "const" if value is not None and assignment_count(module, member_path) <= 1 else "let"
        indent = line_indent(stmt)
        binding = b.binding(kind, member, value)
        comment = annotation.without_tags("private")
        nodes = [binding]
        if doc is not None and not comment.is_empty:
          nodes.insert(0, b.comment(comment.render(indent)))
        replace_statement(stmt, stack(nodes, indent))
        rewrite_references(module, member_path, member)
        context.tracer.log_mutation("private namespace member", before, binding.code)
      else:
        obj.replace_with(b.identifier("exports"))
        rewrite_references(module, member_path, f"exports.{member}")
        context.tracer.log_mutation("namespace member", before, stmt.code)
