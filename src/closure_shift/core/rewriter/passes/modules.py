"""
Module Declaration Pass.

Turns every ``goog.provide('a.b.C');`` into ``goog.module('a.b.C');`` in place,
so the statement keeps its position, its comments and its blank lines. The
first module additionally receives ``goog.module.declareLegacyNamespace();``
on the following line, which keeps the namespace reachable as a global for
code that has not been migrated yet.
"""

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.query import top_level_statements
from closure_shift.core.jscst.statements import expression_of, insert_after
from closure_shift.core.matcher import call_arguments, call_statement, is_namespace_export_call, string_value
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass

LEGACY_NAMESPACE_CALL = "goog.module.declareLegacyNamespace"


class ModuleDeclarationPass(RewriterPass):
  """
  Rewrites namespace export calls into module declarations.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    first = True
    for stmt in top_level_statements(module):
      call = expression_of(stmt)
      if call is None or not is_namespace_export_call(call):
        continue

      namespace = string_value(call_arguments(call)[0])
      before = stmt.code
      call.child("function").child("property").value = "module"
      context.tracer.log_mutation("goog.provide", before, stmt.code)

      if first and context.config.legacy_namespace and not _has_legacy_marker(module):
        marker = context.builder.statement(f"{LEGACY_NAMESPACE_CALL}();")
        insert_after(stmt, [marker])
      first = False
      context.tracer.log_inspection(namespace, "module")


def _has_legacy_marker(module: Node) -> bool:
  return any(call_statement(stmt, LEGACY_NAMESPACE_CALL) is not None for stmt in top_level_statements(module))
