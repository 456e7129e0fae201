"""
Export Emission Pass.

Runs only on ``goog.module`` files and performs the module-level cleanup:

1. UI modules: when a controller was converted, its module name loses the
   controller suffix (``a.b.FooCtrl`` -> ``a.b.Foo``) and the companion
   directive's module declaration is dropped.
2. The legacy namespace marker is kept directly after the first module.
3. Every converted name is exported: ``exports = Name;`` for one name,
   ``exports = {A, B};`` for several, merged into an existing ``exports = ...``
   assignment, or as ``exports.Name = Name;`` lines when the file already uses
   named exports.
"""

from typing import List, Optional

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import parse_expression
from closure_shift.core.jscst.query import top_level_statements
from closure_shift.core.jscst.statements import append_statements, insert_after, remove_statement, stack
from closure_shift.core.matcher import assignment_parts, call_arguments, call_statement, string_value
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.passes.modules import LEGACY_NAMESPACE_CALL


def _module_statements(module: Node) -> List[Node]:
  return [stmt for stmt in top_level_statements(module) if call_statement(stmt, "goog.module") is not None]


def _module_name(stmt: Node) -> Optional[str]:
  args = call_arguments(call_statement(stmt, "goog.module"))
  if not args or args[0].type != "string":
    return None
  return string_value(args[0])


class ExportPass(RewriterPass):
  """
  Fixes up module declarations and emits ``exports``.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    if not _module_statements(module):
      return

    self._rename_ui_modules(module, context)
    self._place_legacy_marker(module)

    if context.exports:
      self._emit_exports(module, context.exports, context)

  # --- Module Declarations ---

  def _rename_ui_modules(self, module: Node, context: RewriterContext) -> None:
    if context.controller is None:
      return

    suffix = context.config.controller_suffix
    derived = context.controller[: -len(suffix)] if context.controller.endswith(suffix) else context.controller

    for stmt in _module_statements(module):
      name = _module_name(stmt)
      if context.directive is not None and name == context.directive:
        remove_statement(stmt, with_doc=False)
        context.tracer.log_mutation("directive module", name, "removed")
      elif name == context.controller:
        arg = call_arguments(call_statement(stmt, "goog.module"))[0]
        arg.replace_with(context.builder.expression(context.builder.quote(derived)))
        context.tracer.log_mutation("controller module", name, derived)

  def _place_legacy_marker(self, module: Node) -> None:
    statements = top_level_statements(module)
    markers = [s for s in statements if call_statement(s, LEGACY_NAMESPACE_CALL) is not None]
    modules = _module_statements(module)
    if not markers or not modules:
      return

    marker, first = markers[0], modules[0]
    if statements.index(marker) == statements.index(first) + 1:
      return
    # a marker opening the file leaves its position to the next statement
    following = marker.next_sibling()
    if marker.previous_sibling() is None and following is not None:
      following.prefix = marker.prefix
    marker.detach()
    insert_after(first, [marker])

  # --- Exports ---

  def _emit_exports(self, module: Node, names: List[str], context: RewriterContext) -> None:
    b = context.builder
    existing = None
    named_exports = set()
    for stmt in top_level_statements(module):
      parts = assignment_parts(stmt)
      if parts is None:
        continue
      left = parts[0].dotted_name() or ""
      if left == "exports":
        existing = stmt
      elif left.startswith("exports."):
        named_exports.add(left.split(".", 1)[1])

    if existing is not None:
      self._merge_exports(existing, names, context)
    elif named_exports:
      lines = [b.statement(f"exports.{n} = {n};") for n in names if n not in named_exports]
      if lines:
        append_statements(module, stack(lines))
    else:
      append_statements(module, [b.statement(f"exports = {self._exports_value(names, context)};")])

  def _exports_value(self, names: List[str], context: RewriterContext) -> str:
    if len(names) == 1:
      return names[0]
    inline = "{" + ", ".join(names) + "}"
    if len(f"exports = {inline};") <= context.config.formatting.wrap_column:
      return inline
    unit = context.indent_unit
    return "{\n" + ",\n".join(f"{unit}{n}" for n in names) + "\n}"

  def _merge_exports(self, stmt: Node, names: List[str], context: RewriterContext) -> None:
    b = context.builder
    value = assignment_parts(stmt)[1]

    if value.type == "identifier":
      current = [value.code]
      missing = [n for n in names if n not in current]
      if missing:
        value.replace_with(b.expression(self._exports_value(current + missing, context)))
      return

    if value.type != "object":
      context.warn("exports", "", f"cannot merge names into exports of kind {value.type}")
      return

    keys = set()
    for entry in value.named_children:
      key = entry.child("key") if entry.type == "pair" else entry
      keys.add(key.code)
    missing = [n for n in names if n not in keys]
    for name in missing:
      _append_shorthand(value, name)


def _append_shorthand(obj: Node, name: str) -> None:
  """Adds ``name`` as a shorthand property before the closing brace."""
  closing = obj.children[-1]
  entries = obj.named_children
  prev = closing.previous_sibling()
  trailing_comma = prev is not None and prev.type == ","

  if entries:
    last_prefix = entries[-1].prefix
    prefix = last_prefix if "\n" in last_prefix else " "
  else:
    prefix = ""

  entry = parse_expression("{" + name + "}").named_children[0]
  entry.prefix = prefix
  if entries and not trailing_comma:
    obj.insert_child(closing.index(), Node(type=",", value=",", named=False))
  obj.insert_child(closing.index(), entry)
  if trailing_comma:
    obj.insert_child(closing.index(), Node(type=",", value=",", named=False))
