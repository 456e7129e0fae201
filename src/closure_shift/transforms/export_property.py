"""
``goog.exportProperty`` Transform.

A top-level export of a prototype method right after its definition::

    /** @private */
    a.B.prototype.run_ = function() {};
    goog.exportProperty(a.B.prototype, 'run', a.B.prototype.run_);

is folded into the method's JSDoc as ``@export``. ``@protected`` is dropped,
and a ``@private`` method loses both the tag and its trailing underscore
(``this.run_`` accesses follow). Every other ``goog.exportProperty(a, b, c)``
becomes the assignment ``a[b] = c``.
"""

from typing import List, Optional

from closure_shift.core.comments import AnnotationComment
from closure_shift.core.jscst.nodes import Node, line_indent
from closure_shift.core.jscst.parser import parse_expression
from closure_shift.core.jscst.query import top_level_statements
from closure_shift.core.jscst.statements import doc_comment, remove_statement
from closure_shift.core.matcher import assignment_parts, call_arguments, call_statement, find_all, string_value
from closure_shift.core.references import rename_property_references
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.transforms.base import register_transform

EXPORT_PROPERTY = "goog.exportProperty"

EXPORT_PROPERTY_CALL = {"type": "call_expression", "function": {"dotted": EXPORT_PROPERTY}, "argc": 3}


def _exportable(args: List[Node]) -> bool:
  """True for ``(X.prototype, 'name', X.prototype.name)`` or ``... X.prototype.name_)``."""
  target, name, fn = args
  if target.type != "member_expression" or target.child("property").code != "prototype":
    return False
  export_name = string_value(name)
  if not export_name or fn.type != "member_expression":
    return False
  fn_name = fn.child("property").code
  return fn_name in (export_name, f"{export_name}_")


def _previous_statement(stmt: Node) -> Optional[Node]:
  prev = stmt.previous_sibling()
  while prev is not None and prev.type == "comment":
    prev = prev.previous_sibling()
  return prev


@register_transform("exportproperty", "goog.exportProperty calls to @export annotations or plain assignments")
def export_properties(module: Node, context: RewriterContext) -> None:
  for stmt in top_level_statements(module):
    call = call_statement(stmt, EXPORT_PROPERTY)
    if call is None:
      continue
    args = call_arguments(call)
    if len(args) == 3 and _exportable(args):
      _fold_into_annotation(module, stmt, args, context)

  for call in find_all(module, EXPORT_PROPERTY_CALL):
    _to_assignment(call, context)


def _fold_into_annotation(module: Node, stmt: Node, args: List[Node], context: RewriterContext) -> None:
  prev = _previous_statement(stmt)
  if prev is None or prev.type != "expression_statement":
    return
  doc = doc_comment(prev)
  if doc is None:
    return

  annotation = AnnotationComment.parse(doc.code)
  updated = annotation.without_tags("protected") if annotation.is_protected else annotation

  if annotation.is_private:
    updated = updated.without_tags("private")
    parts = assignment_parts(prev)
    if parts is not None and parts[0].type == "member_expression":
      prop = parts[0].child("property")
      old = prop.code
      new = old[:-1] if old.endswith("_") else old
      if new != old:
        prop.value = new
        rename_property_references(module, "this", old, new)
        prototype = args[0].dotted_name()
        if prototype is not None:
          rename_property_references(module, prototype, old, new)
        context.tracer.log_mutation("private export", old, new)

  updated = updated.with_tag("export")
  doc.replace_with(context.builder.comment(updated.render(line_indent(prev))))

  before = stmt.code
  remove_statement(stmt, with_doc=False)
  context.tracer.log_mutation(EXPORT_PROPERTY, before, "@export")


def _to_assignment(call: Node, context: RewriterContext) -> None:
  target, name, value = call_arguments(call)
  before = call.code

  access = parse_expression("_[_]")
  access.child("object").replace_with(target)
  access.child("index").replace_with(name)

  assignment = parse_expression("_ = _")
  assignment.child("left").replace_with(access)
  assignment.child("right").replace_with(value)

  if call.parent is not None and call.parent.type != "expression_statement":
    wrapped = parse_expression("(_)")
    wrapped.named_children[0].replace_with(assignment)
    assignment = wrapped

  call.replace_with(assignment)
  context.tracer.log_mutation(EXPORT_PROPERTY, before, assignment.code)
