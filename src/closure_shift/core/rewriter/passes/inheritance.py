"""
Inheritance Rewrite Pass.

- ``goog.inherits(a.b.C, a.b.Base);`` sets ``class C extends a.b.Base`` and is
  removed. ``a.b.Base.call(this, x)`` in the constructor then becomes
  ``super(x)``.
- ``a.b.C.base(this, 'constructor', x)`` becomes ``super(x)`` and
  ``a.b.C.base(this, 'm', x)`` becomes ``super.m(x)``.
- ``a.b.C.superClass_.m.call(this, x)`` becomes ``super.m(x)`` when it
  appears inside the class registered for ``a.b.C``; pointing at any other
  class it is reported and left alone.

A constructor touching ``this`` before its ``super(...)`` call is reported;
the code is not changed.
"""

from typing import Optional

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.query import top_level_statements
from closure_shift.core.jscst.statements import remove_statement
from closure_shift.core.matcher import call_arguments, call_statement, find_all, string_value
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass

SUPERCLASS_PROPERTY = "superClass_"

# X.superClass_.m.call(this, ...)
SUPERCLASS_CALL = {
  "type": "call_expression",
  "function": {
    "type": "member_expression",
    "property": {"text": "call"},
    "object": {
      "type": "member_expression",
      "object": {"dotted": lambda d: d.endswith(f".{SUPERCLASS_PROPERTY}")},
    },
  },
}


def drop_arguments(call: Node, count: int) -> None:
  """
  Removes the first ``count`` arguments of a call in place.

  The separators that followed them go too; the remaining arguments keep
  their own layout.
  """
  args = call.child("arguments")
  for _ in range(count):
    named = args.named_children
    if not named:
      return
    first = named[0]
    nxt = first.next_sibling()
    if nxt is not None and nxt.type == ",":
      nxt.remove()
    first.remove()
  remaining = args.named_children
  if remaining and "\n" not in remaining[0].prefix:
    remaining[0].prefix = ""


def enclosing_class(node: Node) -> Optional[Node]:
  return node.enclosing("class_declaration", "class")


def constructor_of(cls: Node) -> Optional[Node]:
  body = cls.child("body")
  for member in body.named_children if body is not None else []:
    name = member.child("name")
    if member.type == "method_definition" and name is not None and name.code == "constructor":
      return member
  return None


class InheritancePass(RewriterPass):
  """
  Rewrites Closure inheritance helpers into native class syntax.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    self._convert_inherits(module, context)
    self._convert_parent_calls(context)
    self._convert_base_calls(module, context)
    self._convert_superclass_calls(module, context)

  def _convert_inherits(self, module: Node, context: RewriterContext) -> None:
    for stmt in top_level_statements(module):
      call = call_statement(stmt, "goog.inherits")
      if call is None:
        continue
      args = call_arguments(call)
      if args is None or len(args) != 2:
        continue

      path = args[0].dotted_name()
      cls = context.registry.lookup(path) if path else None
      if cls is None:
        continue
      if cls.first_child_of_type("class_heritage") is not None:
        context.warn(path, "", "class already has a superclass; goog.inherits left in place")
        continue

      before = stmt.code
      clause = context.builder.heritage(args[1])
      cls.insert_child(cls.child("body").index(), clause)
      remove_statement(stmt)
      context.tracer.log_mutation("goog.inherits", before, f"extends {args[1].code}")

  def _convert_parent_calls(self, context: RewriterContext) -> None:
    b = context.builder
    for path, cls in context.registry.items():
      heritage = cls.first_child_of_type("class_heritage")
      ctor = constructor_of(cls)
      if heritage is None or not heritage.named_children or ctor is None:
        continue
      parent = heritage.named_children[0].dotted_name()
      if not parent:
        continue

      for call in find_all(ctor.child("body"), {"type": "call_expression", "function": {"dotted": f"{parent}.call"}}):
        args = call_arguments(call)
        if not args or args[0].type != "this":
          continue
        before = call.code
        self._check_this_before_super(call, path, context)
        call.child("function").replace_with(b.expression("super"))
        drop_arguments(call, 1)
        context.tracer.log_mutation("parent constructor call", before, call.code)

  def _convert_base_calls(self, module: Node, context: RewriterContext) -> None:
    b = context.builder
    for path in context.registry:
      for call in find_all(module, {"type": "call_expression", "function": {"dotted": f"{path}.base"}}):
        args = call_arguments(call)
        if args is None or len(args) < 2 or args[0].type != "this" or args[1].type != "string":
          continue

        member = string_value(args[1])
        before = call.code
        if member == "constructor":
          callee = "super"
          self._check_this_before_super(call, path, context)
        else:
          callee = f"super.{member}"
        call.child("function").replace_with(b.expression(callee))
        drop_arguments(call, 2)
        context.tracer.log_mutation("base call", before, call.code)

  def _check_this_before_super(self, call: Node, path: str, context: RewriterContext) -> None:
    method = call.enclosing("method_definition")
    if method is None or method.child("name") is None or method.child("name").code != "constructor":
      return
    body = method.child("body")
    for node in body.walk():
      if node is call:
        return
      if node.type == "this":
        context.warn(path, "constructor", "'this' is used before super() is called")
        return

  def _convert_superclass_calls(self, module: Node, context: RewriterContext) -> None:
    b = context.builder
    for call in find_all(module, SUPERCLASS_CALL):
      member_expr = call.child("function").child("object")
      member = member_expr.child("property").code
      owner = member_expr.child("object").dotted_name()[: -len(SUPERCLASS_PROPERTY) - 1]

      cls = enclosing_class(call)
      enclosing_path = context.registry.path_of(cls) if cls is not None else None

      if enclosing_path is None:
        if owner in context.registry:
          context.warn(owner, member, "superClass_ call outside of its class; left unchanged")
        continue
      if owner != enclosing_path:
        context.warn(enclosing_path, member, f"superClass_ call refers to another class ({owner}); left unchanged")
        continue

      args = call_arguments(call)
      if not args or args[0].type != "this":
        continue

      before = call.code
      callee = "super" if member == "constructor" else f"super.{member}"
      call.child("function").replace_with(b.expression(callee))
      drop_arguments(call, 1)
      context.tracer.log_mutation("superClass_ call", before, call.code)
