"""
``goog.bind`` Transform.

Replaces the Closure helper with the native ``Function.prototype.bind``::

    goog.bind(this.onClick, this)       -> this.onClick.bind(this)
    goog.bind(fn, obj, a, b)            -> fn.bind(obj, a, b)
    goog.bind(function() {}, this)      -> (function() {}).bind(this)

Calls with fewer than two arguments are left alone.
"""

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import parse_expression
from closure_shift.core.matcher import call_arguments, find_all
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.transforms.base import register_transform
from closure_shift.transforms.equality import PLACEHOLDER, PRIMARY_TYPES

BIND = "goog.bind"


def rewrite_bind_calls(module: Node, context: RewriterContext) -> int:
  """
  Rewrites every ``goog.bind(fn, obj, ...)`` call under ``module``.

  Returns:
      Number of rewritten calls.
  """
  count = 0
  for call in find_all(module, {"type": "call_expression", "function": {"dotted": BIND}}):
    args = call_arguments(call)
    if call.parent is None or args is None or len(args) < 2:
      continue

    before = call.code
    fn = args[0]
    separator = fn.next_sibling()
    if separator is not None and separator.type == ",":
      separator.remove()

    operand = fn
    if fn.type not in PRIMARY_TYPES:
      operand = parse_expression(f"({PLACEHOLDER})")
      operand.named_children[0].replace_with(fn)

    callee = parse_expression(f"{PLACEHOLDER}.bind")
    callee.child("object").replace_with(operand)
    call.child("function").replace_with(callee)

    # the bound object now opens the argument list
    receiver = call_arguments(call)[0]
    if "\n" not in receiver.prefix:
      receiver.prefix = ""

    context.tracer.log_mutation(BIND, before, call.code)
    count += 1
  return count


@register_transform("bind", "goog.bind(fn, obj, ...) calls to fn.bind(obj, ...)")
def apply(module: Node, context: RewriterContext) -> None:
  rewrite_bind_calls(module, context)
