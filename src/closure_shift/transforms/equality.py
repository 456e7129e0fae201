"""
Closure Type Check Helpers.

Replaces ``goog.isDef(x)``-style helper calls with the equivalent native
comparison. A call directly under ``!`` takes the negated operator and
replaces the whole ``!`` expression::

    goog.isDef(x)            -> x !== undefined
    !goog.isDefAndNotNull(x) -> x == null
    goog.isString(a + b)     -> typeof (a + b) === 'string'

Only calls with exactly one argument are rewritten. The result is
parenthesized when its new parent binds tighter than a comparison.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from closure_shift.core.jscst.builders import JsBuilder
from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import parse_expression
from closure_shift.core.matcher import call_arguments, find_all
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.transforms.base import register_transform

PLACEHOLDER = "_"

# Argument kinds that never need parentheses as a comparison or typeof operand.
PRIMARY_TYPES = frozenset(
  {
    "identifier",
    "this",
    "super",
    "member_expression",
    "subscript_expression",
    "call_expression",
    "parenthesized_expression",
    "string",
    "template_string",
    "number",
    "regex",
    "true",
    "false",
    "null",
    "undefined",
    "array",
    "object",
  }
)

# Binary operators binding at least as tight as equality.
TIGHTER_OPERATORS = frozenset(
  {"**", "*", "/", "%", "+", "-", "<<", ">>", ">>>", "<", ">", "<=", ">=", "instanceof", "in", "==", "!=", "===", "!=="}
)


@dataclass(frozen=True)
class HelperRewrite:
  """
  How one helper maps onto a comparison.

  Attributes:
      helper: Dotted helper name, e.g. ``goog.isDef``.
      template: Builds the comparison source around the placeholder operand,
          given the builder and whether the call was negated.
  """

  helper: str
  template: Callable[[JsBuilder, bool], str]


def _compare(operator: str, negated_operator: str, right: str) -> Callable[[JsBuilder, bool], str]:
  def template(builder: JsBuilder, negated: bool) -> str:
    return f"{PLACEHOLDER} {negated_operator if negated else operator} {right}"

  return template


def _typeof(type_name: str) -> Callable[[JsBuilder, bool], str]:
  def template(builder: JsBuilder, negated: bool) -> str:
    return f"typeof {PLACEHOLDER} {'!==' if negated else '==='} {builder.quote(type_name)}"

  return template


HELPERS = {
  "isdef": HelperRewrite("goog.isDef", _compare("!==", "===", "undefined")),
  "isdefandnotnull": HelperRewrite("goog.isDefAndNotNull", _compare("!=", "==", "null")),
  "isnull": HelperRewrite("goog.isNull", _compare("===", "!==", "null")),
  "isstring": HelperRewrite("goog.isString", _typeof("string")),
  "isnumber": HelperRewrite("goog.isNumber", _typeof("number")),
  "isboolean": HelperRewrite("goog.isBoolean", _typeof("boolean")),
  "isfunction": HelperRewrite("goog.isFunction", _typeof("function")),
}


def _negation_of(call: Node) -> Optional[Node]:
  """The ``!`` expression directly applied to ``call`` (through parentheses)."""
  node = call
  while node.parent is not None and node.parent.type == "parenthesized_expression":
    node = node.parent
  parent = node.parent
  if parent is not None and parent.type == "unary_expression" and parent.child("operator").code == "!":
    return parent
  return None


def _needs_parentheses(node: Node) -> bool:
  """True if a comparison placed at ``node``'s position would bind too loosely."""
  parent = node.parent
  if parent is None:
    return False
  if parent.type == "binary_expression":
    return parent.child("operator").code in TIGHTER_OPERATORS
  if parent.type in ("unary_expression", "await_expression", "update_expression"):
    return True
  if parent.type in ("member_expression", "subscript_expression"):
    return node.field_name == "object"
  if parent.type == "call_expression":
    return node.field_name == "function"
  return False


def rewrite_helper_calls(module: Node, rewrite: HelperRewrite, context: RewriterContext) -> int:
  """
  Rewrites every one-argument call to ``rewrite.helper`` under ``module``.

  Returns:
      Number of rewritten calls.
  """
  count = 0
  for call in find_all(module, {"type": "call_expression", "function": {"dotted": rewrite.helper}, "argc": 1}):
    if call.parent is None:
      continue
    arg = call_arguments(call)[0]
    negation = _negation_of(call)
    target = negation or call
    before = target.code

    comparison = parse_expression(rewrite.template(context.builder, negation is not None))
    operand = arg
    if arg.type not in PRIMARY_TYPES:
      operand = parse_expression(f"({PLACEHOLDER})")
      operand.named_children[0].replace_with(arg)

    placeholder = next(n for n in comparison.walk() if n.type == "identifier" and n.code == PLACEHOLDER)
    placeholder.replace_with(operand)

    result = target.replace_with(comparison)
    if _needs_parentheses(result):
      wrapped = parse_expression(f"({PLACEHOLDER})")
      result.replace_with(wrapped)
      wrapped.named_children[0].replace_with(result)

    context.tracer.log_mutation(rewrite.helper, before, result.code)
    count += 1
  return count


def _register(name: str, rewrite: HelperRewrite) -> None:
  @register_transform(name, f"{rewrite.helper}(x) calls to native comparisons")
  def apply(module: Node, context: RewriterContext) -> None:
    rewrite_helper_calls(module, rewrite, context)


for _name, _rewrite in HELPERS.items():
  _register(_name, _rewrite)
