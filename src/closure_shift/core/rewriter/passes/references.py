"""
Reference Rewrite Pass.

Replaces the remaining fully qualified references to every converted path
with its local name (``app.ui.Widget.create()`` -> ``Widget.create()``).
Paths are handled longest first, so ``a.b.C.D`` is resolved before ``a.b.C``
gets a chance to claim its prefix.

In a ``goog.module`` file, ``goog.require('a.b.C');`` statements whose
namespace is still referenced are turned into ``const C = goog.require(...)``
and join the rewrite. The local name is the last segment, or the camel-cased
path when that is reserved or already bound.
"""

from typing import Dict, Optional, Set, Tuple

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.query import declared_names, top_level_statements
from closure_shift.core.matcher import call_arguments, call_statement, string_value
from closure_shift.core.references import is_referenced, rewrite_references
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.passes.namespaces import declared_modules

RESERVED_NAMES = frozenset(
  {
    "arguments",
    "await",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "eval",
    "exports",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "goog",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "module",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "undefined",
    "var",
    "void",
    "while",
    "with",
    "yield",
  }
)


def camel_case(namespace: str) -> str:
  """``goog.events.EventType`` -> ``googEventsEventType``."""
  head, *rest = namespace.split(".")
  return head + "".join(part[:1].upper() + part[1:] for part in rest)


class ReferenceRewritePass(RewriterPass):
  """
  Rewrites qualified references to local names.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    requires: Dict[str, Tuple[Node, Node]] = {}
    if declared_modules(module):
      requires = self._collect_requires(module, context)

    taken: Set[str] = declared_names(module) | set(context.local_names.values())
    paths = set(context.local_names) | set(requires)

    for path in sorted(paths, key=lambda p: (-len(p), p)):
      if path in requires and path not in context.local_names:
        stmt, call = requires[path]
        if not is_referenced(module, path, exclude=stmt):
          continue
        local = self._require_name(path, taken, context)
        if local is None:
          continue
        taken.add(local)
        stmt.replace_with(context.builder.binding("const", local, call))
        context.bind_local(path, local)
        context.tracer.log_mutation("goog.require", path, f"const {local}")

      count = rewrite_references(module, path, context.local_names[path])
      if count:
        context.tracer.log_mutation("reference", path, f"{context.local_names[path]} (x{count})")

  def _collect_requires(self, module: Node, context: RewriterContext) -> Dict[str, Tuple[Node, Node]]:
    found: Dict[str, Tuple[Node, Node]] = {}
    for stmt in top_level_statements(module):
      call = call_statement(stmt, "goog.require")
      if call is None:
        continue
      args = call_arguments(call)
      if not args or len(args) != 1 or args[0].type != "string":
        continue
      namespace = string_value(args[0])
      if "." in namespace and namespace not in found:
        found[namespace] = (stmt, call)
    return found

  def _require_name(self, namespace: str, taken: Set[str], context: RewriterContext) -> Optional[str]:
    for candidate in (namespace.rsplit(".", 1)[1], camel_case(namespace)):
      if candidate not in RESERVED_NAMES and candidate not in taken:
        return candidate
    context.warn(namespace, "", "no free local name for goog.require; left unchanged")
    return None
