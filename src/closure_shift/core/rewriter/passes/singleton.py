"""
Singleton Rewrite Pass.

``goog.addSingletonGetter(a.b.C);`` is replaced in place by a documented
module binding holding the instance::

    /**
     * Global C instance.
     * @type {C|undefined}
     */
    let instance;

and the class gains a documented ``static getInstance()`` that constructs the
instance on first access.
"""

from closure_shift.core.comments import AnnotationComment
from closure_shift.core.jscst.nodes import Node, line_indent
from closure_shift.core.jscst.query import declared_names, top_level_statements
from closure_shift.core.jscst.statements import append_class_member, class_members, member_name, replace_statement, stack
from closure_shift.core.matcher import call_arguments, call_statement
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass

INSTANCE_BINDING = "instance"
ACCESSOR_NAME = "getInstance"


def _camel(name: str) -> str:
  return name[:1].lower() + name[1:]


class SingletonPass(RewriterPass):
  """
  Converts ``goog.addSingletonGetter`` into a lazy static accessor.
  """

  def transform(self, module: Node, context: RewriterContext) -> None:
    b = context.builder
    for stmt in top_level_statements(module):
      call = call_statement(stmt, "goog.addSingletonGetter")
      if call is None:
        continue
      args = call_arguments(call)
      if not args or len(args) != 1:
        continue

      path = args[0].dotted_name()
      cls = context.registry.lookup(path) if path else None
      if cls is None:
        continue

      name = context.registry.class_name(path)
      if any(member_name(m) == ACCESSOR_NAME for m in class_members(cls)):
        context.warn(path, ACCESSOR_NAME, "class already defines getInstance; singleton getter left in place")
        continue

      taken = declared_names(module) | set(context.local_names.values())
      binding = INSTANCE_BINDING
      if binding in taken:
        binding = f"{_camel(name)}Instance"
        if binding in taken:
          context.warn(path, ACCESSOR_NAME, f"no free name for the singleton instance ('{binding}' is taken)")
          continue

      indent = line_indent(stmt)
      before = stmt.code
      doc = AnnotationComment.of(f"Global {name} instance.", f"@type {{{name}|undefined}}")
      inserted = replace_statement(stmt, stack([b.comment(doc.render(indent)), b.binding("let", binding)], indent))
      first = inserted[0]
      # set the documented binding apart from the code above it
      if first.previous_sibling() is not None and first.prefix.count("\n") < 2:
        first.prefix = "\n\n" + indent

      class_indent = line_indent(cls)
      member_indent = class_indent + context.indent_unit
      accessor_doc = AnnotationComment.of("Get the global instance.", f"@return {{!{name}}}")
      accessor = b.singleton_accessor(name, binding, member_indent)
      append_class_member(
        cls,
        accessor,
        member_indent,
        comment=b.comment(accessor_doc.render(member_indent)),
        class_indent=class_indent,
      )
      context.tracer.log_mutation("goog.addSingletonGetter", before, f"let {binding}; {name}.{ACCESSOR_NAME}()")
