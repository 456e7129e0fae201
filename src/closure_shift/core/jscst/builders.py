"""
Node Construction.

``JsBuilder`` creates detached nodes from small code templates rendered with the
configured ``FormattingOptions`` (quote style, indentation unit). Existing
subtrees (parameter lists, function bodies, value expressions) are grafted
into the parsed templates, which moves them rather than copying, so their
original text survives byte for byte apart from re-indentation.
"""

from typing import Optional, Sequence, Union

from closure_shift.config import FormattingOptions
from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import (
  parse_class_members,
  parse_expression,
  parse_statement,
)

Graft = Union[Node, str]


class JsBuilder:
  """
  Template-based node factory.

  Attributes:
      options: Formatting settings applied to generated text.
  """

  def __init__(self, options: Optional[FormattingOptions] = None) -> None:
    self.options = options or FormattingOptions()

  @property
  def indent_unit(self) -> str:
    """One level of indentation for generated blocks."""
    if self.options.use_tabs:
      return "\t"
    return " " * self.options.tab_width

  def quote(self, text: str) -> str:
    """
    Renders a string literal in the configured quote style.

    Args:
        text: Raw string content.

    Returns:
        The quoted, escaped literal source.
    """
    q = "'" if self.options.quote == "single" else '"'
    escaped = text.replace("\\", "\\\\").replace(q, "\\" + q)
    return f"{q}{escaped}{q}"

  # --- Generic ---

  def identifier(self, name: str) -> Node:
    return parse_expression(name)

  def expression(self, code: str) -> Node:
    return parse_expression(code)

  def statement(self, code: str) -> Node:
    return parse_statement(code)

  def comment(self, text: str) -> Node:
    """Wraps already rendered comment text (``/** ... */``) in a comment node."""
    return Node(type="comment", value=text)

  def call(self, callee: str, args: Sequence[Graft] = ()) -> Node:
    """
    Builds ``callee(args...)``.

    Args:
        callee: Dotted callee source, e.g. ``goog.module``.
        args: Argument nodes (moved into the call) or argument source strings.

    Returns:
        A ``call_expression`` node.
    """
    call = parse_expression(f"{callee}()")
    arguments = call.child("arguments")
    closing = arguments.children[-1]
    for i, arg in enumerate(args):
      node = parse_expression(arg) if isinstance(arg, str) else arg
      if i:
        arguments.insert_child(closing.index(), Node(type=",", value=",", named=False))
      arguments.insert_child(closing.index(), node)
      node.prefix = " " if i else ""
    return call

  # --- Declarations ---

  def class_declaration(self, name: str) -> Node:
    """An empty ``class Name {}`` declaration."""
    return parse_statement(f"class {name} {{}}")

  def heritage(self, parent: Graft) -> Node:
    """
    Builds the ``extends Parent`` clause of a class declaration.

    Args:
        parent: The superclass expression node or source.
    """
    decl = parse_statement("class _ extends _Parent {}")
    clause = decl.first_child_of_type("class_heritage")
    target = clause.named_children[0]
    target.replace_with(parse_expression(parent) if isinstance(parent, str) else parent)
    clause.detach()
    clause.prefix = " "
    return clause

  def binding(self, kind: str, name: str, value: Optional[Node] = None) -> Node:
    """
    Builds ``kind name = value;`` or the bare ``kind name;`` form.

    Args:
        kind: ``const`` or ``let``.
        name: Binding identifier.
        value: Initializer node, moved into the declaration.

    Returns:
        A ``lexical_declaration`` node.
    """
    if value is None:
      return parse_statement(f"{kind} {name};")
    decl = parse_statement(f"{kind} {name} = 0;")
    declarator = decl.named_children[0]
    declarator.child("value").replace_with(value)
    return decl

  def arrow(self, body: Node, params: str = "()") -> Node:
    """Builds ``params => body`` around an existing statement block."""
    fn = parse_expression(f"{params} => {{}}")
    fn.child("body").replace_with(body)
    return fn

  # --- Class Members ---

  def method(
    self,
    name: str,
    params: Graft = "()",
    body: Graft = "{}",
    indent: str = "",
    source_indent: str = "",
    static: bool = False,
    kind: Optional[str] = None,
    is_async: bool = False,
    generator: bool = False,
  ) -> Node:
    """
    Builds a ``method_definition``.

    Grafted nodes are re-indented from ``source_indent`` (the column of the
    statement they came from) to ``indent`` (the column of the new member).

    Args:
        name: Method name.
        params: ``formal_parameters`` node or parameter source such as ``(a, b)``.
        body: ``statement_block`` node or body source.
        indent: Indentation of the member line.
        source_indent: Indentation of the grafted nodes' original statement.
        static: Emit the ``static`` modifier.
        kind: ``get`` or ``set`` for accessors.
        is_async: Emit the ``async`` modifier.
        generator: Emit the generator star.

    Returns:
        A detached member node with an empty prefix.
    """
    head = ""
    if static:
      head += "static "
    if is_async:
      head += "async "
    if kind:
      head += f"{kind} "
    if generator:
      head += "*"

    params_code = params if isinstance(params, str) else "()"
    body_code = body if isinstance(body, str) else "{}"
    member = self._member(f"{indent}{head}{name}{params_code} {body_code}")

    delta = len(indent) - len(source_indent)
    if isinstance(params, Node):
      params.shift_indent(delta)
      member.child("parameters").replace_with(params)
    if isinstance(body, Node):
      body.shift_indent(delta)
      member.child("body").replace_with(body)
    return member

  def static_getter(self, name: str, value: Node, indent: str, source_indent: str = "") -> Node:
    """
    Builds ``static get name() { return value; }`` over multiple lines.

    Args:
        name: Accessor name.
        value: Expression node moved into the return statement.
        indent: Indentation of the member line.
        source_indent: Indentation of the statement ``value`` came from.
    """
    unit = self.indent_unit
    member = self._member(f"{indent}static get {name}() {{\n{indent}{unit}return 0;\n{indent}}}")
    ret = member.child("body").first_child_of_type("return_statement")
    value.shift_indent(len(indent) + len(unit) - len(source_indent))
    ret.named_children[0].replace_with(value)
    return member

  def singleton_accessor(self, class_name: str, binding: str, indent: str) -> Node:
    """
    Builds the lazy ``static getInstance()`` accessor.

    Args:
        class_name: Class constructed on first access.
        binding: Module-scoped variable holding the instance.
        indent: Indentation of the member line.
    """
    unit = self.indent_unit
    inner = indent + unit
    code = (
      f"{indent}static getInstance() {{\n"
      f"{inner}if (!{binding}) {{\n"
      f"{inner}{unit}{binding} = new {class_name}();\n"
      f"{inner}}}\n"
      f"{inner}return {binding};\n"
      f"{indent}}}"
    )
    return self._member(code)

  def _member(self, code: str) -> Node:
    for member in parse_class_members(code):
      if member.type != "comment":
        member.prefix = ""
        return member
    raise ValueError(f"No class member in template: {code!r}")
