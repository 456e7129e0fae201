"""
Lossless JavaScript CST built on tree-sitter.
"""

from closure_shift.core.jscst.builders import JsBuilder
from closure_shift.core.jscst.nodes import Node, line_indent
from closure_shift.core.jscst.parser import (
  parse_class_members,
  parse_expression,
  parse_module,
  parse_statement,
  parse_statements,
)
from closure_shift.core.jscst.printer import print_module
from closure_shift.core.jscst.query import find, top_level_statements

__all__ = [
  "JsBuilder",
  "Node",
  "find",
  "line_indent",
  "parse_class_members",
  "parse_expression",
  "parse_module",
  "parse_statement",
  "parse_statements",
  "print_module",
  "top_level_statements",
]
