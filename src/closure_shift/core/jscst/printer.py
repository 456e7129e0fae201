"""
Tree Printing.

Trees are always built with ``\\n`` line breaks. A file written with ``\\r\\n``
throughout is parsed from its ``\\n`` form and printed back with ``\\r\\n``, so
generated code matches the line endings of the code around it.
"""

from typing import Optional

from closure_shift.config import FormattingOptions
from closure_shift.core.jscst.nodes import Node

CRLF = "\r\n"


def detect_newline(source: str) -> str:
  """``\\r\\n`` when every line break of ``source`` is one, otherwise ``\\n``."""
  crlf = source.count(CRLF)
  return CRLF if crlf and crlf == source.count("\n") else "\n"


def to_lf(source: str, newline: str) -> str:
  return source.replace(CRLF, "\n") if newline == CRLF else source


def print_module(module: Node, options: Optional[FormattingOptions] = None, newline: str = "\n") -> str:
  """
  Renders a program tree back to source text.

  Every node carries its own leading trivia, so the untouched parts of a tree
  print exactly as they were parsed. Generated nodes were already rendered
  with the formatting options by ``JsBuilder``; they are accepted here so the
  printer and the builders of one run share a single configuration.

  Args:
      module: The ``program`` root.
      options: Formatting settings of the run.
      newline: Line break of the original source (see ``detect_newline``).

  Returns:
      The program source.
  """
  text = module.to_text()
  return text.replace("\n", newline) if newline != "\n" else text
