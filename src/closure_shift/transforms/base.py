"""
Transform Registry.

A transform is one self-contained migration (``classes``, ``isdef``, ...)
applied to a parsed program. Implementations register themselves with the
``@register_transform`` decorator and are looked up by name from the engine
and the CLI.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from closure_shift.config import RuntimeConfig
from closure_shift.core.jscst.nodes import Node
from closure_shift.core.jscst.parser import parse_module
from closure_shift.core.jscst.printer import detect_newline, print_module, to_lf
from closure_shift.core.rewriter.context import RewriterContext

ApplyFn = Callable[[Node, RewriterContext], None]


@dataclass(frozen=True)
class Transform:
  """
  A named migration entry point.

  Attributes:
      name: Registry key used on the command line.
      description: One-line summary shown by ``closure-shift list``.
      apply: Mutates a parsed program in place.
  """

  name: str
  description: str
  apply: ApplyFn

  def migrate(self, source: str, context: RewriterContext) -> str:
    """
    Parses ``source``, applies the transform and prints the result.

    Raises:
        MigrationError: On unparsable input or a fatal rewrite conflict.
    """
    newline = detect_newline(source)
    module = parse_module(to_lf(source, newline))
    self.apply(module, context)
    return print_module(module, context.config.formatting, newline)

  def __call__(self, source: str, config: Optional[RuntimeConfig] = None) -> str:
    return self.migrate(source, RewriterContext(config))


_TRANSFORM_REGISTRY: Dict[str, Transform] = {}


def register_transform(name: str, description: str = ""):
  def wrapper(fn: ApplyFn) -> ApplyFn:
    _TRANSFORM_REGISTRY[name] = Transform(name=name, description=description, apply=fn)
    return fn

  return wrapper


def get_transform(name: str) -> Optional[Transform]:
  return _TRANSFORM_REGISTRY.get(name)
