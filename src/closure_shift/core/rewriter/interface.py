"""
Interface definition for Rewriter Passes.

This module defines the abstract base class that all transformation passes
must implement to be compatible with the ``RewriterPipeline``.
"""

from abc import ABC, abstractmethod

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.rewriter.context import RewriterContext


class RewriterPass(ABC):
  """
  Abstract contract for a transformation pass in the rewriting pipeline.

  Passes encapsulate one rewrite (module declarations, class extraction,
  member migration, ...) and are executed sequentially by the pipeline. Each
  pass mutates the shared program tree in place and re-queries it from the
  root, so it observes every mutation of the passes before it.
  """

  @property
  def name(self) -> str:
    return type(self).__name__

  @abstractmethod
  def transform(self, module: Node, context: RewriterContext) -> None:
    """
    Executes the transformation logic on the given program tree.

    Args:
        module: The ``program`` root node, mutated in place.
        context: The shared rewriter context containing configuration and state.
    """
    pass
