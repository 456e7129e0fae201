"""
Orchestration logic for executing sequential rewriter passes.

This module provides the ``RewriterPipeline``, which manages the sequential
execution of multiple ``RewriterPass`` instances over a shared Context.
"""

from typing import List

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass


class RewriterPipeline:
  """
  Manages a sequence of rewriting passes and executes them in order.
  """

  def __init__(self, passes: List[RewriterPass]) -> None:
    """
    Initializes the pipeline with a list of passes.

    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  def run(self, module: Node, context: RewriterContext) -> Node:
    """
    Executes all registered passes sequentially on the program tree.

    Fatal errors raised by a pass propagate unchanged; the remaining passes
    are not run.

    Args:
        module: The tree to transform (mutated in place).
        context: The shared execution state of this run.

    Returns:
        The transformed tree.
    """
    for pass_instance in self.passes:
      context.tracer.start_phase(pass_instance.name)
      try:
        pass_instance.transform(module, context)
      finally:
        context.tracer.end_phase()

    return module
