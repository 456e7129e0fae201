"""
Class Migration Transform.

Runs the full rewrite pipeline: ``goog.provide`` files with constructor
functions become ``goog.module`` files exporting native classes.
"""

from closure_shift.core.jscst.nodes import Node
from closure_shift.core.rewriter import RewriterContext, RewriterPipeline
from closure_shift.core.rewriter.passes import default_passes
from closure_shift.transforms.base import register_transform


@register_transform("classes", "goog.provide namespaces and constructor functions to goog.module and ES classes")
def migrate_classes(module: Node, context: RewriterContext) -> None:
  RewriterPipeline(default_passes()).run(module, context)
