"""
Rewriter Package.

Provides the pass contract, the sequential pipeline and the per-run context.
The passes themselves live in ``closure_shift.core.rewriter.passes``.
"""

from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.pipeline import RewriterPipeline

__all__ = ["RewriterContext", "RewriterPass", "RewriterPipeline"]
