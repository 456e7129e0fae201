"""
Tests for the Rewriter Pipeline Infrastructure.
"""

import pytest

from closure_shift.core.errors import MigrationError
from closure_shift.core.jscst import JsBuilder, Node, parse_module
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.pipeline import RewriterPipeline
from closure_shift.core.tracer import TraceEventType


class MockPass(RewriterPass):
  """Simple pass that appends a comment to verify execution."""

  def __init__(self, label: str) -> None:
    self.label = label

  def transform(self, module: Node, context: RewriterContext) -> None:
    comment = JsBuilder().comment(f"// Pass: {self.label}")
    comment.prefix = "\n"
    module.append_child(comment)


class FailingPass(RewriterPass):
  def transform(self, module: Node, context: RewriterContext) -> None:
    raise MigrationError("boom")


def test_pipeline_execution_sequence() -> None:
  """
  Verify that passes are executed in the order provided.
  """
  ctx = RewriterContext()
  pipeline = RewriterPipeline([MockPass("A"), MockPass("B")])

  module = pipeline.run(parse_module("x = 1;"), ctx)
  code = module.to_text()

  assert "// Pass: A" in code
  assert "// Pass: B" in code
  assert code.find("// Pass: A") < code.find("// Pass: B")


def test_pipeline_traces_each_pass() -> None:
  ctx = RewriterContext()
  RewriterPipeline([MockPass("A"), MockPass("B")]).run(parse_module("x = 1;"), ctx)

  starts = [e for e in ctx.tracer.export() if e["type"] == TraceEventType.PHASE_START]
  assert [e["description"] for e in starts] == ["MockPass", "MockPass"]


def test_pipeline_empty() -> None:
  """
  Verify pipeline works with no passes (Identity).
  """
  module = parse_module("x = 1;")
  result = RewriterPipeline([]).run(module, RewriterContext())
  assert result.to_text() == "x = 1;"


def test_fatal_error_stops_pipeline() -> None:
  ctx = RewriterContext()
  after = MockPass("after")
  module = parse_module("x = 1;")

  with pytest.raises(MigrationError):
    RewriterPipeline([FailingPass(), after]).run(module, ctx)

  assert "after" not in module.to_text()
  # the failing phase is still closed
  kinds = [e["type"] for e in ctx.tracer.export()]
  assert kinds == [TraceEventType.PHASE_START, TraceEventType.PHASE_END]


def test_interface_enforcement() -> None:
  """
  Verify abstract base class enforcement.
  """
  with pytest.raises(TypeError):

    class InvalidPass(RewriterPass):
      pass

    InvalidPass()
