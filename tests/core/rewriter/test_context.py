"""
Tests for the shared rewriter state.
"""

from closure_shift.config import FormattingOptions, RuntimeConfig
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.tracer import TraceEventType


def test_defaults():
  ctx = RewriterContext()
  assert ctx.indent_unit == "  "
  assert len(ctx.registry) == 0
  assert ctx.exports == []
  assert ctx.warnings == []


def test_builder_follows_formatting():
  ctx = RewriterContext(RuntimeConfig(formatting=FormattingOptions(quote="double", tab_width=4)))
  assert ctx.indent_unit == "    "
  assert ctx.builder.quote("a") == '"a"'


def test_export_keeps_order_without_duplicates():
  ctx = RewriterContext()
  ctx.export("Widget")
  ctx.export("Helper")
  ctx.export("Widget")
  assert ctx.exports == ["Widget", "Helper"]


def test_warn_records_and_traces(captured_console):
  ctx = RewriterContext()
  warning = ctx.warn("app.Widget", "size", "unsupported instance member value (number)")

  assert ctx.warnings == [warning]
  assert str(warning) == "app.Widget.size: unsupported instance member value (number)"
  events = ctx.tracer.export()
  assert events[-1]["type"] == TraceEventType.MIGRATION_WARNING
  assert "app.Widget.size" in captured_console.export_text()


def test_warning_without_member_name():
  warning = RewriterContext().warn("app.Widget", "", "local name 'Widget' is already bound in this file")
  assert str(warning) == "app.Widget: local name 'Widget' is already bound in this file"
