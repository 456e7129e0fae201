"""
Orchestration Engine for Migrations.

This module provides the `MigrationEngine`, the driver used by the CLI and the
``closure_shift.convert`` API. A run consists of:

1.  **Ingestion**: parsing the source into a lossless CST. Malformed input is
    fatal.
2.  **Rewriting**: applying the selected transform to the tree. For
    ``classes`` this is the full pass pipeline, each pass traced as its own
    phase.
3.  **Output Generation**: printing the tree. Text that no pass touched is
    reproduced byte for byte.

Fatal errors (`MigrationError`) produce a failed `ConversionResult` with no
code; recoverable problems are collected as warnings next to the output.
"""

from typing import Optional

from rich.markup import escape

from closure_shift.config import RuntimeConfig
from closure_shift.core.conversion_result import ConversionResult
from closure_shift.core.errors import MigrationError, ParseError
from closure_shift.core.jscst.parser import parse_module
from closure_shift.core.jscst.printer import detect_newline, print_module, to_lf
from closure_shift.core.rewriter.context import RewriterContext
from closure_shift.core.tracer import TraceLogger
from closure_shift.transforms import get_transform
from closure_shift.utils.console import log_error


class MigrationEngine:
  """
  The main migration unit.

  Each call to `run` uses a fresh context, so one engine can process many
  files without state leaking between them.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): Runtime settings. Loaded from the
            nearest ``pyproject.toml`` if omitted.
    """
    self.config = config or RuntimeConfig.load()

  def run(self, code: str, transform: str = "classes") -> ConversionResult:
    """
    Executes one transform over a program.

    Args:
        code (str): The input JavaScript source.
        transform (str): Registered transform name.

    Returns:
        ConversionResult: Rewritten code, warnings, errors and trace events.
    """
    tracer = TraceLogger()
    selected = get_transform(transform)
    if selected is None:
      return ConversionResult(code="", errors=[f"Unknown transform '{transform}'"], success=False)

    context = RewriterContext(self.config, tracer)
    tracer.start_phase("Migration Pipeline", transform)

    # --- PHASE 1: INGESTION ---
    tracer.start_phase("Parsing", "Source -> CST")
    newline = detect_newline(code)
    try:
      module = parse_module(to_lf(code, newline))
    except ParseError as e:
      tracer.end_phase()
      tracer.end_phase()
      log_error(escape(f"Parse Error: {e}"))
      return ConversionResult(code="", errors=[f"Parse Error: {e}"], success=False, trace_events=tracer.export())
    tracer.end_phase()

    # --- PHASE 2: REWRITING ---
    tracer.start_phase("Rewriting", selected.description)
    try:
      selected.apply(module, context)
    except MigrationError as e:
      tracer.end_phase()
      tracer.end_phase()
      log_error(escape(f"Migration Error: {e}"))
      return ConversionResult(
        code="",
        errors=[f"Migration Error: {e}"],
        warnings=context.warnings,
        success=False,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    # --- PHASE 3: OUTPUT GENERATION ---
    tracer.start_phase("Printing", "CST -> Source")
    output = print_module(module, self.config.formatting, newline)
    tracer.end_phase()

    tracer.end_phase()
    return ConversionResult(
      code=output,
      warnings=context.warnings,
      success=True,
      trace_events=tracer.export(),
    )
