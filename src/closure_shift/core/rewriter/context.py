"""
Rewriter Context Module.

This module provides the `RewriterContext` container, which holds the state
shared by the passes of one migration run: configuration, node builders, the
class registry, local names awaiting reference rewriting, names to export and
the warnings collected so far. A context is never reused across programs.
"""

from typing import Dict, List, Optional

from rich.markup import escape

from closure_shift.config import RuntimeConfig
from closure_shift.core.conversion_result import MigrationWarning
from closure_shift.core.jscst.builders import JsBuilder
from closure_shift.core.registry import ClassRegistry
from closure_shift.core.tracer import TraceLogger
from closure_shift.utils.console import log_warning


class RewriterContext:
  """
  Shared state container for the rewriting pipeline.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, tracer: Optional[TraceLogger] = None) -> None:
    """
    Initializes the context.

    Args:
        config: The runtime configuration for the conversion.
        tracer: Trace recorder of this run; a fresh one is created if omitted.
    """
    self.config = config or RuntimeConfig()
    self.builder = JsBuilder(self.config.formatting)
    self.tracer = tracer or TraceLogger()
    self.registry = ClassRegistry()

    # Namespace path -> local replacement, consumed by the reference pass
    self.local_names: Dict[str, str] = {}

    # Top-level names to expose through `exports`, in declaration order
    self.exports: List[str] = []

    # UI pattern bookkeeping
    self.controller: Optional[str] = None
    self.directive: Optional[str] = None

    self.warnings: List[MigrationWarning] = []

  @property
  def indent_unit(self) -> str:
    return self.builder.indent_unit

  def bind_local(self, path: str, name: str) -> None:
    """Queues ``path`` to be rewritten to ``name`` by the reference pass."""
    self.local_names[path] = name

  def export(self, name: str) -> None:
    if name not in self.exports:
      self.exports.append(name)

  def warn(self, path: str, name: str, reason: str) -> MigrationWarning:
    """
    Records a recoverable problem; the offending code stays unchanged.

    Args:
        path: Namespace path of the declaration being migrated.
        name: Member or field involved (may be empty).
        reason: Human readable explanation.

    Returns:
        The recorded warning.
    """
    warning = MigrationWarning(path=path, name=name, reason=reason)
    self.warnings.append(warning)
    self.tracer.log_warning(str(warning))
    log_warning(escape(str(warning)))
    return warning
