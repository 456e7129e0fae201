"""
Data structures representing the output of a migration run.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the rewritten code, fatal errors, recoverable warnings and the execution trace.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class MigrationWarning(BaseModel):
  """
  A recognized pattern that could not be rewritten safely.

  The offending code is left unchanged and the run continues.
  """

  path: str = Field(description="Namespace path of the declaration being migrated.")
  name: str = Field(default="", description="Member or field involved.")
  reason: str = Field(description="Why the rewrite was skipped.")

  def __str__(self) -> str:
    target = f"{self.path}.{self.name}" if self.name else self.path
    return f"{target}: {self.reason}"


class ConversionResult(BaseModel):
  """
  Container for the results of a migration job.
  """

  code: str = Field(default="", description="The rewritten source code.")
  errors: List[str] = Field(default_factory=list, description="Fatal error messages.")
  warnings: List[MigrationWarning] = Field(default_factory=list, description="Recoverable issues.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal errors.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0

  @property
  def has_warnings(self) -> bool:
    return len(self.warnings) > 0
