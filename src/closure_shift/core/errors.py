"""
Fatal Error Taxonomy.

Errors raised from this module abort the migration of the current program.
The engine converts them into a failed ``ConversionResult`` and never emits
partially rewritten code. Recoverable conditions are reported as
``MigrationWarning`` objects instead (see ``conversion_result.py``).
"""


class MigrationError(Exception):
  """Base class for all fatal migration failures."""


class ParseError(MigrationError):
  """
  Raised when the source text cannot be parsed into a syntax tree.

  Attributes:
      line: 1-based line of the first syntax error, if known.
      column: 1-based column of the first syntax error, if known.
  """

  def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
    super().__init__(message)
    self.line = line
    self.column = column


class DuplicateRegistrationError(MigrationError):
  """
  Raised when a second class declaration is registered for a namespace path.

  Attributes:
      path: The namespace path that was already registered.
  """

  def __init__(self, path: str) -> None:
    super().__init__(f"Namespace '{path}' already has a registered class declaration.")
    self.path = path
