"""
closure-shift Package.

A source-to-source migrator for JavaScript written against the Closure
Library namespace model. It turns ``goog.provide`` files with constructor
functions and prototype members into ``goog.module`` files with native
classes, and rewrites legacy helper calls into plain JavaScript.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import closure_shift
    code = "goog.isDef(x);"
    print(closure_shift.convert(code, transform="isdef"))
    # x !== undefined;

Advanced Usage (Migration Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from closure_shift import MigrationEngine, RuntimeConfig

    engine = MigrationEngine(config=RuntimeConfig(legacy_namespace=False))
    res = engine.run(source, transform="classes")

    if res.success:
        print(res.code)
    for warning in res.warnings:
        print(warning)
"""

from typing import Optional

from closure_shift.config import FormattingOptions, RuntimeConfig
from closure_shift.core.conversion_result import ConversionResult, MigrationWarning
from closure_shift.core.engine import MigrationEngine
from closure_shift.core.errors import MigrationError

__version__ = "0.1.0"


def convert(code: str, transform: str = "classes", config: Optional[RuntimeConfig] = None) -> str:
  """
  Migrates a string of JavaScript with one registered transform.

  This is a convenience wrapper around `MigrationEngine`; use the engine
  directly to inspect warnings and trace events.

  Args:
      code (str): The source code to migrate.
      transform (str): Transform name (see ``closure-shift list``).
      config (RuntimeConfig, optional): Runtime settings. Defaults apply if None.

  Returns:
      str: The migrated source code.

  Raises:
      MigrationError: If the migration fails (syntax errors, duplicate class
          declarations, unknown transform).
  """
  engine = MigrationEngine(config=config or RuntimeConfig())
  result = engine.run(code, transform=transform)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise MigrationError(f"Migration failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionResult",
  "FormattingOptions",
  "MigrationEngine",
  "MigrationError",
  "MigrationWarning",
  "RuntimeConfig",
  "convert",
  "__version__",
]
