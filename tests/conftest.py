"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Source normalization for comparing migrated code.
- Console capture for asserting on log output.
"""

import io
import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'closure_shift' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from closure_shift.config import RuntimeConfig  # noqa: E402
from closure_shift.core.engine import MigrationEngine  # noqa: E402
from closure_shift.core.jscst import parse_module  # noqa: E402
from closure_shift.core.rewriter import RewriterContext, RewriterPipeline  # noqa: E402
from closure_shift.utils.console import make_console, reset_console, set_console  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


def normalize(code: str) -> str:
  """Strips trailing whitespace per line and surrounding blank lines."""
  return "\n".join(line.rstrip() for line in code.strip().splitlines())


@pytest.fixture
def migrate():
  """
  Runs one transform with default settings and returns the result.

  Usage::

      result = migrate(code)            # 'classes'
      result = migrate(code, "isdef")
  """
  engine = MigrationEngine(RuntimeConfig())

  def _run(code: str, transform: str = "classes"):
    return engine.run(code, transform)

  return _run


@pytest.fixture
def run_passes():
  """
  Applies a subset of the rewrite passes and returns ``(code, context)``.

  Usage::

      code, ctx = run_passes(src, [ModuleDeclarationPass()])
  """

  def _run(code, passes, config=None):
    context = RewriterContext(config or RuntimeConfig())
    module = RewriterPipeline(list(passes)).run(parse_module(code), context)
    return module.to_text(), context

  return _run


@pytest.fixture
def captured_console():
  """Routes console output and logging into a recording console."""
  recorder = make_console(file=io.StringIO(), record=True, width=200, force_terminal=False)
  set_console(recorder)
  yield recorder
  reset_console()


@pytest.fixture
def fixture_text():
  def _read(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")

  return _read
