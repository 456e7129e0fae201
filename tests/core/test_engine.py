"""
Tests for the Migration Engine.
"""

from closure_shift.config import RuntimeConfig
from closure_shift.core.engine import MigrationEngine


def test_success_result():
  result = MigrationEngine(RuntimeConfig()).run("goog.isNull(a);", "isnull")
  assert result.success
  assert not result.has_errors
  assert result.code == "a === null;"


def test_unknown_transform():
  result = MigrationEngine(RuntimeConfig()).run("x;", "nope")
  assert not result.success
  assert result.errors == ["Unknown transform 'nope'"]
  assert result.code == ""


def test_parse_error_result(captured_console):
  result = MigrationEngine(RuntimeConfig()).run("var = ;")
  assert not result.success
  assert result.code == ""
  assert result.errors[0].startswith("Parse Error: Syntax error at line 1")
  assert "Parse Error" in captured_console.export_text()
  # the parsing phase is closed before returning
  kinds = [e["type"] for e in result.trace_events]
  assert kinds.count("phase_start") == kinds.count("phase_end")


def test_warnings_surface_with_code(captured_console):
  src = "goog.provide('a.B');\n\n/** @constructor */\na.B = function() {};\n\na.B.prototype.size = 5;\n"
  result = MigrationEngine(RuntimeConfig()).run(src)
  assert result.success
  assert result.has_warnings
  assert str(result.warnings[0]) == "a.B.size: unsupported instance member value (number)"
  assert "B.prototype.size = 5;" in result.code


def test_engine_is_reusable():
  engine = MigrationEngine(RuntimeConfig())
  src = "goog.provide('a.B');\n\n/** @constructor */\na.B = function() {};\n"
  first = engine.run(src)
  second = engine.run(src)
  assert first.code == second.code
  assert first.success and second.success


def test_default_config_is_loaded(tmp_path, monkeypatch):
  (tmp_path / "pyproject.toml").write_text('[tool.closure_shift]\ncontroller_name = "Ctl"\n', encoding="utf-8")
  monkeypatch.chdir(tmp_path)
  assert MigrationEngine().config.controller_name == "Ctl"
