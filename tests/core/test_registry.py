"""
Tests for the run-scoped class registry.
"""

import pytest

from closure_shift.core.errors import DuplicateRegistrationError, MigrationError
from closure_shift.core.jscst import JsBuilder
from closure_shift.core.registry import ClassRegistry


@pytest.fixture
def registry():
  return ClassRegistry()


def test_register_and_lookup(registry):
  cls = JsBuilder().class_declaration("Widget")
  registry.register("app.ui.Widget", cls)

  assert registry.lookup("app.ui.Widget") is cls
  assert registry.class_name("app.ui.Widget") == "Widget"
  assert registry.path_of(cls) == "app.ui.Widget"
  assert "app.ui.Widget" in registry
  assert len(registry) == 1
  assert list(registry) == ["app.ui.Widget"]


def test_absent_path_is_not_an_error(registry):
  assert registry.lookup("app.Missing") is None
  assert registry.class_name("app.Missing") is None
  assert registry.path_of(JsBuilder().class_declaration("X")) is None


def test_duplicate_registration_is_fatal(registry):
  b = JsBuilder()
  registry.register("app.Widget", b.class_declaration("Widget"))

  with pytest.raises(DuplicateRegistrationError) as excinfo:
    registry.register("app.Widget", b.class_declaration("Widget"))

  assert isinstance(excinfo.value, MigrationError)
  assert excinfo.value.path == "app.Widget"


def test_items_preserve_registration_order(registry):
  b = JsBuilder()
  for name in ("B", "A", "C"):
    registry.register(f"app.{name}", b.class_declaration(name))
  assert [path for path, _ in registry.items()] == ["app.B", "app.A", "app.C"]
