"""
Tests for constructor, interface and directive extraction.
"""

import pytest

from closure_shift.core.errors import DuplicateRegistrationError
from closure_shift.core.rewriter.passes import ClassExtractionPass

WIDGET = """/**
 * A widget.
 * @param {string} name The name.
 * @constructor
 */
app.Widget = function(name) {
  this.name = name;
};
"""


def test_constructor_becomes_class(run_passes):
  code, ctx = run_passes(WIDGET, [ClassExtractionPass()])

  assert code == (
    "/**\n"
    " * A widget.\n"
    " */\n"
    "class Widget {\n"
    "  /**\n"
    "   * Constructor.\n"
    "   * @param {string} name The name.\n"
    "   */\n"
    "  constructor(name) {\n"
    "    this.name = name;\n"
    "  }\n"
    "}\n"
  )
  assert ctx.registry.class_name("app.Widget") == "Widget"
  assert ctx.local_names == {"app.Widget": "Widget"}
  assert ctx.exports == ["Widget"]


def test_undocumented_function_is_ignored(run_passes):
  src = "app.Widget = function() {};\n"
  code, ctx = run_passes(src, [ClassExtractionPass()])
  assert code == src
  assert len(ctx.registry) == 0


def test_private_class_is_not_exported(run_passes):
  src = "/**\n * @constructor\n * @private\n */\napp.Impl_ = function() {};\n"
  code, ctx = run_passes(src, [ClassExtractionPass()])
  assert "class Impl_ {" in code
  assert ctx.exports == []


def test_controller_naming(run_passes):
  src = "/**\n * Controls foo.\n * @param {!angular.Scope} $scope\n * @constructor\n * @ngInject\n */\napp.FooCtrl = function($scope) {};\n"
  code, ctx = run_passes(src, [ClassExtractionPass()])

  assert "class Controller {" in code
  assert " * Controls foo.\n * @unrestricted\n */\nclass Controller" in code
  assert "   * @param {!angular.Scope} $scope\n   * @ngInject\n" in code
  assert ctx.controller == "app.FooCtrl"
  assert ctx.local_names["app.FooCtrl"] == "Controller"


def test_interface_with_stubs(run_passes):
  src = """/**
 * A shape.
 * @interface
 */
app.Shape = function() {};

/**
 * Draws the shape.
 * @param {number} x The x.
 * @param {number} y The y.
 */
app.Shape.prototype.draw;
"""
  code, ctx = run_passes(src, [ClassExtractionPass()])

  assert code == (
    "/**\n"
    " * A shape.\n"
    " * @interface\n"
    " */\n"
    "class Shape {\n"
    "  /**\n"
    "   * Draws the shape.\n"
    "   * @param {number} x The x.\n"
    "   * @param {number} y The y.\n"
    "   */\n"
    "  draw(x, y) {}\n"
    "}\n"
  )
  assert "app.Shape" in ctx.registry


def test_directive_becomes_arrow_binding(run_passes):
  src = "/**\n * @return {angular.Directive}\n */\napp.fooDirective = function() {\n  return {};\n};\n"
  code, ctx = run_passes(src, [ClassExtractionPass()])

  assert code == "/**\n * @return {angular.Directive}\n */\nconst directive = () => {\n  return {};\n};\n"
  assert ctx.directive == "app.fooDirective"
  assert ctx.exports == ["directive"]


def test_taken_local_name_warns(run_passes, captured_console):
  src = "var Widget = 1;\n" + WIDGET
  code, ctx = run_passes(src, [ClassExtractionPass()])

  assert code == src
  assert len(ctx.warnings) == 1
  assert ctx.warnings[0].reason == "local name 'Widget' is already bound in this file"


def test_duplicate_path_is_fatal(run_passes):
  with pytest.raises(DuplicateRegistrationError):
    run_passes(WIDGET + "\n" + WIDGET, [ClassExtractionPass()])
