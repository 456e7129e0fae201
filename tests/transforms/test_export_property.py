"""
Tests for the ``exportproperty`` transform.
"""


def test_fixture_migration(migrate, fixture_text):
  result = migrate(fixture_text("exportproperty.input.js"), "exportproperty")
  assert result.success
  assert result.code == fixture_text("exportproperty.expected.js")


def test_protected_tag_is_replaced_by_export(migrate):
  src = """/**
 * Runs.
 * @protected
 */
a.B.prototype.run = function() {};
goog.exportProperty(a.B.prototype, 'run', a.B.prototype.run);
"""
  result = migrate(src, "exportproperty")
  assert result.code == "/**\n * Runs.\n * @export\n */\na.B.prototype.run = function() {};\n"


def test_private_method_is_renamed(migrate):
  src = """/** @private */
a.B.prototype.run_ = function() {
  this.run_();
};
goog.exportProperty(a.B.prototype, 'run', a.B.prototype.run_);
"""
  result = migrate(src, "exportproperty")
  assert result.code == "/**\n * @export\n */\na.B.prototype.run = function() {\n  this.run();\n};\n"


def test_export_without_comment_becomes_assignment(migrate):
  src = "a.B.prototype.run = function() {};\ngoog.exportProperty(a.B.prototype, 'run', a.B.prototype.run);\n"
  result = migrate(src, "exportproperty")
  assert result.code == "a.B.prototype.run = function() {};\na.B.prototype['run'] = a.B.prototype.run;\n"


def test_nested_call_is_parenthesized(migrate):
  src = "var f = goog.exportProperty(window, 'x', y);\n"
  result = migrate(src, "exportproperty")
  assert result.code == "var f = (window['x'] = y);\n"


def test_other_arities_are_untouched(migrate):
  src = "goog.exportProperty(window, 'x');\n"
  assert migrate(src, "exportproperty").code == src
