"""
Tests for prototype and static member migration.
"""

from closure_shift.config import RuntimeConfig
from closure_shift.core.jscst import parse_module
from closure_shift.core.rewriter.passes import ClassExtractionPass, MemberMigrationPass
from closure_shift.core.rewriter.passes.members import assignment_count

CTOR = """/**
 * @constructor
 */
app.Widget = function() {
  app.Widget.count_++;
};
"""


def run(run_passes, src, config=None):
  return run_passes(src, [ClassExtractionPass(), MemberMigrationPass()], config)


def test_prototype_method_moves_with_comment(run_passes):
  src = """/**
 * @constructor
 */
app.Widget = function() {};

/**
 * Shows it.
 * @return {boolean}
 */
app.Widget.prototype.show = async function(a, b) {
  return true;
};
"""
  code, _ = run(run_passes, src)
  assert code == (
    "class Widget {\n"
    "  /**\n"
    "   * Constructor.\n"
    "   */\n"
    "  constructor() {}\n"
    "\n"
    "  /**\n"
    "   * Shows it.\n"
    "   * @return {boolean}\n"
    "   */\n"
    "  async show(a, b) {\n"
    "    return true;\n"
    "  }\n"
    "}\n"
  )


def test_private_method_renamed_with_references(run_passes):
  src = """/**
 * @constructor
 */
app.Widget = function() {
  this.render_();
};

/**
 * @private
 */
app.Widget.prototype.render_ = function() {};

app.helper = function(w) {
  app.Widget.prototype.render_.call(w);
};
"""
  code, ctx = run(run_passes, src)
  assert "this.render();" in code
  assert "  render() {}" in code
  assert "app.Widget.prototype.render.call(w);" in code
  assert "render_" not in code
  assert " * @private" in code
  assert ctx.warnings == []


def test_private_rename_conflict_keeps_name(run_passes, captured_console):
  src = """/**
 * @constructor
 */
app.Widget = function() {};

/** @private */
app.Widget.prototype.render_ = function() {};

app.Widget.prototype.render = function() {};
"""
  code, ctx = run(run_passes, src)
  assert "  render_() {}" in code
  assert "  render() {}" in code
  assert [w.reason for w in ctx.warnings] == ["cannot rename private method to 'render': name already in use"]


def test_private_rename_can_be_disabled(run_passes):
  src = CTOR + "\n/** @private */\napp.Widget.prototype.run_ = function() {};\n"
  code, _ = run(run_passes, src, RuntimeConfig(rename_private_methods=False))
  assert "  run_() {}" in code


def test_prototype_alias_keeps_statement(run_passes):
  src = CTOR + "\napp.Widget.prototype.alias = app.Widget.prototype.show;\n"
  code, _ = run(run_passes, src)
  assert "Widget.prototype.alias = app.Widget.prototype.show;" in code
  assert "\napp.Widget.prototype.alias" not in code


def test_unsupported_instance_value_warns(run_passes, captured_console):
  src = CTOR + "\napp.Widget.prototype.size = 5;\n"
  code, ctx = run(run_passes, src)
  assert "app.Widget.prototype.size = 5;" in code
  assert [str(w) for w in ctx.warnings] == ["app.Widget.size: unsupported instance member value (number)"]


def test_static_method_and_getter(run_passes):
  src = """/**
 * @constructor
 */
app.Widget = function() {};

/**
 * Number of widgets.
 * @const {number}
 */
app.Widget.COUNT = 3;

/**
 * Creates one.
 * @return {!app.Widget}
 */
app.Widget.create = function() {
  return new app.Widget();
};
"""
  code, _ = run(run_passes, src)
  assert code == (
    "class Widget {\n"
    "  /**\n"
    "   * Constructor.\n"
    "   */\n"
    "  constructor() {}\n"
    "\n"
    "  /**\n"
    "   * Number of widgets.\n"
    "   * @type {number}\n"
    "   */\n"
    "  static get COUNT() {\n"
    "    return 3;\n"
    "  }\n"
    "\n"
    "  /**\n"
    "   * Creates one.\n"
    "   * @return {!app.Widget}\n"
    "   */\n"
    "  static create() {\n"
    "    return new app.Widget();\n"
    "  }\n"
    "}\n"
  )


def test_reassigned_static_is_left_alone(run_passes, captured_console):
  src = CTOR.replace("app.Widget.count_++", "app.Widget.total += 1") + "\napp.Widget.total = 0;\n"
  code, ctx = run(run_passes, src)
  assert "app.Widget.total = 0;" in code
  assert [w.reason for w in ctx.warnings] == ["reassigned static property cannot become a getter"]


def test_reassigned_static_is_reported_once(run_passes, captured_console):
  src = "/** @constructor */\napp.Widget = function() {};\n\napp.Widget.X = 1;\napp.Widget.X = 2;\n"
  code, ctx = run(run_passes, src)
  assert "app.Widget.X = 1;\napp.Widget.X = 2;\n" in code
  assert [str(w) for w in ctx.warnings] == ["app.Widget.X: reassigned static property cannot become a getter"]


def test_private_statics_become_module_bindings(run_passes):
  src = CTOR + """
/**
 * @type {number}
 * @private
 */
app.Widget.count_ = 0;

/**
 * @type {string}
 * @private
 */
app.Widget.label_ = 'w';

/** @private */
app.Widget.cache_;
"""
  code, _ = run(run_passes, src)
  assert code.startswith(
    "/**\n"
    " * @type {number}\n"
    " */\n"
    "let count_ = 0;\n"
    "\n"
    "/**\n"
    " * @type {string}\n"
    " */\n"
    "const label_ = 'w';\n"
    "\n"
    "let cache_;\n"
    "\n"
    "class Widget {\n"
  )
  assert "    count_++;\n" in code
  assert "app.Widget" not in code


def test_private_static_referencing_class_goes_last(run_passes):
  src = CTOR + "\n/** @private */\napp.Widget.default_ = new app.Widget();\n"
  code, _ = run(run_passes, src)
  assert code.rstrip().endswith("}\n\nconst default_ = new app.Widget();")


def test_assignment_count():
  module = parse_module("a.b = 1;\na.b += 2;\na.b++;\nx = a.b;\na.bc = 3;")
  assert assignment_count(module, "a.b") == 3
