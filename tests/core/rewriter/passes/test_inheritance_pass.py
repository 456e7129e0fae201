"""
Tests for goog.inherits, base() and superClass_ rewriting.
"""

from closure_shift.core.jscst import parse_expression
from closure_shift.core.rewriter.passes import ClassExtractionPass, InheritancePass, MemberMigrationPass
from closure_shift.core.rewriter.passes.inheritance import drop_arguments

PASSES = [ClassExtractionPass(), MemberMigrationPass(), InheritancePass()]

CHILD = """/**
 * @param {string} name
 * @constructor
 * @extends {app.Base}
 */
app.Widget = function(name) {
  app.Widget.base(this, 'constructor', name);
};
goog.inherits(app.Widget, app.Base);


/**
 * @param {number} x
 * @override
 */
app.Widget.prototype.render = function(x) {
  app.Widget.base(this, 'render', x);
};
"""


def test_inherits_and_base_calls(run_passes):
  code, ctx = run_passes(CHILD, PASSES)

  assert code == (
    "class Widget extends app.Base {\n"
    "  /**\n"
    "   * Constructor.\n"
    "   * @param {string} name\n"
    "   */\n"
    "  constructor(name) {\n"
    "    super(name);\n"
    "  }\n"
    "\n"
    "  /**\n"
    "   * @param {number} x\n"
    "   * @override\n"
    "   */\n"
    "  render(x) {\n"
    "    super.render(x);\n"
    "  }\n"
    "}\n"
  )
  assert ctx.warnings == []


def test_generic_extends_stays_on_class(run_passes):
  src = "/**\n * @constructor\n * @extends {app.List<string>}\n */\napp.Names = function() {};\ngoog.inherits(app.Names, app.List);\n"
  code, _ = run_passes(src, PASSES)
  assert code.startswith("/**\n * @extends {app.List<string>}\n */\nclass Names extends app.List {")


def test_this_before_super_warns(run_passes, captured_console):
  src = CHILD.replace("app.Widget.base(this, 'constructor', name);", "this.x = 1;\n  app.Widget.base(this, 'constructor', name);")
  code, ctx = run_passes(src, PASSES)

  assert "    this.x = 1;\n    super(name);" in code
  assert [str(w) for w in ctx.warnings] == ["app.Widget.constructor: 'this' is used before super() is called"]


def test_superclass_calls(run_passes):
  src = """/**
 * @constructor
 */
app.Widget = function() {
  app.Widget.superClass_.constructor.call(this);
};
goog.inherits(app.Widget, app.Base);

app.Widget.prototype.show = function(a) {
  app.Widget.superClass_.show.call(this, a, 2);
};
"""
  code, ctx = run_passes(src, PASSES)
  assert "    super();\n" in code
  assert "    super.show(a, 2);\n" in code
  assert "superClass_" not in code
  assert ctx.warnings == []


def test_superclass_of_another_class_warns(run_passes, captured_console):
  src = """/** @constructor */
app.A = function() {};

/** @constructor */
app.B = function() {};

app.B.prototype.run = function() {
  app.A.superClass_.run.call(this);
};
"""
  code, ctx = run_passes(src, PASSES)
  assert "app.A.superClass_.run.call(this);" in code
  assert [w.reason for w in ctx.warnings] == ["superClass_ call refers to another class (app.A); left unchanged"]


def test_second_superclass_warns(run_passes, captured_console):
  src = CHILD + "goog.inherits(app.Widget, app.Other);\n"
  code, ctx = run_passes(src, PASSES)
  assert "class Widget extends app.Base {" in code
  assert "goog.inherits(app.Widget, app.Other);" in code
  assert [w.reason for w in ctx.warnings] == ["class already has a superclass; goog.inherits left in place"]


def test_inherits_of_unknown_class_is_untouched(run_passes):
  src = "goog.inherits(other.Thing, app.Base);\n"
  code, _ = run_passes(src, PASSES)
  assert code == src


def test_drop_arguments():
  call = parse_expression("f(this, 'render', a,\n    b)")
  drop_arguments(call, 2)
  assert call.code == "f(a,\n    b)"


def test_parent_constructor_call_becomes_super(run_passes):
  src = """/**
 * @param {string} name
 * @constructor
 */
app.Widget = function(name) {
  app.Base.call(this, name, 2);
  this.name = name;
};
goog.inherits(app.Widget, app.Base);

app.Widget.prototype.show = function() {
  app.Base.call(this);
};
"""
  code, ctx = run_passes(src, PASSES)

  assert "  constructor(name) {\n    super(name, 2);\n    this.name = name;\n  }\n" in code
  # only the constructor is rewritten
  assert "  show() {\n    app.Base.call(this);\n  }\n" in code
  assert ctx.warnings == []


def test_parent_call_without_inherits_is_untouched(run_passes):
  src = "/** @constructor */\napp.Widget = function() {\n  app.Base.call(this);\n};\n"
  code, _ = run_passes(src, PASSES)
  assert "    app.Base.call(this);\n" in code
