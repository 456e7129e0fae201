"""
Tests for JSDoc annotation handling.

Verifies that:
1. Comment text is split into gutter-stripped lines.
2. Tag predicates and derivations are pure.
3. Constructor comments are routed between class and constructor
   deterministically, including multi-line @param descriptions.
"""

from closure_shift.core.comments import AnnotationComment, comment_lines, split_class_comment

CTOR_DOC = """/**
 * Widget controller.
 * @param {string} name The name, which
 *     spans two lines.
 * @param {number} size
 * More class text.
 * @constructor
 * @extends {app.Base}
 * @extends {app.List<string>}
 * @ngInject
 */"""


def test_comment_lines():
  assert comment_lines("/**\n * One.\n *\n * @private\n */") == [" One.", "", " @private"]
  assert comment_lines("/** @constructor */") == [" @constructor"]


def test_tag_predicates():
  doc = AnnotationComment.parse("/**\n * @private\n * @const {number}\n * @param {string} a\n */")
  assert doc.is_private
  assert doc.has_tag("const")
  assert not doc.is_protected
  assert not doc.is_constructor
  assert doc.tags == frozenset({"private", "const", "param"})
  assert doc.param_names() == ["a"]


def test_interface_and_record():
  assert AnnotationComment.parse("/** @interface */").is_interface
  assert AnnotationComment.parse("/** @record */").is_interface


def test_derivations_do_not_mutate():
  doc = AnnotationComment.of("Does things.", "@protected")
  updated = doc.without_tags("protected").with_tag("export")
  assert doc.lines == (" Does things.", " @protected")
  assert updated.lines == (" Does things.", " @export")
  assert updated.with_tag("export") is updated


def test_const_as_type():
  typed = AnnotationComment.of("Count.", "@const {number}").const_as_type()
  assert typed.lines == (" Count.", " @type {number}")
  bare = AnnotationComment.of("Count.", "@const").const_as_type()
  assert bare.lines == (" Count.",)


def test_render_with_indent():
  doc = AnnotationComment.of("Shows.", "", "@return {boolean}")
  assert doc.render("  ") == "/**\n   * Shows.\n   *\n   * @return {boolean}\n   */"


def test_split_class_comment_routing():
  split = split_class_comment(AnnotationComment.parse(CTOR_DOC))

  assert split.class_comment.lines == (
    " Widget controller.",
    " More class text.",
    " @extends {app.List<string>}",
  )
  assert split.constructor_comment.lines == (
    " Constructor.",
    " @param {string} name The name, which",
    "     spans two lines.",
    " @param {number} size",
    " @ngInject",
  )
  # @constructor and a plain @extends are dropped from both partitions
  assert " @constructor" not in split.class_comment.lines + split.constructor_comment.lines
  assert " @extends {app.Base}" not in split.class_comment.lines + split.constructor_comment.lines


def test_split_is_deterministic():
  doc = AnnotationComment.parse(CTOR_DOC)
  assert split_class_comment(doc) == split_class_comment(doc)


def test_split_without_class_text():
  split = split_class_comment(AnnotationComment.parse("/**\n * @param {number} x\n * @constructor\n */"))
  assert split.class_comment is None
  assert split.constructor_comment.lines == (" Constructor.", " @param {number} x")
