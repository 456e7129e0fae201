"""
JSDoc Annotation Comments.

Provides ``AnnotationComment``, a line-oriented view of a ``/** ... */`` block,
the pure tag predicates used to make privacy/export decisions, and
``split_class_comment``, which partitions a constructor's JSDoc between the new
class declaration and its ``constructor`` method.

Line Model:
    Every stored line is the text following the ``*`` gutter, so ``" * Foo."``
    is stored as ``" Foo."`` and an empty gutter line as ``""``. Indentation
    after the gutter is significant: it is how multi-line ``@param``
    descriptions are recognised.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

_TAG_RE = re.compile(r"^\s*@(\w+)")
_PARAM_NAME_RE = re.compile(r"@param\s+\{[^}]+\}\s+([^\s]+)")
_EXTENDS_GENERIC_RE = re.compile(r"@extends\s*\{.+<.+>\}")

# Minimum extra indentation (after the gutter) of a @param continuation line.
PARAM_CONTINUATION_INDENT = 2


def comment_lines(text: str) -> List[str]:
  """
  Extracts the gutter-stripped lines of a block comment.

  Args:
      text: Comment source including the ``/**`` and ``*/`` delimiters.

  Returns:
      Lines in order; the opener and closer lines are dropped when empty.
  """
  body = text
  if body.startswith("/**"):
    body = body[3:]
  elif body.startswith("/*"):
    body = body[2:]
  if body.endswith("*/"):
    body = body[:-2]

  raw = body.split("\n")
  lines: List[str] = []
  for i, line in enumerate(raw):
    stripped = line.strip()
    if (i == 0 or i == len(raw) - 1) and not stripped:
      continue
    if stripped.startswith("*"):
      lines.append(line.lstrip()[1:].rstrip())
    else:
      lines.append(" " + stripped if stripped else "")
  return lines


def _tag(line: str) -> Optional[str]:
  match = _TAG_RE.match(line)
  return match.group(1) if match else None


def _depth(line: str) -> int:
  return len(line) - len(line.lstrip(" "))


@dataclass(frozen=True)
class AnnotationComment:
  """
  Immutable JSDoc block.

  Attributes:
      lines: Gutter-stripped lines (see module docs).
  """

  lines: Tuple[str, ...] = ()

  @classmethod
  def parse(cls, text: str) -> "AnnotationComment":
    return cls(tuple(comment_lines(text)))

  @classmethod
  def of(cls, *lines: str) -> "AnnotationComment":
    """Builds a comment from plain text lines (``"Foo."`` -> ``" Foo."``)."""
    return cls(tuple(f" {line}" if line else "" for line in lines))

  # --- Tag Predicates ---

  @property
  def tags(self) -> FrozenSet[str]:
    return frozenset(t for t in (_tag(line) for line in self.lines) if t)

  def has_tag(self, name: str) -> bool:
    return name in self.tags

  @property
  def is_private(self) -> bool:
    return self.has_tag("private")

  @property
  def is_protected(self) -> bool:
    return self.has_tag("protected")

  @property
  def is_constructor(self) -> bool:
    return self.has_tag("constructor")

  @property
  def is_interface(self) -> bool:
    return self.has_tag("interface") or self.has_tag("record")

  def param_names(self) -> List[str]:
    """Parameter names declared by ``@param {Type} name`` lines."""
    names = []
    for line in self.lines:
      match = _PARAM_NAME_RE.search(line)
      if match:
        names.append(match.group(1))
    return names

  # --- Derivation ---

  def without_tags(self, *names: str) -> "AnnotationComment":
    """Drops every line that starts with one of the given tags."""
    return AnnotationComment(tuple(line for line in self.lines if _tag(line) not in names))

  def with_tag(self, name: str) -> "AnnotationComment":
    """Appends a bare ``@name`` line unless the tag is already present."""
    if self.has_tag(name):
      return self
    return AnnotationComment(self.lines + (f" @{name}",))

  def const_as_type(self) -> "AnnotationComment":
    """Strips ``@const``; a typed ``@const {T}`` line becomes ``@type {T}``."""
    out = []
    for line in self.lines:
      if _tag(line) != "const":
        out.append(line)
        continue
      typed = re.sub(r"@const\b", "@type", line, count=1)
      if "{" in typed:
        out.append(typed)
    return AnnotationComment(tuple(out))

  def trimmed(self) -> "AnnotationComment":
    """Removes leading and trailing blank lines."""
    lines = list(self.lines)
    while lines and not lines[0].strip():
      lines.pop(0)
    while lines and not lines[-1].strip():
      lines.pop()
    return AnnotationComment(tuple(lines))

  @property
  def is_empty(self) -> bool:
    return not any(line.strip() for line in self.lines)

  def render(self, indent: str = "") -> str:
    """
    Renders the block as JSDoc source.

    Args:
        indent: Column indentation of the comment's first line.

    Returns:
        ``/**`` + one `` * line`` per line + `` */``.
    """
    out = ["/**"]
    for line in self.lines:
      out.append(f"{indent} *{line}")
    out.append(f"{indent} */")
    return "\n".join(out)


# --- Class / Constructor Partitioning ---


class _State(Enum):
  NORMAL = "normal"
  IN_PARAM = "in-parameter-block"


@dataclass
class CommentSplit:
  """
  Result of ``split_class_comment``.

  Attributes:
      class_comment: Lines kept on the class, None when nothing remains.
      constructor_comment: Lines moved to the constructor, always opening with
          ``Constructor.``.
  """

  class_comment: Optional[AnnotationComment]
  constructor_comment: AnnotationComment


def split_class_comment(comment: AnnotationComment) -> CommentSplit:
  """
  Routes each line of a constructor JSDoc to the class or the constructor.

  A single left-to-right pass with two states. Entering a ``@param`` line
  switches to IN_PARAM; the block continues while lines are indented at least
  ``PARAM_CONTINUATION_INDENT`` spaces deeper than the ``@param`` line.

  Routing:
      ``@constructor``: dropped.
      ``@extends`` without a generic parameter: dropped.
      ``@param`` and its continuations: constructor.
      ``@ngInject``: constructor.
      anything else: class.

  Args:
      comment: The original constructor comment.

  Returns:
      The two trimmed partitions.
  """
  class_lines: List[str] = []
  ctor_lines: List[str] = []

  state = _State.NORMAL
  param_depth = 0

  for line in comment.lines:
    tag = _tag(line)

    if state is _State.IN_PARAM and (not line.strip() or _depth(line) < param_depth + PARAM_CONTINUATION_INDENT):
      state = _State.NORMAL

    if tag == "constructor" or (tag == "extends" and not _EXTENDS_GENERIC_RE.search(line)):
      continue
    if tag == "param":
      ctor_lines.append(line)
      state = _State.IN_PARAM
      param_depth = _depth(line)
    elif state is _State.IN_PARAM:
      ctor_lines.append(line)
    elif "@ngInject" in line:
      ctor_lines.append(line)
    else:
      class_lines.append(line)

  class_comment = AnnotationComment(tuple(class_lines)).trimmed()
  ctor_comment = AnnotationComment((" Constructor.",) + AnnotationComment(tuple(ctor_lines)).trimmed().lines)
  return CommentSplit(
    class_comment=None if class_comment.is_empty else class_comment,
    constructor_comment=ctor_comment,
  )
