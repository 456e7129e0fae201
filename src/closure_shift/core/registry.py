"""
Class Registry.

Maps each namespace path (``app.ui.Widget``) to the class declaration produced
for it during extraction. One registry exists per program run; it is owned by
the run's ``RewriterContext`` and discarded with it.

Absence is never an error: ``lookup`` returns None and callers leave the
original code untouched.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from closure_shift.core.errors import DuplicateRegistrationError
from closure_shift.core.jscst.nodes import Node


class ClassRegistry:
  """
  Run-scoped mapping ``NamespacePath -> class_declaration``.
  """

  def __init__(self) -> None:
    self._classes: Dict[str, Node] = {}

  def register(self, path: str, node: Node) -> None:
    """
    Records the class declaration generated for ``path``.

    Args:
        path: Dotted namespace path of the legacy declaration.
        node: The ``class_declaration`` node that replaced it.

    Raises:
        DuplicateRegistrationError: If ``path`` is already registered.
    """
    if path in self._classes:
      raise DuplicateRegistrationError(path)
    self._classes[path] = node

  def lookup(self, path: str) -> Optional[Node]:
    return self._classes.get(path)

  def path_of(self, node: Node) -> Optional[str]:
    """Reverse lookup: the path that produced ``node``."""
    for path, registered in self._classes.items():
      if registered is node:
        return path
    return None

  def class_name(self, path: str) -> Optional[str]:
    """Local name of the class declared for ``path``."""
    node = self._classes.get(path)
    if node is None:
      return None
    name = node.child("name")
    return name.code if name is not None else None

  def items(self) -> List[Tuple[str, Node]]:
    return list(self._classes.items())

  def __contains__(self, path: object) -> bool:
    return path in self._classes

  def __len__(self) -> int:
    return len(self._classes)

  def __iter__(self) -> Iterator[str]:
    return iter(list(self._classes))
