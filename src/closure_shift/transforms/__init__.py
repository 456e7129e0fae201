"""
Transforms Package.

Automatically discovers and registers transforms by importing every module in
this directory. Dropping a new module that uses ``@register_transform`` into
the folder makes it available to the engine and the CLI.
"""

import importlib
import pkgutil
from pathlib import Path
from typing import List

from rich.markup import escape

from closure_shift.transforms.base import (
  Transform,
  _TRANSFORM_REGISTRY,
  get_transform,
  register_transform,
)
from closure_shift.utils.console import log_warning

# Infrastructure modules, not transforms.
_EXCLUDED_MODULES = {"base", "__init__"}


def _auto_register_transforms() -> None:
  """Imports each transform module so its decorators populate the registry."""
  pkg_path = str(Path(__file__).parent)

  for _, module_name, _ in pkgutil.iter_modules([pkg_path]):
    if module_name in _EXCLUDED_MODULES:
      continue

    try:
      importlib.import_module(f".{module_name}", package=__name__)
    except Exception as e:
      # One broken transform must not hide the others.
      log_warning(escape(f"Failed to load transform module '{module_name}': {e}. Its transforms are unavailable."))


_auto_register_transforms()


def available_transforms() -> List[str]:
  """
  Returns the registered transform names in registration order.

  Returns:
      List[str]: e.g. ``['classes', 'isdef', ...]``.
  """
  return list(_TRANSFORM_REGISTRY.keys())


__all__ = [
  "Transform",
  "available_transforms",
  "get_transform",
  "register_transform",
]
