"""
Runtime Configuration Store.

Holds the options that steer a migration run (naming conventions for UI
controllers and directives, legacy namespace emission, private method renaming)
together with the ``FormattingOptions`` handed opaquely to the printer and the
node builders.

Settings are read from the ``[tool.closure_shift]`` table of the nearest
``pyproject.toml`` and can be overridden by CLI arguments.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore


class FormattingOptions(BaseModel):
  """
  Printer settings for synthesized code.

  Unmodified source text is always reproduced verbatim; these options only
  shape text that the migration generates.
  """

  quote: Literal["single", "double"] = Field("single", description="Quote style for generated string literals.")
  tab_width: int = Field(2, ge=1, le=8, description="Indentation width of generated blocks.")
  use_tabs: bool = Field(False, description="Indent generated blocks with tabs.")
  wrap_column: int = Field(120, description="Preferred maximum line length.")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the migration engine.
  """

  formatting: FormattingOptions = Field(default_factory=FormattingOptions)

  controller_suffix: str = Field("Ctrl", description="Constructor name suffix marking a UI controller class.")
  controller_name: str = Field("Controller", description="Class name given to converted UI controllers.")
  directive_suffix: str = Field("Directive", description="Function name suffix marking a UI directive factory.")
  directive_name: str = Field("directive", description="Binding name given to converted directive factories.")

  legacy_namespace: bool = Field(True, description="Emit goog.module.declareLegacyNamespace() after the first module.")
  rename_private_methods: bool = Field(True, description="Strip the trailing underscore from migrated private methods.")

  transforms: List[str] = Field(default_factory=lambda: ["classes"], description="Default transforms to run.")
  extensions: List[str] = Field(default_factory=lambda: [".js"], description="File suffixes processed in directories.")

  @field_validator("extensions")
  @classmethod
  def validate_extensions(cls, v: List[str]) -> List[str]:
    """
    Normalizes suffixes to start with a dot.

    Args:
        v (List[str]): Raw suffix list.

    Returns:
        List[str]: Suffixes such as ``[".js", ".mjs"]``.
    """
    return [ext if ext.startswith(".") else f".{ext}" for ext in v]

  @classmethod
  def load(
    cls,
    transforms: Optional[List[str]] = None,
    formatting: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        transforms (Optional[List[str]]): Override for the default transforms.
        formatting (Optional[Dict]): Formatting keys merged over the TOML table.
        overrides (Optional[Dict]): Top-level keys merged over the TOML table.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    data: Dict[str, Any] = {k: v for k, v in toml_config.items() if k != "formatting"}
    data.update(overrides or {})

    # Formatting merges key by key so a single CLI flag does not reset the table
    fmt = dict(toml_config.get("formatting", {}))
    fmt.update(formatting or {})
    data["formatting"] = fmt

    if transforms:
      data["transforms"] = list(transforms)

    return cls.model_validate(data)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("closure_shift", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      print(f"⚠️  Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str:
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
