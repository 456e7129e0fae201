"""
Convert Command Handler.

This module implements the logic for the `closure-shift convert` command.
It orchestrates:
1. Configuration loading (``pyproject.toml`` plus ``--config`` overrides).
2. Running the selected transforms, in order, through the Engine.
3. Output writing (file, directory tree, in place or stdout) and trace logging.
4. A summary of failures and warnings.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.markup import escape
from rich.table import Table

from closure_shift.config import FormattingOptions, RuntimeConfig
from closure_shift.core.conversion_result import ConversionResult, MigrationWarning
from closure_shift.core.engine import MigrationEngine
from closure_shift.transforms import get_transform
from closure_shift.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  transforms: Optional[List[str]],
  dry: bool = False,
  in_place: bool = False,
  settings: Optional[Dict[str, Any]] = None,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to migrate.
      output_path: Where migrated code is saved (file, or directory root).
      transforms: Transform names to chain; None uses the configured default.
      dry: Print migrated code instead of writing it.
      in_place: Overwrite the input files.
      settings: ``key=value`` overrides; formatting keys are routed to
          ``FormattingOptions``.
      json_trace_path: Trace JSON file (single file) or directory (batch).

  Returns:
      int: Exit code (0 for success, 1 if any file failed).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1
  if in_place and output_path:
    log_error("--in-place cannot be combined with --out.")
    return 1

  # 1. Load Configuration (TOML + CLI overrides)
  formatting, overrides = _split_settings(settings or {})
  config = RuntimeConfig.load(
    transforms=transforms,
    formatting=formatting,
    overrides=overrides,
    search_path=input_path if input_path.is_dir() else input_path.parent,
  )

  unknown = [name for name in config.transforms if get_transform(name) is None]
  if unknown:
    log_error(f"Unknown transform(s): {', '.join(unknown)}. Run 'closure-shift list'.")
    return 1

  engine = MigrationEngine(config=config)
  batch_results: Dict[str, ConversionResult] = {}

  # 2. Process Input (File vs Directory)
  if input_path.is_file():
    dest = input_path if in_place else output_path
    result = _convert_single_file(input_path, dest, engine, config.transforms, dry, json_trace_path)
    batch_results[input_path.name] = result

  else:
    if not output_path and not (dry or in_place):
      log_error("Directory conversion requires --out, --in-place or --dry.")
      return 1

    js_files = sorted(p for p in input_path.rglob("*") if p.is_file() and p.suffix in config.extensions)
    if not js_files:
      log_warning(f"No {', '.join(config.extensions)} files found in {input_path}")
      return 0

    log_info(f"Processing {len(js_files)} files from {input_path}...")

    for src_file in js_files:
      rel_path = src_file.relative_to(input_path)
      if in_place:
        dest_file: Optional[Path] = src_file
      else:
        dest_file = output_path / rel_path if output_path else None

      # One trace file per input, mirrored under the trace directory
      batch_trace = None
      if json_trace_path:
        batch_trace = (json_trace_path / rel_path).with_suffix(".trace.json")

      result = _convert_single_file(src_file, dest_file, engine, config.transforms, dry, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _split_settings(settings: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
  """Separates ``FormattingOptions`` keys from top-level configuration keys."""
  formatting: Dict[str, Any] = {}
  overrides: Dict[str, Any] = {}
  for key, value in settings.items():
    name = key[len("formatting.") :] if key.startswith("formatting.") else key
    if name in FormattingOptions.model_fields:
      formatting[name] = value
    else:
      overrides[key] = value
  return formatting, overrides


def _run_transforms(engine: MigrationEngine, code: str, transforms: List[str]) -> ConversionResult:
  """
  Chains transforms, feeding each one the previous output.

  Stops at the first failing transform; no partial output is returned.
  """
  events: List[Dict[str, Any]] = []
  warnings: List[MigrationWarning] = []
  current = code

  for name in transforms:
    result = engine.run(current, transform=name)
    events.extend(result.trace_events)
    warnings.extend(result.warnings)
    if not result.success:
      return ConversionResult(code="", errors=result.errors, warnings=warnings, success=False, trace_events=events)
    current = result.code

  return ConversionResult(code=current, warnings=warnings, trace_events=events)


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: MigrationEngine,
  transforms: List[str],
  dry: bool = False,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the migration on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path (None prints to stdout).
      engine: Configured Migration Engine.
      transforms: Transform names to chain.
      dry: Print instead of writing.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    result = _run_transforms(engine, code, transforms)

    if json_trace_path and result.trace_events:
      try:
        json_trace_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_trace_path, "wt", encoding="utf-8") as f:
          json.dump(result.trace_events, f, indent=2, default=str)
        log_info(f"Trace saved to [path]{json_trace_path}[/path]")
      except OSError as e:
        log_error(f"Failed to write trace: {e}")

    if not result.success:
      return result

    if output_path and not dry:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      log_success(f"Migrated: [path]{input_path}[/path] -> [path]{output_path}[/path]")
    else:
      # Print to stdout if no output
      print(result.code, end="")

    return result
  except Exception as e:
    log_error(f"Failed to convert {input_path}: {escape(str(e))}")
    return ConversionResult(success=False, errors=[str(e)])


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  clean = sum(1 for r in results.values() if r.success and not r.has_warnings)
  issues = total - clean

  if issues == 0:
    log_success(f"Batch Complete: {clean}/{total} files migrated cleanly.")
    return

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.has_warnings:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    messages = res.errors + [str(w) for w in res.warnings]
    table.add_row(escape(filename), status, escape("; ".join(messages) or "Unknown Error"))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {clean} Clean, {issues} with Issues.")
