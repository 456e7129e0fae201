"""
Main Entry Point for closure-shift CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `closure_shift.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from closure_shift import __version__
from closure_shift.cli import handlers
from closure_shift.config import parse_cli_key_values


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="closure-shift: Closure Library to goog.module migrator")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Migrate a JavaScript file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument(
    "--transform",
    "-t",
    action="append",
    default=None,
    help="Transform to apply; repeat to chain several (default: from toml, else 'classes')",
  )
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument("--dry", action="store_true", help="Print results instead of writing files")
  cmd_conv.add_argument("--in-place", action="store_true", help="Overwrite the input files")
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (phases, mutations) to a JSON file."
  )
  cmd_conv.add_argument(
    "--config",
    nargs="*",
    help="Configuration flags in key=value format (e.g. quote=double legacy_namespace=false)",
  )

  # --- Command: LIST ---
  subparsers.add_parser("list", help="Show the available transforms")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return handlers.handle_convert(
      args.path,
      args.out,
      args.transform,
      dry=args.dry,
      in_place=args.in_place,
      settings=parse_cli_key_values(args.config),
      json_trace_path=args.json_trace,
    )

  elif args.command == "list":
    return handlers.handle_list()

  return 0


if __name__ == "__main__":
  sys.exit(main())
