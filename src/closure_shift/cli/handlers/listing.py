"""CLI handler for the 'list' command."""

from rich.table import Table

from closure_shift.transforms import available_transforms, get_transform
from closure_shift.utils.console import console


def handle_list() -> int:
  """Handles 'list' command: renders the registered transforms."""
  table = Table(title="Available Transforms")
  table.add_column("Name", style="cyan")
  table.add_column("Description")

  for name in available_transforms():
    table.add_row(name, get_transform(name).description)

  console.print(table)
  return 0
