"""
CLI Handlers Package.

Re-exports the handler functions dispatched by ``closure_shift.cli.__main__``.
"""

from .convert import handle_convert, _convert_single_file, _print_batch_summary
from .listing import handle_list

__all__ = [
  "handle_convert",
  "handle_list",
]
