"""
Entry point for module execution (``python -m closure_shift``).

This module delegates execution to the CLI handler in ``closure_shift.cli.__main__``.
"""

import sys
from closure_shift.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
