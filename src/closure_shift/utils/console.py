"""
Console and Logging.

Progress messages and migration warnings go to the ``closure_shift`` logger,
rendered by Rich on standard error. Migrated code is the only thing written
to standard output, so ``closure-shift convert --dry`` output can be piped.

``console`` is a stable proxy around the active Rich console. ``set_console``
swaps the console behind it and moves the logger's handler along, so modules
keep the reference they imported.

Attributes:
    logger (logging.Logger): The package logger.
    console (_ConsoleProxy): Proxy to the active Rich Console.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "closure_shift"

# Between INFO and WARNING: a file was written
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
  }
)

logger = logging.getLogger(LOGGER_NAME)


def make_console(**kwargs: Any) -> Console:
  """
  Builds a Rich console that understands the markup used in log messages.

  Args:
      **kwargs: Console options. Output goes to standard error unless a
          ``file`` is given.
  """
  if "file" not in kwargs:
    kwargs.setdefault("stderr", True)
  return Console(theme=_THEME, **kwargs)


class _ConsoleProxy:
  """
  Forwards attribute access to the active `rich.console.Console`.

  The proxy owns the single `RichHandler` of the package logger and rebinds
  it whenever the backend changes.
  """

  def __init__(self) -> None:
    self._backend: Console = make_console()
    self._handler: Optional[RichHandler] = None
    self._bind_logger()

  @property
  def backend(self) -> Console:
    return self._backend

  def swap(self, new_console: Console) -> None:
    self._backend = new_console
    self._bind_logger()

  def _bind_logger(self) -> None:
    if self._handler is not None:
      logger.removeHandler(self._handler)
    self._handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(self._handler)
    logger.setLevel(logging.INFO)
    # embedding applications keep their own root configuration
    logger.propagate = False

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console printing and logging to ``new_console``.

  Args:
      new_console (Console): Replacement console, e.g. a recording one.
  """
  console.swap(new_console)


def reset_console() -> None:
  console.swap(make_console())


def get_console() -> Console:
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs a progress message.

  Args:
      msg (str): Message text; Rich markup such as ``[path]`` is rendered.
  """
  logger.info(msg)


def log_success(msg: str) -> None:
  logger.log(SUCCESS_LEVEL_NUM, msg)


def log_warning(msg: str) -> None:
  """
  Logs a recoverable problem.

  Migration warnings are advisory; they never replace the converted output.
  """
  logger.warning(msg)


def log_error(msg: str) -> None:
  logger.error(msg)
