import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape

_logger = logging.getLogger(__name__)


def _create_plain_handler():
    h = logging.StreamHandler(sys.stderr)
    h.terminator = ""
    h.setFormatter(logging.Formatter("%(message)s"))
    return h


def _create_rich_handler():
    console = Console(stderr=True)
    h = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        show_level=False,
        markup=True,
    )
    h.terminator = ""
    h.setFormatter(logging.Formatter("%(message)s"))
    return h


_handler = _create_rich_handler()
_logger.setLevel(logging.INFO)
_logger.propagate = False
_logger.addHandler(_handler)
_max_col_width = 40


def _log(level, msg, new_line=True):
    if new_line and not msg.endswith("\n"):
        msg += "\n"
    _logger.log(level, msg)


def debug(msg, new_line=True):
    _log(logging.DEBUG, msg, new_line)


def info(msg, new_line=True):
    _log(logging.INFO, msg, new_line)


def error(msg, new_line=True):
    _log(logging.ERROR, msg, new_line)


def set_default_level(level):
    _logger.setLevel(level)


def use_colors(enabled: bool):
    """Swap between the rich handler and a plain one writing bare messages."""
    global _handler
    _logger.removeHandler(_handler)
    _handler = _create_rich_handler() if enabled else _create_plain_handler()
    _logger.addHandler(_handler)


def adjust_col_width(strings):
    if not strings:
        return
    global _max_col_width
    max_width = max(len(s) for s in strings)
    _max_col_width = max_width + 4


def format_prefix(name):
    return name.ljust(_max_col_width)


def escape(text) -> str:
    """Escapes rich markup in text that did not come from us (paths, Lua errors)."""
    text = str(text)
    return rich_escape(text) if isinstance(_handler, RichHandler) else text
