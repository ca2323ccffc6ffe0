"""
Console messages for sigsubtract commands.

notify() and debug() go to stderr and respect set_quiet(); error() is
always printed. Batch workers call these
from several threads, so each message is emitted as one locked write.
"""
import sys
import threading

_quiet = False
_debug = False
_lock = threading.Lock()

# clear the current terminal line before writing
_CLEAR_LINE = "\r\033[K"


def set_quiet(val, print_debug=False):
    global _quiet, _debug
    _quiet = bool(val)
    _debug = bool(print_debug)


def _write(fp, text, flush=False):
    with _lock:
        fp.write(text)
        if flush:
            fp.flush()


def notify(s, *args, **kwargs):
    "A simple logging function => stderr."
    if _quiet:
        return

    end = kwargs.get("end", "\n")
    _write(sys.stderr, _CLEAR_LINE + s.format(*args, **kwargs) + end,
           flush=kwargs.get("flush", False))


def debug(s, *args, **kwargs):
    "A debug logging function => stderr."
    if _quiet or not _debug:
        return

    end = kwargs.get("end", "\n")
    _write(sys.stderr, _CLEAR_LINE + s.format(*args, **kwargs) + end,
           flush=kwargs.get("flush", False))


def error(s, *args, **kwargs):
    "A simple error logging function => stderr."
    _write(sys.stderr, _CLEAR_LINE + s.format(*args, **kwargs) + "\n",
           flush=kwargs.get("flush", False))
