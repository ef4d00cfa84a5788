"""Context manager that silences a file descriptor of the process while executing the wrapped code."""

__all__ = ["silence_process"]

import contextlib
import logging
import os
import sys
from typing import Iterator

from ._config import ignore_enabled


@contextlib.contextmanager
def silence_process(fd: int = 1) -> Iterator[None]:
    """
    Context manager that redirects a file descriptor to :code:`os.devnull` while executing the wrapped code. In
    contrast to :code:`be_quiet()`, this also silences output that bypasses the Python layer, e.g., output of C
    extensions or of child processes inheriting the descriptor. Has no effect if output suppression is disabled via
    :code:`set_ignore(True)`.

    Args:
        fd: File descriptor to silence. Defaults to standard output.
    """

    if ignore_enabled():
        yield
        return

    _flush_python_streams()
    saved_fd = os.dup(fd)
    null_fd = os.open(os.devnull, os.O_RDWR)
    os.dup2(null_fd, fd)
    os.close(null_fd)
    logging.getLogger(__name__).debug("Redirected file descriptor %d to %s.", fd, os.devnull)

    try:
        yield
    finally:
        _flush_python_streams()
        os.dup2(saved_fd, fd)
        os.close(saved_fd)


def _flush_python_streams():
    for stream in (sys.stdout, sys.stderr):
        flush = getattr(stream, "flush", None)
        if flush is not None:
            flush()
