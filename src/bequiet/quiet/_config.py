""" Global switch that disables output suppression. """

__all__ = ["ignore_enabled", "ignoring", "set_ignore"]

import contextlib
import os
from typing import Iterator

_TRUE_VALUES = ("1", "true", "yes", "on")


def _ignore_from_environment() -> bool:
    return os.environ.get("BEQUIET_IGNORE", "").strip().lower() in _TRUE_VALUES


_ignore = _ignore_from_environment()


def ignore_enabled() -> bool:
    """
    Returns: `True` if output suppression is disabled and `False` otherwise. The initial value is read from the
    environment variable :code:`BEQUIET_IGNORE`.
    """

    return _ignore


def set_ignore(value: bool):
    """
    Enables or disables output suppression globally. The setting is read when a quiet scope is entered, so changing it
    inside an active scope does not affect that scope.

    Args:
        value: If :code:`True`, quiet scopes and quiet calls pass all output through.
    """

    global _ignore  # pylint: disable=global-statement
    _ignore = bool(value)


@contextlib.contextmanager
def ignoring(value: bool = True) -> Iterator[None]:
    """Context manager that sets the global switch and restores the previous setting afterwards."""

    previous = _ignore
    set_ignore(value)
    try:
        yield
    finally:
        set_ignore(previous)
