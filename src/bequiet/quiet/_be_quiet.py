"""A context manager that captures the output of the contained code in a hidden buffer."""

__all__ = ["BeQuiet", "SINK_NAME", "be_quiet", "current_output", "current_sink", "run_quietly"]

import logging
from typing import Any, Callable, List, Optional, TypeVar

from bequiet.host import Buffer, format_message, generate_new_buffer_name, get_buffer_create, kill_buffer

from ._config import ignore_enabled
from ._interception import OutputInterception, SinkWriter

T = TypeVar("T")

SINK_NAME = " *bequiet*"

_active_scopes: List["BeQuiet"] = []


class BeQuiet:
    """
    A context manager that captures the output of the contained code. On entry, a new hidden buffer (the sink) is
    created and the output primitives are replaced so that status messages and everything written to
    :code:`sys.stdout` is appended to the sink, while files are written and loaded without displaying messages. On exit,
    the primitives are restored and the sink is killed, regardless of whether the contained code raised an error.

    If output suppression is disabled via :code:`set_ignore(True)` when the context is entered, no primitive is
    replaced and the sink stays empty.

    Example:

        >>> with be_quiet() as scope:
        ...     print("hello")
        ...     captured = scope.current_output()
        >>> captured
        'hello\\n'
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._sink: Optional[Buffer] = None
        self._interception: Optional[OutputInterception] = None

    @property
    def sink(self) -> Optional[Buffer]:
        """The sink of the active scope. :code:`None` before the scope has been entered."""

        return self._sink

    def current_output(self) -> str:
        """
        Returns: The output captured so far or an empty string if the sink does not exist anymore.
        """

        if self._sink is None or not self._sink.is_live():
            return ""
        return self._sink.contents()

    def _message(self, fmt: Optional[str] = None, *args: Any) -> Optional[str]:
        text = format_message(fmt, *args)
        if text is not None and self._sink is not None and self._sink.is_live():
            self._sink.insert(text + "\n")
        return text

    def __enter__(self):
        if self._sink is not None:
            raise RuntimeError("A quiet scope cannot be entered more than once.")
        self._sink = get_buffer_create(generate_new_buffer_name(SINK_NAME))
        _active_scopes.append(self)
        if ignore_enabled():
            self._logger.debug("Output suppression is disabled, passing output of scope %r through.", self._sink.name)
            return self

        self._interception = OutputInterception(self._message, SinkWriter(self._sink))
        try:
            self._interception.__enter__()
        except BaseException:
            _active_scopes.remove(self)
            kill_buffer(self._sink)
            raise
        return self

    def __exit__(self, *exc_info):
        try:
            if self._interception is not None:
                self._interception.__exit__(*exc_info)
                self._interception = None
        finally:
            _active_scopes.remove(self)
            kill_buffer(self._sink)


def be_quiet() -> BeQuiet:
    """
    Returns: A new :code:`BeQuiet` context manager.
    """

    return BeQuiet()


def run_quietly(body: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Calls a function inside a quiet scope.

    Args:
        body: Function to call.
        *args: Positional arguments for the function.
        **kwargs: Keyword arguments for the function.

    Returns: The return value of the function.
    """

    with be_quiet():
        return body(*args, **kwargs)


def current_sink() -> Optional[Buffer]:
    """
    Returns: The sink of the innermost active quiet scope or :code:`None` if no scope is active.
    """

    if len(_active_scopes) == 0:
        return None
    return _active_scopes[-1].sink


def current_output() -> str:
    """
    Returns: The output captured so far by the innermost active quiet scope. An empty string if no scope is active or
    the sink of the scope has been killed.
    """

    if len(_active_scopes) == 0:
        return ""
    return _active_scopes[-1].current_output()
