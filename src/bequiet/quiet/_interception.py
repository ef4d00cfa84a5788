"""Temporary replacement of the output primitives."""

__all__ = ["OutputInterception", "quiet_load", "quiet_write_region"]

import io
import os
import sys
from typing import Any, Callable, Optional, TextIO, Union

from bequiet.host import (
    Buffer,
    check_visit,
    inhibit_message_enabled,
    load,
    message,
    output_unit_text,
    set_inhibit_message,
    write_region,
)


def quiet_write_region(
    text: str, filename: Union[str, os.PathLike], append: bool = False, visit: Union[bool, str] = True
) -> None:
    """
    Writes text to a file like :code:`write_region()` but never displays a message. Invalid values of :code:`visit`
    are rejected the same way as by :code:`write_region()`.
    """

    check_visit(visit)
    write_region.original(text, filename, append=append, visit="nomessage")


def quiet_load(  # pylint: disable=unused-argument
    filename: Union[str, os.PathLike], noerror: bool = False, nomessage: bool = False, module_name: Optional[str] = None
) -> bool:
    """Loads a file like :code:`load()` but never displays the loading messages."""

    return load.original(filename, noerror=noerror, nomessage=True, module_name=module_name)


class SinkWriter(io.TextIOBase):
    """
    Text stream that appends everything written to it to a buffer. Writing has no effect once the buffer has been
    killed.

    Args:
        sink: Buffer to which the output is appended.
    """

    def __init__(self, sink: Buffer):
        super().__init__()
        self._sink = sink

    def writable(self) -> bool:
        return True

    def write(self, s: Union[str, int]) -> int:  # type: ignore[override]
        text = output_unit_text(s)
        if self._sink.is_live():
            self._sink.insert(text)
        return len(text)


class DiscardWriter(io.TextIOBase):
    """Text stream that discards everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, s: Union[str, int]) -> int:  # type: ignore[override]
        return len(output_unit_text(s))


class OutputInterception:
    """
    A context manager that replaces the output primitives while the contained code is executed:

    - :code:`message()` is replaced by the given implementation.
    - :code:`sys.stdout` is replaced by the given stream.
    - :code:`write_region()` and :code:`load()` are replaced by variants that never display messages.
    - Displaying of status messages is inhibited.

    On exit, exactly the values that were replaced on entry are put back, so that interceptions can be nested.

    Args:
        message_impl: Replacement for :code:`message()`.
        stdout: Replacement for :code:`sys.stdout`.
    """

    def __init__(self, message_impl: Callable[..., Optional[str]], stdout: TextIO):
        self._message_impl = message_impl
        self._stdout = stdout
        self._previous_message: Optional[Callable[..., Any]] = None
        self._previous_write_region: Optional[Callable[..., Any]] = None
        self._previous_load: Optional[Callable[..., Any]] = None
        self._previous_stdout: Optional[TextIO] = None
        self._previous_inhibit_message = False
        self._active = False

    def __enter__(self):
        if self._active:
            raise RuntimeError("The output interception is already active.")
        self._previous_inhibit_message = inhibit_message_enabled()
        self._previous_message = message.install(self._message_impl)
        self._previous_write_region = write_region.install(quiet_write_region)
        self._previous_load = load.install(quiet_load)
        self._previous_stdout = sys.stdout
        sys.stdout = self._stdout
        set_inhibit_message(True)
        self._active = True
        return self

    def __exit__(self, *_):
        # restore in reverse order of installation
        set_inhibit_message(self._previous_inhibit_message)
        sys.stdout = self._previous_stdout  # type: ignore[assignment]
        load.restore(self._previous_load)  # type: ignore[arg-type]
        write_region.restore(self._previous_write_region)  # type: ignore[arg-type]
        message.restore(self._previous_message)  # type: ignore[arg-type]
        self._active = False
