"""Named text buffers that serve as in-memory storage for captured output."""

__all__ = [
    "Buffer",
    "buffer_list",
    "buffer_live_p",
    "generate_new_buffer_name",
    "get_buffer",
    "get_buffer_create",
    "kill_buffer",
]

import io
import logging
from typing import Dict, List, Optional, Union

_logger = logging.getLogger(__name__)

_buffers: Dict[str, "Buffer"] = {}


class Buffer:
    """
    A named, mutable text buffer. Buffers whose name starts with a space are hidden, i.e., they are not included in
    :code:`buffer_list()` by default.

    Args:
        name: Name of the buffer.
    """

    def __init__(self, name: str):
        self._name = name
        self._text: Optional[io.StringIO] = io.StringIO()

    @property
    def name(self) -> str:
        return self._name

    def is_live(self) -> bool:
        """
        Returns: :code:`True` if the buffer has not been killed and :code:`False` otherwise.
        """

        return self._text is not None

    def is_hidden(self) -> bool:
        return self._name.startswith(" ")

    def insert(self, text: str):
        """
        Appends text to the end of the buffer.

        Args:
            text: Text to append.

        Raises:
            ValueError: If the buffer has been killed.
        """

        if self._text is None:
            raise ValueError(f"Cannot insert into killed buffer {self._name!r}.")
        self._text.write(text)

    def contents(self) -> str:
        """
        Returns: The text of the buffer.

        Raises:
            ValueError: If the buffer has been killed.
        """

        if self._text is None:
            raise ValueError(f"Cannot read from killed buffer {self._name!r}.")
        return self._text.getvalue()

    def kill(self) -> bool:
        """
        Kills the buffer and releases its text.

        Returns: :code:`True` if the buffer was live and :code:`False` if it had already been killed.
        """

        if self._text is None:
            return False
        self._text.close()
        self._text = None
        if _buffers.get(self._name) is self:
            del _buffers[self._name]
        _logger.debug("Killed buffer %r.", self._name)
        return True

    def __repr__(self) -> str:
        state = "live" if self.is_live() else "killed"
        return f"<Buffer {self._name!r} ({state})>"


def generate_new_buffer_name(name: str) -> str:
    """
    Returns: :code:`name` if no live buffer has this name, otherwise the name extended by the smallest suffix
    :code:`<n>` with :code:`n >= 2` that is not in use.
    """

    if name not in _buffers:
        return name
    suffix = 2
    while f"{name}<{suffix}>" in _buffers:
        suffix += 1
    return f"{name}<{suffix}>"


def get_buffer(name: str) -> Optional[Buffer]:
    return _buffers.get(name)


def get_buffer_create(name: str) -> Buffer:
    """
    Returns the live buffer with the given name. If no such buffer exists, a new one is created.

    Args:
        name: Name of the buffer.

    Returns: The buffer.
    """

    buffer = _buffers.get(name)
    if buffer is None:
        buffer = Buffer(name)
        _buffers[name] = buffer
        _logger.debug("Created buffer %r.", name)
    return buffer


def kill_buffer(buffer_or_name: Union[Buffer, str, None]) -> bool:
    """
    Kills a buffer.

    Args:
        buffer_or_name: The buffer or its name.

    Returns: :code:`True` if a live buffer was killed and :code:`False` otherwise.
    """

    buffer = _buffers.get(buffer_or_name) if isinstance(buffer_or_name, str) else buffer_or_name
    if buffer is None:
        return False
    return buffer.kill()


def buffer_live_p(buffer_or_name: Union[Buffer, str, None]) -> bool:
    if buffer_or_name is None:
        return False
    if isinstance(buffer_or_name, str):
        return buffer_or_name in _buffers
    return buffer_or_name.is_live()


def buffer_list(include_hidden: bool = False) -> List[Buffer]:
    """
    Args:
        include_hidden: Whether hidden buffers are to be included.

    Returns: The live buffers in order of creation.
    """

    return [buffer for buffer in _buffers.values() if include_hidden or not buffer.is_hidden()]
