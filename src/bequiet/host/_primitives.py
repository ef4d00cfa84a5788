"""
Output-producing primitives of the process. Each primitive is a single-slot indirection whose implementation can be
replaced temporarily and restored afterwards.
"""

__all__ = [
    "Primitive",
    "check_visit",
    "format_message",
    "inhibit_message_enabled",
    "load",
    "message",
    "output_unit_text",
    "princ",
    "set_inhibit_message",
    "write_char",
    "write_region",
]

import functools
import importlib.machinery
import importlib.util
import os
from pathlib import Path
import sys
from typing import Any, Callable, Optional, Union

_inhibit_message = False


class Primitive:
    """
    A process-wide slot holding the current implementation of an output-producing operation. Calling the primitive
    dispatches to the implementation that is currently installed.

    Args:
        original: Implementation that is installed initially. It is kept as :code:`Primitive.original` so that
            replacements can delegate to the real operation.
    """

    def __init__(self, original: Callable[..., Any]):
        functools.update_wrapper(self, original)
        self._original = original
        self._impl = original

    @property
    def original(self) -> Callable[..., Any]:
        return self._original

    @property
    def current(self) -> Callable[..., Any]:
        return self._impl

    def install(self, impl: Callable[..., Any]) -> Callable[..., Any]:
        """
        Replaces the current implementation.

        Args:
            impl: New implementation.

        Returns: The implementation that was installed before. It has to be passed to :code:`restore()` afterwards.
        """

        previous = self._impl
        self._impl = impl
        return previous

    def restore(self, previous: Callable[..., Any]):
        self._impl = previous

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._impl(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<Primitive {self._original.__name__}>"


def inhibit_message_enabled() -> bool:
    return _inhibit_message


def set_inhibit_message(value: bool):
    """
    Sets whether status messages are displayed. If set to :code:`True`, :code:`message()` still formats and returns
    its text but does not write it to :code:`sys.stderr`.
    """

    global _inhibit_message  # pylint: disable=global-statement
    _inhibit_message = bool(value)


def format_message(fmt: Optional[str] = None, *args: Any) -> Optional[str]:
    """
    Formats a status message the way :code:`message()` does, without displaying it.

    Returns: The formatted text or :code:`None` if :code:`fmt` is :code:`None`.
    """

    if fmt is None:
        return None
    return fmt % args if args else fmt


@Primitive
def message(fmt: Optional[str] = None, *args: Any) -> Optional[str]:
    """
    Displays a status message on :code:`sys.stderr`.

    Args:
        fmt: Format string. The arguments are interpolated with :code:`%`-formatting if any are given. If
            :code:`None`, nothing is displayed.
        *args: Format arguments.

    Returns: The formatted text without trailing newline or :code:`None` if :code:`fmt` is :code:`None`.
    """

    text = format_message(fmt, *args)
    if text is None:
        return None
    if not _inhibit_message:
        sys.stderr.write(text + "\n")
        sys.stderr.flush()
    return text


def output_unit_text(unit: Union[str, int]) -> str:
    """
    Converts a unit of generic output to text.

    Args:
        unit: A string or a single character given as an integer code point.

    Returns: The text of the unit.

    Raises:
        TypeError: If the unit is neither a string nor an integer.
    """

    if isinstance(unit, str):
        return unit
    if isinstance(unit, int) and not isinstance(unit, bool):
        return chr(unit)
    raise TypeError(f"Output units must be strings or character code points, got {type(unit).__name__}.")


def princ(obj: Any) -> Any:
    """
    Writes the string representation of an object to the current standard output.

    Returns: The object.
    """

    sys.stdout.write(obj if isinstance(obj, str) else str(obj))
    return obj


def write_char(char: Union[str, int]) -> Union[str, int]:
    """Writes a single character to the current standard output."""

    text = output_unit_text(char)
    if len(text) != 1:
        raise ValueError(f"Expected a single character, got {text!r}.")
    sys.stdout.write(text)
    return char


def check_visit(visit: Union[bool, str]):
    """
    Raises:
        ValueError: If :code:`visit` is not a valid notify mode for :code:`write_region()`.
    """

    if visit not in (True, False, "nomessage"):
        raise ValueError(f"Invalid value for visit: {visit!r}.")


@Primitive
def write_region(
    text: str, filename: Union[str, os.PathLike], append: bool = False, visit: Union[bool, str] = True
) -> None:
    """
    Writes text to a file.

    Args:
        text: Text to write.
        filename: Path of the file.
        append: Whether the text is to be appended to an existing file.
        visit: Notify mode. If :code:`True`, the message :code:`"Wrote <file>"` is displayed afterwards. If
            :code:`False` or :code:`"nomessage"`, the file is written silently.

    Raises:
        ValueError: If :code:`visit` is not one of the supported values.
    """

    check_visit(visit)
    path =os.path.abspath(os.fspath(filename))
    with open(path, "a" if append else "w", encoding="utf-8") as file:
        file.write(text)
    if visit is True:
        message("Wrote %s", path)


@Primitive
def load(
    filename: Union[str, os.PathLike], noerror: bool = False, nomessage: bool = False, module_name: Optional[str] = None
) -> bool:
    """
    Executes a Python source file as a module and registers it in :code:`sys.modules`.

    Args:
        filename: Path of the source file.
        noerror: Whether to return :code:`False` instead of raising an error if the file does not exist.
        nomessage: Whether to suppress the :code:`"Loading <file>..."` messages.
        module_name: Name under which the module is registered. Defaults to the file name without suffix.

    Returns: :code:`True` if the file was loaded and :code:`False` if it does not exist and :code:`noerror` is set. If
    executing the file fails, a module previously registered under the same name is put back.

    Raises:
        FileNotFoundError: If the file does not exist and :code:`noerror` is not set.
    """

    path = os.path.abspath(os.fspath(filename))
    if not os.path.isfile(path):
        if noerror:
            return False
        raise FileNotFoundError(f"Cannot open load file: {path}")

    if module_name is None:
        module_name = Path(path).stem

    if not nomessage:
        message("Loading %s...", path)

    loader = importlib.machinery.SourceFileLoader(module_name, path)
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    module = importlib.util.module_from_spec(spec)  # type: ignore[arg-type]
    previous_module = sys.modules.get(module_name)
    sys.modules[module_name] = module
    try:
        loader.exec_module(module)
    except BaseException:
        if previous_module is not None:
            sys.modules[module_name] = previous_module
        else:
            sys.modules.pop(module_name, None)
        raise

    if not nomessage:
        message("Loading %s...done", path)
    return True
