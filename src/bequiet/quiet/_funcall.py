"""Wrapper that calls functions with suppressed output, and its registration as advice."""

__all__ = ["be_quiet_advice_add", "be_quiet_advice_remove", "be_quiet_advised_p", "be_quiet_funcall"]

from typing import Any, Callable, Optional, TypeVar

from bequiet.host import AdvisableFunction, advice_add, advice_member_p, advice_remove, format_message

from ._config import ignore_enabled
from ._interception import DiscardWriter, OutputInterception

T = TypeVar("T")


def _discard_message(fmt: Optional[str] = None, *args: Any) -> Optional[str]:
    return format_message(fmt, *args)


def be_quiet_funcall(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Calls a function with suppressed output. Status messages and everything written to :code:`sys.stdout` are
    discarded, files are written and loaded without displaying messages. If output suppression is disabled via
    :code:`set_ignore(True)`, the function is called without any suppression.

    The signature allows to register the function as :code:`"around"` advice.

    Args:
        fn: Function to call.
        *args: Positional arguments for the function.
        **kwargs: Keyword arguments for the function.

    Returns: The return value of the function.
    """

    if ignore_enabled():
        return fn(*args, **kwargs)
    with OutputInterception(_discard_message, DiscardWriter()):
        return fn(*args, **kwargs)


def be_quiet_advice_add(fn: AdvisableFunction):
    """
    Suppresses the output of all future calls of an advisable function. Adding the advice more than once has no
    further effect.
    """

    advice_add(fn, "around", be_quiet_funcall)


def be_quiet_advice_remove(fn: AdvisableFunction):
    """Undoes :code:`be_quiet_advice_add()`. Has no effect if the advice is not registered on the function."""

    advice_remove(fn, be_quiet_funcall)


def be_quiet_advised_p(fn: AdvisableFunction) -> bool:
    return advice_member_p(be_quiet_funcall, fn)
