"""Revocable wrappers ("advice") that are run around every call of an advisable function."""

__all__ = [
    "ADVICE_REGISTRY",
    "AdviceRegistry",
    "AdvisableFunction",
    "advice_add",
    "advice_member_p",
    "advice_remove",
    "advisable",
]

import functools
import logging
from typing import Any, Callable, Dict, List, Tuple

ADVICE_KINDS = ("around", "before", "after", "override")


class AdviceRegistry:
    """
    Mapping from advisable functions to their advice layers. Functions and advice are identified by object identity.
    For each function, the layers are stored from innermost to outermost, i.e., the most recently added advice is run
    first.
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._layers: Dict["AdvisableFunction", List[Tuple[str, Callable[..., Any]]]] = {}

    def add(self, fn: "AdvisableFunction", how: str, advice: Callable[..., Any]):
        """
        Registers an advice on a function. Adding an advice that is already registered on the function has no effect.

        Args:
            fn: The advised function.
            how: Kind of the advice: :code:`"around"`, :code:`"before"`, :code:`"after"`, or :code:`"override"`.
            advice: The advice.

        Raises:
            ValueError: If :code:`how` is not a supported kind of advice.
        """

        if how not in ADVICE_KINDS:
            raise ValueError(f"Invalid kind of advice: {how}.")
        if self.contains(fn, advice):
            return
        self._layers.setdefault(fn, []).append((how, advice))
        self._logger.debug("Added %s advice %r to %r.", how, advice, fn)

    def remove(self, fn: "AdvisableFunction", advice: Callable[..., Any]):
        """Removes an advice from a function. Removing an advice that is not registered has no effect."""

        layers = self._layers.get(fn)
        if layers is None:
            return
        remaining_layers = [(how, layer) for how, layer in layers if layer is not advice]
        if len(remaining_layers) == len(layers):
            return
        if len(remaining_layers) > 0:
            self._layers[fn] = remaining_layers
        else:
            del self._layers[fn]
        self._logger.debug("Removed advice %r from %r.", advice, fn)

    def contains(self, fn: "AdvisableFunction", advice: Callable[..., Any]) -> bool:
        return any(layer is advice for _, layer in self._layers.get(fn, []))

    def layers(self, fn: "AdvisableFunction") -> List[Tuple[str, Callable[..., Any]]]:
        """
        Returns: The advice layers registered on the function as :code:`(how, advice)` tuples, from innermost to
        outermost.
        """

        return list(self._layers.get(fn, []))

    def call(self, fn: "AdvisableFunction", *args: Any, **kwargs: Any) -> Any:
        """Calls a function with all its advice layers applied."""

        call = fn.__wrapped__
        for how, advice in self.layers(fn):
            call = _apply_layer(how, advice, call)
        return call(*args, **kwargs)


def _apply_layer(how: str, advice: Callable[..., Any], inner: Callable[..., Any]) -> Callable[..., Any]:
    if how == "around":
        return functools.partial(advice, inner)
    if how == "override":
        return advice

    def advised(*args: Any, **kwargs: Any) -> Any:
        if how == "before":
            advice(*args, **kwargs)
        result = inner(*args, **kwargs)
        if how == "after":
            advice(*args, **kwargs)
        return result

    return advised


ADVICE_REGISTRY = AdviceRegistry()


class AdvisableFunction:
    """
    A function whose calls are resolved through an advice registry.

    Args:
        fn: The wrapped function.
        registry: Registry that holds the advice of the function.
    """

    def __init__(self, fn: Callable[..., Any], registry: AdviceRegistry = ADVICE_REGISTRY):
        functools.update_wrapper(self, fn)
        self._registry = registry

    @property
    def registry(self) -> AdviceRegistry:
        return self._registry

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._registry.call(self, *args, **kwargs)

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        if instance is None:
            return self
        return functools.partial(self, instance)

    def __repr__(self) -> str:
        return f"<AdvisableFunction {self.__wrapped__.__qualname__}>"


def advisable(fn: Callable[..., Any]) -> AdvisableFunction:
    """Decorator that makes a function advisable."""

    return AdvisableFunction(fn)


def _check_advisable(fn: Any):
    if not isinstance(fn, AdvisableFunction):
        raise TypeError(f"{fn!r} is not advisable.")


def advice_add(fn: AdvisableFunction, how: str, advice: Callable[..., Any]):
    """
    Registers an advice on an advisable function.

    Args:
        fn: The advised function.
        how: Kind of the advice. An :code:`"around"` advice is called with the original function followed by the call
            arguments. :code:`"before"` and :code:`"after"` advice is called with the call arguments before or after
            the original function. An :code:`"override"` advice replaces the original function.
        advice: The advice.

    Raises:
        TypeError: If :code:`fn` is not advisable.
        ValueError: If :code:`how` is not a supported kind of advice.
    """

    _check_advisable(fn)
    fn.registry.add(fn, how, advice)


def advice_remove(fn: AdvisableFunction, advice: Callable[..., Any]):
    _check_advisable(fn)
    fn.registry.remove(fn, advice)


def advice_member_p(advice: Callable[..., Any], fn: AdvisableFunction) -> bool:
    """
    Returns: :code:`True` if the advice is registered on the function and :code:`False` otherwise.
    """

    _check_advisable(fn)
    return fn.registry.contains(fn, advice)
