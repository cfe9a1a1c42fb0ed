"""Logging setup and DEBUG call tracing for the solver internals."""

from __future__ import annotations

import functools
import inspect
import logging
import reprlib
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

Func = TypeVar("Func", bound=Callable[..., Any])

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

_TRACED = "_glyphsolve_traced"

_short = reprlib.Repr()
_short.maxother = 120
_short.maxlist = 8
_short.maxtuple = 8
_short.maxdict = 8


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for command-line use."""

    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)


def _summarize(value: Any, *, max_items: int = 6, limit: int = 300) -> str:
    """Short rendering of call arguments; arrays are reduced to shape and range."""

    if isinstance(value, np.ndarray):
        if value.size == 0:
            return f"ndarray(shape={value.shape})"
        if value.size > max_items:
            return f"ndarray(shape={value.shape}, min={float(value.min()):.6g}, max={float(value.max()):.6g})"
        return f"ndarray(shape={value.shape}, values={_short.repr(value.tolist())})"
    if isinstance(value, (list, tuple)) and len(value) > max_items:
        shown = ", ".join(_summarize(item) for item in value[:max_items])
        return f"[{shown}, ... ({len(value)} items)]"
    text = _short.repr(value)
    return text if len(text) <= limit else text[:limit] + "..."


def debug_log_call(logger: logging.Logger, *, name: Optional[str] = None) -> Callable[[Func], Func]:
    """Decorator logging entry, exit and exceptions of a call at DEBUG level."""

    def decorate(func: Func) -> Func:
        if getattr(func, _TRACED, False):
            return func
        label = name or func.__qualname__

        @functools.wraps(func)
        def traced(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            shown = [_summarize(arg) for arg in args]
            shown.extend(f"{key}={_summarize(val)}" for key, val in kwargs.items())
            logger.debug("Entering %s(%s)", label, ", ".join(shown))
            try:
                outcome = func(*args, **kwargs)
            except Exception:
                logger.debug("Exception in %s", label, exc_info=True)
                raise
            logger.debug("Exiting %s -> %s", label, _summarize(outcome))
            return outcome

        setattr(traced, _TRACED, True)
        return cast(Func, traced)

    return decorate


def _trace_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for member, value in list(vars(cls).items()):
        label = f"{cls.__name__}.{member}"
        if member.startswith("__") or member in skip or label in skip:
            continue
        if inspect.isfunction(value) and value.__module__ == cls.__module__:
            setattr(cls, member, debug_log_call(logger, name=label)(value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace every function and class method defined in a module namespace.

    Call as ``apply_debug_logging(globals(), logger=logger)`` at the end of a
    module. Names imported from other modules are left alone.
    """

    module = namespace.get("__name__")
    log = logger or logging.getLogger(str(module))
    excluded = set(skip or ())
    for key, value in list(namespace.items()):
        if key in excluded or getattr(value, "__module__", None) != module:
            continue
        if inspect.isfunction(value):
            namespace[key] = debug_log_call(log, name=key)(value)
        elif inspect.isclass(value):
            _trace_methods(value, log, excluded)


__all__ = [
    "LOG_FORMAT",
    "apply_debug_logging",
    "configure_logging",
    "debug_log_call",
]
