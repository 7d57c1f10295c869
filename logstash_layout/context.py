"""Diagnostic context — MDC (key/value map) and NDC (message stack).

Both are held in ``contextvars`` so every thread and every asyncio task sees
its own copy. Values are replaced rather than mutated, so a map or stack
captured for one log record never changes afterwards.
"""

import contextlib
import contextvars
from typing import Any, Iterator

_MDC: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("mdc", default={})
_NDC: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar("ndc", default=())


def put(key: str, value: Any) -> None:
    current = _MDC.get()
    _MDC.set({**current, key: value})


def get(key: str, default: Any = None) -> Any:
    return _MDC.get().get(key, default)


def remove(key: str) -> None:
    current = _MDC.get()
    if key in current:
        _MDC.set({k: v for k, v in current.items() if k != key})


def get_context_map() -> dict[str, Any]:
    return dict(_MDC.get())


def clear_map() -> None:
    _MDC.set({})


def push(message: str) -> None:
    _NDC.set(_NDC.get() + (message,))


def pop() -> str:
    """Remove and return the innermost NDC entry; empty string if the stack is empty."""
    stack = _NDC.get()
    if not stack:
        return ""
    _NDC.set(stack[:-1])
    return stack[-1]


def peek() -> str:
    stack = _NDC.get()
    return stack[-1] if stack else ""


def get_context_stack() -> list[str]:
    return list(_NDC.get())


def clear_stack() -> None:
    _NDC.set(())


def clear_all() -> None:
    clear_map()
    clear_stack()


@contextlib.contextmanager
def mdc(**values: Any) -> Iterator[None]:
    """Add MDC entries for the duration of a ``with`` block."""
    token = _MDC.set({**_MDC.get(), **values})
    try:
        yield
    finally:
        _MDC.reset(token)


@contextlib.contextmanager
def ndc(message: str) -> Iterator[None]:
    """Push an NDC entry for the duration of a ``with`` block."""
    token = _NDC.set(_NDC.get() + (message,))
    try:
        yield
    finally:
        _NDC.reset(token)
