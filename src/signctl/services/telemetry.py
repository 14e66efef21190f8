"""Verbose-mode timing for service calls.

``--verbose`` switches telemetry on for the process.  Every ``@traced``
service method then runs inside a root :class:`Span`; :func:`stage` opens
child spans around the crypto work inside it (HMAC, entropy reads,
rejection sampling) and :func:`note` attaches counters such as byte
counts or redraws.  The finished tree is returned in
``ServiceResult.meta["telemetry"]``.

When telemetry is off each helper costs one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from signctl.services.result import ServiceResult

log = structlog.get_logger("signctl.telemetry")

_enabled: ContextVar[bool] = ContextVar("signctl_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("signctl_span", default=None)


@dataclass
class Span:
    """One timed step with its counters and nested stages."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    elapsed: float | None = None
    notes: dict[str, Any] = field(default_factory=dict)
    stages: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        return 0.0 if self.elapsed is None else self.elapsed * 1000

    def close(self) -> None:
        self.elapsed = time.perf_counter() - self.started

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.notes:
            data["annotations"] = dict(self.notes)
        if self.stages:
            data["children"] = [s.to_dict() for s in self.stages]
        return data


def _open_span() -> Span | None:
    return _active.get() if _enabled.get() else None


@contextmanager
def _entered(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


@contextmanager
def stage(name: str) -> Iterator[Span | None]:
    """Time a step of the running service call as a child span.

    Yields None when telemetry is off or no traced call is running.
    """
    parent = _open_span()
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.stages.append(child)
    with _entered(child):
        yield child


def note(**counters: Any) -> None:
    """Record counters on the innermost open span."""
    span = _open_span()
    if span is not None:
        span.notes.update(counters)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Run a service method in a root span and attach the tree to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        ok = False
        try:
            with _entered(span):
                result = func(*args, **kwargs)
            ok = result.ok if isinstance(result, ServiceResult) else True
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 3),
                ok=ok,
                stages=[s.name for s in span.stages],
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn on span collection (called by AppContext for ``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    """Turn off span collection and drop any dangling span."""
    _enabled.set(False)
    _active.set(None)
