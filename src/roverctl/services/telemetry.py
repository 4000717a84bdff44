"""Timing tree for ``--verbose`` runs.

Each traced service call becomes the root span; the runner hangs one span
per rover beneath it (and one per scenario for the demo)::

    RunnerService.run
        rover.0   commands=9 ok=True
        rover.1   commands=10 ok=True

The tree lands in ``ServiceResult.meta["telemetry"]``.  With telemetry off
every helper here costs one ContextVar lookup.  Spans live in the calling
thread's context, so rovers guided on a thread pool are not recorded.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from roverctl.services.result import ServiceResult

log = structlog.get_logger(__name__)

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """One node of the timing tree: a service call, a scenario or a rover."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Milliseconds between creation and :meth:`end`; 0.0 while open."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def record(self, **annotations: Any) -> None:
        """Attach facts about the span, e.g. a rover's command count."""
        self.annotations.update(annotations)

    def descendants(self) -> Iterator[Span]:
        """Every span below this one, depth first."""
        for child in self.children:
            yield child
            yield from child.descendants()

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe form consumed by the verbose renderers.

        ``annotations`` and ``children`` are omitted when empty.
        """
        node: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            node["annotations"] = dict(self.annotations)
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open *name* beneath the active span.

    Yields None when telemetry is off or nothing is being traced in this
    context, which is the case inside thread pool workers.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name, parent=parent)
    parent.children.append(span)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Root a timing tree at a service method.

    A returned ServiceResult is copied with the tree under
    ``meta["telemetry"]``; other return values pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = result.ok if isinstance(result, ServiceResult) else True
        finally:
            root.end()
            _current_span.reset(token)
            log.debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.duration_ms, 2),
                ok=ok,
                rovers=sum(span.name.startswith("rover.") for span in root.descendants()),
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Switch tracing on for this context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off."""
    if not _verbose_enabled.get():
        return None
    return _current_span.get()
