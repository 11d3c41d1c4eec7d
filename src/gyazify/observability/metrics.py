"""Metrics hook protocol and no-op default implementation.

gyazify emits a counter and a timing for every HTTP exchange, and a second
counter each time an exchange ends in a typed error.  By default a
:class:`NoopMetricsHook` is used so there is zero overhead.  Supply any
object satisfying :class:`MetricsHook` through ``GyazifyConfig.metrics`` to
route the data points to StatsD, Prometheus, Datadog, etc.

Emitted metric names:

* ``gyazify.requests_total``       -- counter, tags ``method``, ``endpoint``, ``status``
* ``gyazify.request_duration_ms``  -- timing, same tags
* ``gyazify.errors_total``         -- counter, tags ``endpoint``, ``code``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy."""

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds for *name*."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
