"""Synchronous change notifications.

The engine emits an event for every observable change; presentation
collaborators subscribe with a callable::

    bus.subscribe(on_province, ProvinceChanged)
    bus.subscribe(on_anything)

Design rules:
  - Events are plain dataclasses with no behaviour.
  - ``emit()`` calls handlers immediately, in registration order.
  - Hosts without callbacks can poll instead: ``EventBus(keep_history=True)``
    also queues every event for ``drain()``.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable

from outbreak_sim.schemas import GlobalSnapshot, OutcomeRecord, ProvinceSnapshot


@dataclass(frozen=True)
class ProvinceChanged:
    """A province's infection, outpost count or disabled flag changed."""

    province: ProvinceSnapshot


@dataclass(frozen=True)
class GlobalChanged:
    """Cure progress, outpost aggregates or currency changed."""

    state: GlobalSnapshot


@dataclass(frozen=True)
class OutcomeReached:
    """The run latched a terminal outcome. Fires at most once per run."""

    record: OutcomeRecord


Handler = Callable[[Any], None]


class EventBus:
    """Registration-ordered, synchronous event dispatch."""

    def __init__(self, keep_history: bool = False) -> None:
        self.keep_history = keep_history
        self._subs: list[tuple[Handler, type | None]] = []
        self._pending: list[Any] = []
        self.emitted_counts: dict[str, int] = defaultdict(int)

    def subscribe(self, handler: Handler, event_type: type | None = None) -> None:
        """Register *handler* for *event_type* (all events when None)."""
        self._subs.append((handler, event_type))

    def unsubscribe(self, handler: Handler) -> None:
        self._subs = [(h, t) for h, t in self._subs if h != handler]

    def emit(self, event: Any) -> None:
        """Deliver *event* to every matching handler before returning."""
        self.emitted_counts[type(event).__name__] += 1
        if self.keep_history:
            self._pending.append(event)
        for handler, event_type in list(self._subs):
            if event_type is None or isinstance(event, event_type):
                handler(event)

    def drain(self) -> list[Any]:
        """Return and clear the queued events (polling mode)."""
        events, self._pending = self._pending, []
        return events
