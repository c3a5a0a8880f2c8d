"""Tests for the synchronous EventBus and the OutcomeRecorder."""

import pytest

from outbreak_sim.core.events import EventBus, GlobalChanged, OutcomeReached, ProvinceChanged
from outbreak_sim.core.outcome import OutcomeRecorder
from outbreak_sim.schemas import OutcomeKind, OutcomeRecord


def test_subscribe_filters_by_event_type(province_snapshot_factory, global_snapshot_factory):
    bus = EventBus()
    provinces, everything = [], []
    bus.subscribe(provinces.append, ProvinceChanged)
    bus.subscribe(everything.append)

    bus.emit(ProvinceChanged(province_snapshot_factory("A")))
    bus.emit(GlobalChanged(global_snapshot_factory()))

    assert len(provinces) == 1
    assert len(everything) == 2
    assert bus.emitted_counts == {"ProvinceChanged": 1, "GlobalChanged": 1}


def test_unsubscribe_stops_delivery(global_snapshot_factory) -> None:
    bus = EventBus()
    received, kept = [], []
    bus.subscribe(received.append)
    bus.subscribe(kept.append)
    bus.unsubscribe(received.append)
    bus.emit(GlobalChanged(global_snapshot_factory()))
    assert received == []
    assert len(kept) == 1


def test_drain_returns_and_clears_history(global_snapshot_factory) -> None:
    bus = EventBus(keep_history=True)
    event = GlobalChanged(global_snapshot_factory())
    bus.emit(event)
    assert bus.drain() == [event]
    assert bus.drain() == []


def test_no_history_without_keep_history(global_snapshot_factory) -> None:
    bus = EventBus()
    bus.emit(GlobalChanged(global_snapshot_factory()))
    assert bus.drain() == []


def test_handler_errors_propagate(global_snapshot_factory) -> None:
    bus = EventBus()

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(broken)
    with pytest.raises(RuntimeError):
        bus.emit(GlobalChanged(global_snapshot_factory()))


def test_recorder_latches_once_per_run() -> None:
    recorder = OutcomeRecorder()
    assert recorder.has_outcome is False
    assert recorder.latest is None

    victory = OutcomeRecord(kind=OutcomeKind.VICTORY, day_index=5)
    defeat = OutcomeRecord(kind=OutcomeKind.DEFEAT, day_index=6)

    assert recorder.record(victory) is True
    assert recorder.record(defeat) is False
    assert recorder.latest == victory

    recorder.begin_run()
    assert recorder.latest == victory
    assert recorder.record(defeat) is True
    assert recorder.latest == defeat


def test_outcome_event_carries_record() -> None:
    record = OutcomeRecord(kind=OutcomeKind.DEFEAT)
    assert OutcomeReached(record).record.is_terminal is True
    assert OutcomeRecord().is_terminal is False
