from typing import List

import pytest

from replay_engine.history import (
    CallbackHost,
    HistoryConfig,
    HistoryConfigError,
    UndoRedoController,
)


class RecordingHost:
    """Host that re-records every applied snapshot, like a naive listener."""

    def __init__(self) -> None:
        self.state = 0
        self.applied: List[int] = []
        self.controller: UndoRedoController[int] | None = None

    def apply_historical_state(self, snapshot: int) -> None:
        self.state = snapshot
        self.applied.append(snapshot)
        assert self.controller is not None
        assert self.controller.is_applying_history
        self.controller.record(snapshot)
        self.controller.record_debounced(snapshot)


class FailingHost:
    def apply_historical_state(self, snapshot: int) -> None:
        raise RuntimeError(f"cannot apply {snapshot}")


def make_controller(
    *values: int, **config: object
) -> tuple[UndoRedoController[int], List[int]]:
    applied: List[int] = []
    controller: UndoRedoController[int] = UndoRedoController(
        CallbackHost(applied.append), 0, config=HistoryConfig(**config)  # type: ignore[arg-type]
    )
    for value in values:
        controller.record(value)
    return controller, applied


def test_initial_state() -> None:
    controller, _ = make_controller()

    assert controller.length == 1
    assert controller.current_index == 0
    assert controller.current == 0
    assert not controller.can_undo
    assert not controller.can_redo
    assert not controller.is_applying_history


def test_history_limit_scenario() -> None:
    controller, _ = make_controller(*range(1, 11), history_limit=5)

    assert controller.length == 5
    assert controller.current_index == 4
    assert controller.peek(0) == 6
    assert controller.current == 10


def test_branch_pruning_scenario() -> None:
    controller, applied = make_controller(1, 2, 3)

    controller.undo()
    controller.undo()
    controller.record(10)

    assert applied == [2, 1]
    assert controller.snapshots() == (0, 1, 10)
    assert not controller.can_redo
    assert controller.current == 10


def test_round_trip_returns_to_initial() -> None:
    controller, applied = make_controller(1, 2, 3, 4)

    for _ in range(4):
        controller.undo()

    assert controller.current_index == 0
    assert controller.current == 0
    assert applied == [3, 2, 1, 0]


def test_redo_moves_forward() -> None:
    controller, applied = make_controller(1, 2)
    controller.undo()

    controller.redo()

    assert controller.current == 2
    assert applied == [1, 2]
    assert controller.can_undo
    assert not controller.can_redo


def test_boundary_undo_and_redo_are_noops() -> None:
    controller, applied = make_controller()

    controller.undo()
    controller.redo()

    assert controller.current_index == 0
    assert controller.current == 0
    assert applied == []


def test_jump_to_out_of_range_is_noop() -> None:
    controller, applied = make_controller(1)

    controller.jump_to(-1)
    controller.jump_to(100)

    assert controller.current_index == 1
    assert controller.current == 1
    assert applied == []


def test_jump_to_current_index_is_noop() -> None:
    controller, applied = make_controller(1, 2)

    controller.jump_to(2)

    assert applied == []


def test_jump_to_applies_target() -> None:
    controller, applied = make_controller(1, 2, 3)

    controller.jump_to(1)

    assert applied == [1]
    assert controller.current_index == 1
    assert controller.can_undo
    assert controller.can_redo


def test_peek_does_not_move() -> None:
    controller, _ = make_controller(1, 2)

    assert controller.peek(0) == 0
    assert controller.peek(2) == 2
    assert controller.peek(100) is None
    assert controller.peek(-1) is None
    assert controller.current_index == 2
    assert controller.length == 3


def test_clear_scenario() -> None:
    controller, _ = make_controller(1, 2, 3)

    controller.clear()
    assert controller.length == 0

    controller.clear(99)
    assert controller.length == 1
    assert controller.current_index == 0
    assert controller.peek(0) == 99


def test_record_after_empty_clear_reseeds() -> None:
    controller, _ = make_controller(1)
    controller.clear()

    controller.record(5)

    assert controller.snapshots() == (5,)
    assert not controller.can_undo


def test_writes_during_apply_are_suppressed() -> None:
    host = RecordingHost()
    controller: UndoRedoController[int] = UndoRedoController(host, 0)
    host.controller = controller
    controller.record(1)
    controller.record(2)

    controller.undo()
    controller.jump_to(0)
    controller.redo()

    assert host.applied == [1, 0, 1]
    assert controller.snapshots() == (0, 1, 2)
    assert controller.current_index == 1
    assert not controller.is_applying_history


def test_apply_failure_clears_guard_and_keeps_index() -> None:
    undo_changes: List[bool] = []
    redo_changes: List[bool] = []
    controller: UndoRedoController[int] = UndoRedoController(
        FailingHost(),
        0,
        config=HistoryConfig(
            on_undo_availability_changed=undo_changes.append,
            on_redo_availability_changed=redo_changes.append,
        ),
    )
    controller.record(1)

    with pytest.raises(RuntimeError, match="cannot apply 0"):
        controller.undo()

    assert not controller.is_applying_history
    assert controller.current_index == 0
    assert undo_changes == [True, False]
    assert redo_changes == [True]

    controller.record(2)
    assert controller.snapshots() == (0, 2)


def test_undo_callback_fires_once_for_consecutive_records() -> None:
    undo_changes: List[bool] = []
    controller, _ = make_controller(on_undo_availability_changed=undo_changes.append)

    controller.record(1)
    controller.record(2)

    assert undo_changes == [True]


def test_availability_callbacks_track_transitions() -> None:
    undo_changes: List[bool] = []
    redo_changes: List[bool] = []
    controller, _ = make_controller(
        on_undo_availability_changed=undo_changes.append,
        on_redo_availability_changed=redo_changes.append,
    )

    controller.record(1)
    controller.undo()
    controller.undo()
    controller.redo()
    controller.clear(7)

    assert undo_changes == [True, False, True, False]
    assert redo_changes == [True, False]


def test_extra_subscribers_receive_transitions() -> None:
    seen: List[bool] = []
    controller, _ = make_controller()
    controller.notifier.subscribe("can_undo", seen.append)

    controller.record(1)
    controller.notifier.unsubscribe("can_undo", seen.append)
    controller.undo()

    assert seen == [True]


def test_dispose_enters_terminal_state() -> None:
    controller, applied = make_controller(1, 2)

    controller.dispose()
    controller.record(3)
    controller.record_debounced(4)
    controller.undo()
    controller.jump_to(0)
    controller.clear(5)
    controller.dispose()

    assert controller.is_disposed
    assert controller.length == 0
    assert controller.peek(0) is None
    assert applied == []
    assert controller.flush_pending() is False


@pytest.mark.parametrize(
    "changes",
    [
        {"history_limit": 0},
        {"history_limit": -3},
        {"history_limit": 1.5},
        {"debounce_ms": 0},
        {"debounce_ms": -10},
        {"debounce_ms": "x"},
        {"debounce_ms": True},
    ],
)
def test_invalid_config_fails_fast(changes: dict) -> None:
    with pytest.raises(HistoryConfigError) as info:
        HistoryConfig(**changes)

    assert info.value.field_name in changes


def test_config_with_changes_revalidates() -> None:
    config = HistoryConfig(history_limit=10)

    assert config.with_changes(debounce_ms=50).is_debounced
    with pytest.raises(HistoryConfigError):
        config.with_changes(history_limit=0)


def test_host_failure_survives_failing_observer() -> None:
    def broken_observer(_: bool) -> None:
        raise ValueError("observer")

    controller: UndoRedoController[int] = UndoRedoController(
        FailingHost(),
        0,
        config=HistoryConfig(on_redo_availability_changed=broken_observer),
    )
    controller.record(1)

    with pytest.raises(RuntimeError, match="cannot apply 0"):
        controller.undo()

    assert not controller.is_applying_history
    assert controller.current_index == 0
    assert controller.can_redo
