from typing import List

import pytest

from replay_engine.history import Availability, AvailabilityNotifier, ManualScheduler


def test_notifier_fires_only_on_flip() -> None:
    undo_changes: List[bool] = []
    redo_changes: List[bool] = []
    notifier = AvailabilityNotifier(undo_changes.append, redo_changes.append)

    notifier.notify(Availability(False, False), Availability(False, False))
    notifier.notify(Availability(False, False), Availability(True, False))
    notifier.notify(Availability(True, False), Availability(True, True))

    assert undo_changes == [True]
    assert redo_changes == [True]


def test_notifier_rejects_unknown_kind() -> None:
    notifier = AvailabilityNotifier()

    with pytest.raises(ValueError):
        notifier.subscribe("can_jump", lambda _: None)  # type: ignore[arg-type]
    assert notifier.unsubscribe("can_undo", lambda _: None) is False


def test_manual_scheduler_fires_in_deadline_order() -> None:
    now = [0.0]
    scheduler = ManualScheduler(clock=lambda: now[0])
    fired: List[str] = []

    scheduler.call_later(0.2, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))
    cancelled = scheduler.call_later(0.05, lambda: fired.append("cancelled"))
    cancelled.cancel()

    now[0] = 0.15
    assert scheduler.process_due() == 1
    now[0] = 1.0
    assert scheduler.process_due() == 1

    assert fired == ["early", "late"]
    assert scheduler.pending_count == 0


def test_manual_scheduler_flush_ignores_deadlines() -> None:
    scheduler = ManualScheduler(clock=lambda: 0.0)
    fired: List[int] = []
    scheduler.call_later(10, lambda: fired.append(1))

    assert scheduler.flush() == 1
    assert fired == [1]
